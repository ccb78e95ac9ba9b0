"""Pool and cache entry dataclasses."""

from __future__ import annotations

from dataclasses import dataclass

from sampler.models.types import normalize_address

# Ordered (token, other_token) pair; (A, B) and (B, A) are distinct keys
PairKey = tuple[str, str]


def pair_key(token_a: str, token_b: str) -> PairKey:
    """Build the direction-sensitive cache key for a token pair."""
    return (normalize_address(token_a), normalize_address(token_b))


@dataclass(frozen=True)
class BalancerPool:
    """Snapshot of one Balancer pool for a directional trade.

    The same on-chain pool yields two records for the two directions of a
    pair, with the in/out fields swapped.

    Attributes:
        id: Pool identifier (contract address)
        balance_in: Reserve of the input token, in atomic units
        balance_out: Reserve of the output token, in atomic units
        weight_in: Normalized weight of the input token (fixed-point, BONE = 1.0)
        weight_out: Normalized weight of the output token (fixed-point)
        swap_fee: Swap fee as a fixed-point fraction (3 * 10**15 for 0.3%)
        spot_price: Filled in by downstream consumers, never by this package
        slippage: Filled in by downstream consumers, never by this package
        limit_amount: Filled in by downstream consumers, never by this package
    """

    id: str
    balance_in: int
    balance_out: int
    weight_in: int
    weight_out: int
    swap_fee: int
    spot_price: int | None = None
    slippage: int | None = None
    limit_amount: int | None = None


@dataclass(frozen=True)
class CacheEntry:
    """A timestamped pool list for one cache key.

    Attributes:
        timestamp: Clock reading when the snapshot was created
        pools: Pools sorted by balance_out (descending), already truncated
    """

    timestamp: float
    pools: tuple[BalancerPool, ...] = ()

    @property
    def pool_ids(self) -> list[str]:
        return [pool.id for pool in self.pools]

    def is_stale(self, now: float, expiry_seconds: float) -> bool:
        """True if the entry is strictly older than expiry_seconds."""
        return self.timestamp < now - expiry_seconds
