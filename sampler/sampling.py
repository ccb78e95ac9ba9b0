"""Sampling policy: on-chain vs off-chain price discovery for Balancer.

Decides, from cache freshness alone, whether a pair should be sampled
on-chain (through the sampler contract) or off-chain (subgraph query plus
compute_sell_quote / compute_buy_quote). Never refreshes or mutates the
cache.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from sampler.pools.cache import BalancerPoolsCache

logger = structlog.get_logger()


@dataclass(frozen=True)
class SamplingDecision:
    """How a pair should be sampled.

    At most one of the two flags is set. Both are False when the source is
    excluded or when the cache is fresh but knows no pool for the pair.
    """

    on_chain: bool
    off_chain: bool

    @classmethod
    def skip(cls) -> SamplingDecision:
        return cls(on_chain=False, off_chain=False)


class SamplingPolicyDecider:
    """Reads cache freshness to choose a sampling mode.

    Args:
        cache: The pool cache to consult (read-only)
        cache_expiry_seconds: Age after which cached pools are treated as
            unknown. Defaults to the cache's configured sampling expiry (1 day).
    """

    def __init__(
        self,
        cache: BalancerPoolsCache,
        cache_expiry_seconds: float | None = None,
    ) -> None:
        self.cache = cache
        if cache_expiry_seconds is None:
            cache_expiry_seconds = cache.config.sampling_expiry_seconds
        self.cache_expiry_seconds = cache_expiry_seconds

    def how_to_sample(
        self,
        taker_token: str,
        maker_token: str,
        is_allowed_source: bool,
    ) -> SamplingDecision:
        """Decide how to sample Balancer for a pair.

        - Excluded source: do not sample at all.
        - Fresh cache with at least one pool: sample on-chain.
        - Missing or stale cache: sample off-chain.
        - Fresh cache with no pools: do not sample.
        """
        if not is_allowed_source:
            return SamplingDecision.skip()

        cached_pools = self.cache.get_cached_pool_addresses_for_pair(
            taker_token, maker_token, self.cache_expiry_seconds
        )
        decision = SamplingDecision(
            on_chain=cached_pools is not None and len(cached_pools) > 0,
            off_chain=cached_pools is None,
        )
        logger.debug(
            "balancer_sampling_decision",
            taker_token=taker_token,
            maker_token=maker_token,
            on_chain=decision.on_chain,
            off_chain=decision.off_chain,
        )
        return decision
