"""Balancer pool parsing.

Turns raw subgraph pool records into directional BalancerPool entities.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import Decimal, InvalidOperation

import structlog

from sampler.math.fixed_point import scale
from sampler.models.subgraph import SubgraphPool, SubgraphToken
from sampler.models.types import normalize_address

from .types import BalancerPool

logger = structlog.get_logger()

# Weights and fees are scaled to 18 decimals regardless of the token
WEIGHT_DECIMALS = 18


def _find_token(pool: SubgraphPool, token: str) -> SubgraphToken | None:
    """Case-insensitive lookup of a token inside a pool record."""
    token_norm = normalize_address(token)
    for candidate in pool.tokens:
        if normalize_address(candidate.address) == token_norm:
            return candidate
    return None


def _parse_decimal(raw: str) -> Decimal:
    """Parse a subgraph decimal string.

    Raises:
        ValueError: If the string is not a finite number
    """
    try:
        value = Decimal(raw)
    except InvalidOperation as err:
        raise ValueError(f"Not a decimal number: {raw!r}") from err
    if not value.is_finite():
        raise ValueError(f"Not a finite number: {raw!r}")
    return value


def parse_pool(pool: SubgraphPool, token_in: str, token_out: str) -> BalancerPool | None:
    """Parse one raw pool record for the direction token_in -> token_out.

    Returns:
        BalancerPool, or None if the pool does not hold both tokens or any
        balance, weight or fee is missing, malformed or non-positive
    """
    t_in = _find_token(pool, token_in)
    t_out = _find_token(pool, token_out)
    if t_in is None or t_out is None:
        return None

    try:
        balance_in = _parse_decimal(t_in.balance)
        balance_out = _parse_decimal(t_out.balance)
        denorm_in = _parse_decimal(t_in.denorm_weight)
        denorm_out = _parse_decimal(t_out.denorm_weight)
        total_weight = _parse_decimal(pool.total_weight)
        swap_fee = _parse_decimal(pool.swap_fee)
    except ValueError as err:
        logger.debug("balancer_pool_invalid_number", pool_id=pool.id, error=str(err))
        return None

    if total_weight <= 0:
        logger.debug("balancer_pool_zero_total_weight", pool_id=pool.id)
        return None

    parsed = BalancerPool(
        id=pool.id,
        balance_in=scale(balance_in, t_in.decimals),
        balance_out=scale(balance_out, t_out.decimals),
        weight_in=scale(denorm_in / total_weight, WEIGHT_DECIMALS),
        weight_out=scale(denorm_out / total_weight, WEIGHT_DECIMALS),
        swap_fee=scale(swap_fee, WEIGHT_DECIMALS),
    )

    if min(parsed.balance_in, parsed.balance_out, parsed.weight_in, parsed.weight_out) <= 0:
        logger.debug(
            "balancer_pool_non_positive",
            pool_id=pool.id,
            balance_in=parsed.balance_in,
            balance_out=parsed.balance_out,
        )
        return None
    if parsed.swap_fee < 0:
        logger.debug("balancer_pool_negative_fee", pool_id=pool.id, swap_fee=parsed.swap_fee)
        return None

    return parsed


def parse_pool_data(
    pools: Iterable[SubgraphPool],
    token_in: str,
    token_out: str,
) -> list[BalancerPool]:
    """Parse raw pool records for one trade direction.

    Each record yields zero or one BalancerPool; records that cannot be
    used for the direction are skipped.
    """
    parsed: list[BalancerPool] = []
    for pool in pools:
        result = parse_pool(pool, token_in, token_out)
        if result is not None:
            parsed.append(result)
    return parsed


def sort_by_balance_out(pools: Iterable[BalancerPool], limit: int) -> tuple[BalancerPool, ...]:
    """Sort pools by balance_out (descending) and keep the first `limit`."""
    ordered = sorted(pools, key=lambda p: p.balance_out, reverse=True)
    return tuple(ordered[:limit])
