"""Off-chain Balancer quotes from a single weighted pool.

Both functions evaluate the weighted constant-product invariant with a
floating-point power and return 0 when the trade exceeds the pool's
ratio limit. Only the buy side has an arbitrary-precision fallback for
a non-finite power; the sell side returns whatever the float power gives.
"""

from __future__ import annotations

import math
from decimal import ROUND_DOWN, Context, Decimal, Overflow, localcontext

from sampler.math.fixed_point import BONE, MAX_IN_RATIO, MAX_OUT_RATIO, UINT256_DIGITS, bmul
from sampler.pools.types import BalancerPool

# Precision of the fallback power in compute_buy_quote
FALLBACK_PRECISION = 20

_WIDE = Context(prec=UINT256_DIGITS)
_FALLBACK = Context(prec=FALLBACK_PRECISION)


def _float_pow(base: Decimal, exponent: Decimal) -> float:
    """base ** exponent in double precision; inf when the result overflows."""
    try:
        return math.pow(float(base), float(exponent))
    except OverflowError:
        return math.inf


def _truncate(amount: Decimal) -> int:
    return int(amount.to_integral_value(rounding=ROUND_DOWN))


def compute_sell_quote(pool: BalancerPool, taker_fill_amount: int) -> int:
    """Output amount for selling `taker_fill_amount` of the input token.

    Formula:
        adjusted_in = amount_in * (1 - fee)
        amount_out = balance_out * (1 - (balance_in / (balance_in + adjusted_in))^(weight_in / weight_out))

    Returns:
        Output amount truncated to an integer, or 0 if amount_in exceeds
        balance_in * MAX_IN_RATIO or the pool has an empty reserve or weight
    """
    if taker_fill_amount > bmul(pool.balance_in, MAX_IN_RATIO):
        return 0
    if pool.balance_in <= 0 or pool.weight_out <= 0:
        return 0

    with localcontext(_WIDE):
        weight_ratio = Decimal(pool.weight_in) / Decimal(pool.weight_out)
        adjusted_in = Decimal(BONE - pool.swap_fee) / BONE * taker_fill_amount
        y = Decimal(pool.balance_in) / (pool.balance_in + adjusted_in)
        power = Decimal(_float_pow(y, weight_ratio))
        amount_out = pool.balance_out * (1 - power)
        return _truncate(amount_out)


def compute_buy_quote(pool: BalancerPool, maker_fill_amount: int) -> int:
    """Input amount needed to buy `maker_fill_amount` of the output token.

    Formula:
        amount_in = balance_in * ((balance_out / (balance_out - amount_out))^(weight_out / weight_in) - 1) / (1 - fee)

    The power is evaluated in double precision first and recomputed with
    20-digit Decimal arithmetic if the float result is not finite.

    Returns:
        Input amount truncated to an integer, or 0 if amount_out exceeds
        balance_out * MAX_OUT_RATIO, the pool has an empty reserve or
        weight, the fee takes the whole input, or the power exceeds even
        the Decimal range
    """
    if maker_fill_amount > bmul(pool.balance_out, MAX_OUT_RATIO):
        return 0
    if pool.balance_out <= 0 or pool.weight_in <= 0 or pool.swap_fee >= BONE:
        return 0

    with localcontext(_WIDE):
        weight_ratio = Decimal(pool.weight_out) / Decimal(pool.weight_in)
        y = Decimal(pool.balance_out) / (pool.balance_out - maker_fill_amount)

        try:
            foo = _float_pow(y, weight_ratio) - 1
            if math.isfinite(foo):
                ratio = Decimal(foo)
            else:
                with localcontext(_FALLBACK):
                    ratio = y**weight_ratio - 1

            fee_complement = Decimal(BONE - pool.swap_fee) / BONE
            amount_in = pool.balance_in * ratio / fee_complement
        except Overflow:
            # Beyond Decimal's exponent range: no finite input buys this amount
            return 0
        return _truncate(amount_in)
