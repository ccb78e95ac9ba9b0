"""Balancer V1 fixed-point helpers.

Values are integers scaled by 10^18 (BONE). Rounding matches the SOR
bmath module: bmul rounds half up.
"""

from __future__ import annotations

from decimal import ROUND_DOWN, Decimal, localcontext

__all__ = [
    "BONE",
    "MAX_IN_RATIO",
    "MAX_OUT_RATIO",
    "UINT256_DIGITS",
    "bmul",
    "scale",
]

BONE = 10**18

# Slightly below the on-chain 1/2 and 1/3 limits to leave room for rounding
MAX_IN_RATIO = 499_999_999_999_999_000  # ~0.5
MAX_OUT_RATIO = 333_333_333_333_333_000  # ~0.333

# Significant digits needed to hold any uint256 exactly
UINT256_DIGITS = 78


def bmul(a: int, b: int) -> int:
    """Multiply two fixed-point values, rounding half up: (a * b + BONE/2) // BONE"""
    return (a * b + BONE // 2) // BONE


def scale(value: Decimal, decimals: int) -> int:
    """Scale a human-readable amount to atomic units, truncating the remainder.

    Examples:
        scale(Decimal("1.5"), 18) == 1_500_000_000_000_000_000
        scale(Decimal("0.0000001"), 6) == 0
    """
    with localcontext() as ctx:
        ctx.prec = UINT256_DIGITS
        scaled = value.scaleb(decimals).quantize(Decimal("1"), rounding=ROUND_DOWN)
    return int(scaled)
