"""Test helpers module for shared test utilities.

- constants: Token addresses and pool ids
- factories: Raw subgraph pool and BalancerPool factory functions
"""

from tests.helpers.constants import (
    BAL,
    DAI,
    DAI_CHECKSUM,
    POOL_1,
    POOL_2,
    POOL_3,
    POOL_4,
    TOKEN_DECIMALS,
    USDC,
    WETH,
    WETH_CHECKSUM,
)
from tests.helpers.factories import make_pool, make_raw_pool

__all__ = [
    # Constants
    "WETH",
    "DAI",
    "USDC",
    "BAL",
    "WETH_CHECKSUM",
    "DAI_CHECKSUM",
    "TOKEN_DECIMALS",
    "POOL_1",
    "POOL_2",
    "POOL_3",
    "POOL_4",
    # Factories
    "make_raw_pool",
    "make_pool",
]
