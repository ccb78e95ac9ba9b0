"""Balancer pool caching package.

Provides BalancerPoolsCache plus the subgraph client and parsing helpers
it is built on.
"""

from .cache import BalancerPoolsCache
from .parsing import parse_pool, parse_pool_data, sort_by_balance_out
from .subgraph import PoolFetcher, SubgraphPoolFetcher
from .types import BalancerPool, CacheEntry, PairKey, pair_key

__all__ = [
    "BalancerPoolsCache",
    "BalancerPool",
    "CacheEntry",
    "PairKey",
    "pair_key",
    "PoolFetcher",
    "SubgraphPoolFetcher",
    "parse_pool",
    "parse_pool_data",
    "sort_by_balance_out",
]
