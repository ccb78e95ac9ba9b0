"""Balancer pool sampler - cached pool discovery and off-chain quotes."""

from sampler.pools import BalancerPool, BalancerPoolsCache, SubgraphPoolFetcher
from sampler.pricing import compute_buy_quote, compute_sell_quote
from sampler.sampling import SamplingDecision, SamplingPolicyDecider

__version__ = "0.1.0"
__all__ = [
    "BalancerPool",
    "BalancerPoolsCache",
    "SubgraphPoolFetcher",
    "SamplingDecision",
    "SamplingPolicyDecider",
    "compute_buy_quote",
    "compute_sell_quote",
    "__version__",
]
