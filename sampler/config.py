"""Configuration for the pool cache and the subgraph client."""

import os
from dataclasses import dataclass, field

from sampler.constants import (
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_SUBGRAPH_URL,
    DEFAULT_TIMEOUT_SECONDS,
    MAX_POOLS_FETCHED,
    ONE_DAY_SECONDS,
    REFRESH_EXPIRY_SECONDS,
)

# Subgraph endpoint, overridable from the environment
SUBGRAPH_URL = os.environ.get("BALANCER_SUBGRAPH_URL", DEFAULT_SUBGRAPH_URL)


@dataclass(frozen=True)
class SamplerConfig:
    """Centralized configuration for pool caching and sampling.

    Attributes:
        subgraph_url: GraphQL endpoint of the Balancer pool index
        max_pools_fetched: Pools kept per cache key (largest balance_out first)
        refresh_expiry_seconds: Age after which a cached pair is refreshed
        default_timeout_seconds: Default bound for get_pools_for_pair
        sampling_expiry_seconds: Age after which the sampling policy treats
            a cached pair as unknown and asks for off-chain sampling
        request_timeout_seconds: HTTP timeout for subgraph requests
    """

    subgraph_url: str = field(default_factory=lambda: SUBGRAPH_URL)
    max_pools_fetched: int = MAX_POOLS_FETCHED
    refresh_expiry_seconds: float = REFRESH_EXPIRY_SECONDS
    default_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    sampling_expiry_seconds: float = ONE_DAY_SECONDS
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS


# Default configuration instance
DEFAULT_SAMPLER_CONFIG = SamplerConfig()
