"""Protocol constants for the Balancer pool sampler.

Centralizes timing parameters and the default subgraph endpoint.
"""

# Staleness threshold for serving a pair straight from the cache
REFRESH_EXPIRY_SECONDS = 5.0

# Staleness threshold used by the sampling policy
ONE_DAY_SECONDS = 24 * 60 * 60.0

# Default bound for get_pools_for_pair before returning an empty list
DEFAULT_TIMEOUT_SECONDS = 1.0

# Pools kept per (token, other_token) key, largest balance_out first
MAX_POOLS_FETCHED = 3

# Balancer V1 subgraph (overridable via BALANCER_SUBGRAPH_URL)
DEFAULT_SUBGRAPH_URL = "https://api.thegraph.com/subgraphs/name/balancer-labs/balancer"

# Subgraph page size for pool queries
SUBGRAPH_PAGE_SIZE = 1000

# HTTP timeout for subgraph requests
DEFAULT_REQUEST_TIMEOUT_SECONDS = 30.0
