"""Data models for subgraph responses and shared address types."""

from sampler.models.subgraph import SubgraphPool, SubgraphPoolsData, SubgraphToken
from sampler.models.types import (
    Address,
    checksum_address,
    is_valid_address,
    normalize_address,
)

__all__ = [
    "Address",
    "SubgraphPool",
    "SubgraphPoolsData",
    "SubgraphToken",
    "checksum_address",
    "is_valid_address",
    "normalize_address",
]
