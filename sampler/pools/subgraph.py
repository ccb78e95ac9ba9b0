"""Balancer V1 subgraph client.

Fetches raw pool records containing a token (or a token pair) from the
GraphQL pool index. The index compares addresses case-sensitively, so
tokens are always sent in checksum form.
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx
import structlog
from pydantic import ValidationError

from sampler.config import DEFAULT_SAMPLER_CONFIG, SamplerConfig
from sampler.constants import SUBGRAPH_PAGE_SIZE
from sampler.errors import SubgraphError
from sampler.models.subgraph import SubgraphPool, SubgraphPoolsData
from sampler.models.types import checksum_address

logger = structlog.get_logger()

POOLS_QUERY = f"""
  query ($tokens: [Bytes!]) {{
      pools (first: {SUBGRAPH_PAGE_SIZE}, where: {{tokensList_contains: $tokens, publicSwap: true, liquidity_gt: 0}}, orderBy: swapsCount, orderDirection: desc) {{
        id
        publicSwap
        swapFee
        totalWeight
        tokensList
        tokens {{
          id
          address
          balance
          decimals
          symbol
          denormWeight
        }}
      }}
    }}
"""


class PoolFetcher(Protocol):
    """Protocol for raw pool sources.

    This allows swapping the HTTP subgraph client for an in-memory fake in tests.
    """

    async def fetch_pools_for_token(self, token: str) -> list[SubgraphPool]:
        """Return every public, liquid pool that holds `token`."""
        ...

    async def fetch_pools_for_pair(self, token_a: str, token_b: str) -> list[SubgraphPool]:
        """Return every public, liquid pool that holds both tokens."""
        ...


class SubgraphPoolFetcher:
    """PoolFetcher backed by the Balancer subgraph over HTTP.

    Args:
        config: Sampler configuration (subgraph URL, request timeout)
        client: Optional shared httpx.AsyncClient. When omitted, a client is
            created per request.
    """

    def __init__(
        self,
        config: SamplerConfig = DEFAULT_SAMPLER_CONFIG,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._client = client

    async def fetch_pools_for_token(self, token: str) -> list[SubgraphPool]:
        return await self._query_pools([checksum_address(token)])

    async def fetch_pools_for_pair(self, token_a: str, token_b: str) -> list[SubgraphPool]:
        return await self._query_pools([checksum_address(token_a), checksum_address(token_b)])

    async def _query_pools(self, tokens: list[str]) -> list[SubgraphPool]:
        """Run the pools query and validate the response.

        Raises:
            httpx.HTTPError: On transport failures and non-2xx responses
            SubgraphError: If the response carries GraphQL errors or cannot
                be parsed into pool records
        """
        payload = {"query": POOLS_QUERY, "variables": {"tokens": tokens}}
        body = await self._post(payload)

        if body.get("errors"):
            raise SubgraphError(f"Subgraph returned errors: {body['errors']}")
        data = body.get("data")
        if data is None:
            raise SubgraphError("Subgraph response has no data")

        try:
            pools = SubgraphPoolsData.model_validate(data).pools
        except ValidationError as err:
            raise SubgraphError(f"Malformed subgraph pools: {err}") from err

        logger.debug("subgraph_pools_fetched", tokens=tokens, pool_count=len(pools))
        return pools

    async def _post(self, payload: dict[str, Any]) -> dict[str, Any]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self._client is not None:
            response = await self._client.post(
                self.config.subgraph_url,
                json=payload,
                headers=headers,
                timeout=self.config.request_timeout_seconds,
            )
        else:
            async with httpx.AsyncClient(timeout=self.config.request_timeout_seconds) as client:
                response = await client.post(
                    self.config.subgraph_url, json=payload, headers=headers
                )
        response.raise_for_status()
        try:
            body = response.json()
        except ValueError as err:
            raise SubgraphError("Subgraph response is not JSON") from err
        if not isinstance(body, dict):
            raise SubgraphError("Subgraph response is not a JSON object")
        return body
