"""Freshness-bounded cache of Balancer pools per ordered token pair.

Entries are keyed by (token, other_token) and replaced as whole objects;
a refresh never merges into an existing entry. A refresh for one pair
fetches every pool of both tokens and side-loads entries for all the
other pairs those pools connect.

The cache is built for a single event loop. Concurrent refreshes for the
same key share one in-flight task; a caller that stops waiting (timeout or
cancellation) never cancels that task, so its result still lands in the
cache for the next caller.
"""

from __future__ import annotations

import asyncio
import time
from collections import defaultdict
from collections.abc import Callable
from typing import Any

import structlog

from sampler.config import DEFAULT_SAMPLER_CONFIG, SamplerConfig
from sampler.models.types import normalize_address

from .parsing import parse_pool_data, sort_by_balance_out
from .subgraph import PoolFetcher
from .types import BalancerPool, CacheEntry, PairKey, pair_key

logger = structlog.get_logger()


def _log_refresh_failure(task: asyncio.Task[Any]) -> None:
    """Retrieve and log the error of a refresh nobody may be awaiting anymore."""
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.warning(
            "balancer_pools_refresh_failed",
            error=str(exc),
            error_type=type(exc).__name__,
            exc_info=exc,
        )


class BalancerPoolsCache:
    """Cache of Balancer pool snapshots keyed by ordered token pair.

    Args:
        fetcher: Source of raw pool records (the subgraph client in production)
        config: Sampler configuration (pool count bound, expiry, timeout)
        clock: Monotonic clock in seconds. Injectable for tests.
    """

    def __init__(
        self,
        fetcher: PoolFetcher,
        config: SamplerConfig = DEFAULT_SAMPLER_CONFIG,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.fetcher = fetcher
        self.config = config
        self._clock = clock
        self._entries: dict[PairKey, CacheEntry] = {}
        # Single-flight table: one shared refresh task per key
        self._in_flight: dict[PairKey, asyncio.Task[tuple[BalancerPool, ...]]] = {}
        # Strong references to refresh tasks that outlived their caller's timeout
        self._background: set[asyncio.Task[Any]] = set()

    @property
    def max_pools_fetched(self) -> int:
        return self.config.max_pools_fetched

    def get_entry(self, taker_token: str, maker_token: str) -> CacheEntry | None:
        """Return the raw cache entry for a pair, if any."""
        return self._entries.get(pair_key(taker_token, maker_token))

    async def get_pools_for_pair(
        self,
        taker_token: str,
        maker_token: str,
        timeout_seconds: float | None = None,
    ) -> list[BalancerPool]:
        """Return the best known pools for a pair within `timeout_seconds`.

        Serves from the cache when fresh, otherwise races a refresh against
        the timeout. If the timeout wins, an empty list is returned and the
        refresh keeps running in the background.

        Never raises: a refresh that fails before the timeout is logged and
        reported as an empty list.
        """
        if timeout_seconds is None:
            timeout_seconds = self.config.default_timeout_seconds

        refresh = asyncio.ensure_future(self.refresh_pools_for_pair(taker_token, maker_token))
        self._background.add(refresh)
        refresh.add_done_callback(self._background.discard)
        refresh.add_done_callback(_log_refresh_failure)

        done, _ = await asyncio.wait({refresh}, timeout=max(timeout_seconds, 0.0))
        if refresh not in done:
            logger.debug(
                "balancer_pools_timeout",
                taker_token=taker_token,
                maker_token=maker_token,
                timeout_seconds=timeout_seconds,
            )
            return []
        if refresh.cancelled() or refresh.exception() is not None:
            return []
        return refresh.result()

    def get_cached_pool_addresses_for_pair(
        self,
        taker_token: str,
        maker_token: str,
        cache_expiry_seconds: float | None = None,
    ) -> list[str] | None:
        """Read cached pool ids for a pair without triggering a refresh.

        Args:
            taker_token: Input token address
            maker_token: Output token address
            cache_expiry_seconds: Maximum entry age. If omitted, age is ignored.

        Returns:
            Without expiry: [] if the pair was never cached, else its pool ids.
            With expiry: None if the pair is missing or strictly older than
            the expiry, else its pool ids (possibly empty).
        """
        entry = self.get_entry(taker_token, maker_token)
        if cache_expiry_seconds is None:
            return [] if entry is None else entry.pool_ids
        if entry is None or entry.is_stale(self._clock(), cache_expiry_seconds):
            return None
        return entry.pool_ids

    async def refresh_pools_for_pair(
        self,
        taker_token: str,
        maker_token: str,
        cache_expiry_seconds: float | None = None,
    ) -> list[BalancerPool]:
        """Return pools for a pair, refreshing the cache if the entry is stale.

        A missing or stale entry is replaced by an empty placeholder right
        away, then both tokens are fetched and every (token, other_token)
        key they produce is written.

        Raises:
            Whatever the fetcher raises (httpx.HTTPError, SubgraphError)
        """
        if cache_expiry_seconds is None:
            cache_expiry_seconds = self.config.refresh_expiry_seconds

        key = pair_key(taker_token, maker_token)
        task = self._in_flight.get(key)
        if task is None:
            now = self._clock()
            entry = self._entries.get(key)
            if entry is not None and not entry.is_stale(now, cache_expiry_seconds):
                return list(entry.pools)

            self._entries[key] = CacheEntry(timestamp=now)
            task = asyncio.ensure_future(self._refresh(key, now))
            self._in_flight[key] = task
            task.add_done_callback(lambda done: self._release(key, done))

        pools = await asyncio.shield(task)
        return list(pools)

    def _release(self, key: PairKey, task: asyncio.Task[Any]) -> None:
        if self._in_flight.get(key) is task:
            del self._in_flight[key]

    async def _refresh(self, key: PairKey, timestamp: float) -> tuple[BalancerPool, ...]:
        tokens = list(dict.fromkeys(key))
        await asyncio.gather(*(self._side_load(token, timestamp) for token in tokens))
        pools = self._entries[key].pools
        logger.debug(
            "balancer_pools_refreshed",
            taker_token=key[0],
            maker_token=key[1],
            pool_count=len(pools),
        )
        return pools

    async def _side_load(self, token: str, timestamp: float) -> None:
        """Fetch every pool holding `token` and write all its (token, other) keys."""
        pools_by_other_token = await self._fetch_pools_by_other_token(token)
        for other_token, pools in pools_by_other_token.items():
            self._entries[(token, other_token)] = CacheEntry(timestamp=timestamp, pools=pools)
        logger.debug(
            "balancer_pools_side_loaded",
            token=token,
            pair_count=len(pools_by_other_token),
        )

    async def _fetch_pools_by_other_token(
        self, token: str
    ) -> dict[str, tuple[BalancerPool, ...]]:
        """Group the pools of `token` by the other token each one connects to."""
        raw_pools = await self.fetcher.fetch_pools_for_token(token)

        grouped: defaultdict[str, list[BalancerPool]] = defaultdict(list)
        for raw_pool in raw_pools:
            for other_token in map(normalize_address, raw_pool.token_addresses()):
                if other_token == token:
                    continue
                grouped[other_token].extend(parse_pool_data([raw_pool], token, other_token))

        return {
            other_token: sort_by_balance_out(pools, self.max_pools_fetched)
            for other_token, pools in grouped.items()
        }

    async def fetch_pools_for_pair(self, taker_token: str, maker_token: str) -> list[BalancerPool]:
        """Fetch pools holding both tokens directly, bypassing the cache.

        Any fetch or parse error is logged and reported as no liquidity.
        """
        try:
            raw_pools = await self.fetcher.fetch_pools_for_pair(taker_token, maker_token)
            pools = parse_pool_data(raw_pools, taker_token, maker_token)
        except Exception:
            logger.warning(
                "balancer_pair_fetch_failed",
                taker_token=taker_token,
                maker_token=maker_token,
                exc_info=True,
            )
            return []
        return list(sort_by_balance_out(pools, self.max_pools_fetched))
