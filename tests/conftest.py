"""Pytest configuration and fixtures."""

import pytest

from sampler.config import SamplerConfig
from sampler.models.subgraph import SubgraphPool
from sampler.pools import BalancerPoolsCache
from sampler.sampling import SamplingPolicyDecider
from tests.helpers import BAL, DAI, POOL_1, POOL_2, POOL_3, USDC, WETH, make_raw_pool
from tests.helpers.fakes import FakePoolFetcher, ManualClock

# =============================================================================
# Pytest fixtures
# =============================================================================


@pytest.fixture
def weth_dai_pool() -> SubgraphPool:
    """A 50/50 WETH/DAI pool: 100 WETH, 200k DAI."""
    return make_raw_pool(POOL_1, {WETH: ("100", "25"), DAI: ("200000", "25")})


@pytest.fixture
def weth_usdc_pool() -> SubgraphPool:
    """An 80/20 WETH/USDC pool: 50 WETH, 25k USDC."""
    return make_raw_pool(POOL_2, {WETH: ("50", "40"), USDC: ("25000", "10")}, swap_fee="0.01")


@pytest.fixture
def dai_bal_pool() -> SubgraphPool:
    """A 50/50 DAI/BAL pool that does not touch WETH."""
    return make_raw_pool(POOL_3, {DAI: ("30000", "25"), BAL: ("1500", "25")})


@pytest.fixture
def fetcher(
    weth_dai_pool: SubgraphPool,
    weth_usdc_pool: SubgraphPool,
    dai_bal_pool: SubgraphPool,
) -> FakePoolFetcher:
    return FakePoolFetcher([weth_dai_pool, weth_usdc_pool, dai_bal_pool])


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def config() -> SamplerConfig:
    return SamplerConfig(subgraph_url="https://subgraph.test/balancer")


@pytest.fixture
def cache(fetcher: FakePoolFetcher, config: SamplerConfig, clock: ManualClock) -> BalancerPoolsCache:
    """A pool cache over the fake fetcher with a manual clock."""
    return BalancerPoolsCache(fetcher, config, clock=clock)


@pytest.fixture
def decider(cache: BalancerPoolsCache) -> SamplingPolicyDecider:
    return SamplingPolicyDecider(cache)
