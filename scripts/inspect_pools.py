"""Script to inspect Balancer pools and quotes for a token pair.

Refreshes the pool cache for a pair through the subgraph, prints the
cached pools, the sampling decision, and sell/buy quotes for an amount.

Usage:
    python -m scripts.inspect_pools --taker 0x6b17...1d0f --maker 0xc02a...6cc2 --amount 1000000000000000000
"""

import argparse
import asyncio

import structlog

from sampler import (
    BalancerPoolsCache,
    SamplingPolicyDecider,
    SubgraphPoolFetcher,
    compute_buy_quote,
    compute_sell_quote,
)
from sampler.config import SamplerConfig

logger = structlog.get_logger()


async def inspect_pair(
    taker_token: str,
    maker_token: str,
    amount: int,
    config: SamplerConfig,
) -> None:
    """Refresh the cache for a pair and print pools and quotes."""
    cache = BalancerPoolsCache(SubgraphPoolFetcher(config), config)
    decider = SamplingPolicyDecider(cache)

    before = decider.how_to_sample(taker_token, maker_token, is_allowed_source=True)
    pools = await cache.refresh_pools_for_pair(taker_token, maker_token)
    after = decider.how_to_sample(taker_token, maker_token, is_allowed_source=True)

    logger.info(
        "pair_refreshed",
        taker_token=taker_token,
        maker_token=maker_token,
        pool_count=len(pools),
        on_chain_before=before.on_chain,
        off_chain_before=before.off_chain,
        on_chain_after=after.on_chain,
        off_chain_after=after.off_chain,
    )

    for pool in pools:
        print(
            f"{pool.id}  balance_in={pool.balance_in}  balance_out={pool.balance_out}  "
            f"sell({amount})={compute_sell_quote(pool, amount)}  "
            f"buy({amount})={compute_buy_quote(pool, amount)}"
        )


def main() -> None:
    """Entry point for the pool inspector script."""
    parser = argparse.ArgumentParser(description="Inspect Balancer pools for a token pair")
    parser.add_argument("--taker", required=True, help="Token being sold")
    parser.add_argument("--maker", required=True, help="Token being bought")
    parser.add_argument(
        "--amount",
        type=int,
        default=10**18,
        help="Amount in atomic units used for both quotes",
    )
    parser.add_argument(
        "--max-pools",
        type=int,
        default=SamplerConfig.max_pools_fetched,
        help="Pools kept per pair",
    )

    args = parser.parse_args()

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ]
    )

    config = SamplerConfig(max_pools_fetched=args.max_pools)
    asyncio.run(inspect_pair(args.taker, args.maker, args.amount, config))


if __name__ == "__main__":
    main()
