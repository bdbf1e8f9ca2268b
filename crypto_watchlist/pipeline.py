"""
观察列表生成流程。

先并发拉取全部数据（Binance 交易对 + CMC 排名 + CMC 分类），任何请求失败都会
直接抛出异常，此时不会写入任何文件；数据齐全后再重建输出目录并写文件。
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import List, Optional, Sequence

import httpx

from crypto_watchlist.config import WatchlistConfig
from crypto_watchlist.fetchers import (
    fetch_binance_exchange_info_async,
    fetch_cmc_categories_async,
    fetch_cmc_category_async,
    fetch_cmc_listings_async,
)
from crypto_watchlist.models import (
    Category,
    CategorySummary,
    ExchangeSymbolInfo,
    MarketDataEntry,
)
from crypto_watchlist.rate_limiter import AsyncConcurrencyLimiter, build_cmc_limiter
from crypto_watchlist.reconciler import reconcile_pairs
from crypto_watchlist.storage import (
    build_category_path,
    build_watchlist_path,
    reset_output_dir,
)
from crypto_watchlist.watchlist import (
    build_category_tokens,
    build_ranked_tokens,
    strip_sections,
    write_watchlist,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarketSnapshot:
    exchange_symbols: List[ExchangeSymbolInfo]
    listings: List[MarketDataEntry]
    categories: List[Category] = field(default_factory=list)


@dataclass
class RunReport:
    tradable_pairs: int = 0
    watchlist_paths: List[Path] = field(default_factory=list)
    category_paths: List[Path] = field(default_factory=list)
    skipped_categories: List[str] = field(default_factory=list)


async def fetch_categories_async(
    client: httpx.AsyncClient,
    limiter: AsyncConcurrencyLimiter,
    config: WatchlistConfig,
    summaries: Sequence[CategorySummary],
) -> List[Category]:
    """每个分类一次请求，全部经过限流器，是整个流程中最耗时的部分。"""
    return list(
        await asyncio.gather(
            *(fetch_cmc_category_async(client, limiter, config, s.id) for s in summaries)
        )
    )


async def fetch_snapshot_async(
    client: httpx.AsyncClient,
    limiter: AsyncConcurrencyLimiter,
    config: WatchlistConfig,
) -> MarketSnapshot:
    if not config.include_categories:
        exchange_symbols, listings = await asyncio.gather(
            fetch_binance_exchange_info_async(client, config),
            fetch_cmc_listings_async(client, limiter, config),
        )
        return MarketSnapshot(exchange_symbols, listings)

    exchange_symbols, summaries, listings = await asyncio.gather(
        fetch_binance_exchange_info_async(client, config),
        fetch_cmc_categories_async(client, limiter, config),
        fetch_cmc_listings_async(client, limiter, config),
    )
    logger.info("共 %d 个分类，开始逐个拉取分类详情", len(summaries))
    categories = await fetch_categories_async(client, limiter, config, summaries)
    return MarketSnapshot(exchange_symbols, listings, categories)


def generate_ranked_watchlists(
    config: WatchlistConfig,
    snapshot: MarketSnapshot,
    day: date,
    report: RunReport,
) -> None:
    pairs = reconcile_pairs(snapshot.exchange_symbols, snapshot.listings, config.quote)
    report.tradable_pairs = len(pairs)
    logger.info("可现货交易的交易对共 %d 个", len(pairs))

    tokens = build_ranked_tokens(pairs, config.max_rank, config.exchange_prefix)
    exchange = config.exchange_prefix

    if config.with_sections:
        path = build_watchlist_path(config.output_dir, exchange, True, day)
        report.watchlist_paths.append(write_watchlist(tokens, path))

    path = build_watchlist_path(config.output_dir, exchange, False, day)
    report.watchlist_paths.append(write_watchlist(strip_sections(tokens), path))


def generate_category_watchlist(
    config: WatchlistConfig,
    exchange_symbols: Sequence[ExchangeSymbolInfo],
    category: Category,
    day: date,
) -> Optional[Path]:
    logger.info(
        "生成 %s 分类观察列表，描述：%s", category.name, category.description
    )
    pairs = reconcile_pairs(
        exchange_symbols, category.coins, config.quote, missing_level=logging.DEBUG
    )
    if not pairs:
        logger.warning("%s 分类中没有可在 Binance 现货交易的币", category.name)
        return None

    path = build_category_path(
        config.output_dir, config.exchange_prefix, category.name, day, category.id
    )
    return write_watchlist(build_category_tokens(pairs, config.exchange_prefix), path)


def write_watchlists(
    config: WatchlistConfig,
    snapshot: MarketSnapshot,
    day: date,
) -> RunReport:
    report = RunReport()
    reset_output_dir(config.output_dir)

    generate_ranked_watchlists(config, snapshot, day, report)

    for category in snapshot.categories:
        path = generate_category_watchlist(config, snapshot.exchange_symbols, category, day)
        if path is None:
            report.skipped_categories.append(category.name)
        else:
            report.category_paths.append(path)

    return report


async def generate_watchlists_async(
    config: WatchlistConfig,
    day: Optional[date] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> RunReport:
    """完整执行一次：拉取、对齐、写文件。"""
    day = day or date.today()
    limiter = build_cmc_limiter(config)

    if client is None:
        async with httpx.AsyncClient() as own_client:
            snapshot = await fetch_snapshot_async(own_client, limiter, config)
    else:
        snapshot = await fetch_snapshot_async(client, limiter, config)

    return write_watchlists(config, snapshot, day)
