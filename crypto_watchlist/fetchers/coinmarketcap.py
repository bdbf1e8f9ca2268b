from typing import Any, Dict, List

import httpx

from crypto_watchlist.config import WatchlistConfig
from crypto_watchlist.fetchers.common import UnexpectedResponseError, read_json
from crypto_watchlist.models import (
    Category,
    CategorySummary,
    MarketDataEntry,
    parse_market_data,
)
from crypto_watchlist.rate_limiter import AsyncConcurrencyLimiter


async def _cmc_get(
    client: httpx.AsyncClient,
    limiter: AsyncConcurrencyLimiter,
    config: WatchlistConfig,
    path: str,
    params: Dict[str, Any],
) -> Any:
    async with limiter:
        response = await client.get(
            f"{config.cmc_base_url}{path}",
            params=params,
            headers=config.cmc_headers,
            timeout=config.request_timeout,
        )
    payload = read_json(response, f"CoinMarketCap {path}")

    if not isinstance(payload, dict):
        raise ValueError(f"API 返回格式错误：期望字典，得到 {type(payload)}")

    status = payload.get("status") or {}
    if status.get("error_code"):
        raise UnexpectedResponseError(
            f"CoinMarketCap {path} 错误 {status.get('error_code')}：{status.get('error_message')}"
        )
    return payload.get("data")


async def fetch_cmc_listings_async(
    client: httpx.AsyncClient,
    limiter: AsyncConcurrencyLimiter,
    config: WatchlistConfig,
) -> List[MarketDataEntry]:
    """按市值降序拉取前 max_rank 个币的排名。"""
    data = await _cmc_get(
        client,
        limiter,
        config,
        "/v1/cryptocurrency/listings/latest",
        {
            "start": 1,
            "limit": config.max_rank,
            "sort": "market_cap",
            "sort_dir": "desc",
        },
    )
    if not isinstance(data, list):
        raise ValueError(f"listings 返回格式错误：期望列表，得到 {type(data)}")
    return parse_market_data(data)


async def fetch_cmc_categories_async(
    client: httpx.AsyncClient,
    limiter: AsyncConcurrencyLimiter,
    config: WatchlistConfig,
) -> List[CategorySummary]:
    data = await _cmc_get(client, limiter, config, "/v1/cryptocurrency/categories", {})
    if not isinstance(data, list):
        raise ValueError(f"categories 返回格式错误：期望列表，得到 {type(data)}")
    return [CategorySummary.from_api(item) for item in data]


async def fetch_cmc_category_async(
    client: httpx.AsyncClient,
    limiter: AsyncConcurrencyLimiter,
    config: WatchlistConfig,
    category_id: str,
) -> Category:
    data = await _cmc_get(
        client,
        limiter,
        config,
        "/v1/cryptocurrency/category",
        {"id": category_id},
    )
    if not isinstance(data, dict):
        raise ValueError(f"category 返回格式错误：期望字典，得到 {type(data)}")
    return Category.from_api(data)
