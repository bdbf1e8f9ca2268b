from typing import List

import httpx

from crypto_watchlist.config import WatchlistConfig
from crypto_watchlist.fetchers.common import read_json
from crypto_watchlist.models import ExchangeSymbolInfo


async def fetch_binance_exchange_info_async(
    client: httpx.AsyncClient,
    config: WatchlistConfig,
) -> List[ExchangeSymbolInfo]:
    """获取 Binance 现货交易对元数据（公共接口，不经过限流器）。"""
    response = await client.get(
        f"{config.binance_base_url}/api/v3/exchangeInfo",
        timeout=config.request_timeout,
    )
    data = read_json(response, "Binance exchangeInfo")

    if not isinstance(data, dict) or not isinstance(data.get("symbols"), list):
        raise ValueError(f"API 返回格式错误：期望包含 symbols 列表的字典，得到 {type(data)}")

    return [ExchangeSymbolInfo.from_api(item) for item in data["symbols"]]
