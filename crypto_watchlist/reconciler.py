"""
交易所交易对与 CMC 排名的对齐。

Binance 与 CoinMarketCap 对少数币的命名不一致，统一登记在 SYMBOL_ALIASES 中：
键为交易所侧名称，值为 CMC 侧名称。
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional

from crypto_watchlist.models import ExchangeSymbolInfo, MarketDataEntry, TradingPair

logger = logging.getLogger(__name__)

SPOT_PERMISSION = "SPOT"
TRADING_STATUS = "TRADING"

# 交易所名称 -> CMC 名称
SYMBOL_ALIASES: Mapping[str, str] = {
    "IOTA": "MIOTA",
    "GXS": "GXC",
}
# CMC 名称 -> 交易所名称
PROVIDER_ALIASES: Mapping[str, str] = {v: k for k, v in SYMBOL_ALIASES.items()}


def to_provider_symbol(exchange_symbol: str) -> str:
    return SYMBOL_ALIASES.get(exchange_symbol, exchange_symbol)


def to_exchange_symbol(provider_symbol: str) -> str:
    return PROVIDER_ALIASES.get(provider_symbol, provider_symbol)


def is_spot_tradable(info: ExchangeSymbolInfo, quote: str) -> bool:
    """计价资产包含 quote、允许现货交易且处于交易状态。"""
    return (
        quote in info.quote_asset
        and SPOT_PERMISSION in info.permissions
        and info.status == TRADING_STATUS
    )


def build_rank_index(entries: Iterable[MarketDataEntry]) -> Dict[str, int]:
    """symbol -> rank；同一 symbol 出现多次时保留第一条。"""
    index: Dict[str, int] = {}
    for entry in entries:
        index.setdefault(entry.symbol, entry.rank)
    return index


def reconcile_symbol(
    info: ExchangeSymbolInfo,
    rank_index: Mapping[str, int],
) -> Optional[TradingPair]:
    rank = rank_index.get(to_provider_symbol(info.base_asset))
    if rank is None:
        return None
    return TradingPair(symbol=info.symbol, rank=rank)


def reconcile_pairs(
    exchange_symbols: Iterable[ExchangeSymbolInfo],
    entries: Iterable[MarketDataEntry],
    quote: str,
    missing_level: int = logging.WARNING,
) -> List[TradingPair]:
    """
    返回可现货交易且能在行情数据中找到排名的交易对。

    找不到排名的交易对只记录日志并丢弃，不中断流程。分类模式下大多数交易对
    本来就不属于该分类，调用方可以用 missing_level 降低日志级别。
    """
    rank_index = build_rank_index(entries)
    pairs: List[TradingPair] = []
    for info in exchange_symbols:
        if not is_spot_tradable(info, quote):
            continue
        pair = reconcile_symbol(info, rank_index)
        if pair is None:
            logger.log(missing_level, "%s 不在 CoinMarketCap 返回的数据中", info.base_asset)
            continue
        pairs.append(pair)
    return pairs
