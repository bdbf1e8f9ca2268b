from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple


@dataclass(frozen=True)
class TradingPair:
    """交易所交易对及其对应的 CMC 排名。"""

    symbol: str
    rank: int


@dataclass(frozen=True)
class ExchangeSymbolInfo:
    base_asset: str
    quote_asset: str
    permissions: FrozenSet[str]
    status: str
    symbol: str

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "ExchangeSymbolInfo":
        # 新版 exchangeInfo 以 permissionSets 取代 permissions
        permissions = set(item.get("permissions") or [])
        for permission_set in item.get("permissionSets") or []:
            permissions.update(permission_set)
        return cls(
            base_asset=item["baseAsset"],
            quote_asset=item["quoteAsset"],
            permissions=frozenset(permissions),
            status=item["status"],
            symbol=item["symbol"],
        )


@dataclass(frozen=True)
class MarketDataEntry:
    symbol: str
    rank: int

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> Optional["MarketDataEntry"]:
        """解析 CMC 的 {symbol, cmc_rank}；未排名（cmc_rank 为空）的币返回 None。"""
        rank = item.get("cmc_rank")
        if rank is None:
            return None
        return cls(symbol=item["symbol"], rank=int(rank))


@dataclass(frozen=True)
class CategorySummary:
    id: str
    name: str

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "CategorySummary":
        return cls(id=str(item["id"]), name=item.get("name", ""))


@dataclass(frozen=True)
class Category:
    id: str
    name: str
    description: str
    coins: Tuple[MarketDataEntry, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "Category":
        return cls(
            id=str(item.get("id", "")),
            name=item["name"],
            description=item.get("description") or "",
            coins=tuple(parse_market_data(item.get("coins") or [])),
        )


def parse_market_data(items: List[Dict[str, Any]]) -> List[MarketDataEntry]:
    entries = (MarketDataEntry.from_api(item) for item in items)
    return [entry for entry in entries if entry is not None]
