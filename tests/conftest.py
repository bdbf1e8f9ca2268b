from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from crypto_watchlist.config import WatchlistConfig


def exchange_symbol(
    base: str,
    quote: str = "USDT",
    permissions: Optional[List[str]] = None,
    status: str = "TRADING",
) -> Dict[str, Any]:
    return {
        "symbol": f"{base}{quote}",
        "baseAsset": base,
        "quoteAsset": quote,
        "permissions": ["SPOT"] if permissions is None else permissions,
        "status": status,
    }


def cmc_coin(symbol: str, rank: Optional[int]) -> Dict[str, Any]:
    return {"symbol": symbol, "cmc_rank": rank}


def cmc_body(data: Any, error_code: int = 0) -> Dict[str, Any]:
    return {"status": {"error_code": error_code, "error_message": None}, "data": data}


class FakeApi:
    """按路径返回固定响应的 MockTransport，并记录请求顺序。"""

    def __init__(
        self,
        exchange_symbols: List[Dict[str, Any]],
        listings: List[Dict[str, Any]],
        categories: Optional[Dict[str, Dict[str, Any]]] = None,
    ) -> None:
        self.exchange_symbols = exchange_symbols
        self.listings = listings
        self.categories = categories or {}
        self.overrides: Dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path in self.overrides:
            return self.overrides[path](request)
        if path == "/api/v3/exchangeInfo":
            return httpx.Response(200, json={"symbols": self.exchange_symbols})
        if path == "/v1/cryptocurrency/listings/latest":
            return httpx.Response(200, json=cmc_body(self.listings))
        if path == "/v1/cryptocurrency/categories":
            summaries = [{"id": cid, "name": c["name"]} for cid, c in self.categories.items()]
            return httpx.Response(200, json=cmc_body(summaries))
        if path == "/v1/cryptocurrency/category":
            detail = self.categories[request.url.params["id"]]
            return httpx.Response(200, json=cmc_body(detail))
        return httpx.Response(404, json={})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def config(tmp_path) -> WatchlistConfig:
    return WatchlistConfig(
        cmc_api_key="test-key",
        output_dir=tmp_path / "output",
        cmc_min_request_interval=0.0,
    )
