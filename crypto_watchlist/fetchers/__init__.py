from .binance import fetch_binance_exchange_info_async
from .coinmarketcap import (
    fetch_cmc_categories_async,
    fetch_cmc_category_async,
    fetch_cmc_listings_async,
)
from .common import UnexpectedResponseError

__all__ = [
    "fetch_binance_exchange_info_async",
    "fetch_cmc_listings_async",
    "fetch_cmc_categories_async",
    "fetch_cmc_category_async",
    "UnexpectedResponseError",
]
