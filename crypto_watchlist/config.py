import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# 统一项目输出目录
OUTPUT_DIR = Path("output")

# 交易所 / 行情服务基础 URL
BINANCE_BASE_URL = "https://api.binance.com"
CMC_PRO_BASE_URL = "https://pro-api.coinmarketcap.com"
CMC_SANDBOX_BASE_URL = "https://sandbox-api.coinmarketcap.com"

# CoinMarketCap 官网公开的 sandbox key，无需保密
CMC_SANDBOX_API_KEY = "b54bcf4d-1bca-4e8e-9a24-22ff2c3d462c"
CMC_API_KEY_ENV = "CMC_API_KEY"

# CoinMarketCap 免费套餐限制为每分钟 30 次请求
CMC_MAX_CONCURRENT_REQUESTS = 1
CMC_MIN_REQUEST_INTERVAL = 2.5

DEFAULT_QUOTE = "USDT"
DEFAULT_MAX_RANK = 1500
EXCHANGE_PREFIX = "BINANCE"
REQUEST_TIMEOUT = 30


@dataclass(frozen=True)
class WatchlistConfig:
    """一次运行的全部配置，启动时确定，运行期间不可修改。"""

    cmc_api_key: str
    quote: str = DEFAULT_QUOTE
    max_rank: int = DEFAULT_MAX_RANK
    with_sections: bool = True
    include_categories: bool = True
    exchange_prefix: str = EXCHANGE_PREFIX
    output_dir: Path = OUTPUT_DIR
    binance_base_url: str = BINANCE_BASE_URL
    cmc_base_url: str = CMC_PRO_BASE_URL
    cmc_max_concurrent_requests: int = CMC_MAX_CONCURRENT_REQUESTS
    cmc_min_request_interval: float = CMC_MIN_REQUEST_INTERVAL
    request_timeout: float = REQUEST_TIMEOUT

    def __post_init__(self) -> None:
        if not self.quote:
            raise ValueError("quote 不能为空")
        if self.max_rank < 1:
            raise ValueError("max_rank must be >= 1")

    @property
    def cmc_headers(self) -> dict:
        return {"X-CMC_PRO_API_KEY": self.cmc_api_key}

    @classmethod
    def from_env(
        cls,
        sandbox: bool = False,
        api_key: Optional[str] = None,
        **overrides,
    ) -> "WatchlistConfig":
        """从环境变量构建配置；sandbox 模式下缺省使用公开的 sandbox key。"""
        if sandbox:
            overrides.setdefault("cmc_base_url", CMC_SANDBOX_BASE_URL)
            key = api_key or CMC_SANDBOX_API_KEY
        else:
            key = api_key or os.environ.get(CMC_API_KEY_ENV, "")
        if not key:
            raise ValueError(f"缺少 CoinMarketCap API key，请设置环境变量 {CMC_API_KEY_ENV}")
        return cls(cmc_api_key=key, **overrides)
