"""
crypto_watchlist
~~~~~~~~~~~~~~~~

核心业务包：
- 交易所与行情数据抓取（Binance / CoinMarketCap）
- 交易对与 CMC 排名的对齐（符号别名表）
- TradingView 观察列表的分组、排序与文件输出

入口脚本位于仓库根目录：
- scripts/generate_watchlists.py
"""
