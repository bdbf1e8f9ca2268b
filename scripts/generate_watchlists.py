"""
TradingView 观察列表生成脚本。

功能：
- 从 Binance 获取现货交易对，从 CoinMarketCap 获取市值排名与分类
- 按 CMC 排名每 10 名分组，生成带分组标题 / 不带分组标题两份观察列表
- 为每个分类生成一份观察列表（分类中没有可交易币时跳过）
- 文件保存到 output/ 目录，每次运行前清空

注意：CoinMarketCap 免费套餐每分钟只允许 30 次请求，分类较多时耗时较长。
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

import httpx
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from crypto_watchlist.config import DEFAULT_MAX_RANK, DEFAULT_QUOTE, OUTPUT_DIR, WatchlistConfig
from crypto_watchlist.pipeline import RunReport, generate_watchlists_async


def parse_args() -> argparse.Namespace:
    """解析命令行参数。"""
    parser = argparse.ArgumentParser(
        description="结合 Binance 现货交易对与 CoinMarketCap 排名，生成 TradingView 观察列表"
    )
    parser.add_argument("--quote", default=DEFAULT_QUOTE, help=f"计价资产，默认 {DEFAULT_QUOTE}")
    parser.add_argument(
        "--max-rank",
        type=int,
        default=DEFAULT_MAX_RANK,
        help=f"从 CoinMarketCap 获取的最大排名，默认 {DEFAULT_MAX_RANK}",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=OUTPUT_DIR,
        help=f"输出目录（每次运行前会被清空），默认 {OUTPUT_DIR}",
    )
    parser.add_argument(
        "--no-section",
        action="store_true",
        help="只生成不带排名分组标题的观察列表",
    )
    parser.add_argument(
        "--skip-categories",
        action="store_true",
        help="跳过分类观察列表（可大幅减少 CoinMarketCap 请求次数）",
    )
    parser.add_argument(
        "--sandbox",
        action="store_true",
        help="使用 CoinMarketCap sandbox 接口（数据为模拟数据）",
    )
    parser.add_argument("--verbose", action="store_true", help="输出调试日志")
    return parser.parse_args()


def main() -> None:
    """主函数：读取配置并执行生成流程。"""
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv(override=False)

    try:
        config = WatchlistConfig.from_env(
            sandbox=args.sandbox,
            quote=args.quote.strip().upper(),
            max_rank=args.max_rank,
            with_sections=not args.no_section,
            include_categories=not args.skip_categories,
            output_dir=args.output_dir,
        )
        print("注意：CoinMarketCap 免费套餐每分钟只允许 30 次请求，整个过程需要一些时间。\n")
        report = asyncio.run(generate_watchlists_async(config))
    except (httpx.HTTPError, ValueError, KeyError) as exc:
        print(f"执行失败：{exc}", file=sys.stderr)
        sys.exit(1)

    print_report(report)


def print_report(report: RunReport) -> None:
    print(f"可现货交易的交易对：{report.tradable_pairs} 个")
    for path in report.watchlist_paths:
        print(f"已写入 {path}")
    if report.category_paths or report.skipped_categories:
        print(
            f"\n分类观察列表：生成 {len(report.category_paths)} 个，"
            f"跳过 {len(report.skipped_categories)} 个（无可交易币）。"
        )


if __name__ == "__main__":
    main()
