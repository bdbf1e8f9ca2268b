from pathlib import Path
from typing import Iterable, List, Sequence

from crypto_watchlist.models import TradingPair

SECTION_PREFIX = "###"
BUCKET_SIZE = 10
SEPARATOR = ","


def section_header(lower: int, upper: int) -> str:
    return f"{SECTION_PREFIX}CoinMarketCap Ranks {lower}-{upper}"


def is_section_header(token: str) -> bool:
    return token.startswith(SECTION_PREFIX)


def symbol_token(pair: TradingPair, exchange_prefix: str) -> str:
    return f"{exchange_prefix}:{pair.symbol}"


def sort_by_rank(pairs: Iterable[TradingPair]) -> List[TradingPair]:
    return sorted(pairs, key=lambda p: p.rank)


def build_ranked_tokens(
    pairs: Sequence[TradingPair],
    max_rank: int,
    exchange_prefix: str,
) -> List[str]:
    """
    按排名每 10 名一组：(0,10]、(10,20]…，直到覆盖 max_rank。

    空分组不输出；每组前插入分组标题，组内按排名升序。排名超出 max_rank
    所在分组的交易对不输出。
    """
    tokens: List[str] = []
    ordered = sort_by_rank(pairs)
    ceiling = -(-max_rank // BUCKET_SIZE) * BUCKET_SIZE

    for upper in range(BUCKET_SIZE, ceiling + 1, BUCKET_SIZE):
        lower = upper - BUCKET_SIZE
        bucket = [p for p in ordered if lower < p.rank <= upper]
        if not bucket:
            continue
        tokens.append(section_header(lower + 1, upper))
        tokens.extend(symbol_token(p, exchange_prefix) for p in bucket)

    return tokens


def strip_sections(tokens: Iterable[str]) -> List[str]:
    return [t for t in tokens if not is_section_header(t)]


def build_category_tokens(
    pairs: Sequence[TradingPair],
    exchange_prefix: str,
) -> List[str]:
    return [symbol_token(p, exchange_prefix) for p in sort_by_rank(pairs)]


def serialize(tokens: Iterable[str]) -> str:
    return SEPARATOR.join(tokens)


def write_watchlist(tokens: Iterable[str], output_path: Path) -> Path:
    """写入观察列表文件，已存在则覆盖。"""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(serialize(tokens), encoding="utf-8")
    return output_path
