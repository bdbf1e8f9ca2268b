"""
Tests for watchlist bucketing, serialization and file naming.
"""

from datetime import date

from crypto_watchlist.models import TradingPair
from crypto_watchlist.storage import (
    build_category_path,
    build_watchlist_path,
    reset_output_dir,
    slugify_category,
)
from crypto_watchlist.watchlist import (
    build_category_tokens,
    build_ranked_tokens,
    is_section_header,
    serialize,
    strip_sections,
    write_watchlist,
)


def pairs(*items):
    return [TradingPair(symbol, rank) for symbol, rank in items]


class TestRankedTokens:
    def test_single_pair(self):
        tokens = build_ranked_tokens(pairs(("BTCUSDT", 1)), 1500, "BINANCE")
        assert serialize(tokens) == "###CoinMarketCap Ranks 1-10,BINANCE:BTCUSDT"

    def test_buckets_sorted_and_empty_buckets_skipped(self):
        data = pairs(("SOLUSDT", 5), ("BTCUSDT", 1), ("DOTUSDT", 10), ("AAVEUSDT", 31), ("LINKUSDT", 11))

        tokens = build_ranked_tokens(data, 1500, "BINANCE")

        assert tokens == [
            "###CoinMarketCap Ranks 1-10",
            "BINANCE:BTCUSDT",
            "BINANCE:SOLUSDT",
            "BINANCE:DOTUSDT",
            "###CoinMarketCap Ranks 11-20",
            "BINANCE:LINKUSDT",
            "###CoinMarketCap Ranks 31-40",
            "BINANCE:AAVEUSDT",
        ]

    def test_bucket_membership_matches_rank(self):
        data = pairs(*[(f"C{r}USDT", r) for r in (1, 9, 10, 11, 20, 21, 99, 100)])

        current = None
        for token in build_ranked_tokens(data, 100, "BINANCE"):
            if is_section_header(token):
                lower, upper = map(int, token.rsplit(" ", 1)[1].split("-"))
                assert upper % 10 == 0 and lower == upper - 9
                current = (lower, upper)
            else:
                rank = int(token[len("BINANCE:C"):-len("USDT")])
                assert current[0] <= rank <= current[1]

    def test_ranks_above_ceiling_are_excluded(self):
        tokens = build_ranked_tokens(pairs(("AUSDT", 15), ("BUSDT", 25)), 15, "BINANCE")
        assert tokens == ["###CoinMarketCap Ranks 11-20", "BINANCE:AUSDT"]

    def test_without_section_is_filtered_with_section(self):
        data = pairs(("BTCUSDT", 1), ("LINKUSDT", 11), ("ETHUSDT", 2))
        tokens = build_ranked_tokens(data, 1500, "BINANCE")

        stripped = strip_sections(tokens)

        assert stripped == [t for t in tokens if not t.startswith("###")]
        assert serialize(stripped) == "BINANCE:BTCUSDT,BINANCE:ETHUSDT,BINANCE:LINKUSDT"

    def test_empty_input_serializes_to_empty_string(self):
        assert serialize(build_ranked_tokens([], 1500, "BINANCE")) == ""


class TestCategoryTokens:
    def test_flat_and_sorted(self):
        tokens = build_category_tokens(pairs(("UNIUSDT", 20), ("AAVEUSDT", 31), ("LINKUSDT", 11)), "BINANCE")
        assert serialize(tokens) == "BINANCE:LINKUSDT,BINANCE:UNIUSDT,BINANCE:AAVEUSDT"


class TestStorage:
    def test_watchlist_filenames(self, tmp_path):
        day = date(2024, 3, 7)
        assert build_watchlist_path(tmp_path, "BINANCE", True, day).name == (
            "binance_watchlist_with_section_on_07-03-2024.txt"
        )
        assert build_watchlist_path(tmp_path, "BINANCE", False, day).name == (
            "binance_watchlist_without_section_on_07-03-2024.txt"
        )

    def test_category_slug(self):
        assert slugify_category("Decentralized Finance (DeFi)") == "decentralized_finance_defi"
        assert slugify_category("Layer-2") == "layer2"
        assert slugify_category("???", "605e") == "category_605e"

    def test_category_path(self, tmp_path):
        path = build_category_path(tmp_path, "BINANCE", "Smart Contracts", date(2024, 12, 31))
        assert path == tmp_path / "categorized" / "binance_watchlist_smart_contracts_category_on_31-12-2024.txt"

    def test_reset_removes_previous_files(self, tmp_path):
        out = tmp_path / "output"
        (out / "categorized").mkdir(parents=True)
        (out / "categorized" / "old.txt").write_text("x")

        reset_output_dir(out)

        assert out.exists()
        assert list(out.iterdir()) == []

    def test_write_overwrites(self, tmp_path):
        path = tmp_path / "nested" / "list.txt"
        write_watchlist(["A"], path)
        write_watchlist(["B", "C"], path)
        assert path.read_text(encoding="utf-8") == "B,C"
