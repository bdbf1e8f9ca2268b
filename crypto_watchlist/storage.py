import re
import shutil
from datetime import date
from pathlib import Path

CATEGORY_SUBDIR = "categorized"


def format_date(day: date) -> str:
    """文件名中的日期格式：DD-MM-YYYY。"""
    return day.strftime("%d-%m-%Y")


def reset_output_dir(output_dir: Path) -> None:
    """删除并重建输出目录，不保留上一次运行的文件。"""
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)


def build_watchlist_path(
    output_dir: Path, exchange: str, with_section: bool, day: date
) -> Path:
    """
    构建排名观察列表路径，格式：
    {output_dir}/{exchange}_watchlist_{with|without}_section_on_{DD-MM-YYYY}.txt
    """
    section = "with_section" if with_section else "without_section"
    filename = f"{exchange.lower()}_watchlist_{section}_on_{format_date(day)}.txt"
    return output_dir / filename


def slugify_category(name: str, fallback: str = "") -> str:
    slug = re.sub(r"[^a-z0-9 ]", "", name.lower()).replace(" ", "_")
    return slug or f"category_{fallback}"


def build_category_path(
    output_dir: Path, exchange: str, category_name: str, day: date, category_id: str = ""
) -> Path:
    slug = slugify_category(category_name, category_id)
    filename = f"{exchange.lower()}_watchlist_{slug}_category_on_{format_date(day)}.txt"
    return output_dir / CATEGORY_SUBDIR / filename
