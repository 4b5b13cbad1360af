# backend/fishkeeper/services/search/engine.py
"""In-memory filter / sort over the saved fish collection.

Records are duck typed: anything exposing ``scientific_name``,
``common_name``, ``family_name``, ``title``, ``note`` and ``date_time``
works (ORM rows, pydantic models, test doubles).
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Optional

from fishkeeper.schemas.commons import FilterOption, SortOption

# キーワード検索の対象フィールド（順序は表示に影響しない）
KEYWORD_FIELDS = ("scientific_name", "common_name", "family_name", "note", "title")

FILTER_FIELDS: dict[FilterOption, tuple[str, ...]] = {
    FilterOption.keyword: KEYWORD_FIELDS,
    FilterOption.title: ("title",),
    FilterOption.note: ("note",),
    FilterOption.family_name: ("family_name",),
    FilterOption.scientific_name: ("scientific_name",),
    FilterOption.common_name: ("common_name",),
    FilterOption.none: (),
}

DEFAULT_FILTER = FilterOption.keyword
DEFAULT_SORT = SortOption.date_descending


def text_matches(value: Optional[str], needle: str) -> bool:
    """Case-insensitive substring test; absent values never match."""
    if value is None:
        return False
    return needle.lower() in value.lower()


def record_matches(record: Any, search_text: str, option: FilterOption) -> bool:
    option = FilterOption(option)
    if option is FilterOption.none:
        return True
    return any(
        text_matches(getattr(record, field, None), search_text)
        for field in FILTER_FIELDS[option]
    )


def filter_records(
    records: Iterable[Any],
    search_text: str,
    option: FilterOption = DEFAULT_FILTER,
) -> list[Any]:
    """Return records matching ``search_text`` under ``option``.

    Blank text (after trimming) disables filtering for every mode. The
    comparison itself uses the text as typed, only lower-cased.
    """
    items = list(records)
    if not search_text.strip():
        return items
    option = FilterOption(option)
    if option is FilterOption.none:
        return items
    return [r for r in items if record_matches(r, search_text, option)]


def sort_records(records: Iterable[Any], option: SortOption = DEFAULT_SORT) -> list[Any]:
    """Stable sort by creation time or scientific name."""
    option = SortOption(option)
    if option in (SortOption.date_ascending, SortOption.date_descending):
        key = lambda r: r.date_time  # noqa: E731
    else:
        key = lambda r: r.scientific_name  # noqa: E731
    descending = option in (SortOption.date_descending, SortOption.name_descending)
    # reverse=True でも同値要素の相対順は保たれる
    return sorted(records, key=key, reverse=descending)


def compute_view(
    records: Iterable[Any],
    search_text: str = "",
    filter_option: FilterOption = DEFAULT_FILTER,
    sort_option: SortOption = DEFAULT_SORT,
) -> list[Any]:
    # 毎回ゼロから再計算（キャッシュなし）。フィルタ → ソートの順
    return sort_records(filter_records(records, search_text, filter_option), sort_option)
