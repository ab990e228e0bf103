"""FilterState and the pure filter/sort engine."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from functools import cmp_to_key

from PySide6.QtCore import QCollator, QLocale, Qt

from clipdeck.model.clips import Clip

ALL = "all"

SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
SORT_CHAMPION = "champion"
SORT_MODES = (SORT_NEWEST, SORT_OLDEST, SORT_CHAMPION)


@dataclass(frozen=True)
class FilterState:
    search: str = ""
    champion: str = ALL
    role: str = ALL
    category: str = ALL
    tags: frozenset[str] = field(default_factory=frozenset)
    favorites_only: bool = False
    sort: str = SORT_NEWEST
    muted: bool = False


def _make_collator() -> QCollator:
    locale = QLocale()
    # The C locale collates by code point, which puts accented names after "z"
    if locale.language() == QLocale.Language.C:
        locale = QLocale(QLocale.Language.English)
    collator = QCollator(locale)
    collator.setCaseSensitivity(Qt.CaseSensitivity.CaseInsensitive)
    return collator


_collator = _make_collator()


def compare_text(a: str, b: str) -> int:
    """Locale-aware, case-insensitive comparison; exact text breaks ties."""
    result = _collator.compare(a, b)
    if result:
        return -1 if result < 0 else 1
    return (a > b) - (a < b)


collation_key = cmp_to_key(compare_text)


def _matches(clip: Clip, filters: FilterState) -> bool:
    if filters.search:
        haystack = f"{clip.title} {clip.champion} {clip.notes}".lower()
        if filters.search.lower() not in haystack:
            return False
    if filters.champion != ALL and clip.champion != filters.champion:
        return False
    if filters.role != ALL and clip.role != filters.role:
        return False
    if filters.category != ALL and clip.category != filters.category:
        return False
    if filters.tags and not all(tag in clip.tags for tag in filters.tags):
        return False
    if filters.favorites_only and not clip.favorite:
        return False
    return True


def apply_filters(clips: Iterable[Clip], filters: FilterState) -> list[Clip]:
    """Return the visible clips for *filters*, in display order.

    Sorting is stable, so clips that compare equal keep their input order.
    """
    visible = [clip for clip in clips if _matches(clip, filters)]

    if filters.sort == SORT_OLDEST:
        return sorted(visible, key=lambda c: c.recorded_datetime)
    if filters.sort == SORT_CHAMPION:
        return sorted(visible, key=lambda c: collation_key(c.champion))
    return sorted(visible, key=lambda c: c.recorded_datetime, reverse=True)


def toggle_tag(filters: FilterState, tag: str) -> FilterState:
    if tag in filters.tags:
        return replace(filters, tags=filters.tags - {tag})
    return replace(filters, tags=filters.tags | {tag})


def reset_filters(filters: FilterState) -> FilterState:
    """Back to defaults, keeping the mute preference."""
    return FilterState(muted=filters.muted)
