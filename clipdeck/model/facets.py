"""Facet builder: filter options derived from the loaded clip collection."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace

from clipdeck.model.clips import Clip
from clipdeck.model.filters import ALL, FilterState, collation_key

UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Facets:
    champions: list[str] = field(default_factory=list)
    roles: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)


def distinct_values(clips: Iterable[Clip], attribute: str) -> list[str]:
    values = {getattr(clip, attribute) or UNKNOWN for clip in clips}
    return sorted(values, key=collation_key)


def distinct_tags(clips: Iterable[Clip]) -> list[str]:
    values = {tag for clip in clips for tag in clip.tags}
    return sorted(values, key=collation_key)


def build_facets(clips: Sequence[Clip]) -> Facets:
    """Build facets from the full collection, not the filtered view."""
    return Facets(
        champions=distinct_values(clips, "champion"),
        roles=distinct_values(clips, "role"),
        categories=distinct_values(clips, "category"),
        tags=distinct_tags(clips),
    )


def repair_filters(filters: FilterState, facets: Facets) -> FilterState:
    """Drop selections that the rebuilt facets no longer offer.

    Stale champion/role/category selections reset to ``"all"``; stale tags
    are removed from the selected set.
    """
    def keep(value: str, options: list[str]) -> str:
        return value if value == ALL or value in options else ALL

    return replace(
        filters,
        champion=keep(filters.champion, facets.champions),
        role=keep(filters.role, facets.roles),
        category=keep(filters.category, facets.categories),
        tags=frozenset(tag for tag in filters.tags if tag in facets.tags),
    )
