"""Catalog state, its update functions, and the view plan derived from it."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from clipdeck.model.clips import Clip
from clipdeck.model.facets import Facets, build_facets, repair_filters
from clipdeck.model.filters import FilterState, apply_filters

LOADING_MESSAGE = "Loading clips from your database…"
LOADING_COUNT_TEXT = "Loading clips…"
EMPTY_MESSAGE = "No clips match your filters yet. Try clearing a few of them."
FETCH_ERROR_MESSAGE = (
    "Unable to load clips from your API. Check the database connection "
    "and API endpoint, then refresh."
)


@dataclass(frozen=True)
class CatalogState:
    clips: tuple[Clip, ...] = ()
    loading: bool = True
    error: str | None = None
    filters: FilterState = field(default_factory=FilterState)


@dataclass(frozen=True)
class ViewPlan:
    """What the window should show for a given state.

    ``empty_message`` is None when the empty-state area is hidden.
    """

    clips: list[Clip]
    count_text: str
    empty_message: str | None


def begin_loading(state: CatalogState) -> CatalogState:
    return replace(state, loading=True, error=None)


def finish_loading(state: CatalogState, clips: list[Clip]) -> CatalogState:
    return replace(state, clips=tuple(clips), loading=False, error=None)


def fail_loading(state: CatalogState, message: str = FETCH_ERROR_MESSAGE) -> CatalogState:
    return replace(state, clips=(), loading=False, error=message)


def with_filters(state: CatalogState, filters: FilterState) -> CatalogState:
    return replace(state, filters=filters)


def refresh_facets(state: CatalogState) -> tuple[CatalogState, Facets]:
    """Rebuild facets and drop filter selections they no longer cover."""
    facets = build_facets(state.clips)
    return replace(state, filters=repair_filters(state.filters, facets)), facets


def toggle_favorite(state: CatalogState, clip_id: str) -> CatalogState:
    """Flip a clip's favorite flag in memory; nothing is written back."""
    clips = tuple(
        replace(clip, favorite=not clip.favorite) if clip.id == clip_id else clip
        for clip in state.clips
    )
    return replace(state, clips=clips)


def format_count(count: int) -> str:
    return f"{count} clip{'' if count == 1 else 's'}"


def plan_view(state: CatalogState) -> ViewPlan:
    if state.loading:
        return ViewPlan(clips=[], count_text=LOADING_COUNT_TEXT, empty_message=LOADING_MESSAGE)

    if state.error:
        return ViewPlan(clips=[], count_text=format_count(0), empty_message=state.error)

    visible = apply_filters(state.clips, state.filters)
    count_text = format_count(len(visible))
    if not visible:
        return ViewPlan(clips=[], count_text=count_text, empty_message=EMPTY_MESSAGE)
    return ViewPlan(clips=visible, count_text=count_text, empty_message=None)
