"""Tests for catalog state transitions and the view plan."""

from dataclasses import replace

from conftest import make_clip

from clipdeck.model.catalog import (
    EMPTY_MESSAGE,
    FETCH_ERROR_MESSAGE,
    LOADING_COUNT_TEXT,
    LOADING_MESSAGE,
    CatalogState,
    begin_loading,
    fail_loading,
    finish_loading,
    format_count,
    plan_view,
    refresh_facets,
    toggle_favorite,
    with_filters,
)
from clipdeck.model.filters import ALL, FilterState


class TestFormatCount:
    def test_singular(self):
        assert format_count(1) == "1 clip"

    def test_plural(self):
        assert format_count(0) == "0 clips"
        assert format_count(12) == "12 clips"


class TestPlanView:
    def test_initial_state_is_loading(self):
        plan = plan_view(CatalogState())
        assert plan.clips == []
        assert plan.count_text == LOADING_COUNT_TEXT
        assert plan.empty_message == LOADING_MESSAGE

    def test_loading_wins_over_clips(self, sample_clips):
        state = begin_loading(finish_loading(CatalogState(), sample_clips))
        assert plan_view(state).empty_message == LOADING_MESSAGE

    def test_loaded_clips(self, sample_clips):
        plan = plan_view(finish_loading(CatalogState(), sample_clips))
        assert plan.count_text == "4 clips"
        assert plan.empty_message is None
        assert [c.id for c in plan.clips] == ["1", "3", "2", "4"]

    def test_single_clip_count(self):
        plan = plan_view(finish_loading(CatalogState(), [make_clip()]))
        assert plan.count_text == "1 clip"

    def test_no_match_shows_empty_message(self, sample_clips):
        state = finish_loading(CatalogState(), sample_clips)
        state = with_filters(state, FilterState(search="zzz"))
        plan = plan_view(state)
        assert plan.clips == []
        assert plan.count_text == "0 clips"
        assert plan.empty_message == EMPTY_MESSAGE

    def test_empty_collection_shows_empty_message(self):
        plan = plan_view(finish_loading(CatalogState(), []))
        assert plan.empty_message == EMPTY_MESSAGE

    def test_error_state(self, sample_clips):
        state = fail_loading(finish_loading(CatalogState(), sample_clips))
        plan = plan_view(state)
        assert plan.clips == []
        assert plan.count_text == "0 clips"
        assert plan.empty_message == FETCH_ERROR_MESSAGE


class TestTransitions:
    def test_fail_loading_clears_clips(self, sample_clips):
        state = fail_loading(finish_loading(CatalogState(), sample_clips))
        assert state.clips == ()
        assert state.loading is False
        assert state.error == FETCH_ERROR_MESSAGE

    def test_begin_loading_clears_error(self):
        state = begin_loading(fail_loading(CatalogState()))
        assert state.loading is True
        assert state.error is None

    def test_finish_loading_keeps_filters(self, sample_clips):
        state = with_filters(CatalogState(), FilterState(sort="oldest"))
        state = finish_loading(state, sample_clips)
        assert state.filters.sort == "oldest"
        assert len(state.clips) == 4

    def test_toggle_favorite_flips_only_target(self, sample_clips):
        state = finish_loading(CatalogState(), sample_clips)
        toggled = toggle_favorite(state, "2")
        assert [c.favorite for c in toggled.clips] == [True, True, True, False]
        assert [c.favorite for c in state.clips] == [True, False, True, False]

    def test_toggle_favorite_twice_restores(self, sample_clips):
        state = finish_loading(CatalogState(), sample_clips)
        assert toggle_favorite(toggle_favorite(state, "1"), "1") == state

    def test_toggle_unknown_id_is_noop(self, sample_clips):
        state = finish_loading(CatalogState(), sample_clips)
        assert toggle_favorite(state, "missing") == state

    def test_unfavorite_under_favorites_filter_removes_card(self, sample_clips):
        state = finish_loading(CatalogState(), sample_clips)
        state = with_filters(state, FilterState(favorites_only=True))
        assert len(plan_view(state).clips) == 2
        state = toggle_favorite(state, "1")
        assert [c.id for c in plan_view(state).clips] == ["3"]


class TestRefreshFacets:
    def test_facets_come_from_full_collection(self, sample_clips):
        state = finish_loading(CatalogState(), sample_clips)
        state = with_filters(state, FilterState(champion="Ahri"))
        state, facets = refresh_facets(state)
        assert len(facets.champions) == 4
        assert state.filters.champion == "Ahri"

    def test_reload_without_selected_champion_resets_filter(self, sample_clips):
        state = finish_loading(CatalogState(), sample_clips)
        state = with_filters(state, FilterState(champion="Thresh", tags=frozenset({"steal"})))
        remaining = [c for c in sample_clips if c.champion != "Thresh"]
        state, facets = refresh_facets(finish_loading(state, remaining))
        assert "Thresh" not in facets.champions
        assert state.filters.champion == ALL
        assert state.filters.tags == frozenset({"steal"})

    def test_stale_tag_dropped_on_reload(self, sample_clips):
        state = finish_loading(CatalogState(), sample_clips)
        state = with_filters(state, FilterState(tags=frozenset({"steal", "ace"})))
        remaining = [replace(c, tags=[]) if c.id == "3" else c for c in sample_clips]
        state, _ = refresh_facets(finish_loading(state, remaining))
        assert state.filters.tags == frozenset({"ace"})
