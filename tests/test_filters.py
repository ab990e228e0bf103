"""Tests for the filter/sort engine."""

from dataclasses import replace

from conftest import make_clip

from clipdeck.model.filters import (
    ALL,
    FilterState,
    apply_filters,
    compare_text,
    reset_filters,
    toggle_tag,
)


def _ids(clips):
    return [c.id for c in clips]


class TestPredicates:
    def test_default_state_shows_everything(self, sample_clips):
        assert len(apply_filters(sample_clips, FilterState())) == 4

    def test_search_matches_title_case_insensitive(self, sample_clips):
        result = apply_filters(sample_clips, FilterState(search="PENTA"))
        assert _ids(result) == ["1"]

    def test_search_matches_champion_and_notes(self, sample_clips):
        assert _ids(apply_filters(sample_clips, FilterState(search="lee"))) == ["3"]
        assert _ids(apply_filters(sample_clips, FilterState(search="smite war"))) == ["3"]

    def test_search_without_match(self, sample_clips):
        assert apply_filters(sample_clips, FilterState(search="zilean")) == []

    def test_champion_exact_match(self, sample_clips):
        assert _ids(apply_filters(sample_clips, FilterState(champion="Ahri"))) == ["2"]

    def test_role_and_category(self, sample_clips):
        filters = FilterState(role="Mid", category="Outplay")
        assert _ids(apply_filters(sample_clips, filters)) == ["2"]

    def test_favorites_only(self, sample_clips):
        result = apply_filters(sample_clips, FilterState(favorites_only=True))
        assert sorted(_ids(result)) == ["1", "3"]

    def test_tags_are_conjunctive(self, sample_clips):
        result = apply_filters(sample_clips, FilterState(tags=frozenset({"ace", "clutch"})))
        assert _ids(result) == ["1"]

    def test_clip_missing_one_selected_tag_never_shown(self):
        clips = [
            make_clip("a", tags=["x", "y", "z"]),
            make_clip("b", tags=["x", "y", "z", "w"]),
        ]
        result = apply_filters(clips, FilterState(tags=frozenset({"x", "y", "z", "w"})))
        assert _ids(result) == ["b"]

    def test_single_tag(self, sample_clips):
        result = apply_filters(sample_clips, FilterState(tags=frozenset({"clutch"})))
        assert sorted(_ids(result)) == ["1", "2"]


class TestSorting:
    T1 = "2024-01-01T00:00:00.000Z"
    T2 = "2024-06-01T00:00:00.000Z"

    def test_oldest_first(self):
        clips = [make_clip("late", recorded_at=self.T2), make_clip("early", recorded_at=self.T1)]
        assert _ids(apply_filters(clips, FilterState(sort="oldest"))) == ["early", "late"]

    def test_newest_first(self):
        clips = [make_clip("early", recorded_at=self.T1), make_clip("late", recorded_at=self.T2)]
        assert _ids(apply_filters(clips, FilterState(sort="newest"))) == ["late", "early"]

    def test_default_is_newest(self, sample_clips):
        assert _ids(apply_filters(sample_clips, FilterState())) == ["1", "3", "2", "4"]

    def test_champion_sort_ignores_case(self):
        clips = [make_clip("z", champion="zed"), make_clip("A", champion="Ahri"),
                 make_clip("a", champion="ashe")]
        result = apply_filters(clips, FilterState(sort="champion"))
        assert [c.champion for c in result] == ["Ahri", "ashe", "zed"]

    def test_champion_sort_places_accented_names_alphabetically(self):
        clips = [make_clip("z", champion="Zed"), make_clip("e", champion="Élise"),
                 make_clip("r", champion="Ezreal")]
        result = apply_filters(clips, FilterState(sort="champion"))
        assert [c.champion for c in result] == ["Élise", "Ezreal", "Zed"]

    def test_compare_text_case_variants_are_ordered(self):
        assert compare_text("ahri", "Ahri") != 0
        assert compare_text("Ahri", "Ahri") == 0
        assert compare_text("ahri", "ASHE") < 0

    def test_ties_keep_input_order(self):
        clips = [make_clip(str(i), recorded_at=self.T1) for i in range(5)]
        assert _ids(apply_filters(clips, FilterState(sort="newest"))) == ["0", "1", "2", "3", "4"]
        assert _ids(apply_filters(clips, FilterState(sort="oldest"))) == ["0", "1", "2", "3", "4"]

    def test_unknown_mode_behaves_as_newest(self):
        clips = [make_clip("early", recorded_at=self.T1), make_clip("late", recorded_at=self.T2)]
        assert _ids(apply_filters(clips, FilterState(sort="random"))) == ["late", "early"]


class TestPurity:
    def test_repeated_application_is_identical(self, sample_clips):
        filters = FilterState(search="a", sort="champion", tags=frozenset({"clutch"}))
        assert apply_filters(sample_clips, filters) == apply_filters(sample_clips, filters)

    def test_input_list_untouched(self, sample_clips):
        before = list(sample_clips)
        apply_filters(sample_clips, FilterState(sort="oldest"))
        assert sample_clips == before


class TestUpdates:
    def test_toggle_tag_adds_and_removes(self):
        filters = toggle_tag(FilterState(), "ace")
        assert filters.tags == {"ace"}
        assert toggle_tag(filters, "ace").tags == frozenset()

    def test_reset_keeps_mute(self):
        filters = FilterState(search="x", champion="Ahri", tags=frozenset({"a"}),
                              favorites_only=True, sort="oldest", muted=True)
        reset = reset_filters(filters)
        assert reset == FilterState(muted=True)
        assert reset.champion == ALL

    def test_filter_state_is_immutable_value(self):
        filters = FilterState()
        changed = replace(filters, search="x")
        assert filters.search == ""
        assert changed.search == "x"
