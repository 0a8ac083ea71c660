"""
Unit tests for result filtering and the FilterSpec toggles.
"""
import pytest

from placefinder.schemas.place import FilterSpec, Place
from placefinder.services.filter_engine import FilterEngine, apply_filters, sort_by_distance


def make_place(pid, distance=None, rating=None, types=None):
    return Place(id=pid, name=pid, lat=5.4, lng=100.3, distance=distance, rating=rating, types=types or [])


@pytest.fixture
def places():
    return [
        make_place("museum", distance=2.5, rating=4.5, types=["museum", "tourist_attraction"]),
        make_place("cafe", distance=0.4, rating=3.9, types=["cafe", "food"]),
        make_place("park", distance=6.0, types=["park"]),
        make_place("exact", distance=0),
    ]


class TestEmptySpec:
    """An empty spec keeps everything."""

    def test_keeps_all_and_sorts(self, places):
        result = apply_filters(places, FilterSpec())
        assert [p.id for p in result] == ["exact", "cafe", "museum", "park"]

    def test_unset_distance_sorts_as_zero(self):
        places = [make_place("a", distance=1.0), make_place("b"), make_place("c", distance=0)]
        assert [p.id for p in apply_filters(places, FilterSpec())] == ["b", "c", "a"]

    def test_input_is_not_modified(self, places):
        before = list(places)
        apply_filters(places, FilterSpec(types={"park"}))
        assert places == before


class TestTypeFilter:
    def test_any_overlapping_type_passes(self, places):
        result = apply_filters(places, FilterSpec(types={"food", "park"}))
        assert [p.id for p in result] == ["cafe", "park"]

    def test_place_without_types_is_excluded(self, places):
        result = apply_filters(places, FilterSpec(types={"museum"}))
        assert [p.id for p in result] == ["museum"]


class TestRatingFilter:
    def test_ratings_are_minimum_thresholds(self):
        places = [make_place("low", rating=2), make_place("high", rating=4.5)]
        result = apply_filters(places, FilterSpec(ratings={4}))
        assert [p.id for p in result] == ["high"]

    def test_any_threshold_is_enough(self):
        places = [make_place("mid", rating=3.2), make_place("high", rating=4.5)]
        result = apply_filters(places, FilterSpec(ratings={3, 4}))
        assert {p.id for p in result} == {"mid", "high"}

    def test_unrated_place_fails_rating_filter(self, places):
        result = apply_filters(places, FilterSpec(ratings={1}))
        assert "park" not in [p.id for p in result]
        assert "exact" not in [p.id for p in result]


class TestDistanceFilter:
    def test_max_distance(self):
        places = [make_place("near", distance=1), make_place("far", distance=6)]
        result = apply_filters(places, FilterSpec(max_distance=5))
        assert [p.id for p in result] == ["near"]

    def test_unknown_distance_always_passes(self):
        places = [make_place("unknown"), make_place("far", distance=60)]
        result = apply_filters(places, FilterSpec(max_distance=0.5))
        assert [p.id for p in result] == ["unknown"]

    def test_boundary_is_inclusive(self):
        result = apply_filters([make_place("edge", distance=5)], FilterSpec(max_distance=5))
        assert len(result) == 1


class TestCombinedFilters:
    def test_dimensions_are_anded(self, places):
        spec = FilterSpec(types={"museum", "cafe"}, ratings={4}, max_distance=3)
        assert [p.id for p in apply_filters(places, spec)] == ["museum"]

    def test_apply_is_idempotent(self, places):
        spec = FilterSpec(types={"food", "museum"}, max_distance=5)
        once = apply_filters(places, spec)
        assert apply_filters(once, spec) == once

    def test_engine_delegates(self, places):
        spec = FilterSpec(ratings={3})
        assert FilterEngine().apply(places, spec) == apply_filters(places, spec)


def test_sort_by_distance_is_stable():
    places = [make_place("first", distance=1), make_place("second", distance=1), make_place("zero")]
    assert [p.id for p in sort_by_distance(places)] == ["zero", "first", "second"]


class TestFilterSpecToggles:
    """Toggles return new specs and never touch the original."""

    def test_toggle_type_adds_and_removes(self):
        spec = FilterSpec()
        added = spec.toggle_type("cafe")
        assert added.types == {"cafe"}
        assert added.toggle_type("cafe").types == frozenset()
        assert spec.types == frozenset()

    def test_toggle_rating(self):
        spec = FilterSpec().toggle_rating(4).toggle_rating(3)
        assert spec.ratings == {3.0, 4.0}
        assert spec.toggle_rating(4).ratings == {3.0}

    def test_toggle_distance_clears_when_reselected(self):
        spec = FilterSpec().toggle_distance(5)
        assert spec.max_distance == 5
        assert spec.toggle_distance(5).max_distance == 0
        assert spec.toggle_distance(10).max_distance == 10

    def test_is_empty(self):
        assert FilterSpec().is_empty
        assert not FilterSpec(max_distance=1).is_empty

    def test_spec_is_frozen(self):
        with pytest.raises(Exception):
            FilterSpec().max_distance = 3

    def test_negative_distance_rejected(self):
        with pytest.raises(ValueError):
            FilterSpec(max_distance=-1)
