"""Declarative filtering of search results."""
from typing import Iterable

from placefinder.schemas.place import FilterSpec, Place


def distance_key(place: Place) -> float:
    return place.distance if place.distance is not None else 0


def sort_by_distance(places: Iterable[Place]) -> list[Place]:
    # sorted() is stable, so ties keep provider order
    return sorted(places, key=distance_key)


def matches_type(place: Place, spec: FilterSpec) -> bool:
    return not spec.types or not spec.types.isdisjoint(place.types)


def matches_rating(place: Place, spec: FilterSpec) -> bool:
    if not spec.ratings:
        return True
    return place.rating is not None and any(place.rating >= r for r in spec.ratings)


def matches_distance(place: Place, spec: FilterSpec) -> bool:
    return (
        spec.max_distance == 0
        or place.distance is None
        or place.distance <= spec.max_distance
    )


def apply_filters(places: Iterable[Place], spec: FilterSpec) -> list[Place]:
    """Keep places passing every dimension of ``spec``, nearest first."""
    return sort_by_distance(
        p for p in places
        if matches_type(p, spec) and matches_rating(p, spec) and matches_distance(p, spec)
    )


class FilterEngine:
    """Stateless wrapper so callers can inject a filter strategy."""

    def apply(self, places: Iterable[Place], spec: FilterSpec) -> list[Place]:
        return apply_filters(places, spec)
