"""
Search aggregation: resolve a query, gather nearby places, rank them by
distance and put the resolved location itself at the head of the list.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from placefinder.core.exceptions import ErrorCode, PlaceFinderException
from placefinder.core.geo import haversine_distance
from placefinder.schemas.place import Coordinates, EXACT_MATCH_ID, FilterSpec, Place
from placefinder.services.filter_engine import FilterEngine, sort_by_distance
from placefinder.services.place_provider import LookupStatus, PlaceProvider

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    """Search result plus how it was produced.

    ``error`` is set whenever an upstream call failed, even if ``places``
    still holds usable data (for example the fallback list after a failed
    resolution).
    """
    status: LookupStatus
    places: list[Place] = field(default_factory=list)
    error: Optional[PlaceFinderException] = None
    used_fallback: bool = False


class SearchAggregator:
    """Turns a free-text query into an ordered list of places."""

    def __init__(
        self,
        provider: PlaceProvider,
        fallback: Optional[Coordinates] = None,
        radius_m: Optional[int] = None,
        filter_engine: Optional[FilterEngine] = None,
    ):
        self.provider = provider
        self.fallback = fallback or provider.settings.fallback_coordinates
        self.radius_m = radius_m or provider.settings.nearby_radius_m
        self.filter_engine = filter_engine or FilterEngine()

    async def search_with_status(self, query: str) -> SearchOutcome:
        if not query or not query.strip():
            return SearchOutcome(LookupStatus.EMPTY)

        try:
            resolved = await self.provider.lookup_coordinates(query)
            if resolved.coordinates is None:
                return await self._fallback_search(query, resolved.error)

            origin = resolved.coordinates
            nearby = await self.provider.lookup_nearby(origin, self.radius_m)
            ranked = sort_by_distance(self._attach_distances(origin, nearby.places))

            exact = Place(
                id=origin.place_id or EXACT_MATCH_ID,
                name=query,
                lat=origin.lat,
                lng=origin.lng,
                rating=None,
                distance=0,
            )
            logger.info(
                f"Search '{query}' resolved to ({origin.lat:.5f}, {origin.lng:.5f}) "
                f"with {len(ranked)} nearby places"
            )
            return SearchOutcome(LookupStatus.OK, places=[exact, *ranked], error=nearby.error)
        except Exception as e:
            logger.exception(f"Search for '{query}' failed")
            error = (
                e if isinstance(e, PlaceFinderException)
                else PlaceFinderException(str(e), ErrorCode.INTERNAL_ERROR)
            )
            return SearchOutcome(LookupStatus.FAILED, error=error)

    async def _fallback_search(
        self, query: str, resolve_error: Optional[PlaceFinderException]
    ) -> SearchOutcome:
        logger.warning(f"No exact match for '{query}', showing places near the fallback location")
        nearby = await self.provider.lookup_nearby(self.fallback, self.radius_m)
        return SearchOutcome(
            nearby.status,
            places=nearby.places,
            error=nearby.error or resolve_error,
            used_fallback=True,
        )

    @staticmethod
    def _attach_distances(origin: Coordinates, places: list[Place]) -> list[Place]:
        result = []
        for place in places:
            if place.lat is None or place.lng is None:
                result.append(place)
                continue
            result.append(place.with_distance(haversine_distance(origin, place.coordinates)))
        return result

    async def search(self, query: str) -> list[Place]:
        return (await self.search_with_status(query)).places

    async def search_and_filter(
        self, query: str, spec: FilterSpec
    ) -> tuple[list[Place], Optional[Place]]:
        """Search, filter, and pick the place to pin on the map (the first one left)."""
        if not query or not query.strip():
            return [], None
        results = self.filter_engine.apply(await self.search(query), spec)
        return results, results[0] if results else None
