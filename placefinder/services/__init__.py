# Place search services

from typing import List, Optional

import httpx

from placefinder.config.settings import PlacesSettings, get_settings
from placefinder.schemas.place import Place

from .place_provider import (
    PlaceProvider,
    LookupStatus,
    ResolveOutcome,
    NearbyOutcome,
)
from .structured_provider import StructuredPlaceProvider
from .legacy_provider import LegacyPlaceProvider
from .search_aggregator import SearchAggregator, SearchOutcome
from .filter_engine import FilterEngine, apply_filters, sort_by_distance
from .review_fetcher import (
    ReviewFetcher,
    ReviewOutcome,
    NO_REVIEWS_MESSAGE,
    REVIEWS_ERROR_MESSAGE,
)

PROVIDERS = {
    StructuredPlaceProvider.name: StructuredPlaceProvider,
    LegacyPlaceProvider.name: LegacyPlaceProvider,
}


def create_place_provider(
    places_settings: Optional[PlacesSettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PlaceProvider:
    """Build the provider variant named by ``places_settings.provider``."""
    places_settings = places_settings or get_settings().places
    provider_cls = PROVIDERS[places_settings.provider]
    return provider_cls(places_settings, transport=transport)


# Singleton instances
_aggregator: Optional[SearchAggregator] = None
_review_fetcher: Optional[ReviewFetcher] = None


def get_search_aggregator() -> SearchAggregator:
    """Get the search aggregator singleton."""
    global _aggregator
    if _aggregator is None:
        _aggregator = SearchAggregator(create_place_provider())
    return _aggregator


def get_review_fetcher() -> ReviewFetcher:
    """Get the review fetcher singleton."""
    global _review_fetcher
    if _review_fetcher is None:
        _review_fetcher = ReviewFetcher()
    return _review_fetcher


async def search(query: str) -> List[Place]:
    return await get_search_aggregator().search(query)


async def fetch_reviews(place_id: str) -> List[str]:
    return await get_review_fetcher().fetch_reviews(place_id)


__all__ = [
    "PlaceProvider",
    "LookupStatus",
    "ResolveOutcome",
    "NearbyOutcome",
    "StructuredPlaceProvider",
    "LegacyPlaceProvider",
    "SearchAggregator",
    "SearchOutcome",
    "FilterEngine",
    "apply_filters",
    "sort_by_distance",
    "ReviewFetcher",
    "ReviewOutcome",
    "NO_REVIEWS_MESSAGE",
    "REVIEWS_ERROR_MESSAGE",
    "create_place_provider",
    "get_search_aggregator",
    "get_review_fetcher",
    "search",
    "fetch_reviews",
]
