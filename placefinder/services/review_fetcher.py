"""
Review fetcher for the place-details endpoint.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import httpx

from placefinder.config.settings import PlacesSettings, get_settings
from placefinder.core.exceptions import (
    ErrorCode,
    MalformedResponseError,
    MissingApiKeyError,
    PlaceFinderException,
)
from placefinder.schemas.place import EXACT_MATCH_ID
from placefinder.services.legacy_provider import unwrap_results
from placefinder.services.place_provider import LookupStatus
from placefinder.services.upstream import fetch_json

logger = logging.getLogger(__name__)

NO_REVIEWS_MESSAGE = "No reviews found."
REVIEWS_ERROR_MESSAGE = "Error fetching reviews."


@dataclass
class ReviewOutcome:
    status: LookupStatus
    reviews: List[str] = field(default_factory=list)
    error: Optional[PlaceFinderException] = None

    @property
    def messages(self) -> List[str]:
        """Review texts, or the single placeholder line shown instead."""
        if self.status == LookupStatus.FAILED:
            return [REVIEWS_ERROR_MESSAGE]
        if self.status == LookupStatus.EMPTY:
            return [NO_REVIEWS_MESSAGE]
        return self.reviews


class ReviewFetcher:
    """Fetches the most recent review texts for one place."""

    def __init__(
        self,
        places_settings: Optional[PlacesSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = places_settings or get_settings().places
        self.details_url = f"{self.settings.legacy_base_url.rstrip('/')}/details/json"
        self.max_reviews = self.settings.max_reviews
        self.transport = transport

    async def fetch_reviews_with_status(self, place_id: str) -> ReviewOutcome:
        """
        Fetch up to ``max_reviews`` review texts in upstream order.

        Args:
            place_id: Provider place id

        Returns:
            ReviewOutcome; never raises
        """
        # the synthetic exact-match entry has no upstream record
        if place_id == EXACT_MATCH_ID:
            return ReviewOutcome(LookupStatus.EMPTY)

        try:
            if not place_id or not place_id.strip():
                raise PlaceFinderException("Place id is empty", ErrorCode.INVALID_QUERY)
            if not self.settings.api_key:
                raise MissingApiKeyError("details")

            data = await fetch_json(
                "GET",
                self.details_url,
                params={
                    "place_id": place_id,
                    "fields": "review",
                    "reviews_sort": "newest",
                    "key": self.settings.api_key,
                },
                timeout=self.settings.timeout_seconds,
                transport=self.transport,
            )
            result = unwrap_results(data, "details/json", key="result")
            if result is None:
                return ReviewOutcome(LookupStatus.EMPTY)
            if not isinstance(result, dict):
                raise MalformedResponseError("details/json", "'result' is not an object")

            reviews = result.get("reviews")
            if not isinstance(reviews, list) or not reviews:
                return ReviewOutcome(LookupStatus.EMPTY)

            texts = [
                (r.get("text") or "") if isinstance(r, dict) else ""
                for r in reviews[: self.max_reviews]
            ]
            logger.debug(f"Fetched {len(texts)} reviews for place {place_id}")
            return ReviewOutcome(LookupStatus.OK, reviews=texts)
        except PlaceFinderException as e:
            logger.error(f"Fetching reviews for {place_id!r} failed: {e.message}")
            return ReviewOutcome(LookupStatus.FAILED, error=e)
        except Exception as e:
            logger.exception(f"Unexpected error fetching reviews for {place_id!r}")
            return ReviewOutcome(
                LookupStatus.FAILED,
                error=PlaceFinderException(str(e), ErrorCode.INTERNAL_ERROR),
            )

    async def fetch_reviews(self, place_id: str) -> List[str]:
        return (await self.fetch_reviews_with_status(place_id)).messages
