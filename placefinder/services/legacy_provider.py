"""
Provider for the legacy query-string places API (``textsearch``/``nearbysearch``).

The key travels as a query parameter and every response carries its own
``status`` field next to the HTTP status.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlencode

from placefinder.core.exceptions import MalformedResponseError, ProviderDeniedError
from placefinder.schemas.place import Coordinates, Place
from placefinder.services.place_provider import (
    PlaceProvider,
    build_place,
    coerce_number,
    optional_id,
)
from placefinder.services.upstream import fetch_json

logger = logging.getLogger(__name__)

STATUS_OK = "OK"
STATUS_ZERO_RESULTS = "ZERO_RESULTS"


def unwrap_results(data: dict, endpoint: str, key: str = "results") -> Any:
    """Return ``data[key]``, or None when upstream reported zero results."""
    status = data.get("status", STATUS_OK)
    if status == STATUS_ZERO_RESULTS:
        return None
    if status != STATUS_OK:
        raise ProviderDeniedError(endpoint, status, data.get("error_message"))
    return data.get(key)


class LegacyPlaceProvider(PlaceProvider):
    """Text search and nearby search over the query-string endpoints."""

    name = "legacy"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.base_url = self.settings.legacy_base_url.rstrip("/")

    async def _get(self, path: str, params: dict) -> dict:
        params = {**params, "key": self._require_api_key()}
        return await fetch_json(
            "GET",
            f"{self.base_url}/{path}",
            params=params,
            timeout=self.timeout,
            transport=self.transport,
        )

    def _results(self, data: dict, endpoint: str) -> list:
        results = unwrap_results(data, endpoint)
        if results is None:
            return []
        if not isinstance(results, list):
            raise MalformedResponseError(endpoint, "'results' is not a list")
        return results

    async def _resolve(self, text: str) -> Optional[Coordinates]:
        endpoint = "textsearch/json"
        data = await self._get(endpoint, {"query": text})
        results = self._results(data, endpoint)
        if not results:
            return None

        first = results[0] if isinstance(results[0], dict) else {}
        location = self._location(first)
        if location is None:
            raise MalformedResponseError(endpoint, "first candidate has no location")
        lat, lng = location
        return Coordinates(lat=lat, lng=lng, place_id=optional_id(first.get("place_id")))

    async def _nearby(self, coords: Coordinates, radius_m: int) -> list[Place]:
        endpoint = "nearbysearch/json"
        data = await self._get(
            endpoint, {"location": f"{coords.lat},{coords.lng}", "radius": radius_m}
        )

        places = []
        for record in self._results(data, endpoint):
            place = self._to_place(record)
            if place is not None:
                places.append(place)
        return places

    @staticmethod
    def _location(record: dict) -> Optional[tuple[float, float]]:
        geometry = record.get("geometry")
        location = geometry.get("location") if isinstance(geometry, dict) else None
        if not isinstance(location, dict):
            return None
        lat, lng = coerce_number(location.get("lat")), coerce_number(location.get("lng"))
        if lat is None or lng is None:
            return None
        return lat, lng

    def _to_place(self, record: Any) -> Optional[Place]:
        if not isinstance(record, dict):
            return None
        location = self._location(record)
        if location is None:
            return None
        return build_place(
            place_id=record.get("place_id"),
            name=record.get("name"),
            lat=location[0],
            lng=location[1],
            rating=record.get("rating"),
            photo_url=self._photo_url(record.get("photos")),
            types=record.get("types"),
        )

    def _photo_url(self, photos: Any) -> Optional[str]:
        if not isinstance(photos, list) or not photos or not isinstance(photos[0], dict):
            return None
        reference = photos[0].get("photo_reference")
        if not reference:
            return None
        query = urlencode({
            "maxwidth": self.settings.photo_max_width_px,
            "photo_reference": reference,
            "key": self.api_key,
        })
        return f"{self.base_url}/photo?{query}"
