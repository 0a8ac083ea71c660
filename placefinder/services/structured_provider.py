"""
Provider for the structured places API: JSON POST bodies, key and field mask
sent as headers.
"""

import logging
from typing import Any, Optional
from urllib.parse import urlencode

from placefinder.core.exceptions import MalformedResponseError
from placefinder.schemas.place import Coordinates, Place
from placefinder.services.place_provider import (
    PlaceProvider,
    build_place,
    coerce_number,
    optional_id,
)
from placefinder.services.upstream import fetch_json

logger = logging.getLogger(__name__)


class StructuredPlaceProvider(PlaceProvider):
    """Text search and nearby search over ``places:searchText``/``places:searchNearby``."""

    name = "structured"

    RESOLVE_FIELD_MASK = "places.id,places.location"
    NEARBY_FIELD_MASK = (
        "places.id,places.displayName,places.rating,places.location,places.photos,places.types"
    )

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.base_url = self.settings.structured_base_url.rstrip("/")

    def _headers(self, field_mask: str) -> dict:
        return {
            "Content-Type": "application/json",
            "X-Goog-Api-Key": self._require_api_key(),
            "X-Goog-FieldMask": field_mask,
        }

    async def _post(self, path: str, body: dict, field_mask: str) -> dict:
        return await fetch_json(
            "POST",
            f"{self.base_url}/{path}",
            json=body,
            headers=self._headers(field_mask),
            timeout=self.timeout,
            transport=self.transport,
        )

    async def _resolve(self, text: str) -> Optional[Coordinates]:
        data = await self._post("places:searchText", {"textQuery": text}, self.RESOLVE_FIELD_MASK)

        candidates = data.get("places") or []
        if not isinstance(candidates, list):
            raise MalformedResponseError("places:searchText", "'places' is not a list")
        if not candidates:
            return None

        first = candidates[0] if isinstance(candidates[0], dict) else {}
        location = first.get("location") or {}
        lat = coerce_number(location.get("latitude"))
        lng = coerce_number(location.get("longitude"))
        if lat is None or lng is None:
            raise MalformedResponseError("places:searchText", "first candidate has no location")
        return Coordinates(lat=lat, lng=lng, place_id=optional_id(first.get("id")))

    async def _nearby(self, coords: Coordinates, radius_m: int) -> list[Place]:
        body = {
            "locationRestriction": {
                "circle": {
                    "center": {"latitude": coords.lat, "longitude": coords.lng},
                    "radius": radius_m,
                }
            }
        }
        data = await self._post("places:searchNearby", body, self.NEARBY_FIELD_MASK)

        records = data.get("places")
        if not isinstance(records, list):
            return []

        places = []
        for record in records:
            place = self._to_place(record)
            if place is not None:
                places.append(place)
        return places

    def _to_place(self, record: Any) -> Optional[Place]:
        if not isinstance(record, dict):
            return None
        location = record.get("location")
        if not isinstance(location, dict):
            return None
        display_name = record.get("displayName")
        name = display_name.get("text") if isinstance(display_name, dict) else None
        return build_place(
            place_id=record.get("id"),
            name=name,
            lat=location.get("latitude"),
            lng=location.get("longitude"),
            rating=record.get("rating"),
            photo_url=self._photo_url(record.get("photos")),
            types=record.get("types"),
        )

    def _photo_url(self, photos: Any) -> Optional[str]:
        if not isinstance(photos, list) or not photos or not isinstance(photos[0], dict):
            return None
        photo_name = photos[0].get("name")
        if not photo_name:
            return None
        query = urlencode({"maxWidthPx": self.settings.photo_max_width_px, "key": self.api_key})
        return f"{self.base_url}/{photo_name}/media?{query}"
