"""
Place provider abstraction.

A provider resolves free text to coordinates and lists places near a point.
Concrete variants only implement the raw upstream calls (``_resolve`` and
``_nearby``) and may raise; this base class turns every failure into an
in-band value so nothing escapes ``resolve_query``/``search_nearby``.
"""
from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from placefinder.config.settings import PlacesSettings, get_settings
from placefinder.core.exceptions import (
    ErrorCode,
    MalformedResponseError,
    MissingApiKeyError,
    PlaceFinderException,
)
from placefinder.schemas.place import Coordinates, Place, UNNAMED_PLACE

logger = logging.getLogger(__name__)


class LookupStatus(str, Enum):
    """Distinguishes "nothing matched" from "the request failed"."""
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class ResolveOutcome:
    status: LookupStatus
    coordinates: Optional[Coordinates] = None
    error: Optional[PlaceFinderException] = None


@dataclass
class NearbyOutcome:
    status: LookupStatus
    places: list[Place] = field(default_factory=list)
    error: Optional[PlaceFinderException] = None


def new_place_id() -> str:
    return uuid.uuid4().hex


def coerce_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def optional_id(value: Any) -> Optional[str]:
    """Provider ids may arrive as numbers; anything empty counts as unset."""
    if isinstance(value, bool) or not isinstance(value, (str, int)) or value == "":
        return None
    return str(value)


def build_place(
    place_id: Optional[str],
    name: Optional[str],
    lat: Any,
    lng: Any,
    rating: Any = None,
    photo_url: Optional[str] = None,
    types: Any = None,
) -> Optional[Place]:
    """Normalize one upstream record; returns None when it has no usable location."""
    lat, lng = coerce_number(lat), coerce_number(lng)
    if lat is None or lng is None:
        return None
    try:
        return Place(
            id=optional_id(place_id) or new_place_id(),
            name=name or UNNAMED_PLACE,
            lat=lat,
            lng=lng,
            rating=coerce_number(rating),
            photo_url=photo_url,
            types=[t for t in types if isinstance(t, str)] if isinstance(types, list) else [],
        )
    except ValidationError:
        logger.debug(f"Dropping place {place_id!r} with out-of-range location ({lat}, {lng})")
        return None


class PlaceProvider(ABC):
    """Common contract for the structured and legacy upstream APIs."""

    name = "base"

    def __init__(
        self,
        places_settings: Optional[PlacesSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = places_settings or get_settings().places
        self.api_key = self.settings.api_key
        self.timeout = self.settings.timeout_seconds
        self.transport = transport

        if not self.api_key:
            logger.warning(
                f"No API key configured for the {self.name} provider. "
                "Set PLACES_API_KEY in .env file."
            )

    @abstractmethod
    async def _resolve(self, text: str) -> Optional[Coordinates]:
        """Return the first candidate's location, or None when nothing matched."""

    @abstractmethod
    async def _nearby(self, coords: Coordinates, radius_m: int) -> list[Place]:
        """Return places around ``coords`` that carry a valid location."""

    def _require_api_key(self) -> str:
        if not self.api_key:
            raise MissingApiKeyError(self.name)
        return self.api_key

    def _as_failure(self, operation: str, exc: Exception) -> PlaceFinderException:
        if isinstance(exc, PlaceFinderException):
            logger.error(f"{self.name} {operation} failed: {exc.message}")
            return exc
        if isinstance(exc, ValidationError):
            logger.error(f"{self.name} {operation} returned an invalid record: {exc}")
            return MalformedResponseError(operation, "record failed validation")
        logger.exception(f"Unexpected error in {self.name} {operation}")
        return PlaceFinderException(str(exc), ErrorCode.INTERNAL_ERROR)

    async def lookup_coordinates(self, text: str) -> ResolveOutcome:
        try:
            self._require_api_key()
            coords = await self._resolve(text)
        except Exception as e:
            return ResolveOutcome(LookupStatus.FAILED, error=self._as_failure("resolve_query", e))

        if coords is None:
            logger.info(f"No candidates for '{text}' from {self.name} provider")
            return ResolveOutcome(LookupStatus.EMPTY)
        return ResolveOutcome(LookupStatus.OK, coordinates=coords)

    async def lookup_nearby(
        self, coords: Coordinates, radius_m: Optional[int] = None
    ) -> NearbyOutcome:
        radius = radius_m or self.settings.nearby_radius_m
        try:
            self._require_api_key()
            places = await self._nearby(coords, radius)
        except Exception as e:
            return NearbyOutcome(LookupStatus.FAILED, error=self._as_failure("search_nearby", e))

        logger.debug(
            f"{self.name}.search_nearby: lat={coords.lat:.6f} lng={coords.lng:.6f} "
            f"radius_m={radius} got {len(places)} results"
        )
        status = LookupStatus.OK if places else LookupStatus.EMPTY
        return NearbyOutcome(status, places=places)

    async def resolve_query(self, text: str) -> Optional[Coordinates]:
        return (await self.lookup_coordinates(text)).coordinates

    async def search_nearby(
        self, coords: Coordinates, radius_m: Optional[int] = None
    ) -> list[Place]:
        return (await self.lookup_nearby(coords, radius_m)).places
