import json
from typing import Optional

import httpx
import pytest

from placefinder.config.settings import PlacesSettings
from placefinder.schemas.place import Coordinates, Place
from placefinder.services.place_provider import PlaceProvider


class FakePlaceProvider(PlaceProvider):
    """In-memory provider recording every upstream call."""

    name = "fake"

    def __init__(
        self,
        resolved: Optional[Coordinates] = None,
        nearby: Optional[list[Place]] = None,
        resolve_error: Optional[Exception] = None,
        nearby_error: Optional[Exception] = None,
        places_settings: Optional[PlacesSettings] = None,
    ):
        super().__init__(places_settings or PlacesSettings(api_key="test-key"))
        self.resolved = resolved
        self.nearby = nearby or []
        self.resolve_error = resolve_error
        self.nearby_error = nearby_error
        self.resolve_calls: list[str] = []
        self.nearby_calls: list[tuple[Coordinates, int]] = []

    async def _resolve(self, text):
        self.resolve_calls.append(text)
        if self.resolve_error:
            raise self.resolve_error
        return self.resolved

    async def _nearby(self, coords, radius_m):
        self.nearby_calls.append((coords, radius_m))
        if self.nearby_error:
            raise self.nearby_error
        return list(self.nearby)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps the requests it served."""

    def __init__(self, handler):
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


def json_body(request: httpx.Request) -> dict:
    return json.loads(request.content)


@pytest.fixture
def places_settings():
    return PlacesSettings(api_key="test-key", provider="structured", timeout_seconds=5.0)


@pytest.fixture
def fake_provider():
    return FakePlaceProvider


@pytest.fixture
def transport():
    """Build a RecordingTransport answering every request with ``handler``."""
    return RecordingTransport


@pytest.fixture
def read_json():
    return json_body
