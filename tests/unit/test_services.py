"""
Tests for the module-level search/fetch_reviews helpers and their singletons.
"""
from unittest.mock import patch

import pytest

import placefinder
import placefinder.services as services
from placefinder.config.settings import PlacesSettings, Settings
from placefinder.services import (
    NO_REVIEWS_MESSAGE,
    REVIEWS_ERROR_MESSAGE,
    LegacyPlaceProvider,
    ReviewFetcher,
    SearchAggregator,
)


@pytest.fixture
def legacy_config(monkeypatch):
    """Fresh singletons built from settings that select the legacy provider."""
    configured = Settings(places=PlacesSettings(api_key="k", provider="legacy", max_reviews=3))
    monkeypatch.setattr(services, "_aggregator", None)
    monkeypatch.setattr(services, "_review_fetcher", None)
    with patch("placefinder.services.get_settings", return_value=configured), \
            patch("placefinder.services.review_fetcher.get_settings", return_value=configured):
        yield configured


class TestSingletons:
    def test_aggregator_uses_configured_provider(self, legacy_config):
        aggregator = services.get_search_aggregator()

        assert isinstance(aggregator, SearchAggregator)
        assert isinstance(aggregator.provider, LegacyPlaceProvider)
        assert aggregator.provider.api_key == "k"
        assert services.get_search_aggregator() is aggregator

    def test_review_fetcher_is_shared(self, legacy_config):
        fetcher = services.get_review_fetcher()

        assert isinstance(fetcher, ReviewFetcher)
        assert fetcher.max_reviews == 3
        assert services.get_review_fetcher() is fetcher


class TestModuleHelpers:
    @pytest.mark.asyncio
    async def test_blank_search_returns_nothing(self, legacy_config):
        assert await placefinder.search(" ") == []

    @pytest.mark.asyncio
    async def test_exact_entry_has_no_reviews(self, legacy_config):
        assert await placefinder.fetch_reviews("exact") == [NO_REVIEWS_MESSAGE]

    @pytest.mark.asyncio
    async def test_blank_place_id_reports_error(self, legacy_config):
        assert await placefinder.fetch_reviews("  ") == [REVIEWS_ERROR_MESSAGE]
