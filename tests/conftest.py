"""
Shared pytest configuration and fixtures for SearchCommand tests.
Provides NuGet response samples, mocked HTTP transports and Teams turn mocks.
"""

import json
from typing import Any, Callable, Dict
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from botbuilder.schema import Activity, ActivityTypes

from search_command.config import get_settings
from search_command.models.packages import PackageRecord
from search_command.services.nuget_client import NuGetSearchClient
from search_command.templates.card_templates import CardTemplateResolver

TEST_SEARCH_URL = "https://nuget.test/query"


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )


@pytest.fixture
def newtonsoft_entry() -> Dict[str, Any]:
    """One package entry as returned by the NuGet search API."""
    return {
        "@id": "https://api.nuget.org/v3/registration5-semver1/newtonsoft.json/index.json",
        "@type": "Package",
        "registration": "https://api.nuget.org/v3/registration5-semver1/newtonsoft.json/index.json",
        "id": "Newtonsoft.Json",
        "version": "13.0.3",
        "description": "Json.NET is a popular high-performance JSON framework for .NET",
        "summary": "",
        "title": "Json.NET",
        "iconUrl": "https://api.nuget.org/v3-flatcontainer/newtonsoft.json/13.0.3/icon",
        "projectUrl": "https://www.newtonsoft.com/json",
        "tags": ["json"],
        "authors": ["James Newton-King"],
        "totalDownloads": 4500000000,
        "verified": True,
    }


@pytest.fixture
def newtonsoft_record(newtonsoft_entry) -> PackageRecord:
    return PackageRecord.model_validate(newtonsoft_entry)


@pytest.fixture
def make_search_client() -> Callable[..., NuGetSearchClient]:
    """
    Factory for a NuGetSearchClient backed by httpx.MockTransport.

    Pass either a handler ``(request) -> httpx.Response`` (sync or async) or a
    JSON-serializable payload that every request will return.
    """
    def factory(handler=None, payload=None) -> NuGetSearchClient:
        if handler is None:
            def handler(request: httpx.Request) -> httpx.Response:
                return httpx.Response(200, text=json.dumps(payload))

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return NuGetSearchClient(search_url=TEST_SEARCH_URL, http_client=http_client)

    return factory


@pytest.fixture
def resolver() -> CardTemplateResolver:
    """Resolver over the bundled card templates."""
    return CardTemplateResolver(get_settings().template_paths)


@pytest.fixture
def make_turn_context() -> Callable[[str], MagicMock]:
    """Factory for a TurnContext mock carrying a message activity."""
    def factory(text: str) -> MagicMock:
        turn_context = MagicMock()
        turn_context.activity = Activity(
            type=ActivityTypes.message,
            id="activity-test",
            text=text,
        )
        turn_context.send_activity = AsyncMock()
        return turn_context

    return factory
