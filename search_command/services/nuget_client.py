"""
NuGet search API client.

Single GET per search, no retries. Transport and HTTP status failures are
raised as SearchFailure; an empty body or a missing ``data`` field is a
valid empty result.
"""
import json
import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError

from search_command.errors import SearchFailure
from search_command.models.packages import PackageRecord, SearchQuery

logger = logging.getLogger(__name__)

DEFAULT_SEARCH_URL = "https://azuresearch-usnc.nuget.org/query"


def parse_search_response(body: str) -> List[PackageRecord]:
    """
    Parse a NuGet search response body into package records.

    Entries that fail validation are skipped so one bad package does not
    drop the whole page.

    Raises:
        SearchFailure: body is not a JSON object or ``data`` is not a list
    """
    if not body or not body.strip():
        return []

    try:
        payload = json.loads(body)
    except json.JSONDecodeError as e:
        raise SearchFailure(f"NuGet search returned invalid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise SearchFailure(f"NuGet search returned {type(payload).__name__}, expected an object")

    data = payload.get("data")
    if data is None:
        return []
    if not isinstance(data, list):
        raise SearchFailure(f"NuGet search 'data' is {type(data).__name__}, expected a list")

    packages = []
    for index, entry in enumerate(data):
        try:
            packages.append(PackageRecord.model_validate(entry))
        except ValidationError as e:
            logger.warning(f"Skipping unparsable package at index {index}: {e.errors()}")

    return packages


class NuGetSearchClient:
    """Client for the NuGet package search endpoint."""

    def __init__(
        self,
        search_url: str = DEFAULT_SEARCH_URL,
        timeout: float = 30.0,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            search_url: Search endpoint, queried with ``q`` and ``take``
            timeout: Request timeout in seconds when no shared client is given
            http_client: Optional shared client owned by the caller
        """
        self.search_url = search_url
        self.timeout = timeout
        self._http_client = http_client

    async def search_packages(self, query: SearchQuery) -> List[PackageRecord]:
        """Search NuGet and return packages in API order."""
        params = {"q": query.text, "take": query.count}
        logger.info(f"Searching NuGet: q='{query.text}' take={query.count}")

        try:
            if self._http_client is not None:
                response = await self._http_client.get(self.search_url, params=params)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.get(self.search_url, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            raise SearchFailure(
                f"NuGet search returned HTTP {status_code}",
                status_code=status_code
            ) from e
        except httpx.HTTPError as e:
            raise SearchFailure(f"NuGet search request failed: {e}") from e

        packages = parse_search_response(response.text)
        logger.info(f"NuGet search for '{query.text}' returned {len(packages)} packages")
        return packages

    async def search(self, text: str, count: int) -> List[PackageRecord]:
        """Convenience wrapper building the SearchQuery."""
        return await self.search_packages(SearchQuery(text=text, count=count))
