"""Web Search Provider.

Runs one textual query against a web-search backend and normalises the
response into a flat list of :class:`SearchResult`.

Tiers
-----
1. Google via Serper (only when ``SERPER_API_KEY`` is configured).  A
   successful call returns immediately, even with zero results.
2. DuckDuckGo Instant Answer, used when Serper is not configured or fails
   for any reason (network, timeout, non-2xx, malformed body).

Rules
-----
- ``search`` never raises; total failure yields ``[]``
- NO deduplication (the two tiers never run for the same successful query)
- NO retries
"""

from __future__ import annotations

import abc
import logging
from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings
from ..constants import SOURCE_LABEL_DUCKDUCKGO, SOURCE_LABEL_SERPER
from ..schemas.search_schema import SearchResult

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Backend configuration
# ---------------------------------------------------------------------------
_SERPER_API_URL = "https://google.serper.dev/search"
_SERPER_RESULTS_PER_QUERY = 10
_DUCKDUCKGO_API_URL = "https://api.duckduckgo.com/"
_DDG_MAX_TOPICS = 8
_DDG_MAX_SUBTOPICS = 3
_DDG_TITLE_CHARS = 80
_CONNECT_TIMEOUT = 5.0


class SearchProvider(abc.ABC):
    """Anything that can turn a query into search results."""

    name: str = "search"

    @abc.abstractmethod
    async def search(self, query: str) -> List[SearchResult]:
        """Return results for *query*; must not raise."""


# ===================================================================== #
#  Response normalisers                                                   #
# ===================================================================== #

def parse_serper_response(data: Dict[str, Any]) -> List[SearchResult]:
    """Organic results plus at most one knowledge-graph entry."""
    results: List[SearchResult] = []

    for item in data.get("organic") or []:
        results.append(
            SearchResult(
                title=item.get("title") or "",
                snippet=item.get("snippet") or "",
                url=item.get("link") or "",
                source="google",
            )
        )

    kg = data.get("knowledgeGraph")
    if kg:
        results.append(
            SearchResult(
                title=kg.get("title") or "Knowledge Graph",
                snippet=kg.get("description") or "",
                url=kg.get("website") or "",
                source="google_kg",
            )
        )

    return results


def _topic_result(topic: Dict[str, Any], source: str) -> SearchResult:
    text = topic["Text"]
    return SearchResult(
        title=text[:_DDG_TITLE_CHARS],
        snippet=text,
        url=topic.get("FirstURL") or "",
        source=source,
    )


def parse_duckduckgo_response(data: Dict[str, Any]) -> List[SearchResult]:
    """Abstract, up to 8 related topics and up to 3 sub-topics per topic."""
    results: List[SearchResult] = []

    if data.get("AbstractText"):
        results.append(
            SearchResult(
                title=data.get("Heading") or "DuckDuckGo Abstract",
                snippet=data["AbstractText"],
                url=data.get("AbstractURL") or "",
                source="duckduckgo_abstract",
            )
        )

    for topic in (data.get("RelatedTopics") or [])[:_DDG_MAX_TOPICS]:
        if topic.get("Text"):
            results.append(_topic_result(topic, "duckduckgo"))
        for sub in (topic.get("Topics") or [])[:_DDG_MAX_SUBTOPICS]:
            if sub.get("Text"):
                results.append(_topic_result(sub, "duckduckgo_sub"))

    return results


# ===================================================================== #
#  Provider                                                               #
# ===================================================================== #

class WebSearchProvider(SearchProvider):
    """Serper primary with DuckDuckGo fallback.

    *transport* is handed to every ``httpx.AsyncClient`` the provider opens;
    tests pass an ``httpx.MockTransport`` here.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._settings = settings
        self._transport = transport

    @property
    def name(self) -> str:
        return SOURCE_LABEL_SERPER if self._settings.has_serper else SOURCE_LABEL_DUCKDUCKGO

    def _client(self, seconds: float) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(seconds, connect=min(seconds, _CONNECT_TIMEOUT)),
            transport=self._transport,
        )

    async def search(self, query: str) -> List[SearchResult]:
        if self._settings.has_serper:
            try:
                return await self._search_serper(query)
            except Exception as exc:
                print(f"⚠️ [SEARCH] Google error, falling back to DuckDuckGo: {str(exc)[:50]}")
                logger.warning("Serper error for query=%r: %s", query, exc)

        try:
            return await self._search_duckduckgo(query)
        except Exception as exc:
            print("⚠️ [SEARCH] DuckDuckGo error")
            logger.warning("DuckDuckGo error for query=%r: %s", query, exc)
            return []

    async def _search_serper(self, query: str) -> List[SearchResult]:
        headers = {
            "X-API-KEY": self._settings.serper_api_key,
            "Content-Type": "application/json",
        }
        payload = {
            "q": query,
            "num": _SERPER_RESULTS_PER_QUERY,
            "gl": "us",
            "hl": "en",
        }
        async with self._client(self._settings.serper_timeout) as client:
            response = await client.post(_SERPER_API_URL, headers=headers, json=payload)
        response.raise_for_status()
        return parse_serper_response(response.json())

    async def _search_duckduckgo(self, query: str) -> List[SearchResult]:
        params = {
            "q": query,
            "format": "json",
            "no_html": 1,
            "skip_disambig": 1,
        }
        async with self._client(self._settings.duckduckgo_timeout) as client:
            response = await client.get(_DUCKDUCKGO_API_URL, params=params)
        response.raise_for_status()
        return parse_duckduckgo_response(response.json())
