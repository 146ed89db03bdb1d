"""Research Orchestrator.

Executes a query plan through a :class:`SearchProvider`, one query at a
time, and keeps the flat tagged-result list and the per-query search log
for a single evaluation.

Rules
-----
- Strictly sequential: no two queries are ever in flight together
- Fixed pause after every query (``settings.search_delay_seconds``)
- One log entry per executed query, zero-result queries included
- A failing query contributes zero results; the run always continues
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, List

from ..config import Settings
from ..schemas.search_schema import QueryBatch, SearchLogEntry, TaggedSearchResult
from .search_provider import SearchProvider

logger = logging.getLogger(__name__)


class ResearchOrchestrator:
    """Owns the results and log of one evaluation.  Create one per run."""

    def __init__(self, provider: SearchProvider, settings: Settings) -> None:
        self.provider = provider
        self.settings = settings
        self.results: List[TaggedSearchResult] = []
        self.search_log: List[SearchLogEntry] = []

    async def run(self, batches: List[QueryBatch]) -> List[TaggedSearchResult]:
        """Execute every batch in order and return the accumulated results."""
        for batch in batches:
            print(f"🔍 [RESEARCH] Phase '{batch.category}' — {len(batch.queries)} queries")
            for query in batch.queries:
                await self.execute_query(query, batch.category)
        return self.results

    async def execute_query(self, query: str, category: str) -> int:
        """Run one query, tag and store its results, then pause."""
        print(f"   🔎 [RESEARCH] {query[:50]!r}")
        try:
            found = await self.provider.search(query)
        except Exception as exc:
            print(f"   ⚠️ [RESEARCH] Query failed: {exc}")
            logger.warning("Search failed for query=%r: %s", query, exc)
            found = []

        tagged = [
            TaggedSearchResult.from_result(r, category=category, query=query)
            for r in found
        ]
        self.results.extend(tagged)
        self.search_log.append(
            SearchLogEntry(query=query, category=category, results_count=len(tagged))
        )
        print(f"      ✅ {len(tagged)} results")

        if self.settings.search_delay_seconds > 0:
            await asyncio.sleep(self.settings.search_delay_seconds)
        return len(tagged)

    def stats(self) -> Dict[str, int]:
        """Aggregate counters over everything executed so far."""
        return {
            "total_queries": len(self.search_log),
            "total_results": len(self.results),
            "unique_sources": len({r.source for r in self.results}),
            "unique_urls": len({r.url for r in self.results if r.url}),
        }
