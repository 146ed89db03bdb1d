"""Search results, query batches and the per-query log."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List

from pydantic import ConfigDict, Field

from .base_schema import CamelModel


class SearchResult(CamelModel):
    """One normalised hit from a search backend.  Immutable once built."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    snippet: str = ""
    url: str = ""
    source: str = Field(
        default="",
        description="Backend tag: google, google_kg, duckduckgo, "
        "duckduckgo_abstract or duckduckgo_sub",
    )


class TaggedSearchResult(SearchResult):
    """A SearchResult annotated with the category and query that found it."""

    category: str
    query: str

    @classmethod
    def from_result(
        cls, result: SearchResult, *, category: str, query: str
    ) -> "TaggedSearchResult":
        return cls(**result.model_dump(), category=category, query=query)

    @property
    def text(self) -> str:
        """Lowercased ``title snippet`` used by every signal heuristic."""
        return f"{self.title} {self.snippet}".lower()


class SearchLogEntry(CamelModel):
    query: str
    category: str
    results_count: int = Field(..., ge=0)
    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(),
        description="ISO-8601 UTC time the query finished",
    )


class QueryBatch(CamelModel):
    """One research phase: a category tag and its literal queries."""

    category: str
    queries: List[str] = Field(default_factory=list)


class QueryPlan(CamelModel):
    """Everything the planner derives from a submission."""

    industry: str
    keywords: str
    problem_keywords: str
    batches: List[QueryBatch] = Field(default_factory=list)

    @property
    def total_queries(self) -> int:
        return sum(len(b.queries) for b in self.batches)
