"""Compiled research signals, one sub-record per search category.

Produced by ``services.signal_extractor.compile_signals`` and consumed by
both scorers and the result assembler.  The extractor fills these records
incrementally, so they are deliberately mutable.
"""

from __future__ import annotations

from typing import List

from pydantic import Field

from .base_schema import CamelModel
from .search_schema import TaggedSearchResult


class CompetitorSignals(CamelModel):
    results: List[TaggedSearchResult] = Field(default_factory=list)
    companies: List[str] = Field(
        default_factory=list,
        description="Case-sensitive candidate company names, unique, in discovery order",
    )

    @property
    def count(self) -> int:
        return len(self.companies)


class ExactMatchSignals(CamelModel):
    results: List[TaggedSearchResult] = Field(default_factory=list)
    found: bool = False


class MarketSizeSignals(CamelModel):
    results: List[TaggedSearchResult] = Field(default_factory=list)
    numbers: List[str] = Field(
        default_factory=list, description="Currency figures such as '$1.2 billion'"
    )
    growth: List[str] = Field(
        default_factory=list, description="Percentages such as '15%'"
    )


class TrendSignals(CamelModel):
    results: List[TaggedSearchResult] = Field(default_factory=list)
    keywords: List[str] = Field(
        default_factory=list, description="Trend adjectives, duplicates kept"
    )


class StartupSignals(CamelModel):
    results: List[TaggedSearchResult] = Field(default_factory=list)
    product_hunt: List[TaggedSearchResult] = Field(default_factory=list)
    github: List[TaggedSearchResult] = Field(default_factory=list)


class ProblemSignals(CamelModel):
    results: List[TaggedSearchResult] = Field(default_factory=list)
    validated: bool = False


class UniquenessSignals(CamelModel):
    results: List[TaggedSearchResult] = Field(default_factory=list)
    validated: bool = False


class CompiledSignals(CamelModel):
    competitors: CompetitorSignals = Field(default_factory=CompetitorSignals)
    exact_match: ExactMatchSignals = Field(default_factory=ExactMatchSignals)
    market_size: MarketSizeSignals = Field(default_factory=MarketSizeSignals)
    trends: TrendSignals = Field(default_factory=TrendSignals)
    startups: StartupSignals = Field(default_factory=StartupSignals)
    problem: ProblemSignals = Field(default_factory=ProblemSignals)
    uniqueness: UniquenessSignals = Field(default_factory=UniquenessSignals)

    @property
    def total_results(self) -> int:
        return sum(
            len(bucket.results)
            for bucket in (
                self.competitors,
                self.exact_match,
                self.market_size,
                self.trends,
                self.startups,
                self.problem,
                self.uniqueness,
            )
        )
