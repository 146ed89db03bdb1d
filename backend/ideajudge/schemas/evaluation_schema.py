"""Scorer contract and the final evaluation report.

``AnalysisResult`` is what either scorer returns.  The LLM scorer decodes
the model's JSON straight into it, so every field carries a default that
stands in for an absent (or null) key.  ``EvaluationResult`` is the
response body of ``POST /api/evaluate``.
"""

from __future__ import annotations

import math
from typing import Annotated, Dict, List, Literal, Optional

from pydantic import BeforeValidator, Field, field_validator, model_validator

from .base_schema import CamelModel
from .search_schema import SearchLogEntry


def _to_int(v):
    """Accept 72, 72.4 or "72" from the LLM; round half up."""
    if isinstance(v, bool):
        raise ValueError("boolean is not a score")
    if isinstance(v, str):
        v = float(v.strip())
    if isinstance(v, float):
        if math.isnan(v) or math.isinf(v):
            raise ValueError("score must be finite")
        return int(math.floor(v + 0.5))
    return v


LenientInt = Annotated[int, BeforeValidator(_to_int)]


# ── Scorer contract ─────────────────────────────────────────────────────


class ContractModel(CamelModel):
    """Scorer-output model where a null key means the same as a missing one."""

    @model_validator(mode="before")
    @classmethod
    def drop_null_keys(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class CompetitorDetail(ContractModel):
    name: str = ""
    what_they_do: str = ""
    threat: str = "medium"


class ResearchSummary(ContractModel):
    total_results_analyzed: LenientInt = 0
    competitors_found: List[str] = Field(default_factory=list)
    competitor_details: List[CompetitorDetail] = Field(default_factory=list)
    market_size_found: str = "Not found"
    market_growth_rate: str = "Not found"
    trend_signals: List[str] = Field(default_factory=list)
    similar_on_product_hunt: LenientInt = 0
    similar_on_github: LenientInt = 0
    problem_validated: bool = False


class Thinking(ContractModel):
    what_this_is: str = ""
    is_the_problem_real: str = "Needs validation"
    competitor_comparison: str = "See research"
    market_timing: str = "Neutral"


class BreakdownItem(ContractModel):
    points: LenientInt = 0
    reason: str = ""


class ScoringBreakdown(ContractModel):
    innovation_breakdown: Dict[str, BreakdownItem] = Field(default_factory=dict)
    market_breakdown: Dict[str, BreakdownItem] = Field(default_factory=dict)

    @field_validator("innovation_breakdown", "market_breakdown", mode="before")
    @classmethod
    def drop_null_items(cls, v):
        if isinstance(v, dict):
            return {k: item for k, item in v.items() if item is not None}
        return v


class ScoreBlock(ContractModel):
    score: LenientInt = 50
    reasoning: str = "See breakdown"
    improvements: str = "See recommendations"


class Strength(ContractModel):
    title: str = ""
    description: str = ""


class Concern(ContractModel):
    issue: str = ""
    suggestion: str = ""


class NextStep(ContractModel):
    priority: str = "NICE"
    action: str = ""
    impact: str = ""


class AnalysisResult(ContractModel):
    """Structured scorer output (LLM or local)."""

    research_summary: Optional[ResearchSummary] = None
    thinking: Thinking = Field(default_factory=Thinking)
    scoring: Optional[ScoringBreakdown] = None
    innovation_score: ScoreBlock = Field(default_factory=ScoreBlock)
    market_score: ScoreBlock = Field(default_factory=ScoreBlock)
    strengths: List[Strength] = Field(default_factory=list)
    concerns: List[Concern] = Field(default_factory=list)
    next_steps: List[NextStep] = Field(default_factory=list)
    verdict: Optional[str] = None
    investor_signal: Optional[str] = None
    recommendation: Optional[str] = None


# ── Final report ────────────────────────────────────────────────────────


class ScoreBreakdown(CamelModel):
    score: int = Field(..., ge=0, le=100)
    reasoning: str
    improvements: str
    breakdown: Optional[Dict[str, BreakdownItem]] = None


class OverallRating(CamelModel):
    score: int = Field(..., ge=0, le=100)
    verdict: str
    competitive_context: str
    investor_signal: str


class SearchStats(CamelModel):
    total_queries: int
    total_results: int
    unique_sources: int
    search_log: List[SearchLogEntry] = Field(default_factory=list)


class ProjectSummary(CamelModel):
    what_it_is: str
    who_its_for: str
    problem_solved: str
    business_model: str
    competitive_edge: str


class WebResearch(CamelModel):
    competitors_found: List[str] = Field(default_factory=list)
    competitor_details: List[CompetitorDetail] = Field(default_factory=list)
    market_growth: str
    market_size_validation: str
    trend_signals: List[str] = Field(default_factory=list)
    existing_products_found: int
    product_hunt_matches: int
    github_matches: int
    total_search_queries: int
    total_results_analyzed: int
    search_source: str


class EvaluationResult(CamelModel):
    """Complete evaluation report for one submission."""

    project_title: str
    industry: str
    research_summary: Optional[ResearchSummary] = None
    scoring: Optional[ScoringBreakdown] = None
    recommendation: Optional[str] = None
    search_stats: SearchStats
    thinking: Thinking
    summary: ProjectSummary
    strengths: List[Strength] = Field(default_factory=list)
    concerns: List[Concern] = Field(default_factory=list)
    innovation_score: ScoreBreakdown
    market_potential_score: ScoreBreakdown
    overall_rating: OverallRating
    next_steps: List[NextStep] = Field(default_factory=list)
    web_research: WebResearch
    analysis_source: Literal["llm", "local"] = Field(
        ..., description="Which scorer produced the analysis"
    )
