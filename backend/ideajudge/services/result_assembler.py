"""Result Assembler.

Merges the submission, the compiled signals, the research statistics and
the scorer output into the final :class:`EvaluationResult`.

Rules
-----
- Scores are clamped to [0, 100]; overall is the half-up rounded average
- Verdict / investor signal outside the fixed label sets are recomputed
- Missing narrative text falls back to literal defaults
"""

from __future__ import annotations

from typing import List

from ..schemas.evaluation_schema import (
    AnalysisResult,
    EvaluationResult,
    OverallRating,
    ProjectSummary,
    ScoreBreakdown,
    SearchStats,
    WebResearch,
)
from ..schemas.search_schema import SearchLogEntry, TaggedSearchResult
from ..schemas.signals_schema import CompiledSignals
from ..schemas.submission_schema import ProjectSubmission
from .local_scorer import (
    clamp,
    get_investor_signal,
    get_verdict,
    is_known_investor_signal,
    is_known_verdict,
    overall_score,
)

_MAX_COMPETITORS_SHOWN = 10


def build_result(
    submission: ProjectSubmission,
    analysis: AnalysisResult,
    signals: CompiledSignals,
    industry: str,
    results: List[TaggedSearchResult],
    search_log: List[SearchLogEntry],
    search_source: str,
    analysis_source: str,
) -> EvaluationResult:
    innovation = clamp(analysis.innovation_score.score)
    market = clamp(analysis.market_score.score)
    overall = overall_score(innovation, market)

    verdict = analysis.verdict
    if not is_known_verdict(verdict):
        verdict = get_verdict(overall)
    investor_signal = analysis.investor_signal
    if not is_known_investor_signal(investor_signal):
        investor_signal = get_investor_signal(overall, innovation, market)

    scoring = analysis.scoring
    summary = analysis.research_summary
    companies = signals.competitors.companies
    numbers = signals.market_size.numbers
    trend_keywords = signals.trends.keywords

    competitors_found = (
        summary.competitors_found if summary and summary.competitors_found
        else companies
    )[:_MAX_COMPETITORS_SHOWN]

    return EvaluationResult(
        project_title=submission.project_title,
        industry=industry,
        research_summary=summary,
        scoring=scoring,
        recommendation=analysis.recommendation,
        search_stats=SearchStats(
            total_queries=len(search_log),
            total_results=len(results),
            unique_sources=len({r.source for r in results}),
            search_log=search_log,
        ),
        thinking=analysis.thinking,
        summary=ProjectSummary(
            what_it_is=submission.core_idea,
            who_its_for=submission.target_audience,
            problem_solved=submission.problem_solved or submission.core_idea,
            business_model=submission.business_model or "TBD",
            competitive_edge=analysis.thinking.competitor_comparison or "See research",
        ),
        strengths=analysis.strengths,
        concerns=analysis.concerns,
        innovation_score=ScoreBreakdown(
            score=innovation,
            reasoning=analysis.innovation_score.reasoning or "See breakdown",
            improvements=analysis.innovation_score.improvements or "See recommendations",
            breakdown=scoring.innovation_breakdown if scoring else None,
        ),
        market_potential_score=ScoreBreakdown(
            score=market,
            reasoning=analysis.market_score.reasoning or "See breakdown",
            improvements=analysis.market_score.improvements or "See recommendations",
            breakdown=scoring.market_breakdown if scoring else None,
        ),
        overall_rating=OverallRating(
            score=overall,
            verdict=verdict,
            competitive_context=f"{signals.competitors.count} competitors found in {industry}",
            investor_signal=investor_signal,
        ),
        next_steps=analysis.next_steps,
        web_research=WebResearch(
            competitors_found=competitors_found,
            competitor_details=summary.competitor_details if summary else [],
            market_growth=(
                f"{numbers[0] if numbers else 'See results'} - "
                f"{', '.join(trend_keywords) or 'neutral'}"
            ),
            market_size_validation=(
                summary.market_size_found if summary
                else (numbers[0] if numbers else "Not found")
            ),
            trend_signals=list(trend_keywords),
            existing_products_found=len(signals.exact_match.results),
            product_hunt_matches=len(signals.startups.product_hunt),
            github_matches=len(signals.startups.github),
            total_search_queries=len(search_log),
            total_results_analyzed=len(results),
            search_source=search_source,
        ),
        analysis_source=analysis_source,
    )
