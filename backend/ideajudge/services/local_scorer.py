"""Deterministic Local Scorer.

Scores a submission from its compiled research signals with fixed
additive rules.  Used whenever the LLM scorer is unavailable or fails.

Rules
-----
- NO API calls
- NO LLMs
- NO randomness
- Both scores start at 50 and are clamped to [25, 90]
- Verdict and investor signal come from the rounded average only
"""

from __future__ import annotations

import math
from typing import Dict, List, Tuple

from ..constants import (
    INVESTOR_SIGNALS,
    LOCAL_SCORE_BASE,
    LOCAL_SCORE_MAX,
    LOCAL_SCORE_MIN,
    POSITIVE_TREND_KEYWORDS,
    VERDICT_FLOOR,
    VERDICT_LADDER,
    VERDICTS,
)
from ..schemas.evaluation_schema import (
    AnalysisResult,
    BreakdownItem,
    CompetitorDetail,
    Concern,
    NextStep,
    ResearchSummary,
    ScoreBlock,
    ScoringBreakdown,
    Strength,
    Thinking,
)
from ..schemas.signals_schema import CompiledSignals
from ..schemas.submission_schema import ProjectSubmission

_MAX_STRENGTHS = 5
_MIN_STRENGTHS = 3
_MAX_NEXT_STEPS = 4


def clamp(value: int, lo: int = 0, hi: int = 100) -> int:
    """Clamp *value* to [lo, hi]."""
    return max(lo, min(hi, value))


# ===================================================================== #
#  Rating rules (shared with the result assembler)                        #
# ===================================================================== #

def round_half_up(value: float) -> int:
    """Round .5 away from zero for non-negative scores (72.5 → 73)."""
    return int(math.floor(value + 0.5))


def overall_score(innovation: int, market: int) -> int:
    return round_half_up((innovation + market) / 2)


def get_verdict(overall: int) -> str:
    for threshold, label in VERDICT_LADDER:
        if overall >= threshold:
            return label
    return VERDICT_FLOOR


def get_investor_signal(overall: int, innovation: int, market: int) -> str:
    if overall >= 75 and innovation >= 70 and market >= 70:
        return "HIGH"
    if overall >= 60 and (innovation >= 70 or market >= 70):
        return "MEDIUM"
    return "LOW"


def is_known_verdict(label: str | None) -> bool:
    return label in VERDICTS


def is_known_investor_signal(label: str | None) -> bool:
    return label in INVESTOR_SIGNALS


# ===================================================================== #
#  Score computation                                                      #
# ===================================================================== #

def _competitor_bonus(num_competitors: int) -> int:
    if num_competitors == 0:
        return 25
    if num_competitors < 3:
        return 20
    if num_competitors < 6:
        return 12
    return 5


def compute_innovation(
    submission: ProjectSubmission, signals: CompiledSignals
) -> Tuple[int, Dict[str, BreakdownItem]]:
    """Innovation score and the points each rule contributed."""
    num_competitors = signals.competitors.count
    similar = len(signals.startups.product_hunt) + len(signals.startups.github)
    uses_ai = "ai" in submission.core_idea.lower()

    breakdown = {
        "noveltyVsCompetitors": BreakdownItem(
            points=_competitor_bonus(num_competitors),
            reason=f"{num_competitors} competitors found",
        ),
        "technicalApproach": BreakdownItem(
            points=18 if uses_ai else 0,
            reason="AI in the core idea" if uses_ai else "No AI component",
        ),
        "differentiation": BreakdownItem(
            points=10 if similar < 3 else 0,
            reason=f"{similar} similar projects on Product Hunt / GitHub",
        ),
    }
    raw = LOCAL_SCORE_BASE + sum(item.points for item in breakdown.values())
    return clamp(raw, LOCAL_SCORE_MIN, LOCAL_SCORE_MAX), breakdown


def compute_market(
    submission: ProjectSubmission, signals: CompiledSignals
) -> Tuple[int, Dict[str, BreakdownItem]]:
    """Market score and the points each rule contributed."""
    numbers = signals.market_size.numbers
    growth = signals.market_size.growth
    num_competitors = signals.competitors.count
    is_growing = any(k in POSITIVE_TREND_KEYWORDS for k in signals.trends.keywords)
    has_pricing = "$" in submission.business_model

    if any("billion" in n.lower() or "b" in n.lower() for n in numbers):
        size_points = 25
    elif numbers:
        size_points = 15
    else:
        size_points = 0

    breakdown = {
        "marketSize": BreakdownItem(
            points=size_points, reason=numbers[0] if numbers else "No data"
        ),
        "growthRate": BreakdownItem(
            points=10 if is_growing else 0,
            reason=growth[0] if growth else "No data",
        ),
        "competitiveLandscape": BreakdownItem(
            points=15 if num_competitors < 5 else 0,
            reason=f"{num_competitors} players",
        ),
        "businessModel": BreakdownItem(
            points=20 if has_pricing else 0,
            reason="Explicit pricing" if has_pricing else "No pricing stated",
        ),
    }
    raw = LOCAL_SCORE_BASE + sum(item.points for item in breakdown.values())
    return clamp(raw, LOCAL_SCORE_MIN, LOCAL_SCORE_MAX), breakdown


# ===================================================================== #
#  Narrative                                                              #
# ===================================================================== #

def _strengths(
    submission: ProjectSubmission,
    signals: CompiledSignals,
    innovation: int,
    market: int,
) -> List[Strength]:
    num_competitors = signals.competitors.count
    strengths = [
        Strength(
            title="Research done",
            description=f"{signals.total_results} data points analyzed",
        )
    ]
    if num_competitors < 5:
        strengths.append(Strength(
            title="Limited competition",
            description=f"{num_competitors} direct competitors",
        ))
    if innovation >= 70:
        strengths.append(Strength(
            title="Strong Innovation",
            description="Your approach shows clear differentiation from existing solutions",
        ))
    if market >= 70:
        strengths.append(Strength(
            title="Solid Market Opportunity",
            description="Target market is well-defined with clear monetization path",
        ))
    if submission.has_links:
        strengths.append(Strength(
            title="Proof of Execution",
            description="Technical progress demonstrated with working artifacts",
        ))
    if len(submission.team_experience) > 30:
        strengths.append(Strength(
            title="Experienced Team",
            description="Team background adds credibility to execution",
        ))
    if "$" in submission.business_model:
        strengths.append(Strength(
            title="Defined Pricing",
            description="Clear revenue model with specific pricing",
        ))
    if len(strengths) < _MIN_STRENGTHS:
        strengths.append(Strength(
            title="Problem Awareness",
            description="Shows understanding of customer pain points",
        ))
    return strengths[:_MAX_STRENGTHS]


def _concerns(signals: CompiledSignals) -> List[Concern]:
    concerns: List[Concern] = []
    if signals.competitors.count > 5:
        concerns.append(Concern(issue="Crowded market", suggestion="Focus on a niche"))
    if not signals.market_size.numbers:
        concerns.append(Concern(
            issue="No market data found",
            suggestion="Back the opportunity with a sourced market-size figure",
        ))
    if not signals.problem.validated:
        concerns.append(Concern(
            issue="Problem not validated by research",
            suggestion="Collect evidence that the target audience feels this pain",
        ))
    return concerns


def _next_steps(
    submission: ProjectSubmission, innovation: int, market: int
) -> List[NextStep]:
    steps: List[NextStep] = []
    if innovation < 65:
        steps.append(NextStep(
            priority="URGENT",
            action="Strengthen your unique differentiator",
            impact="Could boost innovation score by 15-20 points",
        ))
    if market < 65:
        steps.append(NextStep(
            priority="URGENT",
            action="Conduct 10 customer discovery interviews",
            impact="Will validate market demand and refine positioning",
        ))
    if not submission.has_links:
        steps.append(NextStep(
            priority="URGENT",
            action="Build and share a working MVP or prototype",
            impact="Adds credibility and demonstrates execution ability",
        ))
    if not submission.market_size:
        steps.append(NextStep(
            priority="NICE",
            action="Research and document TAM/SAM/SOM",
            impact="Strengthens investor pitch and market positioning",
        ))
    if not submission.team_experience:
        steps.append(NextStep(
            priority="NICE",
            action="Document team background and relevant experience",
            impact="Builds trust with investors and partners",
        ))
    steps.append(NextStep(
        priority="NICE",
        action="Create a competitive analysis matrix",
        impact="Shows strategic awareness and helps refine positioning",
    ))
    return steps[:_MAX_NEXT_STEPS]


# ===================================================================== #
#  Public API                                                             #
# ===================================================================== #

def local_analysis(
    submission: ProjectSubmission,
    signals: CompiledSignals,
    industry: str,
) -> AnalysisResult:
    """Score *submission* from *signals* without any external call."""
    innovation, innovation_breakdown = compute_innovation(submission, signals)
    market, market_breakdown = compute_market(submission, signals)
    overall = overall_score(innovation, market)

    companies = signals.competitors.companies
    num_competitors = signals.competitors.count
    similar = len(signals.startups.product_hunt) + len(signals.startups.github)
    numbers = signals.market_size.numbers
    is_growing = any(k in POSITIVE_TREND_KEYWORDS for k in signals.trends.keywords)
    total = signals.total_results

    print(
        f"🧮 [SCORE] Local scorer — innovation={innovation}, market={market}, "
        f"overall={overall} ({industry})"
    )

    return AnalysisResult(
        research_summary=ResearchSummary(
            total_results_analyzed=total,
            competitors_found=companies[:10],
            competitor_details=[
                CompetitorDetail(
                    name=name,
                    what_they_do="Found in search results",
                    threat="high" if num_competitors > 5 else "medium",
                )
                for name in companies[:5]
            ],
            market_size_found=numbers[0] if numbers else "Not found",
            market_growth_rate=(
                signals.market_size.growth[0] if signals.market_size.growth else "Not found"
            ),
            trend_signals=list(signals.trends.keywords),
            similar_on_product_hunt=len(signals.startups.product_hunt),
            similar_on_github=len(signals.startups.github),
            problem_validated=signals.problem.validated,
        ),
        thinking=Thinking(
            what_this_is=submission.core_idea,
            is_the_problem_real=(
                "Yes, the problem appears real" if signals.problem.validated
                else "Needs validation"
            ),
            competitor_comparison=(
                f"{num_competitors} competitors found: {', '.join(companies[:4])}"
                if companies else "0 competitors found"
            ),
            market_timing=(
                "Favorable - market growing" if is_growing
                else "Neutral - needs further research"
            ),
        ),
        scoring=ScoringBreakdown(
            innovation_breakdown=innovation_breakdown,
            market_breakdown=market_breakdown,
        ),
        innovation_score=ScoreBlock(
            score=innovation,
            reasoning=f"{num_competitors} competitors, {similar} similar projects",
            improvements="Strengthen differentiation",
        ),
        market_score=ScoreBlock(
            score=market,
            reasoning=(
                f"{numbers[0] if numbers else 'Market'} with "
                f"{'growing' if is_growing else 'stable'} trend"
            ),
            improvements="Validate with customers",
        ),
        strengths=_strengths(submission, signals, innovation, market),
        concerns=_concerns(signals),
        next_steps=_next_steps(submission, innovation, market),
        verdict=get_verdict(overall),
        investor_signal=get_investor_signal(overall, innovation, market),
        recommendation=(
            f"Project assessed on {total} search results. "
            f"{num_competitors} competitors found in {industry}."
        ),
    )
