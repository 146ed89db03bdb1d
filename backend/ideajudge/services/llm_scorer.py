"""LLM Scorer.

Renders the compiled research into a prompt, asks the model for the fixed
JSON analysis contract and decodes the answer into an
:class:`AnalysisResult`.

Rules
-----
- Enabled only when an OpenAI key (``sk-…``) is configured
- The prompt embeds literal counters so the model never recounts
- ANY failure (call, empty body, bad JSON, schema violation) falls back to
  the local scorer silently; nothing propagates to the caller
"""

from __future__ import annotations

import json
import logging
from typing import List, Optional, Tuple

import httpx
from pydantic import ValidationError

from ..config import Settings
from ..schemas.evaluation_schema import AnalysisResult
from ..schemas.search_schema import TaggedSearchResult
from ..schemas.signals_schema import CompiledSignals
from ..schemas.submission_schema import ProjectSubmission
from .local_scorer import local_analysis
from .openai_client import complete_chat_async, sanitize_json

logger = logging.getLogger(__name__)

_SNIPPET_CHARS = 200

RESEARCH_SYSTEM_PROMPT = """You are a Research Agent for an AI Judge System. Your job is to conduct web research to evaluate hackathon project submissions.

YOUR ROLE
You analyze web search results to understand:
- What competitors exist in this space
- What the actual market size is
- What industry trends are happening
- How novel/differentiated this idea really is

HOW TO SCORE BASED ON RESEARCH

For Innovation Score:
- No competitors found? +25 points
- Competitors exist but this is differentiated? +20 points
- Uses AI/ML differently than competitors? +18 points
- Some differentiation? +12 points
- Copycat idea? +5 points

For Market Potential Score:
- TAM > $1B from research? +25 points
- TAM $100M-$1B? +20 points
- TAM $10M-$100M? +15 points
- Clear monetization model (+20)
- No or few competitors (+20)
- Market growing 20%+ annually (+10)

IMPORTANT RULES
- Be specific: Use actual company names, products, market figures FROM THE SEARCH RESULTS
- Be honest: If market is crowded, say it
- Be thorough: Analyze ALL search results carefully
- Only use data you actually found - never make things up
- Respond with a single JSON object and nothing else"""


# ===================================================================== #
#  Prompt rendering                                                       #
# ===================================================================== #

def _result_lines(results: List[TaggedSearchResult], limit: int) -> List[str]:
    lines: List[str] = []
    for i, r in enumerate(results[:limit], start=1):
        lines.append(f"{i}. {r.title}")
        lines.append(f"   {r.snippet[:_SNIPPET_CHARS]}")
    return lines


def build_search_context(signals: CompiledSignals) -> str:
    """Human-readable digest of the compiled signals for the prompt."""
    comp = signals.competitors
    market = signals.market_size
    trends = signals.trends
    startups = signals.startups
    problem = signals.problem

    lines: List[str] = [
        f"--- COMPETITORS ({len(comp.results)} results) ---",
        f"Found companies: {', '.join(comp.companies[:15]) or 'none'}",
        *_result_lines(comp.results, 8),
        "",
        f"--- MARKET SIZE ({len(market.results)} results) ---",
        f"Found numbers: {', '.join(market.numbers[:5]) or 'none'}",
        f"Growth rates: {', '.join(market.growth[:5]) or 'none'}",
        *_result_lines(market.results, 5),
        "",
        f"--- TRENDS ({len(trends.results)} results) ---",
        f"Trend signals: {', '.join(trends.keywords) or 'none'}",
        *_result_lines(trends.results, 5),
        "",
        "--- STARTUP DATABASES ---",
        f"ProductHunt matches: {len(startups.product_hunt)}",
        f"GitHub matches: {len(startups.github)}",
    ]
    for i, r in enumerate(startups.results[:5], start=1):
        tags = [t for t, hits in (("PH", startups.product_hunt), ("GH", startups.github)) if r in hits]
        suffix = f" [{'/'.join(tags)}]" if tags else ""
        lines.append(f"{i}. {r.title}{suffix}")
    lines += [
        "",
        "--- PROBLEM VALIDATION ---",
        f"Problem validated: {'YES' if problem.validated else 'UNCERTAIN'}",
    ]
    for r in problem.results[:3]:
        lines.append(f"- {r.snippet[:_SNIPPET_CHARS]}")
    lines += [
        "",
        "--- EXACT MATCHES ---",
        f"Existing products found: {len(signals.exact_match.results)}",
    ]
    return "\n".join(lines)


def build_user_prompt(
    submission: ProjectSubmission,
    signals: CompiledSignals,
    industry: str,
) -> str:
    total = signals.total_results
    startups = signals.startups
    return f"""Analyze this startup project based on REAL search results:

=== PROJECT INFO ===
Name: {submission.project_title}
What it does: {submission.core_idea}
Problem solved: {submission.problem_solved or 'Not specified'}
Target audience: {submission.target_audience}
Unique approach: {submission.unique_approach or 'Not specified'}
Business Model: {submission.business_model or 'TBD'}
Market size claim: {submission.market_size or 'Not specified'}
Team: {submission.team_experience or 'Not specified'}
Tech stack: {submission.tech_stack or 'Not specified'}
Industry: {industry}

=== SEARCH RESULTS ({total} total) ===
{build_search_context(signals)}

=== ANALYSIS TASK ===
Return JSON with:
{{
    "researchSummary": {{
        "totalResultsAnalyzed": {total},
        "competitorsFound": ["List REAL company names from search results"],
        "competitorDetails": [{{"name": "Company", "whatTheyDo": "From search", "threat": "high/medium/low"}}],
        "marketSizeFound": "Exact numbers from results or 'not found'",
        "marketGrowthRate": "Percentage from results or 'not found'",
        "trendSignals": ["Found trend keywords"],
        "similarOnProductHunt": {len(startups.product_hunt)},
        "similarOnGithub": {len(startups.github)},
        "problemValidated": {json.dumps(signals.problem.validated)}
    }},
    "thinking": {{
        "whatThisIs": "Project description",
        "isTheProblemReal": "Yes/No + explanation based on search",
        "competitorComparison": "Comparison with found competitors",
        "marketTiming": "Is timing good? Based on trends"
    }},
    "scoring": {{
        "innovationBreakdown": {{
            "noveltyVsCompetitors": {{"points": 0, "reason": "Explanation"}},
            "technicalApproach": {{"points": 0, "reason": "Explanation"}},
            "differentiation": {{"points": 0, "reason": "Explanation"}}
        }},
        "marketBreakdown": {{
            "marketSize": {{"points": 0, "reason": "Based on found TAM"}},
            "growthRate": {{"points": 0, "reason": "Based on found %"}},
            "competitiveLandscape": {{"points": 0, "reason": "Based on # competitors"}},
            "businessModel": {{"points": 0, "reason": "Explanation"}}
        }}
    }},
    "innovationScore": {{"score": 65, "reasoning": "Detailed explanation", "improvements": "Suggestions"}},
    "marketScore": {{"score": 60, "reasoning": "Detailed explanation", "improvements": "Suggestions"}},
    "strengths": [{{"title": "Strength", "description": "Based on research"}}],
    "concerns": [{{"issue": "Concern", "suggestion": "Solution"}}],
    "nextSteps": [{{"priority": "URGENT", "action": "Action", "impact": "Impact"}}],
    "verdict": "EXCEPTIONAL/STRONG POTENTIAL/PROMISING/NEEDS WORK/EARLY STAGE",
    "investorSignal": "HIGH/MEDIUM/LOW",
    "recommendation": "2-3 sentence conclusion"
}}

IMPORTANT: Use ONLY information from search results. Be specific with names and numbers."""


# ===================================================================== #
#  Decoding                                                               #
# ===================================================================== #

def parse_analysis(raw: str) -> AnalysisResult:
    """Decode raw model text into an AnalysisResult.

    Raises ValueError (bad JSON, no object) or pydantic ValidationError.
    """
    parsed = json.loads(sanitize_json(raw))
    if not isinstance(parsed, dict):
        raise ValueError("LLM output is not a JSON object")
    return AnalysisResult.model_validate(parsed)


# ===================================================================== #
#  Public API                                                             #
# ===================================================================== #

async def score_with_llm(
    submission: ProjectSubmission,
    signals: CompiledSignals,
    industry: str,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Tuple[AnalysisResult, str]:
    """Score via the LLM when configured, else (or on failure) locally.

    Returns
    -------
    (AnalysisResult, str)
        The analysis and its source, ``"llm"`` or ``"local"``.
    """
    if not settings.has_openai:
        print("🧮 [SCORE] No OpenAI key — using local scorer")
        return local_analysis(submission, signals, industry), "local"

    raw = await complete_chat_async(
        RESEARCH_SYSTEM_PROMPT,
        build_user_prompt(submission, signals, industry),
        settings.openai_max_tokens,
        settings.openai_temperature,
        settings=settings,
        transport=transport,
    )
    if raw is None:
        print("⚠️ [SCORE] LLM unavailable — falling back to local scorer")
        return local_analysis(submission, signals, industry), "local"

    try:
        analysis = parse_analysis(raw)
    except (ValueError, ValidationError) as exc:
        print(f"❌ [SCORE] LLM output rejected — falling back to local scorer: {exc}")
        logger.warning("LLM analysis could not be decoded: %s", exc)
        return local_analysis(submission, signals, industry), "local"

    print(
        f"🧠 [SCORE] LLM scorer — innovation={analysis.innovation_score.score}, "
        f"market={analysis.market_score.score}"
    )
    return analysis, "llm"
