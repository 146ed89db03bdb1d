"""Deterministic Query & Keyword Builder.

Converts a ProjectSubmission into a QueryPlan: the detected industry, the
keyword strings, and the seven category-tagged query batches executed by
the research orchestrator.

Rules
-----
- NO LLM calls
- NO randomness
- NO external API calls
- Pure transformation: same input → same output
- Queries are literal templates; their text and order are part of the
  research contract and must not be "improved"
"""

from __future__ import annotations

import re
from typing import List

from ..constants import (
    CATEGORY_COMPETITORS,
    CATEGORY_EXACT_MATCH,
    CATEGORY_MARKET_SIZE,
    CATEGORY_PROBLEM,
    CATEGORY_STARTUPS,
    CATEGORY_TRENDS,
    CATEGORY_UNIQUENESS,
    DEFAULT_INDUSTRY,
    INDUSTRY_PATTERNS,
    KEYWORD_STOP_WORDS,
    MAX_KEYWORDS,
)
from ..schemas.search_schema import QueryBatch, QueryPlan
from ..schemas.submission_schema import ProjectSubmission

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")


# ===================================================================== #
#  Keyword & industry helpers                                             #
# ===================================================================== #

def extract_keywords(text: str) -> str:
    """Return up to four significant words of *text*, space-joined.

    Lowercases, strips everything but ``[a-z0-9]`` and whitespace, drops
    stop-words and words of three characters or fewer.  Input order is kept
    (no frequency ranking).
    """
    cleaned = _NON_ALNUM.sub("", (text or "").lower())
    words = [
        w for w in cleaned.split()
        if len(w) > 3 and w not in KEYWORD_STOP_WORDS
    ]
    return " ".join(words[:MAX_KEYWORDS])


def detect_industry(text: str) -> str:
    """Return the first industry whose pattern matches *text*."""
    lowered = (text or "").lower()
    for industry, pattern in INDUSTRY_PATTERNS:
        if pattern.search(lowered):
            return industry
    return DEFAULT_INDUSTRY


# ===================================================================== #
#  Public API                                                             #
# ===================================================================== #

def build_query_plan(submission: ProjectSubmission) -> QueryPlan:
    """Build the research plan for *submission*.

    Returns
    -------
    QueryPlan
        Industry, keywords and 6 or 7 batches (20 queries, plus 2 uniqueness
        queries when the submission states a unique approach).
    """
    idea = submission.core_idea
    problem = submission.problem_solved or idea
    uniqueness = submission.unique_approach
    audience = submission.target_audience
    title = submission.project_title

    industry = detect_industry(idea)
    keywords = extract_keywords(idea)
    problem_keywords = extract_keywords(problem)

    batches: List[QueryBatch] = [
        QueryBatch(
            category=CATEGORY_COMPETITORS,
            queries=[
                f"{idea} competitors",
                f"{idea} alternatives 2024",
                f"best {keywords} tools apps",
                f"{keywords} vs comparison",
            ],
        ),
        QueryBatch(
            category=CATEGORY_EXACT_MATCH,
            queries=[
                f'"{title}" startup',
                f'"{idea}"',
                f"{keywords} app startup product",
            ],
        ),
        QueryBatch(
            category=CATEGORY_MARKET_SIZE,
            queries=[
                f"{industry} market size 2024",
                f"{industry} TAM SAM SOM",
                f"{audience} market opportunity billion",
                f"{industry} industry revenue 2024",
            ],
        ),
        QueryBatch(
            category=CATEGORY_TRENDS,
            queries=[
                f"{industry} trends 2024 2025",
                f"{industry} growth forecast",
                f"{industry} future outlook emerging",
            ],
        ),
        QueryBatch(
            category=CATEGORY_STARTUPS,
            queries=[
                f"site:producthunt.com {keywords}",
                f"site:github.com {keywords}",
                f"{keywords} YC startup funding",
            ],
        ),
        QueryBatch(
            category=CATEGORY_PROBLEM,
            queries=[
                f"{audience} problems challenges pain points",
                f"why {keywords} important needed",
                f"{problem_keywords} solution market need",
            ],
        ),
    ]

    if uniqueness:
        batches.append(
            QueryBatch(
                category=CATEGORY_UNIQUENESS,
                queries=[
                    f"{uniqueness} {keywords}",
                    f"{uniqueness} technology innovation",
                ],
            )
        )

    return QueryPlan(
        industry=industry,
        keywords=keywords,
        problem_keywords=problem_keywords,
        batches=batches,
    )
