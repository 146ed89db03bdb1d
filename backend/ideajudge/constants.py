"""Centralized constants shared across the judge pipeline.

This module is the SINGLE SOURCE OF TRUTH for the industry taxonomy,
search categories, heuristic vocabularies and verdict ladders.  Reused by:
  - Query planner
  - Signal extractor
  - Local and LLM scorers
  - Result assembler
"""

from __future__ import annotations

import re

# ── Industry Taxonomy ───────────────────────────────────────────────────
# ORDER MATTERS: the first matching pattern wins.  Patterns run against the
# lowercased core idea and are plain substring regexes ("ai" also matches
# "email"), which is part of the detection contract.

INDUSTRY_PATTERNS: list[tuple[str, re.Pattern[str]]] = [
    ("AI/ML", re.compile(r"ai|gpt|machine|automat|intelligent")),
    ("Fintech", re.compile(r"financ|pay|bank|crypto|invest|money")),
    ("Healthtech", re.compile(r"health|fit|medic|wellness|doctor")),
    ("Edtech", re.compile(r"learn|education|course|train|student")),
    ("E-commerce", re.compile(r"shop|store|ecommerce|retail|sell")),
    ("Productivity", re.compile(r"task|project|productiv|work|team")),
    ("Social", re.compile(r"social|community|network|connect")),
    ("Creator Economy", re.compile(r"video|content|creator|media")),
    ("Gaming", re.compile(r"game|gaming|play")),
    ("FoodTech", re.compile(r"food|restaurant|delivery")),
]

DEFAULT_INDUSTRY: str = "SaaS/Technology"

# ── Search Categories ───────────────────────────────────────────────────
# Category tags attached to every search result, in execution order.

CATEGORY_COMPETITORS = "competitors"
CATEGORY_EXACT_MATCH = "exact_match"
CATEGORY_MARKET_SIZE = "market_size"
CATEGORY_TRENDS = "trends"
CATEGORY_STARTUPS = "startups"
CATEGORY_PROBLEM = "problem"
CATEGORY_UNIQUENESS = "uniqueness"

# ── Keyword extraction ──────────────────────────────────────────────────
# English function words plus Dutch articles.

KEYWORD_STOP_WORDS: frozenset[str] = frozenset(
    {
        "the", "a", "an", "and", "or", "for", "to", "in", "on", "with",
        "that", "this", "is", "are",
        "de", "het", "een", "en", "van", "voor",
    }
)

MAX_KEYWORDS: int = 4

# ── Company-name heuristic ──────────────────────────────────────────────
# Capitalised words that are never treated as a company name.

COMPANY_NAME_EXCLUSIONS: frozenset[str] = frozenset(
    {
        "The", "And", "For", "How", "What", "Best", "Top", "New", "Your",
        "Why", "Are", "This", "That", "With", "From", "Can", "Will", "All",
        "Get", "Find", "See", "Our", "Most", "More", "One", "Way", "Use",
    }
)

# ── Trend vocabulary ────────────────────────────────────────────────────

TREND_KEYWORDS: list[str] = [
    "growing",
    "declining",
    "emerging",
    "booming",
    "shrinking",
    "expanding",
]

POSITIVE_TREND_KEYWORDS: frozenset[str] = frozenset(
    {"growing", "booming", "expanding", "emerging"}
)

# ── Verdict ladder (rounded overall score) ──────────────────────────────
# Highest threshold first.

VERDICT_LADDER: list[tuple[int, str]] = [
    (80, "EXCEPTIONAL"),
    (70, "STRONG POTENTIAL"),
    (60, "PROMISING"),
    (50, "NEEDS WORK"),
]
VERDICT_FLOOR: str = "EARLY STAGE"

VERDICTS: frozenset[str] = frozenset(
    [label for _, label in VERDICT_LADDER] + [VERDICT_FLOOR]
)

INVESTOR_SIGNALS: frozenset[str] = frozenset({"HIGH", "MEDIUM", "LOW"})

# ── Local scorer bounds ─────────────────────────────────────────────────

LOCAL_SCORE_BASE: int = 50
LOCAL_SCORE_MIN: int = 25
LOCAL_SCORE_MAX: int = 90

# ── Search source labels ────────────────────────────────────────────────

SOURCE_LABEL_SERPER: str = "Google (Serper)"
SOURCE_LABEL_DUCKDUCKGO: str = "DuckDuckGo"
