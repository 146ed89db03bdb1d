"""Signal Extractor.

Sorts tagged search results into per-category buckets and derives the
heuristic signals each bucket carries (candidate company names, market
figures, trend adjectives, Product Hunt / GitHub hits, validation flags).

Rules
-----
- NO LLM calls
- NO scoring
- Single pass over the results, in input order
- Heuristics are intentionally noisy; false positives are expected and kept
"""

from __future__ import annotations

import re
from typing import Iterable, List

from ..constants import (
    CATEGORY_COMPETITORS,
    CATEGORY_EXACT_MATCH,
    CATEGORY_MARKET_SIZE,
    CATEGORY_PROBLEM,
    CATEGORY_STARTUPS,
    CATEGORY_TRENDS,
    CATEGORY_UNIQUENESS,
    COMPANY_NAME_EXCLUSIONS,
    TREND_KEYWORDS,
)
from ..schemas.search_schema import TaggedSearchResult
from ..schemas.signals_schema import CompiledSignals

_TITLE_SPLIT = re.compile(r"[\s\-|:,/]+")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]")
_CURRENCY = re.compile(r"\$[\d,.]+\s*(?:billion|million|b|m|trillion|t)", re.IGNORECASE)
_PERCENT = re.compile(r"\d+(?:\.\d+)?\s*%")

_EXACT_MATCH_MIN_CHARS = 50
_PROBLEM_SNIPPET_MIN_CHARS = 100
_UNIQUENESS_MAX_RESULTS = 3


# ===================================================================== #
#  Extraction helpers                                                     #
# ===================================================================== #

def extract_company_names(title: str) -> List[str]:
    """Capitalised words of *title* that could be company names.

    >>> extract_company_names("Asana vs Trello: The Best Tool")
    ['Asana', 'Trello', 'Tool']
    """
    names: List[str] = []
    for word in _TITLE_SPLIT.split(title or ""):
        if 2 < len(word) < 20 and word[0].isascii() and word[0].isupper():
            clean = _NON_ALNUM.sub("", word)
            if clean not in COMPANY_NAME_EXCLUSIONS and len(clean) > 2:
                names.append(clean)
    return names


def extract_currency_figures(text: str) -> List[str]:
    return _CURRENCY.findall(text)


def extract_percentages(text: str) -> List[str]:
    return _PERCENT.findall(text)


def extract_trend_keywords(text: str) -> List[str]:
    """Vocabulary words contained in *text* (substring match, not tokens)."""
    return [kw for kw in TREND_KEYWORDS if kw in text]


# ===================================================================== #
#  Public API                                                             #
# ===================================================================== #

def compile_signals(results: Iterable[TaggedSearchResult]) -> CompiledSignals:
    """Bucket *results* by category and extract every signal in one pass."""
    compiled = CompiledSignals()
    seen_companies: set[str] = set()

    for r in results:
        text = r.text

        if r.category == CATEGORY_COMPETITORS:
            compiled.competitors.results.append(r)
            for name in extract_company_names(r.title):
                if name not in seen_companies:
                    seen_companies.add(name)
                    compiled.competitors.companies.append(name)

        elif r.category == CATEGORY_EXACT_MATCH:
            compiled.exact_match.results.append(r)
            if len(text) > _EXACT_MATCH_MIN_CHARS:
                compiled.exact_match.found = True

        elif r.category == CATEGORY_MARKET_SIZE:
            compiled.market_size.results.append(r)
            compiled.market_size.numbers.extend(extract_currency_figures(text))
            compiled.market_size.growth.extend(extract_percentages(text))

        elif r.category == CATEGORY_TRENDS:
            compiled.trends.results.append(r)
            compiled.trends.keywords.extend(extract_trend_keywords(text))

        elif r.category == CATEGORY_STARTUPS:
            compiled.startups.results.append(r)
            if "producthunt" in r.url:
                compiled.startups.product_hunt.append(r)
            if "github" in r.url:
                compiled.startups.github.append(r)

        elif r.category == CATEGORY_PROBLEM:
            compiled.problem.results.append(r)
            if len(r.snippet) > _PROBLEM_SNIPPET_MIN_CHARS:
                compiled.problem.validated = True

        elif r.category == CATEGORY_UNIQUENESS:
            compiled.uniqueness.results.append(r)
            # Checked at insertion time and never reset.
            if len(compiled.uniqueness.results) < _UNIQUENESS_MAX_RESULTS:
                compiled.uniqueness.validated = True

    print(
        f"📊 [SIGNALS] {compiled.total_results} results — "
        f"{compiled.competitors.count} companies, "
        f"{len(compiled.market_size.numbers)} market figures, "
        f"{len(compiled.trends.keywords)} trend signals"
    )
    return compiled
