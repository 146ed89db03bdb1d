"""Signal extractor tests — company names, market figures, streaming flags."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ideajudge.schemas.search_schema import SearchResult, TaggedSearchResult
from ideajudge.services.signal_extractor import (
    compile_signals,
    extract_company_names,
    extract_currency_figures,
    extract_percentages,
    extract_trend_keywords,
)


def _tagged(category, title="", snippet="", url="", source="google"):
    return TaggedSearchResult.from_result(
        SearchResult(title=title, snippet=snippet, url=url, source=source),
        category=category,
        query=f"{category} query",
    )


class TestCompanyNames:
    def test_vs_title(self):
        names = extract_company_names("Asana vs Trello: The Best Tool")
        assert "Asana" in names
        assert "Trello" in names
        assert "The" not in names
        assert "Best" not in names

    def test_noise_is_kept(self):
        # "Tool" is not a company, but the heuristic keeps it.
        assert extract_company_names("Asana vs Trello: The Best Tool") == ["Asana", "Trello", "Tool"]

    def test_length_bounds(self):
        assert extract_company_names("AI Go Notion") == ["Notion"]
        assert extract_company_names("Supercalifragilisticexpialidocious") == []

    def test_punctuation_stripped(self):
        assert extract_company_names("Monday.com (Review)") == ["Mondaycom"]

    def test_lowercase_words_ignored(self):
        assert extract_company_names("best apps for teams") == []


class TestMarketFigures:
    def test_billion_and_percentage(self):
        text = "$1.2 billion market growing 15%"
        assert extract_currency_figures(text) == ["$1.2 billion"]
        assert extract_percentages(text) == ["15%"]

    def test_short_units_and_decimals(self):
        text = "revenue hit $8.5b in 2024, up 12.5 % from $300m"
        assert extract_currency_figures(text) == ["$8.5b", "$300m"]
        assert extract_percentages(text) == ["12.5 %"]

    def test_trend_keywords_substring(self):
        assert extract_trend_keywords("an emerging, fast-growing niche") == ["growing", "emerging"]


class TestCompileSignals:
    def test_market_size_bucket(self):
        signals = compile_signals([
            _tagged("market_size", snippet="$1.2 billion market growing 15%"),
        ])
        assert signals.market_size.numbers == ["$1.2 billion"]
        assert signals.market_size.growth == ["15%"]

    def test_currency_is_lowercased(self):
        signals = compile_signals([
            _tagged("market_size", title="Task apps worth $8.5B"),
        ])
        assert signals.market_size.numbers == ["$8.5b"]

    def test_competitor_names_are_unique_and_ordered(self):
        signals = compile_signals([
            _tagged("competitors", title="Asana vs Trello"),
            _tagged("competitors", title="Trello vs Notion"),
        ])
        assert signals.competitors.companies == ["Asana", "Trello", "Notion"]
        assert signals.competitors.count == 3

    def test_exact_match_threshold(self):
        short = compile_signals([_tagged("exact_match", title="x" * 49)])
        assert short.exact_match.found is False
        # "title snippet" is 51 characters
        longer = compile_signals([_tagged("exact_match", title="x" * 49, snippet="y")])
        assert longer.exact_match.found is True

    def test_startup_matches(self):
        signals = compile_signals([
            _tagged("startups", url="https://www.producthunt.com/posts/taskpilot"),
            _tagged("startups", url="https://github.com/acme/taskpilot"),
            _tagged("startups", url="https://example.com"),
        ])
        assert len(signals.startups.results) == 3
        assert len(signals.startups.product_hunt) == 1
        assert len(signals.startups.github) == 1

    def test_problem_validated_by_long_snippet(self):
        assert compile_signals([_tagged("problem", snippet="a" * 100)]).problem.validated is False
        assert compile_signals([_tagged("problem", snippet="a" * 101)]).problem.validated is True

    def test_trend_duplicates_allowed(self):
        signals = compile_signals([
            _tagged("trends", snippet="growing market"),
            _tagged("trends", snippet="still growing"),
        ])
        assert signals.trends.keywords == ["growing", "growing"]

    def test_uniqueness_streaming_rule(self):
        results = [_tagged("uniqueness", title=f"r{i}") for i in range(4)]

        after_three = compile_signals(results[:3])
        assert after_three.uniqueness.validated is True

        after_four = compile_signals(results)
        assert after_four.uniqueness.validated is True
        assert len(after_four.uniqueness.results) == 4

    def test_unknown_category_is_ignored(self):
        signals = compile_signals([_tagged("misc", title="Asana")])
        assert signals.total_results == 0

    def test_empty_input(self):
        signals = compile_signals([])
        assert signals.competitors.count == 0
        assert signals.uniqueness.validated is False
