"""LLM scorer tests — prompt rendering, JSON decoding, silent fallback.

The OpenAI endpoint is replaced by an ``httpx.MockTransport``; no network.
"""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import asyncio
import json

import httpx
import pytest
from pydantic import ValidationError

from ideajudge.config import Settings
from ideajudge.schemas.search_schema import SearchResult, TaggedSearchResult
from ideajudge.schemas.submission_schema import ProjectSubmission
from ideajudge.services.llm_scorer import (
    build_search_context,
    build_user_prompt,
    parse_analysis,
    score_with_llm,
)
from ideajudge.services.openai_client import sanitize_json
from ideajudge.services.signal_extractor import compile_signals

LLM_SETTINGS = Settings(openai_api_key="sk-test", search_delay_seconds=0)

GOOD_ANALYSIS = {
    "thinking": {
        "whatThisIs": "A task manager",
        "isTheProblemReal": "Yes",
        "competitorComparison": "Asana and Trello dominate",
        "marketTiming": "Good",
    },
    "innovationScore": {"score": 72, "reasoning": "Some differentiation", "improvements": "Niche down"},
    "marketScore": {"score": 64.5},
    "strengths": [{"title": "AI angle", "description": "Uses LLM planning"}],
    "verdict": "PROMISING",
    "investorSignal": "MEDIUM",
    "recommendation": "Worth a pilot.",
}


def _submission():
    return ProjectSubmission(
        projectTitle="TaskPilot",
        coreIdea="AI-powered task manager",
        targetAudience="remote teams",
        businessModel="$10/month subscription",
    )


def _signals():
    def tagged(category, title, snippet="", url=""):
        return TaggedSearchResult.from_result(
            SearchResult(title=title, snippet=snippet, url=url, source="google"),
            category=category,
            query="q",
        )

    return compile_signals([
        tagged("competitors", "Asana vs Trello: The Best Tool", "x" * 300),
        tagged("market_size", "Task software", "$8.5B market, 12% CAGR"),
        tagged("trends", "Outlook", "growing demand"),
        tagged("startups", "TaskPilot on PH", url="https://www.producthunt.com/posts/taskpilot"),
        tagged("problem", "Pain", "p" * 120),
    ])


def _openai_transport(content=None, status_code=200, calls=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(json.loads(request.content))
        if status_code != 200:
            return httpx.Response(status_code, json={"error": {"message": "boom"}})
        return httpx.Response(
            200,
            json={"choices": [{"message": {"content": content}}], "usage": {"prompt_tokens": 1}},
        )

    return httpx.MockTransport(handler)


class TestSanitizeJson:
    def test_code_fence(self):
        assert json.loads(sanitize_json('```json\n{"a": 1}\n```')) == {"a": 1}

    def test_prose_and_trailing_comma(self):
        raw = 'Here you go:\n{"a": [1, 2,], "b": 3,}\nThanks!'
        assert json.loads(sanitize_json(raw)) == {"a": [1, 2], "b": 3}

    def test_no_object(self):
        with pytest.raises(ValueError):
            sanitize_json("no json here")


class TestParseAnalysis:
    def test_defaults_for_missing_fields(self):
        analysis = parse_analysis("{}")
        assert analysis.innovation_score.score == 50
        assert analysis.market_score.reasoning == "See breakdown"
        assert analysis.thinking.competitor_comparison == "See research"
        assert analysis.strengths == []
        assert analysis.verdict is None

    def test_null_fields_take_defaults(self):
        analysis = parse_analysis('{"thinking": null, "strengths": null, "marketScore": null}')
        assert analysis.thinking.market_timing == "Neutral"
        assert analysis.strengths == []
        assert analysis.market_score.score == 50

    def test_nested_nulls_take_defaults(self):
        analysis = parse_analysis(json.dumps({
            "innovationScore": {"score": None, "reasoning": None},
            "marketScore": {"score": 64, "improvements": None},
            "researchSummary": {
                "marketSizeFound": None,
                "competitorsFound": None,
                "similarOnGithub": None,
                "competitorDetails": [{"name": "Asana", "threat": None}],
            },
            "scoring": {"innovationBreakdown": {"novelty": None, "fit": {"points": None}}},
            "nextSteps": [{"action": "Ship", "priority": None}],
        }))
        assert analysis.innovation_score.score == 50
        assert analysis.innovation_score.reasoning == "See breakdown"
        assert analysis.market_score.score == 64
        assert analysis.market_score.improvements == "See recommendations"
        summary = analysis.research_summary
        assert summary.market_size_found == "Not found"
        assert summary.competitors_found == []
        assert summary.similar_on_github == 0
        assert summary.competitor_details[0].threat == "medium"
        assert list(analysis.scoring.innovation_breakdown) == ["fit"]
        assert analysis.scoring.innovation_breakdown["fit"].points == 0
        assert analysis.next_steps[0].priority == "NICE"

    def test_numeric_scores_are_rounded(self):
        analysis = parse_analysis(json.dumps(GOOD_ANALYSIS))
        assert analysis.innovation_score.score == 72
        assert analysis.market_score.score == 65

    def test_schema_violation(self):
        with pytest.raises(ValidationError):
            parse_analysis('{"innovationScore": {"score": "very high"}}')

    def test_not_an_object(self):
        with pytest.raises(ValueError):
            parse_analysis("[1, 2, 3]")


class TestPrompt:
    def test_context_counters_and_truncation(self):
        context = build_search_context(_signals())
        assert "--- COMPETITORS (1 results) ---" in context
        assert "Found companies: Asana, Trello, Tool" in context
        assert "Found numbers: $8.5b" in context
        assert "Growth rates: 12%" in context
        assert "Trend signals: growing" in context
        assert "ProductHunt matches: 1" in context
        assert "Problem validated: YES" in context
        assert "x" * 200 in context
        assert "x" * 201 not in context

    def test_user_prompt_embeds_literal_counters(self):
        prompt = build_user_prompt(_submission(), _signals(), "AI/ML")
        assert "Name: TaskPilot" in prompt
        assert "Problem solved: Not specified" in prompt
        assert '"totalResultsAnalyzed": 5' in prompt
        assert '"similarOnProductHunt": 1' in prompt
        assert '"problemValidated": true' in prompt


class TestScoreWithLlm:
    def test_llm_success(self):
        calls = []
        transport = _openai_transport(json.dumps(GOOD_ANALYSIS), calls=calls)
        analysis, source = asyncio.run(
            score_with_llm(_submission(), _signals(), "AI/ML", LLM_SETTINGS, transport=transport)
        )
        assert source == "llm"
        assert analysis.innovation_score.score == 72
        assert analysis.verdict == "PROMISING"

        payload = calls[0]
        assert payload["model"] == "gpt-4o"
        assert payload["temperature"] == 0.7
        assert payload["max_tokens"] == 4000
        assert payload["response_format"] == {"type": "json_object"}
        assert [m["role"] for m in payload["messages"]] == ["system", "user"]

    def test_fenced_output_is_accepted(self):
        transport = _openai_transport("```json\n" + json.dumps(GOOD_ANALYSIS) + "\n```")
        _, source = asyncio.run(
            score_with_llm(_submission(), _signals(), "AI/ML", LLM_SETTINGS, transport=transport)
        )
        assert source == "llm"

    def test_http_error_falls_back_without_retry(self):
        calls = []
        transport = _openai_transport(status_code=500, calls=calls)
        analysis, source = asyncio.run(
            score_with_llm(_submission(), _signals(), "AI/ML", LLM_SETTINGS, transport=transport)
        )
        assert source == "local"
        assert len(calls) == 1
        assert analysis.scoring is not None

    def test_malformed_json_falls_back(self):
        transport = _openai_transport("I think this project is great!")
        _, source = asyncio.run(
            score_with_llm(_submission(), _signals(), "AI/ML", LLM_SETTINGS, transport=transport)
        )
        assert source == "local"

    def test_nested_null_keeps_llm_analysis(self):
        body = dict(GOOD_ANALYSIS, innovationScore={"score": 72, "reasoning": None})
        transport = _openai_transport(json.dumps(body))
        analysis, source = asyncio.run(
            score_with_llm(_submission(), _signals(), "AI/ML", LLM_SETTINGS, transport=transport)
        )
        assert source == "llm"
        assert analysis.innovation_score.score == 72
        assert analysis.innovation_score.reasoning == "See breakdown"

    def test_schema_violation_falls_back(self):
        transport = _openai_transport('{"marketScore": {"score": [1, 2]}}')
        _, source = asyncio.run(
            score_with_llm(_submission(), _signals(), "AI/ML", LLM_SETTINGS, transport=transport)
        )
        assert source == "local"

    def test_empty_content_falls_back(self):
        transport = _openai_transport("")
        _, source = asyncio.run(
            score_with_llm(_submission(), _signals(), "AI/ML", LLM_SETTINGS, transport=transport)
        )
        assert source == "local"

    def test_timeout_falls_back(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        _, source = asyncio.run(
            score_with_llm(
                _submission(), _signals(), "AI/ML", LLM_SETTINGS,
                transport=httpx.MockTransport(handler),
            )
        )
        assert source == "local"

    @pytest.mark.parametrize("key", ["", "not-an-openai-key"])
    def test_missing_or_invalid_key_uses_local(self, key):
        def handler(request):
            raise AssertionError("OpenAI must not be called")

        _, source = asyncio.run(
            score_with_llm(
                _submission(), _signals(), "AI/ML", Settings(openai_api_key=key),
                transport=httpx.MockTransport(handler),
            )
        )
        assert source == "local"
