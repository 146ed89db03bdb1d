"""Query planner tests — keyword extraction, industry detection, batch plan."""

import os
import sys

# Ensure the backend package is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from ideajudge.schemas.submission_schema import ProjectSubmission
from ideajudge.services.query_builder import (
    build_query_plan,
    detect_industry,
    extract_keywords,
)


def _submission(**overrides):
    data = {
        "projectTitle": "TaskPilot",
        "coreIdea": "AI-powered task manager",
        "targetAudience": "remote teams",
        "businessModel": "$10/month subscription",
    }
    data.update(overrides)
    return ProjectSubmission(**data)


class TestExtractKeywords:
    def test_strips_punctuation_and_short_words(self):
        assert extract_keywords("AI-powered task manager") == "aipowered task manager"

    def test_drops_stop_words(self):
        assert extract_keywords("This is the tool for that team") == "tool team"

    def test_keeps_first_four_in_input_order(self):
        text = "smart budget planner helps families track spending habits"
        assert extract_keywords(text) == "smart budget planner helps"

    def test_dutch_articles_are_stop_words(self):
        assert extract_keywords("een slimme planner voor het team") == "slimme planner team"

    def test_empty_text(self):
        assert extract_keywords("") == ""


class TestDetectIndustry:
    def test_first_match_wins(self):
        # "ai" and "pay" both match; AI/ML is checked first.
        assert detect_industry("AI payment assistant") == "AI/ML"

    def test_substring_matching(self):
        # "email" contains "ai".
        assert detect_industry("Email newsletter builder") == "AI/ML"

    def test_fintech(self):
        assert detect_industry("Crypto wallet for students") == "Fintech"

    def test_later_categories(self):
        assert detect_industry("Video editing for creators") == "Creator Economy"
        assert detect_industry("Board game night organiser") == "Gaming"

    def test_default(self):
        assert detect_industry("Plant watering reminder") == "SaaS/Technology"


class TestBuildQueryPlan:
    def test_twenty_queries_without_unique_approach(self):
        plan = build_query_plan(_submission())
        assert plan.total_queries == 20
        assert [b.category for b in plan.batches] == [
            "competitors", "exact_match", "market_size",
            "trends", "startups", "problem",
        ]

    def test_uniqueness_batch_when_approach_given(self):
        plan = build_query_plan(_submission(uniqueApproach="voice-first"))
        assert plan.total_queries == 22
        assert plan.batches[-1].category == "uniqueness"
        assert plan.batches[-1].queries == [
            "voice-first aipowered task manager",
            "voice-first technology innovation",
        ]

    def test_literal_templates(self):
        plan = build_query_plan(_submission())
        by_category = {b.category: b.queries for b in plan.batches}

        assert plan.industry == "AI/ML"
        assert plan.keywords == "aipowered task manager"
        assert by_category["competitors"] == [
            "AI-powered task manager competitors",
            "AI-powered task manager alternatives 2024",
            "best aipowered task manager tools apps",
            "aipowered task manager vs comparison",
        ]
        assert by_category["exact_match"][0] == '"TaskPilot" startup'
        assert by_category["exact_match"][1] == '"AI-powered task manager"'
        assert by_category["market_size"][2] == "remote teams market opportunity billion"
        assert by_category["startups"][0] == "site:producthunt.com aipowered task manager"

    def test_problem_falls_back_to_core_idea(self):
        plan = build_query_plan(_submission())
        assert plan.problem_keywords == plan.keywords

        plan = build_query_plan(_submission(problemSolved="Scattered meeting notes"))
        assert plan.problem_keywords == "scattered meeting notes"
        problem_queries = plan.batches[5].queries
        assert problem_queries[-1] == "scattered meeting notes solution market need"

    def test_deterministic(self):
        assert build_query_plan(_submission()) == build_query_plan(_submission())
