"""
Project Judge

Wires the research pipeline into a LangGraph run and exposes the single
``evaluate(submission)`` entry point used by the HTTP layer.

Every call gets its own ResearchOrchestrator; the judge itself only holds
process-wide collaborators (settings, search provider, LLM transport).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ...config import Settings, get_settings
from ...schemas.evaluation_schema import EvaluationResult
from ...schemas.submission_schema import ProjectSubmission
from ...services.llm_scorer import score_with_llm
from ...services.query_builder import build_query_plan
from ...services.research_orchestrator import ResearchOrchestrator
from ...services.result_assembler import build_result
from ...services.search_provider import SearchProvider, WebSearchProvider
from ...services.signal_extractor import compile_signals
from .graph import create_evaluation_graph
from .state import EvaluationState, initial_state
from .timing import log_timing, timed_stage

logger = logging.getLogger(__name__)


class ProjectJudge:
    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[SearchProvider] = None,
        llm_transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.provider = provider or WebSearchProvider(self.settings)
        self.llm_transport = llm_transport
        self.graph = create_evaluation_graph(self).compile()

    # ------------------------------------------------------------------ #
    #  Graph nodes                                                         #
    # ------------------------------------------------------------------ #

    async def plan_research(self, state: EvaluationState) -> Dict[str, Any]:
        submission = state["submission"]
        plan = build_query_plan(submission)
        print(f"\n📋 [JUDGE] Project: {submission.project_title}")
        print(f"🏷️ [JUDGE] Industry: {plan.industry}")
        print(f"🔑 [JUDGE] Keywords: {plan.keywords}")
        print(f"🔍 [JUDGE] {plan.total_queries} queries planned via {self.provider.name}")
        return {"plan": plan}

    async def run_research(self, state: EvaluationState) -> Dict[str, Any]:
        orchestrator = ResearchOrchestrator(self.provider, self.settings)
        async with timed_stage("run_research"):
            await orchestrator.run(state["plan"].batches)

        stats = orchestrator.stats()
        print(
            f"📊 [RESEARCH] queries={stats['total_queries']}, "
            f"results={stats['total_results']}, unique urls={stats['unique_urls']}"
        )
        return {
            "results": orchestrator.results,
            "search_log": orchestrator.search_log,
            "search_source": self.provider.name,
        }

    async def compile_research(self, state: EvaluationState) -> Dict[str, Any]:
        return {"signals": compile_signals(state["results"])}

    async def score_project(self, state: EvaluationState) -> Dict[str, Any]:
        async with timed_stage("score_project"):
            analysis, source = await score_with_llm(
                state["submission"],
                state["signals"],
                state["plan"].industry,
                self.settings,
                transport=self.llm_transport,
            )
        return {"analysis": analysis, "analysis_source": source}

    async def assemble_result(self, state: EvaluationState) -> Dict[str, Any]:
        result = build_result(
            state["submission"],
            state["analysis"],
            state["signals"],
            state["plan"].industry,
            state["results"],
            state["search_log"],
            state["search_source"],
            state["analysis_source"],
        )
        rating = result.overall_rating
        print(
            f"🏁 [JUDGE] {result.project_title}: {rating.score} {rating.verdict} "
            f"(investor signal {rating.investor_signal}, {result.analysis_source})"
        )
        return {"result": result}

    # ------------------------------------------------------------------ #
    #  Entry point                                                         #
    # ------------------------------------------------------------------ #

    async def evaluate(self, submission: ProjectSubmission) -> EvaluationResult:
        """Research, score and report on one submission."""
        async with timed_stage("evaluate"):
            final_state = await self.graph.ainvoke(initial_state(submission))
        return final_state["result"]


async def evaluate_project(
    submission: ProjectSubmission,
    settings: Optional[Settings] = None,
) -> EvaluationResult:
    """Evaluate *submission* with a judge built from *settings*."""
    return await ProjectJudge(settings=settings).evaluate(submission)
