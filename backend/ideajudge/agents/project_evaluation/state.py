from typing import List, Optional, TypedDict

from ...schemas.evaluation_schema import AnalysisResult, EvaluationResult
from ...schemas.search_schema import QueryPlan, SearchLogEntry, TaggedSearchResult
from ...schemas.signals_schema import CompiledSignals
from ...schemas.submission_schema import ProjectSubmission


class EvaluationState(TypedDict):
    submission: ProjectSubmission

    # Research (plan_research → run_research)
    plan: Optional[QueryPlan]
    results: Optional[List[TaggedSearchResult]]
    search_log: Optional[List[SearchLogEntry]]
    search_source: Optional[str]

    # Signals & scoring (compile_signals → score_project)
    signals: Optional[CompiledSignals]
    analysis: Optional[AnalysisResult]
    analysis_source: Optional[str]  # "llm" or "local"

    # Final Output (populated by assemble_result)
    result: Optional[EvaluationResult]


def initial_state(submission: ProjectSubmission) -> EvaluationState:
    return EvaluationState(
        submission=submission,
        plan=None,
        results=None,
        search_log=None,
        search_source=None,
        signals=None,
        analysis=None,
        analysis_source=None,
        result=None,
    )
