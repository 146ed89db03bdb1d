# Schemas package
from .submission_schema import ProjectSubmission
from .search_schema import QueryBatch, QueryPlan, SearchLogEntry, SearchResult, TaggedSearchResult
from .signals_schema import CompiledSignals
from .evaluation_schema import AnalysisResult, EvaluationResult

__all__ = [
    "ProjectSubmission",
    "SearchResult",
    "TaggedSearchResult",
    "SearchLogEntry",
    "QueryBatch",
    "QueryPlan",
    "CompiledSignals",
    "AnalysisResult",
    "EvaluationResult",
]
