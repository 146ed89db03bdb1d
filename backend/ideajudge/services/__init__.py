from .query_builder import build_query_plan
from .search_provider import SearchProvider, WebSearchProvider
from .research_orchestrator import ResearchOrchestrator
from .signal_extractor import compile_signals
from .llm_scorer import score_with_llm
from .local_scorer import local_analysis
from .result_assembler import build_result

__all__ = [
    "build_query_plan",
    "SearchProvider",
    "WebSearchProvider",
    "ResearchOrchestrator",
    "compile_signals",
    "score_with_llm",
    "local_analysis",
    "build_result",
]
