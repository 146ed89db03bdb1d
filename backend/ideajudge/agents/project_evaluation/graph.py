from __future__ import annotations

from typing import TYPE_CHECKING

from langgraph.graph import END, START, StateGraph

from .state import EvaluationState
from .timing import log_timing

if TYPE_CHECKING:
    from .judge import ProjectJudge


def create_evaluation_graph(judge: "ProjectJudge") -> StateGraph:
    """
    Create the evaluation pipeline graph for one judge.

    Structure:
    START -> plan_research
          -> run_research      (sequential, paced web search)
          -> compile_signals
          -> score_project     (LLM, local fallback)
          -> assemble_result
          -> END

    Nodes are the judge's bound coroutines, so the compiled graph shares the
    judge's settings and search provider but holds no per-run state.
    """
    log_timing("graph", "building evaluation graph")

    graph = StateGraph(EvaluationState)

    graph.add_node("plan_research", judge.plan_research)
    graph.add_node("run_research", judge.run_research)
    graph.add_node("compile_signals", judge.compile_research)
    graph.add_node("score_project", judge.score_project)
    graph.add_node("assemble_result", judge.assemble_result)

    graph.add_edge(START, "plan_research")
    graph.add_edge("plan_research", "run_research")
    graph.add_edge("run_research", "compile_signals")
    graph.add_edge("compile_signals", "score_project")
    graph.add_edge("score_project", "assemble_result")
    graph.add_edge("assemble_result", END)

    return graph
