from .judge import ProjectJudge, evaluate_project
from .graph import create_evaluation_graph

__all__ = ["ProjectJudge", "evaluate_project", "create_evaluation_graph"]
