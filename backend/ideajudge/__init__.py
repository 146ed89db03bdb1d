"""IdeaJudge: research-backed scoring of hackathon and startup projects."""

__version__ = "0.1.0"
