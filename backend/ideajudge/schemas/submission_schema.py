"""Project submission intake.

Every field is free text.  The three fields the HTTP boundary requires
(``projectTitle``, ``coreIdea``, ``targetAudience``) are checked by
``missing_required_fields`` rather than by the model itself, so the core
``evaluate`` entry point still accepts partial submissions.
"""

from __future__ import annotations

from typing import List
from urllib.parse import urlparse

from pydantic import AliasChoices, Field, field_validator
from pydantic.alias_generators import to_camel

from .base_schema import CamelModel

REQUIRED_FIELDS = ("project_title", "core_idea", "target_audience")


class ProjectSubmission(CamelModel):
    """A hackathon / startup project as submitted through the form."""

    project_title: str = ""
    core_idea: str = Field(
        default="",
        description="One or two sentences describing what the project does.",
    )
    problem_solved: str = Field(
        default="",
        validation_alias=AliasChoices(
            "problemSolved", "problemStatement", "problem_solved"
        ),
        description="Problem statement; falls back to the core idea when empty.",
    )
    target_audience: str = ""
    unique_approach: str = Field(
        default="",
        validation_alias=AliasChoices(
            "uniqueApproach", "competitiveAdvantage", "unique_approach"
        ),
    )
    business_model: str = ""
    market_size: str = Field(
        default="",
        description="The team's own market-size claim (free text).",
    )
    team_experience: str = ""
    tech_stack: str = ""
    github_link: str = ""
    demo_link: str = Field(
        default="",
        validation_alias=AliasChoices(
            "demoLink", "demoVideoLink", "demoUrl", "demo_link"
        ),
    )

    @field_validator("*", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        if v is None:
            return ""
        if isinstance(v, (bool, int, float)):
            return str(v)
        return v

    @field_validator("github_link", "demo_link")
    @classmethod
    def link_is_http_url(cls, v: str) -> str:
        v = v.strip()
        if not v:
            return v
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Link must be an absolute http(s) URL")
        return v

    def missing_required_fields(self) -> List[str]:
        """Return the wire names of required fields that are blank."""
        return [
            to_camel(name)
            for name in REQUIRED_FIELDS
            if not getattr(self, name).strip()
        ]

    @property
    def has_links(self) -> bool:
        return bool(self.github_link or self.demo_link)
