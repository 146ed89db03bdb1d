"""Process-wide configuration.

Resolved once from the environment (``.env`` is loaded by ``main.py``) and
passed explicitly into the search provider, the research orchestrator and
the scorers.  Presence of provider credentials selects the active tiers:

  - ``SERPER_API_KEY`` set   → Google (Serper) primary, DuckDuckGo fallback
  - ``SERPER_API_KEY`` unset → DuckDuckGo only
  - ``OPENAI_API_KEY`` set   → LLM scorer, local scorer as fallback
  - ``OPENAI_API_KEY`` unset → local scorer only
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, Field


def _env_str(key: str, default: str = "") -> str:
    return os.getenv(key, default).strip()


def _env_float(key: str, default: float) -> float:
    try:
        return float(os.getenv(key, str(default)))
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, str(default)))
    except ValueError:
        return default


class Settings(BaseModel):
    """Credentials, model parameters and pacing for one judge process."""

    serper_api_key: str = ""
    openai_api_key: str = ""
    openai_model: str = "gpt-4o"
    openai_temperature: float = 0.7
    openai_max_tokens: int = Field(default=4000, gt=0)
    openai_timeout: float = Field(default=40.0, gt=0)

    search_delay_seconds: float = Field(
        default=0.3,
        ge=0.0,
        description="Pause after every individual search query",
    )
    serper_timeout: float = Field(default=10.0, gt=0)
    duckduckgo_timeout: float = Field(default=8.0, gt=0)

    @property
    def has_serper(self) -> bool:
        return bool(self.serper_api_key)

    @property
    def has_openai(self) -> bool:
        # Keys that do not look like OpenAI secrets are treated as absent.
        return self.openai_api_key.startswith("sk-")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            serper_api_key=_env_str("SERPER_API_KEY"),
            openai_api_key=_env_str("OPENAI_API_KEY"),
            openai_model=_env_str("OPENAI_MODEL", "gpt-4o") or "gpt-4o",
            openai_temperature=_env_float("OPENAI_TEMPERATURE", 0.7),
            openai_max_tokens=_env_int("OPENAI_MAX_COMPLETION_TOKENS", 4000),
            openai_timeout=_env_float("OPENAI_REQUEST_TIMEOUT", 40.0),
            search_delay_seconds=_env_float("SEARCH_DELAY_SECONDS", 0.3),
            serper_timeout=_env_float("SERPER_TIMEOUT", 10.0),
            duckduckgo_timeout=_env_float("DUCKDUCKGO_TIMEOUT", 8.0),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings (FastAPI dependency)."""
    return Settings.from_env()
