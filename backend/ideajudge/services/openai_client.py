"""OpenAI chat-completions client.

The LLM scorer talks to OpenAI only through ``complete_chat_async()``.
This keeps in one place:
  - Model, timeout and key taken from :class:`Settings`.
  - JSON response format enforced via ``response_format``.
  - A single attempt; any failure returns None so the caller can fall back.
  - Consistent ``[OPENAI]`` progress lines.
"""

from __future__ import annotations

import logging
import re
import time
from typing import Any, Dict, List, Optional

import httpx

from ..config import Settings

logger = logging.getLogger(__name__)

_OPENAI_API_URL = "https://api.openai.com/v1/chat/completions"

_TRAILING_COMMA = re.compile(r",\s*([}\]])")


# ---------------------------------------------------------------------------
# JSON sanitizer: pulls the JSON object out of LLM output
# ---------------------------------------------------------------------------
def sanitize_json(raw: str) -> str:
    """Extract a JSON object from raw LLM output.

    Handles:
      - Markdown fences (```json ... ```)
      - Leading/trailing whitespace and BOM
      - Prose before/after the object
      - Trailing commas before } or ]

    Raises ValueError if no JSON object is found.
    """
    text = raw.strip().lstrip("\ufeff")

    if text.startswith("```"):
        parts = text.split("```")
        text = parts[1] if len(parts) >= 3 else text[3:]

    text = text.strip()
    if text.lower().startswith("json"):
        text = text[4:].strip()

    start = text.find("{")
    if start == -1:
        raise ValueError("LLM did not return a JSON object — no '{' found")
    end = text.rfind("}")
    if end < start:
        raise ValueError("LLM did not return a JSON object — no '}' found")
    text = text[start : end + 1]

    return _TRAILING_COMMA.sub(r"\1", text)


def build_payload(
    *,
    model: str,
    messages: List[Dict[str, str]],
    max_tokens: int,
    temperature: float,
) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "model": model,
        "messages": messages,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "response_format": {"type": "json_object"},
    }
    print(f"🧠 [OPENAI] Model: {model}, tokens requested: {max_tokens}")
    return payload


async def complete_chat_async(
    system_prompt: str,
    user_prompt: str,
    max_tokens: int,
    temperature: float,
    *,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[str]:
    """Send one system + user exchange and return the assistant text.

    Returns
    -------
    str or None
        The raw message content, or None on a missing key, non-200 status,
        timeout, malformed body or empty content.  Never retries.
    """
    if not settings.has_openai:
        print("⚠️  [OPENAI] API key missing or invalid (OPENAI_API_KEY)")
        return None

    headers = {
        "Authorization": f"Bearer {settings.openai_api_key}",
        "Content-Type": "application/json",
    }
    payload = build_payload(
        model=settings.openai_model,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        max_tokens=max_tokens,
        temperature=temperature,
    )

    t0 = time.time()
    try:
        async with httpx.AsyncClient(
            timeout=settings.openai_timeout, transport=transport
        ) as client:
            response = await client.post(_OPENAI_API_URL, headers=headers, json=payload)
        duration = time.time() - t0
        print(f"📦 [OPENAI] HTTP {response.status_code} ({duration:.1f}s)")

        if response.status_code != 200:
            print(f"⚠️  [OPENAI] Error response: {response.text[:400]}")
            return None

        data = response.json()
        usage = data.get("usage")
        if usage:
            print(
                f"🧠 [OPENAI] Tokens used: prompt={usage.get('prompt_tokens', '?')}, "
                f"completion={usage.get('completion_tokens', '?')}"
            )

        content = (data["choices"][0]["message"]["content"] or "").strip()
    except httpx.TimeoutException:
        print(f"❌ [OPENAI] Timeout — aborting ({time.time() - t0:.1f}s)")
        return None
    except Exception as exc:
        print(f"❌ [OPENAI] Unexpected error: {exc}")
        logger.warning("OpenAI call failed: %s", exc)
        return None

    if not content:
        print("⚠️  [OPENAI] Empty response")
        return None

    print(f"🧠 [OPENAI] Raw output length: {len(content)} chars")
    return content
