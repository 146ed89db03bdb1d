"""
Stage timing for evaluation runs.

Research dominates a run: every query is followed by a fixed pause, so a
full evaluation takes several seconds even when every backend answers
instantly.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

logger = logging.getLogger(__name__)


def log_timing(stage: str, event: str, elapsed_ms: Optional[float] = None) -> None:
    line = f"[TIMING] {stage}: {event}"
    if elapsed_ms is not None:
        line += f" ({elapsed_ms:.0f}ms)"
    print(line)
    logger.debug(line)


@asynccontextmanager
async def timed_stage(stage: str):
    """Print how long the wrapped block took."""
    log_timing(stage, "start")
    began = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - began) * 1000
        log_timing(stage, "done", elapsed_ms)
