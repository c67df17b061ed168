"""
Trace utilities for rule evaluation.

Trace lines describe each step of an evaluation (named rules, references,
repetition bounds, callback outcomes). They are advisory only and never
change a verdict.

Usage:
    from jcr.utils.debug import enable_trace, log_trace, format_preview

    enable_trace()
    validator.evaluate(data)   # trace lines go to the "jcr.trace" logger

Enable tracing:
    - Set environment variable: JCR_TRACE=1
    - Or call enable_trace()
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Callable

from ..rule_nodes.constants import TRACE_PREVIEW_LENGTH

# =============================================================================
# Configuration
# =============================================================================

_TRACE_ENV = os.environ.get("JCR_TRACE", "").lower() in ("1", "true", "yes")
_trace_enabled = _TRACE_ENV

TRACE_LOGGER_NAME = "jcr.trace"

# Sink signature: (message, data preview or None)
TraceSink = Callable[[str, "str | None"], None]


def is_trace_enabled() -> bool:
    """Check if trace mode is enabled."""
    return _trace_enabled


def enable_trace(enabled: bool = True) -> None:
    """Enable or disable trace mode programmatically."""
    global _trace_enabled
    _trace_enabled = enabled

    if enabled:
        logging.getLogger(TRACE_LOGGER_NAME).setLevel(logging.DEBUG)


# =============================================================================
# Formatting
# =============================================================================

def format_preview(data: Any, limit: int = TRACE_PREVIEW_LENGTH) -> str:
    """
    Render data for a trace line, truncated to `limit` characters.

    Strings are shown quoted; other values as compact JSON (falling back to
    str() for values JSON cannot encode). Long renderings keep their first
    limit - 3 characters followed by " ...".
    """
    if isinstance(data, str):
        s = '"' + data + '"'
    else:
        try:
            s = json.dumps(data, separators=(",", ":"))
        except (TypeError, ValueError):
            s = str(data)
    if len(s) > limit:
        s = s[: limit - 3] + " ..."
    return s


def log_trace(message: str, preview: str | None = None) -> None:
    """Default trace sink: DEBUG lines on the "jcr.trace" logger."""
    if preview is not None:
        message = f"{message} data: {preview}"
    logging.getLogger(TRACE_LOGGER_NAME).debug(message)
