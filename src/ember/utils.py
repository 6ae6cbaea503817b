from __future__ import annotations

import os

from .types import EmbString, EmbValue

DEBUG_PY_TRACE_ENV = "EMBER_DEBUG_PY_TRACE"


def debug_py_trace_enabled() -> bool:
    """True when EMBER_DEBUG_PY_TRACE asks for Python tracebacks on errors."""
    raw = os.environ.get(DEBUG_PY_TRACE_ENV, "")
    return raw.strip().lower() in ("1", "true", "yes", "on")


def render(value: EmbValue) -> str:
    """Display form used by print: strings unquoted, everything else as repr."""
    if isinstance(value, EmbString):
        return value.value

    return repr(value)


def number_key(value: float) -> str:
    return str(int(value)) if value.is_integer() else str(value)
