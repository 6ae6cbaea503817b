"""Built-in native functions (print, time) registered via ember.runtime."""

from __future__ import annotations

import time
from typing import List

from .environment import Environment
from .runtime import register_native, EmbNull, EmbNumber, EmbValue
from .utils import render

@register_native("print")
def std_print(args: List[EmbValue], _env: Environment) -> EmbNull:
    rendered = [render(arg) for arg in args]
    print(*rendered)
    return EmbNull()

@register_native("time")
def std_time(_args: List[EmbValue], _env: Environment) -> EmbNumber:
    # Milliseconds since the epoch
    return EmbNumber(float(time.time_ns() // 1_000_000))
