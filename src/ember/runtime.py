from __future__ import annotations

import importlib
from typing import List, Mapping, Optional

from .environment import Environment
from .types import (
    EmbBool, EmbNull, EmbNumber, EmbObject, EmbString, EmbValue, NativeFunction, NativeFn,
    EmberRuntimeError, EmberTypeError, EmberNameError, EmberConstError, EmberRedeclareError,
    EmberKeyError, EmberZeroDivisionError, EmberOperatorError, EmberUnsupportedError, EmberRecursionError,
    Builtins, ensure_emb_value, is_emb_value,
)

_STDLIB_INITIALIZED = False

def init_stdlib() -> None:
    """Load stdlib modules (idempotent) so register_native hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module(".stdlib", __package__)
    _STDLIB_INITIALIZED = True

def register_native(name: str):
    def dec(fn: NativeFn):
        Builtins.natives[name] = NativeFunction(fn=fn, name=name)
        return fn

    return dec

def make_global_env(natives: Optional[Mapping[str, NativeFunction]] = None) -> Environment:
    """Create a root environment with the language constants and native functions.

    natives defaults to the stdlib registry; pass a mapping to run with a
    different set. Every binding in the root scope is constant.
    """
    if natives is None:
        init_stdlib()
        natives = Builtins.natives

    env = Environment()
    env.declare("true", EmbBool(True), constant=True)
    env.declare("false", EmbBool(False), constant=True)
    env.declare("null", EmbNull(), constant=True)

    for name, native in natives.items():
        env.declare(name, native, constant=True)

    return env

def call_native(callee: EmbValue, args: List[EmbValue], env: Environment) -> EmbValue:
    if not isinstance(callee, NativeFunction):
        raise EmberTypeError(f"Cannot call a non-function value: {callee!r}")

    return ensure_emb_value(callee(args, env))
