from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Tuple
from typing_extensions import TypeAlias, TypeGuard

if TYPE_CHECKING:
    from .environment import Environment

# ---------- Value Model ----------

@dataclass(frozen=True)
class EmbNull:
    def __repr__(self) -> str:
        return "null"

@dataclass(frozen=True)
class EmbNumber:
    value: float
    def __repr__(self) -> str:
        v = self.value
        return str(int(v)) if v.is_integer() else str(v)

@dataclass(frozen=True)
class EmbBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

@dataclass(frozen=True)
class EmbString:
    value: str
    def __repr__(self) -> str:
        return f'"{self.value}"'

@dataclass
class EmbObject:
    slots: Dict[str, 'EmbValue']
    def __repr__(self) -> str:
        pairs = []

        for k, v in self.slots.items():
            pairs.append(f"{k}: {repr(v)}")

        return "{ " + ", ".join(pairs) + " }"

NativeFn = Callable[[List['EmbValue'], 'Environment'], 'EmbValue']

@dataclass(frozen=True)
class NativeFunction:
    fn: NativeFn
    name: str = "native"
    def __call__(self, args: List['EmbValue'], env: 'Environment') -> 'EmbValue':
        return self.fn(args, env)
    def __repr__(self) -> str:
        return f"<native fn {self.name}>"

EmbValue: TypeAlias = (
    EmbNull
    | EmbNumber
    | EmbBool
    | EmbString
    | EmbObject
    | NativeFunction
)

_EMB_VALUE_TYPES: Tuple[type, ...] = (
    EmbNull,
    EmbNumber,
    EmbBool,
    EmbString,
    EmbObject,
    NativeFunction,
)

def is_emb_value(value: object) -> TypeGuard[EmbValue]:
    return isinstance(value, _EMB_VALUE_TYPES)

def ensure_emb_value(value: object) -> EmbValue:
    if value is None:
        return EmbNull()
    if is_emb_value(value):
        return value
    raise EmberTypeError(f"Unexpected value type {type(value).__name__}")

# ---------- Exceptions ----------

class EmberRuntimeError(Exception):
    ember_meta: Optional[object]

    def __init__(self, message: str):
        super().__init__(message)
        self.ember_meta = None

    def __str__(self) -> str:  # pragma: no cover - trivial formatting
        msg = super().__str__()

        meta = getattr(self, "ember_meta", None)
        if meta is None:
            return msg

        return f"{msg} (in {meta})"

class EmberNameError(EmberRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Cannot resolve '{name}': it does not exist in any enclosing scope")
        self.name = name

class EmberRedeclareError(EmberRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Cannot declare '{name}': it already exists in this scope")
        self.name = name

class EmberConstError(EmberRuntimeError):
    def __init__(self, name: str):
        super().__init__(f"Cannot reassign '{name}': it was declared constant")
        self.name = name

class EmberTypeError(EmberRuntimeError):
    pass

class EmberKeyError(EmberRuntimeError):
    def __init__(self, key: str):
        super().__init__(f"Key '{key}' not found")
        self.key = key

class EmberZeroDivisionError(EmberRuntimeError):
    def __init__(self, operator: str):
        super().__init__(f"Division by zero in '{operator}'")
        self.operator = operator

class EmberOperatorError(EmberRuntimeError):
    def __init__(self, operator: str):
        super().__init__(f"Unknown operator '{operator}'")
        self.operator = operator

class EmberUnsupportedError(EmberRuntimeError):
    pass

class EmberRecursionError(EmberRuntimeError):
    def __init__(self) -> None:
        super().__init__("Maximum nesting depth exceeded during evaluation")

# ---------- Native registry ----------

class Builtins:
    natives: Dict[str, NativeFunction] = {}
