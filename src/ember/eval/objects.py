from __future__ import annotations

from typing import Callable, Dict

from ..environment import Environment
from ..runtime import EmbNumber, EmbObject, EmbString, EmbValue, EmberKeyError, EmberTypeError
from ..tree import Identifier, MemberExpr, Node, ObjectLiteral
from ..utils import number_key

EvalFunc = Callable[[Node, Environment], EmbValue]

def eval_object(n: ObjectLiteral, env: Environment, eval_func: EvalFunc) -> EmbObject:
    """Build an object literal; shorthand properties read the same-named variable."""
    slots: Dict[str, EmbValue] = {}

    for prop in n.properties:
        if prop.value is None:
            slots[prop.key] = env.lookup(prop.key)
        else:
            slots[prop.key] = eval_func(prop.value, env)

    return EmbObject(slots)

def eval_member(n: MemberExpr, env: Environment, eval_func: EvalFunc) -> EmbValue:
    target = eval_func(n.object, env)

    if not isinstance(target, EmbObject):
        raise EmberTypeError(f"Cannot read a property of non-object value {target!r}")

    key = eval_key(n, env, eval_func)

    if key not in target.slots:
        raise EmberKeyError(key)

    return target.slots[key]

def eval_key(n: MemberExpr, env: Environment, eval_func: EvalFunc) -> str:
    if not n.is_computed:
        if not isinstance(n.property, Identifier):
            raise EmberTypeError("Dot access requires an identifier property")
        return n.property.symbol

    match eval_func(n.property, env):
        case EmbString(value=s):
            return s
        case EmbNumber(value=num):
            return number_key(num)
        case other:
            raise EmberTypeError(f"Property key must be a string or number, got {other!r}")
