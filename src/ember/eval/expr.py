from __future__ import annotations

import math
from typing import Callable

from ..environment import Environment
from ..runtime import EmbNull, EmbNumber, EmbValue, EmberOperatorError, EmberZeroDivisionError
from ..tree import BinaryExpr, Node

EvalFunc = Callable[[Node, Environment], EmbValue]

def eval_binary(n: BinaryExpr, env: Environment, eval_func: EvalFunc) -> EmbValue:
    lhs = eval_func(n.left, env)
    rhs = eval_func(n.right, env)

    if isinstance(lhs, EmbNumber) and isinstance(rhs, EmbNumber):
        return apply_numeric_operator(n.operator, lhs, rhs)

    # No string concatenation or mixed-type arithmetic
    return EmbNull()

def apply_numeric_operator(op: str, lhs: EmbNumber, rhs: EmbNumber) -> EmbNumber:
    match op:
        case '+':
            return EmbNumber(lhs.value + rhs.value)
        case '-':
            return EmbNumber(lhs.value - rhs.value)
        case '*':
            return EmbNumber(lhs.value * rhs.value)
        case '/':
            if rhs.value == 0:
                raise EmberZeroDivisionError(op)
            return EmbNumber(lhs.value / rhs.value)
        case '%':
            if rhs.value == 0:
                raise EmberZeroDivisionError(op)
            # Result takes the sign of the dividend
            return EmbNumber(math.fmod(lhs.value, rhs.value))
    raise EmberOperatorError(op)
