from __future__ import annotations

from typing import Callable

from ..environment import Environment
from ..runtime import EmbNull, EmbValue, EmberTypeError
from ..tree import AssignmentExpr, Identifier, Node, VariableDeclaration

EvalFunc = Callable[[Node, Environment], EmbValue]

def eval_var_declaration(n: VariableDeclaration, env: Environment, eval_func: EvalFunc) -> EmbValue:
    value = eval_func(n.value, env) if n.value is not None else EmbNull()

    return env.declare(n.identifier, value, constant=n.constant)

def eval_assignment(n: AssignmentExpr, env: Environment, eval_func: EvalFunc) -> EmbValue:
    """Assign to an existing binding; only identifiers are valid targets."""
    if not isinstance(n.assignee, Identifier):
        raise EmberTypeError(f"Invalid assignment target {type(n.assignee).__name__}; expected an identifier")

    value = eval_func(n.value, env)

    return env.assign(n.assignee.symbol, value)
