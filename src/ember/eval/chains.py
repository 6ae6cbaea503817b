from __future__ import annotations

from typing import Callable, List

from ..environment import Environment
from ..runtime import EmbValue, call_native
from ..tree import CallExpr, Node

EvalFunc = Callable[[Node, Environment], EmbValue]

def eval_call(n: CallExpr, env: Environment, eval_func: EvalFunc) -> EmbValue:
    # Arguments are evaluated left to right before the callee
    args: List[EmbValue] = [eval_func(arg, env) for arg in n.args]
    callee = eval_func(n.caller, env)

    return call_native(callee, args, env)
