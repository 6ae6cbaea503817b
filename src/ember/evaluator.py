from __future__ import annotations

from typing import Optional

from .environment import Environment
from .runtime import EmbNull, EmbNumber, EmbString, EmbValue, EmberRecursionError, EmberRuntimeError, EmberUnsupportedError, make_global_env
from .tree import (
    AssignmentExpr,
    BinaryExpr,
    CallExpr,
    FunctionDeclaration,
    Identifier,
    MemberExpr,
    Node,
    NullLiteral,
    NumericLiteral,
    ObjectLiteral,
    Program,
    PropertyLiteral,
    StringLiteral,
    VariableDeclaration,
)

from .eval.bind import eval_assignment, eval_var_declaration
from .eval.chains import eval_call
from .eval.expr import eval_binary
from .eval.objects import eval_member, eval_object


def _maybe_attach_location(exc: EmberRuntimeError, node: Node) -> None:
    if getattr(exc, "_augmented", False):
        return

    exc.ember_meta = type(node).__name__
    exc._augmented = True  # type: ignore[attr-defined]

# ---------------- Public API ----------------

def evaluate(node: Node, env: Optional[Environment] = None) -> EmbValue:
    """Evaluate an AST node; a fresh global environment is used when env is None."""
    if env is None:
        env = make_global_env()

    try:
        return eval_node(node, env)
    except RecursionError:
        raise EmberRecursionError() from None

# ---------------- Core evaluator ----------------

def eval_node(n: Node, env: Environment) -> EmbValue:
    try:
        return _eval_node_inner(n, env)
    except EmberRuntimeError as e:
        _maybe_attach_location(e, n)
        raise


def _eval_node_inner(n: Node, env: Environment) -> EmbValue:
    match n:
        case Program():
            return _eval_program(n, env)
        case VariableDeclaration():
            return eval_var_declaration(n, env, eval_node)
        case NumericLiteral(value=value):
            return EmbNumber(value)
        case StringLiteral(value=value):
            return EmbString(value)
        case NullLiteral():
            return EmbNull()
        case Identifier(symbol=symbol):
            return env.lookup(symbol)
        case ObjectLiteral():
            return eval_object(n, env, eval_node)
        case CallExpr():
            return eval_call(n, env, eval_node)
        case BinaryExpr():
            return eval_binary(n, env, eval_node)
        case AssignmentExpr():
            return eval_assignment(n, env, eval_node)
        case MemberExpr():
            return eval_member(n, env, eval_node)
        case FunctionDeclaration(name=name):
            raise EmberUnsupportedError(f"Function declarations cannot be evaluated (fn {name})")
        case PropertyLiteral():
            raise EmberUnsupportedError("Property literals are only evaluated inside an object literal")
        case _:
            raise EmberUnsupportedError(f"Unknown node: {type(n).__name__}")

def _eval_program(program: Program, env: Environment) -> EmbValue:
    last: EmbValue = EmbNull()

    for stmt in program.body:
        last = eval_node(stmt, env)

    return last
