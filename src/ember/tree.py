"""AST node classes for Ember plus a Lark rendering used for diagnostics.

Nodes are frozen dataclasses carrying data only; the parser builds them and
the evaluator matches on their class. Child sequences are tuples, so a parsed
tree is never mutated and a child belongs to exactly one parent.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional, Tuple, Union

from lark import Token, Tree
from typing_extensions import TypeAlias


class Stmt:
    """Anything that may appear in a statement body."""
    __slots__ = ()


class Expr(Stmt):
    """A statement that yields a value."""
    __slots__ = ()

# ---------- Statements ----------

@dataclass(frozen=True)
class Program(Stmt):
    body: Tuple[Stmt, ...] = ()

@dataclass(frozen=True)
class VariableDeclaration(Stmt):
    identifier: str
    constant: bool
    value: Optional[Expr] = None  # None means implicit null

@dataclass(frozen=True)
class FunctionDeclaration(Stmt):
    name: str
    params: Tuple[str, ...]
    body: Tuple[Stmt, ...]

# ---------- Expressions ----------

@dataclass(frozen=True)
class AssignmentExpr(Expr):
    assignee: Expr
    value: Expr

@dataclass(frozen=True)
class BinaryExpr(Expr):
    left: Expr
    right: Expr
    operator: str

@dataclass(frozen=True)
class MemberExpr(Expr):
    object: Expr
    property: Expr
    is_computed: bool

@dataclass(frozen=True)
class CallExpr(Expr):
    caller: Expr
    args: Tuple[Expr, ...]

@dataclass(frozen=True)
class Identifier(Expr):
    symbol: str

@dataclass(frozen=True)
class NumericLiteral(Expr):
    value: float

@dataclass(frozen=True)
class StringLiteral(Expr):
    value: str

@dataclass(frozen=True)
class NullLiteral(Expr):
    pass

@dataclass(frozen=True)
class PropertyLiteral(Expr):
    key: str
    value: Optional[Expr] = None  # None means shorthand: `{ key }`

@dataclass(frozen=True)
class ObjectLiteral(Expr):
    properties: Tuple[PropertyLiteral, ...] = ()


Node: TypeAlias = Union[
    Program,
    VariableDeclaration,
    FunctionDeclaration,
    AssignmentExpr,
    BinaryExpr,
    MemberExpr,
    CallExpr,
    Identifier,
    NumericLiteral,
    StringLiteral,
    NullLiteral,
    PropertyLiteral,
    ObjectLiteral,
]

# ---------- Lark rendering ----------

def to_tree(node: Stmt) -> Tree:
    """Render an AST as a lark Tree labelled by node class.

    Child nodes become subtrees; scalar fields become tokens typed by their
    field name, so `Tree.pretty()` gives a readable dump.
    """
    children = []

    for f in fields(node):
        value = getattr(node, f.name)

        if isinstance(value, Stmt):
            children.append(Tree(f.name, [to_tree(value)]))
        elif isinstance(value, tuple):
            children.append(Tree(f.name, [_render_item(item) for item in value]))
        elif value is None:
            continue
        else:
            children.append(Token(f.name.upper(), _scalar(value)))

    return Tree(type(node).__name__, children)

def _render_item(item: Union[Stmt, str]) -> Union[Tree, Token]:
    if isinstance(item, Stmt):
        return to_tree(item)
    return Token('NAME', item)

def _scalar(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else str(value)
    return str(value)

def dump(node: Stmt) -> str:
    return to_tree(node).pretty()
