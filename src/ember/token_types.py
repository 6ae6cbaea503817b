"""
Token Types for Ember Parser

Shared between lexer and parser to avoid circular dependencies.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TT(Enum):
    """Token Types - mirrors grammar terminals"""

    # Literals
    NUMBER = auto()
    STRING = auto()
    IDENT = auto()

    # Keywords
    LET = auto()
    CONST = auto()
    FN = auto()

    # Operators (+ - * / %); the parser dispatches on the token text
    BINOP = auto()
    EQUALS = auto()

    # Punctuation
    LPAR = auto()
    RPAR = auto()
    LBRACE = auto()
    RBRACE = auto()
    LSQB = auto()
    RSQB = auto()
    SEMI = auto()
    COLON = auto()
    COMMA = auto()
    DOT = auto()

    # Special
    EOF = auto()

    @property
    def category(self) -> str:
        """Coarse token category: number, identifier, keyword, operator, punctuation, string or eof."""
        return _CATEGORIES[self]


_CATEGORIES = {
    TT.NUMBER: "number",
    TT.STRING: "string",
    TT.IDENT: "identifier",
    TT.LET: "keyword",
    TT.CONST: "keyword",
    TT.FN: "keyword",
    TT.BINOP: "operator",
    TT.EQUALS: "operator",
    TT.LPAR: "punctuation",
    TT.RPAR: "punctuation",
    TT.LBRACE: "punctuation",
    TT.RBRACE: "punctuation",
    TT.LSQB: "punctuation",
    TT.RSQB: "punctuation",
    TT.SEMI: "punctuation",
    TT.COLON: "punctuation",
    TT.COMMA: "punctuation",
    TT.DOT: "punctuation",
    TT.EOF: "eof",
}


@dataclass(frozen=True)
class Tok:
    """Token with position info"""

    type: TT
    value: str
    line: int = 0
    column: int = 0

    def __repr__(self):
        return f"Tok({self.type.name}, {self.value!r}, {self.line}:{self.column})"
