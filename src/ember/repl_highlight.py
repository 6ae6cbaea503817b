"""prompt_toolkit lexer for live Ember syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer_rd import Lexer as EmbLexer, LexError
from .token_types import TT, Tok

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "operator": "",
    "punctuation": "",
    "error": "bold ansired",
}

_TT_GROUP = {
    TT.LET: "keyword",
    TT.CONST: "keyword",
    TT.FN: "keyword",
    TT.NUMBER: "number",
    TT.STRING: "string",
    TT.IDENT: "identifier",
    TT.BINOP: "operator",
    TT.EQUALS: "operator",
}


def _token_span(tok: Tok, line_text: str) -> int:
    """Width of tok in the source line, counting the quotes of string literals."""
    if tok.type != TT.STRING:
        return len(tok.value)

    start = tok.column - 1
    end = line_text.find('"', start + 1)
    return len(line_text) - start if end == -1 else end - start + 1


def highlight_line(line_text: str) -> StyleAndTextTuples:
    """Split one line into (style, text) fragments; unlexable input is marked as an error."""
    try:
        tokens = EmbLexer(line_text).tokenize()
    except LexError as exc:
        pos = exc.column - 1
        good = highlight_line(line_text[:pos]) if pos > 0 else []
        return good + [(GROUP_STYLE["error"], line_text[pos:])]

    fragments: StyleAndTextTuples = []
    cursor = 0

    for tok in tokens:
        if tok.type == TT.EOF:
            break

        start = tok.column - 1
        if start > cursor:
            fragments.append(("", line_text[cursor:start]))

        width = _token_span(tok, line_text)
        group = _TT_GROUP.get(tok.type, "punctuation")
        fragments.append((GROUP_STYLE[group], line_text[start:start + width]))
        cursor = start + width

    if cursor < len(line_text):
        fragments.append(("", line_text[cursor:]))

    return fragments


class EmberLexer(Lexer):
    """Highlights each line of the REPL buffer independently."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno >= len(lines):
                return []
            return highlight_line(lines[lineno])

        return get_line
