"""
Lexer for Ember - Recursive Descent Parser

Tokenizes Ember source code into a stream of tokens.

Features:
- Single-pass tokenization
- Position tracking (line, column)
- Keyword table supplied by the caller
"""

from typing import Dict, List, Mapping, Optional

from .token_types import TT, Tok

# Keys are case-sensitive
DEFAULT_KEYWORDS: Mapping[str, TT] = {
    'let': TT.LET,
    'const': TT.CONST,
    'fn': TT.FN,
}

# ============================================================================
# Lexer Implementation
# ============================================================================

class Lexer:
    """
    Ember lexer.

    Every token is either a single character from SINGLE_CHARS, a string
    literal, a run of digits or a run of ASCII letters. Anything else aborts
    tokenization with a LexError.
    """

    SINGLE_CHARS = {
        '(': TT.LPAR,
        ')': TT.RPAR,
        '{': TT.LBRACE,
        '}': TT.RBRACE,
        '[': TT.LSQB,
        ']': TT.RSQB,
        '+': TT.BINOP,
        '-': TT.BINOP,
        '*': TT.BINOP,
        '/': TT.BINOP,
        '%': TT.BINOP,
        '=': TT.EQUALS,
        ';': TT.SEMI,
        ':': TT.COLON,
        ',': TT.COMMA,
        '.': TT.DOT,
    }

    WHITESPACE = (' ', '\t', '\n', '\r', '\b')

    def __init__(self, source: str, keywords: Optional[Mapping[str, TT]] = None):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Tok] = []
        self.keywords: Dict[str, TT] = dict(DEFAULT_KEYWORDS if keywords is None else keywords)

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def tokenize(self) -> List[Tok]:
        """Tokenize entire source, return token list"""
        while self.pos < len(self.source):
            self.scan_token()

        self.emit(TT.EOF, 'EOF', self.line, self.column)
        return self.tokens

    def scan_token(self):
        """Scan next token"""
        ch = self.peek()

        if ch in self.WHITESPACE:
            self.advance()
            return

        if ch in self.SINGLE_CHARS:
            line, column = self.line, self.column
            self.emit(self.SINGLE_CHARS[ch], self.advance(), line, column)
            return

        if ch == '"':
            self.scan_string()
            return

        if is_digit(ch):
            self.scan_number()
            return

        if is_alpha(ch):
            self.scan_identifier()
            return

        raise LexError(ch, self.line, self.column)

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_string(self):
        """Scan string literal: "..." (no escapes; unterminated runs to end of input)"""
        line, column = self.line, self.column
        self.advance()  # Opening quote
        value = ''

        while self.pos < len(self.source) and self.peek() != '"':
            value += self.advance()

        if self.pos < len(self.source):
            self.advance()  # Closing quote

        self.emit(TT.STRING, value, line, column)

    def scan_number(self):
        """Scan number literal: digits only"""
        line, column = self.line, self.column
        value = ''

        while self.pos < len(self.source) and is_digit(self.peek()):
            value += self.advance()

        self.emit(TT.NUMBER, value, line, column)

    def scan_identifier(self):
        """Scan identifier or keyword"""
        line, column = self.line, self.column
        value = ''

        while self.pos < len(self.source) and is_alpha(self.peek()):
            value += self.advance()

        token_type = self.keywords.get(value, TT.IDENT)
        self.emit(token_type, value, line, column)

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self) -> str:
        """Consume one character and return it"""
        ch = self.source[self.pos]
        self.pos += 1

        if ch == '\n':
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return ch

    def emit(self, token_type: TT, value: str, line: int, column: int):
        """Emit a token"""
        self.tokens.append(Tok(type=token_type, value=value, line=line, column=column))


def is_alpha(ch: str) -> bool:
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z')

def is_digit(ch: str) -> bool:
    return '0' <= ch <= '9'


class LexError(Exception):
    """Lexical analysis error: an unrecognized character"""

    def __init__(self, char: str, line: int = 0, column: int = 0):
        self.char = char
        self.code = ord(char)
        self.line = line
        self.column = column
        super().__init__(
            f"Unrecognized character {char!r} (code {self.code}) at line {line}, col {column}"
        )


def tokenize(source: str, keywords: Optional[Mapping[str, TT]] = None) -> List[Tok]:
    """Convenience function to tokenize source"""
    lexer = Lexer(source, keywords=keywords)
    return lexer.tokenize()
