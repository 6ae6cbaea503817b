"""
Recursive Descent Parser for Ember

Structure:
- Lexer: Token stream from source
- Parser: Recursive descent, one method per precedence level
- AST: frozen dataclasses from tree.py
"""

from typing import List, Mapping, Optional

from .lexer_rd import tokenize
from .token_types import TT, Tok
from .tree import (
    AssignmentExpr,
    BinaryExpr,
    CallExpr,
    Expr,
    FunctionDeclaration,
    Identifier,
    MemberExpr,
    NumericLiteral,
    ObjectLiteral,
    Program,
    PropertyLiteral,
    Stmt,
    StringLiteral,
    VariableDeclaration,
)

# ============================================================================
# Parser
# ============================================================================

class ParseError(Exception):
    """Parse error with position info"""
    def __init__(self, message: str, token: Optional[Tok] = None, expected: Optional[str] = None):
        self.message = message
        self.token = token
        self.expected = expected
        detail = message

        if token is not None:
            got = f"{token.type.name} {token.value!r}"
            if expected is not None:
                detail = f"{message}: expected {expected}, got {got}"
            else:
                detail = f"{message}: got {got}"
            detail += f" at line {token.line}, col {token.column}"

        super().__init__(detail)

class Parser:
    """
    Recursive descent parser for Ember.

    Expression precedence (lowest to highest):
    1. assignment (=), right associative
    2. object literal ({ key: value, shorthand })
    3. additive (+, -)
    4. multiplicative (*, /, %)
    5. call (f(args), chained f()())
    6. member (.field, [computed])
    7. primary (identifiers, literals, parens)
    """

    ADDITIVE_OPS = ('+', '-')
    MULTIPLICATIVE_OPS = ('*', '/', '%')

    def __init__(self, tokens: List[Tok]):
        self.tokens = tokens
        self.pos = 0
        self.current = tokens[0] if tokens else Tok(TT.EOF, 'EOF')

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def advance(self) -> Tok:
        """Consume current token and move to next"""
        prev = self.current
        if self.pos < len(self.tokens) - 1:
            self.pos += 1
            self.current = self.tokens[self.pos]
        else:
            self.current = Tok(TT.EOF, 'EOF', prev.line, prev.column)
        return prev

    def check(self, *types: TT) -> bool:
        """Check if current token matches any of the given types"""
        return self.current.type in types

    def check_op(self, ops) -> bool:
        """Check for a binary operator token whose text is in ops"""
        return self.current.type == TT.BINOP and self.current.value in ops

    def at_eof(self) -> bool:
        return self.check(TT.EOF)

    def expect(self, token_type: TT, message: str) -> Tok:
        """Consume token of expected type or raise error"""
        if not self.check(token_type):
            raise ParseError(message, self.current, expected=token_type.name)
        return self.advance()

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse(self) -> Program:
        """Parse entire program"""
        body: List[Stmt] = []

        while not self.at_eof():
            body.append(self.parse_statement())

        return Program(body=tuple(body))

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self) -> Stmt:
        if self.check(TT.LET, TT.CONST):
            return self.parse_var_declaration()
        if self.check(TT.FN):
            return self.parse_fn_declaration()

        return self.parse_expr()

    def parse_var_declaration(self) -> Stmt:
        """
        Parse variable declaration:
        let x;
        (let | const) x = expr;
        """
        is_constant = self.advance().type == TT.CONST
        name = self.expect(TT.IDENT, "Expected identifier name following `let` or `const`").value

        if self.check(TT.SEMI):
            if is_constant:
                raise ParseError(
                    f"Constant '{name}' must be initialized",
                    self.current,
                    expected=TT.EQUALS.name,
                )
            self.advance()
            return VariableDeclaration(identifier=name, constant=False, value=None)

        self.expect(TT.EQUALS, "Expected '=' after variable name in declaration")
        value = self.parse_expr()
        self.expect(TT.SEMI, "Variable declaration must end with ';'")

        return VariableDeclaration(identifier=name, constant=is_constant, value=value)

    def parse_fn_declaration(self) -> Stmt:
        """Parse function declaration: fn name(a, b) { body }"""
        self.advance()  # fn
        name = self.expect(TT.IDENT, "Expected function name following `fn`").value

        if not self.check(TT.LPAR):
            raise ParseError("Expected parameter list after function name", self.current, expected=TT.LPAR.name)

        params = self.parse_params()

        self.expect(TT.LBRACE, "Expected function body following declaration")
        body: List[Stmt] = []

        while not self.at_eof() and not self.check(TT.RBRACE):
            body.append(self.parse_statement())

        self.expect(TT.RBRACE, "Expected '}' closing function body")

        return FunctionDeclaration(name=name, params=tuple(params), body=tuple(body))

    def parse_params(self) -> List[str]:
        """Parse a parameter list with the argument grammar; every entry must be a bare identifier"""
        self.expect(TT.LPAR, "Expected '(' opening parameter list")
        params: List[str] = []

        if not self.check(TT.RPAR):
            params.append(self.parse_param())

            while self.check(TT.COMMA):
                self.advance()
                params.append(self.parse_param())

        self.expect(TT.RPAR, "Expected ')' closing parameter list")
        return params

    def parse_param(self) -> str:
        start = self.current
        arg = self.parse_assignment_expr()

        if not isinstance(arg, Identifier):
            # Point at the first token of the parameter
            raise ParseError(
                f"Function parameters must be identifiers, got {type(arg).__name__}",
                start,
                expected=TT.IDENT.name,
            )

        return arg.symbol

    # ========================================================================
    # Expressions
    # ========================================================================

    def parse_expr(self) -> Expr:
        return self.parse_assignment_expr()

    def parse_assignment_expr(self) -> Expr:
        """Parse assignment: lhs = rhs;  (right associative)"""
        left = self.parse_object_expr()

        if self.check(TT.EQUALS):
            self.advance()
            value = self.parse_assignment_expr()
            self.expect(TT.SEMI, "Expected ';' after assignment")
            return AssignmentExpr(assignee=left, value=value)

        return left

    def parse_object_expr(self) -> Expr:
        """
        Parse object literal:
        { key }  { key, }  { key: value, other: value }
        """
        if not self.check(TT.LBRACE):
            return self.parse_additive_expr()

        self.advance()  # {
        properties: List[PropertyLiteral] = []

        while not self.at_eof() and not self.check(TT.RBRACE):
            key = self.expect(TT.IDENT, "Object literal key expected").value

            if self.check(TT.COMMA):
                self.advance()
                properties.append(PropertyLiteral(key=key))
                continue
            if self.check(TT.RBRACE):
                properties.append(PropertyLiteral(key=key))
                continue

            self.expect(TT.COLON, "Missing ':' following key in object literal")
            value = self.parse_expr()
            properties.append(PropertyLiteral(key=key, value=value))

            if not self.check(TT.RBRACE):
                self.expect(TT.COMMA, "Expected ',' or '}' following property")

        self.expect(TT.RBRACE, "Expected '}' closing object literal")

        return ObjectLiteral(properties=tuple(properties))

    def parse_additive_expr(self) -> Expr:
        """Parse left-associative + and - chain"""
        left = self.parse_multiplicative_expr()

        while self.check_op(self.ADDITIVE_OPS):
            op = self.advance().value
            right = self.parse_multiplicative_expr()
            left = BinaryExpr(left=left, right=right, operator=op)

        return left

    def parse_multiplicative_expr(self) -> Expr:
        """Parse left-associative *, / and % chain"""
        left = self.parse_call_member_expr()

        while self.check_op(self.MULTIPLICATIVE_OPS):
            op = self.advance().value
            right = self.parse_call_member_expr()
            left = BinaryExpr(left=left, right=right, operator=op)

        return left

    def parse_call_member_expr(self) -> Expr:
        member = self.parse_member_expr()

        if self.check(TT.LPAR):
            return self.parse_call_expr(member)

        return member

    def parse_call_expr(self, caller: Expr) -> Expr:
        """Parse a call on caller, re-wrapping for chained calls like f()()"""
        call: Expr = CallExpr(caller=caller, args=tuple(self.parse_args()))

        if self.check(TT.LPAR):
            call = self.parse_call_expr(call)

        return call

    def parse_args(self) -> List[Expr]:
        """Parse ( arg, arg, ... ) where each arg is an assignment-level expression"""
        self.expect(TT.LPAR, "Expected '(' opening argument list")
        args: List[Expr] = []

        if not self.check(TT.RPAR):
            args.append(self.parse_assignment_expr())

            while self.check(TT.COMMA):
                self.advance()
                args.append(self.parse_assignment_expr())

        self.expect(TT.RPAR, "Expected ')' closing argument list")
        return args

    def parse_member_expr(self) -> Expr:
        """Parse obj.field and obj[expr] chains (left associative)"""
        obj = self.parse_primary_expr()

        while self.check(TT.DOT, TT.LSQB):
            op = self.advance()

            if op.type == TT.LSQB:
                prop = self.parse_expr()
                self.expect(TT.RSQB, "Expected ']' closing computed member")
                obj = MemberExpr(object=obj, property=prop, is_computed=True)
            else:
                name = self.expect(TT.IDENT, "Dot access requires an identifier on the right")
                obj = MemberExpr(object=obj, property=Identifier(name.value), is_computed=False)

        return obj

    def parse_primary_expr(self) -> Expr:
        tok = self.current

        match tok.type:
            case TT.IDENT:
                self.advance()
                return Identifier(symbol=tok.value)
            case TT.NUMBER:
                self.advance()
                return NumericLiteral(value=float(tok.value))
            case TT.STRING:
                self.advance()
                return StringLiteral(value=tok.value)
            case TT.LPAR:
                self.advance()
                value = self.parse_expr()
                self.expect(TT.RPAR, "Unmatched parenthesis")
                return value
            case _:
                raise ParseError("Unexpected token in expression", tok, expected="expression")


def parse_source(source: str, keywords: Optional[Mapping[str, TT]] = None) -> Program:
    """Tokenize and parse source into a Program"""
    parser = Parser(tokenize(source, keywords=keywords))

    try:
        return parser.parse()
    except RecursionError:
        raise ParseError("Expression nested too deeply", parser.current) from None

parse = parse_source
