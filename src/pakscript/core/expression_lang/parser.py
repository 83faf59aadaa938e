"""
Recursive descent parser for embedded script expressions.

Grammar (precedence low to high):
    expr        → or_expr
    or_expr     → and_expr ("or" and_expr)*
    and_expr    → not_expr ("and" not_expr)*
    not_expr    → "not" not_expr | comparison
    comparison  → addition (comp_op addition)?
    addition    → multiply (("+"|"-") multiply)*
    multiply    → unary (("*"|"/"|"%") unary)*
    unary       → "-" unary | primary
    primary     → INTEGER | STRING | "true" | "false"
                | "has_item" "(" IDENT ")"
                | IDENT
                | "(" expr ")"

Expressions always sit inside an instruction's parenthesised argument list,
so line breaks between tokens are skipped.
"""

from __future__ import annotations

from pathlib import Path

from pakscript.core.ir.expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    GVarRef,
    HasItem,
    Literal,
    UnaryExpr,
    UnaryOp,
)
from pakscript.core.lexer import Token, TokenType, tokenize

# Words with a fixed meaning inside expressions. They stay ordinary
# identifiers everywhere else in a script.
TRUE = "true"
FALSE = "false"
AND = "and"
OR = "or"
NOT = "not"
HAS_ITEM = "has_item"


class ExpressionParseError(Exception):
    """Error during expression parsing."""

    def __init__(self, message: str, pos: int = 0) -> None:
        super().__init__(message)
        self.message = message
        self.pos = pos


_COMPARISON_OPS: dict[TokenType, BinaryOp] = {
    TokenType.DOUBLE_EQUALS: BinaryOp.EQ,
    TokenType.NOT_EQUALS: BinaryOp.NE,
    TokenType.LESS_THAN: BinaryOp.LT,
    TokenType.GREATER_THAN: BinaryOp.GT,
    TokenType.LESS_EQUAL: BinaryOp.LE,
    TokenType.GREATER_EQUAL: BinaryOp.GE,
}

_MULTIPLY_OPS: dict[TokenType, BinaryOp] = {
    TokenType.STAR: BinaryOp.MUL,
    TokenType.SLASH: BinaryOp.DIV,
    TokenType.PERCENT: BinaryOp.MOD,
}


class _Parser:
    """Recursive descent parser over a shared token list."""

    def __init__(self, tokens: list[Token], pos: int) -> None:
        self.tokens = tokens
        self.pos = pos
        self._skip_newlines()

    @property
    def current(self) -> Token:
        return self.tokens[self.pos]

    def _skip_newlines(self) -> None:
        while self.tokens[self.pos].type == TokenType.NEWLINE:
            self.pos += 1

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        if tok.type != TokenType.EOF:
            self.pos += 1
            self._skip_newlines()
        return tok

    def expect(self, token_type: TokenType) -> Token:
        tok = self.current
        if tok.type != token_type:
            raise ExpressionParseError(
                f"Expected {token_type.value!r}, got {tok.describe()}",
                self.pos,
            )
        return self.advance()

    def at_word(self, word: str) -> bool:
        tok = self.current
        return tok.type == TokenType.IDENTIFIER and tok.value == word

    def match_word(self, word: str) -> bool:
        if self.at_word(word):
            self.advance()
            return True
        return False

    # -- Grammar rules --

    def parse_expr(self) -> Expr:
        return self.parse_or_expr()

    def parse_or_expr(self) -> Expr:
        """and_expr ("or" and_expr)*"""
        left = self.parse_and_expr()
        while self.match_word(OR):
            right = self.parse_and_expr()
            left = BinaryExpr(op=BinaryOp.OR, left=left, right=right)
        return left

    def parse_and_expr(self) -> Expr:
        """not_expr ("and" not_expr)*"""
        left = self.parse_not_expr()
        while self.match_word(AND):
            right = self.parse_not_expr()
            left = BinaryExpr(op=BinaryOp.AND, left=left, right=right)
        return left

    def parse_not_expr(self) -> Expr:
        """'not' not_expr | comparison"""
        if self.match_word(NOT):
            operand = self.parse_not_expr()
            return UnaryExpr(op=UnaryOp.NOT, operand=operand)
        return self.parse_comparison()

    def parse_comparison(self) -> Expr:
        """addition (comp_op addition)?"""
        left = self.parse_addition()
        if self.current.type in _COMPARISON_OPS:
            op = _COMPARISON_OPS[self.advance().type]
            right = self.parse_addition()
            return BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_addition(self) -> Expr:
        """multiply (('+' | '-') multiply)*"""
        left = self.parse_multiply()
        while self.current.type in (TokenType.PLUS, TokenType.MINUS):
            op = BinaryOp.ADD if self.advance().type == TokenType.PLUS else BinaryOp.SUB
            right = self.parse_multiply()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_multiply(self) -> Expr:
        """unary (('*' | '/' | '%') unary)*"""
        left = self.parse_unary()
        while self.current.type in _MULTIPLY_OPS:
            op = _MULTIPLY_OPS[self.advance().type]
            right = self.parse_unary()
            left = BinaryExpr(op=op, left=left, right=right)
        return left

    def parse_unary(self) -> Expr:
        """'-' unary | primary"""
        if self.current.type == TokenType.MINUS:
            self.advance()
            operand = self.parse_unary()
            return UnaryExpr(op=UnaryOp.NEG, operand=operand)
        return self.parse_primary()

    def parse_primary(self) -> Expr:
        """literal | has_item(...) | variable | '(' expr ')'"""
        tok = self.current

        if tok.type == TokenType.LPAREN:
            self.advance()
            expr = self.parse_expr()
            self.expect(TokenType.RPAREN)
            return expr

        if tok.type == TokenType.INTEGER:
            try:
                value = int(tok.value)
            except ValueError as e:
                raise ExpressionParseError("Integer literal out of range", self.pos) from e
            self.advance()
            return Literal(value=value)
        if tok.type == TokenType.STRING:
            self.advance()
            return Literal(value=tok.value)

        if tok.type == TokenType.IDENTIFIER:
            if tok.value == TRUE:
                self.advance()
                return Literal(value=True)
            if tok.value == FALSE:
                self.advance()
                return Literal(value=False)
            if tok.value in (AND, OR, NOT):
                raise ExpressionParseError(f"Unexpected operator {tok.value!r}", self.pos)
            if self.tokens[self.pos + 1].type == TokenType.LPAREN:
                return self._parse_call()
            self.advance()
            return GVarRef(name=tok.value)

        raise ExpressionParseError(f"Expected an expression, got {tok.describe()}", self.pos)

    def _parse_call(self) -> Expr:
        """has_item '(' IDENT ')'"""
        name_pos = self.pos
        name_tok = self.advance()
        if name_tok.value != HAS_ITEM:
            raise ExpressionParseError(f"Unknown function {name_tok.value!r}", name_pos)
        self.expect(TokenType.LPAREN)
        item_tok = self.expect(TokenType.IDENTIFIER)
        self.expect(TokenType.RPAREN)
        return HasItem(item_id=item_tok.value)


def parse_expression_at(tokens: list[Token], pos: int) -> tuple[Expr, int]:
    """Parse one expression starting at token index ``pos``.

    Args:
        tokens: Token stream from the script lexer (EOF-terminated)
        pos: Index of the first token of the expression

    Returns:
        The parsed expression and the index of the first token after it.

    Raises:
        ExpressionParseError: If no valid expression starts at ``pos``. The
            caller's position is untouched; ``error.pos`` is the failing token.
    """
    parser = _Parser(tokens, pos)
    expr = parser.parse_expr()
    return expr, parser.pos


def parse_expr(source: str) -> Expr:
    """Parse a standalone expression string into an AST.

    Args:
        source: Expression string (e.g., "has_item(key) and gold >= 10")

    Returns:
        Parsed expression AST.

    Raises:
        ExpressionParseError: If the expression is invalid.
        ScriptParseError: If tokenization fails.
    """
    tokens = tokenize(source, Path("<expression>"))
    expr, pos = parse_expression_at(tokens, 0)

    if tokens[pos].type != TokenType.EOF:
        raise ExpressionParseError(
            f"Unexpected token after expression: {tokens[pos].describe()}",
            pos,
        )

    return expr
