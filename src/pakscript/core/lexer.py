"""
Lexer for pakscript event scripts.

Converts raw script text into a stream of tokens with source location tracking.
Horizontal whitespace is dropped; line terminators are kept as NEWLINE tokens
because they end statements.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import make_parse_error, source_snippet


class TokenType(Enum):
    """Token types in pakscript."""

    # Literals
    IDENTIFIER = "identifier"
    INTEGER = "integer"
    STRING = "string"

    # Section header marker
    SECTION_MARKER = "---"

    # Punctuation
    LPAREN = "("
    RPAREN = ")"
    LBRACKET = "["
    RBRACKET = "]"
    COMMA = ","

    # Operators (expression grammar)
    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    PERCENT = "%"
    DOUBLE_EQUALS = "=="
    NOT_EQUALS = "!="
    LESS_THAN = "<"
    GREATER_THAN = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="

    # Special
    NEWLINE = "end of line"
    EOF = "end of input"


SECTION_MARKER = "---"

SINGLE_CHAR_TOKENS = {
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
    ",": TokenType.COMMA,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "%": TokenType.PERCENT,
}


@dataclass
class Token:
    """
    A single token in a script.

    Attributes:
        type: Type of token
        value: String value of the token
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    type: TokenType
    value: str
    line: int
    column: int

    def describe(self) -> str:
        """Short description for error messages."""
        if self.type in (TokenType.NEWLINE, TokenType.EOF):
            return self.type.value
        return repr(self.value)

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_identifier_start(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


def is_identifier_char(ch: str) -> bool:
    # Hyphens are allowed inside identifiers: has-key, text-id
    return ch.isalnum() or ch in ("_", "-")


class Lexer:
    """
    Lexer for pakscript.

    Converts source text into a flat token stream terminated by EOF.
    """

    def __init__(self, text: str, file: Path):
        """
        Initialize lexer.

        Args:
            text: Source text to tokenize
            file: Source file path (for error reporting)
        """
        self.text = text
        self.file = file
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: list[Token] = []

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self) -> None:
        """Move to next character, updating line/column."""
        if self.pos < len(self.text):
            if self.text[self.pos] == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
            self.pos += 1

    def skip_whitespace(self) -> None:
        """Skip horizontal whitespace."""
        while self.current_char() in (" ", "\t"):
            self.advance()

    def error(self, message: str, line: int, column: int):
        return make_parse_error(
            message,
            self.file,
            line,
            column,
            snippet=source_snippet(self.text, line),
        )

    def read_string(self) -> str:
        """Read a double-quoted string. Strings cannot span lines."""
        start_line = self.line
        start_col = self.column
        self.advance()  # skip opening quote

        chars = []
        while True:
            current = self.current_char()
            if current is None or current in ('"', "\n"):
                break

            if current == "\\":
                self.advance()
                escape_char = self.current_char()
                if escape_char == "n":
                    chars.append("\n")
                elif escape_char == "t":
                    chars.append("\t")
                elif escape_char is not None and escape_char != "\n":
                    chars.append(escape_char)
                else:
                    break
                self.advance()
            else:
                chars.append(current)
                self.advance()

        if self.current_char() != '"':
            raise self.error("Unterminated string literal", start_line, start_col)

        self.advance()  # skip closing quote
        return "".join(chars)

    def read_integer(self) -> str:
        chars = []
        current = self.current_char()
        while current and is_digit(current):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def read_identifier(self) -> str:
        chars = []
        current = self.current_char()
        while current and is_identifier_char(current):
            chars.append(current)
            self.advance()
            current = self.current_char()
        return "".join(chars)

    def tokenize(self) -> list[Token]:
        """
        Tokenize the entire source text.

        Returns:
            List of tokens ending with EOF

        Raises:
            ScriptParseError: If an unexpected character is encountered
        """
        while self.pos < len(self.text):
            self.skip_whitespace()

            ch = self.current_char()
            if ch is None:
                break

            token_line = self.line
            token_col = self.column

            if ch == "\n":
                self.tokens.append(Token(TokenType.NEWLINE, "\n", token_line, token_col))
                self.advance()

            elif ch == "\r" and self.peek_char() == "\n":
                self.advance()
                self.advance()
                self.tokens.append(Token(TokenType.NEWLINE, "\r\n", token_line, token_col))

            elif ch == '"':
                value = self.read_string()
                self.tokens.append(Token(TokenType.STRING, value, token_line, token_col))

            elif is_digit(ch):
                value = self.read_integer()
                self.tokens.append(Token(TokenType.INTEGER, value, token_line, token_col))

            elif is_identifier_start(ch):
                value = self.read_identifier()
                self.tokens.append(Token(TokenType.IDENTIFIER, value, token_line, token_col))

            elif self.text.startswith(SECTION_MARKER, self.pos):
                for _ in SECTION_MARKER:
                    self.advance()
                self.tokens.append(
                    Token(TokenType.SECTION_MARKER, SECTION_MARKER, token_line, token_col)
                )

            elif ch == "=" and self.peek_char() == "=":
                self.advance()
                self.advance()
                self.tokens.append(Token(TokenType.DOUBLE_EQUALS, "==", token_line, token_col))

            elif ch == "!" and self.peek_char() == "=":
                self.advance()
                self.advance()
                self.tokens.append(Token(TokenType.NOT_EQUALS, "!=", token_line, token_col))

            elif ch == "<":
                if self.peek_char() == "=":
                    self.advance()
                    self.advance()
                    self.tokens.append(Token(TokenType.LESS_EQUAL, "<=", token_line, token_col))
                else:
                    self.advance()
                    self.tokens.append(Token(TokenType.LESS_THAN, "<", token_line, token_col))

            elif ch == ">":
                if self.peek_char() == "=":
                    self.advance()
                    self.advance()
                    self.tokens.append(Token(TokenType.GREATER_EQUAL, ">=", token_line, token_col))
                else:
                    self.advance()
                    self.tokens.append(Token(TokenType.GREATER_THAN, ">", token_line, token_col))

            elif ch in SINGLE_CHAR_TOKENS:
                self.advance()
                self.tokens.append(Token(SINGLE_CHAR_TOKENS[ch], ch, token_line, token_col))

            else:
                raise self.error(f"Unexpected character: {ch!r}", token_line, token_col)

        self.tokens.append(Token(TokenType.EOF, "", self.line, self.column))
        return self.tokens


def tokenize(text: str, file: Path) -> list[Token]:
    """
    Convenience function to tokenize script text.

    Args:
        text: Source text
        file: Source file path

    Returns:
        List of tokens
    """
    lexer = Lexer(text, file)
    return lexer.tokenize()
