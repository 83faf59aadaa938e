"""
Base parser class for pakscript.

Provides token navigation, matching, backtracking and error generation used
by all parser mixins.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Protocol, TypeVar, runtime_checkable

from ..errors import ScriptParseError, make_parse_error, source_snippet
from ..lexer import Token, TokenType

T = TypeVar("T")


@runtime_checkable
class ParserProtocol(Protocol):
    """
    Protocol defining the interface available to parser mixins.

    This allows mypy to understand that mixins will have access to
    BaseParser methods when combined in the final ScriptParser class.
    """

    tokens: list[Token]
    file: Path
    pos: int

    def current_token(self) -> Token: ...
    def advance(self) -> Token: ...
    def expect(self, token_type: TokenType) -> Token: ...
    def expect_keyword(self, keyword: str) -> Token: ...
    def match(self, *token_types: TokenType) -> bool: ...
    def skip_newlines(self) -> None: ...
    def error(self, message: str) -> ScriptParseError: ...
    def attempt(self, rule: Callable[[], T]) -> T | None: ...


class BaseParser:
    """
    Base parser class with token manipulation utilities.

    Grammar rules raise ScriptParseError on mismatch. ``attempt`` runs a rule
    and rewinds on failure, so alternatives can be tried in order without
    consuming input; it also remembers the failure that got furthest into
    the token stream, which is what gets reported if nothing matches.
    """

    def __init__(self, tokens: list[Token], file: Path, text: str = ""):
        """
        Initialize parser.

        Args:
            tokens: List of tokens from lexer
            file: Source file path (for error reporting)
            text: Source text (for error snippets)
        """
        self.tokens = tokens
        self.file = file
        self.text = text
        self.pos = 0
        self._furthest_error: ScriptParseError | None = None
        self._furthest_pos = -1

    def current_token(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[self.pos]

    def peek_token(self, offset: int = 1) -> Token:
        """Peek ahead at token."""
        pos = self.pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]  # Return EOF
        return self.tokens[pos]

    def advance(self) -> Token:
        """Consume and return current token."""
        token = self.current_token()
        if token.type != TokenType.EOF:
            self.pos += 1
        return token

    def match(self, *token_types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current_token().type in token_types

    def skip_newlines(self) -> None:
        """Skip any NEWLINE tokens."""
        while self.match(TokenType.NEWLINE):
            self.advance()

    def error(self, message: str, token: Token | None = None) -> ScriptParseError:
        """Build a ScriptParseError located at ``token`` (default: current token)."""
        token = token or self.current_token()
        return make_parse_error(
            message,
            self.file,
            token.line,
            token.column,
            snippet=source_snippet(self.text, token.line) if self.text else None,
        )

    def expect(self, token_type: TokenType) -> Token:
        """
        Expect a specific token type and consume it.

        Raises:
            ScriptParseError: If token doesn't match
        """
        token = self.current_token()
        if token.type != token_type:
            raise self.error(f"Expected {token_type.value!r}, got {token.describe()}")
        return self.advance()

    def expect_keyword(self, keyword: str) -> Token:
        """
        Expect an identifier spelled ``keyword``.

        Instruction keywords are not reserved words: ``talk`` is still a
        valid section or text id.
        """
        token = self.current_token()
        if token.type != TokenType.IDENTIFIER or token.value != keyword:
            raise self.error(f"Expected {keyword!r}, got {token.describe()}")
        return self.advance()

    def expect_end_of_statement(self) -> Token:
        """A statement ends with a line terminator; end of input does not count."""
        token = self.current_token()
        if token.type != TokenType.NEWLINE:
            raise self.error(f"Expected end of line, got {token.describe()}")
        return self.advance()

    def attempt(self, rule: Callable[[], T]) -> T | None:
        """
        Run ``rule``; on failure rewind to the starting position and return None.
        """
        start = self.pos
        try:
            return rule()
        except ScriptParseError as e:
            if self.pos > self._furthest_pos:
                self._furthest_pos = self.pos
                self._furthest_error = e
            self.pos = start
            return None

    def furthest_error(self) -> ScriptParseError | None:
        """The recorded failure that got past the current position, if any."""
        if self._furthest_error is not None and self._furthest_pos > self.pos:
            return self._furthest_error
        return None
