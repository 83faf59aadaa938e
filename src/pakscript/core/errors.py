"""
Error types for pakscript compilation and project configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class PakScriptError(Exception):
    """Base exception for all pakscript errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message

    @property
    def description(self) -> str:
        """Full human-readable description, location included."""
        return str(self)


class ScriptParseError(PakScriptError):
    """
    Raised when a script source cannot be compiled.

    This is the only error kind produced by compilation. Examples:
    - Malformed section header
    - Line that matches no instruction form
    - Unknown special instruction symbol
    - Unconsumed trailing input
    """

    pass


class ManifestError(PakScriptError):
    """
    Raised when a pakscript.toml manifest cannot be read.

    Examples:
    - Invalid TOML syntax
    - Wrong value types for known keys
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file where error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source lines around the error location
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "npc_guard.script:10:5"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet starts SNIPPET_CONTEXT lines before the error line
        start_line = max(1, self.line - SNIPPET_CONTEXT)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


SNIPPET_CONTEXT = 2


def source_snippet(text: str, line: int) -> str:
    """
    Return the source lines surrounding ``line`` (1-indexed).

    Lines are split on ``\\n`` only, matching how the lexer counts them.
    """
    lines = [part.removesuffix("\r") for part in text.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()
    start = max(1, line - SNIPPET_CONTEXT)
    end = min(len(lines), line + SNIPPET_CONTEXT)
    return "\n".join(lines[start - 1 : end])


def make_parse_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    snippet: str | None = None,
) -> ScriptParseError:
    """
    Helper to create a ScriptParseError with context.

    Args:
        message: Error description
        file: Source file path
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional code snippet

    Returns:
        ScriptParseError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column, snippet=snippet)
    return ScriptParseError(message, context)


def make_manifest_error(message: str, file: Path | None = None) -> ManifestError:
    """Helper to create a ManifestError, prefixed with the manifest path if known."""
    if file is not None:
        return ManifestError(f"{file}: {message}")
    return ManifestError(message)
