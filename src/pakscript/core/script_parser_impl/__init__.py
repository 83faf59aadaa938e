"""
pakscript Parser Package.

The parser is built using mixins to separate parsing logic by construct type.

The main exports are:
- ScriptParser: The complete parser class
- parse_script: Convenience function to parse script text into sections

Usage:
    from pakscript.core.script_parser_impl import parse_script

    sections = parse_script(text, Path("guard.script"))
"""

from pathlib import Path

from .. import ir
from ..lexer import TokenType, tokenize
from .base import BaseParser
from .instructions import InstructionParserMixin
from .sections import SectionParserMixin


class ScriptParser(
    BaseParser,
    InstructionParserMixin,
    SectionParserMixin,
):
    """
    Complete pakscript parser.

    - InstructionParserMixin: the eight instruction forms
    - SectionParserMixin: section headers and instruction runs
    """

    def parse(self) -> list[ir.SectionSpec]:
        """
        Parse the whole token stream into sections, in source order.

        Raises:
            ScriptParseError: If any input is left that is neither a section
                nor an instruction inside a section
        """
        sections: list[ir.SectionSpec] = []

        self.skip_newlines()
        while not self.match(TokenType.EOF):
            section = self.attempt(self.parse_section)
            if section is None:
                raise self._unconsumed_input_error()
            sections.append(section)
            self.skip_newlines()

        return sections

    def _unconsumed_input_error(self):
        """Describe why parsing stopped before the end of input."""
        furthest = self.furthest_error()
        if furthest is not None:
            return furthest
        token = self.current_token()
        return self.error(f"Expected an instruction or section header, got {token.describe()}")


def parse_script(text: str, file: Path) -> list[ir.SectionSpec]:
    """
    Parse script text into its sections.

    Args:
        text: Script source
        file: Source file path (for error reporting)

    Returns:
        Sections in source order, duplicates included
    """
    tokens = tokenize(text, file)
    parser = ScriptParser(tokens, file, text)
    return parser.parse()


__all__ = ["ScriptParser", "parse_script"]
