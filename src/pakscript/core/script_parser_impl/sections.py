"""
Section parser mixin for pakscript.

Parses a section header and the instructions that follow it.

Script Syntax:

    --- shopkeeper_greeting
    talk(greeting, [(buy, open_shop), (leave, farewell)])
    --- open_shop
    special(shop_buy)

A section has no terminator: it runs until the next header or end of input.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..lexer import TokenType


class SectionParserMixin:
    """Parser mixin for sections."""

    if TYPE_CHECKING:
        expect: Any
        expect_end_of_statement: Any
        advance: Any
        match: Any
        skip_newlines: Any
        current_token: Any
        error: Any
        parse_instruction: Any

    def parse_section_header(self) -> str:
        """
        Parse a section header.

        Grammar:
            "---" SPACE+ IDENTIFIER EOL

        Returns:
            The section name
        """
        marker = self.expect(TokenType.SECTION_MARKER)
        name_tok = self.current_token()
        if name_tok.type != TokenType.IDENTIFIER:
            raise self.error(f"Expected section name, got {name_tok.describe()}")
        if name_tok.line != marker.line or name_tok.column <= marker.column + len(marker.value):
            raise self.error("Expected whitespace between '---' and the section name")
        self.advance()
        self.expect_end_of_statement()
        return name_tok.value

    def parse_section(self) -> ir.SectionSpec:
        """
        Parse a section: header followed by zero or more instructions.

        Instruction parsing stops at the first statement that is not an
        instruction; whatever it is gets reported by the caller if it is not
        another section header.
        """
        name = self.parse_section_header()

        instructions: list[ir.Instruction] = []
        while True:
            self.skip_newlines()
            instruction = self.parse_instruction()
            if instruction is None:
                break
            instructions.append(instruction)

        return ir.SectionSpec(name=name, instructions=tuple(instructions))
