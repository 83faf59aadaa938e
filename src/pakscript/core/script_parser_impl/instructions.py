"""
Instruction parser mixin for pakscript.

Parses one instruction statement.

Script Syntax:

    jump(section)
    jump_if(section, expr)
    talk(text_id)
    talk(text_id, [(label, section), (label, section)])
    gset(var_name, expr)
    receive_money(expr)
    remove_item(item_id)
    special(shop_buy)

Line breaks inside the parentheses are insignificant, so a long choice list
can continue on the next line. The closing parenthesis must be followed by
the end of the line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .. import ir
from ..expression_lang import ExpressionParseError, parse_expression_at
from ..lexer import TokenType


class InstructionParserMixin:
    """Parser mixin for instruction statements."""

    if TYPE_CHECKING:
        tokens: Any
        pos: Any
        expect: Any
        expect_keyword: Any
        expect_end_of_statement: Any
        advance: Any
        match: Any
        skip_newlines: Any
        current_token: Any
        error: Any
        attempt: Any

    def parse_instruction(self) -> ir.Instruction | None:
        """
        Parse one instruction, or return None without consuming input.

        Forms are tried in order and the first match wins. ``talk`` with
        choices must come before plain ``talk``, which is a prefix of it.
        """
        rules = (
            self.parse_jump,
            self.parse_jump_if,
            self.parse_talk_with_choices,
            self.parse_talk,
            self.parse_gset,
            self.parse_receive_money,
            self.parse_remove_item,
            self.parse_special,
        )
        for rule in rules:
            instruction = self.attempt(rule)
            if instruction is not None:
                return instruction
        return None

    # -- Argument list helpers --

    def _open_args(self, keyword: str) -> None:
        self.expect_keyword(keyword)
        self.skip_newlines()
        self.expect(TokenType.LPAREN)

    def _close_args(self) -> None:
        self.skip_newlines()
        self.expect(TokenType.RPAREN)
        self.expect_end_of_statement()

    def _arg(self, token_type: TokenType) -> str:
        self.skip_newlines()
        return self.expect(token_type).value

    def _identifier_arg(self) -> str:
        return self._arg(TokenType.IDENTIFIER)

    def _comma(self) -> None:
        self._arg(TokenType.COMMA)

    def _expression_arg(self) -> ir.Expr:
        try:
            expr, self.pos = parse_expression_at(self.tokens, self.pos)
        except ExpressionParseError as e:
            self.pos = e.pos
            raise self.error(e.message) from e
        return expr

    # -- Instruction forms --

    def parse_jump(self) -> ir.Jump:
        """jump ( IDENT ) EOL"""
        self._open_args("jump")
        section = self._identifier_arg()
        self._close_args()
        return ir.Jump(section=section)

    def parse_jump_if(self) -> ir.JumpIf:
        """jump_if ( IDENT , expr ) EOL"""
        self._open_args("jump_if")
        section = self._identifier_arg()
        self._comma()
        condition = self._expression_arg()
        self._close_args()
        return ir.JumpIf(section=section, condition=condition)

    def parse_talk_with_choices(self) -> ir.Talk:
        """talk ( IDENT , [ choice (, choice)* ] ) EOL"""
        self._open_args("talk")
        text_id = self._identifier_arg()
        self._comma()
        self._arg(TokenType.LBRACKET)

        choices = [self._parse_choice()]
        self.skip_newlines()
        while self.match(TokenType.COMMA):
            self.advance()
            choices.append(self._parse_choice())
            self.skip_newlines()

        self._arg(TokenType.RBRACKET)
        self._close_args()
        return ir.Talk(text_id=text_id, choices=tuple(choices))

    def _parse_choice(self) -> tuple[str, str]:
        """( IDENT , IDENT )"""
        self._arg(TokenType.LPAREN)
        label = self._identifier_arg()
        self._comma()
        target = self._identifier_arg()
        self._arg(TokenType.RPAREN)
        return label, target

    def parse_talk(self) -> ir.Talk:
        """talk ( IDENT ) EOL"""
        self._open_args("talk")
        text_id = self._identifier_arg()
        self._close_args()
        return ir.Talk(text_id=text_id)

    def parse_gset(self) -> ir.GSet:
        """gset ( IDENT , expr ) EOL"""
        self._open_args("gset")
        var_name = self._identifier_arg()
        self._comma()
        value = self._expression_arg()
        self._close_args()
        return ir.GSet(var_name=var_name, value=value)

    def parse_receive_money(self) -> ir.ReceiveMoney:
        """receive_money ( expr ) EOL"""
        self._open_args("receive_money")
        amount = self._expression_arg()
        self._close_args()
        return ir.ReceiveMoney(amount=amount)

    def parse_remove_item(self) -> ir.RemoveItem:
        """remove_item ( IDENT ) EOL"""
        self._open_args("remove_item")
        item_id = self._identifier_arg()
        self._close_args()
        return ir.RemoveItem(item_id=item_id)

    def parse_special(self) -> ir.Special:
        """special ( SYMBOL ) EOL, SYMBOL from the closed special table"""
        self._open_args("special")
        self.skip_newlines()
        symbol_tok = self.expect(TokenType.IDENTIFIER)
        special = ir.special_from_symbol(symbol_tok.value)
        if special is None:
            known = ", ".join(ir.SPECIAL_INSTRUCTIONS)
            raise self.error(
                f"Unknown special instruction {symbol_tok.value!r} (expected one of: {known})",
                symbol_tok,
            )
        self._close_args()
        return ir.Special(special=special)
