"""Tests for the instruction grammar: one fixture per form plus backtracking rules."""

from pathlib import Path

import pytest

from pakscript.core import ir
from pakscript.core.lexer import TokenType, tokenize
from pakscript.core.script_parser_impl import ScriptParser

FILE = Path("test.script")


def parse_one(text: str) -> tuple[ir.Instruction | None, ScriptParser]:
    parser = ScriptParser(tokenize(text, FILE), FILE, text)
    return parser.parse_instruction(), parser


def parse_complete(text: str) -> ir.Instruction:
    instruction, parser = parse_one(text)
    assert instruction is not None
    assert parser.current_token().type == TokenType.EOF
    return instruction


class TestInstructionForms:
    """Each of the instruction forms parses to the expected tagged value."""

    def test_jump(self) -> None:
        assert parse_complete(" jump ( other_section ) \n") == ir.Jump(section="other_section")

    def test_jump_if(self) -> None:
        assert parse_complete("jump_if(has-key, has_item(key))\n") == ir.JumpIf(
            section="has-key", condition=ir.HasItem(item_id="key")
        )

    def test_talk(self) -> None:
        assert parse_complete("talk(textid0)\n") == ir.Talk(text_id="textid0", choices=())

    def test_talk_with_choices(self) -> None:
        assert parse_complete("talk(text-id, [(a, b), (c, d)])\n") == ir.Talk(
            text_id="text-id", choices=(("a", "b"), ("c", "d"))
        )

    def test_talk_with_single_choice(self) -> None:
        assert parse_complete("talk(t, [(ok, next)])\n") == ir.Talk(
            text_id="t", choices=(("ok", "next"),)
        )

    def test_gset(self) -> None:
        assert parse_complete("gset(gate_paid, true)\n") == ir.GSet(
            var_name="gate_paid", value=ir.Literal(value=True)
        )

    def test_receive_money(self) -> None:
        assert parse_complete("receive_money(100)\n") == ir.ReceiveMoney(
            amount=ir.Literal(value=100)
        )

    def test_receive_money_expression(self) -> None:
        assert parse_complete("receive_money(reward * 2)\n") == ir.ReceiveMoney(
            amount=ir.BinaryExpr(
                op=ir.BinaryOp.MUL, left=ir.GVarRef(name="reward"), right=ir.Literal(value=2)
            )
        )

    def test_remove_item(self) -> None:
        assert parse_complete("remove_item(gate-key)\n") == ir.RemoveItem(item_id="gate-key")

    @pytest.mark.parametrize(
        "symbol, kind",
        [
            ("shop_buy", ir.SpecialInstruction.SHOP_BUY),
            ("shop_sell", ir.SpecialInstruction.SHOP_SELL),
        ],
    )
    def test_special(self, symbol: str, kind: ir.SpecialInstruction) -> None:
        assert parse_complete(f"special({symbol})\n") == ir.Special(special=kind)


class TestMultiLine:
    """Line breaks inside the argument list are insignificant."""

    def test_choice_list_on_next_line(self) -> None:
        single = parse_complete("talk(text-id, [(a, b), (c, d)])\n")
        split = parse_complete("talk(text-id,\n     [(a, b), (c, d)])\n")
        assert split == single

    def test_every_argument_on_its_own_line(self) -> None:
        text = "talk(\n  text-id,\n  [\n    (a, b),\n    (c, d)\n  ]\n)\n"
        assert parse_complete(text) == ir.Talk(
            text_id="text-id", choices=(("a", "b"), ("c", "d"))
        )

    def test_multi_line_expression(self) -> None:
        assert parse_complete("jump_if(next,\n  gold >= 10\n)\n") == ir.JumpIf(
            section="next",
            condition=ir.BinaryExpr(
                op=ir.BinaryOp.GE, left=ir.GVarRef(name="gold"), right=ir.Literal(value=10)
            ),
        )


class TestNoMatch:
    """A failed match returns None and leaves the position untouched."""

    @pytest.mark.parametrize(
        "text",
        [
            "special(shop_steal)\n",
            "jump(a) extra\n",
            "jump(a)",
            "talk(t, [])\n",
            "talk(t, [(a, b),])\n",
            "gset(x, )\n",
            "remove_item(1)\n",
            "teleport(town)\n",
            "--- next\n",
        ],
    )
    def test_rejected(self, text: str) -> None:
        instruction, parser = parse_one(text)
        assert instruction is None
        assert parser.pos == 0

    def test_unknown_special_is_the_furthest_failure(self) -> None:
        instruction, parser = parse_one("special(shop_steal)\n")
        assert instruction is None
        err = parser.furthest_error()
        assert err is not None
        assert "Unknown special instruction 'shop_steal'" in err.message

    def test_missing_end_of_line_is_the_furthest_failure(self) -> None:
        instruction, parser = parse_one("jump(a)")
        assert instruction is None
        err = parser.furthest_error()
        assert err is not None
        assert "Expected end of line" in err.message

    def test_keywords_are_not_reserved(self) -> None:
        assert parse_complete("jump(talk)\n") == ir.Jump(section="talk")


class TestSpecialTable:
    """The special-instruction table is closed and reversible."""

    def test_every_kind_round_trips_through_its_symbol(self) -> None:
        for kind in ir.SpecialInstruction:
            assert ir.special_from_symbol(str(kind)) is kind

    def test_table_covers_every_kind(self) -> None:
        assert set(ir.SPECIAL_INSTRUCTIONS.values()) == set(ir.SpecialInstruction)

    def test_unknown_symbol(self) -> None:
        assert ir.special_from_symbol("shop_steal") is None
        assert ir.special_from_symbol("SHOP_BUY") is None
