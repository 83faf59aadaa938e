"""
Instruction types for compiled scripts.

``Instruction`` is a closed tagged union discriminated by the ``kind`` field.
The grammar can only produce the variants listed here; adding a variant means
adding a grammar rule in ``script_parser_impl.instructions`` and a case in
every interpreter that walks compiled scripts.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from .expressions import Expr


class SpecialInstruction(StrEnum):
    """Built-in behaviours invoked by ``special(...)``."""

    SHOP_BUY = "shop_buy"
    SHOP_SELL = "shop_sell"


# Closed symbol table for special(...) arguments. str(kind) gives the symbol back.
SPECIAL_INSTRUCTIONS: dict[str, SpecialInstruction] = {
    "shop_buy": SpecialInstruction.SHOP_BUY,
    "shop_sell": SpecialInstruction.SHOP_SELL,
}


def special_from_symbol(symbol: str) -> SpecialInstruction | None:
    """Convert a bare symbol to its special kind, or None if it is not one."""
    return SPECIAL_INSTRUCTIONS.get(symbol)


class Jump(BaseModel):
    """Unconditional transfer of control to another section."""

    kind: Literal["jump"] = "jump"
    section: str = Field(description="Target section name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"jump({self.section})"


class JumpIf(BaseModel):
    """Transfer of control to ``section`` when ``condition`` is truthy at runtime."""

    kind: Literal["jump_if"] = "jump_if"
    section: str = Field(description="Target section name")
    condition: Expr = Field(description="Condition evaluated by the interpreter")

    model_config = ConfigDict(frozen=True)

    @field_serializer("condition")
    def _serialize_condition(self, condition: Expr) -> str:
        return str(condition)

    def __str__(self) -> str:
        return f"jump_if({self.section}, {self.condition})"


class Talk(BaseModel):
    """
    Display dialogue text.

    Attributes:
        text_id: Identifier of the dialogue text
        choices: Ordered (label, target_section) pairs; empty for plain talk
    """

    kind: Literal["talk"] = "talk"
    text_id: str
    choices: tuple[tuple[str, str], ...] = ()

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if not self.choices:
            return f"talk({self.text_id})"
        choices = ", ".join(f"({label}, {target})" for label, target in self.choices)
        return f"talk({self.text_id}, [{choices}])"


class GSet(BaseModel):
    """Assign the value of an expression to a global variable."""

    kind: Literal["gset"] = "gset"
    var_name: str = Field(description="Global variable name")
    value: Expr = Field(description="Value expression")

    model_config = ConfigDict(frozen=True)

    @field_serializer("value")
    def _serialize_value(self, value: Expr) -> str:
        return str(value)

    def __str__(self) -> str:
        return f"gset({self.var_name}, {self.value})"


class ReceiveMoney(BaseModel):
    """Grant currency equal to the evaluated amount."""

    kind: Literal["receive_money"] = "receive_money"
    amount: Expr = Field(description="Amount expression")

    model_config = ConfigDict(frozen=True)

    @field_serializer("amount")
    def _serialize_amount(self, amount: Expr) -> str:
        return str(amount)

    def __str__(self) -> str:
        return f"receive_money({self.amount})"


class RemoveItem(BaseModel):
    """Remove a named item from the player's inventory."""

    kind: Literal["remove_item"] = "remove_item"
    item_id: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"remove_item({self.item_id})"


class Special(BaseModel):
    """Invoke a built-in behaviour such as opening a shop window."""

    kind: Literal["special"] = "special"
    special: SpecialInstruction

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"special({self.special})"


Instruction = Annotated[
    Jump | JumpIf | Talk | GSet | ReceiveMoney | RemoveItem | Special,
    Field(discriminator="kind"),
]
