"""
Expression types embedded in script instructions.

The instruction grammar treats these as opaque values: they are produced by
``pakscript.core.expression_lang`` and stored on ``JumpIf``, ``GSet`` and
``ReceiveMoney`` for the runtime interpreter to evaluate.

Supports:
- Literals: 42, "text", true, false
- Global variable references: quest-stage, gold_paid
- Inventory predicate: has_item(key)
- Arithmetic: +, -, *, /, %
- Comparison: ==, !=, <, >, <=, >=
- Logic: and, or, not
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class BinaryOp(StrEnum):
    """Binary operators for expressions."""

    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    # Comparison
    EQ = "=="
    NE = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    # Logical
    AND = "and"
    OR = "or"


class UnaryOp(StrEnum):
    """Unary operators for expressions."""

    NEG = "-"
    NOT = "not"


# Inverse of the escapes the lexer accepts inside string literals
_STRING_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"}


def escape_string(value: str) -> str:
    """Escape a string so that it reads back as the same literal."""
    return "".join(_STRING_ESCAPES.get(ch, ch) for ch in value)


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Literal(BaseModel):
    """A literal value: bool, int or str."""

    value: bool | int | str = Field(description="The literal value")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        if isinstance(self.value, str):
            return f'"{escape_string(self.value)}"'
        return str(self.value)


class GVarRef(BaseModel):
    """Reference to a global game variable, resolved by the interpreter."""

    name: str = Field(description="Global variable name")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return self.name


class HasItem(BaseModel):
    """True when the player's inventory holds the named item."""

    item_id: str = Field(description="Item identifier")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"has_item({self.item_id})"


class BinaryExpr(BaseModel):
    """Binary operation: left op right."""

    op: BinaryOp
    left: Expr
    right: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


class UnaryExpr(BaseModel):
    """Unary operation: op operand."""

    op: UnaryOp
    operand: Expr

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        if self.op == UnaryOp.NOT:
            return f"not {self.operand}"
        return f"-{self.operand}"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Literal | GVarRef | HasItem | BinaryExpr | UnaryExpr

# Rebuild models for recursive forward references
BinaryExpr.model_rebuild()
UnaryExpr.model_rebuild()
