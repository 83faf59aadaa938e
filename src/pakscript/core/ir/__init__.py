"""
pakscript Intermediate Representation (IR) types.

Types are organized into submodules and re-exported from this package.
"""

# Expressions
from .expressions import (
    BinaryExpr,
    BinaryOp,
    Expr,
    GVarRef,
    HasItem,
    Literal,
    UnaryExpr,
    UnaryOp,
)

# Instructions
from .instructions import (
    SPECIAL_INSTRUCTIONS,
    GSet,
    Instruction,
    Jump,
    JumpIf,
    ReceiveMoney,
    RemoveItem,
    Special,
    SpecialInstruction,
    Talk,
    special_from_symbol,
)

# Sections and scripts
from .script import (
    Script,
    SectionSpec,
)

__all__ = [
    # Expressions
    "BinaryExpr",
    "BinaryOp",
    "Expr",
    "GVarRef",
    "HasItem",
    "Literal",
    "UnaryExpr",
    "UnaryOp",
    # Instructions
    "SPECIAL_INSTRUCTIONS",
    "GSet",
    "Instruction",
    "Jump",
    "JumpIf",
    "ReceiveMoney",
    "RemoveItem",
    "Special",
    "SpecialInstruction",
    "Talk",
    "special_from_symbol",
    # Sections and scripts
    "Script",
    "SectionSpec",
]
