"""
pakscript - compiler front-end for NPC event scripts.

Turns plain-text scripts (dialogue trees, choices, shop triggers, variable
updates, item and money transfers) into immutable ``Script`` values for a
game's script interpreter.
"""

from __future__ import annotations

from ._version import get_version
from .core import ir
from .core.compiler import compile_file, compile_script
from .core.errors import ManifestError, PakScriptError, ScriptParseError
from .core.ir import Instruction, Script, SpecialInstruction

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "compile_file",
    "compile_script",
    "Instruction",
    "Script",
    "SpecialInstruction",
    "PakScriptError",
    "ScriptParseError",
    "ManifestError",
]
