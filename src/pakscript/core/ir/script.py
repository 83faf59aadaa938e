"""
Section and script IR types.

A ``Script`` is the compiled form of one script source: section names mapped
to ordered instruction lists. It is built once by the compiler and never
mutated afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from .instructions import Instruction

logger = logging.getLogger(__name__)


class SectionSpec(BaseModel):
    """
    One parsed section.

    Attributes:
        name: Section name from the ``--- name`` header
        instructions: Instructions in execution order (may be empty)
    """

    name: str
    instructions: tuple[Instruction, ...] = ()

    model_config = ConfigDict(frozen=True)


class Script(BaseModel):
    """
    Compiled script: section name -> ordered instructions.

    Use ``Script.from_sections`` to build one from parser output; it applies
    last-write-wins for duplicate section names.
    """

    sections: Mapping[str, tuple[Instruction, ...]] = Field(
        default_factory=dict, description="Instructions by section name (read-only)"
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("sections")
    @classmethod
    def _freeze_sections(
        cls, value: Mapping[str, tuple[Instruction, ...]]
    ) -> Mapping[str, tuple[Instruction, ...]]:
        return MappingProxyType(dict(value))

    @field_serializer("sections")
    def _serialize_sections(
        self, value: Mapping[str, tuple[Instruction, ...]]
    ) -> dict[str, tuple[Instruction, ...]]:
        return dict(value)

    @classmethod
    def from_sections(cls, sections: Iterable[SectionSpec]) -> Script:
        """
        Fold parsed sections into a script.

        A later section with the same name replaces the earlier one; the two
        are never merged.
        """
        folded: dict[str, tuple[Instruction, ...]] = {}
        for section in sections:
            if section.name in folded:
                logger.warning(
                    "Section %r defined more than once; the later definition replaces the earlier",
                    section.name,
                )
            folded[section.name] = section.instructions
        return cls(sections=folded)

    def get_section(self, name: str) -> tuple[Instruction, ...] | None:
        """Instructions of the named section, or None if there is no such section."""
        return self.sections.get(name)

    @property
    def section_names(self) -> list[str]:
        return list(self.sections)

    def __contains__(self, name: object) -> bool:
        return name in self.sections

    def __len__(self) -> int:
        return len(self.sections)

    def to_dict(self) -> dict[str, Any]:
        """JSON-compatible view of the script, expressions rendered as source text."""
        return {
            name: [instruction.model_dump(mode="json") for instruction in instructions]
            for name, instructions in self.sections.items()
        }
