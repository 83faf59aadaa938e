"""Shared pytest fixtures for pakscript tests."""

from pathlib import Path

import pytest

from pakscript.core import ir


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def script_fixtures_dir(fixtures_dir: Path) -> Path:
    """Return path to script fixtures directory."""
    return fixtures_dir / "scripts"


@pytest.fixture
def corpus_source() -> str:
    """Two-section script exercising talk, special, jump and a multi-line choice list."""
    return """--- test_section0
talk(textid0)
special(shop_buy)
jump(test_section1)
--- test_section1
talk(textid1,
     [(aaa, bbb), (ccc, ddd)])
"""


@pytest.fixture
def corpus_script() -> ir.Script:
    """The Script that ``corpus_source`` compiles to."""
    return ir.Script(
        sections={
            "test_section0": (
                ir.Talk(text_id="textid0"),
                ir.Special(special=ir.SpecialInstruction.SHOP_BUY),
                ir.Jump(section="test_section1"),
            ),
            "test_section1": (
                ir.Talk(text_id="textid1", choices=(("aaa", "bbb"), ("ccc", "ddd"))),
            ),
        }
    )
