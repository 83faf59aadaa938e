"""Tests for compiling script files and whole projects."""

import logging
from pathlib import Path

import pytest

from pakscript.core import ir
from pakscript.core.compiler import compile_file, compile_project
from pakscript.core.errors import ScriptParseError


class TestCompileFile:
    """compile_file reads a file and compiles it."""

    def test_shopkeeper(self, script_fixtures_dir: Path) -> None:
        script = compile_file(script_fixtures_dir / "shopkeeper.script")

        assert script.section_names == ["start", "open_shop_buy", "open_shop_sell", "farewell"]
        assert script.get_section("start") == (
            ir.Talk(
                text_id="shopkeeper-greeting",
                choices=(
                    ("buy", "open_shop_buy"),
                    ("sell", "open_shop_sell"),
                    ("leave", "farewell"),
                ),
            ),
        )
        assert script.get_section("open_shop_sell") == (
            ir.Special(special=ir.SpecialInstruction.SHOP_SELL),
            ir.Jump(section="farewell"),
        )

    def test_gatekeeper(self, script_fixtures_dir: Path) -> None:
        script = compile_file(script_fixtures_dir / "gatekeeper.script")

        assert len(script) == 5
        start = script.get_section("start")
        assert start is not None
        assert start[1] == ir.JumpIf(section="has_key", condition=ir.HasItem(item_id="gate-key"))
        assert script.get_section("pay_toll") == (
            ir.ReceiveMoney(
                amount=ir.UnaryExpr(op=ir.UnaryOp.NEG, operand=ir.Literal(value=50))
            ),
            ir.GSet(var_name="gate_paid", value=ir.Literal(value=True)),
            ir.Jump(section="already_paid"),
        )
        assert script.get_section("end") == ()

    def test_broken_file_reports_its_path(self, script_fixtures_dir: Path) -> None:
        path = script_fixtures_dir / "broken.script"
        with pytest.raises(ScriptParseError) as exc_info:
            compile_file(path)
        err = exc_info.value
        assert err.context is not None
        assert err.context.file == path
        assert err.context.line == 3
        assert "special(shop_steal)" in str(err)

    def test_invalid_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.script"
        path.write_bytes(b"--- start\ntalk(ok)\ntalk(\xff)\n")
        with pytest.raises(ScriptParseError, match="not valid UTF-8") as exc_info:
            compile_file(path)
        err = exc_info.value
        assert err.context is not None
        assert err.context.file == path
        assert (err.context.line, err.context.column) == (3, 6)

    def test_crlf_line_endings(self, tmp_path: Path) -> None:
        path = tmp_path / "windows.script"
        path.write_bytes(b"--- start\r\ntalk(hello)\r\njump(start)\r\n")
        assert compile_file(path).get_section("start") == (
            ir.Talk(text_id="hello"),
            ir.Jump(section="start"),
        )

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            compile_file(tmp_path / "nope.script")


class TestCompileProject:
    """compile_project keeps going past failing files."""

    def test_all_files_compile(self, script_fixtures_dir: Path) -> None:
        files = [
            script_fixtures_dir / "shopkeeper.script",
            script_fixtures_dir / "gatekeeper.script",
        ]
        build = compile_project(files)

        assert build.ok
        assert list(build.scripts) == files
        assert build.failures == []

    def test_failure_is_collected(self, script_fixtures_dir: Path) -> None:
        good = script_fixtures_dir / "shopkeeper.script"
        bad = script_fixtures_dir / "broken.script"
        build = compile_project([bad, good])

        assert not build.ok
        assert list(build.scripts) == [good]
        assert [path for path, _ in build.failures] == [bad]
        assert isinstance(build.failures[0][1], ScriptParseError)

    def test_same_stem_in_different_directories(self, tmp_path: Path) -> None:
        (tmp_path / "town").mkdir()
        (tmp_path / "castle").mkdir()
        town = tmp_path / "town" / "guard.script"
        castle = tmp_path / "castle" / "guard.script"
        town.write_text("--- start\ntalk(town-guard)\n", encoding="utf-8")
        castle.write_text("--- start\ntalk(castle-guard)\n", encoding="utf-8")

        build = compile_project([town, castle])

        assert build.scripts[town].get_section("start") == (ir.Talk(text_id="town-guard"),)
        assert build.scripts[castle].get_section("start") == (ir.Talk(text_id="castle-guard"),)

    def test_failure_is_logged(
        self, script_fixtures_dir: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="pakscript.core.compiler"):
            compile_project([script_fixtures_dir / "broken.script"])
        assert "Failed to compile" in caplog.text

    def test_undecodable_file_is_collected(self, tmp_path: Path) -> None:
        bad = tmp_path / "bad.script"
        bad.write_bytes(b"--- start\ntalk(\xff)\n")
        build = compile_project([bad])
        assert [path for path, _ in build.failures] == [bad]

    def test_empty_project(self) -> None:
        build = compile_project([])
        assert build.ok
        assert build.scripts == {}
