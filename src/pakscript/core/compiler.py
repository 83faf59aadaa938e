"""
Compile script sources into ``Script`` values.

``compile_script`` is the core entry point: text in, ``Script`` out, or a
single ``ScriptParseError``. The file and project helpers wrap it for the
content build.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from . import ir
from .errors import ScriptParseError, make_parse_error
from .script_parser_impl import parse_script

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_NAME = Path("<script>")


def compile_script(text: str, file: Path | None = None) -> ir.Script:
    """
    Compile script source text.

    Args:
        text: Complete script source
        file: Optional source path, used only in error messages

    Returns:
        The compiled Script

    Raises:
        ScriptParseError: If any part of the input is not valid script syntax
    """
    source = file or DEFAULT_SOURCE_NAME
    sections = parse_script(text, source)
    script = ir.Script.from_sections(sections)
    logger.debug(
        "Compiled %s: %d section(s), %d instruction(s)",
        source,
        len(script),
        sum(len(instructions) for instructions in script.sections.values()),
    )
    return script


def compile_file(path: Path) -> ir.Script:
    """
    Read and compile one script file.

    The file must be UTF-8. Bytes that do not decode are reported as a
    ScriptParseError located at the first bad byte.
    """
    data = path.read_bytes()
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        line = data.count(b"\n", 0, e.start) + 1
        column = e.start - data.rfind(b"\n", 0, e.start)
        raise make_parse_error(
            f"File is not valid UTF-8 (byte {data[e.start]:#04x})", path, line, column
        ) from e
    return compile_script(text, path)


@dataclass
class ProjectBuild:
    """
    Result of compiling a set of script files.

    Attributes:
        scripts: Compiled scripts keyed by source path
        failures: Files that did not compile, with their error
    """

    scripts: dict[Path, ir.Script] = field(default_factory=dict)
    failures: list[tuple[Path, ScriptParseError]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def compile_project(files: list[Path]) -> ProjectBuild:
    """
    Compile every file, collecting failures instead of stopping at the first.

    Each file is still all-or-nothing: a file with an error contributes no
    script at all.
    """
    build = ProjectBuild()
    for f in files:
        try:
            script = compile_file(f)
        except ScriptParseError as e:
            logger.warning("Failed to compile %s", f)
            build.failures.append((f, e))
            continue

        build.scripts[f] = script

    logger.info(
        "Compiled %d of %d script file(s)",
        len(files) - len(build.failures),
        len(files),
    )
    return build
