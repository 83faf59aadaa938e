"""
pakscript command line interface.

Commands:
- check: compile script files and report errors (exit 1 on any failure)
- dump: print one compiled script as JSON or normalised script text
"""

import json
import logging
from pathlib import Path

import typer

from pakscript._version import get_version
from pakscript.core import ir
from pakscript.core.compiler import compile_file, compile_project
from pakscript.core.errors import ManifestError, ScriptParseError
from pakscript.core.fileset import discover_script_files
from pakscript.core.manifest import MANIFEST_FILENAME, load_manifest

app = typer.Typer(
    help="Compile and inspect pakscript event scripts.",
    no_args_is_help=True,
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        typer.echo(f"pakscript version {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _discover_from_manifest(manifest: Path) -> list[Path]:
    if not manifest.exists():
        typer.echo(f"No script files given and no manifest at {manifest}", err=True)
        raise typer.Exit(code=1)
    try:
        mf = load_manifest(manifest)
    except ManifestError as e:
        typer.echo(f"Error loading manifest: {e}", err=True)
        raise typer.Exit(code=1)
    return discover_script_files(mf.project_root, mf)


@app.command()
def check(
    files: list[Path] | None = typer.Argument(
        None,
        exists=True,
        dir_okay=False,
        help="Script files to compile (default: discover via manifest)",
    ),
    manifest: str = typer.Option(
        MANIFEST_FILENAME, "--manifest", "-m", help="Path to pakscript.toml"
    ),
) -> None:
    """
    Compile script files and report every error.

    Scripts are build-time content: any failure makes the command exit with
    status 1 so that packaging stops.
    """
    script_files = files or _discover_from_manifest(Path(manifest))
    if not script_files:
        typer.echo("No script files found.", err=True)
        raise typer.Exit(code=1)

    build = compile_project(script_files)
    failed = dict(build.failures)

    for f in script_files:
        if f in failed:
            typer.echo(f"FAILED {f}", err=True)
            typer.echo(str(failed[f]), err=True)
        else:
            typer.echo(f"OK {f} ({len(build.scripts[f])} sections)")

    if not build.ok:
        typer.echo(f"\n{len(build.failures)} of {len(script_files)} script(s) failed", err=True)
        raise typer.Exit(code=1)


def _render_text(sections: dict[str, tuple[ir.Instruction, ...]]) -> str:
    lines = []
    for name, instructions in sections.items():
        lines.append(f"--- {name}")
        lines.extend(str(instruction) for instruction in instructions)
    return "\n".join(lines)


@app.command()
def dump(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Script file"),
    section: str | None = typer.Option(None, "--section", "-s", help="Only this section"),
    format: str = typer.Option("json", "--format", "-f", help="Output format: json | text"),
) -> None:
    """Compile one script and print it."""
    if format not in ("json", "text"):
        typer.echo(f"Unknown format: {format} (expected json or text)", err=True)
        raise typer.Exit(code=1)

    try:
        script = compile_file(file)
    except ScriptParseError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    sections = dict(script.sections)
    if section is not None:
        instructions = script.get_section(section)
        if instructions is None:
            typer.echo(f"No section named {section!r} in {file}", err=True)
            raise typer.Exit(code=1)
        sections = {section: instructions}

    if format == "text":
        typer.echo(_render_text(sections))
    else:
        data = ir.Script(sections=sections).to_dict()
        typer.echo(json.dumps(data, indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
