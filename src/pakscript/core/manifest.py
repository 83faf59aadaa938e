import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import make_manifest_error

MANIFEST_FILENAME = "pakscript.toml"
DEFAULT_SCRIPT_PATHS = ["scripts/"]
DEFAULT_SCRIPT_EXTENSION = ".script"


@dataclass
class ProjectManifest:
    """Project configuration loaded from pakscript.toml."""

    name: str
    version: str
    project_root: Path
    script_paths: list[str] = field(default_factory=lambda: list(DEFAULT_SCRIPT_PATHS))
    extension: str = DEFAULT_SCRIPT_EXTENSION  # suffix of script source files


def load_manifest(path: Path) -> ProjectManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise make_manifest_error(f"invalid TOML: {e}", path) from e

    project = data.get("project", {})
    scripts = data.get("scripts", {})

    script_paths = scripts.get("paths", DEFAULT_SCRIPT_PATHS)
    if not isinstance(script_paths, list) or not all(isinstance(p, str) for p in script_paths):
        raise make_manifest_error("[scripts] paths must be a list of strings", path)

    extension = scripts.get("extension", DEFAULT_SCRIPT_EXTENSION)
    if not isinstance(extension, str):
        raise make_manifest_error("[scripts] extension must be a string", path)
    if not extension.startswith("."):
        extension = f".{extension}"

    return ProjectManifest(
        name=project.get("name", path.parent.name),
        version=project.get("version", "0.0.0"),
        project_root=path.parent,
        script_paths=list(script_paths),
        extension=extension,
    )
