"""
Script source discovery.

Walks the directories listed under ``[scripts] paths`` in pakscript.toml and
collects every file carrying the configured extension.
"""

from pathlib import Path

from .manifest import ProjectManifest


def discover_script_files(root: Path, manifest: ProjectManifest) -> list[Path]:
    """
    Find script sources below ``root``.

    Directories that do not exist are skipped. Paths come back resolved,
    sorted, and listed once even when search directories overlap.
    """
    pattern = f"*{manifest.extension}"
    found: set[Path] = set()
    for rel in manifest.script_paths:
        base = (root / rel).resolve()
        if not base.is_dir():
            continue
        found.update(p for p in base.rglob(pattern) if p.is_file())
    return sorted(found)
