"""Cargo manifest discovery and parsing."""

from __future__ import annotations

import tomllib
from pathlib import Path

from .constants import MANIFEST_FILENAME
from .exceptions import ManifestError
from .models import CrateInfo


def find_project_root(start: Path) -> Path | None:
    """Locate the nearest directory containing ``Cargo.toml``.

    Walks parent directories from `start` up to the filesystem root.

    Args:
        start: Directory where the search begins.

    Returns:
        Path | None: The project root, or None when no manifest is found.

    Examples:
        find_project_root(Path.cwd() / "src")
    """
    current = start.resolve()

    while True:
        if (current / MANIFEST_FILENAME).is_file():
            return current

        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_crate_info(project_root: Path) -> CrateInfo:
    """Read crate metadata from the project's ``Cargo.toml``.

    Args:
        project_root: Directory holding the manifest.

    Returns:
        CrateInfo: Name, license, and entrypoint paths of the crate.

    Raises:
        ManifestError: If the manifest is missing, is not valid TOML, or
            declares unusable metadata.
    """
    manifest_path = project_root / MANIFEST_FILENAME
    try:
        with open(manifest_path, "rb") as stream:
            data = tomllib.load(stream)
    except FileNotFoundError as error:
        raise ManifestError(f"{MANIFEST_FILENAME} not found in '{project_root}'") from error
    except OSError as error:
        raise ManifestError(f"Error reading {manifest_path}: {error}") from error
    except tomllib.TOMLDecodeError as error:
        raise ManifestError(f"Invalid TOML in {manifest_path}: {error}") from error

    return parse_crate_info(data, manifest_path)


def parse_crate_info(data: dict, manifest_path: Path | str = MANIFEST_FILENAME) -> CrateInfo:
    """Build a `CrateInfo` from a decoded manifest.

    When several ``[[bin]]`` targets declare a ``path``, the last one wins.

    Args:
        data: Decoded TOML document.
        manifest_path: Manifest location, used in error messages.

    Returns:
        CrateInfo: Crate metadata.

    Raises:
        ManifestError: If ``package.name`` is missing or any field has the
            wrong type.

    Examples:
        parse_crate_info({"package": {"name": "demo", "license": "MIT"}})
    """
    package = data.get("package")
    if not isinstance(package, dict):
        raise ManifestError(f"Missing `[package]` table in {manifest_path}")

    name = package.get("name")
    if not isinstance(name, str) or not name:
        raise ManifestError(f"Missing `package.name` in {manifest_path}")

    license_name = _optional_string(package, "license", "package.license", manifest_path)

    lib_table = data.get("lib", {})
    if not isinstance(lib_table, dict):
        raise ManifestError(f"Invalid `[lib]` table in {manifest_path}")
    lib = _optional_string(lib_table, "path", "lib.path", manifest_path)

    bin_targets = data.get("bin", [])
    if not isinstance(bin_targets, list):
        raise ManifestError(f"Invalid `[[bin]]` targets in {manifest_path}")

    bin_path = None
    for index, target in enumerate(bin_targets):
        if not isinstance(target, dict):
            raise ManifestError(f"Invalid `[[bin]]` target #{index + 1} in {manifest_path}")
        path = _optional_string(target, "path", f"bin.{index}.path", manifest_path)
        if path is not None:
            bin_path = path

    return CrateInfo(name=name, license=license_name, lib=lib, bin=bin_path)


def _optional_string(table: dict, key: str, display: str, manifest_path: Path | str) -> str | None:
    value = table.get(key)
    if value is not None and not isinstance(value, str):
        raise ManifestError(f"`{display}` must be a string in {manifest_path}")
    return value
