"""Filesystem helpers for crate-readme."""

from __future__ import annotations

import os
import stat
import tempfile
from collections.abc import Callable
from pathlib import Path

from .constants import DEFAULT_ENTRYPOINTS, DEFAULT_MAX_FILE_SIZE, DEFAULT_TEMPLATE
from .exceptions import EntrypointNotFoundError, TemplateNotFoundError
from .models import CrateInfo

MAX_FILE_SIZE_ENV_VAR = "CRATE_README_MAX_FILE_SIZE"


def max_file_size_from_env(default: int = DEFAULT_MAX_FILE_SIZE) -> int:
    """Return the size limit set by ``CRATE_README_MAX_FILE_SIZE``, or `default`.

    Raises:
        ValueError: If the variable is set to anything but a positive integer.
    """
    raw_value = os.environ.get(MAX_FILE_SIZE_ENV_VAR)
    if raw_value is None:
        return default

    if not raw_value.strip().isdigit() or int(raw_value) == 0:
        raise ValueError(f"{MAX_FILE_SIZE_ENV_VAR} must be a positive integer, got {raw_value!r}")
    return int(raw_value)


def resolve_entrypoint(
    project_root: Path, crate_info: CrateInfo, input_path: str | None = None
) -> Path:
    """Find the source file whose doc comments make up the README.

    An explicit `input_path` must exist. Otherwise ``src/lib.rs`` and
    ``src/main.rs`` are tried, then the library and binary paths declared in
    the manifest.

    Args:
        project_root: Directory holding ``Cargo.toml``.
        crate_info: Crate metadata providing declared entrypoints.
        input_path: Optional source file, relative to `project_root`.

    Returns:
        Path: The source file to extract documentation from.

    Raises:
        EntrypointNotFoundError: If no candidate is a regular file.

    Examples:
        resolve_entrypoint(Path("my-crate"), CrateInfo("my-crate"))
    """
    if input_path is not None:
        candidates = [input_path]
    else:
        candidates = [*DEFAULT_ENTRYPOINTS]
        candidates.extend(path for path in (crate_info.lib, crate_info.bin) if path)

    for candidate in candidates:
        path = project_root / candidate
        if path.is_file():
            return path

    raise EntrypointNotFoundError([str(project_root / candidate) for candidate in candidates])


def resolve_template(
    project_root: Path, template_path: str | None = None, no_template: bool = False
) -> Path | None:
    """Find the template to render the README with.

    Args:
        project_root: Directory holding ``Cargo.toml``.
        template_path: Optional template file, relative to `project_root`.
        no_template: Skip templating entirely, even when ``README.tpl`` exists.

    Returns:
        Path | None: The template file, or None when rendering without one.

    Raises:
        TemplateNotFoundError: If `template_path` does not name a regular file.

    Examples:
        resolve_template(Path("my-crate"))  # my-crate/README.tpl when present
    """
    if no_template:
        return None

    if template_path is not None:
        path = project_root / template_path
        if not path.is_file():
            raise TemplateNotFoundError(f"Could not open template file '{path}'")
        return path

    default = project_root / DEFAULT_TEMPLATE
    return default if default.is_file() else None


def _regular_file_stat(filepath: Path) -> os.stat_result:
    # Symlinks are refused for both reading and replacing files
    try:
        file_stat = os.stat(filepath, follow_symlinks=False)
    except OSError as error:
        raise IOError(f"Could not open file '{filepath}': {error}") from error

    if stat.S_ISLNK(file_stat.st_mode):
        raise IOError(f"Refusing to follow symlink '{filepath}'")
    if not stat.S_ISREG(file_stat.st_mode):
        raise IOError(f"'{filepath}' is not a regular file")
    return file_stat


def read_text(filepath: Path, max_size: int) -> str:
    """Read a whole UTF-8 file, keeping its line endings untouched.

    Args:
        filepath: File to read.
        max_size: Largest accepted size in bytes.

    Returns:
        str: File content. Callers split it on ``"\\n"`` only, so form feeds
            and other Unicode line separators stay inside their line.

    Raises:
        IOError: If the file is a symlink or not a regular file, is larger
            than `max_size`, cannot be opened, or is not valid UTF-8.

    Examples:
        lines = read_text(Path("src/lib.rs"), 1024 * 1024).split("\\n")
    """
    file_stat = _regular_file_stat(filepath)
    if file_stat.st_size > max_size:
        raise IOError(
            f"'{filepath}' is {file_stat.st_size} bytes, above the limit of {max_size} bytes"
        )

    try:
        with open(filepath, "r", encoding="UTF-8", newline="") as file:
            return file.read()
    except UnicodeDecodeError as error:
        raise IOError(f"Invalid UTF-8 sequence in {filepath}: {error}") from error
    except OSError as error:
        raise IOError(f"Could not open file '{filepath}': {error}") from error


def write_output(
    filepath: Path,
    content: str,
    warn: Callable[[str], None] | None = None,
):
    """Atomically write the README, ending it with a newline.

    When the target already exists, its permissions and, where privileges
    allow, its ownership are carried over to the new file.

    Args:
        filepath: Destination file.
        content: Rendered README text.
        warn: Optional callback for emitting non-fatal warnings.

    Returns:
        None.

    Raises:
        IOError: If the destination is a symlink or cannot be written.

    Examples:
        write_output(Path("README.md"), readme)
    """
    existing_stat = None
    if filepath.exists() or filepath.is_symlink():
        existing_stat = _regular_file_stat(filepath)

    temp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w", encoding="UTF-8", delete=False, dir=filepath.parent
        ) as tmp_file:
            temp_path = Path(tmp_file.name)
            tmp_file.write(content)
            tmp_file.write("\n")

            tmp_file.flush()
            os.fsync(tmp_file.fileno())

            if existing_stat is not None:
                os.chmod(tmp_file.name, stat.S_IMODE(existing_stat.st_mode))
                uid = getattr(existing_stat, "st_uid", None)
                gid = getattr(existing_stat, "st_gid", None)
                if uid is not None and gid is not None and hasattr(os, "chown"):
                    try:
                        os.chown(tmp_file.name, uid, gid)
                    except PermissionError:
                        if warn is not None:
                            warn(
                                f"Warning: Could not preserve file ownership for {filepath.name} "
                                "(requires elevated privileges)"
                            )
            else:
                # NamedTemporaryFile creates 0600 files; use the umask default instead
                umask = os.umask(0)
                os.umask(umask)
                os.chmod(tmp_file.name, 0o666 & ~umask)

        os.replace(temp_path, filepath)
    except OSError as error:
        raise IOError(f"Could not write output file '{filepath}': {error}") from error
    finally:
        if temp_path is not None:
            try:
                Path(temp_path).unlink(missing_ok=True)
            except OSError:
                pass
