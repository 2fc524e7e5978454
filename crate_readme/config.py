"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

from .constants import CONFIG_DOTFILE, DEFAULT_MAX_FILE_SIZE, MANIFEST_FILENAME


@dataclass
class ReadmeConfig:
    """Configuration for generating a README from doc comments.

    Attributes:
        input: Source file to read, relative to the project root. Defaults to
            the crate entrypoint when None.
        output: File to write, relative to the project root. Output goes to
            stdout when None.
        template: Template file, relative to the project root. Defaults to
            ``README.tpl`` when present.
        no_template: Ignore any template, including the default one.
        add_title: Prepend ``# <crate name>`` to the README.
        add_license: Append ``License: <license>`` to the README.
        indent_headings: Add one level to headings found in doc comments.
        max_file_size: Maximum size in bytes of the files that will be read.

    Examples:
        ReadmeConfig(output="README.md", add_license=True)
    """

    # Paths
    input: str | None = None
    output: str | None = None
    template: str | None = None
    no_template: bool = False

    # Rendering
    add_title: bool = True
    add_license: bool = False
    indent_headings: bool = True

    # Limits
    max_file_size: int = DEFAULT_MAX_FILE_SIZE


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`template` cannot be combined with `no_template`")
    """


def load_config(search_path: Path) -> ReadmeConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[package.metadata.crate-readme]`` table from `Cargo.toml` and the
    ``[crate-readme]`` or ``[tool.crate-readme]`` table from
    `.crate-readme.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        ReadmeConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If a configuration table is present but not a mapping or
            contains unsupported keys.

    Examples:
        load_config(Path("my-crate"))
    """
    current = search_path.resolve()

    while True:
        manifest_config = _load_from_file(
            current / MANIFEST_FILENAME,
            table_paths=[("package", "metadata", "crate-readme")],
        )
        if manifest_config is not None:
            return manifest_config

        dotfile_config = _load_from_file(
            current / CONFIG_DOTFILE,
            table_paths=[("crate-readme",), ("tool", "crate-readme")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return ReadmeConfig()


_MISSING = object()


def _load_from_file(
    config_file: Path, table_paths: list[tuple[str, ...]]
) -> ReadmeConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> ReadmeConfig:
    table_display = ".".join(table_path)

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return ReadmeConfig()

    # TOML keys use dashes, dataclass fields use underscores
    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return ReadmeConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: ReadmeConfig) -> None:
    """Validate a `ReadmeConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If fields have the wrong type, the size limit is not a
            positive integer, or a template is combined with `no_template`.

    Examples:
        validate_config(ReadmeConfig(output="README.md"))
    """
    _ensure_optional_strings(
        {"input": config.input, "output": config.output, "template": config.template}
    )
    _ensure_booleans(
        {
            "no_template": config.no_template,
            "add_title": config.add_title,
            "add_license": config.add_license,
            "indent_headings": config.indent_headings,
        }
    )

    max_file_size = config.max_file_size
    if isinstance(max_file_size, bool) or not isinstance(max_file_size, int):
        raise ConfigError("`max_file_size` must be an integer")
    if max_file_size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")

    if config.template is not None and config.no_template:
        raise ConfigError("`template` cannot be combined with `no_template`")


def apply_overrides(config: ReadmeConfig, **overrides: object) -> ReadmeConfig:
    """Apply override values to a `ReadmeConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        ReadmeConfig: New configuration with the provided overrides applied.
        The original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `ReadmeConfig`.

    Examples:
        updated = apply_overrides(config, output="README.md", add_title=False)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    # An explicit template on the command line wins over a configured opt-out
    # and vice versa.
    if "template" in changes and "no_template" not in changes:
        changes["no_template"] = False
    if changes.get("no_template"):
        changes["template"] = None
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> ReadmeConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        ReadmeConfig: Validated configuration ready for rendering.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), output="README.md", add_license=True)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_booleans(values: dict[str, object]) -> None:
    for key, value in values.items():
        if not isinstance(value, bool):
            raise ConfigError(f"`{key}` must be a boolean")


def _ensure_optional_strings(values: dict[str, object]) -> None:
    for key, value in values.items():
        if value is not None and not isinstance(value, str):
            raise ConfigError(f"`{key}` must be a string")
