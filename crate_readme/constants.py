"""Constants used across the crate-readme package."""

from __future__ import annotations

import re

# Doc comments
DOC_MARKER = "//!"
DOC_PREFIX = f"{DOC_MARKER} "
HOST_LANGUAGE = "rust"
HOST_FENCE_QUALIFIERS = ("no_run", "ignore", "should_panic")
HIDDEN_LINE_PREFIX = "# "
HEADING_MARKER = "#"

# Fence patterns match whole raw lines, marker included.
HOST_FENCE_PATTERN = re.compile(
    rf"^{re.escape(DOC_PREFIX)}```(?:{'|'.join(HOST_FENCE_QUALIFIERS)})?$"
)
OTHER_FENCE_PATTERN = re.compile(rf"^{re.escape(DOC_PREFIX)}```\w+")
CLOSING_FENCE_LINE = f"{DOC_PREFIX}```"

HOST_FENCE_OPEN = f"```{HOST_LANGUAGE}"
FENCE_CLOSE = "```"

# Template placeholders
CRATE_PLACEHOLDER = "{{crate}}"
LICENSE_PLACEHOLDER = "{{license}}"
README_PLACEHOLDER = "{{readme}}"

# Project layout
MANIFEST_FILENAME = "Cargo.toml"
DEFAULT_TEMPLATE = "README.tpl"
DEFAULT_ENTRYPOINTS = ("src/lib.rs", "src/main.rs")
CONFIG_DOTFILE = ".crate-readme.toml"

# Limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
