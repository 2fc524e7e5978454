"""
crate-readme: README generator for Rust crates.

Turns the module doc comments (``//!``) of a crate into a README, optionally
merged into a template and decorated with the crate name and license from
``Cargo.toml``.

This package can be used both as a CLI tool and as a library.

CLI Usage:
    crate-readme --output README.md

Library Usage:
    from pathlib import Path
    from crate_readme import extract, fold, load_crate_info, render

    crate_info = load_crate_info(Path("."))
    lines = Path("src/lib.rs").read_text(encoding="utf-8").split("\n")
    readme = render(fold(extract(lines)), None, crate_info, add_title=True)
"""

from .exceptions import (
    EntrypointNotFoundError,
    ManifestError,
    MissingBodyPlaceholderError,
    MissingLicenseError,
    RenderError,
    TemplateNotFoundError,
)
from .extractor import extract, fence_transition, fold
from .manifest import find_project_root, load_crate_info, parse_crate_info
from .models import CrateInfo, FenceState
from .renderer import generate_readme, render

__version__ = "0.1.0"

__all__ = [
    # Core functionality
    "extract",
    "fold",
    "render",
    "generate_readme",
    "fence_transition",
    # Manifest
    "find_project_root",
    "load_crate_info",
    "parse_crate_info",
    # Data models
    "CrateInfo",
    "FenceState",
    # Exceptions
    "RenderError",
    "MissingLicenseError",
    "MissingBodyPlaceholderError",
    "ManifestError",
    "EntrypointNotFoundError",
    "TemplateNotFoundError",
    # Version
    "__version__",
]
