"""Data models for crate-readme."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class FenceState(Enum):
    """Extractor states used while scanning doc-comment lines.

    Attributes:
        PROSE: Outside any code fence.
        HOST_FENCE: Inside a fence holding Rust code; re-tagged on output and
            subject to hidden-line suppression.
        OTHER_FENCE: Inside a fence tagged with another language; passed
            through verbatim.
    """

    PROSE = auto()
    HOST_FENCE = auto()
    OTHER_FENCE = auto()


@dataclass(frozen=True)
class CrateInfo:
    """Package metadata read from ``Cargo.toml``.

    Attributes:
        name: Crate name (``package.name``).
        license: License expression (``package.license``), or None.
        lib: Library entrypoint path (``lib.path``), or None.
        bin: Path of the last ``[[bin]]`` target declaring one, or None.
    """

    name: str
    license: str | None = None
    lib: str | None = None
    bin: str | None = None
