"""Doc-comment extraction for Rust source files."""

from __future__ import annotations

from collections.abc import Iterable

from .constants import (
    CLOSING_FENCE_LINE,
    DOC_MARKER,
    DOC_PREFIX,
    FENCE_CLOSE,
    HEADING_MARKER,
    HIDDEN_LINE_PREFIX,
    HOST_FENCE_OPEN,
    HOST_FENCE_PATTERN,
    OTHER_FENCE_PATTERN,
)
from .models import FenceState


def fence_transition(state: FenceState, line: str) -> FenceState | None:
    """Compute the state a fence delimiter line moves the extractor to.

    Opening delimiters are only recognized in prose, and the host-language
    pattern is tried before the explicitly tagged one. Inside any fence, only
    a bare closing delimiter leaves it.

    Args:
        state: Current extractor state.
        line: Raw doc-comment line, marker included, without line terminator.

    Returns:
        FenceState | None: The next state, or None when the line is not a
            fence delimiter in the current state.

    Examples:
        fence_transition(FenceState.PROSE, "//! ```no_run")  # HOST_FENCE
        fence_transition(FenceState.PROSE, "//! ```toml")  # OTHER_FENCE
        fence_transition(FenceState.HOST_FENCE, "//! ```")  # PROSE
    """
    if state is FenceState.PROSE:
        if HOST_FENCE_PATTERN.match(line):
            return FenceState.HOST_FENCE
        if OTHER_FENCE_PATTERN.match(line):
            return FenceState.OTHER_FENCE
        return None

    if line == CLOSING_FENCE_LINE:
        return FenceState.PROSE

    return None


def strip_marker(line: str) -> str:
    """Remove the doc-comment marker and its separating space.

    Examples:
        strip_marker("//! text")  # "text"
        strip_marker("//!")  # ""
    """
    if line.strip() == DOC_MARKER:
        return ""
    if line.startswith(DOC_PREFIX):
        return line[len(DOC_PREFIX) :]
    return line[len(DOC_MARKER) :]


def _is_hidden(state: FenceState, text: str) -> bool:
    # Hidden lines only exist in doctests
    return state is FenceState.HOST_FENCE and text.startswith(HIDDEN_LINE_PREFIX)


def extract(lines: Iterable[str], indent_headings: bool = True) -> list[str]:
    """Extract module doc comments as README lines.

    Untagged fences and fences carrying a doctest qualifier are re-tagged as
    Rust. Lines hidden from rustdoc output (``# `` inside a Rust fence) are
    dropped. Lines without the ``//!`` marker are ignored.

    Args:
        lines: Source lines, with or without line terminators.
        indent_headings: When True, headings outside code fences gain one
            extra ``#`` so the crate name can be the top-level heading.

    Returns:
        list[str]: Normalized README lines, without line terminators.

    Examples:
        extract(["//! # Usage", "//! ```", "//! # use foo;", "//! foo();", "//! ```"])
        # ["## Usage", "```rust", "foo();", "```"]
    """
    state = FenceState.PROSE
    output: list[str] = []

    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not line.startswith(DOC_MARKER):
            continue

        next_state = fence_transition(state, line)
        if next_state is FenceState.HOST_FENCE:
            state = next_state
            output.append(HOST_FENCE_OPEN)
            continue
        if next_state is FenceState.PROSE:
            state = next_state
            output.append(FENCE_CLOSE)
            continue
        if next_state is FenceState.OTHER_FENCE:
            # The tagged opening line is emitted as-is below
            state = next_state

        text = strip_marker(line)
        if _is_hidden(state, text):
            continue

        if indent_headings and state is FenceState.PROSE and text.startswith(HEADING_MARKER):
            text = HEADING_MARKER + text

        output.append(text)

    return output


def fold(lines: Iterable[str]) -> str:
    """Join README lines into a single text blob without a trailing newline."""
    return "\n".join(lines)
