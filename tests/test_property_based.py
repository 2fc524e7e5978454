from __future__ import annotations

import string

from hypothesis import given
from hypothesis import strategies as st

from crate_readme.constants import DOC_MARKER
from crate_readme.extractor import extract, fence_transition, fold
from crate_readme.models import CrateInfo, FenceState
from crate_readme.renderer import render

text_strategy = st.text(
    alphabet=string.ascii_letters + string.digits + " #`_!/", min_size=0, max_size=24
)

doc_line_strategy = st.one_of(
    text_strategy.map(lambda text: f"//! {text}"),
    st.just("//!"),
    st.sampled_from(
        [
            "//! ```",
            "//! ```no_run",
            "//! ```ignore",
            "//! ```should_panic",
            "//! ```toml",
            "//! # hidden",
            "//! # Heading",
        ]
    ),
)
code_line_strategy = text_strategy.filter(lambda text: not text.startswith(DOC_MARKER))


@given(st.lists(st.one_of(doc_line_strategy, code_line_strategy), max_size=30))
def test_extract_never_grows_the_input(lines):
    marked = [line for line in lines if line.startswith(DOC_MARKER)]

    assert len(extract(lines)) <= len(marked)


@given(st.lists(doc_line_strategy, max_size=20), st.lists(code_line_strategy, max_size=20))
def test_unmarked_lines_do_not_affect_output(doc_lines, code_lines):
    interleaved = []
    for index, line in enumerate(doc_lines):
        interleaved.append(line)
        if index < len(code_lines):
            interleaved.append(code_lines[index])

    assert extract(interleaved) == extract(doc_lines)


@given(
    st.sampled_from(["", "no_run", "ignore", "should_panic"]),
    st.lists(text_strategy, max_size=10),
)
def test_host_fences_normalize_regardless_of_qualifier(qualifier, body):
    lines = [f"//! ```{qualifier}", *(f"//! x{text}" for text in body), "//! ```"]

    output = extract(lines)

    assert output[0] == "```rust"
    assert output[-1] == "```"
    assert output[1:-1] == [f"x{text}" for text in body]


@given(st.lists(text_strategy, max_size=10))
def test_hidden_lines_kept_in_other_fences(body):
    lines = ["//! ```text", *(f"//! # {text}" for text in body), "//! ```"]

    assert extract(lines) == ["```text", *(f"# {text}" for text in body), "```"]


@given(st.lists(text_strategy, max_size=10), st.sampled_from(["", "toml"]))
def test_headings_inside_fences_are_untouched(body, tag):
    inner = [f"//! #{text}" for text in body if not text.startswith(" ")]
    lines = [f"//! ```{tag}", *inner, "//! ```"]

    indented = extract(lines, indent_headings=True)
    plain = extract(lines, indent_headings=False)

    assert indented == plain


@given(st.lists(doc_line_strategy, max_size=30))
def test_closing_delimiter_always_returns_to_prose(lines):
    state = FenceState.PROSE
    for line in lines:
        state = fence_transition(state, line) or state

    if state is not FenceState.PROSE:
        assert fence_transition(state, "//! ```") is FenceState.PROSE


@given(st.lists(st.text(alphabet=string.ascii_letters + " #", max_size=12), max_size=10))
def test_fold_splits_back_into_lines(lines):
    folded = fold(lines)

    assert folded.split("\n") == (lines or [""])
    assert not folded.endswith("\n") or lines[-1] == ""


@given(st.text(max_size=60), st.booleans(), st.booleans())
def test_template_with_all_placeholders_ignores_options(body, add_title, add_license):
    template = "# {{crate}}\n\n{{readme}}\n\nLicense: {{license}}"
    crate = CrateInfo(name="my_crate", license="MIT")

    assert render(body, template, crate, add_title, add_license) == (
        f"# my_crate\n\n{body}\n\nLicense: MIT"
    )
