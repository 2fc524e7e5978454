"""README rendering from extracted documentation and crate metadata."""

from __future__ import annotations

from collections.abc import Iterable

from .constants import CRATE_PLACEHOLDER, LICENSE_PLACEHOLDER, README_PLACEHOLDER
from .exceptions import MissingBodyPlaceholderError, MissingLicenseError
from .extractor import extract, fold
from .models import CrateInfo


def prepend_title(readme: str, crate_name: str) -> str:
    """Prefix the README with a top-level heading naming the crate."""
    return f"# {crate_name}\n\n{readme}"


def append_license(readme: str, license_name: str) -> str:
    """Suffix the README with a license line."""
    return f"{readme}\n\nLicense: {license_name}"


def render(
    body: str,
    template: str | None,
    crate_info: CrateInfo,
    add_title: bool = True,
    add_license: bool = False,
) -> str:
    """Render the final README text.

    Without a template, the body is decorated with the title and license line
    directly. With a template, placeholders declared by the template take
    precedence over the title and license options.

    Args:
        body: Folded README body produced by the extractor.
        template: Raw template text, or None to skip templating.
        crate_info: Metadata of the documented crate.
        add_title: Prepend ``# <crate name>`` unless the template declares
            ``{{crate}}``.
        add_license: Append ``License: <license>`` unless the template declares
            ``{{license}}``.

    Returns:
        str: The rendered README, without a trailing newline.

    Raises:
        MissingLicenseError: If a license is requested, by option or by the
            template, but `crate_info` has none.
        MissingBodyPlaceholderError: If the template lacks ``{{readme}}``.

    Examples:
        render("# documentation", None, CrateInfo("my_crate", "MIT"), True, True)
        # "# my_crate\\n\\n# documentation\\n\\nLicense: MIT"
    """
    if template is None:
        return _decorate(body, crate_info, add_title, add_license)
    return _render_template(template, body, crate_info, add_title, add_license)


def _decorate(body: str, crate_info: CrateInfo, add_title: bool, add_license: bool) -> str:
    if add_license and crate_info.license is None:
        raise MissingLicenseError()

    if add_title:
        body = prepend_title(body, crate_info.name)
    if add_license:
        body = append_license(body, crate_info.license)
    return body


def _render_template(
    template: str, body: str, crate_info: CrateInfo, add_title: bool, add_license: bool
) -> str:
    # Rules apply in order; each may rewrite the body, the template, or both.
    template = template.rstrip("\n")
    template, body = _apply_title(template, body, crate_info, add_title)
    _check_license(template, crate_info, add_license)
    template, body = _apply_license(template, body, crate_info, add_license)
    return _apply_readme(template, body)


def _apply_title(
    template: str, body: str, crate_info: CrateInfo, add_title: bool
) -> tuple[str, str]:
    if add_title and CRATE_PLACEHOLDER not in template:
        return template, prepend_title(body, crate_info.name)
    return template.replace(CRATE_PLACEHOLDER, crate_info.name), body


def _check_license(template: str, crate_info: CrateInfo, add_license: bool) -> None:
    if crate_info.license is not None:
        return
    if LICENSE_PLACEHOLDER in template:
        raise MissingLicenseError(from_template=True)
    if add_license:
        raise MissingLicenseError()


def _apply_license(
    template: str, body: str, crate_info: CrateInfo, add_license: bool
) -> tuple[str, str]:
    if LICENSE_PLACEHOLDER in template:
        return template.replace(LICENSE_PLACEHOLDER, crate_info.license), body
    if add_license:
        return template, append_license(body, crate_info.license)
    return template, body


def _apply_readme(template: str, body: str) -> str:
    if README_PLACEHOLDER not in template:
        raise MissingBodyPlaceholderError()
    return template.replace(README_PLACEHOLDER, body)


def generate_readme(
    source: Iterable[str],
    template: str | None,
    crate_info: CrateInfo,
    add_title: bool = True,
    add_license: bool = False,
    indent_headings: bool = True,
) -> str:
    """Extract, fold, and render README text from a documented source.

    Args:
        source: Source lines, typically an open text file.
        template: Raw template text, or None.
        crate_info: Metadata of the documented crate.
        add_title: See `render`.
        add_license: See `render`.
        indent_headings: See `extract`.

    Returns:
        str: The rendered README, without a trailing newline.

    Raises:
        RenderError: If the template and options are inconsistent with the
            crate metadata.
    """
    body = fold(extract(source, indent_headings))
    return render(body, template, crate_info, add_title, add_license)
