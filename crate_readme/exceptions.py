"""Package-specific exception types."""

from __future__ import annotations


class RenderError(ValueError):
    """Base class for README rendering errors.

    Represents inconsistencies between the template, the requested options,
    and the crate metadata.
    """


class MissingLicenseError(RenderError):
    """Raised when a license is requested but the crate declares none.

    Args:
        from_template: True when the request comes from a ``{{license}}``
            placeholder rather than from the ``add_license`` option.
    """

    def __init__(self, from_template: bool = False):
        self.from_template = from_template
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        if self.from_template:
            return "`{{license}}` found in template but there is no license in Cargo.toml"
        return "There is no license in Cargo.toml"


class MissingBodyPlaceholderError(RenderError):
    """Raised when a template lacks the ``{{readme}}`` placeholder."""

    def __init__(self):
        super().__init__("Missing `{{readme}}` in template")


class ManifestError(ValueError):
    """Raised when ``Cargo.toml`` cannot be located, read, or interpreted."""


class EntrypointNotFoundError(FileNotFoundError):
    """Raised when no documented source file can be found for the crate.

    Args:
        candidates: Paths that were tried, in order.
    """

    def __init__(self, candidates: list[str]):
        self.candidates = candidates
        tried = ", ".join(candidates) if candidates else "none"
        super().__init__(f"No entrypoint found (tried: {tried})")


class TemplateNotFoundError(FileNotFoundError):
    """Raised when an explicitly requested template file does not exist."""
