"""Exception hierarchy for the Aquamarine generator.

Every fatal condition raised by the core derives from ``AquamarineError`` so
the CLI can surface it as a single human-readable message.  Filesystem
failures are not wrapped: they propagate as the ``OSError`` raised by
``pathlib``.
"""

from __future__ import annotations


class AquamarineError(Exception):
    """Base class for all generator errors."""


class SpecError(AquamarineError):
    """Raised when the specification is missing, malformed, or inconsistent."""


class UnknownFieldTypeError(SpecError):
    """Raised in strict mode when a field type tag has no mapping."""

    def __init__(self, tag: str, field: str | None = None) -> None:
        self.tag = tag
        self.field = field
        where = f" (field '{field}')" if field else ""
        super().__init__(f"Unknown field type '{tag}'{where}")


class UnknownModelReferenceError(SpecError):
    """Raised when a child collection references a model that does not exist."""

    def __init__(self, feature: str, aggregate: str, child: str, ref: str) -> None:
        self.feature = feature
        self.aggregate = aggregate
        self.child = child
        self.ref = ref
        super().__init__(
            f"Unknown model reference '{ref}' in {feature}.aggregates."
            f"{aggregate}.children.{child}"
        )


class UsageError(AquamarineError):
    """Raised when the command line cannot be parsed."""


class UnsafePathError(AquamarineError):
    """Raised when a computed output path would escape the output root."""


class TemplateRenderError(AquamarineError):
    """Raised when a named template fails to render.

    Carries the template name and the feature/model being generated so the
    failure can be traced back to the specification.
    """

    def __init__(
        self,
        template: str,
        message: str,
        feature: str | None = None,
        model: str | None = None,
    ) -> None:
        self.template = template
        self.feature = feature
        self.model = model
        target = "/".join(p for p in (feature, model) if p)
        where = f" for {target}" if target else ""
        super().__init__(f"Template '{template}' failed{where}: {message}")
