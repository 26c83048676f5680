"""Field type mapping from specification tags to Go types."""

from __future__ import annotations

from collections.abc import Iterable

from aquamarine.errors import UnknownFieldTypeError

#: Go type used when a tag has no mapping.
FALLBACK_TYPE = "any"

_GO_TYPE_MAP: dict[str, str] = {
    "text": "string",
    "string": "string",
    "email": "string",
    "bool": "bool",
    "uuid": "uuid.UUID",
    "int": "int",
    "int64": "int64",
    "float64": "float64",
}


def map_type(tag: str, strict: bool = False, field: str | None = None) -> str:
    """Return the Go type for a specification field type *tag*.

    Unknown tags map to ``any`` unless *strict* is set, in which case an
    ``UnknownFieldTypeError`` is raised.  *field* is only used to make that
    error message point at the offending field.
    """
    mapped = _GO_TYPE_MAP.get(tag)
    if mapped is not None:
        return mapped
    if strict:
        raise UnknownFieldTypeError(tag, field)
    return FALLBACK_TYPE


def is_known_type(tag: str) -> bool:
    return tag in _GO_TYPE_MAP


def needs_uuid_import(go_types: Iterable[str]) -> bool:
    """Return ``True`` if any of *go_types* comes from the uuid package."""
    return any(t.startswith("uuid.") for t in go_types)
