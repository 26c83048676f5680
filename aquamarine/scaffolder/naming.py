"""Identifier normalisation helpers.

Pure functions that convert specification names into the identifiers used by
the generated code: file slugs, exported (capitalised) names, snake_case wire
tags and plural forms.
"""

from __future__ import annotations

import re

# Capitalised word preceded by anything but an underscore: ``fooBar``,
# ``HTTPServer`` -> ``foo_Bar``, ``HTTP_Server``.
_FIRST_CAP = re.compile(r"([^_])([A-Z][a-z]+)")
# Remaining lower/digit -> upper boundaries: ``userID`` -> ``user_ID``.
_ALL_CAP = re.compile(r"([a-z0-9])([A-Z])")


def to_file_slug(name: str) -> str:
    """Lowercase a feature or model name for use as a file/package segment."""
    return name.lower()


def to_exported_name(name: str) -> str:
    """Upper-case the first character only.

    ``paidAt`` -> ``PaidAt``; the rest of the string is left untouched.
    """
    if not name:
        return name
    return name[:1].upper() + name[1:]


def to_wire_tag(name: str) -> str:
    """Convert a mixed-case identifier to a lowercase, underscore-separated tag.

    Examples::

        to_wire_tag("simpleName")   -> "simple_name"
        to_wire_tag("userID")       -> "user_id"
        to_wire_tag("HTTPServer")   -> "http_server"
        to_wire_tag("orderItemSKU") -> "order_item_sku"
    """
    s1 = _FIRST_CAP.sub(r"\1_\2", name)
    s2 = _ALL_CAP.sub(r"\1_\2", s1)
    return s2.lower()


def pluralize(name: str) -> str:
    """Return a naive English plural of *name*.

    ``Category`` -> ``Categories``, ``Box`` -> ``Boxes``, ``Invoice`` ->
    ``Invoices``.
    """
    if not name:
        return name
    lower = name.lower()
    if lower.endswith("y") and not lower.endswith(("ay", "ey", "oy", "uy")):
        return name[:-1] + "ies"
    if lower.endswith(("s", "sh", "ch", "x", "z")):
        return name + "es"
    return name + "s"
