"""The mode-scoped output root every generated file is written under.

``OutputRoot`` is the only place the generator turns relative paths into
filesystem paths.  Segments that could climb out of ``<base>/<mode>``
(absolute paths, ``..``, embedded separators) are rejected before anything is
created.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from aquamarine.errors import UnsafePathError

_FORBIDDEN_SEGMENTS = {"", ".", ".."}


def check_segment(segment: str) -> str:
    """Validate a single path component derived from a specification name.

    Raises:
        UnsafePathError: If *segment* is empty, ``.``/``..``, or contains a
            path separator or NUL byte.
    """
    if segment in _FORBIDDEN_SEGMENTS:
        raise UnsafePathError(f"invalid path segment: {segment!r}")
    if any(ch in segment for ch in ("/", "\\", "\x00")):
        raise UnsafePathError(f"path segment contains a separator: {segment!r}")
    return segment


def check_relative(rel: str) -> PurePosixPath:
    """Validate a ``/``-separated path relative to the output root."""
    if "\\" in rel or "\x00" in rel:
        raise UnsafePathError(f"invalid relative path: {rel!r}")
    if rel.startswith("/"):
        raise UnsafePathError(f"absolute path not allowed: {rel!r}")
    # Raw text: PurePosixPath normalises "." parts away.
    for part in rel.split("/"):
        if part in _FORBIDDEN_SEGMENTS:
            raise UnsafePathError(f"invalid relative path: {rel!r}")
    return PurePosixPath(rel)


class OutputRoot:
    """Filesystem writes confined to ``<base>/<mode>``."""

    def __init__(self, base: str | Path, mode: str) -> None:
        check_segment(mode)
        self.base = Path(base)
        self.mode = mode
        self.root = self.base / mode

    def __repr__(self) -> str:
        return f"OutputRoot({str(self.root)!r})"

    def path(self, rel: str, *segments: str) -> Path:
        """Join *rel* and name-derived *segments* under the root.

        *rel* is a fixed ``/``-separated layout path (``"internal/feat"``);
        each entry of *segments* must be a single component such as a feature
        name or a file name.

        Raises:
            UnsafePathError: If the result would fall outside the root.
        """
        parts = list(check_relative(rel).parts) if rel else []
        parts.extend(check_segment(s) for s in segments)
        target = self.root.joinpath(*parts)
        root_resolved = self.root.resolve()
        target_resolved = target.resolve()
        if target_resolved != root_resolved and root_resolved not in target_resolved.parents:
            raise UnsafePathError(f"{target} escapes output root {self.root}")
        return target

    # -- Write primitives --------------------------------------------------

    def ensure_dir(self, rel: str = "", *segments: str) -> Path:
        """Create a directory under the root if it does not exist."""
        target = self.path(rel, *segments) if (rel or segments) else self.root
        target.mkdir(parents=True, exist_ok=True)
        return target

    def write_text(self, target: Path, content: str) -> Path:
        """Write *content* to *target*, which must come from :meth:`path`."""
        root_resolved = self.root.resolve()
        if root_resolved not in target.resolve().parents:
            raise UnsafePathError(f"{target} escapes output root {self.root}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
        return target
