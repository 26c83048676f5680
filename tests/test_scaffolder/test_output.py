"""Tests for the output root boundary (aquamarine.scaffolder.output)."""

from __future__ import annotations

from pathlib import Path

import pytest

from aquamarine.errors import UnsafePathError
from aquamarine.scaffolder.output import OutputRoot, check_relative, check_segment

pytestmark = pytest.mark.unit


class TestCheckSegment:
    @pytest.mark.parametrize("segment", ["billing", "invoice.go", "README.md", "a-b_c"])
    def test_accepts_plain_names(self, segment):
        assert check_segment(segment) == segment

    @pytest.mark.parametrize(
        "segment", ["", ".", "..", "a/b", "../x", "a\\b", "/etc", "x\x00y"]
    )
    def test_rejects_unsafe(self, segment):
        with pytest.raises(UnsafePathError):
            check_segment(segment)


class TestCheckRelative:
    def test_accepts_layout_path(self):
        assert check_relative("internal/feat").parts == ("internal", "feat")

    @pytest.mark.parametrize("rel", ["/abs/path", "internal/../..", "./x", "a\\b"])
    def test_rejects_escaping(self, rel):
        with pytest.raises(UnsafePathError):
            check_relative(rel)


class TestOutputRoot:
    def test_root_is_base_and_mode(self, tmp_path: Path):
        out = OutputRoot(tmp_path / "out", "dev")
        assert out.root == tmp_path / "out" / "dev"

    def test_rejects_unsafe_mode(self, tmp_path: Path):
        with pytest.raises(UnsafePathError):
            OutputRoot(tmp_path, "../prod")

    def test_path_joins_under_root(self, tmp_path: Path):
        out = OutputRoot(tmp_path, "prod")
        target = out.path("internal/feat", "billing", "invoice.go")
        assert target == tmp_path / "prod" / "internal" / "feat" / "billing" / "invoice.go"

    def test_path_rejects_crafted_feature(self, tmp_path: Path):
        out = OutputRoot(tmp_path, "prod")
        with pytest.raises(UnsafePathError):
            out.path("internal/feat", "../../../escape")

    def test_path_rejects_symlink_escape(self, tmp_path: Path):
        outside = tmp_path / "outside"
        outside.mkdir()
        out = OutputRoot(tmp_path / "out", "prod")
        out.ensure_dir()
        (out.root / "link").symlink_to(outside, target_is_directory=True)
        with pytest.raises(UnsafePathError):
            out.path("", "link", "file.go")

    def test_ensure_dir_is_idempotent(self, tmp_path: Path):
        out = OutputRoot(tmp_path, "prod")
        first = out.ensure_dir("assets/templates")
        second = out.ensure_dir("assets/templates")
        assert first == second
        assert first.is_dir()

    def test_write_text_creates_parents(self, tmp_path: Path):
        out = OutputRoot(tmp_path, "prod")
        target = out.path("internal/feat", "billing", "README.md")
        out.write_text(target, "# billing\n")
        assert target.read_text(encoding="utf-8") == "# billing\n"

    def test_write_text_rejects_foreign_path(self, tmp_path: Path):
        out = OutputRoot(tmp_path / "out", "prod")
        with pytest.raises(UnsafePathError):
            out.write_text(tmp_path / "elsewhere.txt", "nope")
        assert not (tmp_path / "elsewhere.txt").exists()
