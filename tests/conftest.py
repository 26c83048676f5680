"""Shared pytest fixtures for the Aquamarine test suite.

Provides reusable fixtures for:
- Specification dicts and validated ``Specification`` trees
- The sample ``aquamarine.yaml`` fixture file
- An in-memory template registry so generator tests do not depend on the
  packaged Go templates
"""

from __future__ import annotations

import copy
import shutil
from pathlib import Path
from typing import Any

import pytest

from aquamarine.scaffolder.templates import TEMPLATE_FILES, TemplateRenderer
from aquamarine.spec import Specification, parse_spec

FIXTURES = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Specifications
# ---------------------------------------------------------------------------

_MINIMAL_SPEC: dict[str, Any] = {
    "version": "0.1",
    "project": {"name": "billing-app", "module": "github.com/acme/billing"},
    "runtime": {
        "http": {
            "api": {"host": "localhost", "port": 8081},
            "web": {"host": "localhost", "port": 8080},
        },
        "database": {"engine": "sqlite"},
    },
    "feats": {
        "billing": {
            "kind": "feature",
            "models": {
                "Invoice": {
                    "fields": {
                        "total": {"type": "float64"},
                        "paidAt": {"type": "text"},
                    },
                },
            },
            "service": {"methods": ["CreateInvoice", "ListInvoices"]},
        },
    },
}


@pytest.fixture
def minimal_spec_dict() -> dict[str, Any]:
    """One ``billing`` feature with an ``Invoice`` model and no validations."""
    return copy.deepcopy(_MINIMAL_SPEC)


@pytest.fixture
def minimal_spec(minimal_spec_dict: dict[str, Any]) -> Specification:
    return parse_spec(minimal_spec_dict)


@pytest.fixture
def sample_spec_path() -> Path:
    """Path to the full sample ``aquamarine.yaml`` fixture."""
    path = FIXTURES / "aquamarine.yaml"
    assert path.exists(), f"Sample specification fixture not found at {path}"
    return path


@pytest.fixture
def sample_spec(sample_spec_path: Path) -> Specification:
    from aquamarine.spec import load_spec

    return load_spec(sample_spec_path)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary working directory holding a copy of the sample spec."""
    shutil.copy(FIXTURES / "aquamarine.yaml", tmp_path / "aquamarine.yaml")
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def _memory_templates() -> dict[str, str]:
    """A tiny template per registered name, echoing the record it receives."""
    templates = {name: f"{name}\n" for name in TEMPLATE_FILES}
    templates["model"] = (
        "package {{ model.package_name }}\n"
        "type {{ model.model_name }}\n"
        "{% for f in model.fields %}"
        "{{ f.name }} {{ f.type }} {{ f.json_tag }}\n"
        "{% endfor %}"
        "fmt={{ model.needs_fmt }} strconv={{ model.needs_strconv }}\n"
    )
    templates["service_interface"] = (
        "package {{ feature.package_name }}\n"
        "{{ feature.methods | join(',') }}\n"
    )
    templates["readme"] = "# {{ feature.name }}\n"
    templates["go_mod"] = "module {{ module }}\n"
    templates["main"] = "web={{ web_port }} api={{ api_port }}\n"
    templates["aggregate_root"] = "aggregate {{ aggregate.name }}\n"
    templates["child_collection"] = "child {{ child.name }} of {{ child.of }}\n"
    return templates


@pytest.fixture
def memory_templates() -> dict[str, str]:
    return _memory_templates()


@pytest.fixture
def memory_renderer(memory_templates: dict[str, str]) -> TemplateRenderer:
    """Renderer over in-memory templates (no packaged assets involved)."""
    return TemplateRenderer.from_mapping(memory_templates)


def _tree_snapshot(root: Path) -> dict[str, bytes]:
    return {
        p.relative_to(root).as_posix(): p.read_bytes()
        for p in sorted(root.rglob("*"))
        if p.is_file()
    }


@pytest.fixture
def tree_snapshot():
    """Return a function mapping every file under a root to its bytes."""
    return _tree_snapshot
