"""Jinja2 template registry and rendering for the Go scaffold.

Provides the ``TemplateRenderer`` class which maps the fixed set of logical
template names (``"model"``, ``"handler"``, ...) to Jinja2 templates and
renders them with the records built in :mod:`aquamarine.scaffolder.context`.
Templates are loaded from ``aquamarine/scaffolder/templates/`` by default; an
in-memory mapping can be injected instead, which is how tests exercise the
generator without touching packaged assets.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from jinja2 import (
    BaseLoader,
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
    select_autoescape,
)

from aquamarine.errors import TemplateRenderError

from .naming import pluralize, to_exported_name, to_file_slug, to_wire_tag


# ---------------------------------------------------------------------------
# Template registry
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

#: Logical template name -> template file under the template directory.
TEMPLATE_FILES: Mapping[str, str] = MappingProxyType({
    "model": "model.go.j2",
    "repo_interface": "repo_interface.go.j2",
    "service_interface": "service_interface.go.j2",
    "repo_sqlite": "repo_sqlite.go.j2",
    "queries_sqlite": "queries_sqlite.sql.j2",
    "repo_mongo": "repo_mongo.go.j2",
    "handler": "handler.go.j2",
    "validator": "validator.go.j2",
    "main": "main.go.j2",
    "config": "config.go.j2",
    "config_yaml": "config.yaml.j2",
    "xparams": "xparams.go.j2",
    "makefile": "Makefile.j2",
    "aggregate_root": "aggregate_root.go.j2",
    "child_collection": "child_collection.go.j2",
    "go_mod": "go.mod.j2",
    "readme": "README.md.j2",
    "assets_readme": "assets_README.md.j2",
})


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the named Go scaffold templates.

    The renderer is built once per run and never mutated afterwards.  Pass
    *templates* (logical name -> template source) to render from memory;
    otherwise files are loaded from *template_dir*.
    """

    def __init__(
        self,
        template_dir: str | Path | None = None,
        templates: Mapping[str, str] | None = None,
    ) -> None:
        loader: BaseLoader
        if templates is not None:
            self.template_dir = None
            loader = DictLoader(
                {TEMPLATE_FILES.get(name, name): src for name, src in templates.items()}
            )
        else:
            if template_dir is None:
                template_dir = _DEFAULT_TEMPLATE_DIR
            self.template_dir = Path(template_dir)
            loader = FileSystemLoader(str(self.template_dir))
        self.env = Environment(
            loader=loader,
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["exported"] = to_exported_name
        self.env.filters["wire_tag"] = to_wire_tag
        self.env.filters["file_slug"] = to_file_slug
        self.env.filters["pluralize"] = pluralize

    @classmethod
    def from_mapping(cls, templates: Mapping[str, str]) -> "TemplateRenderer":
        """Build a renderer over in-memory template sources."""
        return cls(templates=dict(templates))

    # -- Rendering ---------------------------------------------------------

    def render(
        self,
        name: str,
        context: dict[str, Any],
        *,
        feature: str | None = None,
        model: str | None = None,
    ) -> str:
        """Render the template registered as *name* with *context*.

        *feature* and *model* only enrich the error message.

        Raises:
            TemplateRenderError: If *name* is not a registered template, the
                template is missing, or rendering fails.
        """
        if name not in TEMPLATE_FILES:
            raise TemplateRenderError(name, "unknown template name", feature, model)
        try:
            template = self.env.get_template(TEMPLATE_FILES[name])
            return template.render(**context)
        except TemplateNotFound as exc:
            raise TemplateRenderError(
                name, f"template file {exc.name} not found", feature, model
            ) from exc
        except TemplateError as exc:
            raise TemplateRenderError(name, str(exc), feature, model) from exc

    # -- Utility -----------------------------------------------------------

    def list_templates(self) -> list[str]:
        """Return the sorted template file names the loader can see."""
        return sorted(self.env.list_templates())

    def missing_templates(self) -> list[str]:
        """Return the logical names whose template file is not available."""
        available = set(self.env.list_templates())
        return sorted(
            name for name, filename in TEMPLATE_FILES.items()
            if filename not in available
        )
