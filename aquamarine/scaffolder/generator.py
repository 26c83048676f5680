"""Main scaffolding orchestrator.

Takes a validated ``Specification`` and materialises a Go application tree
under ``<output_base>/<mode>``: a module manifest, the entry point, runtime
configuration, and one package per feature with its models, validators,
handlers and repositories.

Generation runs in two steps.  First every template record and every target
path is computed (the *plan*); configuration problems such as a missing
module, an unknown type in strict mode, a dangling child-collection reference
or a path that would leave the output root surface here, before anything is
written.  Then the skeleton is created and each planned file is rendered and
written in order.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from aquamarine.errors import SpecError
from aquamarine.spec.loader import check_required
from aquamarine.spec.models import Feature, Specification
from aquamarine.utils import console, print_warning

from .context import (
    AggregateTemplateData,
    build_aggregate_data,
    build_feature_data,
    build_handler_data,
    build_model_data,
)
from .output import OutputRoot, check_segment
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_OUTPUT_BASE = "out"
DEFAULT_ENGINE = "sqlite"
GO_VERSION = "1.22"
FRAMEWORK_MODULE = "github.com/aquamarinepk/aquamarine"
# From out/<mode> back to the framework checkout.
FRAMEWORK_REPLACE = "../.."

#: Fixed directory skeleton; ``{engine}`` is the configured database engine.
BASE_DIRS: tuple[str, ...] = (
    "internal/platform",
    "internal/web",
    "internal/feat",
    "assets/templates",
    "assets/migrations/{engine}",
    "assets/seeds/{engine}",
    "assets/queries/{engine}",
)

#: Repository backends with a dedicated template.
REPO_BACKENDS: tuple[str, ...] = ("sqlite", "mongo")


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------


@dataclass
class PlannedFile:
    """One file to render: template name, target path and its context."""

    template: str
    target: Path
    context: dict[str, Any]
    feature: str | None = None
    model: str | None = None


@dataclass
class GenerationPlan:
    """Every directory and file a run will create, in creation order."""

    root: Path
    directories: list[Path] = field(default_factory=list)
    files: list[PlannedFile] = field(default_factory=list)
    aggregates: list[AggregateTemplateData] = field(default_factory=list)

    def add(self, planned: PlannedFile) -> None:
        for existing in self.files:
            if existing.target == planned.target:
                raise SpecError(
                    f"output collision: {planned.target} is produced by both "
                    f"'{existing.template}' and '{planned.template}'"
                )
        self.files.append(planned)


#: Called once per aggregate while planning, with its record and the output
#: root; returns the files to render for it.
AggregatePlanner = Callable[[AggregateTemplateData, OutputRoot], list[PlannedFile]]


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Generation orchestrator for one specification.

    Given a ``Specification``, generates a directory tree containing:
    - ``go.mod``, ``main.go``, ``Makefile`` and ``config.yaml``
    - ``internal/platform/config`` with the config loader and parameters
    - one package per feature under ``internal/feat/<feature>`` with a
      README, a service stub and one file per model, plus validators,
      handlers and repositories where the feature asks for them
    - aggregate files laid out by the optional ``aggregate_planner``
    - the ``assets`` tree for templates, migrations, seeds and queries
    """

    def __init__(
        self,
        spec: Specification,
        renderer: TemplateRenderer | None = None,
        *,
        strict_types: bool = False,
        aggregate_planner: AggregatePlanner | None = None,
    ) -> None:
        self.spec = spec
        self.renderer = renderer or TemplateRenderer()
        self.strict_types = strict_types
        self.aggregate_planner = aggregate_planner
        self.written: list[Path] = []

    # -- Public API --------------------------------------------------------

    def generate(
        self, output_base: str | Path = DEFAULT_OUTPUT_BASE, mode: str = "prod"
    ) -> Path:
        """Generate the project tree under ``<output_base>/<mode>``.

        Args:
            output_base: Directory holding one subdirectory per mode.
            mode: ``"dev"`` or ``"prod"``; only selects the output root.

        Returns:
            Path to the generated output root.

        Raises:
            SpecError: On configuration problems, before anything is written.
            UnsafePathError: If a name would place a file outside the root.
            TemplateRenderError: If a template fails to render.
            OSError: On filesystem failures.  Files already written remain.
        """
        check_required(self.spec)
        out = OutputRoot(output_base, mode)
        plan = self.plan(out)

        console.print(
            f"Generating aquamarine project '{self.spec.project.name}' "
            f"in directory: {out.root}",
            markup=False,
        )
        self.written = []

        # 1. Output root and directory skeleton
        out.ensure_dir()
        for directory in plan.directories:
            directory.mkdir(parents=True, exist_ok=True)

        # 2. Rendered files
        for planned in plan.files:
            if planned.template == "model":
                console.print(f"  - Generating model: {planned.feature}/{planned.model}", markup=False)
            content = self.renderer.render(
                planned.template,
                planned.context,
                feature=planned.feature,
                model=planned.model,
            )
            self.written.append(out.write_text(planned.target, content))
            console.print(f"    - Created {planned.target}", style="dim", markup=False)

        # 3. Aggregates without a layout
        if self.aggregate_planner is None:
            for agg_data in plan.aggregates:
                print_warning(
                    f"  Aggregate '{agg_data.package_name}/{agg_data.name}' "
                    f"validated; no aggregate planner configured, skipping"
                )

        return out.root

    def plan(self, out: OutputRoot) -> GenerationPlan:
        """Compute every directory and file of the run without writing."""
        check_required(self.spec)
        plan = GenerationPlan(root=out.root)
        engine = self._engine()

        for d in BASE_DIRS:
            plan.directories.append(out.path(d.format(engine=engine)))

        self._plan_root_files(plan, out, engine)

        for feat_name, feature in self.spec.feats.items():
            self._plan_feature(plan, out, feat_name, feature)

        plan.add(PlannedFile("assets_readme", out.path("assets", "README.md"), {}))
        return plan

    # -- Root files --------------------------------------------------------

    def _engine(self) -> str:
        return check_segment((self.spec.runtime.database.engine or DEFAULT_ENGINE).lower())

    def _root_context(self, engine: str) -> dict[str, Any]:
        """Build the context shared by the project-level templates."""
        http = self.spec.runtime.http
        features = [
            build_feature_data(self.spec, name, feat)
            for name, feat in self.spec.feats.items()
        ]
        return {
            "project_name": self.spec.project.name,
            "module": self.spec.module_path,
            "version": self.spec.version,
            "go_version": GO_VERSION,
            "framework_module": FRAMEWORK_MODULE,
            "framework_replace": FRAMEWORK_REPLACE,
            "api_host": http.api.host,
            "api_port": http.api.port,
            "web_host": http.web.host,
            "web_port": http.web.port,
            "engine": engine,
            "dsn": self.spec.runtime.database.dsn,
            "binary_name": _binary_name(self.spec),
            "features": features,
            "uses_uuid": self._uses_uuid(),
            "uses_sqlite": any("sqlite" in f.repo_impl for f in features),
            "uses_mongo": any("mongo" in f.repo_impl for f in features),
        }

    def _uses_uuid(self) -> bool:
        for feature in self.spec.feats.values():
            field_sets = [m.fields for m in feature.models.values()]
            field_sets += [a.fields for a in feature.aggregates.values()]
            for fields in field_sets:
                if any(f.type == "uuid" for f in fields.values()):
                    return True
        return False

    def _plan_root_files(self, plan: GenerationPlan, out: OutputRoot, engine: str) -> None:
        ctx = self._root_context(engine)
        for template, rel, filename in (
            ("go_mod", "", "go.mod"),
            ("main", "", "main.go"),
            ("makefile", "", "Makefile"),
            ("config_yaml", "", "config.yaml"),
            ("config", "internal/platform/config", "config.go"),
            ("xparams", "internal/platform/config", "xparams.go"),
        ):
            plan.add(PlannedFile(template, out.path(rel, filename), ctx))

    # -- Features ----------------------------------------------------------

    def _plan_feature(
        self, plan: GenerationPlan, out: OutputRoot, feat_name: str, feature: Feature
    ) -> None:
        """Plan the package of one feature and every model inside it."""
        feat_dir = out.path("internal/feat", feat_name)
        plan.directories.append(feat_dir)
        feature_data = build_feature_data(self.spec, feat_name, feature)
        feature_ctx = {"feature": feature_data}

        plan.add(PlannedFile(
            "readme", out.path("internal/feat", feat_name, "README.md"),
            feature_ctx, feature=feat_name,
        ))
        plan.add(PlannedFile(
            "service_interface", out.path("internal/feat", feat_name, "service.go"),
            feature_ctx, feature=feat_name,
        ))

        for backend in feature.repo_impl:
            if backend not in REPO_BACKENDS:
                print_warning(
                    f"  Skipping unsupported repository backend '{backend}' "
                    f"in feature '{feat_name}'"
                )

        for model_name, model in feature.models.items():
            model_data = build_model_data(
                feat_name, model_name, model, strict=self.strict_types
            )
            handler_data = build_handler_data(self.spec, feat_name, model_name)
            ctx = {"model": model_data, "handler": handler_data, "feature": feature_data}
            slug = model_data.file_slug

            files: list[tuple[str, Path]] = [
                ("model", out.path("internal/feat", feat_name, f"{slug}.go")),
            ]
            if model_data.has_validations:
                files.append(
                    ("validator", out.path("internal/feat", feat_name, f"{slug}_validator.go"))
                )
            if feature.api.routes:
                files.append(
                    ("handler", out.path("internal/feat", feat_name, f"{slug}_handler.go"))
                )
            if feature.repo_impl:
                files.append(
                    ("repo_interface", out.path("internal/feat", feat_name, f"{slug}_repo.go"))
                )
            if "sqlite" in feature.repo_impl:
                files.append(
                    ("repo_sqlite", out.path("internal/feat", feat_name, f"{slug}_repo_sqlite.go"))
                )
                files.append(
                    ("queries_sqlite", out.path("assets/queries/sqlite", feat_name, f"{slug}.sql"))
                )
            if "mongo" in feature.repo_impl:
                files.append(
                    ("repo_mongo", out.path("internal/feat", feat_name, f"{slug}_repo_mongo.go"))
                )
            for template, target in files:
                plan.add(PlannedFile(template, target, ctx, feat_name, model_name))

        for agg_name, aggregate in feature.aggregates.items():
            agg_data = build_aggregate_data(
                self.spec, feat_name, agg_name, aggregate, strict=self.strict_types
            )
            plan.aggregates.append(agg_data)
            if self.aggregate_planner is not None:
                for planned in self.aggregate_planner(agg_data, out):
                    plan.add(planned)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _binary_name(spec: Specification) -> str:
    """Return the executable name used by the Makefile."""
    module_tail = spec.module_path.rstrip("/").rsplit("/", 1)[-1]
    return module_tail or "app"
