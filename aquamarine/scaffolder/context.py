"""Template data records built from the specification tree.

Each ``build_*`` function flattens one piece of the nested specification into
a record the Go templates can consume directly, so templates never need to
know how the YAML document is shaped.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from aquamarine.errors import UnknownModelReferenceError
from aquamarine.spec.models import (
    AggregateSpec,
    Feature,
    FieldSpec,
    ModelSpec,
    Page,
    Route,
    Specification,
)

from .naming import pluralize, to_exported_name, to_file_slug, to_wire_tag
from .types import map_type, needs_uuid_import

# Validations whose generated checks format messages and parse numeric limits.
NUMERIC_VALIDATIONS = frozenset({"min_length", "max_length", "min", "max"})

_NUMERIC_GO_TYPES = frozenset({"int", "int64", "float64"})


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass
class FieldValidationData:
    name: str
    value: str = ""


@dataclass
class FieldTemplateData:
    """One struct field of a generated model."""

    name: str
    type: str
    json_tag: str
    is_id: bool = False
    validations: list[FieldValidationData] = field(default_factory=list)

    @property
    def is_numeric(self) -> bool:
        return self.type in _NUMERIC_GO_TYPES

    @property
    def rule_names(self) -> set[str]:
        return {v.name for v in self.validations}


@dataclass
class ModelTemplateData:
    """Everything the ``model`` and ``validator`` templates need."""

    package_name: str
    model_name: str
    file_slug: str
    audit: bool = False
    fields: list[FieldTemplateData] = field(default_factory=list)
    needs_fmt: bool = False
    needs_strconv: bool = False
    needs_uuid: bool = False

    @property
    def has_validations(self) -> bool:
        return any(f.validations for f in self.fields)

    @property
    def needs_errors(self) -> bool:
        """True when a generated check returns a plain ``errors.New``."""
        return any(
            ("required" in f.rule_names and f.type != "bool")
            or ("email" in f.rule_names and f.type == "string")
            for f in self.fields
        )

    @property
    def needs_strings(self) -> bool:
        return any(
            "email" in f.rule_names and f.type == "string" for f in self.fields
        )


@dataclass
class RouteBinding:
    method: str
    path: str
    func: str


@dataclass
class HandlerTemplateData:
    """Data for the handler and repository templates of one model."""

    package_name: str
    model_name: str
    model_plural: str
    model_lower: str
    model_plural_lower: str
    auth_enabled: bool = False
    audit: bool = False
    module_path: str = ""
    is_child_collection: bool = False
    routes: list[Route] = field(default_factory=list)

    @property
    def table_name(self) -> str:
        """SQL table / Mongo collection name, e.g. ``order_items``."""
        return to_wire_tag(self.model_plural)

    @property
    def bindings(self) -> list[RouteBinding]:
        """Routes paired with the Go method that serves them."""
        out: list[RouteBinding] = []
        for i, route in enumerate(self.routes, start=1):
            func = to_exported_name(route.handler) or f"Handle{route.method.title()}{i}"
            out.append(RouteBinding(route.method.upper(), route.path, func))
        return out

    @property
    def handler_funcs(self) -> list[str]:
        """Distinct handler method names, in route order."""
        return list(dict.fromkeys(b.func for b in self.bindings))


@dataclass
class FeatureTemplateData:
    """Feature-level data for the README and service stub."""

    package_name: str
    name: str
    kind: str
    module_path: str
    methods: list[str] = field(default_factory=list)
    routes: list[Route] = field(default_factory=list)
    pages: list[Page] = field(default_factory=list)
    repo_impl: list[str] = field(default_factory=list)
    models: list[str] = field(default_factory=list)


@dataclass
class ChildTemplateData:
    name: str
    of: str
    audit: bool = False
    handler: HandlerTemplateData | None = None
    model: ModelTemplateData | None = None


@dataclass
class AggregateTemplateData:
    """An aggregate root and its resolved child collections."""

    package_name: str
    name: str
    fields: list[FieldTemplateData] = field(default_factory=list)
    version_field: str | None = None
    audit: bool = False
    needs_uuid: bool = False
    children: list[ChildTemplateData] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def build_field_data(
    name: str, spec: FieldSpec, strict: bool = False
) -> FieldTemplateData:
    """Normalise one field: exported name, wire tag, Go type, validations."""
    json_tag = to_wire_tag(name)
    return FieldTemplateData(
        name=to_exported_name(name),
        type=map_type(spec.type, strict=strict, field=name),
        json_tag=json_tag,
        is_id=json_tag == "id",
        validations=[
            FieldValidationData(name=v.name, value=v.value or "")
            for v in spec.validations
        ],
    )


def _build_fields(
    fields: dict[str, FieldSpec] | None, strict: bool
) -> list[FieldTemplateData]:
    return [build_field_data(n, f, strict) for n, f in (fields or {}).items()]


def build_model_data(
    feature_name: str,
    model_name: str,
    model: ModelSpec,
    strict: bool = False,
) -> ModelTemplateData:
    """Build the ``model`` template record for one model of a feature.

    Fields are emitted in declaration order.  ``needs_fmt`` and
    ``needs_strconv`` are set together when any field carries one of
    ``NUMERIC_VALIDATIONS``.
    """
    fields = _build_fields(model.fields, strict)
    numeric = any(
        v.name in NUMERIC_VALIDATIONS for f in fields for v in f.validations
    )
    return ModelTemplateData(
        package_name=feature_name,
        model_name=model_name,
        file_slug=to_file_slug(model_name),
        audit=bool(model.options and model.options.audit),
        fields=fields,
        needs_fmt=numeric,
        needs_strconv=numeric,
        needs_uuid=needs_uuid_import(f.type for f in fields),
    )


def build_handler_data(
    spec: Specification,
    feature_name: str,
    model_name: str,
    is_child: bool = False,
    audit: bool | None = None,
) -> HandlerTemplateData:
    """Build the handler/repository record for a model or child collection.

    *audit* overrides the model's own ``options.audit``; child collections
    pass their collection-level flag here.
    """
    feature = spec.feats[feature_name]
    if audit is None:
        model = feature.models.get(model_name)
        audit = bool(model and model.options and model.options.audit)
    exported = to_exported_name(model_name)
    plural = pluralize(exported)
    return HandlerTemplateData(
        package_name=feature_name,
        model_name=exported,
        model_plural=plural,
        model_lower=to_file_slug(model_name),
        model_plural_lower=to_file_slug(plural),
        auth_enabled=feature.auth_enabled,
        audit=audit,
        module_path=spec.module_path,
        is_child_collection=is_child,
        routes=list(feature.api.routes),
    )


def build_feature_data(
    spec: Specification, feature_name: str, feature: Feature
) -> FeatureTemplateData:
    return FeatureTemplateData(
        package_name=feature_name,
        name=feature.name or feature_name,
        kind=feature.kind.value,
        module_path=spec.module_path,
        methods=list(feature.service.methods),
        routes=list(feature.api.routes),
        pages=list(feature.web.pages),
        repo_impl=list(feature.repo_impl),
        models=list(feature.models),
    )


def build_aggregate_data(
    spec: Specification,
    feature_name: str,
    aggregate_name: str,
    aggregate: AggregateSpec,
    strict: bool = False,
) -> AggregateTemplateData:
    """Build the record for an aggregate root and its child collections.

    Raises:
        UnknownModelReferenceError: If a child collection's ``of`` does not
            name a model of the same feature.
    """
    feature = spec.feats[feature_name]
    fields = _build_fields(aggregate.fields, strict)
    children: list[ChildTemplateData] = []
    for child_name, child in aggregate.children.items():
        if child.of not in feature.models:
            raise UnknownModelReferenceError(
                feature_name, aggregate_name, child_name, child.of
            )
        children.append(
            ChildTemplateData(
                name=child_name,
                of=child.of,
                audit=child.audit,
                handler=build_handler_data(
                    spec, feature_name, child.of, is_child=True, audit=child.audit
                ),
                model=build_model_data(
                    feature_name, child.of, feature.models[child.of], strict=strict
                ),
            )
        )
    return AggregateTemplateData(
        package_name=feature_name,
        name=to_exported_name(aggregate_name),
        fields=fields,
        version_field=aggregate.version_field,
        audit=aggregate.audit,
        needs_uuid=needs_uuid_import(f.type for f in fields),
        children=children,
    )
