"""Specification models and the ``aquamarine.yaml`` loader."""

from aquamarine.spec.loader import DEFAULT_SPEC_FILE, load_spec, parse_spec
from aquamarine.spec.models import (
    AggregateSpec,
    ChildCollection,
    Feature,
    FeatureKind,
    FieldSpec,
    ModelSpec,
    Specification,
    Validation,
)

__all__ = [
    "AggregateSpec",
    "ChildCollection",
    "DEFAULT_SPEC_FILE",
    "Feature",
    "FeatureKind",
    "FieldSpec",
    "ModelSpec",
    "Specification",
    "Validation",
    "load_spec",
    "parse_spec",
]
