"""Tests for the specification tree (aquamarine.spec.models)."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from aquamarine.spec import (
    ChildCollection,
    Feature,
    FeatureKind,
    Specification,
    Validation,
    parse_spec,
)
from aquamarine.spec.models import HTTPSection

pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------


class TestDefaults:
    def test_http_defaults(self):
        http = HTTPSection()
        assert (http.api.host, http.api.port) == ("localhost", 8081)
        assert (http.web.host, http.web.port) == ("localhost", 8080)

    def test_runtime_defaults_when_omitted(self):
        spec = Specification.model_validate({"project": {"module": "m"}})
        assert spec.runtime.database.engine == "sqlite"
        assert spec.runtime.http.api.port == 8081
        assert spec.feats == {}

    def test_feature_defaults(self):
        feat = Feature()
        assert feat.kind is FeatureKind.FEATURE
        assert feat.models == {}
        assert feat.service.methods == []
        assert feat.api.routes == []
        assert feat.repo_impl == []
        assert feat.auth_enabled is False


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------


class TestNormalisation:
    def test_feature_named_after_key(self, minimal_spec):
        assert minimal_spec.feats["billing"].name == "billing"

    def test_explicit_feature_name_kept(self, minimal_spec_dict):
        minimal_spec_dict["feats"]["billing"]["name"] = "Billing"
        spec = parse_spec(minimal_spec_dict)
        assert spec.feats["billing"].name == "Billing"

    def test_null_feature_body(self, minimal_spec_dict):
        minimal_spec_dict["feats"]["empty"] = None
        spec = parse_spec(minimal_spec_dict)
        assert spec.feats["empty"].models == {}
        assert spec.feats["empty"].name == "empty"

    def test_version_is_text(self, minimal_spec_dict):
        minimal_spec_dict["version"] = 0.1
        assert parse_spec(minimal_spec_dict).version == "0.1"

    @pytest.mark.parametrize("value, expected", [(3, "3"), (1.5, "1.5"), ("x", "x"), (None, None)])
    def test_validation_value_is_text(self, value, expected):
        assert Validation(name="min", value=value).value == expected

    def test_repo_impl_deduplicated(self):
        feat = Feature.model_validate({"repo_impl": ["SQLite", "mongo", "sqlite"]})
        assert feat.repo_impl == ["sqlite", "mongo"]

    def test_repo_impl_single_string(self):
        assert Feature.model_validate({"repo_impl": "mongo"}).repo_impl == ["mongo"]

    def test_null_models_and_fields(self):
        feat = Feature.model_validate({"models": {"Thing": {"fields": None}}, "aggregates": None})
        assert feat.models["Thing"].fields == {}
        assert feat.aggregates == {}

    def test_auth_enabled(self):
        assert Feature.model_validate({"auth": {"enabled": True}}).auth_enabled is True
        assert Feature.model_validate({"auth": {}}).auth_enabled is False


# ---------------------------------------------------------------------------
# Shape errors
# ---------------------------------------------------------------------------


class TestShapeErrors:
    def test_unknown_kind(self):
        with pytest.raises(ValidationError):
            Feature.model_validate({"kind": "daemon"})

    def test_child_requires_of(self):
        with pytest.raises(ValidationError):
            ChildCollection.model_validate({"audit": True})

    def test_port_range(self):
        with pytest.raises(ValidationError):
            HTTPSection.model_validate({"api": {"port": 70000}})
