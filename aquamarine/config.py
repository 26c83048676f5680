"""Aquamarine generator configuration.

Typed settings for a single generation run.  The CLI builds one
``GeneratorConfig`` from its flags (optionally seeded from the environment)
and hands it to the generator.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from aquamarine.spec.loader import DEFAULT_SPEC_FILE

Mode = Literal["dev", "prod"]

_TRUTHY = {"1", "true", "yes", "on"}


class GeneratorConfig(BaseModel):
    """Settings for one generation run."""

    spec_path: Path = Field(
        default=Path(DEFAULT_SPEC_FILE), description="Specification file to read"
    )
    output_dir: Path = Field(
        default=Path("out"), description="Base directory holding one root per mode"
    )
    dev: bool = Field(default=False, description="Generate into the dev output root")
    strict_types: bool = Field(
        default=False, description="Fail on field types with no Go mapping"
    )
    aggregates: bool = Field(
        default=False, description="Render aggregate roots and child collections"
    )

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def mode(self) -> Mode:
        """``"dev"`` when the dev flag is set, otherwise ``"prod"``."""
        return "dev" if self.dev else "prod"

    @property
    def output_root(self) -> Path:
        """Directory the run writes into: ``<output_dir>/<mode>``."""
        return self.output_dir / self.mode

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            AQUAMARINE_SPEC, AQUAMARINE_OUTPUT_DIR, AQUAMARINE_DEV,
            AQUAMARINE_STRICT_TYPES, AQUAMARINE_AGGREGATES.
        """
        return cls(
            spec_path=Path(os.environ.get("AQUAMARINE_SPEC", DEFAULT_SPEC_FILE)),
            output_dir=Path(os.environ.get("AQUAMARINE_OUTPUT_DIR", "out")),
            dev=_env_flag("AQUAMARINE_DEV"),
            strict_types=_env_flag("AQUAMARINE_STRICT_TYPES"),
            aggregates=_env_flag("AQUAMARINE_AGGREGATES"),
        )


def _env_flag(name: str) -> bool:
    return os.environ.get(name, "").strip().lower() in _TRUTHY
