"""Aquamarine scaffolder -- turns a specification into a Go project tree.

Quick usage::

    from aquamarine.spec import load_spec
    from aquamarine.scaffolder import ProjectGenerator

    spec = load_spec("aquamarine.yaml")
    root = ProjectGenerator(spec).generate("out", "dev")
"""

from aquamarine.scaffolder.aggregates import plan_root_and_children
from aquamarine.scaffolder.generator import GenerationPlan, PlannedFile, ProjectGenerator
from aquamarine.scaffolder.output import OutputRoot
from aquamarine.scaffolder.templates import TEMPLATE_FILES, TemplateRenderer

__all__ = [
    "GenerationPlan",
    "OutputRoot",
    "PlannedFile",
    "ProjectGenerator",
    "TEMPLATE_FILES",
    "TemplateRenderer",
    "plan_root_and_children",
]
