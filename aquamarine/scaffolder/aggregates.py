"""Opt-in aggregate layout.

The generator validates aggregates but does not plan files for them on its
own; this module provides one layout that can be plugged in as
``aggregate_planner``: an ``<aggregate>_aggregate.go`` file for the root and
one ``<aggregate>_<child>.go`` file per child collection, all inside the
feature package.
"""

from __future__ import annotations

from .context import AggregateTemplateData
from .generator import PlannedFile
from .naming import to_file_slug
from .output import OutputRoot


def plan_root_and_children(
    aggregate: AggregateTemplateData, out: OutputRoot
) -> list[PlannedFile]:
    """Plan the aggregate root file and one file per child collection."""
    feature = aggregate.package_name
    slug = to_file_slug(aggregate.name)

    planned = [
        PlannedFile(
            "aggregate_root",
            out.path("internal/feat", feature, f"{slug}_aggregate.go"),
            {"aggregate": aggregate},
            feature,
            aggregate.name,
        )
    ]
    for child in aggregate.children:
        planned.append(
            PlannedFile(
                "child_collection",
                out.path("internal/feat", feature, f"{slug}_{to_file_slug(child.name)}.go"),
                {"aggregate": aggregate, "child": child},
                feature,
                child.of,
            )
        )
    return planned
