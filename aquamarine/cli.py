"""Command-line entry point.

Usage::

    aquamarine generate            # writes out/prod/
    aquamarine generate --dev      # writes out/dev/
    aquamarine help
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from aquamarine.config import GeneratorConfig
from aquamarine.errors import AquamarineError, UsageError
from aquamarine.scaffolder import ProjectGenerator, plan_root_and_children
from aquamarine.spec import load_spec
from aquamarine.utils import console, print_error, print_success, print_summary_table

USAGE = """\
Aquamarine generator
Usage:
  aquamarine generate [--dev] [--spec PATH] [--output DIR] [--strict-types] [--aggregates]
  aquamarine help
"""


def print_usage() -> None:
    console.print(USAGE, highlight=False, markup=False)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise UsageError(message)


def _generate_parser(defaults: GeneratorConfig) -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="aquamarine generate",
        description="Generate the application skeleton described by aquamarine.yaml",
    )
    parser.add_argument(
        "--dev",
        action="store_true",
        default=defaults.dev,
        help="generate into the development output directory (out/dev)",
    )
    parser.add_argument(
        "--spec",
        default=str(defaults.spec_path),
        help=f"specification file (default: {defaults.spec_path})",
    )
    parser.add_argument(
        "--output", "-o",
        default=str(defaults.output_dir),
        help=f"base output directory (default: {defaults.output_dir})",
    )
    parser.add_argument(
        "--strict-types",
        action="store_true",
        default=defaults.strict_types,
        help="fail on field types that have no Go mapping",
    )
    parser.add_argument(
        "--aggregates",
        action="store_true",
        default=defaults.aggregates,
        help="also render aggregate roots and their child collections",
    )
    return parser


def run_generate(config: GeneratorConfig) -> Path:
    """Load the specification and generate the project for *config*."""
    spec = load_spec(config.spec_path)
    generator = ProjectGenerator(
        spec,
        strict_types=config.strict_types,
        aggregate_planner=plan_root_and_children if config.aggregates else None,
    )
    root = generator.generate(config.output_dir, config.mode)
    print_summary_table(
        {
            "Project": spec.project.name,
            "Module": spec.project.module,
            "Mode": config.mode,
            "Output root": str(root),
            "Features": str(len(spec.feats)),
            "Files written": str(len(generator.written)),
        },
        title="Generation summary",
    )
    return root


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``aquamarine`` / ``python -m aquamarine``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print_usage()
        return 0

    command, rest = args[0], args[1:]
    if command in ("help", "-h", "--help"):
        print_usage()
        return 0
    if command != "generate":
        print_usage()
        print_error(f"Error: unknown command '{command}'")
        return 1

    try:
        opts = _generate_parser(GeneratorConfig.from_env()).parse_args(rest)
    except UsageError as exc:
        print_error(f"Error: {exc}")
        return 1

    config = GeneratorConfig(
        spec_path=Path(opts.spec),
        output_dir=Path(opts.output),
        dev=opts.dev,
        strict_types=opts.strict_types,
        aggregates=opts.aggregates,
    )

    try:
        run_generate(config)
    except (AquamarineError, OSError) as exc:
        print_error(f"Error: {exc}")
        return 1

    print_success("Generation completed successfully!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
