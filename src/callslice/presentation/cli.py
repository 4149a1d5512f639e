"""Command-line interface.

Usage:
    callslice app.api.UserController.create
    callslice app.api.UserController::create --max-depth 4 --output slice.py
    callslice app.api.UserController.create --format json --no-source

Exit codes: 0 success, 1 entry point not found, 2 configuration error.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from callslice import __version__
from callslice.application.reporters.console import ConsoleConfig, ConsoleReporter
from callslice.application.reporters.json import JsonReporter
from callslice.application.services.slice_service import SliceService
from callslice.domain.exceptions.configuration import ConfigurationError
from callslice.domain.exceptions.validation import InvalidEntryPointError
from callslice.domain.model.entry_point import EntryPoint
from callslice.domain.model.traversal_config import RevisitPolicy, TraversalConfig
from callslice.infrastructure.resolvers.pyproject import load_project_config

if TYPE_CHECKING:
    from collections.abc import Sequence

    from callslice.application.reporters.protocol import ReporterProtocol

EXIT_OK = 0
EXIT_UNRESOLVED = 1
EXIT_CONFIG_ERROR = 2

MEMBER_SEPARATOR = "::"


def parse_entry_point(text: str) -> EntryPoint:
    """Parse "pkg.mod.Class.method" or "pkg.mod.Class::method".

    Raises:
        InvalidEntryPointError: If text is not a dotted class path plus method
    """
    stripped = text.strip()
    if not stripped:
        raise InvalidEntryPointError(repr(text), "entry point must not be empty")

    if MEMBER_SEPARATOR in stripped:
        class_name, _, method_name = stripped.partition(MEMBER_SEPARATOR)
    else:
        class_name, _, method_name = stripped.rpartition(".")

    if not class_name or not method_name:
        raise InvalidEntryPointError(text, "expected <module>.<Class>.<method>")
    if not all(part.isidentifier() for part in class_name.split(".")):
        raise InvalidEntryPointError(text, f"'{class_name}' is not a dotted class path")
    if not method_name.isidentifier():
        raise InvalidEntryPointError(text, f"'{method_name}' is not a method name")

    return EntryPoint(class_name=class_name, method_name=method_name)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected integer, got '{value}'") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="callslice",
        description="Slice the code reachable from one method into a single minimized source file",
    )
    parser.add_argument("entry", help="Entry point: package.module.Class.method or package.module.Class::method")
    parser.add_argument(
        "--project-root",
        type=Path,
        default=Path.cwd(),
        help="Project directory holding pyproject.toml (default: current directory)",
    )
    parser.add_argument(
        "--max-depth",
        type=_non_negative_int,
        default=None,
        help="Maximum traversal depth, 0 = unlimited (default: from pyproject.toml, else 0)",
    )
    parser.add_argument(
        "--exclude-path",
        action="append",
        default=[],
        metavar="PREFIX",
        help="Path prefix relative to the project root to skip (repeatable)",
    )
    parser.add_argument(
        "--exclude-pattern",
        action="append",
        default=[],
        metavar="REGEX",
        help="Regex searched in absolute file paths to skip (repeatable)",
    )
    parser.add_argument(
        "--revisit",
        choices=[policy.value for policy in RevisitPolicy],
        default=RevisitPolicy.LEAF.value,
        help="Edges to already visited members: unexpanded leaf or dropped (default: leaf)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write the artifact source to file")
    parser.add_argument(
        "--format",
        choices=["console", "json"],
        default="console",
        help="Report format (default: console)",
    )
    parser.add_argument("--no-source", action="store_true", help="Omit the artifact source from the report")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress (-v) or debug details (-vv)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbosity: int) -> None:
    """Route library logging through rich on stderr."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logger = logging.getLogger("callslice")
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Arguments without program name (default: sys.argv[1:])

    Returns:
        Exit code
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    errors = Console(stderr=True)

    try:
        entry_point = parse_entry_point(args.entry)
        project = load_project_config(args.project_root)
    except (InvalidEntryPointError, ConfigurationError) as e:
        errors.print(f"[bold red]error:[/bold red] {escape(str(e))}")
        return EXIT_CONFIG_ERROR

    traversal = TraversalConfig(
        entry_point=entry_point,
        excluded_paths=(*project.exclude_paths, *args.exclude_path),
        excluded_patterns=(*project.exclude_patterns, *args.exclude_pattern),
        project_root=project.project_root,
        max_depth=args.max_depth if args.max_depth is not None else project.max_depth,
        revisit_policy=RevisitPolicy(args.revisit),
    )
    result = SliceService.for_project(project).run(traversal)

    reporter: ReporterProtocol
    if args.format == "json":
        reporter = JsonReporter(include_source=not args.no_source)
    else:
        reporter = ConsoleReporter(ConsoleConfig(show_source=not args.no_source and args.output is None))
    sys.stdout.write(reporter.report(result))

    if args.output is not None and result.artifact is not None:
        try:
            args.output.write_text(result.artifact.source, encoding="utf-8")
        except OSError as e:
            errors.print(f"[bold red]error:[/bold red] cannot write {escape(str(args.output))}: {escape(str(e))}")
            return EXIT_CONFIG_ERROR

    return EXIT_OK if result.resolved else EXIT_UNRESOLVED
