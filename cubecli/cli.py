"""Command-line entry point.

Usage::

    cubecli create hello-world
    cubecli create hello-world -d postgres -t serverless
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import traceback
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from rich.panel import Panel
from rich.text import Text

from . import __version__
from .config import CliConfig
from .drivers import default_registry
from .errors import ScaffoldError
from .scaffolder import CreateOptions, ProjectScaffolder
from .scaffolder.registry import template_names
from .telemetry import EventSink, NullTelemetry, Telemetry
from .utils import console


async def display_error(
    message: str,
    telemetry: EventSink,
    props: dict[str, Any] | None = None,
) -> None:
    """Report a terminal failure to the user and to telemetry."""
    console.print()
    console.print(
        Panel(
            Text(message, style="red"),
            title="[bold red]Cube.js Error[/bold red]",
            border_style="red",
        )
    )
    console.print(
        "Need some help? Ask in the Cube.js community Slack: https://slack.cube.dev"
    )
    await telemetry.event("Error", error=message, **(props or {}))


async def run_create(
    project_name: str,
    db_type: str | None,
    template: str | None,
    config: CliConfig,
    base_dir: Path,
) -> int:
    """Execute ``create`` and return the process exit status."""
    telemetry = Telemetry(config.telemetry)
    props: dict[str, Any] = {"projectName": project_name, "dbType": db_type}

    try:
        options = CreateOptions(
            project_name=project_name,
            template=template or config.default_template,
            db_type=db_type,
        )
    except ValidationError as exc:
        await display_error(f"Invalid arguments: {exc}", telemetry, props)
        return 1

    scaffolder = ProjectScaffolder(config, telemetry=telemetry)
    try:
        await scaffolder.execute(options, base_dir)
    except ScaffoldError as exc:
        await display_error(str(exc), telemetry, props)
        return 1
    except Exception as exc:
        console.print(traceback.format_exc(), style="dim", markup=False, highlight=False)
        await display_error(f"{type(exc).__name__}: {exc}", telemetry, props)
        return 1
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cubecli",
        description="Cube.js command-line tools",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")
    subparsers.required = True

    create = subparsers.add_parser(
        "create",
        help="Create new Cube.js app",
        description="Create new Cube.js app",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "\n"
            "  $ cubecli create hello-world -d postgres\n"
        ),
    )
    create.add_argument("name", help="Project name; a directory of that name is created")
    create.add_argument(
        "-d", "--db-type",
        dest="db_type",
        default=None,
        help=(
            "Preconfigure for selected database. "
            f"Options: {', '.join(default_registry().keys())}"
        ),
    )
    create.add_argument(
        "-t", "--template",
        default=None,
        help=f"App template. Options: {', '.join(template_names())} (default: express)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``cubecli`` and ``python -m cubecli``."""
    args = build_parser().parse_args(argv)
    try:
        config = CliConfig.from_env()
    except ValidationError as exc:
        asyncio.run(display_error(f"Invalid configuration: {exc}", NullTelemetry()))
        sys.exit(1)

    if args.command == "create":
        code = asyncio.run(
            run_create(args.name, args.db_type, args.template, config, Path.cwd())
        )
        sys.exit(code)


if __name__ == "__main__":
    main()
