#!/usr/bin/env python3
"""
PI Hierarchy CLI

Commands:
  increments  - List PI Planning values
  squads      - List Squad Porteuse values
  epics       - List the epics of a PI / squad pair
  hierarchy   - Show the Program → Project → Epic tree of a PI / squad pair

Usage:
    pi-hierarchy increments
    pi-hierarchy hierarchy --pi "PI 1 - 2024" --squad "Squad Analytics"
    pi-hierarchy hierarchy --pi "PI 1 - 2024" --squad "Squad Analytics" --cache-file .cache/pi.json
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from .config.settings import load_settings
from .models.errors import HierarchyError
from .models.hierarchy import Epic, HierarchyEntry
from .services.planning import PlanningService
from .utils.structured_logging import setup_structured_logging

console = Console()
logger = logging.getLogger(__name__)

NO_PROGRAM = "(no program)"
NO_PROJECT = "(no project)"


def build_tree(entries: Iterable[HierarchyEntry], title: str) -> Tree:
    """Group hierarchy entries into a Program → Project → Epic tree."""
    grouped: dict[Optional[str], dict[Optional[str], list[str]]] = {}
    for entry in entries:
        projects = grouped.setdefault(entry.program_key, {})
        projects.setdefault(entry.project_key, []).append(entry.epic_key)

    tree = Tree(f"[bold]{escape(title)}[/bold]")
    for program_key, projects in grouped.items():
        program_node = tree.add(f"[cyan]{escape(program_key or NO_PROGRAM)}[/cyan]")
        for project_key, epic_keys in projects.items():
            project_node = program_node.add(f"[blue]{escape(project_key or NO_PROJECT)}[/blue]")
            for epic_key in epic_keys:
                project_node.add(escape(epic_key))
    return tree


def build_epics_table(epics: Iterable[Epic], title: str) -> Table:
    table = Table(title=escape(title))
    table.add_column("Epic")
    table.add_column("Project (POL)")
    for epic in epics:
        table.add_row(escape(epic.epic_key), escape(epic.project_key or NO_PROJECT))
    return table


async def run_command(service: PlanningService, args: argparse.Namespace) -> None:
    """Run one command against the planning service and print its result."""
    if args.command == "increments":
        for value in await service.fetch_program_increments():
            console.print(escape(value))

    elif args.command == "squads":
        for value in await service.fetch_program_squads():
            console.print(escape(value))

    elif args.command == "epics":
        epics = await service.fetch_squad_increment_epics(args.pi, args.squad)
        console.print(build_epics_table(epics, f"{args.pi} / {args.squad}"))

    elif args.command == "hierarchy":
        entries = await service.fetch_squad_increment_hierarchy(args.pi, args.squad)
        console.print(build_tree(entries, f"{args.pi} / {args.squad}"))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pi-hierarchy",
        description="PI Planning hierarchy (Program → Project → Epic) from Jira",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  pi-hierarchy increments
  pi-hierarchy squads
  pi-hierarchy epics --pi "PI 1 - 2024" --squad "Squad Analytics"
  pi-hierarchy hierarchy --pi "PI 1 - 2024" --squad "Squad Analytics"

Environment:
  JIRA_URL, JIRA_EMAIL, JIRA_API_TOKEN  Jira connection (required)
  PI_HIERARCHY_CACHE_FILE               JSON cache file (default: in-memory)
  PI_HIERARCHY_FIELDS                   Alternate Field Directory YAML
        """
    )

    parser.add_argument(
        "--env-file", "-e",
        type=Path,
        help="Load environment variables from this .env file"
    )
    parser.add_argument(
        "--cache-file", "-c",
        type=Path,
        help="Persist cached results to this JSON file"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level (default: WARNING)"
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON-structured logs"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("increments", help="List PI Planning values")
    subparsers.add_parser("squads", help="List Squad Porteuse values")

    for name, help_text in (
        ("epics", "List the epics of a PI / squad pair"),
        ("hierarchy", "Show the Program → Project → Epic tree"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("--pi", "-p", required=True, help="PI Planning value")
        sub.add_argument("--squad", "-s", required=True, help="Squad Porteuse value")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    setup_structured_logging(args.log_level, json_output=args.json_logs)

    try:
        settings = load_settings(args.env_file)
        if args.cache_file:
            settings = settings.model_copy(update={"cache_file": args.cache_file})
        service = PlanningService.from_settings(settings)
    except (HierarchyError, FileNotFoundError) as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1

    try:
        asyncio.run(run_command(service, args))
        return 0
    except HierarchyError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled by user[/yellow]")
        return 130
    finally:
        service.close()


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
