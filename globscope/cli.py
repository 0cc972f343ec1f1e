"""
Command-line interface for globscope.

This module is responsible for argument parsing and for wiring the
menu, project discovery and ripgrep adapter together around the
classification core.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from .config import Config, build_registry
from .domain import SearchMode
from .errors import GlobScopeError
from .logging_utils import configure_logging
from .menu import MenuSession, groups_table, run_menu
from .project import find_project_root, load_ignore_lists
from .query import build_arguments
from .rg_adapter import SearchResult, run_search

LOG = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="globscope",
        description=(
            "Classify named glob groups as included or excluded in an "
            "interactive menu, then run ripgrep scoped to them."
        ),
    )

    parser.add_argument(
        "query",
        nargs="?",
        help="Text or regular expression to search for.",
    )
    parser.add_argument(
        "--root",
        help="Directory to search from (default: project root of the current directory).",
    )
    parser.add_argument(
        "-F",
        "--literal",
        dest="literal",
        action="store_true",
        help="Treat the query as literal text.",
    )
    parser.add_argument(
        "--regex",
        dest="literal",
        action="store_false",
        help="Treat the query as a regular expression (default).",
    )
    parser.set_defaults(literal=False)

    parser.add_argument(
        "--groups",
        dest="groups_file",
        help="JSON file mapping glob group ids to lists of glob patterns.",
    )
    parser.add_argument(
        "-i",
        "--include",
        dest="include_groups",
        action="append",
        default=[],
        metavar="GROUP",
        help="Start with GROUP included (can be specified multiple times).",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        dest="exclude_groups",
        action="append",
        default=[],
        metavar="GROUP",
        help="Start with GROUP excluded (can be specified multiple times).",
    )
    parser.add_argument(
        "--no-menu",
        dest="interactive",
        action="store_false",
        help="Skip the interactive menu and search right away.",
    )
    parser.add_argument(
        "--rg",
        dest="rg_executable",
        default="rg",
        help="ripgrep executable to run (default: rg).",
    )
    parser.add_argument(
        "--rg-arg",
        dest="extra_rg_args",
        action="append",
        default=[],
        metavar="ARG",
        help="Extra argument passed to ripgrep as is, e.g. --rg-arg=--hidden (can be specified multiple times).",
    )
    parser.add_argument(
        "--list-groups",
        action="store_true",
        help="Print the available glob groups and exit.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (can be specified multiple times).",
    )

    return parser


def print_results(console: Console, result: SearchResult) -> None:
    if not result.matches:
        console.print("[dim]No matches.[/dim]")
        return

    for match in result.matches:
        console.print(
            f"[magenta]{escape(match.path)}[/magenta]:"
            f"[green]{match.line_number}[/green]:{escape(match.text)}",
            highlight=False,
        )
    console.print(f"[dim]{len(result.matches)} match(es)[/dim]")


def run(config: Config, console: Console, list_groups: bool = False) -> int:
    registry = build_registry(config)

    if list_groups:
        console.print(groups_table(registry))
        return 0

    # Root errors surface before the menu opens.
    root = find_project_root(config.root)
    ignores = load_ignore_lists(root)

    session = MenuSession(registry, mode=config.mode)
    session.apply_groups(config.include_groups, "included")
    session.apply_groups(config.exclude_groups, "excluded")

    if config.interactive:
        if run_menu(session, console) is None:
            LOG.info("menu closed without searching")
            return 0

    query = config.query
    if query is None:
        query = console.input("[bold blue]search for:[/bold blue] ")
    if not query:
        console.print("[yellow]Empty query; nothing to search.[/yellow]")
        return 0

    arguments = build_arguments(session.state, ignores.as_globs(), session.mode)

    result = run_search(
        arguments,
        query,
        root,
        rg_executable=config.rg_executable,
        extra_args=config.extra_rg_args,
    )
    print_results(console, result)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    config = Config(
        query=args.query,
        root=args.root,
        mode=SearchMode.LITERAL if args.literal else SearchMode.REGEX,
        groups_file=args.groups_file,
        rg_executable=args.rg_executable,
        extra_rg_args=args.extra_rg_args,
        include_groups=args.include_groups,
        exclude_groups=args.exclude_groups,
        interactive=args.interactive,
        verbosity=args.verbose,
    )

    configure_logging(verbosity=config.verbosity)
    console = Console()

    try:
        return run(config, console, list_groups=args.list_groups)
    except KeyboardInterrupt:
        # Graceful shutdown on Ctrl+C
        return 130
    except EOFError:
        return 0
    except GlobScopeError as exc:
        print(f"globscope: error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover - manual invocation
    raise SystemExit(main())
