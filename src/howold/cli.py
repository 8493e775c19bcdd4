#!/usr/bin/env python3
"""CLI for howold: list the projects of a GitHub repository by creation date."""

import argparse
import sys
from dataclasses import replace

from common.constants import VERSION
from common.env import env
from common.logger import console, error, get_logger

from .clients.github import GitHubClient
from .discovery import discover_projects
from .display import (
    render_found,
    render_rate_advice,
    render_results,
    render_summary,
    render_version,
    scan_progress,
)
from .models import HowoldError, InvalidOption, YearFilter
from .reference import parse_repo_reference
from .resolver import resolve_projects
from .results import select_projects

logger = get_logger(__name__)

HELP = f"""
  [cyan]◆[/cyan] [bold]howold[/bold] [dim]v{VERSION}[/dim]
  [dim]Find the latest examples, templates, and starters in GitHub repos[/dim]

  [bold]Usage[/bold]
    [dim]$[/dim] howold [cyan]<repo>[/cyan] [dim]\\[path] \\[options][/dim]

  [bold]Options[/bold]
    [cyan]-y[/cyan], [cyan]--year[/cyan] [dim]<range>[/dim]    Filter by year [dim](2025 or 2020-2025)[/dim]
    [cyan]-l[/cyan], [cyan]--limit[/cyan] [dim]<n>[/dim]       Show n latest results
    [cyan]-m[/cyan], [cyan]--marker[/cyan] [dim]<file>[/dim]   Project marker file [dim](default: package.json)[/dim]
    [cyan]-v[/cyan], [cyan]--version[/cyan]         Show version
    [cyan]-h[/cyan], [cyan]--help[/cyan]            Show help

  [bold]Environment[/bold]
    [cyan]GITHUB_TOKEN[/cyan]        [dim]Higher rate limits (5000/hr vs 60/hr)[/dim]

  [bold]Examples[/bold]
    [dim]$[/dim] howold [cyan]vercel/next.js[/cyan] examples/
    [dim]$[/dim] howold [cyan]get-convex/templates[/cyan] -y 2024 -l 10
    [dim]$[/dim] howold [cyan]https://github.com/vercel/next.js/tree/canary/examples[/cyan]
"""


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that raises instead of exiting with status 2."""

    def error(self, message):
        raise InvalidOption(message)


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog="howold", add_help=False)
    parser.add_argument("repo", nargs="?", help="owner/repo or GitHub URL")
    parser.add_argument("path", nargs="?", help="Only scan below this path")
    parser.add_argument("-y", "--year", help="Creation year or range, e.g. 2025 or 2020-2025")
    parser.add_argument("-l", "--limit", help="Show only the n most recent projects")
    parser.add_argument("-m", "--marker", help="Filename that marks a project directory")
    parser.add_argument("-v", "--version", action="store_true")
    parser.add_argument("-h", "--help", action="store_true")
    return parser


def parse_limit(value: str | None) -> int | None:
    """Parse --limit. 0 or no value means no limit.

    Raises:
        InvalidOption: If value is not a non-negative integer
    """
    if value is None:
        return None
    try:
        limit = int(value)
    except ValueError:
        raise InvalidOption(f"Invalid limit '{value}' (expected a number)") from None
    if limit < 0:
        raise InvalidOption(f"Invalid limit '{value}' (must not be negative)")
    return limit or None


def run(args: argparse.Namespace) -> int:
    """Fetch, resolve and display the projects of one repository.

    Returns:
        Exit code (0 for success)

    Raises:
        HowoldError: On invalid input or a fatal GitHub API failure
    """
    year_filter = YearFilter.parse(args.year) if args.year else None
    limit = parse_limit(args.limit)
    marker = args.marker or env.marker_file()

    reference = parse_repo_reference(args.repo)
    if args.path and not reference.path:
        reference = replace(reference, path=args.path)

    with GitHubClient(token=env.github_token()) as client:
        metadata = client.get_repository(reference.owner, reference.repo)
        branch = reference.branch or metadata.default_branch
        render_summary(reference, branch, metadata, year_filter)

        directories = discover_projects(client, reference, branch, marker)
        render_found(len(directories))

        with scan_progress(len(directories)) as update:
            resolutions = resolve_projects(
                client, reference, directories, branch, marker, on_progress=update
            )

        records = [r.record for r in resolutions if r.record is not None]
        shown, total = select_projects(records, year_filter, limit)
        render_results(shown, total, skipped=len(resolutions) - len(records))
        render_rate_advice(client.has_token, client.rate_state)

    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code: 0 on success (including --help and --version), 1 on error
    """
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
    except InvalidOption as e:
        error(str(e))
        return 1

    if args.version:
        render_version()
        return 0

    if args.help or not args.repo:
        console.print(HELP, highlight=False)
        return 0 if args.help else 1

    try:
        return run(args)
    except HowoldError as e:
        error(str(e))
        return 1
    except KeyboardInterrupt:
        error("Interrupted")
        return 130
    except Exception as e:
        logger.debug("Unexpected failure", exc_info=True)
        error(f"Unexpected error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
