# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command-line interface for Ore Monitor.

This module provides the main CLI entry point for the oremon tool, offering
commands to search Ore, inspect plugins, download plugin files and check
local plugins for updates.

Commands:

    search: Search Ore projects
    plugin: Show a project, its versions, or one version
    install: Download a plugin version into a folder
    check: Compare local plugin archives with Ore's promoted versions

Example:
    Check a server's plugin folder:
        ```bash
        $ oremon check ./mods
        ```

    Show the versions of a plugin:
        ```bash
        $ oremon plugin nucleus versions --limit 5
        ```

    Download a version:
        ```bash
        $ oremon install nucleus 2.1.4 --dir ./mods
        ```

Exit Codes:

- 0: Success
- 1: Error (configuration, network, or archive failure)

Note:
    Each command has its own handler function (cmd_<command>).
    Verbose mode shows full tracebacks on errors for debugging.
    Debug mode implies verbose mode.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable
from importlib.metadata import version
from pathlib import Path
import sys

from oremonitor.config import load_effective_config
from oremonitor.core import check_versions, install_plugin
from oremonitor.exceptions import OreMonitorError
from oremonitor.logging import get_logger, set_global_logger
from oremonitor.ore import (
    Category,
    FileInfo,
    OreClient,
    PaginatedProjects,
    Project,
    ProjectSort,
    Version,
)
from oremonitor.results import VersionComparisonResult

_BYTE_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")


def human_bytes(size: float) -> str:
    """Format a byte count with binary units, e.g. ``1.5 MiB``."""
    value = float(size)
    unit = _BYTE_UNITS[0]
    for unit in _BYTE_UNITS[:-1]:
        if abs(value) < 1024:
            break
        value /= 1024
    else:
        unit = _BYTE_UNITS[-1]
    text = f"{value:.1f}".rstrip("0").rstrip(".")
    return f"{text} {unit}"


def _banner(title: str = "") -> str:
    return f"{title:=^45}"


# -------------------------------
# Formatting
# -------------------------------


def format_search(page: PaginatedProjects) -> str:
    lines = [
        f"{project.plugin_id} ({project.name}) by {project.namespace.owner}"
        for project in page.result
    ]
    p = page.pagination
    lines.append(f"Showing {len(page.result)} of {p.count} (offset {p.offset})")
    return "\n".join(lines)


def format_project(project: Project) -> str:
    promoted = "\n\t| ".join(
        f"{pv.version} - {'-'.join(str(t) for t in pv.tags)}"
        for pv in project.promoted_versions
    )
    stats = project.stats
    lines = [
        f"Plugin ID : {project.plugin_id}",
        f"Author : {project.namespace.owner}",
        f"Description : {project.description}",
        f"Last Updated : {project.last_updated or ''}",
        f"Promoted Version : {promoted}",
        f"Views : {stats.views}",
        f"Recent Views : {stats.recent_views}",
        f"Downloads : {stats.downloads}",
        f"Recent Downloads : {stats.recent_downloads}",
        f"Stars : {stats.stars}",
        f"Watchers : {stats.watchers}",
    ]
    return "\n".join(lines)


def format_file_info(info: FileInfo) -> str:
    return "\n".join(
        [
            _banner("[File Info]"),
            f"# Name : {info.name}",
            f"# Bytes : {human_bytes(info.size_bytes)}",
            f"# md_5 : {info.md5_hash or 'Not Available'}",
            _banner(),
        ]
    )


def format_version(ver: Version) -> str:
    lines = [
        _banner(f"[{ver.name}]"),
        f"Author : {ver.author or ''}",
        f"Created at : {ver.created_at or ''}",
        f"Review State : {ver.review_state}",
        f"Tags : {''.join(f'[{t}] ' for t in ver.tags)}".rstrip(),
        f"Dependencies : {''.join(str(d) for d in ver.dependencies)}",
        f"Downloads : {ver.downloads}",
        format_file_info(ver.file_info),
    ]
    return "\n".join(lines)


def format_check(result: VersionComparisonResult) -> str:
    lines = [
        f"ModID: {result.mod_id}",
        f"Local Version : {result.local_version}",
        f"Remote Version : {result.remote_version or 'unknown'}",
        f"Version Status : {result.status_text}",
    ]
    return "\n".join(lines)


# -------------------------------
# Command handlers
# -------------------------------


def _run(args: argparse.Namespace, action: Callable[[OreClient, dict], int]) -> int:
    """Configure logging, load config, open a client and run action.

    Prints OreMonitorError as ``Error: ...`` and returns 1.
    """
    logger = get_logger(verbose=args.verbose, debug=args.debug)
    set_global_logger(logger)

    try:
        config = load_effective_config(Path(args.config) if args.config else None)
        client = OreClient.from_config(config)
        try:
            return action(client, config)
        finally:
            client.close()
    except OreMonitorError as err:
        print(f"Error: {err}")
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return 1


def cmd_search(args: argparse.Namespace) -> int:
    """Handler for 'oremon search' command."""

    def action(client: OreClient, _config: dict) -> int:
        page = client.search_projects(
            args.query,
            categories=args.categories,
            tags=args.tags,
            owner=args.owner,
            sort=args.sort,
            relevance=args.relevance,
            limit=args.limit,
            offset=args.offset,
        )
        print(format_search(page))
        return 0

    return _run(args, action)


def cmd_plugin(args: argparse.Namespace) -> int:
    """Handler for 'oremon plugin' command.

    ``plugin ID`` shows the project, ``plugin ID versions`` lists versions
    and ``plugin ID versions NAME`` shows one version.
    """
    if args.name and not args.subcommand:
        print(f"Error: unexpected argument {args.name!r}; did you mean 'versions {args.name}'?")
        return 1

    def action(client: OreClient, _config: dict) -> int:
        if args.subcommand != "versions":
            print(format_project(client.get_project(args.plugin_id)))
        elif args.name:
            print(format_version(client.get_version(args.plugin_id, args.name)))
        else:
            page = client.list_versions(
                args.plugin_id, tags=args.tags, limit=args.limit, offset=args.offset
            )
            print("\n".join(format_version(v) for v in page.result))
        return 0

    return _run(args, action)


def cmd_install(args: argparse.Namespace) -> int:
    """Handler for 'oremon install' command.

    Downloads the requested version from the public Ore site. The target
    folder defaults to ``install.directory`` from the configuration.
    """

    def action(client: OreClient, config: dict) -> int:
        directory = Path(args.dir or config["install"]["directory"])
        result = install_plugin(client, args.plugin_id, args.version, directory)
        print(f"Installed '{result.file_path.name}' into '{result.file_path.parent}'")
        return 0

    return _run(args, action)


def cmd_check(args: argparse.Namespace) -> int:
    """Handler for 'oremon check' command.

    Args:
        args: Parsed command-line arguments containing the path to check.

    Returns:
        Exit code (0 for success, 1 for failure). Plugins without a
        remote match are reported as "unknown" and do not fail the run.
    """

    def action(client: OreClient, config: dict) -> int:
        results = check_versions(
            client, Path(args.path), config["check"]["platform_id"]
        )
        print("\n\n".join(format_check(r) for r in results))
        return 0

    return _run(args, action)


# -------------------------------
# Parser
# -------------------------------


def _csv(kind: Callable[[str], object]) -> Callable[[str], list]:
    def parse(value: str) -> list:
        try:
            return [kind(item.strip()) for item in value.split(",") if item.strip()]
        except ValueError as err:
            raise argparse.ArgumentTypeError(str(err)) from err

    return parse


def _bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    common.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    common.add_argument(
        "--config",
        default=None,
        help="Path to a YAML config file (default: ./ore-monitor.yaml or ~/.config/ore-monitor/config.yaml)",
    )

    parser = argparse.ArgumentParser(
        prog="oremon",
        description="Ore Monitor - search, install and update-check Sponge plugins hosted on Ore",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"oremon {version('ore-monitor')}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'search' command
    parser_search = subparsers.add_parser(
        "search",
        parents=[common],
        help="Search Ore projects",
        description="List plugins matching a query, categories, tags or owner.",
    )
    parser_search.add_argument("query", nargs="?", default=None, help="Search query")
    parser_search.add_argument(
        "-c",
        "--categories",
        type=_csv(Category),
        default=None,
        help="Comma separated categories (e.g. chat,economy)",
    )
    parser_search.add_argument(
        "-t", "--tags", type=_csv(str), default=None, help="Comma separated tags"
    )
    parser_search.add_argument("-o", "--owner", default=None, help="Project owner")
    parser_search.add_argument(
        "-s",
        "--sort",
        type=ProjectSort,
        choices=list(ProjectSort),
        metavar="{" + ",".join(s.value for s in ProjectSort) + "}",
        default=None,
        help="Sort order",
    )
    parser_search.add_argument(
        "-r", "--relevance", type=_bool, default=None, help="Consider relevance (true/false)"
    )
    parser_search.add_argument("-l", "--limit", type=int, default=None, help="Maximum results")
    parser_search.add_argument("--offset", type=int, default=0, help="Result offset (default: 0)")
    parser_search.set_defaults(func=cmd_search)

    # 'plugin' command
    parser_plugin = subparsers.add_parser(
        "plugin",
        parents=[common],
        help="Show a project, its versions, or one version",
        description="Show project details, or with 'versions' list versions or show one version.",
    )
    parser_plugin.add_argument("plugin_id", help="Ore plugin id")
    parser_plugin.add_argument(
        "subcommand", nargs="?", choices=["versions"], default=None, help="'versions'"
    )
    parser_plugin.add_argument("name", nargs="?", default=None, help="Version name")
    parser_plugin.add_argument(
        "-t", "--tags", type=_csv(str), default=None, help="Comma separated version tags"
    )
    parser_plugin.add_argument("-l", "--limit", type=int, default=None, help="Maximum results")
    parser_plugin.add_argument("--offset", type=int, default=None, help="Result offset")
    parser_plugin.set_defaults(func=cmd_plugin)

    # 'install' command
    parser_install = subparsers.add_parser(
        "install",
        parents=[common],
        help="Download a plugin version",
        description="Download a plugin version from Ore into a folder.",
    )
    parser_install.add_argument("plugin_id", help="Ore plugin id")
    parser_install.add_argument("version", help="Version name")
    parser_install.add_argument(
        "--dir",
        default=None,
        help="Destination folder (default: install.directory from config, '.')",
    )
    parser_install.set_defaults(func=cmd_install)

    # 'check' command
    parser_check = subparsers.add_parser(
        "check",
        parents=[common],
        help="Check local plugins against Ore",
        description="Compare local plugin archives with the promoted Ore version for the same API.",
    )
    parser_check.add_argument(
        "path", nargs="?", default=".", help="Plugin archive or folder (default: .)"
    )
    parser_check.set_defaults(func=cmd_check)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the oremon CLI.

    This function is registered as the 'oremon' console script in pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
