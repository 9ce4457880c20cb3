"""CLI entry point: python -m module_autolinking {find,list,verify} [paths...]"""

import argparse
import asyncio
import json
import logging
import sys

from dotenv import load_dotenv

from .config import AutolinkingSettings
from .discover import find_modules
from .errors import AutolinkingError
from .models import Platform, SearchConfig, SearchResults
from .platforms import resolve_modules
from .report import verify_search_results

log = logging.getLogger(__name__)


def _find(args: argparse.Namespace, results: SearchResults) -> None:
    links = asyncio.run(resolve_modules(args.platform, results))
    data = [link.model_dump(by_alias=True) for link in links]
    if args.json:
        print(json.dumps(data))
    else:
        print(json.dumps(data, indent=2))


def _list(args: argparse.Namespace, results: SearchResults) -> None:
    print(json.dumps({name: result.model_dump() for name, result in results.items()}, indent=2))


def _verify(args: argparse.Namespace, results: SearchResults) -> None:
    report = verify_search_results(results, color=sys.stdout.isatty())
    if report:
        print(report)
    else:
        print("💪 Duplicated modules not found.")


def _build_parser(settings: AutolinkingSettings) -> argparse.ArgumentParser:
    # Options shared by every command that searches first.
    search = argparse.ArgumentParser(add_help=False)
    search.add_argument(
        "search_paths",
        nargs="*",
        metavar="paths",
        help="Directories to search for modules (default: workspace node_modules)",
    )
    search.add_argument(
        "-p", "--platform",
        choices=[p.value for p in Platform],
        default=settings.platform.value,
        help=f"Platform the modules must support (default: {settings.platform.value})",
    )
    search.add_argument(
        "-i", "--ignore-paths",
        nargs="*",
        default=None,
        help="Glob patterns of directories to skip while searching",
    )
    search.add_argument(
        "-e", "--exclude",
        nargs="*",
        default=None,
        help="Package names to exclude from linking",
    )
    search.add_argument(
        "--debug",
        action="store_true",
        default=settings.debug,
        help="Enable debug logging",
    )

    parser = argparse.ArgumentParser(
        prog="module-autolinking",
        description="Search for native modules in the workspace to autolink them.",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    find = commands.add_parser("find", parents=[search], help="Print link descriptors for the platform")
    find.add_argument(
        "-j", "--json",
        action="store_true",
        help="Output the results in plain JSON format",
    )
    find.set_defaults(handler=_find)

    commands.add_parser("list", parents=[search], help="Print search results").set_defaults(handler=_list)
    commands.add_parser("verify", parents=[search], help="Report modules found at multiple paths").set_defaults(
        handler=_verify,
    )
    return parser


def main():
    load_dotenv()

    try:
        settings = AutolinkingSettings.from_env()
    except ValueError as e:
        print(f"Config error: {e}", file=sys.stderr)
        sys.exit(1)

    args = _build_parser(settings).parse_args()

    level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    provided = SearchConfig(
        search_paths=args.search_paths,
        ignore_paths=args.ignore_paths or None,
        exclude=args.exclude or None,
    )

    try:
        results = find_modules(Platform(args.platform), provided)
        args.handler(args, results)
    except AutolinkingError as e:
        print(f"Error: {e}", file=sys.stderr)
        log.debug("Autolinking failed", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
