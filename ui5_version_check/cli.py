"""
Command-line interface for the UI5 version check.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional

from . import __version__
from .reporting import export_summary_csv, format_summary, print_summary
from .version_check import UI5VersionCheck


logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_DAYS_BEFORE_EOCP = 30


def resolve_manifest_paths(base_path: Path, patterns: Iterable[str]) -> List[str]:
    """Resolve ``manifest.json`` files below the given path patterns.

    Returns:
        Sorted paths relative to ``base_path``
    """
    found = set()
    for pattern in patterns:
        pattern = pattern.strip("/") or "."
        for path in base_path.glob(f"{pattern}/manifest.json"):
            if path.is_file():
                found.add(path.relative_to(base_path).as_posix())
    return sorted(found)


def _parse_allowed_days(value: Optional[str]) -> int:
    if value is None:
        return DEFAULT_ALLOWED_DAYS_BEFORE_EOCP
    try:
        return int(value)
    except ValueError:
        logger.warning(
            "Invalid value '%s' for --allowed-days-before-eocp, using %d",
            value,
            DEFAULT_ALLOWED_DAYS_BEFORE_EOCP,
        )
        return DEFAULT_ALLOWED_DAYS_BEFORE_EOCP


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ui5vc",
        description="Check and fix UI5 versions in manifest.json files"
    )
    subparsers = parser.add_subparsers(dest="command")

    check = subparsers.add_parser(
        "check",
        aliases=["c"],
        help="checks UI5 versions",
        description="Checks the validity of UI5 versions"
    )
    check.add_argument(
        "-p", "--base-path",
        required=True,
        help="Base path to start the search for manifest.json files"
    )
    check.add_argument(
        "-m", "--manifest-paths",
        nargs="+",
        default=["**"],
        help="Paths to folders containing manifest.json files (glob patterns). Default: **"
    )
    check.add_argument(
        "--allowed-days-before-eocp",
        default=None,
        help="Number of allowed days before the end of the EOCP quarter (e.g. Q1/2024). Default: 30"
    )
    check.add_argument(
        "-f", "--fix",
        action="store_true",
        help="Automatically fix outdated versions"
    )
    check.add_argument(
        "--use-lts",
        action="store_true",
        help="Update outdated versions with the latest available LTS version"
    )
    check.add_argument(
        "--eom-allowed",
        action="store_true",
        help="Versions that only reached end of maintenance produce warnings instead of errors"
    )
    check.add_argument(
        "--summary-csv",
        default=None,
        help="Write the check summary to the given CSV file"
    )
    check.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )

    subparsers.add_parser(
        "version",
        aliases=["v"],
        help="prints version information"
    )

    help_cmd = subparsers.add_parser(
        "help",
        aliases=["h"],
        help="prints cli help or help for commands"
    )
    help_cmd.add_argument("topic", nargs="?", default=None)
    help_cmd.set_defaults(commands=subparsers.choices)

    return parser


def run_check(args: argparse.Namespace) -> int:
    base_path = Path(args.base_path).resolve()
    manifest_paths = resolve_manifest_paths(base_path, args.manifest_paths)
    if not manifest_paths:
        print("No manifest.json files found!")
        return 0

    version_check = UI5VersionCheck(
        base_path=base_path,
        manifest_paths=manifest_paths,
        fix_outdated=args.fix,
        use_lts=args.use_lts,
        eom_allowed=args.eom_allowed,
        allowed_days_before_eocp=_parse_allowed_days(args.allowed_days_before_eocp),
        show_progress=True,
    )
    version_check.run()

    print(format_summary(version_check.summary))
    print_summary(version_check.summary)
    if args.summary_csv:
        summary_file = export_summary_csv(version_check.summary, Path(args.summary_csv))
        print(f"\nSummary saved to: {summary_file}")
    if version_check.updated_files:
        print(f"\nUpdated {len(version_check.updated_files)} manifest file(s)")

    if version_check.has_errors:
        print("Invalid versions in manifest files detected!")
        return 1
    return 0


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in ("help", "h"):
        if args.topic:
            if args.topic not in args.commands:
                print(f"Unknown command {args.topic}", file=sys.stderr)
                parser.print_help()
            else:
                args.commands[args.topic].print_help()
        else:
            parser.print_help()
        return

    if args.command in ("version", "v"):
        print(f"v{__version__}")
        return

    if args.command is None:
        print("No valid command supplied", file=sys.stderr)
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s"
    )

    try:
        exit_code = run_check(args)
    except Exception as e:
        logger.error("Check failed: %s", e)
        print(f"\nError during check: {e}", file=sys.stderr)
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
