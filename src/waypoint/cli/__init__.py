"""Waypoint CLI — route table listing and template checks.

Entry point registered as ``waypoint`` in ``pyproject.toml``::

    [project.scripts]
    waypoint = "waypoint.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``waypoint`` command."""
    parser = argparse.ArgumentParser(
        prog="waypoint",
        description="Waypoint — navigation and view lifecycle for single-page applications.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- waypoint routes ---------------------------------------------------
    subparsers.add_parser("routes", help="List the standard navigation routes")

    # -- waypoint check ----------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Verify every screen template loads")
    check_parser.add_argument(
        "--template-dir",
        default=None,
        help="Directory with template overrides (checked before the bundled templates)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from waypoint.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from waypoint.cli._check import run_check

        run_check(args)
