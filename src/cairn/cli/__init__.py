"""Cairn CLI — inspect a route collection.

Entry point registered as ``cairn`` in ``pyproject.toml``::

    [project.scripts]
    cairn = "cairn.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``cairn`` command."""
    parser = argparse.ArgumentParser(
        prog="cairn",
        description="Cairn — convention-based URL routing.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- cairn routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List connected routes")
    routes_parser.add_argument(
        "collection",
        help="Import string (e.g. myapp.config:routes)",
    )

    # -- cairn check ------------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Parse a URL against the routes")
    check_parser.add_argument(
        "collection",
        help="Import string (e.g. myapp.config:routes)",
    )
    check_parser.add_argument("url", help="URL to parse (e.g. /articles/view/5?ref=home)")
    check_parser.add_argument("--method", default="GET", help="HTTP method (default: GET)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from cairn.cli._routes import run_routes

        run_routes(args)
    elif args.command == "check":
        from cairn.cli._check import run_check

        run_check(args)
