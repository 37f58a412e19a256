"""``cairn check`` — parse one URL against a route collection.

Prints the parsed parameters, or the routing error and exits 1.
"""

import argparse
import sys

from cairn.cli._resolve import resolve_collection
from cairn.errors import MissingRouteError


def run_check(args: argparse.Namespace) -> None:
    """Parse ``args.url`` and print each parameter on its own line."""
    try:
        collection = resolve_collection(args.collection)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    try:
        params = collection.parse(args.url, args.method.upper())
    except MissingRouteError as exc:
        print(exc.detail, file=sys.stderr)
        raise SystemExit(1) from exc

    if not params:
        print("(no parameters)")
        return

    width = max(len(str(key)) for key in params)
    for key, value in params.items():
        print(f"{str(key):<{width}}  {value!r}")
