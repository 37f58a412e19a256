"""``cairn routes`` — list connected routes.

Prints every route in connect order with its derived name, explicit
name, allowed methods and the middleware its static path resolves to.
"""

import argparse
import sys

from cairn.cli._resolve import resolve_collection
from cairn.routing.route import as_list


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of the collection's routes."""
    try:
        collection = resolve_collection(args.collection)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    routes = collection.routes()
    if not routes:
        print("No routes connected.")
        return

    explicit = {id(route): name for name, route in collection.named().items()}
    headers = ("TEMPLATE", "NAME", "EXPLICIT", "METHODS", "MIDDLEWARE")
    rows: list[tuple[str, ...]] = [headers]
    for route in routes:
        methods = ", ".join(str(m).upper() for m in as_list(route.defaults.get("_method")))
        middleware = ", ".join(collection.matching_middleware_names(route.static_path))
        rows.append(
            (
                route.template,
                route.name or "-",
                explicit.get(id(route), "-"),
                methods or "ANY",
                middleware or "-",
            )
        )

    widths = [max(len(row[i]) for row in rows) for i in range(len(headers))]
    fmt = "  ".join(f"{{:<{w}}}" for w in widths)
    print(fmt.format(*rows[0]).rstrip())
    print("-" * min(sum(widths) + 2 * (len(widths) - 1), 80))
    for row in rows[1:]:
        print(fmt.format(*row).rstrip())

