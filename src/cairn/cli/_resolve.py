"""Collection import resolution — resolves ``"module:attribute"`` strings.

Shared by ``cairn routes`` and ``cairn check`` to locate a
RouteCollection from a user-supplied import string.
"""

import importlib

from cairn.routing.collection import RouteCollection


def resolve_collection(import_string: str) -> RouteCollection:
    """Resolve an import string to a RouteCollection.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"routes"`` (e.g. ``"myapp"`` resolves to
    ``myapp.routes``).

    Supports factory functions: if the resolved object is callable and
    not a RouteCollection, it is called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a RouteCollection.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "routes"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, RouteCollection):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, RouteCollection):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a RouteCollection"
        raise TypeError(msg)

    return obj
