"""Candidate lookup names for reverse routing.

Routes are bucketed by their derived name (``Route.name``). To find the
routes that could generate a URL for a parameter set, the collection
asks for every name the parameters could have been derived from, most
specific first::

    >>> candidate_names({"controller": "Posts", "action": "view"})
    ['posts:view', 'posts:_action', '_controller:view', '_controller:_action']

Axes are ordered prefix, plugin, controller, action. For each axis the
concrete value is tried before its ``_axis`` wildcard, and earlier axes
vary slowest, so the all-concrete name comes first and the all-wildcard
name comes last.
"""

from collections.abc import Mapping
from itertools import product
from typing import Any


def _axis(params: Mapping[str, Any], key: str) -> str | None:
    value = params.get(key)
    if value is None or value is False:
        return None
    return str(value).lower()


def candidate_names(params: Mapping[str, Any]) -> list[str]:
    """Return the ordered lookup names for *params*.

    Always 4, 8, 8 or 16 names depending on whether ``plugin`` and
    ``prefix`` are present. ``None`` and ``False`` count as absent.
    """
    prefix = _axis(params, "prefix")
    plugin = _axis(params, "plugin")
    controller = _axis(params, "controller") or ""
    action = _axis(params, "action") or ""

    controllers = (controller, "_controller")
    actions = (action, "_action")
    prefixes = (f"{prefix}:", "_prefix:") if prefix is not None else ("",)
    plugins = (f"{plugin}.", "_plugin.") if plugin is not None else ("",)

    return [
        f"{pre}{plug}{ctrl}:{act}"
        for pre, plug, ctrl, act in product(prefixes, plugins, controllers, actions)
    ]
