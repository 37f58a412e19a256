"""Cairn — convention-based URL routing.

Parses request paths into parameters, generates URLs back from
parameters, and resolves which middleware apply to a path.

Basic usage::

    from cairn import Route, RouteCollection

    routes = RouteCollection()
    routes.add(Route("/articles/view/:id", {"controller": "Articles", "action": "view"}))

    routes.parse("/articles/view/5?ref=home")
    # {'controller': 'Articles', 'action': 'view', 'id': '5', '?': {'ref': 'home'}}

    routes.match({"controller": "Articles", "action": "view", "id": 5})
    # 'articles/view/5'
"""

__version__ = "0.1.0"
__all__ = [
    "CairnError",
    "ConfigurationError",
    "DuplicateNamedRouteError",
    "HTTPError",
    "Middleware",
    "MissingRouteError",
    "Next",
    "NotFound",
    "Request",
    "Route",
    "RouteCollection",
    "RoutingConfig",
    "compose",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import cairn`` fast while providing a clean top-level API.
    """
    if name in ("Route", "RouteCollection"):
        from cairn import routing as _routing

        return getattr(_routing, name)

    if name == "RoutingConfig":
        from cairn.config import RoutingConfig

        return RoutingConfig

    if name == "Request":
        from cairn.http.request import Request

        return Request

    if name in ("Middleware", "Next", "compose"):
        from cairn import middleware as _mw

        return getattr(_mw, name)

    if name in (
        "CairnError",
        "ConfigurationError",
        "DuplicateNamedRouteError",
        "HTTPError",
        "MissingRouteError",
        "NotFound",
    ):
        from cairn import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
