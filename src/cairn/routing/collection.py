"""RouteCollection — indexed routes for parsing and URL generation.

Routes are connected during setup, then looked up read-only for the
rest of the process:

- parsing walks static path prefixes longest-first, so ``/admin/posts``
  routes are tried before ``/admin`` routes regardless of connect order;
- URL generation walks candidate derived names most-specific-first
  (see ``cairn.routing.names``), or jumps straight to an explicit name;
- middleware scopes resolve which named middleware apply to a path.

Registration takes a lock; lookups never mutate and take none.
"""

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any
from urllib.parse import unquote

from cairn.config import RoutingConfig
from cairn.errors import (
    MISSING_NAMED_ROUTE,
    NAMED_ROUTE_MISMATCH,
    ConfigurationError,
    DuplicateNamedRouteError,
    MissingRouteError,
)
from cairn.http.query import QueryParams
from cairn.http.request import Request
from cairn.routing.names import candidate_names
from cairn.routing.route import Params, RouteProtocol, as_list
from cairn.routing.scopes import MiddlewareScope, compile_scope

logger = logging.getLogger("cairn.routing")
middleware_logger = logging.getLogger("cairn.middleware")


def _trim_slashes(url: str) -> str:
    if len(url) <= 1:
        return url
    if url.startswith("/"):
        url = url[1:]
    if url.endswith("/"):
        url = url[:-1]
    return url


class RouteCollection:
    """A collection of connected routes.

    Usage::

        routes = RouteCollection()
        routes.add(Route("/articles/view/:id", {"controller": "Articles", "action": "view"}))
        routes.parse("/articles/view/5")
        # {'controller': 'Articles', 'action': 'view', 'id': '5'}
        routes.match({"controller": "articles", "action": "view", "id": 5})
        # 'articles/view/5'
    """

    __slots__ = (
        "_config",
        "_extensions",
        "_frozen",
        "_lock",
        "_middleware",
        "_named",
        "_paths",
        "_route_table",
        "_routes",
        "_scopes",
    )

    def __init__(self, config: RoutingConfig | None = None) -> None:
        self._config = config or RoutingConfig()
        self._routes: list[RouteProtocol] = []
        # derived name -> routes, connect order
        self._route_table: dict[str, list[RouteProtocol]] = {}
        # explicit _name -> route
        self._named: dict[str, RouteProtocol] = {}
        # static path -> routes, keys kept in reverse lexicographic order
        self._paths: dict[str, list[RouteProtocol]] = {}
        self._extensions: list[str] = list(dict.fromkeys(self._config.extensions))
        self._middleware: dict[str, Callable[..., Any]] = {}
        # compiled scope pattern -> scope, registration order
        self._scopes: dict[str, MiddlewareScope] = {}
        self._lock = threading.Lock()
        self._frozen = False

    @property
    def config(self) -> RoutingConfig:
        return self._config

    # -- Registration --

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Finish setup. Any later registration raises ``ConfigurationError``."""
        self._frozen = True

    def _ensure_mutable(self, what: str) -> None:
        if self._frozen:
            msg = f"Cannot {what} after the route collection has been frozen."
            raise ConfigurationError(msg)

    def add(self, route: RouteProtocol, options: Mapping[str, Any] | None = None) -> None:
        """Connect a route.

        *options* defaults to the route's own options. An explicit
        ``_name`` must be unique; a duplicate raises
        ``DuplicateNamedRouteError`` and leaves the collection unchanged.
        """
        if options is None:
            options = route.options
        explicit = options.get("_name")

        with self._lock:
            self._ensure_mutable("add routes")
            if explicit is not None:
                existing = self._named.get(explicit)
                if existing is not None:
                    raise DuplicateNamedRouteError(explicit, existing.template, existing)

            self._routes.append(route)
            if explicit is not None:
                self._named[explicit] = route

            self._route_table.setdefault(route.name, []).append(route)

            path = route.static_path
            if path not in self._paths:
                self._paths[path] = []
                self._paths = dict(sorted(self._paths.items(), reverse=True))
                logger.debug("New static path %r, %d prefixes indexed", path, len(self._paths))
            self._paths[path].append(route)

            if route.extensions:
                self._merge_extensions(route.extensions)
            elif self._extensions:
                route.extensions = tuple(self._extensions)

        logger.debug(
            "Connected %s as %r%s",
            route.template,
            route.name,
            f" (named {explicit!r})" if explicit is not None else "",
        )

    def _merge_extensions(self, extensions: Iterable[str]) -> None:
        self._extensions = list(dict.fromkeys([*self._extensions, *extensions]))

    def extensions(
        self,
        extensions: str | Iterable[str] | None = None,
        merge: bool = True,
    ) -> list[str]:
        """Get or set the extensions the collection handles.

        With no arguments, returns the current list. Otherwise merges
        (default) or replaces, and returns the new list.
        """
        if extensions is None:
            return list(self._extensions)
        new = as_list(extensions)
        with self._lock:
            self._ensure_mutable("change extensions")
            if merge:
                self._merge_extensions(new)
            else:
                self._extensions = list(dict.fromkeys(new))
            return list(self._extensions)

    def routes(self) -> list[RouteProtocol]:
        """All connected routes in connect order."""
        return list(self._routes)

    def named(self) -> dict[str, RouteProtocol]:
        """Explicitly named routes."""
        return dict(self._named)

    # -- Parsing --

    def parse(self, url: str, method: str = "") -> Params:
        """Parse a URL into route parameters.

        A query string is parsed into a dict under the ``"?"`` key.

        Raises:
            MissingRouteError: No connected route accepts the URL.
        """
        path, _, query_string = url.partition("?")
        decoded = unquote(path)
        for prefix, routes in self._paths.items():
            if not decoded.startswith(prefix):
                continue
            for route in routes:
                params = route.parse(path, method)
                if params is None:
                    continue
                if query_string:
                    query = QueryParams(query_string).to_dict()
                    if query:
                        params["?"] = query
                return params

        if self._config.log_unmatched:
            logger.debug("No route parses %s %r", method or "-", url)
        raise MissingRouteError(url, method=method)

    def parse_request(self, request: Request) -> Params:
        """Parse a Request into route parameters.

        Like ``parse``, but routes see the whole request (so ``_host``
        options apply) and the query comes from ``request.query``.
        """
        decoded = unquote(request.path)
        for prefix, routes in self._paths.items():
            if not decoded.startswith(prefix):
                continue
            for route in routes:
                params = route.parse_request(request)
                if params is None:
                    continue
                if request.query:
                    params["?"] = request.query.to_dict()
                return params

        if self._config.log_unmatched:
            logger.debug("No route parses request %s %r", request.method, decoded)
        raise MissingRouteError(decoded, method=request.method)

    # -- Generation --

    def match(
        self,
        params: Mapping[str, Any],
        context: Mapping[str, Any] | None = None,
    ) -> str:
        """Generate a URL from *params*.

        With a ``_name`` key, only that explicitly named route is tried.
        Otherwise routes are tried by derived name (most specific first),
        and the result loses one leading and one trailing ``/``.

        *context* describes the current request: ``_base``, ``_scheme``,
        ``_host``, ``_port`` and ``params``.

        Raises:
            MissingRouteError: No route could generate a URL. The message
                distinguishes an unknown name, a named route that rejected
                the params, and no convention match.
        """
        url = dict(params)
        route_context = {"_scheme": self._config.default_scheme, **(context or {})}

        if "_name" in url:
            name = url.pop("_name")
            route = self._named.get(name)
            if route is None:
                raise MissingRouteError(
                    name, params=url, context=context, template=MISSING_NAMED_ROUTE
                )
            out = route.match({**route.defaults, **url}, route_context)
            if out:
                return out
            raise MissingRouteError(
                name, params=url, context=context, template=NAMED_ROUTE_MISMATCH
            )

        for name in candidate_names(url):
            for route in self._route_table.get(name, ()):
                out = route.match(url, route_context)
                if not out:
                    continue
                if self._config.trim_generated_urls:
                    out = _trim_slashes(out)
                return out

        if self._config.log_unmatched:
            logger.debug("No route generates a URL for %r", url)
        raise MissingRouteError(repr(url), params=url, context=context)

    # -- Middleware --

    def register_middleware(self, name: str, middleware: Callable[..., Any]) -> "RouteCollection":
        """Register *middleware* under *name* so scopes can enable it.

        Raises:
            ConfigurationError: *middleware* is a string or not callable.
        """
        if isinstance(middleware, str) or not callable(middleware):
            msg = f"The '{name}' middleware is not a callable object."
            raise ConfigurationError(msg)
        with self._lock:
            self._ensure_mutable("register middleware")
            self._middleware[name] = middleware
        middleware_logger.debug("Registered middleware %r", name)
        return self

    def has_middleware(self, name: str) -> bool:
        return name in self._middleware

    def enable_middleware(self, path: str, middleware: str | Iterable[str]) -> "RouteCollection":
        """Apply registered middleware to *path* and everything below it.

        ``:token`` segments in *path* match any single path segment.
        Repeated calls for the same path append to its list.

        Raises:
            ConfigurationError: A name has not been registered.
        """
        names = as_list(middleware)
        for name in names:
            if not self.has_middleware(name):
                msg = f"Cannot apply '{name}' middleware to path '{path}'. It has not been registered."
                raise ConfigurationError(msg)

        pattern = compile_scope(path, segment_boundary=self._config.middleware_segment_boundary)
        with self._lock:
            self._ensure_mutable("enable middleware")
            scope = self._scopes.get(pattern.pattern)
            if scope is None:
                scope = self._scopes[pattern.pattern] = MiddlewareScope(path, pattern)
            scope.names.extend(names)
        middleware_logger.debug(
            "Enabled %s for %r (%s)", ", ".join(names), path, pattern.pattern
        )
        return self

    def matching_middleware_names(self, path: str) -> list[str]:
        """Middleware names that apply to *path*, de-duplicated.

        Scopes are checked in registration order; a name enabled by
        several matching scopes keeps its first position.
        """
        matching: list[str] = []
        for scope in self._scopes.values():
            if scope.matches(path):
                matching.extend(scope.names)
        return list(dict.fromkeys(matching))

    def get_matching_middleware(self, path: str) -> list[Callable[..., Any]]:
        """Middleware handlers that apply to *path*, in resolution order."""
        return [self._middleware[name] for name in self.matching_middleware_names(path)]
