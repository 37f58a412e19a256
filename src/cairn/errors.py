"""Cairn exception hierarchy.

Shared across Route, RouteCollection, middleware, and the CLI so every
module raises and catches the same types.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


class CairnError(Exception):
    """Base for all cairn-specific errors."""


class ConfigurationError(CairnError):
    """Raised when routing configuration is invalid.

    Programmer errors: unregistered middleware, non-callable handlers,
    malformed templates, registration after freeze. Raised synchronously
    at the call that caused them.
    """


class DuplicateNamedRouteError(ConfigurationError):
    """Raised when an explicit route name is connected twice.

    The first binding is kept. ``url`` is the template of the route that
    already owns the name and ``duplicate`` is that route.
    """

    def __init__(self, name: str, url: str, duplicate: Any) -> None:
        self.name = name
        self.url = url
        self.duplicate = duplicate
        super().__init__(
            f'A route named "{name}" has already been connected to "{url}".'
        )


@dataclass(frozen=True, slots=True)
class HTTPError(CairnError):
    """An error that maps directly to an HTTP status code.

    Raised by lookups. A dispatcher translates these into responses.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


MISSING_ROUTE = 'A route matching "{url}" could not be found.'
MISSING_ROUTE_WITH_METHOD = 'A "{method}" route matching "{url}" could not be found.'
MISSING_NAMED_ROUTE = 'A route named "{url}" could not be found.'
NAMED_ROUTE_MISMATCH = 'A named route was found for "{url}", but matching failed.'


class MissingRouteError(NotFound):
    """No route could parse a URL or generate one from parameters.

    Used in both directions. Forward lookups carry ``url`` and optionally
    ``method``; reverse lookups carry ``params`` and ``context``. The
    ``template`` picks which message variant is rendered.
    """

    def __init__(
        self,
        url: str,
        *,
        method: str = "",
        params: Mapping[str, Any] | None = None,
        context: Mapping[str, Any] | None = None,
        template: str | None = None,
    ) -> None:
        if template is None:
            template = MISSING_ROUTE_WITH_METHOD if method else MISSING_ROUTE
        super().__init__(template.format(url=url, method=method))
        # HTTPError is frozen; extra diagnostics bypass its __setattr__
        object.__setattr__(self, "url", url)
        object.__setattr__(self, "method", method)
        object.__setattr__(self, "params", dict(params) if params is not None else None)
        object.__setattr__(self, "context", dict(context) if context is not None else None)

    @property
    def properties(self) -> dict[str, Any]:
        """Diagnostic fields in message order (``method`` before ``url``)."""
        props: dict[str, Any] = {}
        if self.method:
            props["method"] = self.method
        props["url"] = self.url
        if self.params is not None:
            props["params"] = self.params
        if self.context is not None:
            props["context"] = self.context
        return props
