"""Immutable request abstraction.

The routing layer only needs where a request is going: method, path,
query string and host. Everything else belongs to whatever server or
framework hands requests to the RouteCollection.
"""

from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from typing import Any, TypeAlias
from urllib.parse import urlsplit

from cairn.http.query import QueryParams

# Raw ASGI scope (matching the ASGI spec)
Scope: TypeAlias = MutableMapping[str, Any]

_DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable request as seen by the router.

    ``path`` is the raw (still percent-encoded) URI path. Build one from
    a URL string with ``from_url`` or from an ASGI scope with ``from_asgi``.
    """

    method: str
    path: str
    query: QueryParams
    host: str = ""
    scheme: str = "http"
    port: int | None = None

    @property
    def query_string(self) -> str:
        return self.query.raw

    @property
    def url(self) -> str:
        """Path plus query string."""
        if self.query_string:
            return f"{self.path}?{self.query_string}"
        return self.path

    # -- Factories --

    @classmethod
    def from_url(cls, url: str, method: str = "GET") -> Request:
        """Create a Request from an absolute or path-only URL.

        Examples::

            Request.from_url("/articles/view/5?ref=home")
            Request.from_url("https://admin.example.com/users", method="POST")
        """
        parts = urlsplit(url)
        scheme = parts.scheme or "http"
        return cls(
            method=method.upper(),
            path=parts.path or "/",
            query=QueryParams(parts.query),
            host=parts.hostname or "",
            scheme=scheme,
            port=parts.port or _DEFAULT_PORTS.get(scheme),
        )

    @classmethod
    def from_asgi(cls, scope: Scope) -> Request:
        """Create a Request from an ASGI HTTP scope.

        The host comes from the ``Host`` header, falling back to the
        scope's ``server`` tuple.
        """
        scheme = scope.get("scheme", "http")
        host = ""
        port: int | None = None
        for name, value in scope.get("headers", ()):
            if name.lower() == b"host":
                host_header = value.decode("latin-1")
                host, _, port_str = host_header.partition(":")
                if port_str.isdigit():
                    port = int(port_str)
                break
        else:
            server = scope.get("server")
            if server:
                host, port = server[0], server[1]
        raw_path = scope.get("raw_path")
        return cls(
            method=scope["method"],
            path=raw_path.decode("latin-1") if raw_path else scope["path"],
            query=QueryParams(scope.get("query_string", b"")),
            host=host,
            scheme=scheme,
            port=port or _DEFAULT_PORTS.get(scheme),
        )
