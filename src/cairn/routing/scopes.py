"""Middleware scopes — path matchers with the middleware they enable.

A scope path like ``/api/:version/users`` compiles to a regex anchored
at the start only, so every deeper path inherits the scope::

    compile_scope("/api/:version")  ->  ^/api/[^/]+
"""

import re
from dataclasses import dataclass, field

# Same element grammar as route templates, minus "-" (a dash ends a token)
_TOKEN_RE = re.compile(r":([a-z0-9_]+(?<!_))", re.IGNORECASE)

ELEMENT_WILDCARD = "[^/]+"


def compile_scope(path: str, *, segment_boundary: bool = False) -> re.Pattern[str]:
    """Compile a scope path into a prefix matcher.

    Literal text is escaped and each ``:token`` becomes a one-or-more
    non-slash wildcard. With *segment_boundary*, the match must end at a
    ``/`` or the end of the path, so ``/users`` no longer matches
    ``/users-extended``.
    """
    parts: list[str] = []
    pos = 0
    for found in _TOKEN_RE.finditer(path):
        parts.append(re.escape(path[pos : found.start()]))
        parts.append(ELEMENT_WILDCARD)
        pos = found.end()
    parts.append(re.escape(path[pos:]))
    pattern = "^" + "".join(parts)
    if segment_boundary and not path.endswith("/"):
        pattern += "(?=/|$)"
    return re.compile(pattern)


@dataclass(slots=True)
class MiddlewareScope:
    """A compiled scope and the middleware names enabled for it.

    Names accumulate across ``enable_middleware`` calls for the same path.
    """

    path: str
    pattern: re.Pattern[str]
    names: list[str] = field(default_factory=list)

    def matches(self, path: str) -> bool:
        return self.pattern.match(path) is not None
