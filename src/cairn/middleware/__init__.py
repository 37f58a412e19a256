"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Any

Register middleware on a RouteCollection by name, enable it for path
scopes, then ``compose`` what ``get_matching_middleware`` resolves.
"""

from cairn.middleware.chain import compose, pipeline
from cairn.middleware.protocol import Middleware, Next

__all__ = [
    "Middleware",
    "Next",
    "compose",
    "pipeline",
]
