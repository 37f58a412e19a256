"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Any: ...

No base class required. The RouteCollection only stores and resolves
middleware; whatever serves requests decides what ``next`` returns.
"""

from collections.abc import Awaitable, Callable
from typing import Any, Protocol, TypeAlias

from cairn.http.request import Request

# The next handler in the middleware chain
Next: TypeAlias = Callable[[Request], Awaitable[Any]]


class Middleware(Protocol):
    """Protocol for cairn middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> Any:
            start = time.monotonic()
            response = await next(request)
            log.info("%s took %.3fs", request.path, time.monotonic() - start)
            return response

        # Class middleware
        class RequireJSON:
            async def __call__(self, request: Request, next: Next) -> Any:
                ...
    """

    async def __call__(self, request: Request, next: Next) -> Any: ...
