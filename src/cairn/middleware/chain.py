"""Compose resolved middleware around an endpoint.

``RouteCollection.get_matching_middleware`` returns handlers in the order
they should run. ``compose`` nests them so the first handler is the
outermost and the endpoint runs last.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Any
from urllib.parse import unquote

from cairn.http.request import Request
from cairn.middleware.protocol import Middleware, Next
from cairn.routing.collection import RouteCollection


def compose(middleware: Sequence[Middleware], endpoint: Next) -> Next:
    """Wrap *endpoint* in *middleware*, first handler outermost."""
    handler = endpoint
    for mw in reversed(middleware):
        outer = handler

        async def make_next(req: Request, _mw: Middleware = mw, _next: Next = outer) -> Any:
            return await _mw(req, _next)

        handler = make_next
    return handler


def pipeline(
    routes: RouteCollection,
    request: Request,
    endpoint: Callable[[Request, dict[str, Any]], Awaitable[Any]],
) -> Next:
    """Parse *request* and build its middleware chain.

    The route parameters are bound to *endpoint*; middleware enabled for
    the request path wraps it. ``MissingRouteError`` propagates before
    any middleware runs.
    """
    params = routes.parse_request(request)

    async def call_endpoint(req: Request) -> Any:
        return await endpoint(req, params)

    return compose(routes.get_matching_middleware(unquote(request.path)), call_endpoint)
