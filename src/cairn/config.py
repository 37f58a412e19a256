"""Routing configuration.

RoutingConfig is a frozen dataclass — immutable after creation and passed
explicitly into the RouteCollection. No process-wide defaults.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RoutingConfig:
    """Route collection configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = RoutingConfig(extensions=("json", "xml"))
    """

    # Extensions accepted before any route declares its own
    extensions: tuple[str, ...] = ()

    # Middleware paths match as plain prefixes (``/users`` matches
    # ``/users-extended``). True requires a segment boundary after the path.
    middleware_segment_boundary: bool = False

    # Strip one leading/trailing "/" from convention-matched URLs
    trim_generated_urls: bool = True

    # Scheme used for absolute URLs when neither params nor context set one
    default_scheme: str = "http"

    # Emit a DEBUG record for every lookup miss
    log_unmatched: bool = True
