"""Routing — Route templates and the RouteCollection that indexes them.

Routes are connected during setup and looked up read-only afterwards.
"""

from cairn.routing.collection import RouteCollection
from cairn.routing.names import candidate_names
from cairn.routing.route import Route, RouteProtocol

__all__ = ["Route", "RouteCollection", "RouteProtocol", "candidate_names"]
