"""Shared data models."""

from routesim.model.packet import DEFAULT_TTL, Packet
from routesim.model.routing import RoutingTable, derive_prefix, format_routing_table
from routesim.model.state import NeighborRegistry, RouterDirectory

__all__ = [
    "DEFAULT_TTL",
    "NeighborRegistry",
    "Packet",
    "RouterDirectory",
    "RoutingTable",
    "derive_prefix",
    "format_routing_table",
]
