"""Distance-vector route propagation and packet forwarding simulator."""

from routesim.core.network import Network
from routesim.core.router import Router
from routesim.model.packet import DEFAULT_TTL, Packet

__all__ = ["DEFAULT_TTL", "Network", "Packet", "Router"]
