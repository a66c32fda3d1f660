from __future__ import annotations

from typing import Any

from routesim.core.events import (
    DropReason,
    EventKind,
    LoggingObserver,
    RouterEvent,
    RouterObserver,
)
from routesim.model.packet import Packet
from routesim.model.routing import RoutingTable, derive_prefix, format_routing_table
from routesim.model.state import NeighborRegistry, RouterDirectory


class Router:
    """A named node holding a routing table and a set of neighbor ids.

    Routes are accepted unconditionally (last write wins) and advertised with
    split horizon. Packets are forwarded hop by hop through direct calls into
    the next router's ``receive_packet``; the TTL bounds the call depth.

    Neighbors are resolved by id through a ``RouterDirectory``. Routers built
    by a ``Network`` share its directory and hold no references to each other.
    A standalone ``Router(name)`` gets a private directory instead, so two
    standalone routers linked both ways do reference each other.
    """

    def __init__(
        self,
        name: str,
        directory: RouterDirectory | None = None,
        observer: RouterObserver | None = None,
    ) -> None:
        self.name = name
        self.routing_table = RoutingTable()
        self.neighbors = NeighborRegistry()
        self._directory = directory if directory is not None else RouterDirectory()
        self._observer = observer or LoggingObserver()
        self._directory.register(self)

    def add_neighbor(self, peer: "Router") -> None:
        self._directory.register(peer)
        self.neighbors.add(peer.name)
        self._emit(
            EventKind.NEIGHBOR_ADDED,
            f"Established connection to neighbor {peer.name}",
            neighbor=peer.name,
        )

    connect_neighbor = add_neighbor

    def seed_local_route(self, prefix: str, next_hop: str | None = None) -> None:
        hop = self.name if next_hop is None else next_hop
        self.routing_table.set(prefix, hop)
        self._emit(
            EventKind.ROUTE_SEEDED,
            f"Seeded local route for {prefix} via {hop}",
            prefix=prefix,
            next_hop=hop,
        )

    def receive_routing_update(self, prefix: str, next_hop: str, metric: float = 1) -> None:
        # metric is accepted for interface compatibility only
        previous = self.routing_table.set(prefix, next_hop)
        self._emit(
            EventKind.ROUTE_UPDATE,
            f"Received route for {prefix} via {next_hop}",
            prefix=prefix,
            next_hop=next_hop,
            previous=previous,
        )

    def advertise_routes(self) -> None:
        self._emit(EventKind.ADVERTISE, "Advertising its routes to all neighbors.")
        for prefix, next_hop in self.routing_table.items():
            for neighbor_id in self.neighbors.ids():
                if neighbor_id == next_hop:
                    continue
                self._emit(
                    EventKind.ROUTE_ADVERTISED,
                    f"Advertising {prefix} to {neighbor_id}",
                    prefix=prefix,
                    neighbor=neighbor_id,
                )
                self._directory.get(neighbor_id).receive_routing_update(prefix, self.name)

    def receive_packet(self, packet: Packet) -> None:
        self._emit(
            EventKind.PACKET_RECEIVED,
            f"Received {packet}",
            destination=packet.destination,
            ttl=packet.ttl,
        )
        packet.ttl -= 1

        if packet.ttl <= 0:
            self._emit(
                EventKind.PACKET_DROPPED,
                "Packet TTL expired. Dropping.",
                reason=DropReason.TTL_EXPIRED,
                destination=packet.destination,
                ttl=packet.ttl,
            )
            return

        destination_prefix = self.derive_prefix(packet.destination)
        next_hop = self.routing_table.get(destination_prefix)
        if next_hop is None:
            self._emit(
                EventKind.PACKET_DROPPED,
                f"No route to {destination_prefix}. Dropping packet.",
                reason=DropReason.NO_ROUTE,
                destination=packet.destination,
                prefix=destination_prefix,
                ttl=packet.ttl,
            )
            return

        if next_hop not in self.neighbors:
            self._emit(
                EventKind.PACKET_DELIVERED,
                f"Destination {packet.destination} is on a directly connected network. Delivered.",
                destination=packet.destination,
                prefix=destination_prefix,
                ttl=packet.ttl,
            )
            return

        self._emit(
            EventKind.PACKET_FORWARDED,
            f"Forwarding packet for {packet.destination} to {next_hop}",
            destination=packet.destination,
            next_hop=next_hop,
            ttl=packet.ttl,
        )
        self._directory.get(next_hop).receive_packet(packet)

    @staticmethod
    def derive_prefix(address: str) -> str:
        return derive_prefix(address)

    def format_routing_table(self) -> str:
        return format_routing_table(self.name, self.routing_table.items())

    def print_routing_table(self) -> str:
        text = self.format_routing_table()
        self._emit(EventKind.TABLE_DUMP, text, entries=len(self.routing_table))
        return text

    def _emit(self, kind: EventKind, message: str, **details: Any) -> None:
        self._observer.notify(
            RouterEvent(kind=kind, router=self.name, message=message, details=details)
        )

    def __repr__(self) -> str:
        return f"Router({self.name!r})"
