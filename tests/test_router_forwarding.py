from __future__ import annotations

import logging

from routesim.core.events import DropReason, EventKind, RecordingObserver
from routesim.core.network import Network
from routesim.core.router import Router
from routesim.model.packet import Packet


def test_packet_is_forwarded_along_chain_and_delivered(
    chain: Network, recorder: RecordingObserver
) -> None:
    chain.advertise(["R1", "R3", "R2"])
    recorder.clear()

    packet = Packet("192.168.1.10", "192.168.3.15", "Hello World!")
    chain.get("R1").receive_packet(packet)

    assert packet.ttl == 29
    received = recorder.of_kind(EventKind.PACKET_RECEIVED)
    assert [e.router for e in received] == ["R1", "R2", "R3"]
    forwarded = recorder.of_kind(EventKind.PACKET_FORWARDED)
    assert [(e.router, e.details["next_hop"]) for e in forwarded] == [("R1", "R2"), ("R2", "R3")]
    delivered = recorder.of_kind(EventKind.PACKET_DELIVERED)
    assert [e.router for e in delivered] == ["R3"]
    assert recorder.of_kind(EventKind.PACKET_DROPPED) == []


def test_packet_without_route_is_dropped_at_first_router(
    chain: Network, recorder: RecordingObserver
) -> None:
    chain.advertise(["R1", "R3", "R2"])
    recorder.clear()

    packet = Packet("192.168.1.10", "10.20.30.40", "lost")
    chain.get("R2").receive_packet(packet)

    assert packet.ttl == 31
    assert recorder.of_kind(EventKind.PACKET_FORWARDED) == []
    dropped = recorder.of_kind(EventKind.PACKET_DROPPED)
    assert len(dropped) == 1
    assert dropped[0].router == "R2"
    assert dropped[0].details["reason"] == DropReason.NO_ROUTE
    assert dropped[0].details["prefix"] == "10.20.30.0/24"


def test_packet_with_exhausted_ttl_never_reaches_next_hop(
    chain: Network, recorder: RecordingObserver
) -> None:
    chain.advertise(["R1", "R3", "R2"])
    recorder.clear()

    packet = Packet("192.168.1.10", "192.168.3.15", "late", ttl=1)
    chain.get("R1").receive_packet(packet)

    assert packet.ttl == 0
    assert [e.router for e in recorder.of_kind(EventKind.PACKET_RECEIVED)] == ["R1"]
    dropped = recorder.of_kind(EventKind.PACKET_DROPPED)
    assert [(e.router, e.details["reason"]) for e in dropped] == [("R1", DropReason.TTL_EXPIRED)]


def test_ttl_bounds_forwarding_loop(recorder: RecordingObserver) -> None:
    network = Network(observer=recorder)
    network.add_router("A")
    network.add_router("B")
    network.link("A", "B")
    network.get("A").receive_routing_update("10.9.9.0/24", "B")
    network.get("B").receive_routing_update("10.9.9.0/24", "A")

    packet = Packet("10.1.1.1", "10.9.9.9", "loop")
    network.get("A").receive_packet(packet)

    assert packet.ttl == 0
    assert len(recorder.of_kind(EventKind.PACKET_RECEIVED)) == 32
    assert len(recorder.of_kind(EventKind.PACKET_FORWARDED)) == 31
    dropped = recorder.of_kind(EventKind.PACKET_DROPPED)
    assert len(dropped) == 1
    assert dropped[0].details["reason"] == DropReason.TTL_EXPIRED


def test_next_hop_outside_neighbors_counts_as_local_delivery(recorder: RecordingObserver) -> None:
    router = Router("R1", observer=recorder)
    router.seed_local_route("192.168.4.0/24", "R9")

    packet = Packet("192.168.1.10", "192.168.4.1", "x")
    router.receive_packet(packet)

    assert packet.ttl == 31
    assert [e.kind for e in recorder.events] == [
        EventKind.ROUTE_SEEDED,
        EventKind.PACKET_RECEIVED,
        EventKind.PACKET_DELIVERED,
    ]


def test_default_observer_writes_to_logging(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="routesim.router")
    r1 = Router("R1")
    r2 = Router("R2")
    r1.add_neighbor(r2)
    r1.receive_packet(Packet("192.168.1.10", "10.0.0.1", "x"))

    messages = [record.getMessage() for record in caplog.records]
    assert "NEIGHBOR_ADDED [R1]: Established connection to neighbor R2" in messages
    assert "PACKET_DROPPED [R1]: No route to 10.0.0.0/24. Dropping packet." in messages
    drop = [r for r in caplog.records if "Dropping packet" in r.getMessage()][0]
    assert drop.levelno == logging.WARNING
