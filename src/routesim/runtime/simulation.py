from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from routesim.core.convergence import RoundTracker
from routesim.core.events import (
    DropReason,
    EventKind,
    FanoutObserver,
    JsonlObserver,
    LoggingObserver,
    RouterEvent,
    RouterObserver,
)
from routesim.core.network import Network
from routesim.model.packet import DEFAULT_TTL, Packet
from routesim.runtime.config import ScenarioConfig, parse_scenario_config
from routesim.runtime.validate import validate_config
from routesim.utils.io import load_yaml

LOG = logging.getLogger("routesim.simulation")

_PACKET_EVENTS = {
    EventKind.PACKET_RECEIVED,
    EventKind.PACKET_FORWARDED,
    EventKind.PACKET_DELIVERED,
    EventKind.PACKET_DROPPED,
}


@dataclass
class PacketJourney:
    source: str
    destination: str
    entry: str
    events: List[RouterEvent] = field(default_factory=list)
    ttl: int = 0

    @property
    def path(self) -> List[str]:
        return [e.router for e in self.events if e.kind == EventKind.PACKET_RECEIVED]

    @property
    def outcome(self) -> str:
        if not self.events:
            return "in_transit"
        last = self.events[-1]
        if last.kind == EventKind.PACKET_DELIVERED:
            return "delivered"
        if last.kind == EventKind.PACKET_DROPPED:
            if last.details.get("reason") == DropReason.TTL_EXPIRED:
                return "dropped_ttl"
            return "dropped_no_route"
        return "in_transit"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "source": self.source,
            "destination": self.destination,
            "entry": self.entry,
            "outcome": self.outcome,
            "path": self.path,
            "ttl": self.ttl,
        }


class JourneyTracker(RouterObserver):
    """Collects packet events emitted while one injected packet is in flight.

    Forwarding is a synchronous call chain, so every packet event observed
    between ``begin`` and ``end`` belongs to the same journey.
    """

    def __init__(self) -> None:
        self._current: PacketJourney | None = None

    def begin(self, journey: PacketJourney) -> None:
        self._current = journey

    def end(self) -> PacketJourney | None:
        journey, self._current = self._current, None
        return journey

    def notify(self, event: RouterEvent) -> None:
        if self._current is not None and event.kind in _PACKET_EVENTS:
            self._current.events.append(event)


class Simulation:
    def __init__(self, config: ScenarioConfig, observer: RouterObserver | None = None) -> None:
        self.config = config
        self._tracker = JourneyTracker()
        self._jsonl = JsonlObserver(config.events_path)
        self.network = Network(
            observer=FanoutObserver([observer or LoggingObserver(), self._jsonl, self._tracker])
        )
        self._built = False

    def build(self) -> Network:
        if self._built:
            return self.network
        for name in self.config.routers:
            self.network.add_router(name)
        for link in self.config.links:
            self.network.link(link.a, link.b, bidirectional=link.bidirectional)
        for seed in self.config.seeds:
            self.network.seed(seed.router, seed.prefix, seed.next_hop)
        self._built = True
        LOG.info(
            "scenario %s built: routers=%s links=%d seeds=%d",
            self.config.name,
            self.network.names(),
            len(self.config.links),
            len(self.config.seeds),
        )
        return self.network

    def advertise_rounds(self) -> RoundTracker:
        tracker = RoundTracker()
        tracker.observe(0, self.network.routing_tables())
        for round_idx in range(1, self.config.advertise.rounds + 1):
            self.network.advertise(self.config.advertise.order)
            if tracker.observe(round_idx, self.network.routing_tables()):
                LOG.info("routing tables unchanged after round %d", round_idx)
        return tracker

    def send(
        self,
        source: str,
        destination: str,
        entry: str,
        payload: Any = "",
        ttl: int = DEFAULT_TTL,
    ) -> PacketJourney:
        packet = Packet(source, destination, payload, ttl=ttl)
        journey = PacketJourney(source=source, destination=destination, entry=entry)
        self._tracker.begin(journey)
        try:
            self.network.get(entry).receive_packet(packet)
        finally:
            self._tracker.end()
        journey.ttl = packet.ttl
        LOG.info(
            "packet %s -> %s: %s via %s (ttl=%d)",
            source,
            destination,
            journey.outcome,
            journey.path,
            packet.ttl,
        )
        return journey

    def run(self) -> Dict[str, Any]:
        try:
            self.build()
            tables_before = self.network.routing_tables()
            tracker = self.advertise_rounds()
            tables_after = self.network.routing_tables()
            journeys = [
                self.send(p.source, p.destination, p.entry, payload=p.payload, ttl=p.ttl)
                for p in self.config.packets
            ]
        finally:
            self._jsonl.close()
        return {
            "name": self.config.name,
            "tables_before": tables_before,
            "tables_after": tables_after,
            "table_hashes": tracker.hashes,
            "stable_round": tracker.stable_round,
            "packets": [journey.to_dict() for journey in journeys],
        }


def run_scenario(
    config_path: str | Path, observer: RouterObserver | None = None
) -> Dict[str, Any]:
    raw = load_yaml(config_path)
    errors = validate_config(raw)
    if errors:
        raise ValueError("Invalid config: " + "; ".join(errors))
    return Simulation(parse_scenario_config(raw), observer=observer).run()
