from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterable, List


class EventKind(str, Enum):
    NEIGHBOR_ADDED = "neighbor_added"
    ROUTE_SEEDED = "route_seeded"
    ROUTE_UPDATE = "route_update"
    ADVERTISE = "advertise"
    ROUTE_ADVERTISED = "route_advertised"
    PACKET_RECEIVED = "packet_received"
    PACKET_FORWARDED = "packet_forwarded"
    PACKET_DELIVERED = "packet_delivered"
    PACKET_DROPPED = "packet_dropped"
    TABLE_DUMP = "table_dump"


class DropReason(str, Enum):
    TTL_EXPIRED = "ttl_expired"
    NO_ROUTE = "no_route"


@dataclass(frozen=True)
class RouterEvent:
    kind: EventKind
    router: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        details = {
            key: value.value if isinstance(value, Enum) else value
            for key, value in self.details.items()
        }
        return {
            "kind": self.kind.value,
            "router": self.router,
            "message": self.message,
            "details": details,
        }


class RouterObserver(ABC):
    @abstractmethod
    def notify(self, event: RouterEvent) -> None:
        raise NotImplementedError


_LEVELS = {
    EventKind.ROUTE_ADVERTISED: logging.DEBUG,
    EventKind.PACKET_DROPPED: logging.WARNING,
}


class LoggingObserver(RouterObserver):
    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._log = logger or logging.getLogger("routesim.router")

    def notify(self, event: RouterEvent) -> None:
        level = _LEVELS.get(event.kind, logging.INFO)
        self._log.log(level, "%s [%s]: %s", event.kind.name, event.router, event.message)


class RecordingObserver(RouterObserver):
    """Keeps every event in memory."""

    def __init__(self) -> None:
        self.events: List[RouterEvent] = []

    def notify(self, event: RouterEvent) -> None:
        self.events.append(event)

    def of_kind(self, kind: EventKind) -> List[RouterEvent]:
        return [event for event in self.events if event.kind == kind]

    def clear(self) -> None:
        self.events.clear()


class JsonlObserver(RouterObserver):
    def __init__(self, path: str | Path | None = None) -> None:
        self._path = Path(path) if path else None
        self._fh = None
        if self._path:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._fh = self._path.open("w", encoding="utf-8")

    @property
    def closed(self) -> bool:
        return self._fh is None

    def notify(self, event: RouterEvent) -> None:
        if not self._fh:
            return
        self._fh.write(json.dumps(event.to_dict(), sort_keys=True) + "\n")
        self._fh.flush()

    def close(self) -> None:
        if self._fh:
            self._fh.close()
            self._fh = None


class FanoutObserver(RouterObserver):
    def __init__(self, observers: Iterable[RouterObserver]) -> None:
        self._observers = list(observers)

    def notify(self, event: RouterEvent) -> None:
        for observer in self._observers:
            observer.notify(event)
