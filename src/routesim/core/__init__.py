"""Router core: events, routers and the driver-owned network."""

from routesim.core.convergence import RoundTracker, hash_tables
from routesim.core.events import (
    DropReason,
    EventKind,
    FanoutObserver,
    JsonlObserver,
    LoggingObserver,
    RecordingObserver,
    RouterEvent,
    RouterObserver,
)
from routesim.core.network import Network
from routesim.core.router import Router

__all__ = [
    "DropReason",
    "EventKind",
    "FanoutObserver",
    "JsonlObserver",
    "LoggingObserver",
    "Network",
    "RecordingObserver",
    "RoundTracker",
    "Router",
    "RouterEvent",
    "RouterObserver",
    "hash_tables",
]
