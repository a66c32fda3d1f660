from __future__ import annotations

from typing import Dict, Iterable, List

from routesim.core.events import LoggingObserver, RouterObserver
from routesim.core.router import Router
from routesim.model.state import RouterDirectory

RoutingTables = Dict[str, Dict[str, str]]


class Network:
    """Owns every router of a simulation and the id -> router directory."""

    def __init__(self, observer: RouterObserver | None = None) -> None:
        self._observer = observer or LoggingObserver()
        self._directory = RouterDirectory()

    def add_router(self, name: str) -> Router:
        if name in self._directory:
            raise ValueError(f"Router id already registered: {name}")
        return Router(name, directory=self._directory, observer=self._observer)

    def get(self, name: str) -> Router:
        return self._directory.get(name)

    def names(self) -> List[str]:
        return self._directory.names()

    def routers(self) -> List[Router]:
        return self._directory.routers()

    def link(self, a: str, b: str, bidirectional: bool = True) -> None:
        left = self.get(a)
        right = self.get(b)
        left.add_neighbor(right)
        if bidirectional:
            right.add_neighbor(left)

    def seed(self, router: str, prefix: str, next_hop: str | None = None) -> None:
        self.get(router).seed_local_route(prefix, next_hop)

    def advertise(self, order: Iterable[str] | None = None) -> None:
        for name in self.names() if order is None else order:
            self.get(name).advertise_routes()

    def routing_tables(self) -> RoutingTables:
        return {router.name: router.routing_table.snapshot() for router in self.routers()}

    def __contains__(self, name: object) -> bool:
        return name in self._directory

    def __len__(self) -> int:
        return len(self._directory)
