from __future__ import annotations

from typing import TYPE_CHECKING, Dict, List

if TYPE_CHECKING:
    from routesim.core.router import Router


class NeighborRegistry:
    """Neighbor ids known to one router, kept in registration order."""

    def __init__(self) -> None:
        self._ids: Dict[str, None] = {}

    def add(self, router_id: str) -> bool:
        if router_id in self._ids:
            return False
        self._ids[router_id] = None
        return True

    def ids(self) -> List[str]:
        return list(self._ids)

    def __contains__(self, router_id: object) -> bool:
        return router_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)


class RouterDirectory:
    """Resolves router ids to router handles for the whole simulation.

    Routers keep neighbor ids only and look peers up here when they need to
    hand over an update or a packet.
    """

    def __init__(self) -> None:
        self._routers: Dict[str, "Router"] = {}

    def register(self, router: "Router") -> None:
        current = self._routers.get(router.name)
        if current is not None and current is not router:
            raise ValueError(f"Router id already registered: {router.name}")
        self._routers[router.name] = router

    def get(self, router_id: str) -> "Router":
        try:
            return self._routers[router_id]
        except KeyError:
            raise KeyError(f"Unknown router: {router_id}") from None

    def names(self) -> List[str]:
        return list(self._routers)

    def routers(self) -> List["Router"]:
        return list(self._routers.values())

    def __contains__(self, router_id: object) -> bool:
        return router_id in self._routers

    def __len__(self) -> int:
        return len(self._routers)
