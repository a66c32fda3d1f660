from __future__ import annotations

from dataclasses import dataclass
from typing import Any

DEFAULT_TTL = 32


@dataclass(eq=False)
class Packet:
    source: str
    destination: str
    payload: Any = None
    ttl: int = DEFAULT_TTL

    def __str__(self) -> str:
        return f"Packet from {self.source} to {self.destination}"
