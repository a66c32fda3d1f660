from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

PREFIX_OCTETS = 3
PREFIX_SUFFIX = ".0/24"
TABLE_RULE = "-" * 34


def derive_prefix(address: str) -> str:
    """Truncate a dotted-quad address to its /24 network prefix."""
    return ".".join(address.split(".")[:PREFIX_OCTETS]) + PREFIX_SUFFIX


class RoutingTable:
    """Insertion-ordered mapping of network prefix to next-hop router id."""

    def __init__(self) -> None:
        self._entries: Dict[str, str] = {}

    def set(self, prefix: str, next_hop: str) -> str | None:
        previous = self._entries.get(prefix)
        self._entries[prefix] = next_hop
        return previous

    def get(self, prefix: str) -> str | None:
        return self._entries.get(prefix)

    def items(self) -> List[Tuple[str, str]]:
        return list(self._entries.items())

    def snapshot(self) -> Dict[str, str]:
        return dict(self._entries)

    def __contains__(self, prefix: object) -> bool:
        return prefix in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def format_routing_table(router: str, entries: Iterable[Tuple[str, str]]) -> str:
    lines = [f"--- Routing Table for {router} ---"]
    rows = [f"Destination: {prefix} -> Next Hop: {next_hop}" for prefix, next_hop in entries]
    lines.extend(rows or ["Table is empty."])
    lines.append(TABLE_RULE)
    return "\n".join(lines)
