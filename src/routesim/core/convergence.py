from __future__ import annotations

import hashlib
import json
from typing import Dict, List, Optional


def hash_tables(tables: Dict[str, Dict[str, str]]) -> str:
    normalized = {
        str(router): {str(prefix): str(hop) for prefix, hop in sorted(routes.items())}
        for router, routes in sorted(tables.items())
    }
    payload = json.dumps(normalized, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class RoundTracker:
    """Records table hashes per advertisement round.

    ``stable_round`` is the first round that left every table unchanged.
    """

    def __init__(self) -> None:
        self.hashes: List[str] = []
        self.stable_round: Optional[int] = None

    def observe(self, round_idx: int, tables: Dict[str, Dict[str, str]]) -> bool:
        current = hash_tables(tables)
        unchanged = bool(self.hashes) and self.hashes[-1] == current
        self.hashes.append(current)
        if unchanged and self.stable_round is None:
            self.stable_round = round_idx
            return True
        return False
