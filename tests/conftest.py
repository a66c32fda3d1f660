from __future__ import annotations

import pytest

from routesim.core.events import RecordingObserver
from routesim.core.network import Network


@pytest.fixture
def recorder() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def chain(recorder: RecordingObserver) -> Network:
    network = Network(observer=recorder)
    for name in ("R1", "R2", "R3"):
        network.add_router(name)
    network.link("R1", "R2")
    network.link("R2", "R3")
    network.seed("R1", "192.168.1.0/24")
    network.seed("R2", "192.168.2.0/24")
    network.seed("R3", "192.168.3.0/24")
    return network
