from __future__ import annotations

import pytest

from routesim.core.convergence import RoundTracker, hash_tables
from routesim.core.events import RecordingObserver
from routesim.core.network import Network
from routesim.core.router import Router
from routesim.model.state import NeighborRegistry, RouterDirectory


def test_network_rejects_duplicate_router_ids() -> None:
    network = Network(observer=RecordingObserver())
    network.add_router("R1")
    with pytest.raises(ValueError):
        network.add_router("R1")


def test_directory_lookup_of_unknown_router_raises_key_error() -> None:
    directory = RouterDirectory()
    with pytest.raises(KeyError):
        directory.get("ghost")


def test_directory_refuses_a_second_router_under_same_id() -> None:
    directory = RouterDirectory()
    Router("R1", directory=directory, observer=RecordingObserver())
    with pytest.raises(ValueError):
        Router("R1", directory=directory, observer=RecordingObserver())


def test_one_way_link_registers_only_forward_direction() -> None:
    network = Network(observer=RecordingObserver())
    network.add_router("R1")
    network.add_router("R2")
    network.link("R1", "R2", bidirectional=False)

    assert network.get("R1").neighbors.ids() == ["R2"]
    assert network.get("R2").neighbors.ids() == []
    assert network.names() == ["R1", "R2"]
    assert "R2" in network
    assert len(network) == 2


def test_table_hash_ignores_dict_order() -> None:
    a = {"R1": {"10.0.1.0/24": "R1", "10.0.2.0/24": "R2"}, "R2": {"10.0.2.0/24": "R2"}}
    b = {"R2": {"10.0.2.0/24": "R2"}, "R1": {"10.0.2.0/24": "R2", "10.0.1.0/24": "R1"}}
    assert hash_tables(a) == hash_tables(b)


def test_round_tracker_reports_first_unchanged_round(chain: Network) -> None:
    tracker = RoundTracker()
    tracker.observe(0, chain.routing_tables())
    for round_idx in (1, 2, 3):
        chain.advertise(["R1", "R3", "R2"])
        tracker.observe(round_idx, chain.routing_tables())

    assert len(tracker.hashes) == 4
    assert tracker.hashes[0] != tracker.hashes[1]
    assert tracker.stable_round == 2


def test_neighbor_registry_keeps_one_entry_per_id() -> None:
    registry = NeighborRegistry()
    assert registry.add("R2") is True
    assert registry.add("R3") is True
    assert registry.add("R2") is False

    assert registry.ids() == ["R2", "R3"]
    assert len(registry) == 2
    assert "R3" in registry
