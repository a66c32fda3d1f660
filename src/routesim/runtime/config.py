from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from routesim.model.packet import DEFAULT_TTL
from routesim.utils.io import load_yaml


@dataclass(frozen=True)
class LinkConfig:
    a: str
    b: str
    bidirectional: bool = True


@dataclass(frozen=True)
class SeedConfig:
    router: str
    prefix: str
    next_hop: Optional[str] = None


@dataclass(frozen=True)
class AdvertiseConfig:
    order: List[str] = field(default_factory=list)
    rounds: int = 1


@dataclass(frozen=True)
class PacketConfig:
    source: str
    destination: str
    entry: str
    payload: Any = ""
    ttl: int = DEFAULT_TTL


@dataclass(frozen=True)
class ScenarioConfig:
    name: str
    routers: List[str]
    links: List[LinkConfig]
    seeds: List[SeedConfig]
    advertise: AdvertiseConfig
    packets: List[PacketConfig]
    events_path: Optional[str] = None


def load_scenario_config(path: str | Path) -> ScenarioConfig:
    return parse_scenario_config(load_yaml(path))


def parse_scenario_config(raw: Dict[str, Any]) -> ScenarioConfig:
    routers = [str(name) for name in raw.get("routers") or []]
    advertise_raw = dict(raw.get("advertise") or {})
    output = dict(raw.get("output") or {})

    links = [
        LinkConfig(
            a=str(item["a"]),
            b=str(item["b"]),
            bidirectional=bool(item.get("bidirectional", True)),
        )
        for item in raw.get("links") or []
    ]
    seeds = [
        SeedConfig(
            router=str(item["router"]),
            prefix=str(item["prefix"]),
            next_hop=_optional_str(item.get("next_hop")),
        )
        for item in raw.get("seeds") or []
    ]
    packets = [
        PacketConfig(
            source=str(item["source"]),
            destination=str(item["destination"]),
            entry=str(item["entry"]),
            payload=item.get("payload", ""),
            ttl=int(item.get("ttl", DEFAULT_TTL)),
        )
        for item in raw.get("packets") or []
    ]
    advertise = AdvertiseConfig(
        order=[str(name) for name in advertise_raw.get("order") or routers],
        rounds=int(advertise_raw.get("rounds", 1)),
    )

    return ScenarioConfig(
        name=str(raw.get("name", "scenario")),
        routers=routers,
        links=links,
        seeds=seeds,
        advertise=advertise,
        packets=packets,
        events_path=_optional_str(output.get("events_path")),
    )


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)
