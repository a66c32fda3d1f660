from __future__ import annotations

from typing import Any, Dict, List, Tuple


def validate_config(cfg: Dict[str, Any]) -> list[str]:
    errors: list[str] = []

    routers = cfg.get("routers")
    if not isinstance(routers, list) or not routers:
        errors.append("'routers' must be a non-empty list")
        routers = []
    known = {str(name) for name in routers}
    if len(known) != len(routers):
        errors.append("router ids must be unique")

    for idx, link in _items(cfg, "links", errors):
        for key in ("a", "b"):
            _check_ref(errors, known, link.get(key), f"links[{idx}].{key}")

    for idx, seed in _items(cfg, "seeds", errors):
        _check_ref(errors, known, seed.get("router"), f"seeds[{idx}].router")
        if "prefix" not in seed:
            errors.append(f"seeds[{idx}].prefix is required")

    advertise = cfg.get("advertise") or {}
    if not isinstance(advertise, dict):
        errors.append("'advertise' must be a dict")
    else:
        order = advertise.get("order") or []
        if not isinstance(order, list):
            errors.append("advertise.order must be a list")
            order = []
        for idx, name in enumerate(order):
            _check_ref(errors, known, name, f"advertise.order[{idx}]")
        _check_positive_int(errors, advertise.get("rounds", 1), "advertise.rounds")

    output = cfg.get("output") or {}
    if not isinstance(output, dict):
        errors.append("'output' must be a dict")

    for idx, packet in _items(cfg, "packets", errors):
        for key in ("source", "destination"):
            if key not in packet:
                errors.append(f"packets[{idx}].{key} is required")
        _check_ref(errors, known, packet.get("entry"), f"packets[{idx}].entry")
        if "ttl" in packet:
            _check_positive_int(errors, packet["ttl"], f"packets[{idx}].ttl")

    return errors


def _items(
    cfg: Dict[str, Any], key: str, errors: list[str]
) -> List[Tuple[int, Dict[str, Any]]]:
    items = cfg.get(key) or []
    if not isinstance(items, list):
        errors.append(f"'{key}' must be a list")
        return []
    out: List[Tuple[int, Dict[str, Any]]] = []
    for idx, item in enumerate(items):
        if isinstance(item, dict):
            out.append((idx, item))
        else:
            errors.append(f"{key}[{idx}] must be a dict")
    return out


def _check_ref(errors: list[str], known: set[str], value: Any, where: str) -> None:
    if value is None:
        errors.append(f"{where} is required")
    elif str(value) not in known:
        errors.append(f"{where} references unknown router: {value}")


def _check_positive_int(errors: list[str], value: Any, where: str) -> None:
    try:
        number = int(value)
    except (TypeError, ValueError):
        errors.append(f"{where} must be an integer")
        return
    if number <= 0:
        errors.append(f"{where} must be > 0")
