from __future__ import annotations

import argparse
import json
import logging
from typing import List, Optional

from routesim.model.routing import format_routing_table
from routesim.runtime.simulation import run_scenario
from routesim.runtime.validate import validate_config
from routesim.utils.io import load_yaml


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routesim",
        description="Distance-vector route propagation and packet forwarding simulator",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity.",
    )
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_run = sub.add_parser("run", help="Run a scenario")
    p_run.add_argument("--config", required=True, help="YAML scenario path.")
    p_run.add_argument(
        "--tables",
        action="store_true",
        help="Print routing tables after the advertisement rounds.",
    )

    p_validate = sub.add_parser("validate", help="Validate a scenario file")
    p_validate.add_argument("--config", required=True, help="YAML scenario path.")

    return parser


def format_tables(tables: dict[str, dict[str, str]]) -> str:
    return "\n\n".join(
        format_routing_table(name, routes.items()) for name, routes in tables.items()
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.cmd == "run":
        result = run_scenario(args.config)
        if args.tables:
            print(format_tables(result["tables_after"]))
        print(json.dumps(result, indent=2, ensure_ascii=False, sort_keys=True))
        return 0

    if args.cmd == "validate":
        errors = validate_config(load_yaml(args.config))
        if errors:
            print(json.dumps({"ok": False, "errors": errors}, ensure_ascii=False, indent=2))
            return 1
        print(json.dumps({"ok": True}, ensure_ascii=False, indent=2))
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
