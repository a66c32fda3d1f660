"""Scenario configuration and the simulation driver."""

from routesim.runtime.config import ScenarioConfig, load_scenario_config, parse_scenario_config
from routesim.runtime.simulation import Simulation, run_scenario

__all__ = [
    "ScenarioConfig",
    "Simulation",
    "load_scenario_config",
    "parse_scenario_config",
    "run_scenario",
]
