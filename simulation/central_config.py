# simulation/central_config.py
"""
==================
Unified configuration loader for the Fuzzy Guardian project.

This module provides a single interface for loading the configuration
needed to build the fuzzy inference engine and run the scripted encounter.
It keeps TOML parsing out of the engine and the simulator so both stay
usable from tests with plain dicts and dataclasses.

Responsibilities
----------------
• Load the engine configuration from:
      config/engine_config.toml

• Load the encounter configuration from:
      config/sim_config.toml

• Construct:
      - FuzzyInferenceEngine  (validated at construction)
      - EncounterParams       (tick loop tuning and player script)

Returned Values
---------------
load_simulation_config() returns a 3-tuple:

    engine      : FuzzyInferenceEngine
    params      : EncounterParams
    ticks       : int

Relative paths are resolved against the project root, so scripts can be
started from any working directory.

Typical Usage
-------------
    from simulation.central_config import load_simulation_config
    from simulation.encounter import EncounterSimulator

    engine, params, ticks = load_simulation_config()

    sim = EncounterSimulator(engine, params)
    sim.reset()
    sim.run(ticks)
"""
import os
import tomllib
from typing import Any, Dict, Tuple

from fuzzy_engine.engine import FuzzyInferenceEngine
from simulation.encounter import EncounterParams

PROJECT_ROOT = os.path.normpath(os.path.join(os.path.dirname(__file__), ".."))
ENGINE_CONFIG_PATH = os.path.join("config", "engine_config.toml")
SIM_CONFIG_PATH = os.path.join("config", "sim_config.toml")


def resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.normpath(os.path.join(PROJECT_ROOT, path))


# ------------------------------------------------------------
# Load TOML
# ------------------------------------------------------------
def _load_toml(path: str) -> Dict[str, Any]:
    with open(resolve_path(path), "rb") as f:
        return tomllib.load(f)


# ------------------------------------------------------------
# Load engine
# ------------------------------------------------------------
def load_engine_config(path: str = ENGINE_CONFIG_PATH) -> Dict[str, Any]:
    return _load_toml(path)


def load_engine_from_file(path: str = ENGINE_CONFIG_PATH) -> FuzzyInferenceEngine:
    return FuzzyInferenceEngine(load_engine_config(path))


# ------------------------------------------------------------
# Main loader
# ------------------------------------------------------------
def load_simulation_config(
    sim_cfg_path: str = SIM_CONFIG_PATH,
) -> Tuple[FuzzyInferenceEngine, EncounterParams, int]:
    """
    Builds and returns the full encounter configuration:

        engine      : FuzzyInferenceEngine
        params      : EncounterParams
        ticks       : int
    """
    cfg = _load_toml(sim_cfg_path)

    engine_path = cfg.get("engine", {}).get("ENGINE_CONFIG_PATH", ENGINE_CONFIG_PATH)
    engine = load_engine_from_file(engine_path)

    # ------------------------------------------------------------
    # Encounter tuning
    # ------------------------------------------------------------
    e = cfg["encounter"]
    script = cfg.get("script", {})
    defaults = EncounterParams()

    params = EncounterParams(
        initial_distance=float(e.get("INITIAL_DISTANCE", defaults.initial_distance)),
        max_sensed_distance=float(e.get("MAX_SENSED_DISTANCE", defaults.max_sensed_distance)),
        enemy_max_hp=float(e.get("ENEMY_MAX_HP", defaults.enemy_max_hp)),
        base_chase_speed=float(e.get("BASE_CHASE_SPEED", defaults.base_chase_speed)),
        aggression_speed_gain=float(e.get("AGGRESSION_SPEED_GAIN", defaults.aggression_speed_gain)),
        attack_radius=float(e.get("ATTACK_RADIUS", defaults.attack_radius)),
        strafe_radius=float(e.get("STRAFE_RADIUS", defaults.strafe_radius)),
        strike_aggression=float(e.get("STRIKE_AGGRESSION", defaults.strike_aggression)),
        strike_cooldown_ticks=int(e.get("STRIKE_COOLDOWN_TICKS", defaults.strike_cooldown_ticks)),
        strike_damage=float(e.get("STRIKE_DAMAGE", defaults.strike_damage)),
        lunge_distance=float(e.get("LUNGE_DISTANCE", defaults.lunge_distance)),
        strafe_armed=float(e.get("STRAFE_ARMED", defaults.strafe_armed)),
        attack_decay=float(e.get("ATTACK_DECAY", defaults.attack_decay)),
        attack_increment=float(e.get("ATTACK_INCREMENT", defaults.attack_increment)),
        player_hit_damage=float(e.get("PLAYER_HIT_DAMAGE", defaults.player_hit_damage)),
        player_cooldown_ticks=int(e.get("PLAYER_COOLDOWN_TICKS", defaults.player_cooldown_ticks)),
        player_attacks=frozenset(int(t) for t in script.get("player_attacks", [])),
        player_ability=frozenset(int(t) for t in script.get("player_ability", [])),
        frame_budget_ms=float(e.get("FRAME_BUDGET_MS", defaults.frame_budget_ms)),
    )

    ticks = int(e.get("TICKS", 900))
    if ticks <= 0:
        raise ValueError(f"TICKS must be positive, got {ticks}")

    return engine, params, ticks
