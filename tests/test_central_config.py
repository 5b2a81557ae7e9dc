# tests/test_central_config.py

import os

import pytest

from fuzzy_engine.engine import FuzzyInferenceEngine
from simulation.central_config import (
    PROJECT_ROOT,
    load_engine_from_file,
    load_simulation_config,
    resolve_path,
)
from simulation.encounter import EncounterParams


def test_central_config_loads():
    engine, params, ticks = load_simulation_config()

    assert isinstance(engine, FuzzyInferenceEngine)
    assert isinstance(params, EncounterParams)
    assert ticks == 900
    assert params.attack_radius == pytest.approx(3.0)
    assert params.player_cooldown_ticks == 120
    assert 300 in params.player_attacks
    assert params.player_ability == frozenset({100, 400, 700})


def test_engine_from_file_is_usable():
    engine = load_engine_from_file()
    assert engine.evaluate(2, 90, 0, 60).state_description == "RUTHLESS"


def test_resolve_path():
    assert resolve_path("config/sim_config.toml") == os.path.join(
        PROJECT_ROOT, "config", "sim_config.toml"
    )
    absolute = os.path.abspath("somewhere.toml")
    assert resolve_path(absolute) == absolute


def test_bad_tick_count_rejected(tmp_path):
    engine_cfg = os.path.join(PROJECT_ROOT, "config", "engine_config.toml").replace("\\", "/")
    cfg = tmp_path / "sim.toml"
    cfg.write_text(
        f'[engine]\nENGINE_CONFIG_PATH = "{engine_cfg}"\n\n[encounter]\nTICKS = 0\n',
        encoding="utf-8",
    )
    with pytest.raises(ValueError):
        load_simulation_config(str(cfg))


def test_missing_sections_use_defaults(tmp_path):
    cfg = tmp_path / "sim.toml"
    cfg.write_text("[encounter]\nTICKS = 5\n", encoding="utf-8")

    engine, params, ticks = load_simulation_config(str(cfg))
    assert ticks == 5
    assert params == EncounterParams()
