# tests/test_encounter.py
import pytest

from simulation.encounter import (
    CHASE,
    STRAFE,
    STRIKE,
    EncounterParams,
    EncounterSimulator,
    chase_speed,
    decide_action,
)


@pytest.fixture
def params():
    return EncounterParams()


def test_decide_action_strikes_when_close_and_aggressive(engine, params):
    result = engine.evaluate(2, 90, 0, 60)  # aggression 95, player ability spent
    assert decide_action(params, result, distance=2.0, strike_cooldown=0) == STRIKE
    assert decide_action(params, result, distance=2.0, strike_cooldown=5) == CHASE
    assert decide_action(params, result, distance=3.0, strike_cooldown=0) == CHASE


def test_decide_action_strafes_while_player_is_armed(engine, params):
    result = engine.evaluate(2, 90, 0, 0)  # aggression 55, armed 1.0
    assert decide_action(params, result, distance=2.0, strike_cooldown=0) == STRIKE
    assert decide_action(params, result, distance=2.0, strike_cooldown=10) == STRAFE
    assert decide_action(params, result, distance=9.0, strike_cooldown=10) == CHASE


def test_chase_speed_grows_with_aggression(params):
    assert chase_speed(params, 15.0) == pytest.approx(0.012)
    assert chase_speed(params, 20.0) == pytest.approx(0.012)
    assert chase_speed(params, 95.0) == pytest.approx(0.162)


def test_sim_run_basic(engine, params):
    sim = EncounterSimulator(engine, params)
    sim.reset()
    sim.run(10)

    assert sim.log_tick == list(range(10))
    assert len(sim.log_aggression) == len(sim.log_state) == len(sim.log_action) == 10
    # Healthy and far away: full aggression, closing in.
    assert sim.log_aggression[0] == pytest.approx(95.0)
    assert sim.log_state[0] == "RUTHLESS"
    assert sim.log_distance[0] == pytest.approx(25.0 - 0.162)
    assert sim.log_distance == sorted(sim.log_distance, reverse=True)
    assert engine.last_result is not None


def test_armed_player_keeps_enemy_at_bay(engine, params):
    sim = EncounterSimulator(engine, params)
    sim.reset()
    sim.run(300)

    assert STRAFE in sim.log_action
    assert STRIKE not in sim.log_action
    assert min(sim.log_distance) > params.attack_radius


def test_enemy_strikes_when_ability_is_spent(engine):
    params = EncounterParams(initial_distance=2.5, player_ability=frozenset({0}))
    sim = EncounterSimulator(engine, params)
    sim.reset()
    result = sim.step()

    assert result.fuzzy_cooldown["spent"] == 1.0
    assert sim.log_action[0] == STRIKE
    assert sim.player_hp == pytest.approx(92.0)
    assert sim.distance == pytest.approx(1.0)
    assert sim.strike_cooldown == params.strike_cooldown_ticks - 1

    sim.step()
    assert sim.log_action[1] == CHASE


def test_player_attacks_raise_intensity_and_hurt(engine):
    params = EncounterParams(initial_distance=2.0, player_attacks=frozenset({0}))
    sim = EncounterSimulator(engine, params)
    sim.reset()
    sim.step()

    assert sim.log_attack[0] == pytest.approx(2.0)
    assert sim.log_health[0] == pytest.approx(92.0)

    sim.step()
    assert sim.log_attack[1] == pytest.approx(2.0 - params.attack_decay)


def test_run_stops_when_enemy_is_defeated(engine):
    params = EncounterParams(
        initial_distance=2.0, enemy_max_hp=4.0, player_attacks=frozenset({0})
    )
    sim = EncounterSimulator(engine, params)
    sim.reset()
    sim.run(10)

    assert sim.finished
    assert len(sim.log_tick) == 1
    assert sim.log_state[0] == "BERSERK"


def test_reset_clears_logs(engine, params):
    sim = EncounterSimulator(engine, params)
    sim.reset()
    sim.run(5)
    sim.reset()

    assert sim.tick == 0
    assert sim.log_tick == []
    assert sim.distance == params.initial_distance
