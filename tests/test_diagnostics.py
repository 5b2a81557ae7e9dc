# tests/test_diagnostics.py
import numpy as np
import pytest

from fuzzy_engine import rule_base
from fuzzy_engine.engine import ACTIVE_RULE_THRESHOLD
from simulation.encounter import EncounterParams, EncounterSimulator, STRIKE
from simulation.plot_sim_results import plot_sim_results, state_occupancy, summarize
from utils.plot_membership_shapes import plot_membership_functions, sample_domain
from utils.rule_trace import plot_rule_contributions, trace_rule_firing


def test_sample_domain_uses_engine_shapes():
    x, curves = sample_domain(rule_base.MEMBERSHIP_FUNCTIONS["distance"], 0.0, 30.0)

    assert len(x) == 61
    assert x[0] == 0.0 and x[-1] == 30.0
    assert list(curves) == ["close", "medium", "far"]
    assert curves["close"][0] == 1.0
    assert curves["far"][-1] == 1.0
    assert curves["medium"][np.argmin(np.abs(x - 10.0))] == pytest.approx(1.0)
    for y in curves.values():
        assert np.all((y >= 0.0) & (y <= 1.0))


def test_plot_membership_functions_saves_png(tmp_path):
    fig = plot_membership_functions(
        rule_base.MEMBERSHIP_FUNCTIONS["health"], "Health", 0.0, 100.0,
        current=150.0, save=True, output_dir=str(tmp_path), show=False,
    )
    assert fig is not None
    assert (tmp_path / "health_membership_functions.png").exists()


def test_trace_rule_firing_lists_only_fired_rules(engine):
    result = engine.evaluate(2, 90, 0, 0)
    traces = trace_rule_firing(result)

    assert [t["rule_id"] for t in traces] == ["BULLY", "FEAR"]
    assert [t["rule_index"] for t in traces] == [2, 8]
    assert traces[1]["bucket"] == "low"
    assert plot_rule_contributions(traces, result, show=False) is not None


def test_trace_rule_firing_empty_when_nothing_fires(engine):
    assert trace_rule_firing(engine.evaluate(200, 50, 0, 50)) == []


def test_encounter_summary_and_plot(engine, tmp_path):
    params = EncounterParams(initial_distance=2.5, player_ability=frozenset({0}))
    sim = EncounterSimulator(engine, params)
    sim.reset()
    sim.run(20)

    summary = summarize(sim)
    assert summary["ticks"] == 20.0
    assert summary["strikes"] == float(sim.log_action.count(STRIKE)) == 1.0
    assert summary["max_aggression"] == pytest.approx(95.0)

    occupancy = state_occupancy(sim)
    assert sum(occupancy.values()) == pytest.approx(1.0)

    out = tmp_path / "encounter.png"
    plot_sim_results(sim, save_path=str(out), show=False)
    assert out.exists()


def test_trace_rule_firing_matches_active_rules(engine):
    # close is 0.005 at distance 7.98, so BULLY barely fires
    result = engine.evaluate(7.98, 90, 0, 60)
    bully = next(a for a in result.activations if a.rule_id == "BULLY")
    assert 0.0 < bully.strength <= ACTIVE_RULE_THRESHOLD

    traces = trace_rule_firing(result)
    assert "BULLY" not in [t["rule_id"] for t in traces]
    assert sorted(t["rule_id"] for t in traces) == sorted(a.rule_id for a in result.active_rules)
