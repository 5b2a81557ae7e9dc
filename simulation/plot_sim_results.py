# plot_sim_results.py
"""
plot_sim_results.py
====================

Analysis & plotting utilities for the scripted encounter simulator.

The primary function `plot_sim_results()` accepts a completed
EncounterSimulator and draws a three-panel Matplotlib figure:

    • Aggression vs tick, with the state thresholds and strike markers
    • Distance to the player vs tick
    • Engine inputs: health %, attack intensity, player cooldown

Summary metrics (state occupancy, strike count, mean aggression) are
computed separately so they can be checked without a display.

This module contains no inference or simulation code and is safe to modify
independently (styling, labels, colors, scaling, etc.).
"""
from __future__ import annotations

import os
from collections import Counter
from typing import Dict, Optional

import numpy as np
import matplotlib.pyplot as plt

from fuzzy_engine import rule_base
from simulation.encounter import EncounterSimulator, STRIKE


# ============================================================
# SUMMARY METRICS
# ============================================================

def state_occupancy(sim: EncounterSimulator) -> Dict[str, float]:
    """Fraction of logged ticks spent in each tactical state."""
    if not sim.log_state:
        return {}
    counts = Counter(sim.log_state)
    total = len(sim.log_state)
    return {state: n / total for state, n in counts.items()}


def summarize(sim: EncounterSimulator) -> Dict[str, float]:
    aggression = np.asarray(sim.log_aggression, dtype=float)
    return {
        "ticks": float(len(sim.log_tick)),
        "strikes": float(sum(1 for a in sim.log_action if a == STRIKE)),
        "mean_aggression": float(aggression.mean()) if aggression.size else 0.0,
        "max_aggression": float(aggression.max()) if aggression.size else 0.0,
        "final_distance": sim.log_distance[-1] if sim.log_distance else 0.0,
    }


# ============================================================
# PLOTTING
# ============================================================

def plot_sim_results(
    sim: EncounterSimulator,
    save_path: Optional[str] = "plots/encounter.png",
    show: bool = True,
):
    t = np.asarray(sim.log_tick)
    aggression = np.asarray(sim.log_aggression)

    fig, (ax_a, ax_d, ax_in) = plt.subplots(3, 1, figsize=(11, 9), sharex=True)

    # --- Aggression and state bands ---
    ax_a.plot(t, aggression, color="crimson", label="Aggression")
    for threshold, label in rule_base.STATE["thresholds"]:
        ax_a.axhline(threshold, color="gray", linestyle="--", linewidth=0.8)
        ax_a.text(t[0] if t.size else 0, threshold + 1, label, fontsize=8, color="gray")
    strikes = [i for i, a in enumerate(sim.log_action) if a == STRIKE]
    if strikes:
        ax_a.scatter(t[strikes], aggression[strikes], color="black", marker="x",
                     zorder=10, label="Strike")
    berserk = np.array([s == rule_base.STATE["berserk_label"] for s in sim.log_state])
    if berserk.any():
        ax_a.fill_between(t, 0, 100, where=berserk, color="red", alpha=0.1,
                          label="Berserk")
    ax_a.set_ylim(0, 100)
    ax_a.set_ylabel("Aggression")
    ax_a.legend(loc="upper right")
    ax_a.grid(True)

    # --- Distance ---
    ax_d.plot(t, sim.log_distance, color="tab:blue", label="Distance")
    ax_d.axhline(sim.params.attack_radius, color="tab:blue", linestyle=":",
                 label="Attack radius")
    ax_d.set_ylabel("Distance")
    ax_d.legend(loc="upper right")
    ax_d.grid(True)

    # --- Inputs ---
    ax_in.plot(t, sim.log_health, label="Health %", color="tab:green")
    ax_in.plot(t, sim.log_cooldown, label="Player cooldown", color="tab:purple")
    ax_att = ax_in.twinx()
    ax_att.plot(t, sim.log_attack, label="Attack intensity", color="tab:orange")
    ax_att.set_ylabel("Attack intensity")
    ax_in.set_xlabel("Tick")
    ax_in.set_ylabel("Health % / Cooldown")
    lines = ax_in.get_lines() + ax_att.get_lines()
    ax_in.legend(lines, [l.get_label() for l in lines], loc="upper right")
    ax_in.grid(True)

    fig.suptitle("Fuzzy Guardian – Encounter")
    fig.tight_layout()

    if save_path:
        os.makedirs(os.path.dirname(save_path) or ".", exist_ok=True)
        fig.savefig(save_path)
        print(f"Saved plot to: {save_path}")

    if show:
        plt.show()
    return fig
