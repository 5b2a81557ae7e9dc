"""Runs the scripted encounter against the fuzzy engine and plots the result.

Usage:
    python -m simulation.run_simulation [--config config/sim_config.toml]
                                        [--no-show] [--save plots/encounter.png]
"""
from __future__ import annotations

import argparse
import logging

from simulation.central_config import SIM_CONFIG_PATH, load_simulation_config
from simulation.encounter import EncounterSimulator
from simulation.plot_sim_results import plot_sim_results, state_occupancy, summarize
from utils.logger import setup_logging


def main():
    parser = argparse.ArgumentParser(description="Run the scripted fuzzy encounter.")
    parser.add_argument("--config", default=SIM_CONFIG_PATH,
                        help="Encounter configuration TOML.")
    parser.add_argument("--save", default="plots/encounter.png",
                        help="Where to save the plot ('' to skip saving).")
    parser.add_argument("--no-show", action="store_true",
                        help="Do not open an interactive plot window.")
    args = parser.parse_args()

    setup_logging()
    main_log = logging.getLogger("main")

    engine, params, ticks = load_simulation_config(args.config)
    main_log.info("Running encounter for %d ticks.", ticks)

    sim = EncounterSimulator(engine, params)
    sim.reset()
    sim.run(ticks)

    for key, value in summarize(sim).items():
        main_log.info("%-16s %8.2f", key, value)
    for state, share in sorted(state_occupancy(sim).items()):
        main_log.info("state %-10s %5.1f%%", state, share * 100.0)

    plot_sim_results(sim, save_path=args.save or None, show=not args.no_show)


if __name__ == "__main__":
    main()
