"""
Main entry point for the Fuzzy Guardian decision engine.

This script initializes logging, loads the engine configuration, and runs a
single inference tick for the combat measurements given on the command line.
It prints every membership degree, the bucket truth values, the rules that
fired and the resulting aggression and tactical state, the same numbers the
in-game dashboard shows.
"""

import argparse
import logging
import os
import sys
import tomllib

from utils.logger import setup_logging
from fuzzy_engine import rule_base
from fuzzy_engine.engine import FuzzyInferenceEngine


def load_config(path=None):
    """
    Loads configuration from config/engine_config.toml located relative to
    this script. Falls back to the compiled-in rule base when no file exists.
    """
    cfg_path = path or os.path.join(os.path.dirname(__file__), "config", "engine_config.toml")
    if not os.path.exists(cfg_path):
        return rule_base.default_config(), None
    with open(cfg_path, "rb") as f:
        return tomllib.load(f), cfg_path


def format_result(result):
    lines = [
        f"Inputs: distance={result.distance:.2f} health={result.health_percent:.1f}% "
        f"attack={result.attack_intensity:.2f} cooldown={result.cooldown_remaining:.1f}",
    ]
    for name, degrees in (
        ("distance", result.fuzzy_distance),
        ("health", result.fuzzy_health),
        ("attack", result.fuzzy_attack),
        ("cooldown", result.fuzzy_cooldown),
        ("buckets", result.buckets),
        ("aggression", result.fuzzy_aggression),
    ):
        cells = "  ".join(f"{label}={value:.3f}" for label, value in degrees.items())
        lines.append(f"  {name:<10} {cells}")
    lines.append("  rules fired:")
    for act in result.active_rules:
        lines.append(f"    {act.strength:.3f}  [{act.bucket:<6}] {act.description}")
    if not result.active_rules:
        lines.append("    (none)")
    lines.append(
        f"Aggression: {result.aggression_output:.2f}  State: {result.state_description}"
        f"  Rule: {result.active_rule_description}"
    )
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Evaluate one tick of the fuzzy guardian's decision engine."
    )
    parser.add_argument("--distance", type=float, required=True,
                        help="Distance to the target (>= 0).")
    parser.add_argument("--health", type=float, required=True,
                        help="Own health percent [0, 100].")
    parser.add_argument("--attack", type=float, default=0.0,
                        help="Recent attack intensity [0, 20].")
    parser.add_argument("--cooldown", type=float, default=0.0,
                        help="Player ability cooldown remaining [0, 120].")
    parser.add_argument("--config", default=None, help="Engine configuration TOML.")
    parser.add_argument("--log-dir", default="logs", help="Directory for log files.")
    parser.add_argument("--trace", action="store_true",
                        help="Plot the firing strength of every rule that fired.")
    args = parser.parse_args(argv)

    # Initialize logging
    setup_logging(log_dir=args.log_dir)
    main_log = logging.getLogger("main")

    try:
        config, cfg_path = load_config(args.config)
        engine = FuzzyInferenceEngine(config)
    except (OSError, tomllib.TOMLDecodeError, ValueError, KeyError) as e:
        main_log.critical("Could not build the fuzzy engine: %s", e, exc_info=True)
        return 1
    main_log.info("Configuration %s loaded.", cfg_path or "(built-in rule base)")

    result = engine.evaluate(args.distance, args.health, args.attack, args.cooldown)
    print(format_result(result))

    if args.trace:
        from utils.rule_trace import plot_rule_contributions, trace_rule_firing

        plot_rule_contributions(trace_rule_firing(result), result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
