import argparse
import os
import tomllib

import numpy as np
import matplotlib.pyplot as plt

from fuzzy_engine import rule_base
from fuzzy_engine.membership import MembershipFunction

# Axis ranges shown on the dashboard, per domain.
DOMAIN_RANGES = {
    "distance": (0.0, 30.0),
    "health": (0.0, 100.0),
    "attack": (0.0, 20.0),
    "cooldown": (0.0, 120.0),
    "aggression": (0.0, 100.0),
}


def sample_domain(mf_data, lo, hi, steps=60):
    """
    Sample every label of a domain on an even grid, using the engine's own
    membership functions so the curves match what the engine computes.

    Args:
        mf_data (dict): Dictionary of label -> list of shape points
        lo, hi (float): Axis range
        steps (int): Number of intervals; steps + 1 samples are returned

    Returns:
        (np.ndarray, dict): x samples and label -> degree array
    """
    x = np.linspace(lo, hi, steps + 1)
    curves = {}
    for label, shape_points in mf_data.items():
        mf = MembershipFunction(label, tuple(shape_points))
        curves[label] = np.array([mf.degree(float(v)) for v in x])
    return x, curves


def plot_membership_functions(
    mf_data, title, lo, hi, current=None, save=False, output_dir="plots", show=True
):
    """
    Plot triangular and trapezoidal membership functions from config.
    Optionally mark the current input value as a dashed vertical line.
    Args:
        mf_data (dict): Dictionary of label -> list of shape points
        title (str): Title of the plot
        lo, hi (float): Axis range
        current (float): Current crisp value (clamped into [lo, hi])
        save (bool): Whether to save the plot as a PNG
        output_dir (str): Directory to save the plot
        show (bool): Whether to open an interactive window
    """
    x, curves = sample_domain(mf_data, lo, hi)

    fig = plt.figure(figsize=(8, 4))
    for label, y in curves.items():
        plt.plot(x, y, label=label)
        plt.fill_between(x, y, alpha=0.1)

    if current is not None:
        marker = max(lo, min(hi, current))
        plt.axvline(marker, color="black", linestyle="--", linewidth=1.5,
                    label=f"current = {current:.1f}")

    plt.title(f"Membership Functions – {title}")
    plt.xlabel(title)
    plt.ylabel("Membership Degree")
    plt.ylim(0, 1.1)
    plt.xlim(lo, hi)
    plt.grid(True)
    plt.legend()
    plt.tight_layout()

    if save:
        os.makedirs(output_dir, exist_ok=True)
        filename = os.path.join(output_dir, f"{title.lower()}_membership_functions.png")
        plt.savefig(filename)
        print(f"Saved plot to: {filename}")

    if show:
        plt.show()
    return fig


def main():
    parser = argparse.ArgumentParser(
        description="Plot fuzzy membership function shapes."
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save plots as PNG files in the 'plots/' directory.",
    )
    parser.add_argument("--config", default=os.path.join("config", "engine_config.toml"))
    for domain in ("distance", "health", "attack", "cooldown"):
        parser.add_argument(f"--{domain}", type=float, default=None,
                            help=f"Mark a current {domain} value.")
    args = parser.parse_args()

    if os.path.exists(args.config):
        with open(args.config, "rb") as f:
            config = tomllib.load(f)
    else:
        print(f"Config file not found at: {args.config}, using built-in rule base.")
        config = rule_base.default_config()

    markers = {}
    if None not in (args.distance, args.health, args.attack, args.cooldown):
        from fuzzy_engine.engine import FuzzyInferenceEngine

        result = FuzzyInferenceEngine(config).evaluate(
            args.distance, args.health, args.attack, args.cooldown
        )
        markers["aggression"] = result.aggression_output
        print(f"aggression = {result.aggression_output:.2f} ({result.state_description})")
    markers.update(
        {d: getattr(args, d) for d in ("distance", "health", "attack", "cooldown")}
    )

    domains = dict(config.get("membership_functions", {}))
    domains["aggression"] = config.get("output_membership_functions", {})
    for domain, mf_data in domains.items():
        lo, hi = DOMAIN_RANGES.get(domain, (0.0, 100.0))
        plot_membership_functions(
            mf_data, domain.capitalize(), lo, hi,
            current=markers.get(domain), save=args.save,
        )


if __name__ == "__main__":
    main()
