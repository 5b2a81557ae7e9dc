# rule_trace.py

from typing import List, Dict, Any
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from fuzzy_engine.engine import ACTIVE_RULE_THRESHOLD, EvaluationResult

BUCKET_COLORS = {"low": "tab:blue", "medium": "tab:olive", "high": "tab:red"}


def trace_rule_firing(result: EvaluationResult) -> List[Dict[str, Any]]:
    """
    Return detailed trace information for every rule that fired in one
    evaluation, in rule order.

    Args:
        result: The engine result for the tick being inspected.

    Returns:
        A list of dictionaries with rule index, id, description, bucket and
        firing strength.
    """
    traces = []
    for i, act in enumerate(result.activations, start=1):
        if act.strength <= ACTIVE_RULE_THRESHOLD:
            continue
        traces.append(
            {
                "rule_index": i,
                "rule_id": act.rule_id,
                "description": act.description,
                "bucket": act.bucket,
                "firing_strength": act.strength,
            }
        )
    return traces


def plot_rule_contributions(trace_data, result: EvaluationResult, show=True):
    labels = [f"#{t['rule_index']} {t['rule_id']}" for t in trace_data]
    ws = [t["firing_strength"] for t in trace_data]
    colors = [BUCKET_COLORS[t["bucket"]] for t in trace_data]

    fig, ax1 = plt.subplots(figsize=(12, 6))

    bars = ax1.bar(range(len(labels)), ws, color=colors, alpha=0.7)

    ax1.set_ylabel("Firing Strength")
    ax1.set_ylim(0, 1.1)
    ax1.set_xticks(range(len(labels)))
    ax1.set_xticklabels(labels, rotation=45, ha="right")
    ax1.text(
        0.01,
        0.99,
        f"distance = {result.distance:.2f}\n"
        f"health = {result.health_percent:.1f}%\n"
        f"attack = {result.attack_intensity:.2f}\n"
        f"cooldown = {result.cooldown_remaining:.1f}\n"
        f"aggression = {result.aggression_output:.2f} ({result.state_description})",
        transform=ax1.transAxes,
        fontsize=11,
        verticalalignment="top",
        bbox=dict(facecolor="white", alpha=0.7, edgecolor="gray"),
    )

    # Annotate W values on top of bars
    for bar in bars:
        height = bar.get_height()
        if height > 0:
            ax1.text(
                bar.get_x() + bar.get_width() / 2,
                height + 0.01,
                f"{height:.2f}",
                ha="center",
                va="bottom",
                fontsize=8,
                color="black",
            )

    ax1.legend(
        handles=[mpatches.Patch(color=c, label=f"{b} bucket") for b, c in BUCKET_COLORS.items()],
        loc="upper right",
    )

    plt.title(f"Rule Contributions – {result.active_rule_description}")
    plt.tight_layout()
    if show:
        plt.show()
    return fig
