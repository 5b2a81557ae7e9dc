"""
Compiled-in configuration for the enemy combatant's fuzzy inference engine.

Every table here has the same shape as the matching section of
config/engine_config.toml, so the engine can be built either from these
defaults or from a TOML file without any translation step.
"""

from typing import Any, Dict, List

# Input domains: domain -> label -> control points.
# Three points form a triangle (a, b, c), four a trapezoid (a, b, c, d).
MEMBERSHIP_FUNCTIONS: Dict[str, Dict[str, List[float]]] = {
    "distance": {
        "close": [-1.0, 0.0, 4.0, 8.0],
        "medium": [4.0, 10.0, 16.0],
        "far": [10.0, 16.0, 100.0, 100.0],
    },
    "health": {
        "critical": [-1.0, 0.0, 30.0, 40.0],
        "wounded": [30.0, 50.0, 70.0],
        "healthy": [60.0, 80.0, 100.0, 101.0],
    },
    "attack": {
        "calm": [-1.0, 0.0, 2.0, 4.0],
        "fighting": [2.0, 5.0, 8.0],
        "spamming": [5.0, 8.0, 20.0, 20.0],
    },
    "cooldown": {
        "armed": [-1.0, 0.0, 10.0, 30.0],
        "recharging": [20.0, 60.0, 100.0],
        "spent": [80.0, 110.0, 120.0, 121.0],
    },
}

# Re-fuzzification of the crisp aggression value. Display only.
OUTPUT_MEMBERSHIP_FUNCTIONS: Dict[str, List[float]] = {
    "passive": [-1.0, 0.0, 25.0, 45.0],
    "neutral": [30.0, 50.0, 70.0],
    "aggressive": [55.0, 75.0, 100.0, 101.0],
}

# Antecedents are MIN-combined; "cap" is an extra constant MIN operand.
RULE_BASE: List[Dict[str, Any]] = [
    {
        "id": "SNIPE",
        "description": "Healthy + Far: Sniping",
        "if": [["health", "healthy"], ["distance", "far"]],
        "then": "high",
    },
    {
        "id": "BULLY",
        "description": "Healthy + Close: Bullying",
        "if": [["health", "healthy"], ["distance", "close"]],
        "then": "high",
    },
    {
        "id": "SPAR",
        "description": "Wounded + Medium Dist: Measured Sparring",
        "if": [["health", "wounded"], ["distance", "medium"]],
        "then": "medium",
    },
    {
        "id": "BERSERK",
        "description": "Critical Health: Berserk Rage",
        "if": [["health", "critical"]],
        "then": "high",
    },
    {
        "id": "RETALIATE",
        "description": "Player Spamming: Retaliate",
        "if": [["attack", "spamming"]],
        "cap": 0.8,
        "then": "high",
    },
    {
        "id": "BACK_OFF",
        "description": "Wounded + Close: Back Off",
        "if": [["health", "wounded"], ["distance", "close"]],
        "then": "low",
    },
    {
        "id": "PUNISH_CD",
        "description": "Player Magic Spent: Punish Cooldown",
        "if": [["cooldown", "spent"], ["distance", "medium"]],
        "then": "high",
    },
    {
        "id": "FEAR",
        "description": "Player Armed + Close: Fear",
        "if": [["cooldown", "armed"], ["distance", "close"]],
        "then": "low",
    },
]

BUCKETS = ("low", "medium", "high")

DEFUZZIFIER: Dict[str, Any] = {
    "anchors": {"low": 15.0, "medium": 50.0, "high": 95.0},
    "default": 50.0,
}

# Decision list, first match wins. Thresholds are strict (">").
STATE: Dict[str, Any] = {
    "berserk_critical": 0.5,
    "berserk_label": "BERSERK",
    "thresholds": [
        [75.0, "RUTHLESS"],
        [50.0, "AGGRESSIVE"],
        [30.0, "CAUTIOUS"],
    ],
    "fallback": "DEFENSIVE",
}


def default_config() -> Dict[str, Any]:
    """Returns the compiled-in configuration as one TOML-shaped dict."""
    return {
        "membership_functions": MEMBERSHIP_FUNCTIONS,
        "output_membership_functions": OUTPUT_MEMBERSHIP_FUNCTIONS,
        "rule_base": RULE_BASE,
        "defuzzifier": DEFUZZIFIER,
        "state": STATE,
    }
