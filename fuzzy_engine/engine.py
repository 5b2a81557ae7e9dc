"""
Orchestrates the enemy combatant's fuzzy inference cycle.

This module integrates the Fuzzifier, Rule Engine, and Defuzzifier to turn
four raw combat measurements into an aggression value and a tactical state
label once per simulation tick. It serves as the main interface to the
decision engine. It owns no position, velocity or combat resolution; the
game loop feeds it scalars and reads the returned EvaluationResult.

The engine is a pure function of its inputs. The only state it keeps is the
most recent result, published as the last step of evaluate() for dashboards
to read. It performs no locking: a multi-threaded host must let one
evaluate() call finish before starting another.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from fuzzy_engine import rule_base
from fuzzy_engine.defuzzifier import Defuzzifier
from fuzzy_engine.fuzzifier import Fuzzifier
from fuzzy_engine.rule_engine import RuleActivation, RuleEngine

engine_log = logging.getLogger("engine")

INPUT_DOMAINS = ("distance", "health", "attack", "cooldown")

# Activations at or below this are left out of the dashboard's active list.
ACTIVE_RULE_THRESHOLD = 0.01
NO_ACTIVE_RULE = "Searching..."


@dataclass(frozen=True)
class EvaluationResult:
    """
    Immutable snapshot of one inference tick.

    Attributes:
        distance, health_percent, attack_intensity, cooldown_remaining:
            The raw inputs, as passed in.
        fuzzy_distance, fuzzy_health, fuzzy_attack, fuzzy_cooldown:
            Read-only label -> degree mappings for every input label.
        buckets: Truth values of the 'low', 'medium' and 'high' buckets.
        aggression_output: The defuzzified aggression value.
        fuzzy_aggression: Passive/neutral/aggressive degrees of the
            aggression value. Display only.
        state_description: The tactical state label.
        activations: Every rule's firing strength, in rule order.
    """

    distance: float
    health_percent: float
    attack_intensity: float
    cooldown_remaining: float
    fuzzy_distance: Mapping[str, float]
    fuzzy_health: Mapping[str, float]
    fuzzy_attack: Mapping[str, float]
    fuzzy_cooldown: Mapping[str, float]
    buckets: Mapping[str, float]
    aggression_output: float
    fuzzy_aggression: Mapping[str, float]
    state_description: str
    activations: Tuple[RuleActivation, ...]

    @property
    def armed(self) -> float:
        """Degree to which the player's ability is ready to fire."""
        return self.fuzzy_cooldown["armed"]

    @property
    def active_rules(self) -> List[RuleActivation]:
        """Rules that fired, strongest first (rule order on ties)."""
        fired = [a for a in self.activations if a.strength > ACTIVE_RULE_THRESHOLD]
        return sorted(fired, key=lambda a: a.strength, reverse=True)

    @property
    def active_rule_description(self) -> str:
        best = None
        for act in self.activations:
            if act.strength > 0 and (best is None or act.strength > best.strength):
                best = act
        return best.description if best is not None else NO_ACTIVE_RULE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "distance": self.distance,
            "health_percent": self.health_percent,
            "attack_intensity": self.attack_intensity,
            "cooldown_remaining": self.cooldown_remaining,
            "fuzzy_distance": dict(self.fuzzy_distance),
            "fuzzy_health": dict(self.fuzzy_health),
            "fuzzy_attack": dict(self.fuzzy_attack),
            "fuzzy_cooldown": dict(self.fuzzy_cooldown),
            "buckets": dict(self.buckets),
            "aggression_output": self.aggression_output,
            "fuzzy_aggression": dict(self.fuzzy_aggression),
            "state_description": self.state_description,
            "active_rule_description": self.active_rule_description,
            "active_rules": [
                {"id": a.rule_id, "description": a.description,
                 "bucket": a.bucket, "strength": a.strength}
                for a in self.active_rules
            ],
        }


def classify_state(
    critical: float,
    aggression: float,
    state_cfg: Optional[Mapping[str, Any]] = None,
) -> str:
    """
    Maps critical-health degree and aggression onto a tactical state label.

    The decision list is ordered and the first match wins: critical health
    always takes precedence over any aggression band.
    """
    cfg = state_cfg or rule_base.STATE
    if critical > cfg["berserk_critical"]:
        return cfg["berserk_label"]
    for threshold, label in cfg["thresholds"]:
        if aggression > threshold:
            return label
    return cfg["fallback"]


class FuzzyInferenceEngine:
    """
    The enemy combatant's fuzzy decision engine.

    Attributes:
        fuzzifier (Fuzzifier): The fuzzifier instance.
        rule_engine (RuleEngine): The rule engine instance.
        defuzzifier (Defuzzifier): The defuzzifier instance.
    """

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        """
        Initializes the engine and validates its whole configuration.

        Args:
            config (Mapping[str, Any], optional): Configuration shaped like
                config/engine_config.toml. Missing sections fall back to the
                compiled-in defaults of fuzzy_engine.rule_base.

        Raises:
            ValueError: If control points, rules, anchors or the state table
                are malformed.
        """
        config = config or {}
        mf_params = config.get("membership_functions", rule_base.MEMBERSHIP_FUNCTIONS)
        out_params = config.get(
            "output_membership_functions", rule_base.OUTPUT_MEMBERSHIP_FUNCTIONS
        )
        rules = config.get("rule_base", rule_base.RULE_BASE)
        defuzz_cfg = config.get("defuzzifier", rule_base.DEFUZZIFIER)
        self.state_cfg = self._validate_state(config.get("state", rule_base.STATE))

        self.fuzzifier = Fuzzifier(mf_params)
        missing = [d for d in INPUT_DOMAINS if d not in self.fuzzifier.membership_functions]
        if missing:
            raise ValueError(f"Missing input domains: {missing}")
        if "critical" not in self.fuzzifier.membership_functions["health"]:
            raise ValueError("Health domain must define a 'critical' label")
        if "armed" not in self.fuzzifier.membership_functions["cooldown"]:
            raise ValueError("Cooldown domain must define an 'armed' label")

        self.rule_engine = RuleEngine(
            rules,
            {d: list(mfs) for d, mfs in self.fuzzifier.membership_functions.items()},
        )

        anchors = defuzz_cfg["anchors"]
        if set(anchors) != set(rule_base.BUCKETS):
            raise ValueError(
                f"Defuzzifier anchors must cover {list(rule_base.BUCKETS)}, got {list(anchors)}"
            )
        self.defuzzifier = Defuzzifier(anchors, defuzz_cfg["default"], out_params)

        self._last_result: Optional[EvaluationResult] = None
        engine_log.info("Fuzzy inference engine initialized and ready.")

    @staticmethod
    def _validate_state(cfg: Mapping[str, Any]) -> Dict[str, Any]:
        thresholds: Sequence = cfg["thresholds"]
        values = [float(t) for t, _ in thresholds]
        if values != sorted(values, reverse=True):
            raise ValueError(f"State thresholds must be descending, got {values}")
        return {
            "berserk_critical": float(cfg["berserk_critical"]),
            "berserk_label": str(cfg["berserk_label"]),
            "thresholds": [(float(t), str(label)) for t, label in thresholds],
            "fallback": str(cfg["fallback"]),
        }

    @property
    def last_result(self) -> Optional[EvaluationResult]:
        """The most recent result, or None before the first evaluate()."""
        return self._last_result

    def evaluate(
        self,
        distance: float,
        health_percent: float,
        attack_intensity: float,
        cooldown_remaining: float,
    ) -> EvaluationResult:
        """
        Executes one full inference cycle.

        Args:
            distance (float): Distance to the target, non-negative.
            health_percent (float): Own health, nominally [0, 100].
            attack_intensity (float): Decaying count of recent player
                attacks, nominally [0, 20].
            cooldown_remaining (float): Player ability cooldown counter,
                nominally [0, 120].

        Returns:
            EvaluationResult: The immutable result for this tick. Inputs
            outside the tuned ranges degrade to boundary membership values.
        """
        engine_log.debug(
            "--- Inference Start (dist= %.3f, hp= %.3f, atk= %.3f, cd= %.3f) ---",
            distance, health_percent, attack_intensity, cooldown_remaining,
        )

        # 1) Fuzzification
        crisp = dict(zip(INPUT_DOMAINS,
                         (distance, health_percent, attack_intensity, cooldown_remaining)))
        fuzzified = {d: self.fuzzifier.fuzzify(d, crisp[d]) for d in INPUT_DOMAINS}

        # 2) Inference and 3) aggregation
        activations = self.rule_engine.evaluate(fuzzified)
        buckets = self.rule_engine.aggregate(activations)

        # 4) Defuzzification and 5) display re-fuzzification
        aggression = self.defuzzifier.defuzzify(buckets)
        fuzzy_aggression = self.defuzzifier.refuzzify(aggression)

        # 6) State classification
        state = classify_state(fuzzified["health"]["critical"], aggression, self.state_cfg)

        result = EvaluationResult(
            distance=distance,
            health_percent=health_percent,
            attack_intensity=attack_intensity,
            cooldown_remaining=cooldown_remaining,
            fuzzy_distance=MappingProxyType(fuzzified["distance"]),
            fuzzy_health=MappingProxyType(fuzzified["health"]),
            fuzzy_attack=MappingProxyType(fuzzified["attack"]),
            fuzzy_cooldown=MappingProxyType(fuzzified["cooldown"]),
            buckets=MappingProxyType(buckets),
            aggression_output=aggression,
            fuzzy_aggression=MappingProxyType(fuzzy_aggression),
            state_description=state,
            activations=tuple(activations),
        )
        engine_log.debug(
            "--- Inference End (aggression= %.3f, state= %s, rule= %s) ---",
            aggression, state, result.active_rule_description,
        )
        self._last_result = result
        return result
