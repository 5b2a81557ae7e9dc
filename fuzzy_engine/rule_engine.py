"""
Evaluates the fuzzy rule base to determine rule activation and bucket truth.

This module takes the fuzzified inputs (membership degrees per domain) and
applies them to a declarative table of Mamdani-style rules. Each rule's
firing strength is the MIN (fuzzy AND) of its antecedent degrees; each
output bucket then takes the MAX (fuzzy OR) of the rules mapped to it.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from fuzzy_engine.rule_base import BUCKETS

rule_engine_log = logging.getLogger("rule_engine")


@dataclass(frozen=True)
class Rule:
    """
    One declarative rule.

    Attributes:
        id (str): Short identifier, unique within a rule base.
        description (str): Human-readable explanation shown on the dashboard.
        antecedents (Tuple[Tuple[str, str], ...]): (domain, label) pairs,
            MIN-combined.
        bucket (str): Consequent output bucket ('low', 'medium' or 'high').
        cap (Optional[float]): Constant upper bound on the firing strength.
    """

    id: str
    description: str
    antecedents: Tuple[Tuple[str, str], ...]
    bucket: str
    cap: Optional[float] = None

    @classmethod
    def from_config(cls, entry: Mapping) -> "Rule":
        cap = entry.get("cap")
        return cls(
            id=str(entry["id"]),
            description=str(entry.get("description", entry["id"])),
            antecedents=tuple((str(d), str(l)) for d, l in entry["if"]),
            bucket=str(entry["then"]),
            cap=None if cap is None else float(cap),
        )

    def strength(self, fuzzified: Mapping[str, Mapping[str, float]]) -> float:
        degrees = [fuzzified[domain][label] for domain, label in self.antecedents]
        if self.cap is not None:
            degrees.append(self.cap)
        return min(degrees)


@dataclass(frozen=True)
class RuleActivation:
    """Firing strength of one rule for one evaluation."""

    rule_id: str
    description: str
    bucket: str
    strength: float


class RuleEngine:
    """
    Evaluates a fixed, validated rule base.

    Attributes:
        rules (List[Rule]): The rule definitions in evaluation order.
    """

    def __init__(
        self,
        rule_base: Iterable,
        known_labels: Mapping[str, Iterable[str]],
    ):
        """
        Initializes the RuleEngine and validates the rule table.

        Args:
            rule_base (Iterable): Rule objects or TOML-shaped rule dicts.
            known_labels (Mapping[str, Iterable[str]]): Labels available per
                input domain, as configured in the Fuzzifier.

        Raises:
            ValueError: If a rule is empty, references an unknown domain or
                label, names an unknown bucket, has a cap outside [0, 1], or
                duplicates another rule's id.
        """
        self.rules: List[Rule] = [
            r if isinstance(r, Rule) else Rule.from_config(r) for r in rule_base
        ]
        labels = {d: set(l) for d, l in known_labels.items()}

        seen = set()
        for rule in self.rules:
            if rule.id in seen:
                raise ValueError(f"Duplicate rule id '{rule.id}'")
            seen.add(rule.id)
            if not rule.antecedents:
                raise ValueError(f"Rule '{rule.id}' has no antecedent")
            for domain, label in rule.antecedents:
                if label not in labels.get(domain, ()):
                    raise ValueError(
                        f"Rule '{rule.id}' references unknown label '{domain}.{label}'"
                    )
            if rule.bucket not in BUCKETS:
                raise ValueError(
                    f"Rule '{rule.id}' has unknown output bucket '{rule.bucket}'"
                )
            if rule.cap is not None and not 0.0 <= rule.cap <= 1.0:
                raise ValueError(f"Rule '{rule.id}' cap {rule.cap} outside [0, 1]")

        rule_engine_log.info("Rule Engine initialized with %d rules.", len(self.rules))

    def evaluate(
        self, fuzzified: Mapping[str, Mapping[str, float]]
    ) -> List[RuleActivation]:
        """
        Evaluates all rules in the rule base.

        Args:
            fuzzified (Mapping[str, Mapping[str, float]]): Membership degrees
                per domain and label, as returned by the Fuzzifier.

        Returns:
            List[RuleActivation]: One activation per rule, in rule order,
            zero-strength rules included.
        """
        activations = []
        for i, rule in enumerate(self.rules, start=1):
            w = rule.strength(fuzzified)
            activations.append(
                RuleActivation(rule.id, rule.description, rule.bucket, w)
            )
            rule_engine_log.debug(
                "Rule# %d %s -> %s W= %.3f", i, rule.id, rule.bucket, w
            )
        return activations

    @staticmethod
    def aggregate(activations: Sequence[RuleActivation]) -> Dict[str, float]:
        """
        Combines rule strengths per output bucket with MAX (fuzzy OR).

        Returns:
            Dict[str, float]: Truth value of each bucket; 0.0 where no rule
            maps to it.
        """
        buckets = {b: 0.0 for b in BUCKETS}
        for act in activations:
            buckets[act.bucket] = max(buckets[act.bucket], act.strength)
        rule_engine_log.debug(
            "Aggregated buckets: %s", {k: round(v, 3) for k, v in buckets.items()}
        )
        return buckets
