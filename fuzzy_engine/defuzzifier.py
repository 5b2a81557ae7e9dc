"""
Computes the crisp aggression value from the aggregated bucket truth values.

The centroid is approximated by a weighted average over one anchor point per
bucket (height method):

    aggression = Σ(Wb * Zb) / Σ Wb

The crisp value is then re-fuzzified into passive/neutral/aggressive degrees
for display.
"""

import logging
import math
from typing import Dict, List, Mapping, Optional

from fuzzy_engine.membership import MembershipFunction

defuzzifier_log = logging.getLogger("defuzzifier")

# Clamping beyond this is more than float rounding and gets a warning.
_ROUNDING_TOLERANCE = 1e-9


class Defuzzifier:
    """Performs height-method weighted average defuzzification."""

    def __init__(
        self,
        anchors: Mapping[str, float],
        default: float,
        output_mfs: Optional[Mapping[str, List[float]]] = None,
    ):
        """
        Initializes the Defuzzifier.

        Args:
            anchors (Mapping[str, float]): Crisp anchor per output bucket.
            default (float): Output when no rule fired at all.
            output_mfs (Mapping[str, List[float]], optional): Control points
                of the output domain used by refuzzify().

        Raises:
            ValueError: If an anchor or the default is not finite.
        """
        self.anchors = {k: float(v) for k, v in anchors.items()}
        self.default = float(default)
        if not all(math.isfinite(v) for v in (*self.anchors.values(), self.default)):
            raise ValueError(
                f"Defuzzifier anchors and default must be finite, got "
                f"{self.anchors} (default {self.default})"
            )
        self.lower = min(self.anchors.values())
        self.upper = max(self.anchors.values())
        self.output_mfs = {
            label: MembershipFunction(f"aggression.{label}", tuple(params))
            for label, params in (output_mfs or {}).items()
        }
        defuzzifier_log.info(
            "Defuzzifier initialized with anchors %s (default %.1f).",
            self.anchors,
            self.default,
        )

    def defuzzify(self, buckets: Mapping[str, float]) -> float:
        """
        Calculates the final crisp aggression value.

        Args:
            buckets (Mapping[str, float]): Truth value per output bucket.

        Returns:
            float: The aggression value, within the anchor range, or the
                default when every bucket is zero.
        """
        numerator = 0.0
        denominator = 0.0
        for bucket, w in buckets.items():
            numerator += w * self.anchors[bucket]
            denominator += w

        if denominator == 0:
            defuzzifier_log.debug(
                "No rule fired. Outputting default %.1f.", self.default
            )
            return self.default

        final_output = numerator / denominator
        final_output_clamped = max(self.lower, min(self.upper, final_output))

        if abs(final_output - final_output_clamped) > _ROUNDING_TOLERANCE:
            defuzzifier_log.warning(
                "Defuzzified output %.4f was outside range and clamped to %.4f.",
                final_output,
                final_output_clamped,
            )

        defuzzifier_log.debug(
            "Defuzzified output: %.4f (from total weight %.3f)",
            final_output_clamped,
            denominator,
        )
        return final_output_clamped

    def refuzzify(self, aggression: float) -> Dict[str, float]:
        """Maps the crisp aggression onto the output domain labels."""
        return {label: mf.degree(aggression) for label, mf in self.output_mfs.items()}
