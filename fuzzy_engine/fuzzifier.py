"""
Fuzzifies crisp combat measurements into linguistic membership degrees.

This module takes the raw scalar readings handed over by the game loop
(distance to target, health percent, attack intensity, cooldown counter) and
determines their degree of membership in every linguistic label of the
matching domain (e.g. 'close', 'wounded', 'spamming', 'armed').
"""

import logging
from typing import Dict, List

from fuzzy_engine.membership import MembershipFunction

fuzzifier_log = logging.getLogger("fuzzifier")


class Fuzzifier:
    """
    Calculates membership degrees for crisp inputs.

    Attributes:
        membership_functions (Dict[str, Dict[str, MembershipFunction]]): The
            validated membership functions for each input domain, keyed by
            domain name and then by label, in configuration order.
    """

    def __init__(self, mf_params: Dict[str, Dict[str, List[float]]]) -> None:
        """
        Initializes the Fuzzifier and validates every control point.

        Args:
            mf_params (Dict[str, Dict[str, List[float]]]): Control points per
                domain and label, as found in the engine configuration.

        Raises:
            ValueError: If any label has a malformed shape.
        """
        self.membership_functions: Dict[str, Dict[str, MembershipFunction]] = {}
        for domain, labels in mf_params.items():
            self.membership_functions[domain] = {
                label: MembershipFunction(f"{domain}.{label}", tuple(params))
                for label, params in labels.items()
            }

        fuzzifier_log.info(
            "Fuzzifier initialized with %d domains: %s",
            len(self.membership_functions),
            ", ".join(
                f"{d}({len(l)})" for d, l in self.membership_functions.items()
            ),
        )

    @property
    def domains(self) -> List[str]:
        return list(self.membership_functions)

    def fuzzify(self, domain: str, crisp_value: float) -> Dict[str, float]:
        """
        Fuzzifies a single crisp input value.

        Args:
            domain (str): The input domain name (e.g. 'distance').
            crisp_value (float): The raw measurement.

        Returns:
            Dict[str, float]: Every label of the domain mapped to its degree,
                zero degrees included.
        """
        if domain not in self.membership_functions:
            raise KeyError(f"No membership functions defined for input '{domain}'")

        fuzzified_output = {
            label: mf.degree(crisp_value)
            for label, mf in self.membership_functions[domain].items()
        }

        formatted_output = {k: f"{v:.3f}" for k, v in fuzzified_output.items()}
        fuzzifier_log.debug(
            "Fuzzified %s= %.3f -> %s", domain, crisp_value, formatted_output
        )
        return fuzzified_output
