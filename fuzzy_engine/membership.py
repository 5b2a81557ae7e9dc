"""
Triangular and trapezoidal membership functions.

The two shape functions are pure and unchecked: they are called for every
label on every tick, so control points are validated once, when a
MembershipFunction is built, and never again per call.

Boundary semantics are fixed: zero membership is inclusive at the outer
points, full membership is inclusive on the peak/plateau. The tuned
thresholds of the rule base depend on these exact edges.
"""

import math
from dataclasses import dataclass
from typing import Tuple


def triangle(x: float, a: float, b: float, c: float) -> float:
    """
    Calculates the membership degree for a triangular function.

    Args:
        x (float): The crisp input value.
        a (float): Left foot (zero membership at and below).
        b (float): Peak (membership exactly 1.0).
        c (float): Right foot (zero membership at and above).

    Returns:
        float: The degree of membership, from 0.0 to 1.0.
    """
    if x <= a or x >= c:
        return 0.0
    if x == b:
        return 1.0
    if x < b:
        return (x - a) / (b - a)
    return (c - x) / (c - b)


def trapezoid(x: float, a: float, b: float, c: float, d: float) -> float:
    """
    Calculates the membership degree for a trapezoidal function.

    Args:
        x (float): The crisp input value.
        a, d (float): The bases (zero membership at and beyond).
        b, c (float): The plateau (membership = 1.0, inclusive).

    Returns:
        float: Degree of membership (0.0 to 1.0)
    """
    if x <= a or x >= d:
        return 0.0
    if b <= x <= c:
        return 1.0
    if x < b:
        return (x - a) / (b - a)
    return (d - x) / (d - c)


@dataclass(frozen=True)
class MembershipFunction:
    """
    A labelled membership shape with validated control points.

    Three control points build a triangle, four build a trapezoid.

    Raises:
        ValueError: If the point count is not 3 or 4, a point is NaN, the
            points are not monotonically non-decreasing, or a ramp has an
            infinite end.
    """

    label: str
    params: Tuple[float, ...]

    def __post_init__(self) -> None:
        params = tuple(float(p) for p in self.params)
        object.__setattr__(self, "params", params)

        if len(params) not in (3, 4):
            raise ValueError(
                f"Invalid membership function shape for '{self.label}': {list(params)}"
            )
        if any(math.isnan(p) for p in params):
            raise ValueError(f"NaN control point for '{self.label}': {list(params)}")
        if any(lo > hi for lo, hi in zip(params, params[1:])):
            raise ValueError(
                f"Invalid {self.shape} params for '{self.label}': {list(params)}"
            )
        # Ramp ends must be finite; an infinite plateau end is fine.
        for lo, hi in ((params[0], params[1]), (params[-2], params[-1])):
            if lo != hi and not (math.isfinite(lo) and math.isfinite(hi)):
                raise ValueError(
                    f"Infinite ramp point for '{self.label}': {list(params)}"
                )

    @property
    def shape(self) -> str:
        return "triangle" if len(self.params) == 3 else "trapezoid"

    def degree(self, x: float) -> float:
        if len(self.params) == 3:
            return triangle(x, *self.params)
        return trapezoid(x, *self.params)
