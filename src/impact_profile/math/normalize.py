"""Numeric primitives shared by every scorer: log normalization, clamping."""

import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward positive infinity.

    Python's ``round`` uses banker's rounding (``round(92.5) == 92``);
    published scores round 92.5 up to 93.
    """
    return int(math.floor(value + 0.5))


def normalize(x: float, cap: float) -> float:
    """Logarithmic normalization into [0, 1].

    f(x, cap) = ln(1 + min(x, cap)) / ln(1 + cap)

    Early units add the most; the curve is flat from ``cap`` onwards, so
    inflating a counter past its cap earns nothing.

    Args:
        x: Raw signal value (non-positive values map to 0)
        cap: Saturation point (must be positive)

    Returns:
        Normalized value in [0, 1]
    """
    if x <= 0:
        return 0.0
    clamped = min(x, cap)
    return math.log(1 + clamped) / math.log(1 + cap)


def clamp_score(raw: float) -> int:
    """Round ``raw`` half-up and clamp it to the integer range [0, 100]."""
    return max(0, min(100, round_half_up(raw)))
