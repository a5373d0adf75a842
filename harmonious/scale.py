# harmonious/scale.py
from __future__ import annotations

import math
from typing import Dict, Union

from .util.console import eprint, obs_enabled

GOLDEN_RATIO = 1.61803398875

RATIOS: Dict[str, float] = {
    "augmented fourth": math.sqrt(2),
    "double octave": 4,
    "golden": GOLDEN_RATIO,
    "major eleventh": 8 / 3,
    "major second": 9 / 8,
    "major seventh": 15 / 8,
    "major sixth": 5 / 3,
    "major tenth": 5 / 2,
    "major third": 5 / 4,
    "major twelfth": 3,
    "minor second": 16 / 15,
    "minor seventh": 16 / 9,
    "minor sixth": 8 / 5,
    "minor third": 6 / 5,
    "octave": 2,
    "perfect fifth": 3 / 2,
    "perfect fourth": 4 / 3,
    "phi": GOLDEN_RATIO,
}

Ratio = Union[int, float, str]


def resolve_ratio(ratio: Ratio) -> float:
    """Return the numeric value of a ratio given as a number or a name in RATIOS.

    Numeric strings are parsed. Unknown names and ratios that are not finite
    and positive fall back to the golden ratio.
    """
    value = math.nan
    if isinstance(ratio, (int, float)) and not isinstance(ratio, bool):
        value = float(ratio)
    elif isinstance(ratio, str):
        key = ratio.strip().lower()
        if key in RATIOS:
            return float(RATIOS[key])
        try:
            value = float(key)
        except ValueError:
            pass
    if math.isfinite(value) and value > 0:
        return value
    if obs_enabled():
        eprint(f"[harmonious.scale] WARN: invalid ratio {ratio!r}; using golden ratio")
    return GOLDEN_RATIO


def harmonious_scale(value: float = 0, ratio: Ratio = "golden") -> float:
    return math.pow(resolve_ratio(ratio), value)


__all__ = ["GOLDEN_RATIO", "RATIOS", "Ratio", "harmonious_scale", "resolve_ratio"]
