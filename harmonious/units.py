# harmonious/units.py
from __future__ import annotations

import math
import re
from functools import lru_cache
from typing import Any, Callable, Optional, Tuple, Union

DEFAULT_BASE_FONT_SIZE = 16

Length = Union[str, int, float]
CSSUnitConverter = Callable[..., Length]

# CSS <length> units plus percentages. Only px/em/rem/ex are convertible.
LENGTH_UNITS = frozenset({
    "px", "em", "rem", "ex", "%",
    "ch", "vw", "vh", "vmin", "vmax",
    "cm", "mm", "q", "in", "pt", "pc",
})
_CONVERTIBLE_UNITS = frozenset({"px", "em", "rem", "ex"})

_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)\s*(.*?)\s*$")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _split(value: Any) -> Tuple[float, Optional[str]]:
    """Split a length into (number, raw suffix).

    The suffix is None when no leading number could be parsed at all.
    """
    if _is_number(value):
        return float(value), ""
    if not isinstance(value, str):
        return math.nan, None
    m = _NUMBER_RE.match(value)
    if not m:
        return math.nan, None
    return float(m.group(1)), m.group(2).lower()


def unit(value: Any) -> str:
    """Return the CSS length unit of `value`, or "" when it has none we recognize."""
    _, suffix = _split(value)
    if suffix and suffix in LENGTH_UNITS:
        return suffix
    return ""


def unit_less(value: Any) -> float:
    """Return the leading numeric value of `value` (NaN if there is none)."""
    n, _ = _split(value)
    return n


def parse_unit(value: Any) -> Tuple[float, str]:
    return unit_less(value), unit(value)


def definite_number(value: Any, fallback: float) -> float:
    """Parse `value` to a float, substituting `fallback` when it is not a number."""
    n = unit_less(value)
    return fallback if math.isnan(n) else n


def format_number(value: float) -> str:
    """Serialize a number rounded to 5 decimals, without trailing zeros."""
    s = f"{float(value):.5f}".rstrip("0").rstrip(".")
    if s in ("", "-0"):
        return "0"
    return s


def _context(value: Any, fallback: float) -> float:
    n = unit_less(value) if value is not None else math.nan
    if math.isnan(n) or n <= 0:
        return fallback
    return n


@lru_cache(maxsize=64)
def get_css_length_converter(base_size: float = DEFAULT_BASE_FONT_SIZE) -> CSSUnitConverter:
    """Return a converter between absolute and relative CSS lengths.

    `rem` lengths always resolve against `base_size`. `em` and `ex` lengths need a
    context in px: `from_context` for the input, `to_context` for the output
    (defaults: base size, then `from_context`).
    """
    base = _context(base_size, float(DEFAULT_BASE_FONT_SIZE))

    def convert(
        length: Length,
        to_unit: str,
        from_context: Optional[Length] = None,
        to_context: Optional[Length] = None,
    ) -> Length:
        from_ctx = _context(from_context, base)
        to_ctx = _context(to_context, from_ctx)

        value, suffix = _split(length)
        if suffix is None:
            return length
        from_unit = suffix or "px"

        if from_unit == to_unit:
            return length
        if from_unit not in _CONVERTIBLE_UNITS or to_unit not in _CONVERTIBLE_UNITS:
            return length

        if from_unit == "em":
            px = value * from_ctx
        elif from_unit == "rem":
            px = value * base
        elif from_unit == "ex":
            px = value * from_ctx * 2
        else:
            px = value

        if to_unit == "em":
            out = px / to_ctx
        elif to_unit == "rem":
            out = px / base
        elif to_unit == "ex":
            out = px / to_ctx / 2
        else:
            out = px

        return format_number(out) + to_unit

    return convert


def to_px(value: Any, base_size: float = DEFAULT_BASE_FONT_SIZE, context: Optional[Length] = None) -> float:
    """Return `value` in pixels as a float, or NaN if it cannot be converted."""
    out = get_css_length_converter(base_size)(value, "px", context)
    n, suffix = _split(out)
    if suffix in ("", "px"):
        return n
    return math.nan


__all__ = [
    "CSSUnitConverter",
    "DEFAULT_BASE_FONT_SIZE",
    "LENGTH_UNITS",
    "Length",
    "definite_number",
    "format_number",
    "get_css_length_converter",
    "parse_unit",
    "to_px",
    "unit",
    "unit_less",
]
