"""Vertical rhythm calculations.

Based on the Compass vertical rhythm functions: every operation takes a resolved
RhythmConfig explicitly. RhythmEngine is an immutable convenience wrapper that binds
one config to those functions.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .model import RhythmConfig
from .scale import GOLDEN_RATIO, harmonious_scale, resolve_ratio
from .units import (
    DEFAULT_BASE_FONT_SIZE,
    CSSUnitConverter,
    Length,
    format_number,
    get_css_length_converter,
    to_px,
    unit,
    unit_less,
)

RHYTHM_UNITS = ("px", "em", "rem")

DEFAULTS: Dict[str, Any] = {
    "base_font_size": DEFAULT_BASE_FONT_SIZE,
    "base_line_height": 1.5,
    "min_line_padding": 2,
    "rhythm_unit": "rem",
    "round_to_nearest_half_line": True,
    "scale_ratio": GOLDEN_RATIO,
}

Lines = Union[float, str]


def _pick(options: Dict[str, Any], key: str) -> Any:
    v = options.get(key)
    return DEFAULTS[key] if v is None else v


def _flag(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def _font_size_px(value: Any) -> float:
    # Relative base sizes resolve against the browser default.
    if unit(value) == "%":
        px = DEFAULT_BASE_FONT_SIZE * unit_less(value) / 100
    else:
        px = to_px(value)
    if math.isnan(px) or px <= 0:
        return float(DEFAULT_BASE_FONT_SIZE)
    return px


def make_rhythm_config(options: Optional[Dict[str, Any]] = None) -> RhythmConfig:
    """Build a RhythmConfig from raw option values, falling back to DEFAULTS."""
    options = options or {}
    base_font_size = _font_size_px(_pick(options, "base_font_size"))

    # A line height with a unit is a length; keep its unitless and px forms in sync.
    line_height = _pick(options, "base_line_height")
    if unit(line_height):
        base_line_height = to_px(line_height, base_font_size) / base_font_size
    else:
        base_line_height = unit_less(line_height)
    if math.isnan(base_line_height) or base_line_height <= 0:
        base_line_height = DEFAULTS["base_line_height"]
    base_line_height_px = base_line_height * base_font_size

    rhythm_unit = str(_pick(options, "rhythm_unit")).strip().lower()
    if rhythm_unit not in RHYTHM_UNITS:
        rhythm_unit = DEFAULTS["rhythm_unit"]

    min_line_padding = to_px(_pick(options, "min_line_padding"), base_font_size)
    if math.isnan(min_line_padding):
        min_line_padding = float(DEFAULTS["min_line_padding"])

    return RhythmConfig(
        base_font_size=base_font_size,
        base_line_height=base_line_height,
        base_line_height_px=base_line_height_px,
        rhythm_unit=rhythm_unit,
        min_line_padding=min_line_padding,
        round_to_nearest_half_line=_flag(_pick(options, "round_to_nearest_half_line")),
        scale_ratio=resolve_ratio(_pick(options, "scale_ratio")),
    )


def converter(cfg: RhythmConfig) -> CSSUnitConverter:
    return get_css_length_converter(cfg.base_font_size)


def establish_baseline(cfg: RhythmConfig) -> Dict[str, Any]:
    return {
        # Percent of the 16px browser default.
        "fontSize": format_number(cfg.base_font_size / 16 * 100) + "%",
        "lineHeight": cfg.base_line_height,
    }


def rhythm(
    cfg: RhythmConfig,
    lines: float = 1,
    font_size: Optional[Length] = None,
    offset: float = 0,
) -> str:
    lines = 1 if lines is None else lines
    font_size = cfg.base_font_size if font_size is None else font_size
    offset = offset or 0

    # Unrounded; the converted value is rounded once.
    length = repr(float(lines * cfg.base_line_height_px - offset)) + "px"
    out = converter(cfg)(length, cfg.rhythm_unit, font_size)
    n, u = unit_less(out), unit(out) or "px"
    if u == "px":
        # Whole device pixels only.
        n = math.floor(n)
    return format_number(n) + u


def lines_for_font_size(cfg: RhythmConfig, font_size: Length) -> float:
    font_size_px = to_px(font_size, cfg.base_font_size)
    if not math.isfinite(font_size_px):
        font_size_px = cfg.base_font_size
    lh_px = cfg.base_line_height_px
    step = 0.5 if cfg.round_to_nearest_half_line else 1.0
    if cfg.round_to_nearest_half_line:
        lines = math.ceil(2 * font_size_px / lh_px) / 2
    else:
        lines = float(math.ceil(font_size_px / lh_px))

    # Cramped line box: add lead above and below the glyphs.
    if lines * lh_px - font_size_px < cfg.min_line_padding * 2:
        lines += step
    return lines


def line_height_from_value(cfg: RhythmConfig, value: Any) -> float:
    if unit(value):
        px = to_px(value, cfg.base_font_size)
        return cfg.base_line_height if math.isnan(px) else px / cfg.base_font_size
    n = unit_less(value)
    if math.isnan(n):
        return cfg.base_line_height
    return n / cfg.base_font_size


def adjust_font_size_to(
    cfg: RhythmConfig,
    to_size: Length,
    lines: Lines = "auto",
    from_size: Optional[Length] = None,
) -> Dict[str, Any]:
    base = cfg.base_font_size
    from_size = base if from_size is None else from_size

    if unit(to_size) == "%":
        to_size = format_number(base * unit_less(to_size) / 100) + "px"

    from_px = to_px(from_size, base)
    if not math.isfinite(from_px) or from_px <= 0:
        from_px = base
    to_size_px = to_px(to_size, base, from_px)
    if not math.isfinite(to_size_px):
        to_size_px = from_px
    to_length = format_number(to_size_px) + "px"

    n_lines = math.nan if lines is None or lines == "auto" else unit_less(lines)
    if not math.isfinite(n_lines):
        n_lines = lines_for_font_size(cfg, to_length)

    return {
        "fontSize": converter(cfg)(to_length, cfg.rhythm_unit, from_px),
        "lineHeight": line_height_from_value(cfg, rhythm(cfg, n_lines, from_px)),
    }


def scale(cfg: RhythmConfig, value: float = 0) -> Dict[str, Any]:
    return adjust_font_size_to(cfg, harmonious_scale(value, cfg.scale_ratio) * cfg.base_font_size)


def rhythmic_line_height(
    cfg: RhythmConfig,
    lines: float = 1,
    font_size: Optional[Length] = None,
    offset: float = 0,
) -> float:
    return line_height_from_value(cfg, rhythm(cfg, lines, font_size, offset))


@dataclass(frozen=True)
class RhythmEngine:
    config: RhythmConfig

    @classmethod
    def from_options(cls, options: Optional[Dict[str, Any]] = None) -> "RhythmEngine":
        return cls(make_rhythm_config(options))

    @property
    def base_font_size(self) -> float:
        return self.config.base_font_size

    def convert(self, length: Length, to_unit: str, from_context: Optional[Length] = None,
                to_context: Optional[Length] = None) -> Length:
        return converter(self.config)(length, to_unit, from_context, to_context)

    def establish_baseline(self) -> Dict[str, Any]:
        return establish_baseline(self.config)

    def rhythm(self, lines: float = 1, font_size: Optional[Length] = None, offset: float = 0) -> str:
        return rhythm(self.config, lines, font_size, offset)

    def lines_for_font_size(self, font_size: Length) -> float:
        return lines_for_font_size(self.config, font_size)

    def adjust_font_size_to(self, to_size: Length, lines: Lines = "auto",
                            from_size: Optional[Length] = None) -> Dict[str, Any]:
        return adjust_font_size_to(self.config, to_size, lines, from_size)

    def line_height_from_value(self, value: Any) -> float:
        return line_height_from_value(self.config, value)

    def scale(self, value: float = 0) -> Dict[str, Any]:
        return scale(self.config, value)

    def rhythmic_line_height(self, lines: float = 1, font_size: Optional[Length] = None,
                             offset: float = 0) -> float:
        return rhythmic_line_height(self.config, lines, font_size, offset)


__all__ = [
    "DEFAULTS",
    "RHYTHM_UNITS",
    "RhythmEngine",
    "adjust_font_size_to",
    "converter",
    "establish_baseline",
    "line_height_from_value",
    "lines_for_font_size",
    "make_rhythm_config",
    "rhythm",
    "rhythmic_line_height",
    "scale",
]
