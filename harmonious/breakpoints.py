# harmonious/breakpoints.py
from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .model import (
    BASE_BREAKPOINT,
    BreakpointConfig,
    BreakpointKey,
    Plugin,
    ResolvedTypeConfig,
)
from .options import normalize_options
from .rhythm import DEFAULTS as RHYTHM_DEFAULTS
from .rhythm import RHYTHM_UNITS, RhythmEngine, make_rhythm_config
from .units import definite_number, unit_less
from .util.console import eprint

DEFAULT_TITLE = "harmonious-type-default"
DEFAULT_BREAKPOINT_UNIT = "px"

# Fields a breakpoint may override; everything else is global.
RESOLVED_FIELDS: Tuple[str, ...] = (
    "base_font_size",
    "base_line_height",
    "header_line_height",
    "scale_ratio",
    "block_margin_bottom",
    "min_line_padding",
    "round_to_nearest_half_line",
)

FIELD_DEFAULTS: Dict[str, Any] = {
    "base_font_size": RHYTHM_DEFAULTS["base_font_size"],
    "base_line_height": RHYTHM_DEFAULTS["base_line_height"],
    "header_line_height": 1.1,
    "scale_ratio": RHYTHM_DEFAULTS["scale_ratio"],
    "block_margin_bottom": 1,
    "min_line_padding": RHYTHM_DEFAULTS["min_line_padding"],
    "round_to_nearest_half_line": RHYTHM_DEFAULTS["round_to_nearest_half_line"],
}


@dataclass(frozen=True)
class Layer:
    """One breakpoint's raw overrides, positioned by width."""

    key: BreakpointKey
    width: float
    fields: Mapping[str, Any]


# --- Layers -------------------------------------------------------------------

def _layer_from_entry(key: Any, entry: Any) -> Optional[Layer]:
    if isinstance(entry, Mapping):
        fields = {k: v for k, v in entry.items() if k in RESOLVED_FIELDS}
        raw_width = entry.get("width", key)
    else:
        # {"tablet": 768} is shorthand for a breakpoint without overrides.
        fields = {}
        raw_width = entry

    width = unit_less(raw_width)
    if math.isnan(width) or width <= 0:
        eprint(f"[harmonious.breakpoints] WARN: dropping breakpoint {key!r}: invalid width {raw_width!r}")
        return None
    return Layer(key=key, width=width, fields=fields)


def collect_layers(breakpoints: Any) -> List[Layer]:
    """Return breakpoint layers sorted by ascending width (stable on declaration order)."""
    if breakpoints is None:
        return []
    if not isinstance(breakpoints, Mapping):
        eprint(f"[harmonious.breakpoints] WARN: breakpoints must be a mapping; got {type(breakpoints).__name__}")
        return []

    layers: List[Layer] = []
    for key, entry in breakpoints.items():
        if key == BASE_BREAKPOINT:
            eprint(f"[harmonious.breakpoints] WARN: dropping breakpoint {key!r}: key is reserved for the base config")
            continue
        layer = _layer_from_entry(key, entry)
        if layer is not None:
            layers.append(layer)
    layers.sort(key=lambda l: l.width)
    return layers


def resolve_field(
    name: str,
    target: Layer,
    layers: Sequence[Layer],
    base: Mapping[str, Any],
    default: Any,
) -> Any:
    """Resolve one field for `target` across explicit layers.

    Order: the target's own override, then the nearest layer below it that
    defines the field, then the base options, then `default`.
    """
    own = target.fields.get(name)
    if own is not None:
        return own

    idx = next((i for i, layer in enumerate(layers) if layer is target), len(layers))
    for layer in reversed(layers[:idx]):
        if layer.width <= target.width and layer.fields.get(name) is not None:
            return layer.fields[name]

    v = base.get(name)
    return default if v is None else v


# --- Breakpoint configs -------------------------------------------------------

def _block_margin_bottom(value: Any) -> Any:
    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return FIELD_DEFAULTS["block_margin_bottom"]


def make_breakpoint_config(
    key: BreakpointKey,
    width: float,
    fields: Mapping[str, Any],
    rhythm_unit: str,
) -> BreakpointConfig:
    rhythm = make_rhythm_config({**fields, "rhythm_unit": rhythm_unit})
    header_line_height = definite_number(fields.get("header_line_height"), FIELD_DEFAULTS["header_line_height"])
    return BreakpointConfig(
        key=key,
        width=float(width),
        rhythm=rhythm,
        header_line_height=header_line_height,
        block_margin_bottom=_block_margin_bottom(fields.get("block_margin_bottom")),
    )


# --- Plugins ------------------------------------------------------------------

def _hook(obj: Any, *names: str) -> Any:
    for name in names:
        fn = obj.get(name) if isinstance(obj, Mapping) else getattr(obj, name, None)
        if callable(fn):
            return fn
    return None


def coerce_plugin(obj: Any) -> Optional[Plugin]:
    if isinstance(obj, Plugin):
        return obj
    set_config = _hook(obj, "set_config", "setConfig")
    set_styles = _hook(obj, "set_styles", "setStyles")
    if set_config is None and set_styles is None:
        eprint(f"[harmonious.breakpoints] WARN: ignoring plugin without hooks: {obj!r}")
        return None
    return Plugin(set_config=set_config, set_styles=set_styles)


def coerce_plugins(plugins: Any) -> Tuple[Plugin, ...]:
    out: List[Plugin] = []
    for obj in plugins or ():
        p = coerce_plugin(obj)
        if p is not None:
            out.append(p)
    return tuple(out)


# --- Resolver -----------------------------------------------------------------

def resolve_config(options: Optional[Mapping[str, Any]] = None) -> ResolvedTypeConfig:
    """Merge base options with breakpoint overrides into a fully populated config."""
    opts = normalize_options(options)

    rhythm_unit = str(opts.get("rhythm_unit") or RHYTHM_DEFAULTS["rhythm_unit"]).strip().lower()
    if rhythm_unit not in RHYTHM_UNITS:
        rhythm_unit = RHYTHM_DEFAULTS["rhythm_unit"]
    breakpoint_unit = str(opts.get("breakpoint_unit") or DEFAULT_BREAKPOINT_UNIT).strip() or DEFAULT_BREAKPOINT_UNIT

    base_fields = {
        name: FIELD_DEFAULTS[name] if opts.get(name) is None else opts[name]
        for name in RESOLVED_FIELDS
    }
    base = make_breakpoint_config(BASE_BREAKPOINT, 0, base_fields, rhythm_unit)

    layers = collect_layers(opts.get("breakpoints"))
    breakpoints: Dict[BreakpointKey, BreakpointConfig] = {}
    for layer in layers:
        fields = {
            name: resolve_field(name, layer, layers, opts, FIELD_DEFAULTS[name])
            for name in RESOLVED_FIELDS
        }
        breakpoints[layer.key] = make_breakpoint_config(layer.key, layer.width, fields, rhythm_unit)

    config = ResolvedTypeConfig(
        title=str(opts.get("title") or DEFAULT_TITLE),
        rhythm_unit=rhythm_unit,
        breakpoint_unit=breakpoint_unit,
        base=base,
        breakpoints=breakpoints,
        plugins=coerce_plugins(opts.get("plugins")),
    )

    for plugin in config.plugins:
        if plugin.set_config is not None:
            out = plugin.set_config(config)
            if out is not None:
                config = out
    # Plugins may add breakpoints in any order.
    return replace(config, breakpoints={bp.key: bp for bp in config.ordered()[1:]})


def build_rhythms(config: ResolvedTypeConfig) -> Dict[BreakpointKey, RhythmEngine]:
    """One immutable engine per breakpoint, base first."""
    return {bp.key: RhythmEngine(bp.rhythm) for bp in config.ordered()}


__all__ = [
    "DEFAULT_BREAKPOINT_UNIT",
    "DEFAULT_TITLE",
    "FIELD_DEFAULTS",
    "Layer",
    "RESOLVED_FIELDS",
    "build_rhythms",
    "coerce_plugin",
    "coerce_plugins",
    "collect_layers",
    "make_breakpoint_config",
    "resolve_config",
    "resolve_field",
]
