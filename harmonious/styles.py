"""Style cascade: apply the rule table per breakpoint and nest media queries."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Union

from .breakpoints import build_rhythms
from .model import BreakpointKey, ResolvedTypeConfig, StyleMap
from .rhythm import RhythmEngine
from .rules import DEFAULT_RULES, Properties, StyleContext, StyleRule
from .units import format_number

_MEDIA_PREFIX = "@media"
_MEDIA_WIDTH_RE = re.compile(r"min-width\s*:\s*(-?(?:\d+(?:\.\d*)?|\.\d+))")


def media_query(width: float, unit: str = "px") -> str:
    return f"{_MEDIA_PREFIX} screen and (min-width: {format_number(width)}{unit})"


def is_media_query(key: Any) -> bool:
    return isinstance(key, str) and key.lstrip().startswith(_MEDIA_PREFIX)


def media_width(key: str) -> float:
    m = _MEDIA_WIDTH_RE.search(key)
    return float(m.group(1)) if m else 0.0


def merge_styles(base: Mapping[str, Any], override: Mapping[str, Any]) -> StyleMap:
    """Deep-merge `override` into a copy of `base`; nested mappings merge, leaves replace."""
    out: StyleMap = dict(base)
    for key, value in override.items():
        cur = out.get(key)
        if isinstance(value, Mapping) and isinstance(cur, Mapping):
            out[key] = merge_styles(cur, value)
        elif isinstance(value, Mapping):
            out[key] = merge_styles({}, value)
        else:
            out[key] = value
    return out


def set_styles(styles: StyleMap, selectors: Union[str, Iterable[str]], properties: Mapping[str, Any]) -> StyleMap:
    if isinstance(selectors, str):
        selectors = (selectors,)
    out = dict(styles)
    for selector in selectors:
        out[selector] = merge_styles(out.get(selector) or {}, properties)
    return out


def sort_styles(styles: Mapping[str, Any]) -> StyleMap:
    """Recursively order keys: plain keys first (as inserted), then media queries by width."""
    plain = [(k, v) for k, v in styles.items() if not is_media_query(k)]
    media = sorted(
        ((k, v) for k, v in styles.items() if is_media_query(k)),
        key=lambda kv: media_width(kv[0]),
    )
    return {
        k: sort_styles(v) if isinstance(v, Mapping) else v
        for k, v in plain + media
    }


def apply_rules(rules: Sequence[StyleRule], ctx: StyleContext) -> Dict[str, Properties]:
    """Evaluate every rule for one breakpoint; returns selector -> merged properties."""
    computed: Dict[str, Properties] = {}
    for r in rules:
        props = r.properties(ctx)
        for selector in r.selectors:
            computed[selector] = {**computed.get(selector, {}), **props}
    return computed


def build_styles(
    config: ResolvedTypeConfig,
    rhythms: Optional[Mapping[BreakpointKey, RhythmEngine]] = None,
    rules: Optional[Sequence[StyleRule]] = None,
) -> StyleMap:
    rhythms = build_rhythms(config) if rhythms is None else rhythms
    rules = DEFAULT_RULES if rules is None else rules

    styles: StyleMap = {}
    # Properties in effect per selector after the breakpoints processed so far.
    effective: Dict[str, Properties] = {}

    for bp in config.ordered():
        engine = rhythms.get(bp.key) or RhythmEngine(bp.rhythm)
        computed = apply_rules(rules, StyleContext(config=config, breakpoint=bp, engine=engine))

        if bp is config.base:
            for selector, props in computed.items():
                styles = set_styles(styles, selector, props)
                effective[selector] = dict(props)
            continue

        query = media_query(bp.width, config.breakpoint_unit)
        for selector, props in computed.items():
            prev = effective.setdefault(selector, {})
            changed = {k: v for k, v in props.items() if k not in prev or prev[k] != v}
            if not changed:
                continue
            prev.update(changed)
            styles = set_styles(styles, selector, {query: changed})

    for plugin in config.plugins:
        if plugin.set_styles is not None:
            out = plugin.set_styles(dict(rhythms), config, styles)
            if out is not None:
                styles = merge_styles(styles, out)

    return sort_styles(styles)


__all__ = [
    "apply_rules",
    "build_styles",
    "is_media_query",
    "media_query",
    "media_width",
    "merge_styles",
    "set_styles",
    "sort_styles",
]
