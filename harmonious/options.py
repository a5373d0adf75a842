"""Option normalization and loading (library-facing)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .util.console import eprint

JsonPath = Union[str, Path]


class OptionsError(ValueError):
    """Raised when an options file cannot be used as a configuration object."""


# camelCase spellings accepted for every snake_case option.
_ALIASES = {
    "baseFontSize": "base_font_size",
    "baseLineHeight": "base_line_height",
    "blockMarginBottom": "block_margin_bottom",
    "breakpointUnit": "breakpoint_unit",
    "headerLineHeight": "header_line_height",
    "minLinePadding": "min_line_padding",
    "rhythmUnit": "rhythm_unit",
    "roundToNearestHalfLine": "round_to_nearest_half_line",
    "scaleRatio": "scale_ratio",
}


def canonical_key(key: Any) -> Any:
    return _ALIASES.get(key, key) if isinstance(key, str) else key


def normalize_fields(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of `raw` with canonical (snake_case) keys."""
    return {canonical_key(k): v for k, v in raw.items()}


def normalize_options(options: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """Canonicalize a top-level options mapping without mutating it.

    Breakpoint entries that are mappings get their keys canonicalized too;
    anything else is passed through for the resolver to judge.
    """
    if options is None:
        return {}
    if not isinstance(options, Mapping):
        raise TypeError(f"options must be a mapping; got {type(options).__name__}")

    out = normalize_fields(options)
    bps = out.get("breakpoints")
    if isinstance(bps, Mapping):
        out["breakpoints"] = {
            k: normalize_fields(v) if isinstance(v, Mapping) else v
            for k, v in bps.items()
        }
    plugins = out.get("plugins")
    if plugins is not None and not isinstance(plugins, (list, tuple)):
        out["plugins"] = [plugins]
    return out


def load_options_from_json(path: JsonPath) -> Dict[str, Any]:
    """Load options from a JSON file.

    Accepted format: a single object with the same keys as the Python options.
    Plugins are code and cannot come from JSON; a `plugins` key is ignored.
    """
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8", errors="replace"))
    if not isinstance(obj, dict):
        raise OptionsError(f"options JSON must be an object/dict; got {type(obj).__name__}")
    if "plugins" in obj:
        eprint(f"[harmonious.options] WARN: ignoring 'plugins' in {p}; plugins must be passed from Python")
        obj.pop("plugins")
    return normalize_options(obj)


__all__ = [
    "OptionsError",
    "canonical_key",
    "load_options_from_json",
    "normalize_fields",
    "normalize_options",
]
