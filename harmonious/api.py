"""harmonious.api

Stable *library* entrypoint for harmonious.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from harmonious.breakpoints import build_rhythms, resolve_config, resolve_field
from harmonious.model import (
    BASE_BREAKPOINT,
    BreakpointConfig,
    Plugin,
    ResolvedTypeConfig,
    RhythmConfig,
    StyleMap,
)
from harmonious.options import OptionsError, load_options_from_json, normalize_options
from harmonious.render.css import compile_styles
from harmonious.rhythm import RhythmEngine, make_rhythm_config
from harmonious.rules import DEFAULT_RULES, StyleContext, StyleRule
from harmonious.scale import RATIOS, harmonious_scale
from harmonious.styles import build_styles, sort_styles
from harmonious.typography import HarmoniousType
from harmonious.units import get_css_length_converter, parse_unit, unit, unit_less


def create_styles(options: Optional[Mapping[str, Any]] = None) -> StyleMap:
    """Resolve `options` and build a fresh style map in one call."""
    config = resolve_config(options)
    return build_styles(config, build_rhythms(config))


def create_css(options: Optional[Mapping[str, Any]] = None) -> str:
    """Resolve `options` and serialize the style map to CSS text."""
    return compile_styles(create_styles(options))


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
# Prefer append-only unless you are intentionally reshaping the public surface.
_PUBLIC_EXPORTS = (
    "BASE_BREAKPOINT",
    "BreakpointConfig",
    "DEFAULT_RULES",
    "HarmoniousType",
    "OptionsError",
    "Plugin",
    "RATIOS",
    "ResolvedTypeConfig",
    "RhythmConfig",
    "RhythmEngine",
    "StyleContext",
    "StyleRule",
    "build_rhythms",
    "build_styles",
    "compile_styles",
    "create_css",
    "create_styles",
    "get_css_length_converter",
    "harmonious_scale",
    "load_options_from_json",
    "make_rhythm_config",
    "normalize_options",
    "parse_unit",
    "resolve_config",
    "resolve_field",
    "sort_styles",
    "unit",
    "unit_less",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
