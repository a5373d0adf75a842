"""HarmoniousType: a resolved configuration plus one rhythm engine per breakpoint."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .breakpoints import build_rhythms, resolve_config
from .model import BASE_BREAKPOINT, BreakpointKey, ResolvedTypeConfig, StyleMap
from .render.css import compile_styles
from .rhythm import Lines, RhythmEngine
from .styles import build_styles
from .units import Length
from .util.console import eprint


class HarmoniousType:
    def __init__(self, options: Optional[Mapping[str, Any]] = None) -> None:
        self.config: ResolvedTypeConfig = resolve_config(options)
        self.rhythms: Dict[BreakpointKey, RhythmEngine] = build_rhythms(self.config)

    @property
    def base(self) -> RhythmEngine:
        return self.rhythms[BASE_BREAKPOINT]

    def engine_for(self, breakpoint: Optional[BreakpointKey] = None) -> RhythmEngine:
        """Return the engine for `breakpoint` (default: base).

        Unknown keys are reported and resolve against the base breakpoint.
        """
        if breakpoint is None:
            return self.base
        engine = self.rhythms.get(breakpoint)
        if engine is None:
            eprint(f"[harmonious.typography] WARN: unknown breakpoint {breakpoint!r}; using base")
            return self.base
        return engine

    def convert(self, length: Length, to_unit: str, from_context: Optional[Length] = None,
                to_context: Optional[Length] = None, *, breakpoint: Optional[BreakpointKey] = None) -> Length:
        return self.engine_for(breakpoint).convert(length, to_unit, from_context, to_context)

    def rhythm(self, lines: float = 1, font_size: Optional[Length] = None, offset: float = 0,
               *, breakpoint: Optional[BreakpointKey] = None) -> str:
        return self.engine_for(breakpoint).rhythm(lines, font_size, offset)

    def rhythmic_line_height(self, lines: float = 1, font_size: Optional[Length] = None, offset: float = 0,
                             *, breakpoint: Optional[BreakpointKey] = None) -> float:
        return self.engine_for(breakpoint).rhythmic_line_height(lines, font_size, offset)

    def establish_baseline(self, *, breakpoint: Optional[BreakpointKey] = None) -> Dict[str, Any]:
        return self.engine_for(breakpoint).establish_baseline()

    def lines_for_font_size(self, font_size: Length, *, breakpoint: Optional[BreakpointKey] = None) -> float:
        return self.engine_for(breakpoint).lines_for_font_size(font_size)

    def adjust_font_size_to(self, to_size: Length, lines: Lines = "auto", from_size: Optional[Length] = None,
                            *, breakpoint: Optional[BreakpointKey] = None) -> Dict[str, Any]:
        return self.engine_for(breakpoint).adjust_font_size_to(to_size, lines, from_size)

    def line_height_from_value(self, value: Any, *, breakpoint: Optional[BreakpointKey] = None) -> float:
        return self.engine_for(breakpoint).line_height_from_value(value)

    def scale(self, value: float = 0, *, breakpoint: Optional[BreakpointKey] = None) -> Dict[str, Any]:
        return self.engine_for(breakpoint).scale(value)

    def to_json(self) -> StyleMap:
        return build_styles(self.config, self.rhythms)

    def to_string(self) -> str:
        return compile_styles(self.to_json())

    def __str__(self) -> str:
        return self.to_string()


__all__ = ["HarmoniousType"]
