# harmonious/model.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union

BASE_BREAKPOINT = "base"

BreakpointKey = Union[str, int, float]
StyleMap = Dict[str, Any]
Options = Dict[str, Any]


@dataclass(frozen=True)
class RhythmConfig:
    base_font_size: float
    base_line_height: float
    base_line_height_px: float
    rhythm_unit: str = "rem"
    min_line_padding: float = 2.0
    round_to_nearest_half_line: bool = True
    scale_ratio: float = 1.61803398875


@dataclass(frozen=True)
class BreakpointConfig:
    key: BreakpointKey
    width: float
    rhythm: RhythmConfig
    header_line_height: float = 1.1
    # Lines of rhythm (number) or a literal CSS length (str).
    block_margin_bottom: Union[float, str] = 1


@dataclass(frozen=True)
class Plugin:
    set_config: Optional[Callable[["ResolvedTypeConfig"], "ResolvedTypeConfig"]] = None
    set_styles: Optional[Callable[[Dict[BreakpointKey, Any], "ResolvedTypeConfig", StyleMap], StyleMap]] = None


@dataclass(frozen=True)
class ResolvedTypeConfig:
    title: str
    rhythm_unit: str
    breakpoint_unit: str
    base: BreakpointConfig
    breakpoints: Dict[BreakpointKey, BreakpointConfig]
    plugins: Tuple[Plugin, ...] = ()

    def ordered(self) -> Tuple[BreakpointConfig, ...]:
        """Base first, then user breakpoints by ascending width."""
        return (self.base,) + tuple(sorted(self.breakpoints.values(), key=lambda bp: bp.width))


__all__ = [
    "BASE_BREAKPOINT",
    "BreakpointConfig",
    "BreakpointKey",
    "Options",
    "Plugin",
    "ResolvedTypeConfig",
    "RhythmConfig",
    "StyleMap",
]
