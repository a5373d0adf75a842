# harmonious/rules.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Tuple, Union

from .model import BreakpointConfig, ResolvedTypeConfig
from .rhythm import RhythmEngine
from .units import Length, format_number

Properties = Dict[str, Any]


@dataclass(frozen=True)
class StyleContext:
    """What a responsive rule can see at one breakpoint."""

    config: ResolvedTypeConfig
    breakpoint: BreakpointConfig
    engine: RhythmEngine

    @property
    def rhythm_unit(self) -> str:
        return self.config.rhythm_unit

    @property
    def header_line_height(self) -> float:
        return self.breakpoint.header_line_height

    @property
    def block_margin_bottom(self) -> str:
        bmb = self.breakpoint.block_margin_bottom
        if isinstance(bmb, str):
            return bmb
        return self.engine.rhythm(bmb)

    def rhythm(self, lines: float = 1) -> str:
        return self.engine.rhythm(lines)

    def convert(self, length: Length, to_unit: str) -> Length:
        return self.engine.convert(length, to_unit)

    def scale(self, value: float = 0) -> Dict[str, Any]:
        return self.engine.scale(value)

    def adjust_font_size_to(self, to_size: Length) -> Properties:
        out = self.engine.adjust_font_size_to(to_size)
        return {"fontSize": out["fontSize"], "lineHeight": out["lineHeight"]}


RuleBody = Union[Mapping[str, Any], Callable[[StyleContext], Mapping[str, Any]]]


@dataclass(frozen=True)
class StyleRule:
    selectors: Tuple[str, ...]
    body: RuleBody

    @property
    def is_static(self) -> bool:
        return not callable(self.body)

    def properties(self, ctx: StyleContext) -> Properties:
        body = self.body(ctx) if callable(self.body) else self.body
        return dict(body or {})


def rule(selectors: Union[str, Tuple[str, ...], list], body: RuleBody) -> StyleRule:
    if isinstance(selectors, str):
        selectors = (selectors,)
    return StyleRule(selectors=tuple(selectors), body=body)


# --- Default rule table ---------------------------------------------------------

_BODY_FONT_FEATURES = '"kern", "liga", "clig", "calt"'
_TABULAR_FONT_FEATURES = '"tnum"'

_BLOCK_ELEMENTS = (
    "h1", "h2", "h3", "h4", "h5", "h6", "hgroup",
    "ul", "ol", "dl", "dd", "p", "figure", "pre", "table",
    "fieldset", "blockquote", "form", "noscript", "iframe",
    "img", "hr", "address",
)

# Modular scale exponents for h1..h6.
HEADER_SCALE = (5 / 5, 3 / 5, 2 / 5, 0 / 5, -1 / 5, -1.5 / 5)


def _html(ctx: StyleContext) -> Properties:
    baseline = ctx.engine.establish_baseline()
    return {
        "fontSize": baseline["fontSize"],
        "lineHeight": baseline["lineHeight"],
        "boxSizing": "border-box",
        "overflowY": "scroll",
    }


def _block(ctx: StyleContext) -> Properties:
    # Reset margin/padding; every block gets the block margin below it.
    return {
        "marginLeft": 0,
        "marginRight": 0,
        "marginTop": 0,
        "paddingBottom": 0,
        "paddingLeft": 0,
        "paddingRight": 0,
        "paddingTop": 0,
        "marginBottom": ctx.block_margin_bottom,
    }


def _table_cells(ctx: StyleContext) -> Properties:
    return {
        "textAlign": "left",
        "borderBottom": "1px solid",
        "fontFeatureSettings": _TABULAR_FONT_FEATURES,
        "MozFontFeatureSettings": _TABULAR_FONT_FEATURES,
        "msFontFeatureSettings": _TABULAR_FONT_FEATURES,
        "WebkitFontFeatureSettings": _TABULAR_FONT_FEATURES,
        "paddingLeft": ctx.rhythm(2 / 3),
        "paddingRight": ctx.rhythm(2 / 3),
        "paddingTop": ctx.rhythm(1 / 2),
        "paddingBottom": f"calc({ctx.rhythm(1 / 2)} - 1px)",
    }


def _header(exponent: float) -> Callable[[StyleContext], Properties]:
    def build(ctx: StyleContext) -> Properties:
        return {
            "fontSize": ctx.convert(ctx.scale(exponent)["fontSize"], ctx.rhythm_unit),
            "lineHeight": ctx.header_line_height,
        }

    return build


DEFAULT_RULES: Tuple[StyleRule, ...] = (
    rule("html", _html),
    rule(("*", "*:before", "*:after"), {"boxSizing": "inherit"}),
    rule("body", {
        "wordWrap": "break-word",
        "fontKerning": "normal",
        "MozFontFeatureSettings": _BODY_FONT_FEATURES,
        "msFontFeatureSettings": _BODY_FONT_FEATURES,
        "WebkitFontFeatureSettings": _BODY_FONT_FEATURES,
        "fontFeatureSettings": _BODY_FONT_FEATURES,
    }),
    rule("img", {"maxWidth": "100%"}),
    rule(_BLOCK_ELEMENTS, _block),
    rule("blockquote", lambda ctx: {
        "marginRight": ctx.rhythm(1),
        "marginBottom": ctx.block_margin_bottom,
        "marginLeft": ctx.rhythm(1),
    }),
    rule("hr", lambda ctx: {
        "background": "currentColor",
        "border": "none",
        "height": "1px",
        "marginBottom": f"calc({ctx.block_margin_bottom} - 1px)",
    }),
    rule(("ol", "ul"), lambda ctx: {
        "listStylePosition": "outside",
        "listStyleImage": "none",
        "marginLeft": ctx.rhythm(1),
    }),
    rule("li", lambda ctx: {"marginBottom": f"calc({ctx.block_margin_bottom} / 2)"}),
    rule(("ol li", "ul li"), {"paddingLeft": 0}),
    rule(("li > ol", "li > ul"), lambda ctx: {
        "marginLeft": ctx.rhythm(1),
        "marginBottom": f"calc({ctx.block_margin_bottom} / 2)",
        "marginTop": f"calc({ctx.block_margin_bottom} / 2)",
    }),
    # Markdown compilers nest paragraphs inside list items and quotes.
    rule(("blockquote *:last-child", "li *:last-child", "p *:last-child"), {"marginBottom": 0}),
    rule("li > p", lambda ctx: {"marginBottom": f"calc({ctx.block_margin_bottom} / 2)"}),
    rule(("code", "kbd", "pre", "samp"), lambda ctx: ctx.adjust_font_size_to("85%")),
    rule(("abbr", "acronym"), {"borderBottom": "1px dotted", "cursor": "help"}),
    rule("abbr[title]", {"borderBottom": "1px dotted", "cursor": "help", "textDecoration": "none"}),
    rule("table", lambda ctx: {
        **ctx.adjust_font_size_to(format_number(ctx.engine.base_font_size) + "px"),
        "borderCollapse": "collapse",
        "width": "100%",
    }),
    rule("thead", {"textAlign": "left"}),
    rule("td,th", _table_cells),
    rule("th:first-child,td:first-child", {"paddingLeft": 0}),
    rule("th:last-child,td:last-child", {"paddingRight": 0}),
    rule(("h1", "h2", "h3", "h4", "h5", "h6"), {"textRendering": "optimizeLegibility"}),
) + tuple(
    rule(f"h{i + 1}", _header(exponent)) for i, exponent in enumerate(HEADER_SCALE)
)


__all__ = [
    "DEFAULT_RULES",
    "HEADER_SCALE",
    "Properties",
    "RuleBody",
    "StyleContext",
    "StyleRule",
    "rule",
]
