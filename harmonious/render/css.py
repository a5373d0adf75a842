# harmonious/render/css.py
from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping, Tuple

from ..styles import is_media_query, media_width
from ..units import format_number

VENDOR_PREFIXES = ("Webkit", "ms", "Moz", "O")

_CAMEL_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def kebab_case(name: str) -> str:
    return _CAMEL_RE.sub("-", name).replace("_", "-").lower()


def css_property(name: str) -> str:
    prop = kebab_case(name)
    # Vendor-prefixed names (MozFontFeatureSettings) get their leading dash back.
    if name.startswith(VENDOR_PREFIXES) and not prop.startswith("-"):
        prop = "-" + prop
    return prop


def css_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def _declarations(props: Mapping[str, Any]) -> str:
    return "".join(
        f"{css_property(k)}:{css_value(v)};"
        for k, v in props.items()
        if not isinstance(v, Mapping)
    )


def _rule(selector: str, props: Mapping[str, Any]) -> str:
    decls = _declarations(props)
    return f"{selector}{{{decls}}}" if decls else ""


def compile_styles(styles: Mapping[str, Any]) -> str:
    """Serialize a style map to CSS text.

    Media queries nested inside a selector are hoisted into trailing
    `@media` blocks, ordered by ascending min-width. Top-level media keys
    hold their own selector maps and are emitted the same way.
    """
    out: List[str] = []
    hoisted: Dict[str, List[Tuple[str, Mapping[str, Any]]]] = {}

    for selector, body in styles.items():
        if not isinstance(body, Mapping):
            continue
        if is_media_query(selector):
            for inner_selector, inner in body.items():
                if isinstance(inner, Mapping):
                    hoisted.setdefault(selector, []).append((inner_selector, inner))
            continue
        out.append(_rule(selector, body))
        for key, nested in body.items():
            if is_media_query(key) and isinstance(nested, Mapping):
                hoisted.setdefault(key, []).append((selector, nested))

    for query in sorted(hoisted, key=media_width):
        inner_css = "".join(_rule(sel, props) for sel, props in hoisted[query])
        if inner_css:
            out.append(f"{query}{{{inner_css}}}")

    return "".join(out)


__all__ = ["VENDOR_PREFIXES", "compile_styles", "css_property", "css_value", "kebab_case"]
