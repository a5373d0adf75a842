from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List

from .options import load_options_from_json
from .render.css import compile_styles
from .typography import HarmoniousType

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore


def _die(msg: str, rc: int = 2) -> int:
    print(f"[harmonious] ERROR: {msg}", file=sys.stderr)
    return rc


def _dump_json(styles: Dict[str, Any]) -> str:
    # Key order is meaningful (media queries by width); never sort keys.
    if orjson is not None:
        return orjson.dumps(styles, option=orjson.OPT_INDENT_2).decode("utf-8")
    return json.dumps(styles, ensure_ascii=False, indent=2)


def _apply_overrides(options: Dict[str, Any], ns: argparse.Namespace) -> Dict[str, Any]:
    out = dict(options)
    for key in ("title", "base_font_size", "base_line_height", "rhythm_unit", "scale_ratio"):
        v = getattr(ns, key)
        if v is not None:
            out[key] = v
    return out


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(
        prog="harmonious",
        description="Render vertical-rhythm typography styles to CSS or JSON.",
    )
    ap.add_argument("--config", default=None, help="Options JSON path (default: built-in defaults)")
    ap.add_argument("--format", choices=("css", "json"), default="css", help="Output format (default: css)")
    ap.add_argument("--out", default=None, help="Output path (default: stdout)")
    ap.add_argument("--title", default=None, help="Theme title")
    ap.add_argument("--base-font-size", default=None, help="Base font size, e.g. 18px (overrides --config)")
    ap.add_argument("--base-line-height", default=None, help="Base line height, e.g. 1.5 or 27px (overrides --config)")
    ap.add_argument("--rhythm-unit", choices=("px", "em", "rem"), default=None, help="Unit for rhythm values")
    ap.add_argument("--scale-ratio", default=None, help="Modular scale ratio: a number or a name like 'golden'")
    ns = ap.parse_args(argv)

    options: Dict[str, Any] = {}
    if ns.config:
        path = Path(ns.config)
        if not path.exists():
            return _die(f"Missing config JSON: {path}")
        try:
            options = load_options_from_json(path)
        except Exception as e:
            return _die(f"Failed to load config: {path} ({e})")

    options = _apply_overrides(options, ns)

    ht = HarmoniousType(options)
    styles = ht.to_json()
    text = _dump_json(styles) if ns.format == "json" else compile_styles(styles)

    if ns.out:
        out = Path(ns.out).expanduser()
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text + "\n", encoding="utf-8", newline="\n")
        print(f"[harmonious] OK: {out}")
    else:
        sys.stdout.write(text + "\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
