from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
import sys
from typing import Any, Mapping, Sequence

from osk_core import (
    DEFAULT_DEBOUNCE_MS,
    HitTestEngine,
    OSKError,
    build_keyboard,
    load_config,
    load_keymap,
    validate_keymap,
)
from osk_ui import key_label, save_keyboard_png, resolve_style

LOGGER = logging.getLogger("osk")


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        settings = _resolve_settings(args)
        LOGGER.debug("resolved settings: %s", settings)
        keymap = load_keymap(settings["keymap"])

        if args.command == "validate":
            validate_keymap(keymap)
            print("ok")
            return 0

        width, height = settings["width"], settings["height"]
        keyboard = build_keyboard(keymap, width, height)

        if args.command == "describe":
            print(json.dumps(keyboard.to_dict(), indent=2, sort_keys=True))
            return 0

        if args.command == "render":
            style = resolve_style(settings["style"])
            out = save_keyboard_png(keyboard, args.out, style)
            print(f"wrote {out} ({keyboard.width}x{keyboard.height})")
            return 0

        if args.command == "hit-test":
            engine = HitTestEngine(keyboard, debounce_ms=settings["debounce_ms"])
            for raw in args.points:
                x, y, t_ms = parse_press_notation(raw)
                result = engine.try_press(x, y, None if t_ms is None else t_ms * 1_000_000)
                if result.key is not None:
                    print(f"{raw}\t{result.key.key_type.name.lower()}\t{key_label(result.key)!r}")
                elif result.error is not None:
                    print(f"{raw}\t{result.error.code}")
            return 0
    except OSKError as exc:
        print(f"{exc.code}: {exc}", file=sys.stderr)
        return 2

    raise RuntimeError(f"unsupported command: {args.command}")


def parse_press_notation(notation: str) -> tuple[int, int, int | None]:
    """Parse `x,y` or `x,y@t_ms` into pixel coordinates and an optional timestamp."""

    raw = notation.strip()
    if not raw:
        raise ValueError("press notation must be non-empty")
    t_ms: int | None = None
    coords = raw
    if "@" in raw:
        coords, raw_t = raw.split("@", 1)
        t_ms = int(raw_t.strip())
    parts = [p.strip() for p in coords.split(",")]
    if len(parts) != 2:
        raise ValueError("presses must use `x,y` or `x,y@t_ms` format")
    return (int(parts[0]), int(parts[1]), t_ms)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="osk")
    parser.add_argument("--config", type=Path, default=None, help="osk.toml supplying keymap/size/style defaults.")
    parser.add_argument("--log-level", choices=["DEBUG", "INFO", "WARNING", "ERROR"], default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    validate = sub.add_parser("validate", help="Check a keymap for geometric consistency.")
    validate.add_argument("--keymap", type=Path, default=None)

    describe = sub.add_parser("describe", help="Print the compiled pixel layout as JSON.")
    _add_layout_args(describe)

    render = sub.add_parser("render", help="Render the compiled keyboard to a PNG.")
    _add_layout_args(render)
    render.add_argument("--out", type=Path, required=True)
    render.add_argument("--font-family", default=None)
    render.add_argument("--font-size", type=float, default=None)

    hit = sub.add_parser("hit-test", help="Replay presses (`x,y` or `x,y@t_ms`) through one engine.")
    _add_layout_args(hit)
    hit.add_argument("--debounce-ms", type=int, default=None)
    hit.add_argument("points", nargs="+")
    return parser


def _add_layout_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--keymap", type=Path, default=None)
    parser.add_argument("--width", type=int, default=None)
    parser.add_argument("--height", type=int, default=None)


def _resolve_settings(args: argparse.Namespace) -> dict[str, Any]:
    settings: dict[str, Any] = {
        "keymap": None,
        "width": None,
        "height": None,
        "debounce_ms": DEFAULT_DEBOUNCE_MS,
        "style": {},
    }
    if args.config is not None:
        config = load_config(args.config)
        settings.update(
            keymap=config.keymap_path,
            width=config.canvas_width,
            height=config.canvas_height,
            debounce_ms=config.debounce_ms,
            style=dict(config.style),
        )

    if args.keymap is not None:
        settings["keymap"] = args.keymap
    if settings["keymap"] is None:
        raise ValueError("a keymap path or --config is required")

    if getattr(args, "width", None) is not None:
        settings["width"] = args.width
    if getattr(args, "height", None) is not None:
        settings["height"] = args.height
    if args.command != "validate" and (settings["width"] is None or settings["height"] is None):
        raise ValueError("--width and --height (or --config) are required")

    if getattr(args, "debounce_ms", None) is not None:
        settings["debounce_ms"] = args.debounce_ms
    style: Mapping[str, Any] = settings["style"]
    overrides = dict(style)
    if getattr(args, "font_family", None) is not None:
        overrides["font_family"] = args.font_family
    if getattr(args, "font_size", None) is not None:
        overrides["font_size_px"] = args.font_size
    settings["style"] = overrides
    return settings


if __name__ == "__main__":
    raise SystemExit(main())
