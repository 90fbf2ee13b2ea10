from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
import tomllib
from typing import Any, Mapping

from .hit_test import DEFAULT_DEBOUNCE_MS


@dataclass(frozen=True)
class OSKConfig:
    keymap_path: Path
    canvas_width: int
    canvas_height: int
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    style: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("canvas_width and canvas_height must be > 0")
        if self.debounce_ms < 0:
            raise ValueError("debounce_ms must be >= 0")


def load_config(config_path: str | Path) -> OSKConfig:
    """Load an `osk.toml` file. A relative `keymap` resolves against the file's folder."""

    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"config not found: {path}")
    with path.open("rb") as f:
        raw = tomllib.load(f)
    try:
        keymap = str(raw["keymap"])
        canvas_width = _coerce_int(raw["canvas_width"], "canvas_width")
        canvas_height = _coerce_int(raw["canvas_height"], "canvas_height")
    except KeyError as exc:
        raise ValueError(f"config missing required field: {exc.args[0]}") from exc
    debounce_ms = _coerce_int(raw.get("debounce_ms", DEFAULT_DEBOUNCE_MS), "debounce_ms")
    style = raw.get("style", {})
    if not isinstance(style, Mapping):
        raise ValueError("`style` must be a table")

    keymap_path = Path(keymap)
    if not keymap_path.is_absolute():
        keymap_path = path.parent / keymap_path
    return OSKConfig(
        keymap_path=keymap_path,
        canvas_width=canvas_width,
        canvas_height=canvas_height,
        debounce_ms=debounce_ms,
        style=dict(style),
    )


def _coerce_int(raw: object, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"`{field_name}` must be an integer")
    return raw
