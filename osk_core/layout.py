from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Any, Iterator

from .keymap import KeyMap, KeyType
from .validation import validate_keymap

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Key:
    """One compiled key. Keys share the pixel height of their row."""

    x: int
    y: int
    width: int
    height: int
    is_key: bool
    key_type: KeyType
    key_code: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def char(self) -> str:
        return chr(self.key_code) if self.key_code else ""


@dataclass(frozen=True)
class Row:
    y: int
    height: int
    keys: tuple[Key, ...] = ()

    @property
    def bottom(self) -> int:
        return self.y + self.height


@dataclass(frozen=True)
class VirtKeyboard:
    """A keymap resolved to absolute pixel geometry for one canvas size."""

    origin: tuple[int, int]
    width: int
    height: int
    rows: tuple[Row, ...]
    key_unit_px: int
    row_unit_px: int

    def iter_keys(self) -> Iterator[Key]:
        for row in self.rows:
            yield from row.keys

    def contains(self, x: int, y: int) -> bool:
        ox, oy = self.origin
        return ox <= x <= ox + self.width and oy <= y <= oy + self.height

    def to_dict(self) -> dict[str, Any]:
        return {
            "origin": list(self.origin),
            "width": self.width,
            "height": self.height,
            "key_unit_px": self.key_unit_px,
            "row_unit_px": self.row_unit_px,
            "rows": [
                {
                    "y": row.y,
                    "height": row.height,
                    "keys": [
                        {
                            "x": key.x,
                            "width": key.width,
                            "is_key": key.is_key,
                            "key_type": key.key_type.name.lower(),
                            "char": key.char,
                        }
                        for key in row.keys
                    ],
                }
                for row in self.rows
            ],
        }


def round_px(value: float) -> int:
    """Round to the nearest pixel, halves away from zero."""

    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def compile_keymap(keymap: KeyMap, canvas_width: int, canvas_height: int) -> VirtKeyboard:
    """Lay out a validated keymap on a `canvas_width` x `canvas_height` canvas.

    Callers must run `validate_keymap` first; `build_keyboard` does both.
    """

    if canvas_width <= 0 or canvas_height <= 0:
        raise ValueError("canvas_width and canvas_height must be > 0")

    margins = keymap.margins
    px_top = round_px(canvas_height * margins.top)
    px_bottom = round_px(canvas_height * margins.bottom)
    px_left = round_px(canvas_width * margins.left)
    px_right = round_px(canvas_width * margins.right)

    width = canvas_width - px_left - px_right
    height = canvas_height - px_top - px_bottom
    # Whole pixels per unit; the keyboard may end short of the drawable area.
    # Row heights and key widths truncate so their sums never overrun it.
    key_unit_px = math.floor(width / keymap.total_key_width)
    row_unit_px = math.floor(height / keymap.total_row_height)

    rows: list[Row] = []
    cur_y = px_top
    for row_spec in keymap.rows:
        row_height = int(row_unit_px * row_spec.row_height)
        keys: list[Key] = []
        cur_x = px_left
        for key_spec in row_spec.keys:
            key_width = int(key_unit_px * key_spec.key_width)
            key_code = 0
            if key_spec.key_type == KeyType.STANDARD_CHAR and key_spec.char:
                if len(key_spec.char) > 1:
                    LOGGER.debug("key char %r truncated to its first codepoint", key_spec.char)
                key_code = ord(key_spec.char[0])
            keys.append(
                Key(
                    x=cur_x,
                    y=cur_y,
                    width=key_width,
                    height=row_height,
                    is_key=not key_spec.is_padding,
                    key_type=key_spec.key_type,
                    key_code=key_code,
                )
            )
            cur_x += key_width
        rows.append(Row(y=cur_y, height=row_height, keys=tuple(keys)))
        cur_y += row_height

    keyboard = VirtKeyboard(
        origin=(px_left, px_top),
        width=width,
        height=height,
        rows=tuple(rows),
        key_unit_px=key_unit_px,
        row_unit_px=row_unit_px,
    )
    LOGGER.debug(
        "compiled keymap lang=%r: origin=%s size=%dx%d units=%dpx/%dpx rows=%d",
        keymap.lang,
        keyboard.origin,
        width,
        height,
        key_unit_px,
        row_unit_px,
        len(rows),
    )
    return keyboard


def build_keyboard(keymap: KeyMap, canvas_width: int, canvas_height: int) -> VirtKeyboard:
    validate_keymap(keymap)
    return compile_keymap(keymap, canvas_width, canvas_height)
