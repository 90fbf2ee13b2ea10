from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from osk_core.layout import VirtKeyboard

from .labels import key_label
from .raster.canvas import fill_rect, new_canvas, stroke_rect
from .raster.draw_text import draw_text_centered
from .style import DEFAULT_STYLE, StyleTokens

LOGGER = logging.getLogger(__name__)


def render_keyboard(keyboard: VirtKeyboard, style: StyleTokens | None = None) -> np.ndarray:
    """Paint `keyboard` into a keyboard-sized RGBA array.

    The keyboard origin maps to pixel (0, 0). Padding keys are left as
    background.
    """

    style = style or DEFAULT_STYLE
    colors = style.colors()

    canvas = new_canvas(keyboard.width, keyboard.height, colors["background"])
    ox, oy = keyboard.origin
    painted = 0
    for key in keyboard.iter_keys():
        if not key.is_key:
            continue
        kx = key.x - ox
        ky = key.y - oy
        fill_rect(canvas, kx, ky, key.width, key.height, colors["key_fill"])
        stroke_rect(canvas, kx, ky, key.width, key.height, colors["key_stroke"], style.stroke_px)
        draw_text_centered(
            canvas,
            kx + key.width // 2,
            ky + key.height // 2,
            key_label(key),
            colors["label"],
            font_family=style.font_family,
            font_size_px=style.font_size_px,
        )
        painted += 1
    LOGGER.debug("rendered %d keys on %dx%d canvas", painted, keyboard.width, keyboard.height)
    return canvas


def save_keyboard_png(
    keyboard: VirtKeyboard,
    out_path: str | Path,
    style: StyleTokens | None = None,
) -> Path:
    path = Path(out_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    frame = render_keyboard(keyboard, style)
    Image.fromarray(frame).save(path)
    return path
