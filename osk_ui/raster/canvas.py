from __future__ import annotations

import numpy as np

from osk_ui.style import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width and height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def fill_rect(dst: np.ndarray, x: int, y: int, w: int, h: int, color: RGBA) -> None:
    if w <= 0 or h <= 0:
        return
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return
    patch = dst[y0:y1, x0:x1]
    a = color[3] / 255.0
    if a >= 1.0:
        patch[:, :] = np.asarray(color, dtype=np.uint8)
        return
    if a <= 0.0:
        return
    inv = 1.0 - a
    patch[:, :, :3] = (np.asarray(color[0:3], dtype=np.float32) * a + patch[:, :, :3].astype(np.float32) * inv).astype(np.uint8)
    patch[:, :, 3] = 255


def stroke_rect(dst: np.ndarray, x: int, y: int, w: int, h: int, color: RGBA, thickness: int = 1) -> None:
    """Outline the rectangle with `thickness` px drawn inside its bounds."""

    if thickness <= 0 or w <= 0 or h <= 0:
        return
    t = min(thickness, w, h)
    fill_rect(dst, x, y, w, t, color)
    fill_rect(dst, x, y + h - t, w, t, color)
    fill_rect(dst, x, y, t, h, color)
    fill_rect(dst, x + w - t, y, t, h, color)
