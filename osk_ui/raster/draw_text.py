from __future__ import annotations

from functools import lru_cache
import logging
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from osk_ui.style import RGBA

LOGGER = logging.getLogger(__name__)

FONT_FALLBACK_PATTERNS = (
    "dejavusans",
    "dejavu sans",
    "liberationsans",
    "helvetica",
    "arial",
)

FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/System/Library/Fonts/Supplemental"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


def draw_text_centered(
    dst: np.ndarray,
    cx: int,
    cy: int,
    text: str,
    color: RGBA,
    *,
    font_family: str,
    font_size_px: float,
) -> None:
    """Draw `text` with the center of its ink box at (cx, cy)."""

    if not text:
        return
    font = load_font(font_family, font_size_px)
    mask = _render_mask(text, font)
    h, w = mask.shape
    _blend_mask(dst, cx - w // 2, cy - h // 2, mask, color)


@lru_cache(maxsize=32)
def load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Resolve a font family by file name, or a font file path, to a Pillow font."""

    size = max(1, int(round(font_size_px)))
    font_path = resolve_font_path(font_family)
    if font_path is not None:
        try:
            return ImageFont.truetype(str(font_path), size=size)
        except OSError as exc:
            LOGGER.warning("could not load font %s (%s); using default", font_path, exc)
    else:
        LOGGER.debug("font family %r not found; using default", font_family)
    return ImageFont.load_default(size=size)


def resolve_font_path(font_family: str) -> Path | None:
    direct = Path(font_family).expanduser()
    if direct.suffix.lower() in (".ttf", ".otf", ".ttc") and direct.is_file():
        return direct

    wanted = font_family.strip().lower()
    patterns = ((wanted,) if wanted else ()) + FONT_FALLBACK_PATTERNS
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        exact = [path for path in candidates if path.stem.lower().replace(" ", "") == p]
        if exact:
            return exact[0]
        for path in candidates:
            if p in path.name.lower().replace(" ", ""):
                return path
    return None


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


def _blend_mask(dst: np.ndarray, x: int, y: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = mask[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    src_alpha = (color[3] / 255.0) * cov
    if not np.any(src_alpha > 0):
        return

    patch = dst[y0:y1, x0:x1]
    src_rgb = np.asarray(color[:3], dtype=np.float32).reshape(1, 1, 3)
    dst_rgb = patch[:, :, :3].astype(np.float32)
    out_rgb = src_rgb * src_alpha[:, :, None] + dst_rgb * (1.0 - src_alpha[:, :, None])
    patch[:, :, :3] = np.clip(out_rgb, 0, 255).astype(np.uint8)
    patch[:, :, 3] = 255
