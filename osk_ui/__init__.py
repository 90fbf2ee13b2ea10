"""Raster rendering for compiled on-screen keyboards."""

from .labels import SPECIAL_KEY_LABELS, key_label, special_key_label
from .renderer import render_keyboard, save_keyboard_png
from .style import DEFAULT_STYLE, StyleTokens, hex_to_rgba, resolve_style

__all__ = [
    "DEFAULT_STYLE",
    "SPECIAL_KEY_LABELS",
    "StyleTokens",
    "hex_to_rgba",
    "key_label",
    "render_keyboard",
    "resolve_style",
    "save_keyboard_png",
    "special_key_label",
]
