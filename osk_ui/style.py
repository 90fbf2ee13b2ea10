from __future__ import annotations

from dataclasses import dataclass, fields, replace
import re
from typing import Any, Mapping

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")

RGBA = tuple[int, int, int, int]


def hex_to_rgba(value: str) -> RGBA:
    """Parse `#RRGGBB` or `#RRGGBBAA`; alpha defaults to opaque."""

    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ValueError(f"invalid hex color: {value!r}")
    digits = value[1:]
    alpha = int(digits[6:8], 16) if len(digits) == 8 else 255
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16), alpha)


@dataclass(frozen=True)
class StyleTokens:
    """Colors and font used to paint a compiled keyboard."""

    background: str = "#F0F0F0"
    key_fill: str = "#FFFFFF"
    key_stroke: str = "#000000"
    label: str = "#000000"
    stroke_px: int = 1
    font_family: str = "DejaVu Sans"
    font_size_px: float = 36.0

    def __post_init__(self) -> None:
        for name in ("background", "key_fill", "key_stroke", "label"):
            try:
                hex_to_rgba(getattr(self, name))
            except ValueError as exc:
                raise ValueError(f"style `{name}`: {exc}") from exc
        if isinstance(self.stroke_px, bool) or not isinstance(self.stroke_px, int) or self.stroke_px < 0:
            raise ValueError("style `stroke_px` must be a non-negative integer")
        if not isinstance(self.font_family, str) or not self.font_family.strip():
            raise ValueError("style `font_family` must be a non-empty string")
        if isinstance(self.font_size_px, bool) or not isinstance(self.font_size_px, (int, float)):
            raise ValueError("style `font_size_px` must be a number")
        if not self.font_size_px > 0:
            raise ValueError("style `font_size_px` must be > 0")

    def colors(self) -> dict[str, RGBA]:
        return {
            "background": hex_to_rgba(self.background),
            "key_fill": hex_to_rgba(self.key_fill),
            "key_stroke": hex_to_rgba(self.key_stroke),
            "label": hex_to_rgba(self.label),
        }


DEFAULT_STYLE = StyleTokens()


def resolve_style(overrides: Mapping[str, Any] | None = None) -> StyleTokens:
    """Apply `[style]` overrides from osk.toml or the CLI to the default style."""

    if not overrides:
        return DEFAULT_STYLE
    known = {f.name for f in fields(StyleTokens)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"unknown style token(s): {', '.join(unknown)}")
    return replace(DEFAULT_STYLE, **overrides)
