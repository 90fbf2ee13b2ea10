from __future__ import annotations

import math

from .errors import (
    ExcessiveMarginsError,
    InvalidUnitSizeError,
    KeymapValidationError,
    NegativeMarginError,
    NonPositiveTotalError,
    RowWidthExceededError,
    TotalHeightExceededError,
)
from .keymap import KeyMap

MAX_COMBINED_MARGIN = 0.8


def _is_unit(value: float) -> bool:
    return math.isfinite(value) and value >= 0


def validate_keymap(keymap: KeyMap) -> None:
    """Raise the first geometric inconsistency found in `keymap`.

    Checks run in a fixed order: negative or non-finite margins, combined
    margins, per-row unit sizes and key widths, total row height, then the
    normalization totals.
    """

    margins = keymap.margins
    if not all(_is_unit(m) for m in (margins.top, margins.bottom, margins.left, margins.right)):
        raise NegativeMarginError("keymap margins must be finite and >= 0")
    # Both axes must exceed the limit before the keymap is rejected.
    if (margins.top + margins.bottom) > MAX_COMBINED_MARGIN and (
        margins.left + margins.right
    ) > MAX_COMBINED_MARGIN:
        raise ExcessiveMarginsError(f"combined margins exceed {MAX_COMBINED_MARGIN}")

    height_sum = 0.0
    for row_index, row in enumerate(keymap.rows):
        if not _is_unit(row.row_height):
            raise InvalidUnitSizeError(f"rowHeight {row.row_height!r} in row {row_index} must be finite and >= 0")
        for key_index, key in enumerate(row.keys):
            if not _is_unit(key.key_width):
                raise InvalidUnitSizeError(
                    f"keyWidth {key.key_width!r} of key {key_index} in row {row_index} must be finite and >= 0"
                )
        height_sum += row.row_height
        width_sum = sum(key.key_width for key in row.keys)
        if width_sum > keymap.total_key_width:
            raise RowWidthExceededError(row_index, width_sum, keymap.total_key_width)
    if height_sum > keymap.total_row_height:
        raise TotalHeightExceededError(height_sum, keymap.total_row_height)

    totals = (keymap.total_key_width, keymap.total_row_height)
    if not all(math.isfinite(t) and t > 0 for t in totals):
        raise NonPositiveTotalError("totalKeyWidth and totalRowHeight must be finite and > 0")


def check_keymap(keymap: KeyMap) -> KeymapValidationError | None:
    try:
        validate_keymap(keymap)
    except KeymapValidationError as exc:
        return exc
    return None
