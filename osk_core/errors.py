from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .layout import Key


class OSKError(Exception):
    """Base class for recoverable keyboard failures."""

    code = "osk_error"


class KeymapValidationError(OSKError, ValueError):
    code = "validation_error"


class NegativeMarginError(KeymapValidationError):
    code = "negative_margin"


class ExcessiveMarginsError(KeymapValidationError):
    code = "excessive_margins"


class InvalidUnitSizeError(KeymapValidationError):
    code = "invalid_unit_size"


class RowWidthExceededError(KeymapValidationError):
    code = "row_width_exceeded"

    def __init__(self, row_index: int, width_sum: float, total_key_width: float) -> None:
        super().__init__(f"key widths sum {width_sum:g} exceeds {total_key_width:g} in row {row_index}")
        self.row_index = row_index
        self.width_sum = width_sum
        self.total_key_width = total_key_width


class TotalHeightExceededError(KeymapValidationError):
    code = "total_height_exceeded"

    def __init__(self, height_sum: float, total_row_height: float) -> None:
        super().__init__(f"row heights sum {height_sum:g} exceeds {total_row_height:g}")
        self.height_sum = height_sum
        self.total_row_height = total_row_height


class NonPositiveTotalError(KeymapValidationError):
    code = "non_positive_total"


class HitTestError(OSKError):
    code = "hit_test_error"


class OutOfBoundsError(HitTestError):
    code = "out_of_bounds"

    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"point ({x}, {y}) is outside the keyboard")
        self.x = x
        self.y = y


class KeyNotFoundError(HitTestError):
    code = "key_not_found"

    def __init__(self, x: int, y: int) -> None:
        super().__init__(f"no key at ({x}, {y})")
        self.x = x
        self.y = y


class PaddingHitError(HitTestError):
    code = "padding_hit"

    def __init__(self, key: Key) -> None:
        super().__init__(f"padding at ({key.x}, {key.y}) is not interactive")
        self.key = key


class DebounceSuppressedError(HitTestError):
    code = "debounce_suppressed"

    def __init__(self, key: Key, elapsed_ns: int) -> None:
        super().__init__(f"repeat press suppressed after {elapsed_ns / 1_000_000:.1f}ms")
        self.key = key
        self.elapsed_ns = elapsed_ns
