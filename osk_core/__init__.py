"""Keymap model, layout compiler and hit-test engine for the on-screen keyboard."""

from .config import OSKConfig, load_config
from .errors import (
    DebounceSuppressedError,
    ExcessiveMarginsError,
    HitTestError,
    InvalidUnitSizeError,
    KeyNotFoundError,
    KeymapValidationError,
    NegativeMarginError,
    NonPositiveTotalError,
    OSKError,
    OutOfBoundsError,
    PaddingHitError,
    RowWidthExceededError,
    TotalHeightExceededError,
)
from .hit_test import DEFAULT_DEBOUNCE_MS, DebounceState, HitTestEngine, HitTestResult
from .keymap import (
    KeyMap,
    KeySpec,
    KeyType,
    KeyboardMargins,
    RowSpec,
    keymap_from_dict,
    keymap_schema,
    keymap_to_dict,
    load_keymap,
)
from .layout import Key, Row, VirtKeyboard, build_keyboard, compile_keymap, round_px
from .validation import check_keymap, validate_keymap

__all__ = [
    "DEFAULT_DEBOUNCE_MS",
    "DebounceState",
    "DebounceSuppressedError",
    "ExcessiveMarginsError",
    "HitTestEngine",
    "HitTestError",
    "HitTestResult",
    "InvalidUnitSizeError",
    "Key",
    "KeyMap",
    "KeyNotFoundError",
    "KeySpec",
    "KeyType",
    "KeyboardMargins",
    "KeymapValidationError",
    "NegativeMarginError",
    "NonPositiveTotalError",
    "OSKConfig",
    "OSKError",
    "OutOfBoundsError",
    "PaddingHitError",
    "Row",
    "RowSpec",
    "RowWidthExceededError",
    "TotalHeightExceededError",
    "VirtKeyboard",
    "build_keyboard",
    "check_keymap",
    "compile_keymap",
    "keymap_from_dict",
    "keymap_schema",
    "keymap_to_dict",
    "load_config",
    "load_keymap",
    "round_px",
    "validate_keymap",
]
