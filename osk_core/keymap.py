from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
import json
import logging
from pathlib import Path
from typing import Any, Mapping

LOGGER = logging.getLogger(__name__)


class KeyType(IntEnum):
    STANDARD_CHAR = 0
    CARRIAGE_RETURN = 1
    BACKSPACE = 2
    DELETE = 3
    CAPS_LOCK = 4
    CONTROL = 5
    ALT = 6


@dataclass(frozen=True)
class KeyboardMargins:
    """Border reserved around the keyboard, as fractions of the canvas."""

    top: float = 0.0
    bottom: float = 0.0
    left: float = 0.0
    right: float = 0.0


@dataclass(frozen=True)
class KeySpec:
    key_width: float
    key_type: KeyType = KeyType.STANDARD_CHAR
    char: str = ""
    is_padding: bool = False


@dataclass(frozen=True)
class RowSpec:
    row_height: float
    keys: tuple[KeySpec, ...] = ()


@dataclass(frozen=True)
class KeyMap:
    """Resolution-independent keyboard description.

    Key widths and row heights are abstract units; `total_key_width` and
    `total_row_height` are the basis those units are normalized against.
    """

    total_key_width: float
    total_row_height: float
    rows: tuple[RowSpec, ...] = ()
    margins: KeyboardMargins = KeyboardMargins()
    lang: str = ""


KEYMAP_JSON_SCHEMA: dict[str, object] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "OSK Keymap",
    "type": "object",
    "required": ["totalKeyWidth", "totalRowHeight", "rows"],
    "properties": {
        "lang": {"type": "string"},
        "kbMargins": {
            "type": "object",
            "properties": {
                "top": {"type": "number", "minimum": 0},
                "bottom": {"type": "number", "minimum": 0},
                "left": {"type": "number", "minimum": 0},
                "right": {"type": "number", "minimum": 0},
            },
        },
        "totalKeyWidth": {"type": "number", "exclusiveMinimum": 0},
        "totalRowHeight": {"type": "number", "exclusiveMinimum": 0},
        "rows": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["rowHeight", "keys"],
                "properties": {
                    "rowHeight": {"type": "number", "minimum": 0},
                    "keys": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "required": ["keyWidth"],
                            "properties": {
                                "isPadding": {"type": "boolean"},
                                "keyType": {"type": "integer", "enum": [int(t) for t in KeyType]},
                                "keyWidth": {"type": "number", "minimum": 0},
                                "char": {"type": "string"},
                            },
                        },
                    },
                },
            },
        },
    },
}


def keymap_schema() -> dict[str, object]:
    return json.loads(json.dumps(KEYMAP_JSON_SCHEMA))


def keymap_from_dict(payload: Mapping[str, object]) -> KeyMap:
    """Build a KeyMap from the deserialized JSON keymap format."""

    try:
        total_key_width = _coerce_number(payload["totalKeyWidth"], "totalKeyWidth")
        total_row_height = _coerce_number(payload["totalRowHeight"], "totalRowHeight")
    except KeyError as exc:
        raise ValueError(f"keymap missing required field: {exc.args[0]}") from exc

    raw_margins = payload.get("kbMargins", {})
    if not isinstance(raw_margins, Mapping):
        raise TypeError("`kbMargins` must be a mapping")
    margins = KeyboardMargins(
        top=_coerce_number(raw_margins.get("top", 0.0), "kbMargins.top"),
        bottom=_coerce_number(raw_margins.get("bottom", 0.0), "kbMargins.bottom"),
        left=_coerce_number(raw_margins.get("left", 0.0), "kbMargins.left"),
        right=_coerce_number(raw_margins.get("right", 0.0), "kbMargins.right"),
    )

    raw_rows = payload.get("rows")
    if not isinstance(raw_rows, list):
        raise TypeError("`rows` must be a list")
    rows: list[RowSpec] = []
    for row_index, raw_row in enumerate(raw_rows):
        if not isinstance(raw_row, Mapping):
            raise TypeError("Each row must be a mapping")
        raw_keys = raw_row.get("keys", [])
        if not isinstance(raw_keys, list):
            raise TypeError(f"`rows[{row_index}].keys` must be a list")
        keys = tuple(_key_from_dict(raw_key, row_index) for raw_key in raw_keys)
        rows.append(
            RowSpec(
                row_height=_coerce_number(raw_row.get("rowHeight"), f"rows[{row_index}].rowHeight"),
                keys=keys,
            )
        )

    return KeyMap(
        lang=str(payload.get("lang", "")),
        margins=margins,
        total_key_width=total_key_width,
        total_row_height=total_row_height,
        rows=tuple(rows),
    )


def load_keymap(keymap_path: str | Path) -> KeyMap:
    path = Path(keymap_path)
    payload = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(payload, Mapping):
        raise TypeError("Keymap payload must be a JSON object")
    keymap = keymap_from_dict(payload)
    LOGGER.debug("loaded keymap %s (lang=%r, rows=%d)", path, keymap.lang, len(keymap.rows))
    return keymap


def keymap_to_dict(keymap: KeyMap) -> dict[str, Any]:
    return {
        "lang": keymap.lang,
        "kbMargins": {
            "top": keymap.margins.top,
            "bottom": keymap.margins.bottom,
            "left": keymap.margins.left,
            "right": keymap.margins.right,
        },
        "totalKeyWidth": keymap.total_key_width,
        "totalRowHeight": keymap.total_row_height,
        "rows": [
            {
                "rowHeight": row.row_height,
                "keys": [
                    {
                        "isPadding": key.is_padding,
                        "keyType": int(key.key_type),
                        "keyWidth": key.key_width,
                        "char": key.char,
                    }
                    for key in row.keys
                ],
            }
            for row in keymap.rows
        ],
    }


def _key_from_dict(raw: object, row_index: int) -> KeySpec:
    if not isinstance(raw, Mapping):
        raise TypeError(f"Each key in row {row_index} must be a mapping")
    raw_type = raw.get("keyType", 0)
    if isinstance(raw_type, bool) or not isinstance(raw_type, int):
        raise TypeError(f"`keyType` must be an integer in row {row_index}")
    try:
        key_type = KeyType(raw_type)
    except ValueError as exc:
        raise ValueError(f"unsupported keyType {raw_type} in row {row_index}") from exc
    return KeySpec(
        is_padding=bool(raw.get("isPadding", False)),
        key_type=key_type,
        key_width=_coerce_number(raw.get("keyWidth"), f"rows[{row_index}].keyWidth"),
        char=str(raw.get("char", "")),
    )


def _coerce_number(raw: object, field_name: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise TypeError(f"`{field_name}` must be a number")
    return float(raw)
