from __future__ import annotations

from osk_core.keymap import KeyType
from osk_core.layout import Key

SPECIAL_KEY_LABELS: dict[KeyType, str] = {
    KeyType.ALT: "ALT",
    KeyType.BACKSPACE: "BKSP",
    KeyType.CAPS_LOCK: "CPLK",
    KeyType.CARRIAGE_RETURN: "RET",
    KeyType.CONTROL: "CTRL",
    KeyType.DELETE: "DEL",
}


def special_key_label(key_type: KeyType) -> str:
    """Short mnemonic for a non-character key; empty for standard keys."""

    return SPECIAL_KEY_LABELS.get(key_type, "")


def key_label(key: Key) -> str:
    if key.key_type == KeyType.STANDARD_CHAR:
        return key.char.upper()
    return special_key_label(key.key_type)
