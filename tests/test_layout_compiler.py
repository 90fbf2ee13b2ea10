from __future__ import annotations

import unittest
from pathlib import Path

from osk_core.errors import RowWidthExceededError
from osk_core.hit_test import HitTestEngine
from osk_core.keymap import KeyboardMargins, KeyMap, KeySpec, KeyType, RowSpec, load_keymap
from osk_core.layout import build_keyboard, compile_keymap, round_px

REPO_ROOT = Path(__file__).resolve().parents[1]


def _two_row_keymap(margins: KeyboardMargins = KeyboardMargins()) -> KeyMap:
    letters = tuple(KeySpec(key_width=1, char=c) for c in "qwertyuiop")
    bottom = (
        KeySpec(key_width=1.5, is_padding=True),
        KeySpec(key_width=7, char=" "),
        KeySpec(key_width=1.5, key_type=KeyType.CARRIAGE_RETURN),
    )
    return KeyMap(
        total_key_width=10,
        total_row_height=2,
        rows=(RowSpec(row_height=1, keys=letters), RowSpec(row_height=1, keys=bottom)),
        margins=margins,
    )


class RoundPxTests(unittest.TestCase):
    def test_halves_round_away_from_zero(self) -> None:
        self.assertEqual(round_px(0.5), 1)
        self.assertEqual(round_px(2.5), 3)
        self.assertEqual(round_px(-2.5), -3)
        self.assertEqual(round_px(2.49), 2)
        self.assertEqual(round_px(0.0), 0)


class LayoutCompilerTests(unittest.TestCase):
    def test_compiles_without_margins(self) -> None:
        kb = compile_keymap(_two_row_keymap(), 1000, 400)
        self.assertEqual(kb.origin, (0, 0))
        self.assertEqual((kb.width, kb.height), (1000, 400))
        self.assertEqual((kb.key_unit_px, kb.row_unit_px), (100, 200))

        top, bottom = kb.rows
        self.assertEqual((top.y, top.height), (0, 200))
        self.assertEqual([k.x for k in top.keys], list(range(0, 1000, 100)))
        self.assertTrue(all(k.width == 100 for k in top.keys))
        self.assertEqual(top.keys[0].char, "q")

        pad, space, ret = bottom.keys
        self.assertEqual((bottom.y, bottom.height), (200, 200))
        self.assertEqual((pad.x, pad.width, pad.is_key), (0, 150, False))
        self.assertEqual((space.x, space.width, space.key_code), (150, 700, ord(" ")))
        self.assertEqual((ret.x, ret.width, ret.key_type, ret.key_code), (850, 150, KeyType.CARRIAGE_RETURN, 0))
        self.assertTrue(all(k.height == 200 and k.y == 200 for k in bottom.keys))

    def test_margins_move_origin_and_shrink_drawable_area(self) -> None:
        kb = compile_keymap(_two_row_keymap(KeyboardMargins(top=0.1, left=0.05, right=0.05)), 1000, 400)
        self.assertEqual(kb.origin, (50, 40))
        self.assertEqual((kb.width, kb.height), (900, 360))
        self.assertEqual((kb.key_unit_px, kb.row_unit_px), (90, 180))
        self.assertEqual(kb.rows[0].keys[0].x, 50)
        self.assertEqual(kb.rows[0].y, 40)
        self.assertEqual(kb.rows[1].y, 220)

    def test_margin_pixels_round_half_away_from_zero(self) -> None:
        km = KeyMap(
            total_key_width=1,
            total_row_height=1,
            rows=(RowSpec(row_height=1, keys=(KeySpec(key_width=1, char="a"),)),),
            margins=KeyboardMargins(left=0.1, top=0.1),
        )
        kb = compile_keymap(km, 25, 45)
        self.assertEqual(kb.origin, (3, 5))
        self.assertEqual((kb.width, kb.height), (22, 40))

    def test_unit_scale_is_truncated_to_whole_pixels(self) -> None:
        kb = compile_keymap(_two_row_keymap(), 1009, 401)
        self.assertEqual((kb.key_unit_px, kb.row_unit_px), (100, 200))
        self.assertEqual(kb.rows[0].keys[-1].right, 1000)
        self.assertLess(kb.rows[-1].bottom, kb.origin[1] + kb.height)

    def test_fractional_key_width_truncates(self) -> None:
        km = KeyMap(
            total_key_width=10,
            total_row_height=1,
            rows=(RowSpec(row_height=1, keys=(KeySpec(key_width=0.5, char="a"), KeySpec(key_width=1, char="b"))),),
        )
        kb = compile_keymap(km, 50, 10)
        a, b = kb.rows[0].keys
        self.assertEqual(kb.key_unit_px, 5)
        self.assertEqual(a.width, 2)
        self.assertEqual(b.x, 2)

    def test_fractional_rows_and_keys_stay_inside_drawable_area(self) -> None:
        halves = tuple(KeySpec(key_width=0.5, char=c) for c in "abc")
        km = KeyMap(
            total_key_width=1.5,
            total_row_height=1.5,
            rows=tuple(RowSpec(row_height=0.5, keys=halves) for _ in range(3)),
        )
        kb = build_keyboard(km, 101, 101)
        ox, oy = kb.origin
        self.assertEqual([r.height for r in kb.rows], [33, 33, 33])
        self.assertLessEqual(sum(r.height for r in kb.rows), kb.height)
        self.assertLessEqual(kb.rows[-1].bottom, oy + kb.height)
        for row in kb.rows:
            self.assertLessEqual(row.keys[-1].right, ox + kb.width)
        last = kb.rows[-1].keys[-1]
        engine = HitTestEngine(kb)
        self.assertEqual(engine.press(last.right, last.bottom, 0).char, "c")

    def test_keys_tile_each_row_without_gaps(self) -> None:
        km = load_keymap(REPO_ROOT / "keymaps" / "keymap-en_us.json")
        for size in ((1080, 1440), (800, 600), (333, 777)):
            kb = build_keyboard(km, *size)
            for row in kb.rows:
                with self.subTest(size=size, row_y=row.y):
                    self.assertEqual(row.keys[0].x, kb.origin[0])
                    for left, right in zip(row.keys, row.keys[1:]):
                        self.assertEqual(left.right, right.x)

    def test_rows_stack_within_keyboard_bounds(self) -> None:
        km = load_keymap(REPO_ROOT / "keymaps" / "keymap-en_us.json")
        for size in ((1080, 1440), (800, 600), (333, 777)):
            kb = build_keyboard(km, *size)
            with self.subTest(size=size):
                _, oy = kb.origin
                self.assertEqual(kb.rows[0].y, oy)
                for upper, lower in zip(kb.rows, kb.rows[1:]):
                    self.assertEqual(upper.bottom, lower.y)
                self.assertLessEqual(sum(r.height for r in kb.rows), kb.height)
                self.assertLessEqual(kb.rows[-1].bottom, oy + kb.height)

    def test_compilation_is_deterministic(self) -> None:
        km = load_keymap(REPO_ROOT / "keymaps" / "keymap-en_us.json")
        self.assertEqual(compile_keymap(km, 1080, 1440), compile_keymap(km, 1080, 1440))

    def test_bundled_keymap_geometry(self) -> None:
        kb = build_keyboard(load_keymap(REPO_ROOT / "keymaps" / "keymap-en_us.json"), 1080, 1440)
        self.assertEqual(kb.origin, (22, 864))
        self.assertEqual((kb.width, kb.height), (1036, 576))
        self.assertEqual((kb.key_unit_px, kb.row_unit_px), (94, 144))
        self.assertEqual(kb.rows[1].keys[0].width, 47)
        self.assertFalse(kb.rows[1].keys[0].is_key)

    def test_only_first_codepoint_is_kept(self) -> None:
        km = KeyMap(
            total_key_width=2,
            total_row_height=1,
            rows=(
                RowSpec(
                    row_height=1,
                    keys=(
                        KeySpec(key_width=1, char="éx"),
                        KeySpec(key_width=1, key_type=KeyType.ALT, char="a"),
                    ),
                ),
            ),
        )
        first, alt = compile_keymap(km, 20, 10).rows[0].keys
        self.assertEqual(first.key_code, ord("é"))
        self.assertEqual(first.char, "é")
        self.assertEqual(alt.key_code, 0)
        self.assertEqual(alt.char, "")

    def test_empty_char_gives_zero_code(self) -> None:
        km = KeyMap(
            total_key_width=1,
            total_row_height=1,
            rows=(RowSpec(row_height=1, keys=(KeySpec(key_width=1),)),),
        )
        self.assertEqual(compile_keymap(km, 10, 10).rows[0].keys[0].key_code, 0)

    def test_rejects_non_positive_canvas(self) -> None:
        with self.assertRaises(ValueError):
            compile_keymap(_two_row_keymap(), 0, 100)

    def test_build_keyboard_validates_first(self) -> None:
        km = KeyMap(
            total_key_width=10,
            total_row_height=1,
            rows=(RowSpec(row_height=1, keys=(KeySpec(key_width=6), KeySpec(key_width=6))),),
        )
        with self.assertRaises(RowWidthExceededError):
            build_keyboard(km, 100, 100)

    def test_to_dict_describes_rows_and_keys(self) -> None:
        described = compile_keymap(_two_row_keymap(), 1000, 400).to_dict()
        self.assertEqual(described["origin"], [0, 0])
        self.assertEqual(described["rows"][1]["keys"][2]["key_type"], "carriage_return")
        self.assertFalse(described["rows"][1]["keys"][0]["is_key"])


if __name__ == "__main__":
    unittest.main()
