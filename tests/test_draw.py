"""
gfxedit test suite
hexdraw tests
"""

import unittest

import gfxedit
from gfxedit import GlyphStatus
from gfxedit.constants import UNASSIGNED
from gfxedit.storage import get_stringio

from .base import BaseTester


class TestDraw(BaseTester):
    """Test reading hexdraw files."""

    def _load(self, text, **kwargs):
        return gfxedit.load(get_stringio(text), format='hexdraw', **kwargs)

    def test_sample(self):
        """Test importing a hexdraw file."""
        font = gfxedit.load(self.font_path / 'sample.draw')
        self.assertEqual([_g.code for _g in font.glyphs], [0x41, 0x42, 0x43])
        self.assertEqual(font.y_advance, 2)
        glyph_a = font.get_glyph(0x41)
        self.assertEqual(glyph_a.points, {(1, -2), (0, -1), (1, -1), (2, -1)})
        self.assertEqual(glyph_a.x_advance, 3)
        self.assertEqual(font.get_glyph(0x42).x_advance, 2)
        self.assertEqual(len(font.get_glyph(0x43)), 0)
        self.assertTrue(font.is_flat())

    def test_rows_on_separate_lines(self):
        """Test a label without a bitmap on the same line."""
        font = self._load('0030:\n\t@-\n\t-@\n')
        self.assertEqual(font.glyphs[0].points, {(0, -2), (1, -1)})

    def test_different_heights(self):
        """Test glyphs are placed from the top of the tallest."""
        font = self._load('0030:\t#\n0031:\t#\n\t#\n\t#\n')
        self.assertEqual(font.y_advance, 3)
        self.assertEqual(font.get_glyph(0x30).points, {(0, -3)})
        self.assertEqual(font.get_glyph(0x31).y_offset, -3)

    def test_bad_codes(self):
        """Test duplicate and unreadable codes are kept and marked."""
        with self.assertLogs(level='WARNING'):
            font = self._load('0041:\t#\n0041:\t##\nzz:\t###\n')
        self.assertEqual(
            [(_g.code, _g.status) for _g in font.glyphs],
            [
                (0x41, GlyphStatus.NORMAL),
                (UNASSIGNED, GlyphStatus.ERROR),
                (UNASSIGNED, GlyphStatus.ERROR),
            ]
        )

    def test_flatten_option(self):
        """Test flattening on load, with fillers at the mean advance."""
        with self.assertLogs(level='WARNING'):
            font = self._load('0041:\t#\n0041:\t##\n0044:\t###\n', flatten=True)
        self.assertEqual(
            [_g.code for _g in font.glyphs], [0x40, 0x41, 0x42, 0x43, 0x44]
        )
        self.assertEqual([_g.x_advance for _g in font.glyphs], [2, 1, 2, 2, 3])
        self.assertEqual(font.glyphs[2].status, GlyphStatus.INSERTED)


if __name__ == '__main__':
    unittest.main()
