"""
gfxedit test suite
yaff tests
"""

import unittest

import gfxedit
from gfxedit import GlyphStatus, FontProperties
from gfxedit.constants import UNASSIGNED
from gfxedit.storage import get_stringio

from .base import BaseTester


class TestYaff(BaseTester):
    """Test reading yaff files."""

    def _load(self, text, **kwargs):
        return gfxedit.load(get_stringio(text), format='yaff', **kwargs)

    def test_sample(self):
        """Test importing a yaff file."""
        font = gfxedit.load(self.font_path / 'sample.yaff')
        self.assertEqual([_g.code for _g in font.glyphs], [0x41, 0x42, 0x43])
        self.assertEqual(font.y_advance, 3)
        self.assertEqual(
            font.properties,
            FontProperties(font_name='Sample Yaff', pixel_size=8, ascent=6, descent=2)
        )
        glyph_a = font.get_glyph(0x41)
        self.assertEqual(glyph_a.points, {(1, -3), (0, -2), (1, -2), (2, -2)})
        self.assertEqual(glyph_a.x_advance, 4)
        glyph_b = font.get_glyph(0x42)
        self.assertEqual(glyph_b.points, {(1, -3), (2, -3), (1, -2), (2, -2)})
        self.assertEqual(glyph_b.x_advance, 3)
        self.assertEqual(len(font.get_glyph(0x43)), 0)
        self.assertEqual(font.get_glyph(0x43).x_advance, 0)
        self.assertTrue(font.is_flat())

    def test_labels(self):
        """Test decimal, octal, unicode and character labels."""
        font = self._load(
            '65:\n    @\n0o102:\n    @\nu+0043:\n    @\n\'D\':\n    @\n\':\':\n    @\n'
        )
        self.assertEqual(
            [_g.code for _g in font.glyphs], [0x3A, 0x41, 0x42, 0x43, 0x44]
        )

    def test_label_priority(self):
        """Test a character code label wins over unicode and character labels."""
        font = self._load("'A':\nu+0042:\n0x43:\n    @\n")
        self.assertEqual(font.glyphs[0].code, 0x43)

    def test_shift_up(self):
        """Test the line height from shift-up and the bitmap height."""
        font = self._load('shift-up: 1\n0x30:\n    @\n    @\n')
        self.assertEqual(font.y_advance, 3)
        self.assertEqual(font.glyphs[0].points, {(0, -3), (0, -2)})

    def test_default_line_height(self):
        """Test the line height defaults to the tallest bitmap."""
        font = self._load('0x30:\n    @.\n0x31:\n    .@\n    @.\n')
        self.assertEqual(font.y_advance, 2)
        self.assertEqual(font.get_glyph(0x30).points, {(0, -2)})

    def test_negative_bearings(self):
        """Test bearings cannot make the advance negative."""
        font = self._load('0x30:\n    @\n    left-bearing: -1\n    right-bearing: -3\n')
        glyph, = font.glyphs
        self.assertEqual(glyph.points, {(-1, -1)})
        self.assertEqual(glyph.x_advance, 0)

    def test_multiline_property(self):
        """Test font properties with values on the following lines."""
        font = self._load('notice:\n    some text\n    more text\nname: Test\n0x41:\n    @\n')
        self.assertEqual(font.properties.font_name, 'Test')
        self.assertEqual(len(font), 1)

    def test_bad_codes(self):
        """Test duplicate and unusable codes are kept and marked."""
        with self.assertLogs(level='WARNING'):
            font = self._load('0x41:\n    @\n0x41:\n    @@\nzz:\n    @@@\n')
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
            font = self._load('0x41:\n    @\n0x41:\n    @@\n0x44:\n    @@@\n', flatten=True)
        self.assertEqual(
            [_g.code for _g in font.glyphs], [0x40, 0x41, 0x42, 0x43, 0x44]
        )
        self.assertEqual([_g.x_advance for _g in font.glyphs], [2, 1, 2, 2, 3])
        self.assertEqual(font.glyphs[2].status, GlyphStatus.INSERTED)


if __name__ == '__main__':
    unittest.main()
