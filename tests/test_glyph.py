"""
gfxedit test suite
glyph tests
"""

import unittest

from gfxedit import Glyph, GlyphStatus, SparseMap
from gfxedit.constants import UNASSIGNED

from .base import BaseTester, glyph_from_text, glyph_to_text


class TestGlyph(BaseTester):
    """Test glyph construction and derived metrics."""

    def test_defaults(self):
        """Test a new glyph is empty and unassigned."""
        glyph = Glyph()
        self.assertEqual(glyph.code, UNASSIGNED)
        self.assertEqual(glyph.x_advance, 0)
        self.assertEqual(glyph.status, GlyphStatus.NORMAL)
        self.assertEqual(
            (glyph.width, glyph.height, glyph.x_offset, glyph.y_offset),
            (0, 0, 0, 0)
        )

    def test_from_bytes(self):
        """Test offsets are applied to the unpacked bitmap."""
        glyph = Glyph.from_bytes(
            b'\x5c', 3, 2, x_offset=1, y_offset=-2, x_advance=5, code=0x41
        )
        self.assertEqual(glyph.code, 0x41)
        self.assertEqual(glyph.x_advance, 5)
        self.assertEqual(glyph.points, {(2, -2), (1, -1), (2, -1), (3, -1)})
        self.assertEqual(
            (glyph.width, glyph.height, glyph.x_offset, glyph.y_offset),
            (3, 2, 1, -2)
        )

    def test_full_row(self):
        """Test an 8x1 fully set row above the baseline."""
        glyph = Glyph.from_bytes(b'\xff', 8, 1, 0, -8, x_advance=8, code=0x20)
        self.assertEqual(glyph.points, {(_x, -8) for _x in range(8)})
        self.assertEqual(glyph.width, 8)
        self.assertEqual(glyph.height, 1)
        self.assertEqual(glyph.y_offset, -8)

    def test_from_map_copies(self):
        """Test creating a glyph takes a copy of the sparse map."""
        bitmap = SparseMap([(0, 0), (1, 1)])
        glyph = Glyph.from_map(bitmap, 2, -3, x_advance=4, code=0x30)
        bitmap.set(5, 5)
        self.assertEqual(glyph.points, {(2, -3), (3, -2)})
        self.assertEqual(glyph.x_offset, 2)
        self.assertEqual(glyph.y_offset, -3)

    def test_geometry_follows_mutation(self):
        """Test width, height and offsets track bitmap changes."""
        glyph = glyph_from_text(self.sample_A, 0x41)
        self.assertEqual((glyph.width, glyph.height), (3, 2))
        glyph.offset(1, 1)
        self.assertEqual((glyph.x_offset, glyph.y_offset), (1, -1))
        glyph.set(6, -4)
        self.assertEqual((glyph.width, glyph.height), (6, 5))
        glyph.rotate_90_cw()
        self.assertEqual((glyph.width, glyph.height), (5, 6))
        self.assertEqual((glyph.x_offset, glyph.y_offset), (1, -4))

    def test_copy_from(self):
        """Test copying takes bitmap and advance but not code and status."""
        source = glyph_from_text(self.sample_B, 0x42, x_advance=7)
        target = Glyph([(9, 9)], code=0x41, x_advance=1, status=GlyphStatus.ERROR)
        target.copy_from(source)
        self.assertEqual(target.points, source.points)
        self.assertEqual(target.x_advance, 7)
        self.assertEqual(target.code, 0x41)
        self.assertEqual(target.status, GlyphStatus.ERROR)
        source.clear_all()
        self.assertEqual(len(target), 4)

    def test_set_rect(self):
        """Test drawing a hollow rectangle on the baseline."""
        glyph = Glyph([(7, 7)], code=0x20)
        glyph.set_rect(4, 3)
        self.assertEqual(glyph_to_text(glyph), '@@@@\n@..@\n@@@@\n')
        self.assertEqual(
            (glyph.width, glyph.height, glyph.x_offset, glyph.y_offset),
            (4, 3, 0, -3)
        )

    def test_set_rect_thin(self):
        """Test rectangles one pixel wide or high."""
        glyph = Glyph()
        glyph.set_rect(1, 3)
        self.assertEqual(glyph.points, {(0, -1), (0, -2), (0, -3)})
        glyph.set_rect(2, 1)
        self.assertEqual(glyph.points, {(0, -1), (1, -1)})

    def test_set_rect_empty(self):
        """Test a rectangle with no extent clears the glyph."""
        glyph = Glyph([(0, 0)])
        glyph.set_rect(0, 5)
        self.assertEqual(len(glyph), 0)


if __name__ == '__main__':
    unittest.main()
