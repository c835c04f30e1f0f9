"""
gfxedit test suite
testing utilities
"""

import tempfile
import unittest
import logging
from pathlib import Path

import gfxedit
from gfxedit import Glyph, Font
from gfxedit.storage import get_stringio, get_bytesio


def glyph_from_text(text, code, x_advance=None, baseline=None):
    """
    Create a glyph from a drawing in text.

    text: rows of `.` (paper) and `@` (ink)
    baseline: number of rows above the baseline (default: all rows)
    """
    rows = text.splitlines()
    if baseline is None:
        baseline = len(rows)
    if x_advance is None:
        x_advance = max((len(_r) for _r in rows), default=0)
    return Glyph(
        (
            (_x, _y - baseline)
            for _y, _row in enumerate(rows)
            for _x, _c in enumerate(_row)
            if _c == '@'
        ),
        code=code, x_advance=x_advance,
    )


def glyph_to_text(glyph):
    """Draw the glyph's bounding box in text."""
    bounds = glyph.bounds
    return ''.join(
        ''.join(
            '@' if glyph.get(_x, _y) else '.'
            for _x in range(bounds.left, bounds.right)
        ) + '\n'
        for _y in range(bounds.top, bounds.bottom)
    )


def glyph_summary(font):
    """Comparable summary of a font's glyphs."""
    return [
        (_g.code, _g.x_advance, sorted(_g.points))
        for _g in font.glyphs
    ]


class BaseTester(unittest.TestCase):
    """Base class for testers."""

    logging.basicConfig(level=logging.WARNING)

    font_path = Path(__file__).parent / 'fonts'

    sample_A = """\
.@.
@@@
"""

    sample_B = """\
@@
@@
"""

    @staticmethod
    def make_font():
        """Small flat font with an empty glyph at the end."""
        return Font(
            [
                glyph_from_text(BaseTester.sample_A, 0x41, x_advance=4),
                glyph_from_text(BaseTester.sample_B, 0x42, x_advance=3),
                Glyph(code=0x43, x_advance=2),
            ],
            y_advance=8,
        )

    def setUp(self):
        """Setup ahead of each test."""
        bar = '-' * 20
        logging.debug('%s %s %s', bar, self.id(), bar)
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)

    def tearDown(self):
        """Clean up after each test."""
        self.temp_dir.cleanup()
