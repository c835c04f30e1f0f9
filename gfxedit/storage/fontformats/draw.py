"""
gfxedit.storage.fontformats.draw - hexdraw visual-text format

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import logging
from pathlib import Path

from gfxedit.storage import loaders
from gfxedit.core import Glyph, GlyphStatus, Font
from gfxedit.constants import UNASSIGNED

from gfxedit.storage.utils.limitations import make_contiguous


# characters used for inked pixels
_INK = '#@'
# characters that can occur in a bitmap row
_ROW_CHARS = '-' + _INK


@loaders.register(
    name='hexdraw',
    patterns=('*.draw',),
    text=True,
)
def load_hexdraw(instream, flatten:bool=False):
    """
    Load font from a hexdraw file.

    flatten: reassign duplicate and missing codes to get a contiguous range (default: False)
    """
    name = Path(instream.name).name
    glyphs = []
    seen_codes = set()
    code, rows = None, None

    def _finish_glyph():
        if rows is None:
            return
        if code is None:
            glyph_code, status = UNASSIGNED, GlyphStatus.ERROR
        elif code in seen_codes:
            logging.warning('[%s] Duplicate glyph code 0x%04X.', name, code)
            glyph_code, status = UNASSIGNED, GlyphStatus.ERROR
        else:
            glyph_code, status = code, GlyphStatus.NORMAL
            seen_codes.add(code)
        # a single `-` stands for an empty glyph
        glyphs.append((glyph_code, status, [] if rows == ['-'] else rows))

    for line_number, line in enumerate(instream.text, 1):
        if not line.strip() or line.startswith('#'):
            continue
        label, colon, rest = line.partition(':')
        if colon:
            _finish_glyph()
            rows = None
            try:
                code = int(label.strip(), 16)
            except ValueError:
                logging.warning(
                    '[%s][line:%d] Cannot parse glyph code `%s`.',
                    name, line_number, label.strip()
                )
                code = None
            else:
                if not 0 <= code < UNASSIGNED:
                    code = None
            rest = rest.strip()
            # label line may hold the first bitmap row
            if rest and set(rest) <= set(_ROW_CHARS):
                rows = [rest]
        elif set(line.strip()) <= set(_ROW_CHARS):
            if rows is None:
                rows = []
            rows.append(line.strip())
        else:
            logging.debug(
                '[%s][line:%d] Ignoring line: %s', name, line_number, line.strip()
            )
    _finish_glyph()
    # bitmaps rest on the line below the tallest glyph
    max_height = max((len(_rows) for _, _, _rows in glyphs), default=0)
    font = Font(
        (_make_glyph(*_item, max_height) for _item in glyphs),
        y_advance=max_height,
    )
    if flatten:
        make_contiguous(font)
    return font


def _make_glyph(code, status, rows, max_height):
    """Create glyph from text rows."""
    width = max((len(_row) for _row in rows), default=0)
    glyph = Glyph(
        (
            (_x, _y)
            for _y, _row in enumerate(rows)
            for _x, _c in enumerate(_row)
            if _c in _INK
        ),
        code=code, x_advance=width, status=status,
    )
    glyph.offset(0, -max_height)
    return glyph
