"""
gfxedit.storage.fontformats.bdf - Adobe Glyph Bitmap Distribution Format

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import logging
from pathlib import Path

from gfxedit.storage import loaders, savers
from gfxedit.core import Glyph, GlyphStatus, SparseMap, Font, FontProperties
from gfxedit.base import Rect, ParseError
from gfxedit.constants import NAME, UNASSIGNED

from gfxedit.storage.utils.limitations import ensure_flat, make_contiguous


@loaders.register(
    name='bdf',
    magic=(b'STARTFONT ',),
    patterns=('*.bdf',),
    text=True,
)
def load_bdf(instream, flatten:bool=False):
    """
    Load font from Adobe Glyph Bitmap Distribution Format (BDF) file.

    flatten: reassign duplicate and missing codes to get a contiguous range (default: False)
    """
    reader = BdfReader(instream.text, name=Path(instream.name).name)
    font = reader.read_font()
    if flatten:
        make_contiguous(font)
    return font


@savers.register(linked=load_bdf)
def save_bdf(font, outstream):
    """
    Save font to Adobe Glyph Bitmap Distribution Format (BDF) file.

    Missing font properties are filled in with derived defaults.
    """
    glyphs = ensure_flat(font, 'BDF')
    props = font.resolve_properties(name=Path(outstream.name).stem)
    _write_bdf(font, glyphs, props, outstream.text)


##############################################################################
# BDF reader
# BDF specification: https://adobe-type-tools.github.io/font-tech-notes/pdfs/5005.BDF_Spec.pdf

class BdfReader:
    """Keyword-driven reader for BDF text."""

    def __init__(self, lines, name=''):
        self._lines = iter(lines)
        self.name = name
        self.line_number = 0
        self.keyword = ''
        self._params = []
        self._line = ''

    def error(self, message, kind='malformed-token', **kwargs):
        """Create a diagnostic at the current line."""
        return ParseError(
            message, kind=kind, name=self.name,
            line_number=self.line_number, **kwargs
        )

    def next_line(self):
        """Read the next non-blank line and split off its keyword."""
        while True:
            try:
                line = next(self._lines)
            except StopIteration:
                raise self.error(
                    'Unexpected end of file.', kind='truncated-input'
                ) from None
            self.line_number += 1
            line = line.strip()
            if line:
                break
        self._line = line
        self.keyword, *self._params = line.split()
        return self.keyword

    def rest_of_line(self):
        """Everything after the keyword, with quotes removed."""
        _, _, value = self._line.partition(self.keyword)
        return value.strip().strip('"')

    def values(self, count, optional=0):
        """
        Integer parameters after the keyword.

        count: number of parameters to return
        optional: how many of the last parameters may be missing; these are returned as None
        """
        values = []
        for index in range(count):
            if index >= len(self._params):
                if index >= count - optional:
                    values.append(None)
                    continue
                raise self.error(
                    f'Not enough parameters for {self.keyword}: '
                    f'expected {count - optional}, found {len(self._params)}.',
                    expected=str(count - optional), found=str(len(self._params)),
                )
            try:
                values.append(int(self._params[index]))
            except ValueError:
                raise self.error(
                    f"Cannot parse integer parameter '{self._params[index]}'.",
                    expected='integer', found=self._params[index],
                ) from None
        return values

    def read_font(self):
        """Read a BDF file into a font."""
        self.next_line()
        if not self._line.startswith('STARTFONT 2.1'):
            raise self.error(
                'Unsupported file or version.',
                expected='STARTFONT 2.1', found=self._line
            )
        bounding_box = Rect(0, 0, 0, 0)
        default_advance = 0
        properties = FontProperties()
        declared_count = None
        # global section
        while declared_count is None:
            keyword = self.next_line()
            if keyword == 'FONTBOUNDINGBOX':
                width, height, x, y = self.values(4)
                bounding_box = Rect(x, y, width, height)
            elif keyword == 'DWIDTH':
                default_advance, _ = self.values(2, optional=1)
            elif keyword == 'FONT_NAME':
                properties.font_name = self.rest_of_line()
            elif keyword == 'PIXEL_SIZE':
                properties.pixel_size, = self.values(1)
            elif keyword == 'FONT_ASCENT':
                properties.ascent, = self.values(1)
            elif keyword == 'FONT_DESCENT':
                properties.descent, = self.values(1)
            elif keyword == 'CHARS':
                declared_count, = self.values(1)
            elif keyword == 'ENDFONT':
                declared_count = 0
                break
        # glyph section
        glyphs = []
        seen_codes = set()
        while self.keyword != 'ENDFONT':
            keyword = self.next_line()
            if keyword == 'STARTCHAR':
                glyph = self._read_char(default_advance)
                if glyph.code == UNASSIGNED:
                    logging.warning(
                        '[%s][line:%d] Glyph has no usable code.',
                        self.name, self.line_number
                    )
                    glyph.status = GlyphStatus.ERROR
                elif glyph.code in seen_codes:
                    logging.warning(
                        '[%s][line:%d] Glyph with duplicate code 0x%04X.',
                        self.name, self.line_number, glyph.code
                    )
                    glyph.status = GlyphStatus.ERROR
                seen_codes.add(glyph.code)
                glyphs.append(glyph)
            elif keyword != 'ENDFONT':
                logging.debug(
                    '[%s][line:%d] Ignoring %s outside glyph definition.',
                    self.name, self.line_number, keyword
                )
        if declared_count != len(glyphs):
            logging.warning(
                'CHARS declares %d glyphs, found %d.',
                declared_count, len(glyphs)
            )
        return Font(
            glyphs, y_advance=bounding_box.height, properties=properties
        )

    def _read_char(self, default_advance):
        """Read a glyph definition after STARTCHAR."""
        code = -1
        advance = 0
        bbx = Rect(0, 0, 0, 0)
        points = ()
        while True:
            keyword = self.next_line()
            if keyword == 'ENCODING':
                code, alternative = self.values(2, optional=1)
                if code == -1 and alternative is not None:
                    code = alternative
            elif keyword == 'DWIDTH':
                advance, _ = self.values(2, optional=1)
            elif keyword == 'BBX':
                width, height, x, y = self.values(4)
                bbx = Rect(x, y, width, height)
            elif keyword == 'BITMAP':
                points = self._read_bitmap(bbx)
                break
            elif keyword == 'ENDCHAR':
                break
        if not 0 <= code < UNASSIGNED:
            code = UNASSIGNED
        # BBX offset is from the origin to the bottom left corner, positive up
        return Glyph.from_map(
            SparseMap(points), bbx.x, -bbx.y - bbx.height,
            x_advance=advance or default_advance, code=code,
        )

    def _read_bitmap(self, bbx):
        """Read hex rows up to ENDCHAR; return the set pixels."""
        points = []
        rows = 0
        while self.next_line() != 'ENDCHAR':
            if rows < bbx.height:
                points.extend(
                    (_x, rows) for _x in self._decode_row(self.keyword, bbx.width)
                )
            rows += 1
        if rows != bbx.height:
            logging.warning(
                '[%s][line:%d] Expected %d bitmap rows, found %d.',
                self.name, self.line_number, bbx.height, rows
            )
        return points

    def _decode_row(self, hexstr, width):
        """Columns of set bits in a hex row, up to the given width."""
        x = 0
        for digit in hexstr:
            if x >= width:
                break
            try:
                nibble = int(digit, 16)
            except ValueError:
                raise self.error(
                    f"Cannot parse bitmap row '{hexstr}'.",
                    expected='hex digits', found=hexstr,
                ) from None
            if not nibble:
                x += 4
                continue
            for mask in (8, 4, 2, 1):
                if x >= width:
                    break
                if nibble & mask:
                    yield x
                x += 1


##############################################################################
# BDF writer

def _write_bdf(font, glyphs, props, outstream):
    """Write BDF keywords for font and glyphs."""
    average_advance = int(sum(_g.x_advance for _g in glyphs) / len(glyphs))
    outstream.write('STARTFONT 2.1\n')
    outstream.write(f'FONTBOUNDINGBOX {average_advance} {font.y_advance} 0 0\n')
    outstream.write(f'COMMENT "Generated by {NAME}"\n')
    outstream.write('STARTPROPERTIES 4\n')
    outstream.write(f'FONT_NAME "{props.font_name}"\n')
    outstream.write(f'PIXEL_SIZE {props.pixel_size}\n')
    outstream.write(f'FONT_ASCENT {props.ascent}\n')
    outstream.write(f'FONT_DESCENT {props.descent}\n')
    outstream.write('ENDPROPERTIES\n')
    outstream.write(f'CHARS {len(glyphs)}\n')
    for glyph in glyphs:
        bounds = glyph.bounds
        outstream.write(f'STARTCHAR {glyph.code}\n')
        outstream.write(f'ENCODING {glyph.code}\n')
        outstream.write(f'DWIDTH {glyph.x_advance} 0\n')
        outstream.write(
            f'BBX {bounds.width} {bounds.height} '
            f'{bounds.x} {-bounds.y - bounds.height}\n'
        )
        outstream.write('BITMAP\n')
        for y in range(bounds.top, bounds.bottom):
            outstream.write(_encode_row(glyph, y, bounds) + '\n')
        outstream.write('ENDCHAR\n')
    outstream.write('ENDFONT\n')


def _encode_row(glyph, y, bounds):
    """Hex nibbles for one bitmap row, padded to whole bytes."""
    hexstr = ''.join(
        f'{_v:X}'
        for _v in (
            sum(
                _mask
                for _mask, _x in zip((8, 4, 2, 1), range(_left, bounds.right))
                if glyph.get(_x, y)
            )
            for _left in range(bounds.left, bounds.right, 4)
        )
    )
    if len(hexstr) % 2:
        hexstr += '0'
    return hexstr
