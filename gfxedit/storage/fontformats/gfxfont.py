"""
gfxedit.storage.fontformats.gfxfont - Adafruit GFX font headers

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import logging
from pathlib import Path

from gfxedit.storage import loaders, savers
from gfxedit.core import Glyph, Font, FontProperties
from gfxedit.base import Props, ParseError
from gfxedit.constants import UNASSIGNED

from gfxedit.storage.utils.source import CTokenizer, CCodeWriter
from gfxedit.storage.utils.limitations import ensure_flat, ensure_range


_GLYPH_FIELDS = (
    'bitmapOffset', 'width', 'height', 'xAdvance', 'xOffset', 'yOffset',
)
_FONT_FIELDS = (
    'first', 'last', 'yAdvance'
)


##############################################################################
# loader

@loaders.register(
    name='gfxfont',
    patterns=('*.h',),
    text=True,
)
def load_gfxfont(instream):
    """
    Load font from Adafruit GFX font header.

    The header must hold, in this order, the bitmap array, the glyph
    array and the font structure.
    """
    tokens = CTokenizer(instream.text, name=Path(instream.name).name)
    bitmap_name, bitmap = _read_bitmap_array(tokens)
    glyph_name, glyph_table = _read_glyph_array(tokens)
    metrics = _read_font_struct(tokens, bitmap_name, glyph_name)
    logging.debug(
        'Found %d bitmap bytes and %d glyph records.',
        len(bitmap), len(glyph_table)
    )
    if metrics.last - metrics.first + 1 != len(glyph_table):
        logging.warning(
            'Range 0x%04X--0x%04X does not match number of glyphs (%d).',
            metrics.first, metrics.last, len(glyph_table)
        )
    # codes count up from `first` and must stay below the unassigned code
    ensure_range(metrics.first, 0, UNASSIGNED - len(glyph_table), 'First code')
    # each glyph's bitmap runs up to the start of the next glyph's
    offsets = [_g.bitmapOffset for _g in glyph_table] + [len(bitmap)]
    glyphs = []
    for code, record, end in zip(
            range(metrics.first, metrics.first + len(glyph_table)),
            glyph_table, offsets[1:],
        ):
        try:
            glyph = Glyph.from_bytes(
                bitmap[record.bitmapOffset:end], record.width, record.height,
                x_offset=record.xOffset, y_offset=record.yOffset,
                x_advance=record.xAdvance, code=code,
            )
        except ValueError as e:
            raise ParseError(
                f'Bitmap for glyph 0x{code:04X} is truncated: {e}',
                kind='truncated-input', name=tokens.name,
            ) from e
        glyphs.append(glyph)
    return Font(
        glyphs, y_advance=metrics.yAdvance,
        properties=FontProperties(**vars(tokens.properties)),
    )


def _read_array_head(tokens, type_name):
    """Parse `const <type> <name>[] [PROGMEM] = {` and return the name."""
    tokens.expect_all('const', type_name)
    name = tokens.next()
    tokens.expect_all('[', ']')
    tokens.optional('PROGMEM')
    tokens.expect_all('=', '{')
    return name


def _read_bitmap_array(tokens):
    """Parse the bitmap byte array."""
    name = _read_array_head(tokens, 'uint8_t')
    values = tokens.number_list()
    tokens.expect_all('}', ';')
    for value in values:
        if not 0 <= value < 256:
            raise tokens.error(
                f'Bitmap value {value} is not a byte.',
                expected='byte', found=str(value)
            )
    return name, bytes(values)


def _read_glyph_array(tokens):
    """Parse the array of GFXglyph initialisers."""
    name = _read_array_head(tokens, 'GFXglyph')
    glyph_table = []
    while not tokens.peek_is('}'):
        tokens.expect('{')
        values = tokens.number_list()
        if len(values) < len(_GLYPH_FIELDS):
            raise tokens.error(
                'Incomplete GFXglyph structure '
                f'(expected {len(_GLYPH_FIELDS)} values, found {len(values)}).'
            )
        tokens.expect('}')
        glyph_table.append(Props(**dict(zip(_GLYPH_FIELDS, values))))
        if not tokens.optional(','):
            break
    tokens.expect_all('}', ';')
    return name, glyph_table


def _read_font_struct(tokens, bitmap_name, glyph_name):
    """Parse the GFXfont initialiser."""
    tokens.expect_all('const', 'GFXfont')
    tokens.next()
    tokens.optional('PROGMEM')
    tokens.expect_all('=', '{')
    # pointer casts are usual but not required
    if tokens.optional('('):
        tokens.expect_all('uint8_t', '*', ')')
    tokens.expect_all(bitmap_name, ',')
    if tokens.optional('('):
        tokens.expect_all('GFXglyph', '*', ')')
    tokens.expect_all(glyph_name, ',')
    values = tokens.number_list()
    if len(values) < len(_FONT_FIELDS):
        raise tokens.error(
            'Incomplete GFXfont structure '
            f'(expected {len(_FONT_FIELDS)} values, found {len(values)}).'
        )
    tokens.expect_all('}', ';')
    return Props(**dict(zip(_FONT_FIELDS, values)))


##############################################################################
# saver

@savers.register(linked=load_gfxfont)
def save_gfxfont(font, outstream, name=''):
    """
    Save font to Adafruit GFX font header.

    name: C identifier for the font structure (default: from font name or file name)
    """
    glyphs = ensure_flat(font, 'header')
    basename = CCodeWriter.to_identifier(
        name or font.properties.font_name or Path(outstream.name).stem or 'font'
    )
    bitmap_name = f'{basename}Bitmaps'
    glyph_name = f'{basename}Glyphs'
    outstream = outstream.text
    outstream.write('#pragma once\n')
    outstream.write('#include <Adafruit_GFX.h>\n')
    outstream.write(_encode_properties(font.properties))
    # bitmap array, one line per glyph
    outstream.write(f'const uint8_t {bitmap_name}[] PROGMEM = ' '{\n')
    for glyph in glyphs:
        outstream.write(' '.join((
            CCodeWriter.code_comment(glyph.code),
            *(f'{CCodeWriter.encode_int(_b)},' for _b in glyph.packed_bytes()),
        )) + '\n')
    outstream.write('};\n\n')
    # glyph array
    outstream.write(f'const GFXglyph {glyph_name}[] PROGMEM = ' '{\n')
    offset = 0
    for glyph in glyphs:
        outstream.write(
            f'{CCodeWriter.code_comment(glyph.code)} '
            f'{{{offset:6}, {glyph.width:4},{glyph.height:4},'
            f'{glyph.x_advance:4},{glyph.x_offset:4},{glyph.y_offset:5} }},\n'
        )
        offset += len(glyph.packed_bytes())
    outstream.write('};\n\n')
    # font structure
    outstream.write(f'const GFXfont {basename} PROGMEM = ' '{\n')
    outstream.write(f'(uint8_t*){bitmap_name},\n')
    outstream.write(f'(GFXglyph*){glyph_name},\n')
    outstream.write(
        f'{CCodeWriter.encode_int(glyphs[0].code)}, '
        f'{CCodeWriter.encode_int(glyphs[-1].code)}, {font.y_advance}\n'
    )
    outstream.write('};\n')


def _encode_properties(properties):
    """Comment block with the font properties that are set, if any."""
    lines = ['/* PROPERTIES', '']
    for key, value in (
            ('FONT_NAME', properties.font_name),
            ('PIXEL_SIZE', properties.pixel_size),
            ('FONT_ASCENT', properties.ascent),
            ('FONT_DESCENT', properties.descent),
        ):
        if value is not None:
            lines.append(f'{key} {value}')
    if len(lines) == 2:
        return ''
    lines.append('*/')
    return '\n'.join(lines) + '\n'
