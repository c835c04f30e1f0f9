"""
gfxedit.storage.fontformats.gfxbinary - Adafruit GFX in-memory font image

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import logging

from gfxedit.storage import loaders, savers
from gfxedit.core import Glyph, Font
from gfxedit.base import FileFormatError, ParseError
from gfxedit.base.struct import little_endian as le, StructError
from gfxedit.constants import GFX_HEADER_SIZE

from gfxedit.storage.utils.limitations import ensure_flat, ensure_range


# GFXfont struct, with 32-bit pointers replaced by file offsets
_GFX_FONT = le.Struct(
    bitmap=le.int32,
    glyph=le.int32,
    first=le.uint16,
    last=le.uint16,
    yAdvance=le.uint8,
)

# GFXglyph struct, padded to 8 bytes
_GFX_GLYPH = le.Struct(
    bitmapOffset=le.uint16,
    width=le.uint8,
    height=le.uint8,
    xAdvance=le.uint8,
    xOffset=le.int8,
    yOffset=le.int8,
    padding=le.uint8,
)


@loaders.register(
    name='gfxbinary',
    patterns=('*.gfxfntb',),
)
def load_gfxbinary(instream):
    """Load font from binary Adafruit GFX memory image."""
    data = instream.read()
    try:
        header = _GFX_FONT.from_bytes(data[:_GFX_FONT.size])
    except StructError as e:
        raise ParseError(
            f'Font header is truncated: {e}', kind='truncated-input',
            name=instream.name,
        ) from e
    if header.bitmap != GFX_HEADER_SIZE:
        raise FileFormatError(
            f'Unexpected bitmap offset {header.bitmap}, expected {GFX_HEADER_SIZE}.'
        )
    if header.glyph < header.bitmap:
        raise FileFormatError(
            f'Glyph table offset {header.glyph} precedes bitmap.'
        )
    count = header.last - header.first + 1
    if count < 0:
        raise FileFormatError(
            f'Code range 0x{header.first:04X}--0x{header.last:04X} is empty.'
        )
    bitmap = data[header.bitmap:header.glyph]
    if len(bitmap) != header.glyph - header.bitmap:
        raise ParseError(
            'Bitmap is truncated.', kind='truncated-input', name=instream.name,
        )
    table_type = _GFX_GLYPH.array(count)
    try:
        glyph_table = table_type.from_bytes(
            data[header.glyph:header.glyph + table_type.size]
        )
    except StructError as e:
        raise ParseError(
            f'Glyph table is truncated: {e}', kind='truncated-input',
            name=instream.name,
        ) from e
    logging.debug(
        'Found %d bitmap bytes and %d glyph records.', len(bitmap), count
    )
    offsets = [_r.bitmapOffset for _r in glyph_table] + [len(bitmap)]
    glyphs = []
    for code, record, end in zip(
            range(header.first, header.last + 1), glyph_table, offsets[1:]
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
                kind='truncated-input', name=instream.name,
            ) from e
        glyphs.append(glyph)
    return Font(glyphs, y_advance=header.yAdvance)


@savers.register(linked=load_gfxbinary)
def save_gfxbinary(font, outstream):
    """Save font to binary Adafruit GFX memory image."""
    glyphs = ensure_flat(font, 'binary')
    bitmaps = [_g.packed_bytes() for _g in glyphs]
    records = []
    offset = 0
    for glyph, bitmap in zip(glyphs, bitmaps):
        records.append(_GFX_GLYPH(
            bitmapOffset=ensure_range(offset, 0, 0xffff, 'Bitmap offset'),
            width=ensure_range(glyph.width, 0, 0xff, 'Width'),
            height=ensure_range(glyph.height, 0, 0xff, 'Height'),
            xAdvance=ensure_range(glyph.x_advance, 0, 0xff, 'Advance'),
            xOffset=ensure_range(glyph.x_offset, -0x80, 0x7f, 'X offset'),
            yOffset=ensure_range(glyph.y_offset, -0x80, 0x7f, 'Y offset'),
            padding=0,
        ))
        offset += len(bitmap)
    header = _GFX_FONT(
        bitmap=GFX_HEADER_SIZE,
        glyph=GFX_HEADER_SIZE + offset,
        first=glyphs[0].code,
        last=glyphs[-1].code,
        yAdvance=ensure_range(font.y_advance, 0, 0xff, 'Line height'),
    )
    outstream.write(bytes(header))
    outstream.write(b''.join(bitmaps))
    outstream.write(b''.join(bytes(_r) for _r in records))
