"""
gfxedit.storage.utils.limitations - deal with font format limitations

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

from gfxedit.base import StructuralError
from gfxedit.core import check_flatness, flatten, GlyphStatus


def ensure_flat(font, format_name):
    """Require a contiguous duplicate-free code range; return glyphs in code order."""
    if not check_flatness(font.glyphs):
        raise StructuralError(
            f'Font must be flattened before saving in {format_name} format.'
        )
    return sorted(font.glyphs, key=lambda _g: _g.code)


def ensure_range(value, low, high, what):
    """Require a value to fit a binary field."""
    if not low <= value <= high:
        raise StructuralError(
            f'{what} {value} does not fit in the range [{low}, {high}].'
        )
    return value


def make_contiguous(font):
    """
    Flatten glyph codes in place.

    Inserted fillers get the mean advance of the other glyphs.
    """
    glyphs = flatten(font.glyphs)
    advances = [
        _g.x_advance for _g in glyphs if _g.status != GlyphStatus.INSERTED
    ]
    if advances:
        mean_advance = round(sum(advances) / len(advances))
        for glyph in glyphs:
            if glyph.status == GlyphStatus.INSERTED:
                glyph.x_advance = mean_advance
    font.set_glyphs(glyphs)
    return font
