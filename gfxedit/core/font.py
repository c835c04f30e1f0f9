"""
gfxedit.core.font - font: ordered glyph collection and code reconciliation

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import logging
from dataclasses import dataclass
from itertools import groupby
from collections import deque

from gfxedit.base import Rect, EMPTY_RECT, FileFormatError
from gfxedit.constants import UNASSIGNED, GAP_LIMIT, FILLER_ADVANCE
from .glyph import Glyph, GlyphStatus


###############################################################################
# font metadata

@dataclass
class FontProperties:
    """Optional font metadata, as used by BDF and in header comments."""
    font_name: str = None
    pixel_size: int = None
    ascent: int = None
    descent: int = None


###############################################################################
# code reconciliation

def _code_key(glyph):
    return glyph.code


def check_flatness(glyphs):
    """
    Glyph codes form a contiguous sequence without duplicates.

    An empty sequence is flat. Glyphs with the unassigned code 0xFFFF
    make a sequence non-flat.
    """
    codes = sorted(_g.code for _g in glyphs)
    if not codes:
        return True
    if codes[-1] >= UNASSIGNED:
        return False
    return codes == list(range(codes[0], codes[0] + len(codes)))


def flatten(glyphs):
    """
    Reassign codes so that they form a contiguous duplicate-free sequence.

    For each code, the first glyph in input order keeps its place; other
    glyphs with the same code, and all unassigned ones, are used to fill
    gaps and are marked ERROR. Gaps left over are filled with new blank
    glyphs marked INSERTED. Beyond a gap larger than GAP_LIMIT that cannot
    be filled from the remaining displaced glyphs, glyphs are given
    consecutive codes and marked ERROR.

    Glyphs are updated in place; returns a new list in code order.
    """
    primaries = []
    pool = deque()
    for code, group in groupby(sorted(glyphs, key=_code_key), key=_code_key):
        group = list(group)
        if code != UNASSIGNED:
            primaries.append(group.pop(0))
        pool.extend(group)
    for glyph in pool:
        glyph.status = GlyphStatus.ERROR
    if primaries:
        cursor = max(0, primaries[0].code - len(pool))
    else:
        cursor = 0
    flat = []
    for index, primary in enumerate(primaries):
        gap = primary.code - cursor
        if gap > GAP_LIMIT and gap > len(pool):
            logging.warning(
                'Gap of %d codes before 0x%04X is too large to fill; '
                'assigning consecutive codes to the remaining %d glyphs.',
                gap, primary.code, len(primaries) - index
            )
            for glyph in primaries[index:]:
                glyph.code = cursor
                glyph.status = GlyphStatus.ERROR
                flat.append(glyph)
                cursor += 1
            break
        while cursor < primary.code:
            if pool:
                filler = pool.popleft()
            else:
                filler = Glyph(
                    x_advance=FILLER_ADVANCE, status=GlyphStatus.INSERTED
                )
            filler.code = cursor
            flat.append(filler)
            cursor += 1
        flat.append(primary)
        cursor = primary.code + 1
    for glyph in pool:
        glyph.code = cursor
        flat.append(glyph)
        cursor += 1
    # keep clear of the unassigned code
    if flat and flat[-1].code >= UNASSIGNED:
        shift = flat[-1].code - UNASSIGNED + 1
        logging.warning('Shifting codes down by %d to stay below 0xFFFF.', shift)
        for glyph in flat:
            glyph.code -= shift
    return flat


###############################################################################
# font class

class Font:
    """Ordered glyph collection with line height and metadata."""

    def __init__(self, glyphs=(), y_advance=0, properties=None):
        self.y_advance = y_advance
        if properties is None:
            properties = FontProperties()
        self.properties = properties
        self._glyphs = []
        self.set_glyphs(glyphs)

    def __repr__(self):
        return (
            f'{type(self).__name__}(glyphs={len(self._glyphs)}, '
            f'y_advance={self.y_advance}, properties={self.properties})'
        )

    def __len__(self):
        return len(self._glyphs)

    def __iter__(self):
        return iter(self._glyphs)

    @classmethod
    def new(cls):
        """Blank font with a single space glyph drawn as a hollow box."""
        font = cls(y_advance=8)
        glyph = Glyph(code=0x20, x_advance=8)
        glyph.set_rect(glyph.x_advance, font.y_advance)
        font.add(glyph)
        return font

    @property
    def glyphs(self):
        return tuple(self._glyphs)

    def set_glyphs(self, glyphs):
        """Replace the glyph list; glyphs are kept in code order."""
        self._glyphs = sorted(glyphs, key=_code_key)

    def get_glyph(self, code):
        """First glyph with the given code, or None."""
        for glyph in self._glyphs:
            if glyph.code == code:
                return glyph
        return None


    ##########################################################################
    # glyph list editing

    def add(self, glyph):
        """Add a glyph, keeping the list in code order."""
        if not self._glyphs or glyph.code >= self.end_code:
            self._glyphs.append(glyph)
            return
        for index, other in enumerate(self._glyphs):
            if other.code > glyph.code:
                self._glyphs.insert(index, glyph)
                return

    def remove(self, glyph):
        """Remove this glyph object; other codes are left as they are."""
        for index, other in enumerate(self._glyphs):
            if other is glyph:
                del self._glyphs[index]
                return
        raise ValueError(f'{glyph!r} is not in this font.')

    def insert_at(self, index, glyph):
        """
        Insert a glyph at a list position and give it a matching code.

        The glyph takes the code after its predecessor's, or one below the
        first code when inserted at the front. Following glyphs whose codes
        would collide are moved up by one.
        """
        index = max(0, min(index, len(self._glyphs)))
        if index > 0:
            code = self._glyphs[index-1].code + 1
        elif self._glyphs:
            code = max(0, self._glyphs[0].code - 1)
        else:
            code = 0
        if code >= UNASSIGNED:
            raise ValueError(f'No code available after 0x{code-1:04X}.')
        new_codes = [code]
        for other in self._glyphs[index:]:
            if other.code > new_codes[-1]:
                break
            new_codes.append(new_codes[-1] + 1)
        if new_codes[-1] >= UNASSIGNED:
            raise ValueError('Insertion would push codes past 0xFFFE.')
        glyph.code = new_codes[0]
        for other, new_code in zip(self._glyphs[index:], new_codes[1:]):
            other.code = new_code
        self._glyphs.insert(index, glyph)

    def truncate(self, length):
        """Drop glyphs beyond the given count."""
        del self._glyphs[max(0, length):]

    def is_flat(self):
        return check_flatness(self._glyphs)

    def flatten(self):
        """Make the glyph codes contiguous and unique."""
        self._glyphs = flatten(self._glyphs)


    ##########################################################################
    # metrics

    @property
    def start_code(self):
        if not self._glyphs:
            return 0
        return self._glyphs[0].code

    @property
    def end_code(self):
        if not self._glyphs:
            return 0
        return self._glyphs[-1].code

    @property
    def max_advance(self):
        return max((_g.x_advance for _g in self._glyphs), default=0)

    @property
    def bmp_bounds(self):
        """Tight rectangle around the bitmaps of all glyphs."""
        bounds = EMPTY_RECT
        for glyph in self._glyphs:
            bounds = bounds | glyph.bounds
        return bounds

    @property
    def full_bounds(self):
        """Character cell expanded to include all glyph bitmaps."""
        cell = Rect(0, -self.y_advance, self.max_advance, self.y_advance)
        return self.bmp_bounds | cell


    ##########################################################################
    # metadata

    def resolve_properties(self, name=''):
        """
        Font properties with missing values filled in.

        name: fallback font name, usually the file stem
        """
        props = self.properties
        font_name = props.font_name or name or 'font'
        pixel_size, ascent, descent = props.pixel_size, props.ascent, props.descent
        known = tuple(_v is not None for _v in (pixel_size, ascent, descent))
        if known == (True, True, True):
            pass
        elif known == (False, True, True):
            pixel_size = ascent + descent
        elif known == (True, False, True):
            ascent = pixel_size - descent
        elif known == (True, True, False):
            descent = pixel_size - ascent
        elif known == (True, False, False):
            ascent = round(0.8 * pixel_size)
            descent = pixel_size - ascent
        elif known == (False, True, False):
            descent = round(0.25 * ascent)
            pixel_size = ascent + descent
        elif known == (False, False, True):
            ascent = 4 * descent
            pixel_size = ascent + descent
        else:
            bounds = self.bmp_bounds
            ascent = max(0, -bounds.top) if bounds else 0
            descent = max(0, bounds.bottom) if bounds else 0
            if not ascent and not descent:
                ascent = round(0.8 * self.y_advance)
                descent = self.y_advance - ascent
            pixel_size = ascent + descent
            logging.info(
                'Derived pixel size %d, ascent %d, descent %d from bitmaps.',
                pixel_size, ascent, descent
            )
        return FontProperties(
            font_name=font_name, pixel_size=pixel_size,
            ascent=ascent, descent=descent,
        )


    ##########################################################################
    # storage

    def save_file(self, path, **kwargs):
        """Save to file, choosing the format by extension. Returns success."""
        from gfxedit.storage import save
        try:
            save(self, path, **kwargs)
        except (FileFormatError, ValueError, OSError) as e:
            logging.error('Could not save `%s`: %s', path, e)
            return False
        return True
