"""
gfxedit.core.glyph - single glyph: bitmap and metrics

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

from enum import Enum

from gfxedit.constants import UNASSIGNED
from .sparsemap import SparseMap


class GlyphStatus(Enum):
    """Provenance of a glyph's character code."""
    # code taken from the source file
    NORMAL = 'normal'
    # blank filler created to close a gap in the code sequence
    INSERTED = 'inserted'
    # code was duplicate or missing and has been reassigned
    ERROR = 'error'


class Glyph(SparseMap):
    """
    Glyph bitmap with character code, advance width and status.

    Points are in character cell coordinates: the origin is on the
    baseline at the left of the cell, rows above the baseline have
    negative y. Width, height and offsets are read from the bounds.
    """

    def __init__(
            self, points=(), *,
            code=UNASSIGNED, x_advance=0, status=GlyphStatus.NORMAL
        ):
        super().__init__(points)
        self.code = code
        self.x_advance = x_advance
        self.status = status

    def __repr__(self):
        return (
            f'{type(self).__name__}(code=0x{self.code:04X}, '
            f'x_advance={self.x_advance}, status={self.status.name}, '
            f'bounds={tuple(self.bounds)}, points={len(self)})'
        )

    @classmethod
    def from_bytes(
            cls, data, width, height,
            x_offset=0, y_offset=0, x_advance=0, code=UNASSIGNED,
        ):
        """Create glyph from packed bitmap placed at the given offsets."""
        bitmap = SparseMap.from_bytes(data, width, height)
        glyph = cls(bitmap, code=code, x_advance=x_advance)
        glyph.offset(x_offset, y_offset)
        return glyph

    @classmethod
    def from_map(
            cls, sparse_map, x_offset=0, y_offset=0, x_advance=0,
            code=UNASSIGNED,
        ):
        """Create glyph from a copy of a sparse map, moved by the offsets."""
        glyph = cls(sparse_map, code=code, x_advance=x_advance)
        glyph.offset(x_offset, y_offset)
        return glyph

    def copy_from(self, other):
        """Take over the bitmap and advance of another glyph."""
        self._replace_points(other)
        self.x_advance = other.x_advance

    def set_rect(self, width, height):
        """Replace the bitmap with a hollow rectangle standing on the baseline."""
        if width <= 0 or height <= 0:
            self.clear_all()
            return
        points = set()
        for x in range(width):
            points.add((x, -1))
            points.add((x, -height))
        for y in range(1, height+1):
            points.add((0, -y))
            points.add((width-1, -y))
        self._replace_points(points)

    @property
    def width(self):
        return self.bounds.width

    @property
    def height(self):
        return self.bounds.height

    @property
    def x_offset(self):
        return self.bounds.left

    @property
    def y_offset(self):
        return self.bounds.top
