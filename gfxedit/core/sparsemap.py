"""
gfxedit.core.sparsemap - sparse bitmap of set pixels

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

from gfxedit.base import Rect, EMPTY_RECT
from gfxedit.base.binary import bytes_to_bits, bits_to_bytes


class SparseMap:
    """
    Set of inked pixel coordinates.

    Coordinates are integer (x, y) pairs with y increasing downwards.
    The tight bounding box and the packed bitmap are cached and
    recalculated after any change to the set of points.
    """

    def __init__(self, points=()):
        """Create sparse map from iterable of (x, y) pairs."""
        self._points = set((int(_x), int(_y)) for _x, _y in points)
        self._bounds = None
        self._packed = None

    def __repr__(self):
        return f'{type(self).__name__}({sorted(self._points)})'

    def __len__(self):
        """Number of inked pixels."""
        return len(self._points)

    def __iter__(self):
        return iter(self._points)

    def __contains__(self, point):
        return tuple(point) in self._points

    @property
    def points(self):
        """Inked pixel coordinates."""
        return frozenset(self._points)

    def _replace_points(self, points):
        """Replace the point set. All changes to the map pass through here."""
        self._points = set(points)
        self._bounds = None
        self._packed = None


    ##########################################################################
    # packed bitmap

    @classmethod
    def from_bytes(cls, data, width, height):
        """
        Create sparse map from a packed bitmap.

        Rows run top to bottom, pixels in a row left to right, as a
        continuous bit stream with the most significant bit first.
        There is no padding between rows.
        """
        width, height = max(0, width), max(0, height)
        bits = bytes_to_bits(data, length=width*height)
        return cls(
            (_i % width, _i // width)
            for _i, _bit in enumerate(bits)
            if _bit
        )

    def packed_bytes(self):
        """Bitmap of the bounding box, packed in the same way as from_bytes."""
        if self._packed is None:
            rect = self.bounds
            self._packed = bits_to_bytes(tuple(
                (_x, _y) in self._points
                for _y in range(rect.top, rect.bottom)
                for _x in range(rect.left, rect.right)
            ))
        return self._packed

    @property
    def bounds(self):
        """Tight rectangle around the inked pixels."""
        if self._bounds is None:
            if not self._points:
                self._bounds = EMPTY_RECT
            else:
                xs = tuple(_x for _x, _ in self._points)
                ys = tuple(_y for _, _y in self._points)
                self._bounds = Rect.from_edges(
                    min(xs), min(ys), max(xs) + 1, max(ys) + 1
                )
        return self._bounds


    ##########################################################################
    # pixel access

    def get(self, x, y):
        """Pixel at (x, y) is inked."""
        return (x, y) in self._points

    def set(self, x, y):
        """Ink the pixel at (x, y)."""
        if not self.get(x, y):
            self._replace_points(self._points | {(x, y)})

    def clear(self, x, y):
        """Remove ink from the pixel at (x, y)."""
        if self.get(x, y):
            self._replace_points(self._points - {(x, y)})

    def toggle(self, x, y):
        """Invert the pixel at (x, y)."""
        self._replace_points(self._points ^ {(x, y)})

    def clear_all(self):
        """Remove all ink."""
        self._replace_points(())


    ##########################################################################
    # transformations
    # reflections and turns keep the bounding box anchored in place

    def offset(self, dx, dy):
        """Move all pixels by (dx, dy)."""
        self._replace_points((_x + dx, _y + dy) for _x, _y in self._points)

    def flip_horizontal(self):
        """Mirror left to right within the bounding box."""
        rect = self.bounds
        self._replace_points(
            (rect.left + rect.right - 1 - _x, _y) for _x, _y in self._points
        )

    def flip_vertical(self):
        """Mirror top to bottom within the bounding box."""
        rect = self.bounds
        self._replace_points(
            (_x, rect.top + rect.bottom - 1 - _y) for _x, _y in self._points
        )

    def rotate_180(self):
        """Turn by half a circle within the bounding box."""
        rect = self.bounds
        self._replace_points(
            (rect.left + rect.right - 1 - _x, rect.top + rect.bottom - 1 - _y)
            for _x, _y in self._points
        )

    def rotate_90_cw(self):
        """Turn a quarter clockwise, keeping the top left corner in place."""
        rect = self.bounds
        self._replace_points(
            (rect.left + rect.bottom - 1 - _y, rect.top + _x - rect.left)
            for _x, _y in self._points
        )

    def rotate_90_ccw(self):
        """Turn a quarter anticlockwise, keeping the top left corner in place."""
        rect = self.bounds
        self._replace_points(
            (rect.left + _y - rect.top, rect.top + rect.right - 1 - _x)
            for _x, _y in self._points
        )
