"""
gfxedit.base.basetypes - base data types, converters and exceptions

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

from collections import namedtuple


##############################################################################
# exceptions

class FileFormatError(Exception):
    """Incorrect file format."""


class ParseError(FileFormatError):
    """Syntax error found while reading a font file."""

    def __init__(
            self, message, *, kind='malformed-token', name='',
            line_number=None, expected=None, found=None
        ):
        self.message = message
        self.kind = kind
        self.name = name
        self.line_number = line_number
        self.expected = expected
        self.found = found
        super().__init__(str(self))

    def __str__(self):
        location = f'[{self.name}]' if self.name else ''
        if self.line_number is not None:
            location += f'[line:{self.line_number}]'
        if location:
            return f'{location} {self.message}'
        return self.message


class StructuralError(FileFormatError):
    """Font cannot be represented in the requested format as it stands."""


##############################################################################
# geometry

class Rect(namedtuple('Rect', 'x y width height')):
    """
    Rectangle in pixel coordinates, y increasing downwards.

    x, y: top left corner
    width, height: extent; a rectangle with no extent is empty
    """

    @classmethod
    def from_edges(cls, left, top, right, bottom):
        """Create rectangle from exclusive right and bottom edges."""
        return cls(left, top, right - left, bottom - top)

    @property
    def left(self):
        return self.x

    @property
    def top(self):
        return self.y

    @property
    def right(self):
        return self.x + self.width

    @property
    def bottom(self):
        return self.y + self.height

    def is_empty(self):
        """Rectangle covers no pixels."""
        return self.width <= 0 or self.height <= 0

    def __bool__(self):
        return not self.is_empty()

    def union(self, other):
        """Smallest rectangle containing both; empty rectangles do not count."""
        if other.is_empty():
            return self
        if self.is_empty():
            return other
        return type(self).from_edges(
            min(self.left, other.left), min(self.top, other.top),
            max(self.right, other.right), max(self.bottom, other.bottom),
        )

    __or__ = union


EMPTY_RECT = Rect(0, 0, 0, 0)
