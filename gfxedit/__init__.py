"""
gfxedit - load, repair and save Adafruit GFX bitmap fonts

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import sys as _sys
assert _sys.version_info >= (3, 9)

from .constants import VERSION as __version__
from .base import FileFormatError, ParseError, StructuralError
from .core import (
    SparseMap, Glyph, GlyphStatus, Font, FontProperties,
    check_flatness, flatten,
)
from .storage import load, save, loaders, savers
