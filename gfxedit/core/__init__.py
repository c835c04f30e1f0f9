"""
gfxedit.core - font data model

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

from .sparsemap import SparseMap
from .glyph import Glyph, GlyphStatus
from .font import Font, FontProperties, check_flatness, flatten
