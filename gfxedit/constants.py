"""
gfxedit.constants - project-wide constants

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

NAME = 'gfxedit'
VERSION = '0.3.0'

# character code reserved for glyphs without a usable code
UNASSIGNED = 0xFFFF

# largest gap in the code sequence that flattening fills with blanks
GAP_LIMIT = 128

# advance given to synthesized blank glyphs so they show up in a glyph list
FILLER_ADVANCE = 4

# glyph count ceiling applied by interactive callers after loading
MAX_GLYPHS = 2048

# size of the GFXfont struct in memory, assuming 32-bit pointers
GFX_HEADER_SIZE = 13
