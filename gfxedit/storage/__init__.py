"""
gfxedit.storage - recognise files, load and save fonts

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

from .base import loaders, savers
from .fontfiles import load, save
from .magic import Glob, Magic
from ..base import FileFormatError
from .streams import Stream, get_stringio, get_bytesio
from . import streams


# ensure plugins get loaded
from . import fontformats as _fontformats
