"""
gfxedit.storage.fontformats - font file format plugins

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

from gfxedit.base import import_all

import_all(__name__)
