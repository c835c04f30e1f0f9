"""
gfxedit.base - supporting classes

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

from .basetypes import *
from .properties import Props
from . import struct
from . import binary
from .imports import import_all
