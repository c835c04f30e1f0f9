"""
gfxedit.storage.base - format registries

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

from .magic import MagicRegistry

loaders = MagicRegistry()
savers = MagicRegistry()
