"""
gfxedit.storage.utils - helpers shared by font format plugins
"""
