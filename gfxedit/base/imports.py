"""
gfxedit.base.imports - plugin loading

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import sys
import pkgutil
from importlib import import_module


def import_all(package_name):
    """Import all public modules of a package and bind them as its attributes."""
    package = sys.modules[package_name]
    for module_info in pkgutil.iter_modules(package.__path__):
        if module_info.name.startswith('_'):
            continue
        setattr(
            package, module_info.name,
            import_module(f'{package_name}.{module_info.name}')
        )
