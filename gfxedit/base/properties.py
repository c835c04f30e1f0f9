"""
gfxedit.base.properties - property namespaces

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

from types import SimpleNamespace


class Props(SimpleNamespace):
    """Attribute namespace that prints as `key: value` lines."""

    def __str__(self):
        return '\n'.join(f'{_k}: {_v}' for _k, _v in vars(self).items())
