"""
gfxedit.base.struct - packed little-endian records

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import ctypes
from types import SimpleNamespace


class StructError(ValueError):
    """Buffer too short for the record."""


class _Layout:
    """Fixed-size binary layout backed by a ctypes type."""

    def __init__(self, ctype):
        self._ctype = ctype

    @property
    def size(self):
        """Size in bytes."""
        return ctypes.sizeof(self._ctype)

    def from_bytes(self, data):
        """Read a value from the start of a bytes-like object."""
        if len(data) < self.size:
            raise StructError(
                f'Need {self.size} bytes, got {len(data)}.'
            )
        return self._ctype.from_buffer_copy(data)

    def array(self, count):
        """Layout of a sequence of `count` values."""
        return _Layout(self._ctype * count)


class StructType(_Layout):
    """
    Record of named fields, packed without alignment, in little-endian order.

    >>> pair = StructType(code=ctypes.c_uint16, width=ctypes.c_uint8)
    >>> bytes(pair(code=0x41, width=8))
    b'A\\x00\\x08'

    Fields of values read or created are plain integer attributes.
    """

    def __init__(self, **fields):
        class _Record(ctypes.LittleEndianStructure):
            _fields_ = tuple(fields.items())
            _layout_ = 'ms'
            _pack_ = 1

        super().__init__(_Record)
        self.fields = tuple(fields)

    def __call__(self, **values):
        """Create a record; fields not given are zero."""
        unknown = set(values) - set(self.fields)
        if unknown:
            raise ValueError(f'Unknown fields: {", ".join(sorted(unknown))}')
        return self._ctype(**values)


little_endian = SimpleNamespace(
    Struct=StructType,
    uint8=ctypes.c_uint8,
    int8=ctypes.c_int8,
    uint16=ctypes.c_uint16,
    int32=ctypes.c_int32,
)
