"""
gfxedit.storage.magic - recognise font files by signature and file name

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import logging
from pathlib import Path
from fnmatch import fnmatch


# leading bytes inspected to tell text from binary
_SAMPLE_SIZE = 256
# C0 controls other than tab, line feed and carriage return; bytes not used in utf-8
_BINARY_BYTES = frozenset(
    (set(range(32)) - {9, 10, 13}) | set(range(0xf8, 0x100))
)


def looks_like_text(instream):
    """Readable stream has no binary-only bytes near its start."""
    if instream.mode == 'w':
        return True
    sample = instream.peek(_SAMPLE_SIZE)[:_SAMPLE_SIZE]
    if _BINARY_BYTES.intersection(sample):
        logging.debug("Input stream '%s' looks binary.", instream.name)
        return False
    return True


class MagicRegistry:
    """Loaders or savers, looked up by format name, signature or file name."""

    def __init__(self):
        self._names = {}
        self._signatures = []
        self._globs = []

    def get_formats(self):
        """Names of all registered formats."""
        return tuple(self._names)

    def __iter__(self):
        return iter(self._names.values())

    def register(self, name='', magic=(), patterns=(), text=False, linked=None):
        """
        Decorator to register a loader or saver.

        name: unique format name
        magic: leading byte sequences that identify the format when reading
        patterns: case-insensitive file name globs
        text: text-based format, not matched by file name if the input looks binary
        linked: registered loader to take details from where they are not given
        """
        if linked is not None:
            name = name or linked.format
            magic = magic or linked.magic
            patterns = patterns or linked.patterns
            text = text or linked.text
        if not name:
            raise ValueError('No registration name given.')
        if name in self._names:
            raise ValueError(f'Format name `{name}` is already registered.')
        signatures = tuple(Magic(_m) for _m in magic)
        globs = tuple(Glob(_p) for _p in patterns)

        def _decorator(converter):
            converter.format = name
            converter.magic = tuple(magic)
            converter.patterns = tuple(patterns)
            converter.text = text
            self._names[name] = converter
            self._signatures.extend((_s, converter) for _s in signatures)
            # longest signature wins
            self._signatures.sort(key=lambda _item: len(_item[0]), reverse=True)
            self._globs.extend((_g, converter) for _g in globs)
            return converter

        return _decorator

    def get_for(self, instream=None, format=''):
        """
        Converters for a named format, or else those that recognise the stream.

        instream: Stream or None
        format: format name, overrides recognition
        """
        if format:
            converter = self._names.get(format)
            return (converter,) if converter else ()
        if instream is None:
            return ()
        return self.identify(instream)

    def identify(self, instream):
        """Converters recognising the stream; signature matches come first."""
        matches = [
            _converter
            for _magic, _converter in self._signatures
            if _magic.fits(instream)
        ]
        is_text = looks_like_text(instream)
        for glob, converter in self._globs:
            if converter in matches or not glob.fits(instream):
                continue
            if converter.text and not is_text:
                logging.debug(
                    "File name matches text format `%s` but input looks binary.",
                    converter.format
                )
                continue
            matches.append(converter)
        logging.debug(
            "Stream '%s' matches formats %s.",
            instream.name, [_c.format for _c in matches]
        )
        return tuple(matches)


class Magic:
    """Signature at the start of a file."""

    def __init__(self, value):
        if not isinstance(value, bytes):
            raise TypeError(
                f'Signature must be bytes, not {type(value).__name__}.'
            )
        self._value = value

    def __len__(self):
        return len(self._value)

    def fits(self, instream):
        """Readable stream starts with the signature."""
        if instream.mode != 'r':
            return False
        return instream.peek(len(self))[:len(self)] == self._value


class Glob:
    """Case-insensitive file name pattern."""

    def __init__(self, pattern):
        self._pattern = pattern.lower()

    def matches(self, filename):
        return fnmatch(str(filename).lower(), self._pattern)

    def fits(self, stream):
        """Stream's file name matches the pattern."""
        return self.matches(Path(stream.name).name)
