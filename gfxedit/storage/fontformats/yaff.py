"""
gfxedit.storage.fontformats.yaff - monobit yaff text format

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import logging
from pathlib import Path

from gfxedit.storage import loaders
from gfxedit.core import Glyph, GlyphStatus, Font, FontProperties
from gfxedit.base import Props
from gfxedit.constants import UNASSIGNED

from gfxedit.storage.utils.limitations import make_contiguous


@loaders.register(
    name='yaff',
    patterns=('*.yaff',),
    text=True,
)
def load_yaff(instream, flatten:bool=False):
    """
    Load font from a monobit yaff file.

    flatten: reassign duplicate and missing codes to get a contiguous range (default: False)
    """
    reader = YaffReader(instream.text, name=Path(instream.name).name)
    font = reader.read_font()
    if flatten:
        make_contiguous(font)
    return font


##############################################################################
# format parameters

class YaffParams:
    """Parameters for .yaff format."""

    separator = ':'
    comment = '#'
    whitespace = tuple(' \t')
    quotes = tuple('\'"')
    ink = '@'
    paper = '.'
    empty = '-'


# font properties we keep, and their converters
_FONT_PROPERTIES = {
    'name': ('font_name', str),
    'pixel_size': ('pixel_size', int),
    'ascent': ('ascent', int),
    'descent': ('descent', int),
}


def normalise_property(key):
    """Property key in lower case, with underscores."""
    return key.strip().lower().replace('-', '_')


def _strip_quotes(value):
    if len(value) > 1 and value[0] == value[-1] == '"':
        return value[1:-1]
    return value


##############################################################################
# reader

class YaffReader(YaffParams):
    """Line-based reader for yaff text."""

    def __init__(self, lines, name=''):
        self._lines = lines
        self.name = name
        self.line_number = 0
        self.font_props = {}
        self.blocks = []
        # glyph block being read
        self._block = None
        # key of a property whose value follows on indented lines
        self._open_key = None

    def read_font(self):
        """Read a yaff file into a font."""
        for line_number, line in enumerate(self._lines, 1):
            self.line_number = line_number
            line = line.rstrip()
            if not line or line.startswith(self.comment):
                continue
            indented = line.startswith(self.whitespace)
            key, value = self._split_key(line.strip())
            if key is None:
                self._read_row(line.strip())
            elif value:
                self._open_key = None
                self._read_property(key, _strip_quotes(value), indented)
            elif not indented:
                self._read_label(key)
        self._finish_block()
        return self._build_font()

    def _split_key(self, line):
        """Split into key and value; key is None if this is not a key line."""
        # a quoted character label can be a separator
        if line[:1] in self.quotes and line[2:4] == line[:1] + self.separator:
            return line[:3], line[4:].strip()
        if self.separator not in line:
            return None, ''
        key, _, value = line.partition(self.separator)
        return key.strip(), value.strip()

    def _read_label(self, key):
        """Unindented key without a value: glyph label or start of a property."""
        if self._block is not None and self._block.rows is not None:
            self._finish_block()
        if key[:1].isalpha() and not key.lower().startswith('u+'):
            # tag label, or a property with its value on the following lines
            self._open_key = key
            return
        self._open_key = None
        self._current_block().labels.append(key)

    def _read_row(self, line):
        """Bitmap row, empty-glyph marker or continuation of a property value."""
        is_row = set(line) <= set(self.ink + self.paper) or set(line) == {self.empty}
        if self._open_key is not None:
            if not is_row:
                self._continue_property(line)
                return
            # label that is not a code
            logging.debug('Ignoring glyph tag `%s`.', self._open_key)
            self._open_key = None
            self._current_block()
        if not is_row or self._block is None:
            logging.debug(
                '[%s][line:%d] Ignoring line: %s', self.name, self.line_number, line
            )
            return
        if self._block.rows is None:
            self._block.rows = []
        elif self._block.rows and set(self._block.rows[0]) == {self.empty}:
            logging.warning(
                '[%s][line:%d] Bitmap row after empty glyph marker.',
                self.name, self.line_number
            )
        self._block.rows.append(line)

    def _continue_property(self, line):
        key = normalise_property(self._open_key)
        if self.blocks or self._block is not None:
            logging.debug('Ignoring multiline glyph property `%s`.', key)
            return
        previous = self.font_props.get(key)
        self.font_props[key] = line if not previous else f'{previous} {line}'

    def _read_property(self, key, value, indented):
        """Font property, or property of the current glyph."""
        key = normalise_property(key)
        if not indented and not self.blocks and self._block is None:
            if key in self.font_props:
                logging.debug('Duplicate font property `%s`.', key)
            self.font_props[key] = value
        elif self._block is None:
            logging.debug('Ignoring glyph property `%s` outside glyph.', key)
        else:
            self._block.properties[key] = value

    def _current_block(self):
        if self._block is None:
            self._block = Props(
                labels=[], rows=None, properties={},
                line_number=self.line_number,
            )
        return self._block

    def _finish_block(self):
        if self._block is not None and self._block.rows is not None:
            self.blocks.append(self._block)
        self._block = None

    ##########################################################################
    # glyph and font construction

    def _parse_code(self, labels, line_number):
        """Character code from the labels; UNASSIGNED if there is none."""
        char_code, unicode_code, char_label = None, None, None
        for label in labels:
            lower = label.lower()
            try:
                if ',' in label:
                    logging.debug('Ignoring label list `%s`.', label)
                elif label[:1] in self.quotes:
                    if len(label) == 3 and label[2] == label[0]:
                        char_label = ord(label[1])
                    else:
                        raise ValueError(label)
                elif lower.startswith('u+'):
                    unicode_code = int(lower[2:], 16)
                elif lower.startswith(('0x', '0o')):
                    char_code = int(lower, 0)
                else:
                    char_code = int(label, 10)
            except ValueError:
                logging.warning(
                    '[%s][line:%d] Cannot parse glyph label `%s`.',
                    self.name, line_number, label
                )
        for code in (char_code, unicode_code, char_label):
            if code is not None:
                return code if 0 <= code < UNASSIGNED else UNASSIGNED
        return UNASSIGNED

    def _int_property(self, props, key, line_number):
        try:
            return int(props.get(key, 0))
        except ValueError:
            logging.warning(
                '[%s][line:%d] Ignoring %s value `%s`.',
                self.name, line_number, key, props[key]
            )
            return 0

    def _make_glyph(self, block, seen_codes):
        code = self._parse_code(block.labels, block.line_number)
        status = GlyphStatus.NORMAL
        if code == UNASSIGNED:
            status = GlyphStatus.ERROR
        elif code in seen_codes:
            logging.warning(
                '[%s][line:%d] Duplicate glyph code 0x%04X.',
                self.name, block.line_number, code
            )
            code, status = UNASSIGNED, GlyphStatus.ERROR
        else:
            seen_codes.add(code)
        rows = block.rows
        if set(rows[0]) == {self.empty}:
            # `-` is an empty glyph; longer runs of `-` give it an advance
            width, rows = len(rows[0]) - 1, []
        else:
            width = max(len(_row) for _row in rows)
        glyph = Glyph(
            (
                (_x, _y)
                for _y, _row in enumerate(rows)
                for _x, _c in enumerate(_row)
                if _c == self.ink
            ),
            code=code, x_advance=width, status=status,
        )
        left = self._int_property(block.properties, 'left_bearing', block.line_number)
        right = self._int_property(block.properties, 'right_bearing', block.line_number)
        if left:
            if len(glyph):
                glyph.offset(left, 0)
            glyph.x_advance = max(0, glyph.x_advance + left)
        if right:
            glyph.x_advance = max(0, glyph.x_advance + right)
        return glyph, len(rows)

    def _font_properties(self):
        props = FontProperties()
        for key, (name, converter) in _FONT_PROPERTIES.items():
            if key not in self.font_props:
                continue
            try:
                setattr(props, name, converter(self.font_props[key]))
            except ValueError:
                logging.warning(
                    '[%s] Ignoring %s value `%s`.',
                    self.name, key, self.font_props[key]
                )
        return props

    def _build_font(self):
        seen_codes = set()
        glyphs, map_height = [], 0
        for block in self.blocks:
            glyph, height = self._make_glyph(block, seen_codes)
            glyphs.append(glyph)
            map_height = max(map_height, height)
        y_advance = 0
        if 'line_height' in self.font_props:
            y_advance = self._int_property(self.font_props, 'line_height', 0)
        elif 'shift_up' in self.font_props:
            y_advance = map_height + self._int_property(self.font_props, 'shift_up', 0)
        if y_advance <= 0:
            y_advance = map_height
        # bitmaps hang from the top of the line
        for glyph in glyphs:
            glyph.offset(0, -y_advance)
        return Font(
            glyphs, y_advance=y_advance, properties=self._font_properties(),
        )
