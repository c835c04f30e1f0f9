"""
gfxedit.storage.utils.source - utilities for reading and writing C source

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import re
import logging
from collections import deque

from gfxedit.base import ParseError, Props


class CCode:
    """C source code."""
    delimiters = '{}'
    comment = '//'
    block_comment = ('/*', '*/')


###############################################################################
# reader

class CTokenizer(CCode):
    """
    Token stream over lines of C source.

    Tokens are words and signed integers, or single symbols. Comments are
    dropped, except that a block comment starting with `/* PROPERTIES` is
    read as font metadata and made available in `properties`. `#pragma` and
    `#include` lines are skipped; other preprocessor directives are an error.
    """

    # words or signed numbers, comment delimiters, single symbols
    _token_re = re.compile(r'-?\w+|/\*|\*/|//|[^\w\s]')
    # C integer literal with optional sign and suffix
    _number_re = re.compile(r'(-?)(0[xX][0-9a-fA-F]+|[0-9]+)[uUlL]*')
    # keys recognised in the properties comment, and their converters
    _property_keys = {
        'FONT_NAME': ('font_name', str),
        'PIXEL_SIZE': ('pixel_size', int),
        'FONT_ASCENT': ('ascent', int),
        'FONT_DESCENT': ('descent', int),
    }

    def __init__(self, lines, name=''):
        """
        Set up tokenizer.

        lines: iterable of source lines
        name: file name to use in error messages
        """
        self._lines = iter(lines)
        self._tokens = deque()
        self._in_comment = False
        self.name = name
        self.line_number = 0
        self.properties = Props()

    def error(self, message, kind='malformed-token', **kwargs):
        """Create a diagnostic at the current position."""
        return ParseError(
            message, kind=kind, name=self.name,
            line_number=self.line_number, **kwargs
        )

    def _read_line(self):
        try:
            line = next(self._lines)
        except StopIteration:
            raise self.error(
                'Unexpected end of file.', kind='truncated-input'
            ) from None
        self.line_number += 1
        return line.strip()

    def _fill(self):
        """Read lines until there are tokens in the buffer."""
        while not self._tokens:
            line = self._read_line()
            if not line:
                continue
            if not self._in_comment:
                if line.startswith('#'):
                    directive, *_ = line[1:].split() or ('',)
                    if directive not in ('pragma', 'include'):
                        raise self.error(
                            f"Unsupported preprocessor directive '#{directive}'.",
                            found=f'#{directive}'
                        )
                    continue
                if line.startswith('/* PROPERTIES'):
                    self._read_properties()
                    continue
            self._tokens.extend(self._token_re.findall(line))

    def _read_properties(self):
        """Parse the properties comment block up to its closing delimiter."""
        while True:
            line = self._read_line()
            if line.startswith('*/'):
                return
            key, _, value = line.partition(' ')
            value = value.strip().strip('"')
            if key not in self._property_keys or not value:
                continue
            name, converter = self._property_keys[key]
            try:
                setattr(self.properties, name, converter(value))
            except ValueError:
                logging.warning(
                    '[%s][line:%d] Ignoring %s value `%s`.',
                    self.name, self.line_number, key, value
                )

    def next(self):
        """Consume and return the next token outside comments."""
        while True:
            self._fill()
            token = self._tokens.popleft()
            if self._in_comment:
                if token == self.block_comment[1]:
                    self._in_comment = False
                continue
            if token == self.comment:
                self._tokens.clear()
                continue
            if token == self.block_comment[0]:
                self._in_comment = True
                continue
            return token

    def restore(self, token):
        """Put a token back at the front of the stream."""
        self._tokens.appendleft(token)

    def peek(self):
        """Next token, without consuming it."""
        token = self.next()
        self.restore(token)
        return token

    def peek_is(self, target):
        """Next token matches; does not consume."""
        return self.peek() == target

    def optional(self, target):
        """Consume the next token only if it matches."""
        token = self.next()
        if token == target:
            return True
        self.restore(token)
        return False

    def expect(self, target):
        """Require the next token to match."""
        token = self.next()
        if token != target:
            raise self.error(
                f"Expected '{target}', found '{token}'.",
                expected=target, found=token
            )

    def expect_all(self, *targets):
        """Require a sequence of tokens."""
        for target in targets:
            self.expect(target)

    def number(self):
        """Consume a decimal or 0x-prefixed hexadecimal integer."""
        token = self.next()
        match = self._number_re.fullmatch(token)
        if not match:
            raise self.error(
                f"Expected number, found '{token}'.",
                expected='number', found=token
            )
        sign, digits = match.groups()
        value = int(digits, 0) if digits[1:2] in ('x', 'X') else int(digits, 10)
        return -value if sign else value

    def number_list(self):
        """Comma-separated numbers up to a closing brace, which is not consumed."""
        values = []
        while not self.peek_is(self.delimiters[1]):
            values.append(self.number())
            if not self.optional(','):
                break
        return values


###############################################################################
# writer

class CCodeWriter(CCode):

    @classmethod
    def to_identifier(cls, identifier):
        """Convert name to C identifier."""
        identifier = ''.join(_c if _c.isalnum() and _c.isascii() else '_' for _c in identifier)
        if not identifier[:1].isalpha():
            identifier = 'font_' + identifier
        return identifier

    @classmethod
    def encode_int(cls, value):
        """Output hex number in C format."""
        return f'0x{value:02X}'

    @classmethod
    def code_comment(cls, code):
        """Block comment labelling a character code, with the character if printable."""
        char = f"'{chr(code)}' " if 0x20 <= code < 0x7f else ''
        start, end = cls.block_comment
        return f'{start} {char}0x{code:02X} {end}'
