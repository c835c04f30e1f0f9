"""
gfxedit test suite
storage and format dispatch tests
"""

import io
import unittest

import gfxedit
from gfxedit import Font, FileFormatError
from gfxedit.storage import Glob, Magic, Stream, get_bytesio

from .base import BaseTester, glyph_summary


class TestRegistry(BaseTester):
    """Test format registration and recognition."""

    def test_formats(self):
        """Test all codecs are registered."""
        self.assertEqual(
            set(gfxedit.loaders.get_formats()),
            {'gfxfont', 'bdf', 'gfxbinary', 'gfxxml', 'hexdraw', 'yaff'}
        )
        self.assertEqual(
            set(gfxedit.savers.get_formats()),
            {'gfxfont', 'bdf', 'gfxbinary', 'gfxxml'}
        )

    def test_glob(self):
        """Test case-insensitive filename patterns."""
        self.assertTrue(Glob('*.h').matches('Font.H'))
        self.assertFalse(Glob('*.h').matches('font.hpp'))

    def test_magic(self):
        """Test leading-bytes signatures."""
        magic = Magic(b'STARTFONT ')
        self.assertTrue(magic.fits(Stream(get_bytesio(b'STARTFONT 2.1\n'), 'r')))
        self.assertFalse(magic.fits(Stream(get_bytesio(b'STARTCHAR\n'), 'r')))
        with self.assertRaises(TypeError):
            Magic('STARTFONT')

    def test_duplicate_name(self):
        """Test format names must be unique."""
        with self.assertRaises(ValueError):
            gfxedit.loaders.register(name='bdf')(lambda _s: None)


class TestLoadSave(BaseTester):
    """Test loading and saving through files and streams."""

    def test_by_extension(self):
        """Test formats are chosen by file extension, in any case."""
        font = self.make_font()
        for name in ('font.h', 'FONT.BDF', 'font.gfxfntb', 'font.GfxFntX'):
            path = self.temp_path / name
            gfxedit.save(font, path)
            copy = gfxedit.load(path)
            self.assertEqual(glyph_summary(copy), glyph_summary(font), name)

    def test_by_signature(self):
        """Test BDF files are recognised whatever their name."""
        path = self.temp_path / 'font.txt'
        path.write_bytes((self.font_path / 'sample.bdf').read_bytes())
        with self.assertLogs(level='WARNING'):
            font = gfxedit.load(path)
        self.assertEqual(len(font), 3)

    def test_format_override(self):
        """Test giving the format explicitly."""
        path = self.temp_path / 'font.dat'
        gfxedit.save(self.make_font(), path, format='gfxxml')
        font = gfxedit.load(path, format='gfxxml')
        self.assertEqual(len(font), 3)

    def test_unknown(self):
        """Test unrecognised files and format names."""
        path = self.temp_path / 'font.xyz'
        path.write_text('hello')
        with self.assertRaises(FileFormatError):
            gfxedit.load(path)
        with self.assertRaises(FileFormatError):
            gfxedit.load(path, format='nope')
        with self.assertRaises(FileFormatError):
            gfxedit.save(self.make_font(), path)
        self.assertEqual(path.read_text(), 'hello')

    def test_load_only(self):
        """Test hexdraw files cannot be written."""
        with self.assertRaises(FileFormatError):
            gfxedit.save(self.make_font(), self.temp_path / 'font.draw')

    def test_empty(self):
        """Test an empty font is not saved."""
        with self.assertRaises(ValueError):
            gfxedit.save(Font(), self.temp_path / 'font.h')
        self.assertFalse((self.temp_path / 'font.h').exists())

    def test_max_glyphs(self):
        """Test truncating on load."""
        with self.assertLogs(level='WARNING'):
            font = gfxedit.load(self.font_path / 'sample.h', max_glyphs=2)
        self.assertEqual([_g.code for _g in font.glyphs], [0x41, 0x42])
        font = gfxedit.load(self.font_path / 'sample.h', max_glyphs=3)
        self.assertEqual(len(font), 3)

    def test_open_file(self):
        """Test loading from an open file leaves it open."""
        with open(self.font_path / 'sample.h', 'rb') as f:
            font = gfxedit.load(f)
            self.assertFalse(f.closed)
        self.assertEqual(len(font), 3)

    def test_text_to_stream(self):
        """Test writing a text format to a binary stream."""
        stream = io.BytesIO()
        gfxedit.save(self.make_font(), stream, format='gfxfont')
        self.assertFalse(stream.closed)
        text = stream.getvalue().decode('utf-8')
        self.assertTrue(text.startswith('#pragma once\n'))
        font = gfxedit.load(get_bytesio(stream.getvalue()), format='gfxfont')
        self.assertEqual(glyph_summary(font), glyph_summary(self.make_font()))


if __name__ == '__main__':
    unittest.main()
