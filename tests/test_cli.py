"""
gfxedit test suite
command-line tests
"""

import io
import unittest
from contextlib import redirect_stdout

import gfxedit
from gfxedit.scripts.convert import main

from .base import BaseTester


class TestConvert(BaseTester):
    """Test the gfxedit command."""

    def _run(self, *args):
        output = io.StringIO()
        with redirect_stdout(output):
            main([str(_a) for _a in args])
        return output.getvalue()

    def test_convert(self):
        """Test converting a header to BDF."""
        outfile = self.temp_path / 'sample.bdf'
        self._run(self.font_path / 'sample.h', outfile)
        font = gfxedit.load(outfile)
        self.assertEqual(len(font), 3)
        self.assertEqual(font.properties.font_name, 'Sample Font')

    def test_info(self):
        """Test showing font information."""
        output = self._run(self.font_path / 'sample.h')
        self.assertIn('glyphs: 3\n', output)
        self.assertIn('codes: 0x0041--0x0043\n', output)
        self.assertIn('flat: yes\n', output)
        self.assertIn('y_advance: 8\n', output)
        self.assertIn('font_name: Sample Font\n', output)

    def test_flatten(self):
        """Test repairing codes on the way to a format that needs them."""
        outfile = self.temp_path / 'sample.gfxfntb'
        output = self._run(
            '--flatten', '--info', self.font_path / 'sample.bdf', outfile
        )
        self.assertIn('flat: yes\n', output)
        self.assertIn('inserted: 2\n', output)
        self.assertIn('errors: 1\n', output)
        font = gfxedit.load(outfile)
        self.assertEqual([_g.code for _g in font.glyphs], [64, 65, 66, 67, 68])

    def test_max_glyphs(self):
        """Test truncating the glyph list."""
        output = self._run('--max-glyphs', 1, self.font_path / 'sample.h')
        self.assertIn('glyphs: 1\n', output)

    def test_to_format(self):
        """Test choosing the output format."""
        outfile = self.temp_path / 'sample.dat'
        self._run('-t', 'gfxxml', self.font_path / 'sample.draw', outfile)
        font = gfxedit.load(outfile, format='gfxxml')
        self.assertEqual(len(font), 3)

    def test_failure(self):
        """Test errors end the command with an exit code."""
        with self.assertRaises(SystemExit) as cm:
            self._run(self.font_path / 'sample.bdf', self.temp_path / 'sample.h')
        self.assertEqual(cm.exception.code, 1)
        self.assertFalse((self.temp_path / 'sample.h').exists())

    def test_version(self):
        """Test the version option."""
        with self.assertRaises(SystemExit) as cm:
            self._run('--version')
        self.assertEqual(cm.exception.code, 0)


if __name__ == '__main__':
    unittest.main()
