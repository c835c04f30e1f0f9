"""
gfxedit.storage.fontfiles - load and save fonts

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import io
import logging
from pathlib import Path

from gfxedit.base import FileFormatError
from .streams import Stream
from .base import loaders, savers


##############################################################################
# loading

def load(infile, *, format='', max_glyphs=None, **kwargs):
    """
    Read font from file.

    infile: input file path or binary/text stream
    format: input format (default: infer from magic number or filename)
    max_glyphs: truncate to this many glyphs (default: no limit)
    """
    if isinstance(infile, (str, Path)):
        with open(infile, 'rb') as f:
            with Stream(f, 'r', name=str(infile)) as instream:
                font = _load_stream(instream, format=format, **kwargs)
    else:
        instream = Stream(infile, 'r')
        try:
            font = _load_stream(instream, format=format, **kwargs)
        finally:
            instream.detach()
    if max_glyphs is not None and len(font) > max_glyphs:
        logging.warning(
            'Font has %d glyphs; keeping only the first %d.',
            len(font), max_glyphs
        )
        font.truncate(max_glyphs)
    return font


def _load_stream(instream, *, format='', **kwargs):
    """Load font from open stream."""
    matching_loaders = loaders.get_for(instream, format=format)
    if not matching_loaders:
        if format:
            raise FileFormatError(f'Format specification `{format}` not recognised.')
        raise FileFormatError(
            f"Could not infer input file format from filename '{instream.name}'."
        )
    loader, *others = matching_loaders
    if others:
        logging.debug(
            'Also matched formats %s.', ', '.join(_l.format for _l in others)
        )
    logging.info("Loading '%s' as format `%s`.", instream.name, loader.format)
    return loader(instream, **kwargs)


##############################################################################
# saving

def save(font, outfile, *, format='', **kwargs):
    """
    Write font to file.

    outfile: output file path or binary/text stream
    format: font file format (default: infer from filename)
    """
    if not len(font):
        raise ValueError('No glyphs to save.')
    if isinstance(outfile, (str, Path)):
        # encode in full before touching the file
        buffer = io.BytesIO()
        outstream = Stream(buffer, 'w', name=str(outfile))
        try:
            _save_stream(font, outstream, format=format, **kwargs)
        finally:
            outstream.detach()
        with open(outfile, 'wb') as f:
            f.write(buffer.getvalue())
    else:
        outstream = Stream(outfile, 'w')
        try:
            _save_stream(font, outstream, format=format, **kwargs)
        finally:
            outstream.detach()
    return font


def _save_stream(font, outstream, *, format='', **kwargs):
    """Save font to an open stream."""
    matching_savers = savers.get_for(outstream, format=format)
    if not matching_savers:
        if format:
            raise FileFormatError(f'Format specification `{format}` not recognised.')
        raise FileFormatError(
            f'Could not infer output file format from filename `{outstream.name}`, '
            'please specify format.'
        )
    if len(matching_savers) > 1:
        raise FileFormatError(
            f"Format for output filename '{outstream.name}' is ambiguous: "
            f'specify format with one of the values '
            f'({", ".join(_s.format for _s in matching_savers)})'
        )
    saver, *_ = matching_savers
    logging.info("Saving '%s' as format `%s`.", outstream.name, saver.format)
    saver(font, outstream, **kwargs)
