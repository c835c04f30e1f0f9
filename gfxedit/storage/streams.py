"""
gfxedit.storage.streams - binary streams with a text view

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import io
import logging
from pathlib import Path


def get_bytesio(bytestring):
    """Peekable binary stream on bytes."""
    return io.BufferedReader(io.BytesIO(bytestring))


def get_stringio(string):
    """Text stream on a string, with a peekable binary buffer."""
    return io.TextIOWrapper(get_bytesio(string.encode('utf-8')), encoding='utf-8')


class Stream:
    """
    Binary stream to load from or save to, with a utf-8 text view.

    Streams opened for reading can always `peek`, so that file signatures
    can be checked without consuming input. Other attributes are passed on
    to the binary stream.
    """

    def __init__(self, file, mode, *, name=''):
        """
        Wrap a stream.

        file: binary stream, or text stream with a binary buffer
        mode: 'r' or 'w'
        name: file name for messages and recognition (default: from the stream)
        """
        if isinstance(file, (str, Path)):
            raise ValueError('Expected a stream, not a file name.')
        self.mode = mode[:1]
        self.name = name or get_name(file)
        self.closed = False
        if self.mode == 'r' and not file.readable():
            raise ValueError('Expected a readable stream.')
        if self.mode == 'w' and not file.writable():
            raise ValueError('Expected a writable stream.')
        self._text = None
        self._own_text = False
        if not is_binary(file):
            try:
                buffer = file.buffer
            except AttributeError as e:
                raise ValueError('Text stream has no binary buffer.') from e
            logging.debug('Using buffer of text stream %r.', file)
            self._text = file
            file = buffer
        if self.mode == 'r' and not (file.seekable() and hasattr(file, 'peek')):
            # read everything into a buffer that can peek
            file = get_bytesio(file.read())
            self._text = None
        self._stream = file

    def __repr__(self):
        state = ' [closed]' if self.closed else ''
        return f"<{type(self).__name__} '{self.name}' mode={self.mode}{state}>"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __getattr__(self, attr):
        return getattr(self._stream, attr)

    @property
    def text(self):
        """Text view on the stream."""
        if self._text is None:
            if self.mode == 'r':
                # drop a byte order mark if there is one
                self._text = io.TextIOWrapper(
                    self._stream, encoding='utf-8-sig', errors='ignore'
                )
            else:
                self._text = io.TextIOWrapper(
                    self._stream, encoding='utf-8', newline=''
                )
            self._own_text = True
        return self._text

    def flush(self):
        if self._text is not None:
            self._text.flush()
        if self.mode == 'w':
            self._stream.flush()

    def detach(self):
        """Release the wrapped stream, leaving it open."""
        self.flush()
        if self._own_text:
            self._text.detach()
            self._text = None
            self._own_text = False
        self.closed = True

    def close(self):
        """Close the wrapped stream."""
        if self.closed:
            return
        logging.debug('Closing %r.', self)
        self.closed = True
        if self._text is not None:
            self._text.close()
        else:
            self._stream.close()


def is_binary(stream):
    """Stream reads or writes bytes."""
    if stream.readable():
        return isinstance(stream.read(0), bytes)
    try:
        stream.write(b'')
    except TypeError:
        return False
    return True


def get_name(stream):
    """File name of a stream, or empty if it has none."""
    try:
        return str(stream.name)
    except AttributeError:
        return ''
