"""
gfxedit.scripts - command-line tools

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import os
import sys
import logging
from contextlib import contextmanager


@contextmanager
def wrap_main(debug=False):
    """Set up logging for a script; report errors as exit status 1."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format='%(levelname)s: %(message)s', force=True,
    )
    try:
        yield
    except BrokenPipeError:
        # output cut short, e.g. piped into `head`
        sys.stdout = os.fdopen(1)
    except Exception as exc:
        if debug:
            raise
        logging.error(exc)
        sys.exit(1)
