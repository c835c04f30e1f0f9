"""
gfxedit.scripts.convert - convert, repair and inspect GFX fonts

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import sys
import argparse

import gfxedit
from gfxedit.base import Props
from gfxedit.core import GlyphStatus
from gfxedit.constants import NAME, VERSION, MAX_GLYPHS

from . import wrap_main


def get_parser():
    parser = argparse.ArgumentParser(
        prog=NAME,
        description='Convert bitmap fonts between Adafruit GFX header, BDF, binary and XML formats.',
    )
    parser.add_argument(
        'infile', type=str,
        help='font file to read'
    )
    parser.add_argument(
        'outfile', nargs='?', type=str, default='',
        help='font file to write. if not given, only show information'
    )
    parser.add_argument(
        '--format', '-f', type=str, default='',
        help=(
            'format of the input file (default: infer from file name or contents; '
            f'options: {", ".join(gfxedit.loaders.get_formats())})'
        )
    )
    parser.add_argument(
        '--to-format', '-t', type=str, default='',
        help=(
            'format of the output file (default: infer from file name; '
            f'options: {", ".join(gfxedit.savers.get_formats())})'
        )
    )
    parser.add_argument(
        '--flatten', action='store_true',
        help='reassign duplicate and missing codes to get a contiguous range'
    )
    parser.add_argument(
        '--max-glyphs', type=int, default=MAX_GLYPHS,
        help=f'keep at most this many glyphs (default: {MAX_GLYPHS})'
    )
    parser.add_argument(
        '--info', action='store_true',
        help='show information about the font'
    )
    parser.add_argument(
        '--debug', action='store_true',
        help='show debugging output'
    )
    parser.add_argument(
        '--version', action='version', version=f'{NAME} {VERSION}',
    )
    return parser


def font_info(font):
    """Summary of font metrics and glyph status."""
    statuses = [_g.status for _g in font.glyphs]
    info = Props(
        glyphs=len(font),
        codes=f'0x{font.start_code:04X}--0x{font.end_code:04X}',
        flat='yes' if font.is_flat() else 'no',
        y_advance=font.y_advance,
        max_advance=font.max_advance,
        bounds=' '.join(str(_v) for _v in font.full_bounds),
        inserted=statuses.count(GlyphStatus.INSERTED),
        errors=statuses.count(GlyphStatus.ERROR),
    )
    props = font.properties
    for key, value in vars(props).items():
        if value is not None:
            setattr(info, key, value)
    return info


def main(argv=None):
    args = get_parser().parse_args(argv)
    with wrap_main(args.debug):
        font = gfxedit.load(
            args.infile, format=args.format, max_glyphs=args.max_glyphs
        )
        if args.flatten:
            font.flatten()
        if args.info or not args.outfile:
            sys.stdout.write(str(font_info(font)) + '\n')
        if args.outfile:
            gfxedit.save(font, args.outfile, format=args.to_format)


if __name__ == '__main__':
    main()
