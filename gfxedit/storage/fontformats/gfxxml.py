"""
gfxedit.storage.fontformats.gfxxml - XML serialisation of fonts and glyphs

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""

import binascii
from base64 import b64encode, b64decode
import xml.etree.ElementTree as etree

from gfxedit.storage import loaders, savers
from gfxedit.core import Glyph, Font, FontProperties
from gfxedit.base import FileFormatError


# glyph elements, in document order
_GLYPH_TAGS = ('Code', 'Width', 'Height', 'xAdvance', 'xOffset', 'yOffset')

# font property elements and their attributes
_PROPERTY_TAGS = {
    'FontName': 'font_name',
    'PixelSize': 'pixel_size',
    'Ascent': 'ascent',
    'Descent': 'descent',
}


@loaders.register(
    name='gfxxml',
    patterns=('*.gfxfntx',),
    text=True,
)
def load_gfxxml(instream):
    """Load font from XML file."""
    root = _parse(instream.read())
    if root.tag != 'GfxFont':
        raise FileFormatError(
            f'Not a valid font XML file: root should be <GfxFont>, not <{root.tag}>'
        )
    properties = FontProperties()
    props_node = root.find('Properties')
    if props_node is not None:
        for tag, attr in _PROPERTY_TAGS.items():
            value = props_node.findtext(tag)
            if value is None:
                continue
            if attr != 'font_name':
                value = _to_int(value, tag)
            setattr(properties, attr, value)
    return Font(
        glyphs_from_xml(_find(root, 'glyphs')),
        y_advance=_to_int(_find(root, 'yAdvance').text, 'yAdvance'),
        properties=properties,
    )


@savers.register(linked=load_gfxxml)
def save_gfxxml(font, outstream):
    """Save font to XML file."""
    root = etree.Element('GfxFont')
    etree.SubElement(root, 'yAdvance').text = str(font.y_advance)
    values = {
        _tag: getattr(font.properties, _attr)
        for _tag, _attr in _PROPERTY_TAGS.items()
    }
    if any(_v is not None for _v in values.values()):
        props_node = etree.SubElement(root, 'Properties')
        for tag, value in values.items():
            if value is not None:
                etree.SubElement(props_node, tag).text = str(value)
    root.append(glyphs_to_xml(font.glyphs))
    etree.indent(root)
    outstream.write(b'<?xml version="1.0" encoding="utf-8"?>\n')
    etree.ElementTree(root).write(outstream, encoding='utf-8', xml_declaration=False)
    outstream.write(b'\n')


###############################################################################
# glyph elements, also used for clipboard transfer

def glyph_to_xml(glyph):
    """Create <Glyph> element."""
    node = etree.Element('Glyph')
    for tag, value in zip(_GLYPH_TAGS, (
            glyph.code, glyph.width, glyph.height,
            glyph.x_advance, glyph.x_offset, glyph.y_offset,
        )):
        etree.SubElement(node, tag).text = str(value)
    etree.SubElement(node, 'Data').text = b64encode(glyph.packed_bytes()).decode('ascii')
    return node


def glyph_from_xml(node):
    """Create glyph from <Glyph> element."""
    code, width, height, x_advance, x_offset, y_offset = (
        _to_int(_find(node, _tag).text, _tag) for _tag in _GLYPH_TAGS
    )
    try:
        data = b64decode(_find(node, 'Data').text or '', validate=True)
    except binascii.Error as e:
        raise FileFormatError(f'Could not decode glyph 0x{code:04X} data: {e}') from e
    try:
        return Glyph.from_bytes(
            data, width, height, x_offset=x_offset, y_offset=y_offset,
            x_advance=x_advance, code=code,
        )
    except ValueError as e:
        raise FileFormatError(f'Glyph 0x{code:04X} data is truncated: {e}') from e


def glyphs_to_xml(glyphs):
    """Create <glyphs> element holding a sequence of glyphs."""
    node = etree.Element('glyphs')
    node.extend(glyph_to_xml(_g) for _g in glyphs)
    return node


def glyphs_from_xml(node):
    """List of glyphs from a <glyphs> element."""
    return [glyph_from_xml(_g) for _g in node.iterfind('Glyph')]


def glyphs_to_xml_string(glyphs):
    """Serialise glyphs to an XML string."""
    return etree.tostring(glyphs_to_xml(glyphs), encoding='unicode')


def glyphs_from_xml_string(text):
    """Read glyphs from an XML string."""
    root = _parse(text)
    if root.tag == 'Glyph':
        return [glyph_from_xml(root)]
    if root.tag != 'glyphs':
        raise FileFormatError(
            f'Expected <glyphs> or <Glyph> element, not <{root.tag}>'
        )
    return glyphs_from_xml(root)


###############################################################################
# helpers

def _parse(data):
    try:
        return etree.fromstring(data)
    except etree.ParseError as e:
        raise FileFormatError(f'Not a valid XML file: {e}') from e


def _find(node, tag):
    """Required child element."""
    child = node.find(tag)
    if child is None:
        raise FileFormatError(f'Element <{node.tag}> has no <{tag}>.')
    return child


def _to_int(text, tag):
    try:
        return int((text or '').strip())
    except ValueError as e:
        raise FileFormatError(f'Element <{tag}> is not an integer: {text!r}') from e
