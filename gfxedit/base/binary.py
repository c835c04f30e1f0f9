"""
gfxedit.base.binary - binary utilities

(c) 2024 gfxedit authors
licence: https://opensource.org/licenses/MIT
"""


def ceildiv(num, den):
    """Integer division, rounding up."""
    return -(-num // den)


def bytes_to_bits(byteseq, length=None):
    """
    Convert bytes/bytearray/sequence of int to tuple of bits, msb first.

    length: number of bits to return; must not exceed the bits available
    """
    if length is not None and length > 8 * len(byteseq):
        raise ValueError(
            f'Need {ceildiv(length, 8)} bytes for {length} bits, '
            f'got {len(byteseq)}.'
        )
    if not byteseq:
        return ()
    bitstr = bin(int.from_bytes(bytes(byteseq), 'big'))[2:].zfill(8 * len(byteseq))
    bits = tuple(_c == '1' for _c in bitstr)
    if length is None:
        return bits
    return bits[:length]


def bits_to_bytes(bitseq):
    """
    Convert sequence of bits to bytes, msb first.
    Trailing bits of the last byte are left unset.
    """
    if not bitseq:
        return b''
    bytesize = ceildiv(len(bitseq), 8)
    bitstr = ''.join('1' if _b else '0' for _b in bitseq)
    bitstr = bitstr.ljust(bytesize * 8, '0')
    return int(bitstr, 2).to_bytes(bytesize, 'big')
