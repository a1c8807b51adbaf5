import re
from collections import namedtuple

from csim.errors import InvalidGeometry, MalformedTraceLine


class Geometry(namedtuple('Geometry', 's E b')):
    """Cache shape: 2^s sets of E lines, each holding a 2^b byte block."""
    __slots__ = ()

    @classmethod
    def create(cls, s, E, b):
        if s < 0:
            raise InvalidGeometry('set index bits must be >= 0, got {}'.format(s))
        if E < 1:
            raise InvalidGeometry('lines per set must be >= 1, got {}'.format(E))
        if b < 0:
            raise InvalidGeometry('block bits must be >= 0, got {}'.format(b))
        return cls(s, E, b)

    @property
    def num_sets(self):
        return 1 << self.s

    @property
    def block_size(self):
        return 1 << self.b


HEX_ADDRESS = re.compile(r'[0-9a-fA-F]+')

MemOp = namedtuple(
    'MemOp', 'op_type address word_size set_index tag block_offset')


class AddressDecoder:
    """Splits a hex address into (tag, set index, block offset).

    With ``address_bits`` unset the address width is taken from the number
    of hex digits in the trace, four bits per digit, so ``10`` is an 8 bit
    address and ``7ff000370`` a 36 bit one. Pass a fixed width (e.g. 64)
    to mask every tag the same way regardless of how the trace was printed.
    """

    def __init__(self, geometry: Geometry, address_bits=None):
        self.geometry = geometry
        self.address_bits = address_bits

    def tag_mask(self, address_text: str) -> int:
        width = self.address_bits
        if width is None:
            width = 4 * len(address_text)
        tag_bits = max(width - self.geometry.s - self.geometry.b, 0)
        return (1 << tag_bits) - 1

    def decode(self, op_type: str, address_text: str, word_size=0) -> MemOp:
        if not HEX_ADDRESS.fullmatch(address_text):
            raise MalformedTraceLine(address_text)
        address = int(address_text, 16)
        s, b = self.geometry.s, self.geometry.b
        block_offset = address & ((1 << b) - 1)
        set_index = (address >> b) & ((1 << s) - 1)
        tag = (address >> (s + b)) & self.tag_mask(address_text)
        return MemOp(op_type, address, word_size, set_index, tag, block_offset)
