from csim.address import AddressDecoder, Geometry, MemOp
from csim.cache import Cache, Line, Set
from csim.errors import (CsimError, InvalidGeometry, MalformedTraceLine,
                         UnknownAccessType)
from csim.replacement import AccessResult, LRUPolicy
from csim.trace import Stats, TraceRecord, TraceRunner, parse_trace_line

__version__ = '0.1.0'
