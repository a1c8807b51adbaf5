import logging
import re
from collections import namedtuple

import click

from csim.address import AddressDecoder, Geometry
from csim.cache import Cache
from csim.errors import MalformedTraceLine, UnknownAccessType
from csim.replacement import AccessResult, LRUPolicy

logger = logging.getLogger(__name__)

# a modify is a load followed by a store to the same address
ACCESSES_PER_OP = {'L': 1, 'S': 1, 'M': 2}

TraceRecord = namedtuple('TraceRecord', 'op_type address word_size text')


def parse_trace_line(line, line_no=None):
    """Parse one valgrind lackey line such as `` L 7ff000370,8``.

    Returns None for blank lines and instruction fetches, which the
    simulator ignores.
    """
    text = line.rstrip('\r\n')
    stripped = text.strip()
    if not stripped or stripped[0] == 'I':
        return None
    parts = re.split(r'\s+|,', stripped)
    if len(parts) != 3 or not parts[1]:
        raise MalformedTraceLine(text, line_no)
    op_type, address, word_size = parts
    try:
        word_size = int(word_size)
    except ValueError:
        raise MalformedTraceLine(text, line_no) from None
    return TraceRecord(op_type, address, word_size, text)


def _decode_lines(f):
    for line_no, raw in enumerate(f, 1):
        try:
            yield raw.decode('ascii')
        except UnicodeDecodeError:
            text = raw.decode('ascii', errors='replace').rstrip('\r\n')
            raise MalformedTraceLine(text, line_no) from None


class Stats:
    def __init__(self):
        self.hits = 0
        self.misses = 0
        self.evictions = 0

    def record(self, result: AccessResult):
        if result.hit:
            self.hits += 1
        else:
            self.misses += 1
        if result.eviction:
            self.evictions += 1

    def as_tuple(self):
        return self.hits, self.misses, self.evictions

    def __repr__(self):
        return 'hits:{} misses:{} evictions:{}'.format(*self.as_tuple())


class TraceRunner:
    """Replays a memory trace against a freshly built cache.

    ``run`` accepts any iterable of lines and leaves closing it to the
    caller; ``run_file`` opens and closes the trace itself.

    A record with an unknown access type is logged as a warning on stderr
    and never counted. Only verbose output marks it, with an ``Error!``
    token after the line; quiet runs print nothing for it.
    """

    def __init__(self, geometry: Geometry, verbose=False, echo=click.echo,
                 address_bits=None, policy=None):
        self.geometry = geometry
        self.verbose = verbose
        self.echo = echo
        self.decoder = AddressDecoder(geometry, address_bits)
        self.policy = policy or LRUPolicy()
        self.cache = None

    def run(self, lines) -> Stats:
        self.cache = Cache(self.geometry)
        stats = Stats()
        for line_no, line in enumerate(lines, 1):
            record = parse_trace_line(line, line_no)
            if record is None:
                continue
            try:
                results = self._replay(record, line_no)
            except UnknownAccessType as e:
                logger.warning('line %d: %s', line_no, e)
                tokens = ['Error!']
            else:
                tokens = []
                for result in results:
                    stats.record(result)
                    tokens.extend(result.tokens)
            if self.verbose:
                self.echo(' '.join([record.text] + tokens))
        logger.debug('trace done: %r', stats)
        return stats

    def run_file(self, path) -> Stats:
        with open(path, mode='rb') as f:
            return self.run(_decode_lines(f))

    def _replay(self, record, line_no):
        count = ACCESSES_PER_OP.get(record.op_type)
        if count is None:
            raise UnknownAccessType(record.op_type)
        try:
            mem_op = self.decoder.decode(
                record.op_type, record.address, record.word_size)
        except MalformedTraceLine:
            raise MalformedTraceLine(record.text, line_no) from None
        logger.debug('%s %#x size %d: set %d tag %#x offset %d',
                     mem_op.op_type, mem_op.address, mem_op.word_size,
                     mem_op.set_index, mem_op.tag, mem_op.block_offset)
        cache_set = self.cache[mem_op.set_index]
        return [self.policy.access(cache_set, mem_op.tag)
                for _ in range(count)]
