import enum
import logging

from csim.cache import Set

logger = logging.getLogger(__name__)


class AccessResult(enum.Enum):
    HIT = 'hit'
    MISS_FILL = 'miss'
    MISS_EVICT = 'miss eviction'

    @property
    def hit(self):
        return self is AccessResult.HIT

    @property
    def eviction(self):
        return self is AccessResult.MISS_EVICT

    @property
    def tokens(self):
        return self.value.split()


class LRUPolicy:
    """Least-recently-used replacement driven by per-line recency counters.

    Every access leaves the touched line at recency 0 and ages every other
    valid line of the set by one, so the largest counter marks the LRU
    line. When several valid lines share the largest counter the last one
    scanned is evicted.
    """

    def access(self, cache_set: Set, tag) -> AccessResult:
        invalid_line = None
        victim = None
        max_recency = 0
        for line in cache_set.lines:
            if line.valid and line.tag == tag:
                line.touch()
                cache_set.age_all()
                return AccessResult.HIT
            elif invalid_line is None and not line.valid:
                invalid_line = line
            elif line.valid and line.recency >= max_recency:
                victim = line
                max_recency = line.recency

        if invalid_line is not None:
            invalid_line.install(tag)
            cache_set.age_all()
            return AccessResult.MISS_FILL

        logger.debug('evicting tag %#x (recency %d) for tag %#x',
                     victim.tag, victim.recency, tag)
        victim.install(tag)
        cache_set.age_all()
        return AccessResult.MISS_EVICT
