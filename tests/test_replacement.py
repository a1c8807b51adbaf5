from csim.address import Geometry
from csim.cache import Cache, Line, Set
from csim.replacement import AccessResult, LRUPolicy


def make_set(E):
    return Cache(Geometry.create(0, E, 0))[0]


def test_fill_then_hit():
    policy = LRUPolicy()
    cache_set = make_set(2)
    assert policy.access(cache_set, 0xa) is AccessResult.MISS_FILL
    assert policy.access(cache_set, 0xb) is AccessResult.MISS_FILL
    assert policy.access(cache_set, 0xa) is AccessResult.HIT
    assert sorted(cache_set.valid_tags()) == [0xa, 0xb]


def test_recency_counters():
    policy = LRUPolicy()
    cache_set = make_set(3)
    for tag in (1, 2, 3):
        policy.access(cache_set, tag)
    assert [line.recency for line in cache_set] == [2, 1, 0]
    policy.access(cache_set, 1)
    assert [line.recency for line in cache_set] == [0, 2, 1]


def test_lru_line_is_evicted():
    policy = LRUPolicy()
    cache_set = make_set(2)
    for tag in ('A', 'B', 'A'):
        policy.access(cache_set, tag)
    assert policy.access(cache_set, 'C') is AccessResult.MISS_EVICT
    assert sorted(cache_set.valid_tags()) == ['A', 'C']
    assert cache_set.find('B') is None


def test_single_line_alternating_tags():
    policy = LRUPolicy()
    cache_set = make_set(1)
    results = [policy.access(cache_set, tag) for tag in (1, 2) * 5]
    assert results[0] is AccessResult.MISS_FILL
    assert all(r is AccessResult.MISS_EVICT for r in results[1:])


def test_equal_recency_evicts_last_scanned():
    cache_set = Set([Line(True, 1, 3), Line(True, 2, 3), Line(True, 3, 1)])
    assert LRUPolicy().access(cache_set, 9) is AccessResult.MISS_EVICT
    assert [line.tag for line in cache_set] == [1, 9, 3]
    assert [line.recency for line in cache_set] == [4, 0, 2]


def test_first_invalid_line_is_filled():
    cache_set = Set([Line(True, 1, 0), Line(), Line()])
    assert LRUPolicy().access(cache_set, 2) is AccessResult.MISS_FILL
    assert [line.tag for line in cache_set] == [1, 2, None]
    assert [line.valid for line in cache_set] == [True, True, False]


def test_invalid_lines_are_not_aged():
    cache_set = make_set(2)
    LRUPolicy().access(cache_set, 5)
    assert cache_set.lines[1].recency == 0
    assert not cache_set.lines[1].valid


def test_result_tokens():
    assert AccessResult.HIT.tokens == ['hit']
    assert AccessResult.MISS_FILL.tokens == ['miss']
    assert AccessResult.MISS_EVICT.tokens == ['miss', 'eviction']
