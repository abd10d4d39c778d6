import threading

from mystery_country.cache import DistanceCache, pair_key


class CountingCompute:
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.value


def test_pair_key_ignores_order_and_case():
    assert pair_key("France", "Monaco") == pair_key("monaco", "FRANCE")
    assert pair_key("France", "Monaco") != pair_key("France", "Italy")


def test_first_lookup_computes_and_stores(cache):
    compute = CountingCompute(42.5)
    assert cache.get_or_compute("France", "Spain", compute) == 42.5
    assert compute.calls == 1
    assert ("Spain", "France") in cache
    assert len(cache) == 1


def test_second_lookup_in_either_order_reuses_value(cache):
    compute = CountingCompute(42.5)
    first = cache.get_or_compute("France", "Spain", compute)
    second = cache.get_or_compute("Spain", "France", compute)
    third = cache.get_or_compute("spain", "FRANCE", compute)
    assert first == second == third == 42.5
    assert compute.calls == 1
    assert cache.hits == 2
    assert cache.misses == 1


def test_cached_value_never_changes(cache):
    cache.get_or_compute("France", "Spain", CountingCompute(10.0))
    other = CountingCompute(99.0)
    assert cache.get_or_compute("France", "Spain", other) == 10.0
    assert other.calls == 0
    assert cache.get("Spain", "France") == 10.0


def test_absent_result_is_not_cached(cache):
    missing = CountingCompute(None)
    assert cache.get_or_compute("France", "Atlantis", missing) is None
    assert cache.get_or_compute("France", "Atlantis", missing) is None
    assert missing.calls == 2
    assert ("France", "Atlantis") not in cache
    assert len(cache) == 0


def test_zero_distance_is_cached(cache):
    compute = CountingCompute(0.0)
    cache.get_or_compute("Italy", "Vatican", compute)
    assert cache.get_or_compute("Italy", "Vatican", compute) == 0.0
    assert compute.calls == 1


def test_get_unknown_pair_returns_none(cache):
    assert cache.get("France", "Spain") is None


def test_concurrent_callers_compute_each_pair_once():
    cache = DistanceCache()
    counts = {}
    counts_lock = threading.Lock()
    start = threading.Barrier(8)

    def make_compute(pair, value):
        def compute():
            with counts_lock:
                counts[pair] = counts.get(pair, 0) + 1
            return value
        return compute

    def worker(index):
        start.wait()
        for other in ("B", "C", "D"):
            names = ("A", other) if index % 2 else (other, "A")
            cache.get_or_compute(names[0], names[1], make_compute(other, float(ord(other))))

    threads = [threading.Thread(target=worker, args=(i,)) for i in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert counts == {"B": 1, "C": 1, "D": 1}
    assert len(cache) == 3
    assert cache.get("D", "A") == float(ord("D"))
