from marketing_calendar.core.filters import FilterState
from marketing_calendar.data.cache import LayoutCache, layout_key


def _key(query, revision=0, filters=None):
    return layout_key(brand_id="brand-1", year=2025, filters=filters or FilterState(), query=query, revision=revision)


def test_key_normalizes_query_case_and_blank_queries():
    assert _key("Sale") == _key("sale")
    assert _key("   ") == _key(None) == _key("")
    assert _key("sale") != _key("sale", revision=1)
    assert _key("sale") != _key("sale", filters=FilterState(school=False))


def test_lru_eviction():
    cache = LayoutCache(max_entries=2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.get("a")
    cache.put("c", 3)

    assert list(cache.entries) == ["a", "c"]
    assert cache.get("b") is None


def test_get_or_compute_counts_hits_and_misses():
    cache = LayoutCache(max_entries=4)
    calls = []

    def factory():
        calls.append(1)
        return "view"

    assert cache.get_or_compute("k", factory) == "view"
    assert cache.get_or_compute("k", factory) == "view"
    assert (cache.hits, cache.misses, len(calls)) == (1, 1, 1)

    cache.clear()
    assert cache.get("k") is None
