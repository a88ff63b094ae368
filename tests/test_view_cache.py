import threading

from stampit.services import view_cache


def _counting_loader(value):
    calls = []

    def loader():
        calls.append(1)
        return value

    return loader, calls


def test_loader_runs_once_until_invalidated():
    loader, calls = _counting_loader(["a"])

    assert view_cache.get_or_load(view_cache.BUSINESS_STATS, "b1", loader) == ["a"]
    assert view_cache.get_or_load(view_cache.BUSINESS_STATS, "b1", loader) == ["a"]
    assert len(calls) == 1

    view_cache.invalidate(view_cache.BUSINESS_STATS, "b1")
    view_cache.get_or_load(view_cache.BUSINESS_STATS, "b1", loader)
    assert len(calls) == 2


def test_invalidating_missing_key_is_a_noop():
    view_cache.invalidate(view_cache.CUSTOMER_REVIEWS, "nobody")
    view_cache.invalidate_business("nobody")


def test_falsy_views_are_cached():
    loader, calls = _counting_loader([])

    view_cache.get_or_load(view_cache.CUSTOMER_REVIEWS, "c1", loader)
    view_cache.get_or_load(view_cache.CUSTOMER_REVIEWS, "c1", loader)

    assert len(calls) == 1


def test_load_overlapping_an_invalidation_is_not_stored():
    def stale_loader():
        view_cache.invalidate(view_cache.BUSINESS_REVIEWS, "b1")
        return ["stale"]

    fresh, calls = _counting_loader(["fresh"])

    assert view_cache.get_or_load(view_cache.BUSINESS_REVIEWS, "b1", stale_loader) == ["stale"]
    assert view_cache.get_or_load(view_cache.BUSINESS_REVIEWS, "b1", fresh) == ["fresh"]
    assert len(calls) == 1


def test_concurrent_reads_and_invalidations():
    errors = []

    def worker(n):
        try:
            for i in range(200):
                key = i % 5
                view_cache.get_or_load(view_cache.BUSINESS_STATS, key, lambda: {"n": n})
                view_cache.invalidate(view_cache.BUSINESS_STATS, key)
        except Exception as e:  # surfaced below
            errors.append(e)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
