"""Tests for the in-process rating store under concurrent access."""

import threading
from datetime import datetime, timezone

from trust_lens.infrastructure.storage.memory_store import InMemoryRatingStore

T0 = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def test_reads_during_concurrent_inserts():
    """Test listings stay consistent while another thread adds domains."""
    store = InMemoryRatingStore()
    errors = []
    done = threading.Event()

    def writer():
        try:
            for i in range(3000):
                store.upsert_rating(f"site{i}.com", 5.0 + i % 5, 1, updated_at=T0)
        finally:
            done.set()

    def reader():
        try:
            while not done.is_set():
                store.query_ordered(10)
                store.count_domains()
                store.search_domains("site1", 5)
                store.platform_totals()
        except Exception as e:  # collected for the assertion below
            errors.append(e)

    threads = [threading.Thread(target=writer)]
    threads += [threading.Thread(target=reader) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert store.count_domains() == 3000
    assert store.platform_totals().total_domains == 3000
