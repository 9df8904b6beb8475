"""
Tests for SnapshotList

Covers wholesale replacement, copy isolation and the refresh failure policy.
"""

import logging
import threading

import pytest

from boardcache.core.cache.snapshot import SnapshotList
from boardcache.core.exceptions import RepositoryError


class TestSnapshotList:
    """Test snapshot reads and replacement."""

    def setup_method(self):
        self.snapshot = SnapshotList("side hot articles")

    def test_empty_before_first_refresh(self):
        assert self.snapshot.get() == []
        assert len(self.snapshot) == 0
        assert self.snapshot.refreshed_at is None

    def test_replace_keeps_order(self):
        records = [{'id': '3'}, {'id': '1'}, {'id': '2'}]
        self.snapshot.replace(records)

        assert self.snapshot.get() == records
        assert len(self.snapshot) == 3
        assert self.snapshot.refreshed_at is not None

    def test_replace_copies_input(self):
        records = [{'id': '1', 'title': 'Original'}]
        self.snapshot.replace(records)

        records[0]['title'] = 'Changed'
        records.append({'id': '2'})

        assert self.snapshot.get() == [{'id': '1', 'title': 'Original'}]

    def test_readers_get_independent_copies(self):
        self.snapshot.replace([{'id': '1', 'tags': ['a']}])

        first = self.snapshot.get()
        first[0]['tags'].append('b')
        first.clear()

        assert self.snapshot.get() == [{'id': '1', 'tags': ['a']}]

    def test_replace_swaps_whole_list(self):
        self.snapshot.replace([{'id': '1'}, {'id': '2'}])
        self.snapshot.replace([{'id': '9'}])

        assert self.snapshot.get() == [{'id': '9'}]


class TestSnapshotRefresh:
    """Test refresh success and failure handling."""

    def setup_method(self):
        self.snapshot = SnapshotList("side random articles")

    def test_refresh_success(self):
        assert self.snapshot.refresh(lambda: [{'id': '1'}]) is True
        assert self.snapshot.get() == [{'id': '1'}]

    def test_refresh_accepts_generators(self):
        assert self.snapshot.refresh(lambda: ({'id': str(i)} for i in range(3))) is True
        assert [r['id'] for r in self.snapshot.get()] == ['0', '1', '2']

    def test_failed_refresh_keeps_previous_snapshot(self, caplog):
        self.snapshot.replace([{'id': '1'}])

        def failing_loader():
            raise RepositoryError("connection refused")

        with caplog.at_level(logging.ERROR):
            assert self.snapshot.refresh(failing_loader) is False

        assert self.snapshot.get() == [{'id': '1'}]
        assert "Loads side random articles failed" in caplog.text

    def test_failed_first_refresh_stays_empty(self):
        def failing_loader():
            raise RepositoryError("connection refused")

        assert self.snapshot.refresh(failing_loader) is False
        assert self.snapshot.get() == []
        assert self.snapshot.refreshed_at is None

    def test_other_errors_propagate(self):
        def broken_loader():
            raise KeyError("title")

        with pytest.raises(KeyError):
            self.snapshot.refresh(broken_loader)

    def test_readers_never_see_partial_lists(self):
        old = [{'id': 'old', 'n': i} for i in range(50)]
        new = [{'id': 'new', 'n': i} for i in range(50)]
        self.snapshot.replace(old)
        observed = []
        stop = threading.Event()

        def reader():
            while True:
                observed.append({r['id'] for r in self.snapshot.get()})
                if stop.is_set():
                    break

        thread = threading.Thread(target=reader)
        thread.start()
        for _ in range(20):
            self.snapshot.replace(new)
            self.snapshot.replace(old)
        stop.set()
        thread.join()

        assert observed
        assert all(ids in ({'old'}, {'new'}) for ids in observed)
