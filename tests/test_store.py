"""Tests for the read/write lock and the in-memory store."""

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from shortlink.store import ReadWriteLock, URLStore


class TestReadWriteLock:
    def test_readers_share_the_lock(self):
        lock = ReadWriteLock()
        # Both readers must be inside the lock at the same time to pass the barrier.
        barrier = threading.Barrier(2, timeout=5)

        def reader():
            with lock.read_locked():
                barrier.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert not barrier.broken

    def test_writer_waits_for_reader(self):
        lock = ReadWriteLock()
        written = threading.Event()

        def writer():
            with lock.write_locked():
                written.set()

        lock.acquire_read()
        t = threading.Thread(target=writer)
        t.start()
        assert not written.wait(0.2)

        lock.release_read()
        assert written.wait(5)
        t.join(timeout=5)

    def test_reader_waits_for_writer(self):
        lock = ReadWriteLock()
        read = threading.Event()

        def reader():
            with lock.read_locked():
                read.set()

        lock.acquire_write()
        t = threading.Thread(target=reader)
        t.start()
        assert not read.wait(0.2)

        lock.release_write()
        assert read.wait(5)
        t.join(timeout=5)

    def test_waiting_writer_holds_off_new_readers(self):
        lock = ReadWriteLock()
        written = threading.Event()
        second_read = threading.Event()

        def writer():
            with lock.write_locked():
                written.set()

        def reader():
            with lock.read_locked():
                second_read.set()

        lock.acquire_read()
        w = threading.Thread(target=writer)
        w.start()
        deadline = time.monotonic() + 5
        while lock._waiting_writers == 0 and time.monotonic() < deadline:
            time.sleep(0.01)
        assert lock._waiting_writers == 1

        r = threading.Thread(target=reader)
        r.start()
        assert not second_read.wait(0.2)
        assert not written.is_set()

        lock.release_read()
        assert written.wait(5)
        assert second_read.wait(5)
        w.join(timeout=5)
        r.join(timeout=5)

    def test_writers_are_exclusive(self):
        lock = ReadWriteLock()
        second = threading.Event()

        def writer():
            with lock.write_locked():
                second.set()

        with lock.write_locked():
            t = threading.Thread(target=writer)
            t.start()
            assert not second.wait(0.2)

        assert second.wait(5)
        t.join(timeout=5)

    def test_lock_released_on_error(self):
        lock = ReadWriteLock()
        try:
            with lock.write_locked():
                raise ValueError("boom")
        except ValueError:
            pass

        acquired = threading.Event()

        def reader():
            with lock.read_locked():
                acquired.set()

        threading.Thread(target=reader).start()
        assert acquired.wait(5)


class TestURLStore:
    def test_get_missing(self):
        store = URLStore()
        assert store.get("abcdef") == (None, False)
        assert "abcdef" not in store

    def test_put_then_get(self):
        store = URLStore()
        store.put("abcdef", "http://example.com")

        assert store.get("abcdef") == ("http://example.com", True)
        assert "abcdef" in store
        assert len(store) == 1

    def test_put_overwrites(self):
        store = URLStore()
        store.put("abcdef", "http://first.example")
        store.put("abcdef", "http://second.example")

        assert store.get("abcdef") == ("http://second.example", True)
        assert len(store) == 1

    def test_separate_instances_are_independent(self):
        a = URLStore()
        b = URLStore()
        a.put("abcdef", "http://example.com")

        assert b.get("abcdef") == (None, False)

    def test_concurrent_puts_and_gets(self):
        store = URLStore()
        count = 200

        def put(i):
            store.put(f"tok{i:03d}", f"http://example.com/{i}")

        def get(i):
            return store.get(f"tok{i:03d}")

        with ThreadPoolExecutor(max_workers=16) as pool:
            list(pool.map(put, range(count)))
            results = list(pool.map(get, range(count)))

        assert len(store) == count
        for i, (long_url, found) in enumerate(results):
            assert found
            assert long_url == f"http://example.com/{i}"
