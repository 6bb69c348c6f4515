from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator


class ReadWriteLock:
    """
    Shared/exclusive lock:
      - any number of readers at once
      - a writer excludes readers and other writers
      - a waiting writer holds off new readers, so writers don't starve
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()


class URLStore:
    """
    In-memory token -> long URL map.
    Lives for the process lifetime; entries are never updated or removed
    except by a colliding put, which overwrites.
    """

    def __init__(self) -> None:
        self._urls: dict[str, str] = {}
        self._lock = ReadWriteLock()

    def put(self, token: str, long_url: str) -> None:
        with self._lock.write_locked():
            self._urls[token] = long_url

    def get(self, token: str) -> tuple[str | None, bool]:
        with self._lock.read_locked():
            long_url = self._urls.get(token)
        return long_url, long_url is not None

    def __contains__(self, token: object) -> bool:
        with self._lock.read_locked():
            return token in self._urls

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._urls)
