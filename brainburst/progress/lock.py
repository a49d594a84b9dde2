from __future__ import annotations

import contextlib
import threading
import typing as t


class _Entry(object):
    __slots__ = ("lock", "holders")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.holders = 0


class KeyedLock(object):
    """A mutex per key, created on first use and discarded once no thread holds or awaits it.

    Serializes the read-check-write of a single progress record within this
    process. Writers in other processes are caught by the version check in
    storage.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[t.Hashable, _Entry] = {}

    @contextlib.contextmanager
    def hold(self, key: t.Hashable) -> t.Iterator[None]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _Entry()
            entry.holders += 1

        entry.lock.acquire()
        try:
            yield
        finally:
            entry.lock.release()
            with self._guard:
                entry.holders -= 1
                if entry.holders == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)
