#!/usr/bin/env python3
"""Request-scoped set of movie ids already accepted into a result list."""

import threading
from typing import Iterable, Set


class DedupSet:
    """
    Thread-safe id set owned by one request

    claim() is the only way to add an id after construction: it checks and
    inserts under one lock, so two workers racing on the same id cannot both
    be accepted.
    """

    def __init__(self, initial: Iterable[str] = ()):
        self._lock = threading.Lock()
        self._ids: Set[str] = {i for i in initial if i}

    def claim(self, imdb_id: str) -> bool:
        """Mark id as seen. Returns False if it was already present."""
        with self._lock:
            if imdb_id in self._ids:
                return False
            self._ids.add(imdb_id)
            return True

    def __contains__(self, imdb_id: str) -> bool:
        with self._lock:
            return imdb_id in self._ids

    def __len__(self) -> int:
        with self._lock:
            return len(self._ids)
