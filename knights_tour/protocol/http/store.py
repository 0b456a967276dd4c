from __future__ import annotations

import threading
import uuid
from typing import Dict, Optional

from ...search.service import SearchResult


class InMemoryTourStore:
    """Thread-safe in-memory store of finished tour searches keyed by ``tour_id``."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._tours: Dict[str, SearchResult] = {}

    def add(self, result: SearchResult) -> str:
        tid = str(uuid.uuid4())
        with self._lock:
            self._tours[tid] = result
        return tid

    def get(self, tour_id: str) -> Optional[SearchResult]:
        with self._lock:
            return self._tours.get(tour_id)

    def delete(self, tour_id: str) -> bool:
        """Remove a tour; returns False when it was not stored."""
        with self._lock:
            return self._tours.pop(tour_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._tours)
