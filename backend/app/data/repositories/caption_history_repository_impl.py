import threading
from collections import deque
from typing import Deque, List

from app.domain.entities.caption_entity import CaptionRecord
from app.domain.repositories.caption_history_repository import CaptionHistoryRepository


class InMemoryCaptionHistoryRepository(CaptionHistoryRepository):
    """Bounded history kept in process memory; the oldest record is dropped when full."""

    def __init__(self, limit: int = 50) -> None:
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self._records: Deque[CaptionRecord] = deque(maxlen=limit)
        self._lock = threading.Lock()

    def add(self, record: CaptionRecord) -> None:
        with self._lock:
            self._records.appendleft(record)

    def list(self) -> List[CaptionRecord]:
        with self._lock:
            return list(self._records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()
