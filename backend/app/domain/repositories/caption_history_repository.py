from abc import ABC, abstractmethod
from typing import List

from app.domain.entities.caption_entity import CaptionRecord


class CaptionHistoryRepository(ABC):
    """Caption records of the running process, newest first."""

    @abstractmethod
    def add(self, record: CaptionRecord) -> None:
        raise NotImplementedError

    @abstractmethod
    def list(self) -> List[CaptionRecord]:
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        raise NotImplementedError
