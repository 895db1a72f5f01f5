from typing import List

from app.domain.entities.caption_entity import CaptionRecord
from app.domain.repositories.caption_history_repository import CaptionHistoryRepository


class CaptionHistoryUseCase:
    def __init__(self, repository: CaptionHistoryRepository) -> None:
        self._repo = repository

    def list(self) -> List[CaptionRecord]:
        return self._repo.list()

    def clear(self) -> None:
        self._repo.clear()
