import time
import uuid
from datetime import datetime, timezone
from typing import Optional

from app.core.utils.logger import get_logger
from app.domain.entities.caption_entity import CaptionRecord
from app.domain.repositories.caption_history_repository import CaptionHistoryRepository
from app.domain.services.caption_parser import CaptionParser
from app.domain.usecases.request_caption_usecase import RequestCaptionUseCase


_logger = get_logger("generate_caption_usecase")


class GenerateCaptionUseCase:
    """Request a caption, split it into options and record the interaction."""

    def __init__(
        self,
        request_usecase: RequestCaptionUseCase,
        parser: CaptionParser,
        history: CaptionHistoryRepository,
    ) -> None:
        self._request = request_usecase
        self._parser = parser
        self._history = history

    def execute(self, image_data_uri: str, prompt: Optional[str] = None) -> CaptionRecord:
        raw = self._request.execute(image_data_uri=image_data_uri, prompt=prompt)
        parsed = self._parser.parse_detailed(raw)
        record = CaptionRecord(
            id=f"caption-{int(time.time() * 1000)}-{uuid.uuid4().hex[:6]}",
            image=image_data_uri.strip(),
            raw=raw,
            options=parsed.options,
            strategy=parsed.strategy,
            timestamp=datetime.now(timezone.utc),
        )
        self._history.add(record)
        _logger.info("Caption %s generated with %d option(s)", record.id, len(record.options))
        return record
