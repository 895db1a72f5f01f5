from typing import Optional

from app.domain.exceptions import InvalidInputError
from app.domain.prompts import DEFAULT_CAPTION_PROMPT
from app.domain.repositories.caption_repository import CaptionRepository


class RequestCaptionUseCase:
    """Forward an image and prompt to the caption provider and return its raw text."""

    def __init__(self, repository: CaptionRepository) -> None:
        self._repo = repository

    def execute(self, image_data_uri: str, prompt: Optional[str] = None) -> str:
        if not image_data_uri or not image_data_uri.strip():
            raise InvalidInputError("Image is required")
        prompt = (prompt or "").strip() or DEFAULT_CAPTION_PROMPT
        return self._repo.generate(image_data_uri=image_data_uri.strip(), prompt=prompt)
