from app.data.adapters.gemini_caption_client import GeminiCaptionClient
from app.domain.repositories.caption_repository import CaptionRepository


class CaptionRepositoryImpl(CaptionRepository):
    def __init__(self, client: GeminiCaptionClient) -> None:
        self._client = client

    def generate(self, image_data_uri: str, prompt: str) -> str:
        return self._client.generate(image_data_uri=image_data_uri, prompt=prompt)
