import base64
import binascii
import re
from dataclasses import dataclass
from io import BytesIO
from typing import Any, Dict, List

import requests
from PIL import Image, UnidentifiedImageError

from app.core.utils.logger import get_logger
from app.domain.entities.caption_entity import ImagePayload
from app.domain.exceptions import InvalidInputError, NotConfiguredError, ProviderFailureError


_logger = get_logger("gemini_caption_client")

DEFAULT_MIME_TYPE = "image/jpeg"

MOCK_CAPTION_TEXT = (
    "Playful vibes: Sun-kissed moments and good energy. \n\n"
    'Smile caption: "Living for these golden hour feels!" \n\n'
    'Short & sweet: "Sun. Smiles. Repeat."'
)

_MIME_RE = re.compile(r"data:([^;,]+)")


@dataclass
class GeminiCaptionConfig:
    api_key: str
    model: str = "gemini-1.5-flash"
    base_url: str = "https://generativelanguage.googleapis.com"
    timeout: float = 60.0
    mock: bool = False  # canned response when api_key is missing


def decode_data_uri(image_data_uri: str) -> ImagePayload:
    """Split a `data:<mime>;base64,<payload>` URI and check the payload is an image."""
    if not image_data_uri or not image_data_uri.strip():
        raise InvalidInputError("Image is required")
    header, sep, data = image_data_uri.strip().partition(",")
    if not sep or not data.strip():
        raise InvalidInputError("Image must be a data URI with a base64 payload")

    match = _MIME_RE.match(header)
    mime_type = match.group(1) if match else DEFAULT_MIME_TYPE

    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidInputError(f"Image payload is not valid base64: {e}") from e
    try:
        with Image.open(BytesIO(raw)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidInputError(f"Image payload could not be decoded: {e}") from e

    return ImagePayload(mime_type=mime_type, base64_data=data)


class GeminiCaptionClient:
    """Client to generate caption text with the Gemini generateContent REST API.

    The configuration is injected once at startup; the client holds no other state.
    """

    def __init__(self, config: GeminiCaptionConfig) -> None:
        self.config = config

    @property
    def configured(self) -> bool:
        return bool(self.config.api_key)

    def _endpoint(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/v1beta/models/{self.config.model}:generateContent"

    def _headers(self) -> Dict[str, str]:
        return {
            "x-goog-api-key": self.config.api_key,
            "Content-Type": "application/json",
        }

    def build_payload(self, image: ImagePayload, prompt: str) -> Dict[str, Any]:
        # Prompt first, then the inline image
        return {
            "contents": [
                {
                    "role": "user",
                    "parts": [
                        {"text": prompt},
                        {"inline_data": {"mime_type": image.mime_type, "data": image.base64_data}},
                    ],
                }
            ]
        }

    def generate(self, image_data_uri: str, prompt: str) -> str:
        if not self.configured:
            if self.config.mock:
                _logger.info("GEMINI_API_KEY missing; returning mock caption")
                return MOCK_CAPTION_TEXT
            raise NotConfiguredError("Server not configured: missing GEMINI_API_KEY")

        image = decode_data_uri(image_data_uri)
        payload = self.build_payload(image, prompt)

        try:
            resp = requests.post(self._endpoint(), json=payload, headers=self._headers(), timeout=self.config.timeout)
        except requests.RequestException as e:
            _logger.error("Error calling Gemini: %s", e)
            raise ProviderFailureError(f"Gemini request failed: {e}") from e

        if resp.status_code >= 400:
            _logger.error("Gemini API error %s: %s", resp.status_code, resp.text[:200])
            raise ProviderFailureError(f"Gemini API error {resp.status_code}")
        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderFailureError(f"Non-JSON response from Gemini: {resp.text[:200]}") from e

        text = self._extract_text(data)
        if not text:
            _logger.warning("Gemini response contained no text candidates")
            raise ProviderFailureError("Gemini returned no caption text")
        return text

    def _extract_text(self, data: Any) -> str:
        # Expected: {"candidates": [{"content": {"parts": [{"text": "..."}]}}]}
        if not isinstance(data, dict):
            return ""
        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            return ""
        first = candidates[0]
        content = first.get("content") if isinstance(first, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            return ""
        texts: List[str] = [str(p["text"]) for p in parts if isinstance(p, dict) and p.get("text")]
        return "".join(texts)
