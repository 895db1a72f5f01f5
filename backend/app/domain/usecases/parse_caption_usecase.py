from app.domain.entities.caption_entity import ParsedCaptions
from app.domain.services.caption_parser import CaptionParser


class ParseCaptionUseCase:
    def __init__(self, parser: CaptionParser) -> None:
        self._parser = parser

    def execute(self, text: str) -> ParsedCaptions:
        return self._parser.parse_detailed(text)
