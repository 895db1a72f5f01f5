from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List


@dataclass(frozen=True)
class ImagePayload:
    """Image decoded from a data URI, ready to be sent inline to the provider."""
    mime_type: str
    base64_data: str


@dataclass(frozen=True)
class ParsedCaptions:
    options: List[str]
    # Name of the segmentation strategy that produced the options ('whole' when none split)
    strategy: str


@dataclass(frozen=True)
class CaptionRecord:
    """One upload interaction: the image, the raw provider text and its parsed options."""
    id: str
    image: str
    raw: str
    options: List[str]
    strategy: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
