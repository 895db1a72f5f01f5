"""Split free-form caption text returned by a generative model into clean options.

The provider answers in prose with no fixed structure: options may be separated
by blank lines, introduced by "**Option 1 (Playful):**" headers or a numbered
list, or simply written one per line or one per sentence. Parsing happens in
three stages:

1. normalization removes copy/share UI tokens echoed back by the model;
2. segmentation tries named strategies in a fixed order and keeps the first
   one producing at least two segments;
3. every segment is cleaned (header lines, bold markers, option labels and
   quotes removed), then empty and duplicate results are dropped.

The parser is pure and keeps no state between calls.
"""
import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from app.core.utils.logger import get_logger
from app.domain.entities.caption_entity import ParsedCaptions


_logger = get_logger("caption_parser")

# Line splitting is only trusted when at least one line is shorter than this;
# otherwise the newlines are most likely wrapping a single long caption.
SHORT_LINE_THRESHOLD = 120
HEADER_LINE_MAX = 60
CATEGORY_LABEL_MAX = 40
MIN_SENTENCE_CAPTIONS = 2
# Tunable, not a correctness bound: a long caption with more sentences than
# this is kept whole, one with fewer may be split into sentences.
MAX_SENTENCE_CAPTIONS = 10

_UI_TOKEN_RE = re.compile(r"📋\s*Copy|💬\s*Share", re.IGNORECASE)
_UI_TOKEN_LINE_RE = re.compile(r"^(?:📋\s*Copy|💬\s*Share)$", re.IGNORECASE)
_BLANK_LINES_RE = re.compile(r"\n\s*\n")
_NEWLINES_RE = re.compile(r"\n+")
_SEGMENT_START_RE = re.compile(
    r"(?=^[ \t]*(?:\*\*[ \t]*)?Option[ \t]*\d+|^[ \t]*\d+\.)",
    re.IGNORECASE | re.MULTILINE,
)
_SENTENCE_END_RE = re.compile(r"(?<=[.!?])\s+")
# "Option N" optionally followed by a short category, e.g. "**Option 1 (Playful):**" or
# "Option 2: Short & sweet". A line carrying a whole sentence is content, not a header.
# Matched against the line with whitespace collapsed to single spaces.
_OPTION_HEADER_RE = re.compile(
    r"^\*{0,2} ?Option ?\d+ ?[:.)]? ?(?:\(?[A-Za-z &/-]{0,30}\)?)? ?[:\-–—]? ?\**$",
    re.IGNORECASE,
)
_LIST_MARKER_RE = re.compile(r"^\d{1,3}[.)]$")
_LABEL_END_RE = re.compile(r"[:\-–—]\**$")
_CATEGORY_LABEL_RE = re.compile(r"^\(?[A-Za-z\s&-]{1,30}\)?$")
_LEADING_LABEL_RE = re.compile(r"^\s*(?:Option\s*\d+[:)]?|\d+[.)](?=\s))\s*", re.IGNORECASE)

Strategy = Callable[[str], Optional[List[str]]]


def normalize(raw: str) -> str:
    """Drop copy/share UI tokens anywhere in the text.

    Spaces and tabs in front of a token go with it, so "sunsets 📋 Copy and"
    becomes "sunsets and". Newlines are kept.
    """
    text = raw.replace("\r\n", "\n")
    pieces = []
    pos = 0
    for match in _UI_TOKEN_RE.finditer(text):
        pieces.append(text[pos:match.start()].rstrip(" \t"))
        pos = match.end()
    pieces.append(text[pos:])
    return "".join(pieces)


def _non_empty(chunks: Iterable[str]) -> List[str]:
    return [c.strip() for c in chunks if c and c.strip()]


def _accept(parts: List[str]) -> Optional[List[str]]:
    return parts if len(parts) >= 2 else None


def split_blank_lines(text: str) -> Optional[List[str]]:
    return _accept(_non_empty(_BLANK_LINES_RE.split(text)))


def split_option_headers(text: str) -> Optional[List[str]]:
    """Split in front of "Option N" / "N." lines; each segment keeps its header."""
    return _accept(_non_empty(_SEGMENT_START_RE.split(text)))


# --- Header line classifiers, checked in this order ---

def is_ui_token_line(line: str) -> bool:
    return bool(_UI_TOKEN_LINE_RE.match(line))


def is_option_header(line: str) -> bool:
    return bool(_OPTION_HEADER_RE.match(" ".join(line.split())))


def is_list_marker(line: str) -> bool:
    # a bare "1." / "2)" with the caption on the next line
    return bool(_LIST_MARKER_RE.match(line.strip()))


def is_label_line(line: str) -> bool:
    # "Playful vibes:" / "Short & sweet -"
    return len(line) < HEADER_LINE_MAX and bool(_LABEL_END_RE.search(line))


def is_category_label(line: str) -> bool:
    # "(Playful)"
    return len(line) < CATEGORY_LABEL_MAX and "(" in line and bool(_CATEGORY_LABEL_RE.match(line))


HEADER_PREDICATES: Tuple[Callable[[str], bool], ...] = (
    is_ui_token_line,
    is_option_header,
    is_list_marker,
    is_label_line,
    is_category_label,
)


def is_header_line(line: str) -> bool:
    return any(predicate(line) for predicate in HEADER_PREDICATES)


def strip_header_lines(segment: str) -> str:
    """Drop header lines from the top of a segment and join the rest with spaces."""
    lines = _non_empty(_NEWLINES_RE.split(segment))
    start = 0
    while start < len(lines) and is_header_line(lines[start]):
        start += 1
    return " ".join(lines[start:])


def _clean_once(segment: str) -> str:
    text = strip_header_lines(segment)
    text = text.replace("**", "")
    text = _LEADING_LABEL_RE.sub("", text, count=1)
    text = text.strip()
    if text.startswith('"'):
        text = text[1:]
    if text.endswith('"'):
        text = text[:-1]
    return text


def clean_caption(segment: str) -> str:
    """Turn a raw segment into a display-ready caption.

    Removing a quote or a label can expose another header or trailing space,
    so cleaning repeats until the text stops changing. Every pass only deletes
    characters or collapses newlines, which guarantees termination.
    """
    current = segment
    while True:
        cleaned = _clean_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned


@dataclass(frozen=True)
class CaptionParser:
    short_line_threshold: int = SHORT_LINE_THRESHOLD
    max_sentences: int = MAX_SENTENCE_CAPTIONS

    def split_lines(self, text: str) -> Optional[List[str]]:
        lines = _non_empty(_NEWLINES_RE.split(text))
        if len(lines) > 1 and any(len(line) < self.short_line_threshold for line in lines):
            return lines
        return None

    def split_sentences(self, text: str) -> Optional[List[str]]:
        sentences = _non_empty(_SENTENCE_END_RE.split(text))
        if MIN_SENTENCE_CAPTIONS <= len(sentences) <= self.max_sentences:
            return sentences
        return None

    def strategies(self) -> List[Tuple[str, Strategy]]:
        return [
            ("blank_lines", split_blank_lines),
            ("option_headers", split_option_headers),
            ("lines", self.split_lines),
            ("sentences", self.split_sentences),
        ]

    def segment(self, text: str) -> Tuple[str, List[str]]:
        """Return the winning strategy name and its segments ('whole' if none split)."""
        for name, strategy in self.strategies():
            parts = strategy(text)
            if parts is not None:
                return name, parts
        return "whole", [text]

    def parse_detailed(self, raw: Optional[str]) -> ParsedCaptions:
        if not raw or not raw.strip():
            return ParsedCaptions(options=[""], strategy="whole")

        normalized = normalize(raw)
        strategy, segments = self.segment(normalized)
        cleaned = (clean_caption(s) for s in segments)
        options = list(dict.fromkeys(c for c in cleaned if c))
        if not options:
            # Only headers and UI tokens were found
            options = [clean_caption(normalized)]
            strategy = "fallback"

        _logger.debug("Parsed %d caption option(s) using strategy=%s", len(options), strategy)
        return ParsedCaptions(options=options, strategy=strategy)

    def parse(self, raw: Optional[str]) -> List[str]:
        return self.parse_detailed(raw).options


_default_parser = CaptionParser()


def parse_caption(raw: Optional[str]) -> List[str]:
    return _default_parser.parse(raw)
