"""Raw song text → :class:`~songsheet.models.SongData`.

Header sniffing
---------------

The first lines of the text may carry the title, the artist and the tempo.
They are read strictly in order, and each step runs only if the previous one
matched::

    AwaitingTitle  --line 0 non-empty, < 50 chars, no ':'-->  AwaitingArtist
    AwaitingArtist --next line non-empty, < 50 chars------->  AwaitingBpm
    AwaitingBpm    --next line mentions "bpm" or "tempo"--->  Body

A failed step sends everything from that line on to the body.  Missing
header fields fall back to ``Untitled`` / ``Unknown`` / ``120``.

Example::

    Hotel California
    Eagles
    BPM 75
    Bm                        F#
    On a dark desert highway, cool wind in my hair

gives title "Hotel California", artist "Eagles", bpm "75" and two body lines.
"""

import logging
import re
from enum import Enum, auto

from .classifier import LineClassifier
from .config import ParserConfig
from .models import SongData

logger = logging.getLogger(__name__)

_TEMPO_RE = re.compile(r"bpm|tempo", re.IGNORECASE)
_DIGITS_RE = re.compile(r"\d+")


class HeaderState(Enum):
    AWAITING_TITLE = auto()
    AWAITING_ARTIST = auto()
    AWAITING_BPM = auto()
    BODY = auto()


class SongStructurer:
    """Build a :class:`SongData` from the raw text of a song."""

    def __init__(self, classifier: LineClassifier | None = None, config: ParserConfig | None = None):
        self.config = config or (classifier.config if classifier else ParserConfig())
        self.classifier = classifier or LineClassifier(self.config)

    def structure(self, raw_text: str) -> SongData:
        lines = [line.rstrip() for line in raw_text.splitlines()]
        song = SongData(
            title=self.config.default_title,
            artist=self.config.default_artist,
            bpm=self.config.default_bpm,
        )

        state = HeaderState.AWAITING_TITLE
        pos = 0
        while state is not HeaderState.BODY and pos < len(lines):
            line = lines[pos]
            if state is HeaderState.AWAITING_TITLE and self._is_title(line):
                song.title = line.strip()
                state = HeaderState.AWAITING_ARTIST
            elif state is HeaderState.AWAITING_ARTIST and self._is_artist(line):
                song.artist = line.strip()
                state = HeaderState.AWAITING_BPM
            elif state is HeaderState.AWAITING_BPM and _TEMPO_RE.search(line):
                digits = _DIGITS_RE.search(line)
                if digits:
                    song.bpm = digits.group()
                state = HeaderState.BODY
            else:
                break
            pos += 1

        body = [line for line in lines[pos:] if line.strip()]
        song.lines = [self.classifier.classify(line) for line in body]
        song.content = "\n".join(body)

        logger.debug(
            f"Structured '{song.title}' by {song.artist}: {len(body)} lines, "
            f"{sum(line.is_chord_line for line in song.lines)} chord lines"
        )
        return song

    def _is_title(self, line: str) -> bool:
        return bool(line.strip()) and len(line) < self.config.header_max_length and ":" not in line

    def _is_artist(self, line: str) -> bool:
        return bool(line.strip()) and len(line) < self.config.header_max_length
