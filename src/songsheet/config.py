from dataclasses import dataclass

# Line classification: share of a line's characters that chord matches must
# cover, and the length under which a single match is enough.
CHORD_COVERAGE_THRESHOLD = 0.3
SHORT_LINE_LENGTH = 20

# Header sniffing: title/artist lines must be shorter than this.
HEADER_MAX_LENGTH = 50

DEFAULT_TITLE = "Untitled"
DEFAULT_ARTIST = "Unknown"
DEFAULT_BPM = "120"

CHORDS_ENV_VAR = "SONGSHEET_CHORDS"


@dataclass
class ParserConfig:
    """Holds the tunable knobs of line classification and header sniffing."""

    chord_coverage_threshold: float = CHORD_COVERAGE_THRESHOLD
    short_line_length: int = SHORT_LINE_LENGTH

    header_max_length: int = HEADER_MAX_LENGTH
    default_title: str = DEFAULT_TITLE
    default_artist: str = DEFAULT_ARTIST
    default_bpm: str = DEFAULT_BPM
