"""Chord-line / lyric-line classification.

A line is classified in two steps:

  1. An explicit ``[CHORDS]`` or ``[LYRICS]`` marker at the start of the line
     decides outright; the marker is stripped and kept as the line's tag.
  2. Otherwise the line is scanned with the chord category grammars (plus a
     bracketed ``[Am]`` form).  It is a chord line when several matches cover
     more than :data:`~songsheet.config.CHORD_COVERAGE_THRESHOLD` of it, or
     when it is short, has at least one match, and is made only of note
     letters, accidentals and brackets.

This is a heuristic: a short lyric such as "Do re mi" is a chord line.
"""

import re

from .config import ParserConfig
from .library import ChordLibrary
from .models import SongLine
from .recognizer import CHORD_CATEGORIES, INTERNATIONAL_ROOT, ITALIAN_ROOT, ChordCategory

TAGS = ("CHORDS", "LYRICS")

# Letters a line may consist of to pass the short-line rule: note letters,
# solfège syllables, accidentals and brackets.
_NOTE_ALPHABET_RE = re.compile(r"^[\s\[\]A-Ga-g#bdoremifasollasi]+$")

# Chord matches must stand alone, not sit inside a word or a longer chord.
_BEFORE = r"(?<![\w#/])"
_AFTER = r"(?![\w#+°/])"


def _scan_pattern(category: ChordCategory) -> re.Pattern:
    """Unanchored form of *category*; Italian names match in any case."""
    q = category.quality
    return re.compile(
        rf"{_BEFORE}(?:{INTERNATIONAL_ROOT}(?:{q})|(?i:{ITALIAN_ROOT}(?:{q}))){_AFTER}"
    )


def _bracketed_pattern(categories: tuple[ChordCategory, ...]) -> re.Pattern:
    qualities = "|".join(f"(?:{c.quality})" for c in categories)
    return re.compile(rf"\[(?:{INTERNATIONAL_ROOT}|(?i:{ITALIAN_ROOT}))(?:{qualities})\]")


class LineClassifier:
    """Classify single lines of raw song text.

    Args:
        config: Threshold settings.
        library: Optional chord table.  Whole tokens it knows that no grammar
            covers (``Csus4add9``) count as chord matches too.  It is read on
            every call and may still be loading.
        categories: The grammar family to scan with.
    """

    def __init__(
        self,
        config: ParserConfig | None = None,
        library: ChordLibrary | None = None,
        categories: tuple[ChordCategory, ...] = CHORD_CATEGORIES,
    ):
        self.config = config or ParserConfig()
        self.library = library
        self.categories = categories
        self.scan_patterns = [_scan_pattern(c) for c in categories]
        self.scan_patterns.append(_bracketed_pattern(categories))

    def classify(self, raw_line: str) -> SongLine:
        """Return the :class:`SongLine` for *raw_line* (content is trimmed)."""
        line = raw_line.strip()

        for tag in TAGS:
            marker = f"[{tag}]"
            if line.startswith(marker):
                return SongLine(
                    is_chord_line=(tag == "CHORDS"),
                    content=line[len(marker):].strip(),
                    tag=tag,
                )

        return SongLine(is_chord_line=self.is_chord_line(line), content=line)

    def chord_coverage(self, line: str) -> tuple[int, int]:
        """Return ``(match_count, matched_characters)`` for *line*."""
        count = 0
        chars = 0
        for pattern in self.scan_patterns:
            for m in pattern.finditer(line):
                count += 1
                chars += len(m.group())

        if self.library is not None:
            for token in line.split():
                if self.library.lookup(token) is None:
                    continue
                if not any(c.matches(token) for c in self.categories):
                    count += 1
                    chars += len(token)
        return count, chars

    def is_chord_line(self, line: str) -> bool:
        line = line.strip()
        if not line:
            return False

        count, chars = self.chord_coverage(line)
        if count > 1 and chars / len(line) > self.config.chord_coverage_threshold:
            return True
        return (
            count > 0
            and len(line) < self.config.short_line_length
            and bool(_NOTE_ALPHABET_RE.match(line))
        )
