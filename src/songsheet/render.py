"""Plain-text rendering of a :class:`~songsheet.models.SongData`.

Layout
------

::

    Hotel California
    Eagles
    BPM: 75 (+2 semitones)

    [CHORDS] C#m G#
    On a dark desert highway

The header lines are written so that :class:`~songsheet.structurer.SongStructurer`
reads them back as title, artist and tempo, and explicit tags are written as
the ``[TAG]`` markers the classifier honours.  Chord lines are transposed on
the way out; lyric lines never are.

Usage::

    renderer = SongRenderer(ChordTransposer(recognizer), library)
    text = renderer.render(song, semitones=2)
"""

import dataclasses
import re

from .config import DEFAULT_ARTIST, DEFAULT_BPM
from .library import ChordLibrary
from .models import ChordDefinition, SongData, SongLine
from .transposer import ChordTransposer

_SEGMENT_RE = re.compile(r"(\s+)")


class SongRenderer:
    """Render a song for display, optionally transposed."""

    def __init__(self, transposer: ChordTransposer | None = None, library: ChordLibrary | None = None):
        self.transposer = transposer or ChordTransposer()
        self.library = library

    def render(self, song: SongData, semitones: int = 0) -> str:
        """Return the display text for *song*, ending with a single newline."""
        # A blank artist or tempo line would end header sniffing early.
        artist = song.artist.strip() or DEFAULT_ARTIST
        bpm = song.bpm.strip() or DEFAULT_BPM
        parts: list[str] = [song.title, artist, _tempo_line(bpm, semitones)]

        if song.lines:
            parts.append("")
            parts.extend(self._render_line(line, semitones) for line in song.lines)

        return "\n".join(parts) + "\n"

    def _render_line(self, line: SongLine, semitones: int) -> str:
        if line.is_chord_line and semitones:
            line = dataclasses.replace(line, content=self.transposer.transpose_line(line.content, semitones))
        return line.text

    def chord_segments(self, line: str) -> list[tuple[str, ChordDefinition | None]]:
        """Split a chord line into segments paired with their library entries.

        Whitespace segments, and tokens the library does not know, are paired
        with None.  Joining the segment texts gives back *line*.
        """
        segments = []
        for segment in _SEGMENT_RE.split(line):
            if not segment:
                continue
            definition = None
            if segment.strip() and self.library is not None:
                definition = self.library.lookup(segment)
            segments.append((segment, definition))
        return segments


def _tempo_line(bpm: str, semitones: int) -> str:
    if semitones:
        return f"BPM: {bpm} ({semitones:+d} semitones)"
    return f"BPM: {bpm}"


def describe_chord(definition: ChordDefinition) -> str:
    """Return the detail text shown for a chord from the library."""
    lines = [
        f"{definition.chord_it} / {definition.chord_en}",
        f"Type: {definition.type}",
        f"Fingering: {definition.fingering}",
    ]
    if definition.alternative_fingerings:
        lines.append(f"Alternatives: {', '.join(definition.alternative_fingerings)}")
    if definition.diagram_ref:
        lines.append(f"Diagram: {definition.diagram_ref}")
    return "\n".join(lines)
