"""Operations used while a song is being edited by hand.

The editor works on the raw ``content`` text and keeps ``lines`` in step with
it: lines whose text is untouched keep any type the user forced on them,
edited lines are classified again.
"""

import dataclasses

from .classifier import LineClassifier
from .config import DEFAULT_ARTIST, DEFAULT_BPM
from .models import SongData, SongLine


def sync_lines(
    content: str,
    previous: list[SongLine],
    classifier: LineClassifier | None = None,
) -> list[SongLine]:
    """Return the lines for edited *content*, reusing *previous* where unchanged.

    A previous line is reused only when the line count is the same and the
    text at that position is identical.  A ``[CHORDS]``/``[LYRICS]`` marker
    typed into the text always wins; the marker becomes the line's tag and is
    not kept in its content.
    """
    classifier = classifier or LineClassifier()
    texts = content.split("\n")
    same_shape = len(texts) == len(previous)

    lines: list[SongLine] = []
    for index, text in enumerate(texts):
        classified = classifier.classify(text)
        if same_shape and classified.tag is None and previous[index].content == classified.content:
            lines.append(previous[index])
            continue
        lines.append(classified)
    return lines


def set_line_type(lines: list[SongLine], index: int, is_chord: bool) -> list[SongLine]:
    """Return a copy of *lines* with line *index* forced to chords or lyrics."""
    if not 0 <= index < len(lines):
        raise IndexError(f"Line {index} does not exist ({len(lines)} lines)")
    updated = list(lines)
    updated[index] = dataclasses.replace(
        lines[index],
        is_chord_line=is_chord,
        tag="CHORDS" if is_chord else "LYRICS",
    )
    return updated


def toggle_line_type(lines: list[SongLine], index: int) -> list[SongLine]:
    """Return a copy of *lines* with the type of line *index* flipped."""
    if not 0 <= index < len(lines):
        raise IndexError(f"Line {index} does not exist ({len(lines)} lines)")
    return set_line_type(lines, index, not lines[index].is_chord_line)


def song_from_lines(title: str, artist: str, bpm: str, lines: list[SongLine]) -> SongData:
    """Build the saved form of an edited song.

    ``content`` is derived from *lines*, tag markers included, so it
    structures back to the same lines.  A blank artist or tempo falls back to
    the defaults.
    """
    if not title.strip():
        raise ValueError("Title cannot be empty")
    return SongData(
        title=title.strip(),
        artist=artist.strip() or DEFAULT_ARTIST,
        bpm=bpm.strip() or DEFAULT_BPM,
        content="\n".join(line.text for line in lines),
        lines=list(lines),
    )
