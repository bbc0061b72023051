import dataclasses
import re

from .models import SongData
from .notation import find_root, notes_for, shift_index
from .recognizer import ChordRecognizer

_WHITESPACE_SPLIT_RE = re.compile(r"(\s+)")


def _shift_note_prefix(text: str, semitones: int) -> str | None:
    """Replace the note name *text* starts with, or return None if there is none."""
    root = find_root(text)
    if root is None:
        return None
    index, name, notation = root
    return notes_for(notation)[shift_index(index, semitones)] + text[len(name):]


class ChordTransposer:
    """Shift chord symbols by a number of semitones.

    Each chord stays in its own notation system and keeps its quality suffix
    verbatim.  The bass note of a slash chord (``C/G``, ``REm/FA``) is shifted
    along with the root.  Text with no recognisable root note is returned
    unchanged.
    """

    def __init__(self, recognizer: ChordRecognizer | None = None):
        self.recognizer = recognizer or ChordRecognizer()

    def transpose(self, chord: str, semitones: int) -> str:
        """Return *chord* moved by *semitones* (negative moves down)."""
        if not chord or semitones == 0:
            return chord

        shifted = _shift_note_prefix(chord, semitones)
        if shifted is None:
            return chord

        head, slash, bass = shifted.rpartition("/")
        if slash:
            shifted_bass = _shift_note_prefix(bass, semitones)
            if shifted_bass is not None:
                shifted = head + slash + shifted_bass
        return shifted

    def transpose_line(self, line: str, semitones: int) -> str:
        """Transpose every chord token in *line*, keeping its spacing intact.

        Tokens the recognizer does not accept as chords are left alone, so a
        line of lyrics passes through unchanged.
        """
        if not line or semitones == 0:
            return line

        parts = _WHITESPACE_SPLIT_RE.split(line)
        return "".join(
            self.transpose(part, semitones)
            if part.strip() and self.recognizer.recognize(part)
            else part
            for part in parts
        )

    def transpose_song(self, song: SongData, semitones: int) -> SongData:
        """Return a copy of *song* with its chord lines transposed.

        ``content`` is transposed line-for-line alongside ``lines`` so the two
        stay in step; lyric lines are never touched.
        """
        if semitones == 0:
            return dataclasses.replace(song, lines=list(song.lines))

        lines = [
            dataclasses.replace(line, content=self.transpose_line(line.content, semitones))
            if line.is_chord_line
            else line
            for line in song.lines
        ]

        raw_lines = song.content.split("\n") if song.content else []
        if len(raw_lines) == len(song.lines):
            content = "\n".join(
                self.transpose_line(raw, semitones) if line.is_chord_line else raw
                for raw, line in zip(raw_lines, song.lines)
            )
        else:
            content = "\n".join(line.content for line in lines)

        return dataclasses.replace(song, content=content, lines=lines)
