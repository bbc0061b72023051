from dataclasses import dataclass, field
from enum import Enum


class NotationSystem(Enum):
    """The two note-naming conventions a chord symbol can be written in."""

    INTERNATIONAL = "international"  # C, C#, D, ...
    ITALIAN = "italian"  # DO, DO#, RE, ...


@dataclass(frozen=True)
class ChordDefinition:
    """One row of the chord table.

    Either ``chord_it`` or ``chord_en`` may be used as a lookup key.
    """

    chord_it: str
    chord_en: str
    type: str
    fingering: str
    alternative_fingerings: tuple[str, ...] = ()
    diagram_ref: str | None = None


@dataclass(frozen=True)
class ChordToken:
    """A chord symbol split into root, quality suffix and optional bass note.

    Example: "SOLmaj7/RE" -> root_note="SOL", suffix="maj7", bass_note="RE"
    """

    root_note: str
    notation: NotationSystem
    suffix: str = ""
    bass_note: str | None = None


@dataclass
class SongLine:
    """A single classified line of a song."""

    is_chord_line: bool
    content: str
    tag: str | None = None  # "CHORDS" / "LYRICS" when set explicitly

    def to_dict(self) -> dict:
        data = {"is_chord_line": self.is_chord_line, "content": self.content}
        if self.tag is not None:
            data["tag"] = self.tag
        return data

    @property
    def text(self) -> str:
        """The line as it is written in song text, with its [TAG] marker."""
        if self.tag:
            return f"[{self.tag}] {self.content}".rstrip()
        return self.content


@dataclass
class SongData:
    """Structured form of a song.

    ``content`` is the newline-joined text of the body and ``lines`` its
    classified form; both always have the same number of lines.
    ``transposed_semitones`` and ``capo`` are display settings kept alongside
    the song for storage only.
    """

    title: str = "Untitled"
    artist: str = "Unknown"
    bpm: str = "120"
    content: str = ""
    lines: list[SongLine] = field(default_factory=list)
    transposed_semitones: int = 0
    capo: int = 0

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "artist": self.artist,
            "bpm": self.bpm,
            "content": self.content,
            "lines": [line.to_dict() for line in self.lines],
            "transposed_semitones": self.transposed_semitones,
            "capo": self.capo,
        }
