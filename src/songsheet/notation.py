"""The two 12-tone note orderings and index arithmetic over them.

Both orderings start at C/DO and use sharps only, so index ``i`` names the
same pitch class in either system::

    0   1    2   3    4   5   6    7    8    9   10   11
    C   C#   D   D#   E   F   F#   G    G#   A   A#   B
    DO  DO#  RE  RE#  MI  FA  FA#  SOL  SOL# LA  LA#  SI
"""

from .models import NotationSystem

INTERNATIONAL_NOTES: tuple[str, ...] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)
ITALIAN_NOTES: tuple[str, ...] = (
    "DO", "DO#", "RE", "RE#", "MI", "FA", "FA#", "SOL", "SOL#", "LA", "LA#", "SI",
)

# The seven natural Italian names, longest first so "SOL" wins over shorter
# names when a chord starts with it.
ITALIAN_ROOTS: tuple[str, ...] = ("SOL", "DO", "RE", "MI", "FA", "LA", "SI")

_NOTES = {
    NotationSystem.INTERNATIONAL: INTERNATIONAL_NOTES,
    NotationSystem.ITALIAN: ITALIAN_NOTES,
}


def notes_for(notation: NotationSystem) -> tuple[str, ...]:
    """Return the ordered 12-note sequence for *notation*."""
    return _NOTES[notation]


def detect_notation(text: str) -> NotationSystem:
    """Return the notation system *text* is written in.

    Italian names are checked first as whole prefixes; anything else is
    treated as international.
    """
    text = text.strip()
    for root in ITALIAN_ROOTS:
        if text.startswith(root):
            return NotationSystem.ITALIAN
    return NotationSystem.INTERNATIONAL


def find_root(text: str) -> tuple[int, str, NotationSystem] | None:
    """Return ``(index, note_name, notation)`` for the note *text* begins with.

    The longest matching entry wins, so "C#m" resolves to "C#" rather than
    "C".  Returns None when *text* does not begin with a known note name.
    """
    notation = detect_notation(text)
    best: tuple[int, str] | None = None
    for index, name in enumerate(notes_for(notation)):
        if text.startswith(name) and (best is None or len(name) > len(best[1])):
            best = (index, name)
    if best is None:
        return None
    return best[0], best[1], notation


def shift_index(index: int, semitones: int) -> int:
    """Move *index* by *semitones* around the 12-note cycle."""
    return (index + semitones) % 12
