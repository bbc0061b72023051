"""Chord symbol recognition.

A token is a chord when the chord library knows it, or failing that when it
matches one of the category grammars below.  Each category is a quality
pattern applied after a root note, once for international roots (``C``,
``F#``, ``Bb``) and once for Italian roots (``DO``, ``FA#``, ``SIb``).

+--------------------+--------------------------------------------------+
| Category           | Examples                                         |
+====================+==================================================+
| major              | ``C``, ``F#``, ``SOL``                           |
| minor              | ``Am``, ``LAm``                                  |
| seventh            | ``G7``, ``Cmaj7``, ``CM7``, ``SOL7``             |
| minor seventh      | ``Dm7``, ``REm7``                                |
| suspended          | ``Dsus4``, ``REsus2``                            |
| added              | ``Cadd9``, ``DOadd2``                            |
| diminished         | ``Bdim``, ``B°``, ``SIdim``                      |
| augmented          | ``Caug``, ``C+``, ``DOaug``                      |
| complex            | ``C9``, ``D13``, ``C/G``, ``REm/FA``, ``DO/G``   |
+--------------------+--------------------------------------------------+

New categories are added to :data:`CHORD_CATEGORIES`; recognition itself
never branches on the category.
"""

import re
from dataclasses import dataclass, field

from .library import ChordLibrary
from .models import ChordToken
from .notation import detect_notation

# ---------------------------------------------------------------------------
# Grammar fragments
# ---------------------------------------------------------------------------

# Sharps only where the 12-note orderings have them: no E#/B#, no MI#/SI#.
INTERNATIONAL_ROOT = r"(?:[ACDFG]#|[A-G]b?)"
ITALIAN_ROOT = r"(?:(?:SOL|DO|RE|FA|LA)#|(?:SOL|DO|RE|MI|FA|LA|SI)b?)"
ANY_ROOT = rf"(?:{ITALIAN_ROOT}|{INTERNATIONAL_ROOT})"

# Qualities allowed in front of an altered bass note.
_SLASH_QUALITY = r"(?:m|dim|aug|maj7|7|sus[24]|add[29])?"


@dataclass(frozen=True)
class ChordCategory:
    """A chord quality grammar, compiled for both notation systems."""

    name: str
    quality: str  # regex fragment matched right after the root note
    international: re.Pattern = field(init=False, repr=False, compare=False)
    italian: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(
            self, "international", re.compile(rf"^{INTERNATIONAL_ROOT}(?:{self.quality})$")
        )
        object.__setattr__(self, "italian", re.compile(rf"^{ITALIAN_ROOT}(?:{self.quality})$"))

    @property
    def patterns(self) -> tuple[re.Pattern, re.Pattern]:
        return self.international, self.italian

    def matches(self, token: str) -> bool:
        return any(p.match(token) for p in self.patterns)


CHORD_CATEGORIES: tuple[ChordCategory, ...] = (
    ChordCategory("major", r""),
    ChordCategory("minor", r"m"),
    ChordCategory("seventh", r"7|maj7|M7"),
    ChordCategory("minor_seventh", r"m7"),
    ChordCategory("suspended", r"sus[24]"),
    ChordCategory("added", r"add[29]"),
    ChordCategory("diminished", r"dim|°"),
    ChordCategory("augmented", r"aug|\+"),
    ChordCategory("complex", rf"[0-9]+|{_SLASH_QUALITY}/{ANY_ROOT}"),
)

# Splits any chord-like token into root / suffix / bass.
_TOKEN_RE = re.compile(
    rf"^(?P<root>{ITALIAN_ROOT}|{INTERNATIONAL_ROOT})"
    r"(?P<suffix>[^/]*)"
    rf"(?:/(?P<bass>{ANY_ROOT}))?$"
)


class ChordRecognizer:
    """Decide whether tokens are chord symbols.

    Args:
        library: Optional chord table consulted before the grammars.  It is
            read on every call, so a library that finishes loading later is
            picked up without rebuilding the recognizer.
        categories: The grammar family to fall back to.
    """

    def __init__(
        self,
        library: ChordLibrary | None = None,
        categories: tuple[ChordCategory, ...] = CHORD_CATEGORIES,
    ):
        self.library = library
        self.categories = categories

    def recognize(self, token: str) -> bool:
        """Return True if *token* is a chord symbol."""
        token = token.strip()
        if not token:
            return False
        if self.library is not None and self.library.lookup(token) is not None:
            return True
        return self.category_of(token) is not None

    def category_of(self, token: str) -> ChordCategory | None:
        """Return the first grammar category *token* matches, if any."""
        token = token.strip()
        for category in self.categories:
            if category.matches(token):
                return category
        return None

    def parse(self, token: str) -> ChordToken | None:
        """Split a recognised chord into a :class:`ChordToken`.

        Returns None when *token* is not a chord or has no identifiable
        root note (possible for library-only names).
        """
        token = token.strip()
        if not self.recognize(token):
            return None
        m = _TOKEN_RE.match(token)
        if not m:
            return None
        root = m.group("root")
        return ChordToken(
            root_note=root,
            notation=detect_notation(root),
            suffix=m.group("suffix"),
            bass_note=m.group("bass"),
        )

    def identify_chords(self, line: str) -> list[tuple[str, int]]:
        """Return ``(chord, column)`` pairs for every chord token in *line*."""
        return [
            (m.group(), m.start()) for m in re.finditer(r"\S+", line) if self.recognize(m.group())
        ]
