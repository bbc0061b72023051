"""Chord table loading and lookup.

A chord table is CSV text with a header row followed by records of the form::

    chord_it,chord_en,type,fingering,"alt1, alt2",diagram_ref

The alternates column is quoted so it can hold its own comma-separated list;
the trailing ``diagram_ref`` column is optional.  Rows with fewer than five
fields are skipped.

Usage::

    library = ChordLibrary()
    library.load("chords.csv")          # or an http(s) URL
    library.lookup("LAm")               # -> ChordDefinition | None
"""

import csv
import logging
import threading
from pathlib import Path

import httpx

from .exceptions import ChordTableError
from .models import ChordDefinition

logger = logging.getLogger(__name__)

MIN_FIELDS = 5


def parse_chord_table(text: str) -> list[ChordDefinition]:
    """Parse chord table CSV *text* into definitions, in table order."""
    definitions: list[ChordDefinition] = []
    reader = csv.reader(text.splitlines(), skipinitialspace=True)
    next(reader, None)  # header

    for row_number, row in enumerate(reader, start=2):
        fields = [f.strip() for f in row]
        if len(fields) < MIN_FIELDS:
            if any(fields):
                logger.debug(f"Skipping malformed chord table row {row_number}: {row!r}")
            continue
        chord_it, chord_en, chord_type, fingering, alternates = fields[:MIN_FIELDS]
        diagram_ref = fields[5] if len(fields) > 5 and fields[5] else None
        definitions.append(
            ChordDefinition(
                chord_it=chord_it,
                chord_en=chord_en,
                type=chord_type,
                fingering=fingering,
                alternative_fingerings=tuple(a.strip() for a in alternates.split(",") if a.strip()),
                diagram_ref=diagram_ref,
            )
        )
    return definitions


def _read_source(source: str | Path) -> str:
    """Return the raw text of a chord table from a URL or a local path.

    Raises ChordTableError on any failure.
    """
    source_str = str(source)
    if source_str.startswith(("http://", "https://")):
        try:
            resp = httpx.get(source_str, follow_redirects=True, timeout=15)
        except httpx.RequestError as exc:
            raise ChordTableError(source_str, str(exc)) from exc
        if resp.status_code != 200:
            raise ChordTableError(source_str, f"HTTP {resp.status_code}")
        return resp.text

    try:
        return Path(source).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ChordTableError(source_str, str(exc)) from exc


class ChordLibrary:
    """An in-memory chord table indexed by Italian and international name.

    The library starts empty and unloaded.  It is filled once, either
    synchronously with :meth:`load` or on a worker thread with
    :meth:`load_in_background`; lookups made before then return None.
    """

    def __init__(self, definitions: list[ChordDefinition] | None = None):
        self._definitions: tuple[ChordDefinition, ...] = ()
        self._index: dict[str, ChordDefinition] = {}
        self._loaded = threading.Event()
        if definitions is not None:
            self._install(definitions)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, source: str | Path) -> list[ChordDefinition]:
        """Load the table at *source* (path or http(s) URL).

        Never raises: an unreadable source is logged and leaves an empty,
        loaded library behind.
        """
        try:
            text = _read_source(source)
        except ChordTableError as exc:
            logger.error(f"Error loading chord definitions: {exc}")
            self._install([])
            return []
        return self.load_text(text)

    def load_text(self, text: str) -> list[ChordDefinition]:
        """Load the table from CSV *text*."""
        definitions = parse_chord_table(text)
        self._install(definitions)
        logger.debug(f"Loaded {len(definitions)} chord definitions")
        return definitions

    def load_in_background(self, source: str | Path) -> threading.Thread:
        """Start loading *source* on a daemon thread and return the thread."""
        thread = threading.Thread(
            target=self.load, args=(source,), name="chord-library-loader", daemon=True
        )
        thread.start()
        return thread

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the library is loaded; return :attr:`is_loaded`."""
        return self._loaded.wait(timeout)

    def _install(self, definitions: list[ChordDefinition]) -> None:
        index: dict[str, ChordDefinition] = {}
        # First row wins on duplicate names.
        for definition in definitions:
            index.setdefault(definition.chord_it, definition)
            index.setdefault(definition.chord_en, definition)
        self._definitions = tuple(definitions)
        self._index = index
        self._loaded.set()

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def is_loaded(self) -> bool:
        return self._loaded.is_set()

    @property
    def definitions(self) -> tuple[ChordDefinition, ...]:
        return self._definitions

    def lookup(self, name: str) -> ChordDefinition | None:
        """Return the definition whose Italian or international name is *name*."""
        name = name.strip()
        if not name:
            return None
        return self._index.get(name)

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._definitions)
