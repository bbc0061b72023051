from pathlib import Path

import pytest

from songsheet.classifier import LineClassifier
from songsheet.exceptions import UnsupportedFileError
from songsheet.importer import SUPPORTED_EXTENSIONS, import_file
from songsheet.library import ChordLibrary
from songsheet.structurer import SongStructurer

FIXTURES = Path(__file__).parent / "fixtures"


def test_import_txt():
    song = import_file(FIXTURES / "songs" / "hotel-california.txt")
    assert song.title == "Hotel California"
    assert len(song.lines) == 5


def test_import_accepts_string_path():
    song = import_file(str(FIXTURES / "songs" / "la-canzone.txt"))
    assert song.artist == "Lucio Battisti"


def test_import_uppercase_extension(tmp_path):
    path = tmp_path / "SONG.TXT"
    path.write_text("Title\nArtist\nAm G\n", encoding="utf-8")
    assert import_file(path).title == "Title"


def test_import_with_custom_structurer(tmp_path):
    path = tmp_path / "song.txt"
    path.write_text("T\nA\nCsus4add9   Csus4add9\n", encoding="utf-8")
    library = ChordLibrary()
    library.load(FIXTURES / "chords.csv")
    song = import_file(path, SongStructurer(LineClassifier(library=library)))
    assert song.lines[0].is_chord_line


@pytest.mark.parametrize("name", ["song.pdf", "song.docx", "song", "song.cho"])
def test_unsupported_extension(tmp_path, name):
    path = tmp_path / name
    path.write_text("x", encoding="utf-8")
    with pytest.raises(UnsupportedFileError) as exc_info:
        import_file(path)
    assert exc_info.value.path == str(path)


def test_missing_file_propagates(tmp_path):
    with pytest.raises(OSError):
        import_file(tmp_path / "missing.txt")


def test_supported_extensions():
    assert SUPPORTED_EXTENSIONS == (".txt",)
