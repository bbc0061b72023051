from pathlib import Path
from unittest.mock import MagicMock, patch

import httpx

from songsheet.library import ChordLibrary, parse_chord_table
from songsheet.models import ChordDefinition

FIXTURE = Path(__file__).parent / "fixtures" / "chords.csv"
TEST_URL = "https://example.com/Chords.csv"


def load_fixture() -> str:
    return FIXTURE.read_text(encoding="utf-8")


def _response(status_code: int, text: str = "") -> MagicMock:
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    return resp


# ---------------------------------------------------------------------------
# parse_chord_table
# ---------------------------------------------------------------------------


def test_parse_skips_header_and_malformed_rows():
    definitions = parse_chord_table(load_fixture())
    assert [d.chord_en for d in definitions] == ["C", "Am", "G", "Csus4add9", "Dm7", "E"]


def test_parse_quoted_alternates():
    c = parse_chord_table(load_fixture())[0]
    assert c.chord_it == "DO"
    assert c.type == "major"
    assert c.fingering == "x32010"
    assert c.alternative_fingerings == ("x35553", "8-10-10-9-8-8")
    assert c.diagram_ref == "diagrams/c.svg"


def test_parse_empty_trailing_diagram_is_none():
    am = parse_chord_table(load_fixture())[1]
    assert am.alternative_fingerings == ("577555",)
    assert am.diagram_ref is None


def test_parse_missing_diagram_column():
    dm7 = parse_chord_table(load_fixture())[4]
    assert dm7.chord_it == "REm7"
    assert dm7.diagram_ref is None


def test_parse_empty_alternates():
    sus = parse_chord_table(load_fixture())[3]
    assert sus.alternative_fingerings == ()


def test_parse_header_only():
    assert parse_chord_table("chord_it,chord_en,type,fingering,alts\n") == []


def test_parse_empty_text():
    assert parse_chord_table("") == []


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def test_new_library_is_empty_and_unloaded():
    library = ChordLibrary()
    assert not library.is_loaded
    assert len(library) == 0
    assert library.lookup("C") is None


def test_load_from_path():
    library = ChordLibrary()
    definitions = library.load(FIXTURE)
    assert library.is_loaded
    assert len(definitions) == 6
    assert len(library) == 6


def test_load_from_path_string():
    library = ChordLibrary()
    library.load(str(FIXTURE))
    assert library.lookup("SOL").chord_en == "G"


def test_load_missing_file_gives_empty_library(tmp_path):
    library = ChordLibrary()
    assert library.load(tmp_path / "nope.csv") == []
    assert library.is_loaded
    assert len(library) == 0


def test_load_missing_file_is_logged(tmp_path, caplog):
    ChordLibrary().load(tmp_path / "nope.csv")
    assert "Error loading chord definitions" in caplog.text


def test_load_from_url():
    with patch("songsheet.library.httpx.get", return_value=_response(200, load_fixture())) as get:
        library = ChordLibrary()
        library.load(TEST_URL)
    get.assert_called_once()
    assert get.call_args.args[0] == TEST_URL
    assert library.lookup("Am").chord_it == "LAm"


def test_load_from_url_http_error_gives_empty_library():
    with patch("songsheet.library.httpx.get", return_value=_response(404)):
        library = ChordLibrary()
        assert library.load(TEST_URL) == []
    assert library.is_loaded
    assert library.lookup("C") is None


def test_load_from_url_transport_error_gives_empty_library():
    request = httpx.Request("GET", TEST_URL)
    with patch(
        "songsheet.library.httpx.get",
        side_effect=httpx.ConnectError("refused", request=request),
    ):
        library = ChordLibrary()
        assert library.load(TEST_URL) == []
    assert library.is_loaded


def test_load_in_background():
    library = ChordLibrary()
    thread = library.load_in_background(FIXTURE)
    thread.join(timeout=5)
    assert library.wait(timeout=5)
    assert library.lookup("MI").chord_en == "E"


def test_constructed_with_definitions_is_loaded():
    library = ChordLibrary([ChordDefinition("DO", "C", "major", "x32010")])
    assert library.is_loaded
    assert "C" in library


# ---------------------------------------------------------------------------
# lookup
# ---------------------------------------------------------------------------


def test_lookup_by_either_name():
    library = ChordLibrary()
    library.load(FIXTURE)
    assert library.lookup("DO") is library.lookup("C")


def test_lookup_trims_name():
    library = ChordLibrary()
    library.load(FIXTURE)
    assert library.lookup("  Am ").chord_it == "LAm"


def test_lookup_unknown():
    library = ChordLibrary()
    library.load(FIXTURE)
    assert library.lookup("F#m") is None
    assert library.lookup("") is None


def test_lookup_first_loaded_wins():
    library = ChordLibrary()
    library.load_text(
        "chord_it,chord_en,type,fingering,alts\n"
        "DO,C,major,x32010,\n"
        "DO,C,major,x35553,\n"
        "SI,DO,odd,x,\n"
    )
    assert library.lookup("C").fingering == "x32010"
    assert library.lookup("DO").fingering == "x32010"
    assert library.lookup("SI").type == "odd"
