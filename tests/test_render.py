from songsheet.editor import song_from_lines, sync_lines
from songsheet.library import ChordLibrary
from songsheet.models import ChordDefinition, SongData, SongLine
from songsheet.render import SongRenderer, describe_chord
from songsheet.structurer import SongStructurer

_C = ChordDefinition("DO", "C", "major", "x32010", ("x35553",), "diagrams/c.svg")
_AM = ChordDefinition("LAm", "Am", "minor", "x02210")


def _song(**kwargs) -> SongData:
    defaults = dict(
        title="Let It Be",
        artist="The Beatles",
        bpm="72",
        content="C   G   Am\nWhen I find myself in times of trouble\n[CHORDS] F C",
        lines=[
            SongLine(is_chord_line=True, content="C   G   Am"),
            SongLine(is_chord_line=False, content="When I find myself in times of trouble"),
            SongLine(is_chord_line=True, content="F C", tag="CHORDS"),
        ],
    )
    defaults.update(kwargs)
    return SongData(**defaults)


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------


def test_render_header():
    out = SongRenderer().render(_song())
    assert out.splitlines()[:4] == ["Let It Be", "The Beatles", "BPM: 72", ""]


def test_render_body_untransposed():
    out = SongRenderer().render(_song())
    assert out.splitlines()[4:] == [
        "C   G   Am",
        "When I find myself in times of trouble",
        "[CHORDS] F C",
    ]
    assert out.endswith("\n")


def test_render_transposed():
    out = SongRenderer().render(_song(), semitones=2)
    lines = out.splitlines()
    assert lines[2] == "BPM: 72 (+2 semitones)"
    assert lines[4] == "D   A   Bm"
    assert lines[6] == "[CHORDS] G D"


def test_render_negative_transposition_label():
    assert "(-3 semitones)" in SongRenderer().render(_song(), semitones=-3)


def test_render_never_transposes_lyrics():
    song = _song(lines=[SongLine(is_chord_line=False, content="A B C D E")])
    assert SongRenderer().render(song, semitones=1).splitlines()[-1] == "A B C D E"


def test_render_empty_song():
    assert SongRenderer().render(SongData()) == "Untitled\nUnknown\nBPM: 120\n"


def test_render_reads_back():
    song = _song()
    again = SongStructurer().structure(SongRenderer().render(song))
    assert (again.title, again.artist, again.bpm) == (song.title, song.artist, song.bpm)
    assert again.lines == song.lines


# ---------------------------------------------------------------------------
# chord_segments
# ---------------------------------------------------------------------------


def test_chord_segments_enriched():
    renderer = SongRenderer(library=ChordLibrary([_C, _AM]))
    assert renderer.chord_segments("C  G Am") == [
        ("C", _C),
        ("  ", None),
        ("G", None),
        (" ", None),
        ("Am", _AM),
    ]


def test_chord_segments_rejoin_to_line():
    line = "  DO   LAm  "
    segments = SongRenderer(library=ChordLibrary([_C, _AM])).chord_segments(line)
    assert "".join(text for text, _ in segments) == line
    assert [d for _, d in segments if d] == [_C, _AM]


def test_chord_segments_without_library():
    assert SongRenderer().chord_segments("C G") == [("C", None), (" ", None), ("G", None)]


# ---------------------------------------------------------------------------
# describe_chord
# ---------------------------------------------------------------------------


def test_describe_full():
    assert describe_chord(_C) == (
        "DO / C\n"
        "Type: major\n"
        "Fingering: x32010\n"
        "Alternatives: x35553\n"
        "Diagram: diagrams/c.svg"
    )


def test_describe_minimal():
    assert describe_chord(_AM) == "LAm / Am\nType: minor\nFingering: x02210"


def test_render_blank_artist_and_bpm_use_defaults():
    out = SongRenderer().render(SongData(title="Song", artist="", bpm=" "))
    assert out == "Song\nUnknown\nBPM: 120\n"


def test_edited_song_reads_back():
    lines = sync_lines("[CHORDS] Am G\nHello darkness my old friend", [])
    song = song_from_lines("Song", "", "90", lines)
    out = SongRenderer().render(song)
    assert "[CHORDS] Am G" in out.splitlines()
    assert "[CHORDS] [CHORDS]" not in out

    again = SongStructurer().structure(out)
    assert (again.title, again.artist, again.bpm) == ("Song", "Unknown", "90")
    assert again.lines == lines


def test_edited_song_survives_repeated_round_trips():
    song = song_from_lines("Song", "Artist", "90", sync_lines("[CHORDS] Am G", []))
    for _ in range(3):
        song = SongStructurer().structure(SongRenderer().render(song))
    assert song.lines == [SongLine(is_chord_line=True, content="Am G", tag="CHORDS")]
    assert song.content == "[CHORDS] Am G"
