import json
import logging
import sys

import click

from .classifier import LineClassifier
from .config import CHORDS_ENV_VAR
from .exceptions import SongsheetError
from .importer import SUPPORTED_EXTENSIONS, import_file
from .library import ChordLibrary
from .log import setup_logger
from .recognizer import ChordRecognizer
from .render import SongRenderer, describe_chord
from .structurer import SongStructurer
from .transposer import ChordTransposer

_chords_option = click.option(
    "--chords", "chords_source", default=None, envvar=CHORDS_ENV_VAR, metavar="SRC",
    help=f"Chord table CSV (path or http(s) URL). Defaults to ${CHORDS_ENV_VAR}.",
)


def _load_library(source: str | None) -> ChordLibrary:
    library = ChordLibrary()
    if source:
        library.load(source)
    return library


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """Structure plain-text chord sheets and transpose their chords.

    \b
    Chords may be written in international (C, Am7, F#/C#) or
    Italian (DO, LAm7, FA#/DO#) notation.
    """
    if verbose:
        setup_logger(logging.DEBUG)


@main.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@_chords_option
@click.option("-s", "--transpose", "semitones", default=0, show_default=True,
              help="Shift chord lines by this many semitones.")
@click.option("--json", "as_json", is_flag=True, default=False,
              help="Print the structured song as JSON instead of a sheet.")
def parse(path: str, chords_source: str | None, semitones: int, as_json: bool) -> None:
    """Structure the song in PATH and print it."""
    library = _load_library(chords_source)
    recognizer = ChordRecognizer(library)

    try:
        song = import_file(path, SongStructurer(LineClassifier(library=library)))
    except SongsheetError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.echo(f"Supported file types: {', '.join(SUPPORTED_EXTENSIONS)}", err=True)
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as exc:
        click.echo(f"Error: Could not read {path}: {exc}", err=True)
        sys.exit(1)

    if as_json:
        # Transposition is stored as a setting, not applied to the text.
        song.transposed_semitones = semitones
        click.echo(json.dumps(song.to_dict(), ensure_ascii=False, indent=2))
        return

    renderer = SongRenderer(ChordTransposer(recognizer), library)
    click.echo(renderer.render(song, semitones), nl=False)


@main.command()
@click.argument("text")
@click.option("-s", "--semitones", required=True, type=int,
              help="Number of semitones to shift (negative moves down).")
@_chords_option
def transpose(text: str, semitones: int, chords_source: str | None) -> None:
    """Transpose the chords in TEXT (a chord or a line of chords)."""
    recognizer = ChordRecognizer(_load_library(chords_source))
    click.echo(ChordTransposer(recognizer).transpose_line(text, semitones))


@main.command()
@click.argument("chord")
@_chords_option
def lookup(chord: str, chords_source: str | None) -> None:
    """Show what the chord table knows about CHORD."""
    library = _load_library(chords_source)
    definition = library.lookup(chord)
    if definition is not None:
        click.echo(describe_chord(definition))
        return

    recognizer = ChordRecognizer(library)
    token = recognizer.parse(chord)
    if token is None:
        click.echo(f"Error: '{chord}' is not a recognised chord", err=True)
        sys.exit(1)

    category = recognizer.category_of(chord)
    click.echo(f"'{chord}' is not in the chord table")
    click.echo(f"Recognised as: {category.name if category else 'chord'}")
    click.echo(f"Root: {token.root_note} ({token.notation.value} notation)")
    if token.suffix:
        click.echo(f"Quality: {token.suffix}")
    if token.bass_note:
        click.echo(f"Bass: {token.bass_note}")
