import logging
from pathlib import Path
from typing import Callable

from .exceptions import UnsupportedFileError
from .models import SongData
from .structurer import SongStructurer

logger = logging.getLogger(__name__)


def _read_text_file(path: Path) -> str:
    return path.read_text(encoding="utf-8")


# Word-processor and PDF documents need a text extractor and are not read here.
_READERS: dict[str, Callable[[Path], str]] = {
    ".txt": _read_text_file,
}

SUPPORTED_EXTENSIONS: tuple[str, ...] = tuple(_READERS)


def import_file(path: str | Path, structurer: SongStructurer | None = None) -> SongData:
    """Read the song file at *path* and return its structured form.

    Raises UnsupportedFileError if no reader handles the file's extension.
    OSError from reading the file propagates to the caller.
    """
    path = Path(path)
    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        raise UnsupportedFileError(str(path))

    logger.debug(f"Importing {path}")
    structurer = structurer or SongStructurer()
    return structurer.structure(reader(path))
