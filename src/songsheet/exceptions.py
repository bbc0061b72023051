class SongsheetError(Exception):
    """Base exception for songsheet."""


class ChordTableError(SongsheetError):
    """Raised when a chord table source cannot be read."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load chord table from {source}: {reason}")


class UnsupportedFileError(SongsheetError):
    """Raised when no reader matches the given file's extension."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Unsupported file type: {path}")
