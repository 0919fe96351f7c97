class ChordsheetError(Exception):
    """Base exception for chordsheet."""


class FetchError(ChordsheetError):
    """Raised when song text cannot be read from a file or URL.

    ``status_code`` is the HTTP status, or 0 when no response was received
    (connection failure, missing file).
    """

    def __init__(self, location: str, status_code: int = 0, reason: str = ""):
        self.location = location
        self.status_code = status_code
        self.reason = reason
        if status_code:
            message = f"HTTP {status_code} fetching {location}"
        else:
            message = f"Could not read {location}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class UnsupportedSourceError(ChordsheetError):
    """Raised when no source can handle the given location."""

    def __init__(self, location: str):
        self.location = location
        super().__init__(f"No source found for location: {location}")


class UnsupportedFormatError(ChordsheetError):
    """Raised when an output format name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown output format: {name}")
