from .exceptions import UnsupportedSourceError
from .sources.base import SongSource
from .sources.http import HttpSource
from .sources.local import FileSource

# Order matters: FileSource accepts anything without a scheme.
_SOURCES: list[type[SongSource]] = [
    HttpSource,
    FileSource,
]


def get_source(location: str) -> SongSource:
    """Return an instantiated source for the given location.

    Raises UnsupportedSourceError if no source matches.
    """
    for cls in _SOURCES:
        if cls.can_handle(location):
            return cls()
    raise UnsupportedSourceError(location)
