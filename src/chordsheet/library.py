"""In-memory song library.

Parsing is cheap but not free, and a performer flipping transpose controls
re-renders the same song many times.  :class:`SongLibrary` parses each
location once and hands back the cached :class:`~chordsheet.models.Song`
until it is invalidated.

The library is an ordinary object: create one per session and pass it to
whatever needs it.

Usage::

    from chordsheet.library import SongLibrary

    library = SongLibrary()
    song = library.load("songs/amazing-grace.txt")
    library.load_directory("songs/")
    library.invalidate("songs/amazing-grace.txt")  # re-read on next load
"""

import logging
from pathlib import Path

from .models import Song
from .registry import get_source

logger = logging.getLogger(__name__)


class SongLibrary:
    """Cache of parsed songs keyed by the location they were loaded from."""

    def __init__(self) -> None:
        self._by_location: dict[str, Song] = {}

    def load(self, location: str) -> Song:
        """Return the song at *location*, parsing it on first use.

        Raises FetchError / UnsupportedSourceError from the underlying source.
        """
        cached = self._by_location.get(location)
        if cached is not None:
            logger.debug("Cache hit for %s", location)
            return cached

        logger.debug("Cache miss for %s", location)
        song = get_source(location).load(location)
        self._by_location[location] = song
        logger.info("Loaded %r (%s) from %s", song.title, song.id, location)
        return song

    def load_directory(self, directory: str | Path, pattern: str = "*.txt") -> list[Song]:
        """Load every file in *directory* matching *pattern*, in name order."""
        return [self.load(str(path)) for path in sorted(Path(directory).glob(pattern))]

    def get(self, song_id: str) -> Song | None:
        """Look up an already-loaded song by id."""
        for song in self._by_location.values():
            if song.id == song_id:
                return song
        return None

    def songs(self) -> list[Song]:
        """Loaded songs, in load order."""
        return list(self._by_location.values())

    def invalidate(self, location: str | None = None) -> None:
        """Drop one cached location, or everything when *location* is None."""
        if location is None:
            logger.debug("Clearing %d cached songs", len(self._by_location))
            self._by_location.clear()
        else:
            self._by_location.pop(location, None)

    def __contains__(self, location: object) -> bool:
        return location in self._by_location

    def __len__(self) -> int:
        return len(self._by_location)
