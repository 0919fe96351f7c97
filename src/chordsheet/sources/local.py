"""Song text from local files.

Any location that is not an ``http(s)://`` URL is treated as a path.  The
song id is the file name without its extension, e.g.
``songs/amazing-grace.txt`` → ``amazing-grace``.
"""

from pathlib import Path

from ..exceptions import FetchError
from .base import SongSource


class FileSource(SongSource):
    """Reads UTF-8 song files from disk."""

    @classmethod
    def can_handle(cls, location: str) -> bool:
        return "://" not in location

    def fetch(self, location: str) -> str:
        path = Path(location)
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FetchError(location, 0, str(exc)) from exc

    def song_id(self, location: str) -> str:
        return Path(location).stem
