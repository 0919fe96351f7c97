from abc import ABC, abstractmethod

from ..models import Song
from ..parser import parse_song


class SongSource(ABC):
    """Abstract base class for places song text can be loaded from."""

    @classmethod
    @abstractmethod
    def can_handle(cls, location: str) -> bool:
        """Return True if this source can read the given location."""

    @abstractmethod
    def fetch(self, location: str) -> str:
        """Read the song text at *location*.

        Raises FetchError when the text cannot be read.
        """

    @abstractmethod
    def song_id(self, location: str) -> str:
        """Stable identifier for the song at *location*."""

    def load(self, location: str) -> Song:
        """Convenience method: fetch + parse."""
        text = self.fetch(location)
        return parse_song(text, self.song_id(location))
