from typing import Callable

from .chordpro import ChordProFormatter
from .exceptions import UnsupportedFormatError
from .layout import render_song
from .models import Song
from .serializer import SongSerializer

Formatter = Callable[[Song], str]

# name -> (renderer, default file extension)
_FORMATTERS: dict[str, tuple[Formatter, str]] = {
    "sheet": (render_song, "txt"),
    "text": (SongSerializer().render, "txt"),
    "chordpro": (ChordProFormatter().render, "cho"),
}


def format_names() -> list[str]:
    return list(_FORMATTERS)


def get_formatter(name: str) -> Formatter:
    """Return the renderer registered under *name*.

    Raises UnsupportedFormatError if no formatter matches.
    """
    try:
        return _FORMATTERS[name][0]
    except KeyError:
        raise UnsupportedFormatError(name) from None


def file_extension(name: str) -> str:
    if name not in _FORMATTERS:
        raise UnsupportedFormatError(name)
    return _FORMATTERS[name][1]
