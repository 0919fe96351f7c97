import logging
import re
import sys
from pathlib import Path
from typing import NoReturn

import click

from .exceptions import ChordsheetError, FetchError
from .formatters import file_extension, format_names, get_formatter
from .library import SongLibrary
from .transpose import (
    get_all_keys,
    get_effective_key,
    get_suggested_capo_positions,
    parse_chord,
    transpose_by_semitones,
)

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def _slugify(text: str) -> str:
    """Convert a string to a lowercase hyphenated slug suitable for filenames."""
    text = text.lower()
    text = re.sub(r"[^\w\s-]", "", text)   # drop punctuation
    text = re.sub(r"[\s_]+", "-", text)     # spaces/underscores → hyphens
    text = re.sub(r"-{2,}", "-", text)      # collapse multiple hyphens
    return text.strip("-")


def _default_filename(artist: str, title: str, ext: str) -> str:
    return f"{_slugify(artist)}-{_slugify(title)}.{ext}"


def _fail(message: str) -> NoReturn:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def _validate_key(ctx, param, value: str | None) -> str | None:
    if value is not None and parse_chord(value) is None:
        raise click.BadParameter(f"{value!r} is not a key (try 'chordsheet keys').")
    return value


@click.group()
@click.option("-v", "--verbose", count=True, help="Log more (-v info, -vv debug).")
def main(verbose: int) -> None:
    """Chord sheets for live performance: parse, transpose, export."""
    logging.basicConfig(
        level=_LOG_LEVELS[min(verbose, len(_LOG_LEVELS) - 1)],
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("location")
@click.option("--to-key", envvar="CHORDSHEET_TO_KEY", default=None, metavar="KEY",
              callback=_validate_key,
              help="Transpose every chord into KEY.")
@click.option("--capo", envvar="CHORDSHEET_CAPO", type=click.IntRange(0, 12), default=None,
              help="Capo fret (overrides the song's own capo).")
@click.option("-f", "--format", "fmt", type=click.Choice(format_names()), default="sheet",
              show_default=True, help="Output format.")
@click.option("-o", "--output", "output_path", default=None, metavar="PATH",
              help="Write to PATH instead of stdout.")
@click.option("--save", is_flag=True, default=False,
              help="Write to <artist>-<title>.<ext> in the current directory.")
def show(location: str, to_key: str | None, capo: int | None, fmt: str,
         output_path: str | None, save: bool) -> None:
    """Load a song from a file or URL and print it.

    \b
    Formats:
      - sheet:    chords laid out above the lyrics
      - text:     song-sheet text with inline [chords]
      - chordpro: ChordPro directives (.cho)
    """
    try:
        song = SongLibrary().load(location)
    except FetchError as exc:
        msg = f"Could not fetch {exc.location}"
        if exc.status_code:
            msg += f" (HTTP {exc.status_code})"
        elif exc.reason:
            msg += f" ({exc.reason})"
        _fail(msg)
    except ChordsheetError as exc:
        _fail(str(exc))

    rendered = get_formatter(fmt)(song.transposed(to_key, capo))

    if not output_path and not save:
        click.echo(rendered, nl=False)
        return

    dest = Path(output_path) if output_path else Path(
        _default_filename(song.artist, song.title, file_extension(fmt))
    )
    dest.write_text(rendered, encoding="utf-8")
    click.echo(f"Written to {dest}")


@main.command(context_settings={"ignore_unknown_options": True})
@click.argument("chord")
@click.argument("semitones", type=int)
def transpose(chord: str, semitones: int) -> None:
    """Transpose CHORD by SEMITONES (negative to go down)."""
    click.echo(transpose_by_semitones(chord, semitones))


@main.command()
def keys() -> None:
    """List the keys a song can be transposed to."""
    for key in get_all_keys():
        click.echo(key)


@main.command()
@click.argument("from_key")
@click.argument("to_key")
def capo(from_key: str, to_key: str) -> None:
    """Suggest capo positions for playing FROM_KEY shapes in TO_KEY."""
    positions = get_suggested_capo_positions(from_key, to_key)
    click.echo(" ".join(str(p) for p in positions))


@main.command("effective-key")
@click.argument("key")
@click.argument("capo_position", type=click.IntRange(0, 12))
def effective_key(key: str, capo_position: int) -> None:
    """Print the key KEY shapes sound in with a capo at CAPO_POSITION."""
    click.echo(get_effective_key(key, capo_position))
