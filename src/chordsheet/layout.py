"""Chord-over-lyric layout for monospace output.

Renders each :class:`~chordsheet.models.Line` as two rows, chords above the
syllables they are struck on::

    G           C
    Hello world today

Chords are transposed at render time; the parsed Song is never modified.
"""

from .models import Line, Section, Song
from .transpose import get_effective_key, transpose_chord

INSTRUMENTAL_LABEL = "(instrumental)"


def _transposed(line: Line, from_key: str | None, to_key: str | None) -> list[tuple[int, str]]:
    # Capo never changes the chord shapes shown, only the effective key.
    pairs = []
    for pos in line.sorted_chords():
        chord = pos.chord
        if from_key and to_key:
            chord = transpose_chord(chord, from_key, to_key, 0)
        pairs.append((pos.position, chord))
    return pairs


def layout_line(line: Line, from_key: str | None = None, to_key: str | None = None) -> tuple[str, str]:
    """Return ``(chord_row, lyric_row)`` for *line*.

    The lyrics are cut into segments at each chord offset.  A segment is as
    wide as its text or its chord, whichever is longer; a chord that
    outgrows its syllable pads the lyric row so the next chord never touches
    it.  Instrumental lines put the chords on one row, separated by spaces.
    """
    chords = _transposed(line, from_key, to_key)
    lyrics = line.lyrics

    if not chords:
        return "", lyrics

    if line.is_instrumental:
        return " ".join(chord for _, chord in chords), INSTRUMENTAL_LABEL

    lyric_row = lyrics[: chords[0][0]]
    chord_row = " " * len(lyric_row)

    for i, (position, chord) in enumerate(chords):
        end = chords[i + 1][0] if i + 1 < len(chords) else len(lyrics)
        text = lyrics[position:end]
        is_last = i + 1 == len(chords)
        width = max(len(text), len(chord) if is_last else len(chord) + 1)
        chord_row += chord.ljust(width)
        lyric_row += text.ljust(width)

    return chord_row.rstrip(), lyric_row.rstrip()


def render_section(section: Section, from_key: str | None = None, to_key: str | None = None) -> str:
    """Section heading followed by the laid-out lines."""
    rows = [(section.name or section.type.value.capitalize()).upper()]
    for line in section.lines:
        chord_row, lyric_row = layout_line(line, from_key, to_key)
        if chord_row:
            rows.append(chord_row)
        rows.append(lyric_row)
    return "\n".join(rows)


def render_song(song: Song, to_key: str | None = None, capo: int | None = None) -> str:
    """Render a full chord sheet for performance.

    *to_key* transposes every chord from the song's original key.  *capo*
    overrides the song's capo; it only changes the reported effective key.
    """
    key = to_key or song.original_key
    capo = song.capo_position if capo is None else capo

    header = [song.title, song.artist]
    key_line = f"Key: {key}"
    if capo:
        key_line += f"  Capo: {capo}  (sounds in {get_effective_key(key, capo)})"
    header.append(key_line)
    if song.tempo:
        header.append(f"Tempo: {song.tempo}")

    blocks = ["\n".join(header)]
    blocks.extend(render_section(s, song.original_key, to_key) for s in song.sections)
    return "\n\n".join(blocks) + "\n"
