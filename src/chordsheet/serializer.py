"""Song → plain song-sheet text.

The inverse of :func:`chordsheet.parser.parse_song`: the output re-parses
to a Song with the same metadata, sections, lines and chord offsets.  Byte
equality with the text the Song was parsed from is not a goal.
"""

from .models import Line, Section, SectionType, Song
from .parser import infer_section_type, is_section_heading

_START_DIRECTIVES = {
    SectionType.VERSE: "start_of_verse",
    SectionType.CHORUS: "start_of_chorus",
    SectionType.BRIDGE: "start_of_bridge",
}


class SongSerializer:
    """Render a :class:`~chordsheet.models.Song` back to song-sheet text."""

    def render(self, song: Song) -> str:
        """Return the song as text with Unix line endings."""
        parts: list[str] = []

        # --- Header block ---
        parts.append(f"Title: {song.title}")
        parts.append(f"Artist: {song.artist}")
        parts.append(f"Key: {song.original_key}")
        parts.append(f"Original Key: {song.original_key}")
        if song.capo_position:
            parts.append(f"Capo: {song.capo_position}")
        if song.tempo is not None:
            parts.append(f"Tempo: {song.tempo}")
        if song.notes:
            parts.append(f"Notes: {song.notes}")
        if song.scripture_reference:
            parts.append(f"Scripture Reference(s): {song.scripture_reference}")
        if song.book:
            parts.append(f"Book: {song.book}")
        parts.append("")

        # --- Sections ---
        for section in song.sections:
            parts.append(section_heading(section))
            parts.extend(render_line(line) for line in section.lines)
            parts.append("")

        return "\n".join(parts) + "\n"


def section_heading(section: Section) -> str:
    """Heading line for *section*, e.g. ``"Verse 1:"``.

    A name that would not re-parse to the same kind (``Refrain`` on a
    chorus, ``Tag`` on a verse) is written as a ``{start_of_*: name}`` directive so
    both the name and the kind survive a re-parse.  Intro and outro have no
    such directive and fall back to the bare kind.
    """
    name = section.name or ""
    heading = f"{name}:"
    if is_section_heading(heading) and infer_section_type(name) is section.type:
        return heading
    if name and section.type in _START_DIRECTIVES:
        return f"{{{_START_DIRECTIVES[section.type]}: {name}}}"
    return f"{section.type.value.capitalize()}:"


def render_line(line: Line) -> str:
    """Re-insert ``[chord]`` markers into the lyrics at their offsets.

    Chords are placed in ascending offset order and the lyrics are sliced
    against the original string, so earlier insertions never shift later
    ones.
    """
    if not line.chords:
        return line.lyrics

    out: list[str] = []
    cursor = 0
    for pos in line.sorted_chords():
        out.append(line.lyrics[cursor:pos.position])
        out.append(f"[{pos.chord}]")
        cursor = max(cursor, pos.position)
    out.append(line.lyrics[cursor:])
    return "".join(out)


def serialize_song(song: Song) -> str:
    """Module-level shortcut for :meth:`SongSerializer.render`."""
    return SongSerializer().render(song)
