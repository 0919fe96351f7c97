"""ChordPro export.

Renders a :class:`~chordsheet.models.Song` to ChordPro (``.cho``) text.

Section type → ChordPro directive mapping
----------------------------------------

+------------------+----------------------------------------------+
| SectionType      | Directive pair                               |
+==================+==============================================+
| ``VERSE``        | ``{start_of_verse: Verse 1}`` /              |
|                  | ``{end_of_verse}``                           |
+------------------+----------------------------------------------+
| ``CHORUS``       | ``{start_of_chorus: Chorus}`` /              |
|                  | ``{end_of_chorus}``                          |
+------------------+----------------------------------------------+
| ``BRIDGE``       | ``{start_of_bridge: Bridge}`` /              |
|                  | ``{end_of_bridge}``                          |
+------------------+----------------------------------------------+
| ``INTRO``,       | ``{comment: <name>}``                        |
| ``OUTRO``        | (no matching ChordPro standard)              |
+------------------+----------------------------------------------+

Every directive used here is understood by :func:`chordsheet.parser.parse_song`,
so exported files can be loaded again.

Usage::

    from chordsheet.chordpro import ChordProFormatter
    text = ChordProFormatter().render(song)
    Path("output.cho").write_text(text)
"""

from .models import Section, SectionType, Song
from .parser import SECTION_KEYWORDS_RE, infer_section_type
from .serializer import render_line

# Section types whose directives ChordPro has standardised.
_STRUCTURED = {
    SectionType.VERSE: ("start_of_verse", "end_of_verse"),
    SectionType.CHORUS: ("start_of_chorus", "end_of_chorus"),
    SectionType.BRIDGE: ("start_of_bridge", "end_of_bridge"),
}


class ChordProFormatter:
    """Render a :class:`~chordsheet.models.Song` to ChordPro text."""

    def render(self, song: Song) -> str:
        """Return ChordPro text for *song*.

        The returned string ends with a single newline and uses Unix line
        endings (``\\n``) throughout.
        """
        parts: list[str] = []

        # --- Metadata block ---
        parts.append(f"{{title: {song.title}}}")
        parts.append(f"{{artist: {song.artist}}}")
        parts.append(f"{{key: {song.original_key}}}")
        if song.capo_position:
            parts.append(f"{{capo: {song.capo_position}}}")
        if song.tempo is not None:
            parts.append(f"{{tempo: {song.tempo}}}")

        # --- Section blocks ---
        for section in song.sections:
            parts.append("")  # blank line before every section
            parts.extend(_render_section(section))

        return "\n".join(parts) + "\n"


def _render_section(section: Section) -> list[str]:
    """Return a list of lines for one section (no trailing blank line)."""
    label = section.name or section.type.value.capitalize()
    lines = [render_line(line) for line in section.lines]

    if section.type in _STRUCTURED:
        start_dir, end_dir = _STRUCTURED[section.type]
        return [f"{{{start_dir}: {label}}}", *lines, f"{{{end_dir}}}"]

    # Intro / outro have no standard environment; the comment carries the
    # section keyword so the parser reopens the right section type.
    if _label_type(label) is not section.type:
        label = f"{section.type.value.capitalize()} {label}".strip()
    return [f"{{comment: {label}}}", *lines]


def _label_type(label: str) -> SectionType | None:
    if not SECTION_KEYWORDS_RE.search(label):
        return None
    return infer_section_type(label)
