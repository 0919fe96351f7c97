from dataclasses import dataclass, field, replace
from enum import Enum

from .transpose import get_effective_key, transpose_chord


class SectionType(str, Enum):
    VERSE = "verse"
    CHORUS = "chorus"
    BRIDGE = "bridge"
    INTRO = "intro"
    OUTRO = "outro"


@dataclass
class ChordPosition:
    """A chord struck at a character offset into a line's lyrics.

    Example: ``ChordPosition("G", 6)`` on "Hello world" sits above the "w".
    """

    chord: str
    position: int


@dataclass
class Line:
    """One lyric line with zero or more chord annotations.

    Instrumental lines have blank lyrics and only chords, e.g. ``[Am][C][G]``
    parses to ``Line(lyrics="", chords=[...])`` with every chord at offset 0.
    """

    lyrics: str
    chords: list[ChordPosition] = field(default_factory=list)

    def sorted_chords(self) -> list[ChordPosition]:
        """Chords in ascending offset order (stable for equal offsets)."""
        return sorted(self.chords, key=lambda c: c.position)

    @property
    def is_instrumental(self) -> bool:
        return bool(self.chords) and not self.lyrics.strip()


@dataclass
class Section:
    """A semantic grouping of lines (verse, chorus, bridge, etc.)."""

    type: SectionType
    name: str | None = None  # heading text, e.g. "Verse 1", "Outro/Tag"
    lines: list[Line] = field(default_factory=list)


@dataclass
class Song:
    """A parsed song document."""

    id: str
    title: str
    artist: str
    original_key: str
    capo_position: int = 0  # 0 = no capo
    tempo: int | None = None
    sections: list[Section] = field(default_factory=list)
    notes: str | None = None
    scripture_reference: str | None = None
    book: str | None = None

    @property
    def effective_key(self) -> str:
        """The key open-chord shapes sound in with the capo applied."""
        return get_effective_key(self.original_key, self.capo_position)

    def transposed(self, to_key: str | None = None, capo: int | None = None) -> "Song":
        """Return a copy of the song in *to_key* with *capo* applied.

        Every chord is moved by the key change; the capo only replaces
        ``capo_position``.  The original song is left untouched.
        """
        from_key = self.original_key
        to_key = to_key or from_key
        sections = [
            replace(
                section,
                lines=[
                    replace(
                        line,
                        chords=[
                            ChordPosition(transpose_chord(c.chord, from_key, to_key), c.position)
                            for c in line.chords
                        ],
                    )
                    for line in section.lines
                ],
            )
            for section in self.sections
        ]
        return replace(
            self,
            original_key=to_key,
            capo_position=self.capo_position if capo is None else capo,
            sections=sections,
        )
