"""Song text parser.

Turns a hand-authored song sheet into a :class:`~chordsheet.models.Song`::

    Title: Amazing Grace
    Artist: John Newton
    Key: G

    Verse 1:
    A[G]mazing [G7]grace, how [C]sweet the [G]sound

Pipeline:

  1. classify_line()          : BLANK / DIRECTIVE / SECTION / METADATA / CONTENT
  2. parse_header_metadata()  : "Key: Value" header lines
  3. parse_directive()        : "{key: value}" ChordPro directives
  4. parse_chord_lyric_line() : inline [Chord] markers → lyrics + offsets
  5. parse_song()             : full pipeline: raw text → Song

The parser never raises on malformed text: missing metadata falls back to
defaults, and lines outside any section are dropped.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum, auto

from .models import ChordPosition, Line, Section, SectionType, Song
from .transpose import MAX_CAPO

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Unknown Title"
DEFAULT_ARTIST = "Unknown Artist"
DEFAULT_KEY = "C"

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

# Any [token] group; the text inside is taken verbatim as the chord name.
CHORD_BRACKET_RE = re.compile(r"\[[^\]]+\]")

# Same, with a capture group so re.split() keeps the brackets.
_CHORD_SPLIT_RE = re.compile(r"(\[[^\]]+\])")

# Words that turn a "...:" line into a section heading.
SECTION_KEYWORDS_RE = re.compile(r"verse|chorus|bridge|intro|outro|tag", re.IGNORECASE)

DIRECTIVE_RE = re.compile(r"^\{(.*)\}$")

# Leading signed integer, ignoring trailing junk ("3 frets" → 3).
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")

# Section-opening ChordPro directives.
_START_DIRECTIVES = {
    "start_of_verse": SectionType.VERSE,
    "sov": SectionType.VERSE,
    "start_of_chorus": SectionType.CHORUS,
    "soc": SectionType.CHORUS,
    "start_of_bridge": SectionType.BRIDGE,
    "sob": SectionType.BRIDGE,
}


# ---------------------------------------------------------------------------
# LineType
# ---------------------------------------------------------------------------


class LineType(Enum):
    BLANK = auto()  # empty or whitespace only
    DIRECTIVE = auto()  # {title: ...}, {start_of_chorus}
    SECTION = auto()  # section heading: Verse 1:, Chorus:
    METADATA = auto()  # header field: Title: ..., Notes:
    CONTENT = auto()  # lyrics, with or without inline chords


@dataclass
class Metadata:
    """Song-level fields collected from header lines and directives."""

    title: str | None = None
    artist: str | None = None
    key: str | None = None
    original_key: str | None = None
    capo: int | None = None
    tempo: int | None = None
    notes: str | None = None
    scripture_reference: str | None = None
    book: str | None = None


# ---------------------------------------------------------------------------
# Line classification
# ---------------------------------------------------------------------------


def contains_chords(line: str) -> bool:
    return CHORD_BRACKET_RE.search(line) is not None


def is_section_heading(line: str) -> bool:
    """True for ``Verse 1:``, ``Chorus:``, ``Outro/Tag:`` and the like.

    A line with chord brackets is never a heading.
    """
    return (
        line.endswith(":")
        and not contains_chords(line)
        and SECTION_KEYWORDS_RE.search(line) is not None
    )


def classify_line(line: str) -> LineType:
    """Classify a single line of song text.

    The line is trimmed first.  A line made only of chord brackets, e.g.
    ``[Am][C][G]``, is CONTENT (an instrumental line), not BLANK.
    """
    stripped = line.strip()
    if not stripped:
        return LineType.BLANK
    if DIRECTIVE_RE.match(stripped):
        return LineType.DIRECTIVE
    if contains_chords(stripped):
        return LineType.CONTENT
    if stripped.endswith(":"):
        if SECTION_KEYWORDS_RE.search(stripped):
            return LineType.SECTION
        # "Notes:", "Scripture Reference(s):" with an empty value
        return LineType.METADATA
    if ":" in stripped:
        return LineType.METADATA
    return LineType.CONTENT


def infer_section_type(name: str) -> SectionType:
    """Map free heading text to a :class:`SectionType` by keyword."""
    lower = name.lower()
    if "chorus" in lower:
        return SectionType.CHORUS
    if "bridge" in lower:
        return SectionType.BRIDGE
    if "intro" in lower:
        return SectionType.INTRO
    if "outro" in lower or "tag" in lower:
        return SectionType.OUTRO
    return SectionType.VERSE


def create_section(line: str) -> Section:
    """Build an empty :class:`Section` from a heading line such as ``Bridge 2:``."""
    name = line.strip()
    if name.endswith(":"):
        name = name[:-1].strip()
    return Section(type=infer_section_type(name), name=name)


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def parse_int(value: str) -> int | None:
    """Parse a leading integer, or return ``None`` for non-numeric text."""
    m = _INT_PREFIX_RE.match(value)
    return int(m.group(1)) if m else None


def _strip_key_brackets(value: str) -> str:
    # "[G]" -> "G"
    return re.sub(r"^\[|\]$", "", value)


def parse_header_metadata(line: str, metadata: Metadata) -> None:
    """Apply a ``Key: Value`` header line to *metadata*.

    The key is matched case-insensitively; unknown keys are ignored.
    """
    name, colon, value = line.partition(":")
    if not colon:
        return
    name = name.strip().lower()
    value = value.strip()

    if name == "title":
        metadata.title = value
    elif name == "artist":
        metadata.artist = value
    elif name == "key":
        metadata.key = _strip_key_brackets(value)
    elif name == "original key":
        metadata.original_key = value
    elif name == "capo":
        metadata.capo = parse_int(value)
    elif name == "tempo":
        metadata.tempo = parse_int(value)
    elif name == "notes":
        metadata.notes = value
    elif name == "scripture reference(s)":
        metadata.scripture_reference = value
    elif name == "book":
        metadata.book = value


def parse_directive(line: str, metadata: Metadata) -> Section | None:
    """Apply a ``{name: value}`` directive.

    Metadata directives update *metadata* and return ``None``.  Section
    directives (``{start_of_chorus}``, ``{comment: Intro}``) return a new,
    empty :class:`Section` for the caller to open.
    """
    m = DIRECTIVE_RE.match(line.strip())
    if not m:
        return None
    name, _, value = m.group(1).partition(":")
    name = name.strip().lower()
    value = value.strip()

    if name in ("t", "title"):
        metadata.title = value
    elif name in ("a", "artist"):
        metadata.artist = value
    elif name == "key":
        metadata.key = _strip_key_brackets(value)
    elif name == "capo":
        metadata.capo = parse_int(value)
    elif name == "tempo":
        metadata.tempo = parse_int(value)
    elif name in _START_DIRECTIVES:
        section_type = _START_DIRECTIVES[name]
        return Section(type=section_type, name=value or section_type.value.capitalize())
    elif name in ("c", "comment") and SECTION_KEYWORDS_RE.search(value):
        return create_section(value)
    return None


# ---------------------------------------------------------------------------
# Chord/lyric lines
# ---------------------------------------------------------------------------


def parse_chord_lyric_line(line: str) -> Line:
    """Split a line with inline ``[Chord]`` markers into lyrics and offsets.

    Each chord is recorded at the offset of the lyric character that follows
    it; brackets contribute no characters to the lyrics.

    Example::

        "Hello [G]world [C]today"
        → Line(lyrics="Hello world today",
               chords=[ChordPosition("G", 6), ChordPosition("C", 12)])
    """
    if not contains_chords(line):
        return Line(lyrics=line)

    chords: list[ChordPosition] = []
    lyrics = ""
    for part in _CHORD_SPLIT_RE.split(line):
        if part.startswith("[") and part.endswith("]"):
            chords.append(ChordPosition(chord=part[1:-1], position=len(lyrics)))
        else:
            lyrics += part
    return Line(lyrics=lyrics, chords=chords)


# ---------------------------------------------------------------------------
# Full parser
# ---------------------------------------------------------------------------


def _valid_capo(capo: int | None) -> int:
    if capo is None:
        return 0
    if not 0 <= capo <= MAX_CAPO:
        logger.warning("Ignoring capo %d outside 0-%d", capo, MAX_CAPO)
        return 0
    return capo


def parse_song(source_text: str, song_id: str) -> Song:
    """Parse song text into a :class:`~chordsheet.models.Song`.

    Algorithm
    ---------
    1. Split *source_text* into lines, trim and classify each one.
    2. Header and directive lines update the song metadata wherever they
       appear.
    3. A SECTION line closes the open section and starts a new one.
    4. CONTENT lines are appended to the open section; before the first
       heading they are dropped.
    5. BLANK lines are skipped.

    Missing fields default to "Unknown Title", "Unknown Artist", key "C" and
    capo 0.  Input with no headings produces a Song with no sections.
    """
    metadata = Metadata()
    sections: list[Section] = []
    current: Section | None = None

    for raw in source_text.splitlines():
        line = raw.strip()
        lt = classify_line(line)

        if lt == LineType.BLANK:
            continue

        if lt == LineType.DIRECTIVE:
            opened = parse_directive(line, metadata)
            if opened is not None:
                if current is not None:
                    sections.append(current)
                current = opened
            continue

        if lt == LineType.SECTION:
            if current is not None:
                sections.append(current)
            current = create_section(line)
            continue

        if lt == LineType.METADATA:
            parse_header_metadata(line, metadata)
            continue

        # LineType.CONTENT
        if current is not None:
            current.lines.append(parse_chord_lyric_line(line))

    if current is not None:
        sections.append(current)

    song = Song(
        id=song_id,
        title=metadata.title or DEFAULT_TITLE,
        artist=metadata.artist or DEFAULT_ARTIST,
        original_key=metadata.original_key or metadata.key or DEFAULT_KEY,
        capo_position=_valid_capo(metadata.capo),
        tempo=metadata.tempo,
        sections=sections,
        notes=metadata.notes or None,
        scripture_reference=metadata.scripture_reference or None,
        book=metadata.book or None,
    )
    logger.debug(
        "Parsed song %r: %d sections, %d lines",
        song_id,
        len(sections),
        sum(len(s.lines) for s in sections),
    )
    return song
