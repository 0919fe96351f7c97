"""Chord transposition engine.

Moves chord symbols between keys and capo positions:

  1. parse_chord()             : split "C#m7/G#" into root / quality / bass
  2. transpose_note()          : shift one pitch token, keeping its sharp/flat spelling
  3. transpose_by_semitones()  : shift a whole chord symbol
  4. transpose_chord()         : shift from one key to another (plus capo)
  5. get_effective_key()       : the key a capo'd song actually sounds in

The quality suffix ("m7", "sus4", "add9", ...) is opaque: it describes
intervals relative to the root, so it is carried through untouched.

Nothing here raises on bad input.  Hand-typed chord sheets are full of
typos, so anything that doesn't look like a chord comes back unchanged.
"""

import logging
import re
from typing import NamedTuple

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Pitch tables
# ---------------------------------------------------------------------------

SHARP_SCALE = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Enharmonic aliases share an index.
NOTE_INDEX = {
    "C": 0, "B#": 0,
    "C#": 1, "Db": 1,
    "D": 2,
    "D#": 3, "Eb": 3,
    "E": 4, "Fb": 4,
    "F": 5, "E#": 5,
    "F#": 6, "Gb": 6,
    "G": 7,
    "G#": 8, "Ab": 8,
    "A": 9,
    "A#": 10, "Bb": 10,
    "B": 11, "Cb": 11,
}

_FLAT_SPELLINGS = {"C#": "Db", "D#": "Eb", "F#": "Gb", "G#": "Ab", "A#": "Bb"}

# Keys offered by pickers, majors then minors.
ALL_KEYS = (
    "C", "C#", "Db", "D", "D#", "Eb", "E", "F",
    "F#", "Gb", "G", "G#", "Ab", "A", "A#", "Bb", "B",
    "Cm", "C#m", "Dm", "D#m", "Ebm", "Em", "Fm",
    "F#m", "Gm", "G#m", "Am", "A#m", "Bbm", "Bm",
)

# Open-chord shapes that are comfortable without barring.
EASY_SHAPES = frozenset({"C", "G", "D", "A", "E", "Am", "Em", "Bm", "F#m", "C#m"})

MAX_CAPO = 12
PRACTICAL_CAPO = 7

# ---------------------------------------------------------------------------
# Regexes
# ---------------------------------------------------------------------------

ROOT_RE = re.compile(r"^([A-G][#b]?)")
NOTE_RE = re.compile(r"^[A-G][#b]?$")


# ---------------------------------------------------------------------------
# Chord decomposition
# ---------------------------------------------------------------------------


class ChordSymbol(NamedTuple):
    root: str
    quality: str
    bass: str | None = None

    def __str__(self) -> str:
        if self.bass:
            return f"{self.root}{self.quality}/{self.bass}"
        return f"{self.root}{self.quality}"


def parse_chord(chord: str) -> ChordSymbol | None:
    """Split a chord symbol into root, quality and optional slash bass.

    Returns ``None`` when the root is not ``A`` to ``G`` (optionally ``#``/``b``)
    or when a slash is present but the bass is not a pitch token.

    >>> parse_chord("C#m7/G#")
    ChordSymbol(root='C#', quality='m7', bass='G#')
    """
    main, slash, bass = chord.partition("/")
    if slash and not NOTE_RE.match(bass):
        return None
    m = ROOT_RE.match(main)
    if not m:
        return None
    root = m.group(1)
    return ChordSymbol(root=root, quality=main[len(root):], bass=bass or None)


def note_index(note: str) -> int | None:
    """Chromatic index (C=0 … B=11) of a pitch token, or ``None``."""
    return NOTE_INDEX.get(note)


def pitch_class_of(key: str) -> int:
    """Index of the root of a key name such as ``"Am"`` or ``"F#"``.

    Unparseable keys count as C.
    """
    m = ROOT_RE.match(key or "")
    index = note_index(m.group(1)) if m else None
    if index is None:
        logger.debug("Unrecognised key %r, treating as C", key)
        return 0
    return index


# ---------------------------------------------------------------------------
# Transposition
# ---------------------------------------------------------------------------


def transpose_note(note: str, semitones: int) -> str:
    """Shift a single pitch token by *semitones*.

    The result is spelled with sharps unless *note* itself was written with
    a flat, in which case the flat spelling is used.
    """
    index = note_index(note)
    if index is None:
        return note
    new_note = SHARP_SCALE[(index + semitones) % 12]
    if "b" in note:
        return _FLAT_SPELLINGS.get(new_note, new_note)
    return new_note


def transpose_by_semitones(chord: str, semitones: int) -> str:
    """Transpose *chord* up (positive) or down (negative) by *semitones*.

    Root and bass keep their own sharp/flat preference; the quality suffix is
    never changed.  Blank or unparseable input is returned verbatim.

    >>> transpose_by_semitones("C/E", 2)
    'D/F#'
    >>> transpose_by_semitones("Db", 2)
    'Eb'
    """
    if not chord or not chord.strip():
        return chord
    parts = parse_chord(chord)
    if parts is None:
        return chord
    root = transpose_note(parts.root, semitones)
    bass = transpose_note(parts.bass, semitones) if parts.bass else None
    return str(ChordSymbol(root, parts.quality, bass))


def key_delta(from_key: str, to_key: str) -> int:
    """Semitones from *from_key* up to *to_key*, always in ``[0, 11]``."""
    return (pitch_class_of(to_key) - pitch_class_of(from_key)) % 12


def transpose_chord(chord: str, from_key: str, to_key: str, capo_position: int = 0) -> str:
    """Transpose *chord* from *from_key* to *to_key*, plus *capo_position*.

    The capo term is added on top of the normalised key delta.  Renderers that
    show chords for a key change pass ``capo_position=0`` and report the capo
    separately via :func:`get_effective_key`; passing both would apply the
    capo twice.
    """
    if not chord or not chord.strip():
        return chord
    return transpose_by_semitones(chord, key_delta(from_key, to_key) + capo_position)


def get_effective_key(original_key: str, capo_position: int) -> str:
    """The key that open-chord shapes sound in with a capo at *capo_position*.

    >>> get_effective_key("D", 2)
    'E'
    """
    return transpose_by_semitones(original_key, capo_position)


def get_all_keys() -> list[str]:
    """Keys offered by transpose pickers: major spellings, then minors."""
    return list(ALL_KEYS)


def get_suggested_capo_positions(from_key: str, to_key: str) -> list[int]:
    """Capo positions that let *to_key* be played with easy open shapes.

    For each fret 0 to 12, the shape fretted under the capo is *from_key* moved
    down by that many semitones.  When that shape is in :data:`EASY_SHAPES`,
    the position ``(delta + capo) % 12`` is kept if it is at most
    :data:`PRACTICAL_CAPO`.
    """
    delta = key_delta(from_key, to_key)
    suggestions = set()
    for capo in range(MAX_CAPO + 1):
        shape = transpose_by_semitones(from_key, -capo)
        if shape in EASY_SHAPES:
            target = (delta + capo) % 12
            if 0 <= target <= PRACTICAL_CAPO:
                suggestions.add(target)
    return sorted(suggestions)
