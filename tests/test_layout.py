from chordsheet.layout import layout_line, render_section, render_song
from chordsheet.models import ChordPosition, Line, Section, SectionType, Song
from chordsheet.parser import parse_chord_lyric_line


def _song(**kwargs) -> Song:
    defaults = dict(
        id="s",
        title="Amazing Grace",
        artist="John Newton",
        original_key="G",
        sections=[
            Section(SectionType.VERSE, "Verse 1", [parse_chord_lyric_line("Hello [G]world [C]today")]),
        ],
    )
    defaults.update(kwargs)
    return Song(**defaults)


# ---------------------------------------------------------------------------
# layout_line
# ---------------------------------------------------------------------------


def test_chords_above_syllables():
    chord_row, lyric_row = layout_line(parse_chord_lyric_line("Hello [G]world [C]today"))
    assert chord_row == "      G     C"
    assert lyric_row == "Hello world today"


def test_plain_lyric_has_empty_chord_row():
    assert layout_line(Line("just words")) == ("", "just words")


def test_long_chord_pads_lyrics():
    chord_row, lyric_row = layout_line(parse_chord_lyric_line("[Cmaj7]a[G]b"))
    assert chord_row == "Cmaj7 G"
    assert lyric_row == "a     b"


def test_adjacent_chords_never_touch():
    chord_row, _ = layout_line(parse_chord_lyric_line("[Am7][D]sing"))
    assert chord_row == "Am7 D"


def test_instrumental_line():
    line = Line("", [ChordPosition("Am", 0), ChordPosition("C", 0), ChordPosition("G", 0)])
    assert layout_line(line) == ("Am C G", "(instrumental)")


def test_layout_transposes():
    chord_row, lyric_row = layout_line(parse_chord_lyric_line("Hello [G]world [C]today"), "G", "A")
    assert chord_row == "      A     D"
    assert lyric_row == "Hello world today"


def test_layout_without_target_key_keeps_chords():
    chord_row, _ = layout_line(parse_chord_lyric_line("[Fb]x"), "C", None)
    assert chord_row == "Fb"


# ---------------------------------------------------------------------------
# render_section / render_song
# ---------------------------------------------------------------------------


def test_render_section_heading_and_rows():
    section = Section(SectionType.CHORUS, None, [Line("no chords here")])
    assert render_section(section) == "CHORUS\nno chords here"


def test_render_song_header():
    out = render_song(_song(tempo=80))
    assert out.startswith("Amazing Grace\nJohn Newton\nKey: G\nTempo: 80\n\nVERSE 1\n")


def test_render_song_capo_reports_effective_key():
    out = render_song(_song(capo_position=2))
    assert "Key: G  Capo: 2  (sounds in A)" in out


def test_render_song_to_key():
    out = render_song(_song(), to_key="D")
    assert "Key: D" in out
    assert "      D     G" in out


def test_render_song_capo_override_does_not_move_chords():
    out = render_song(_song(capo_position=2), capo=0)
    assert "Capo" not in out
    assert "      G     C" in out
