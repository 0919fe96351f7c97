import pytest

from chordsheet.chordpro import ChordProFormatter
from chordsheet.exceptions import UnsupportedFormatError
from chordsheet.formatters import file_extension, format_names, get_formatter
from chordsheet.models import ChordPosition, Line, Section, SectionType, Song
from chordsheet.parser import parse_song


def _song(**kwargs) -> Song:
    defaults = dict(id="dark-star", title="Dark Star", artist="Grateful Dead", original_key="A")
    defaults.update(kwargs)
    return Song(**defaults)


def _render(song: Song) -> str:
    return ChordProFormatter().render(song)


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


def test_title_artist_and_key_in_output():
    out = _render(_song())
    assert "{title: Dark Star}" in out
    assert "{artist: Grateful Dead}" in out
    assert "{key: A}" in out


def test_optional_metadata_omitted_when_unset():
    out = _render(_song())
    assert "{capo:" not in out
    assert "{tempo:" not in out


def test_capo_and_tempo_emitted():
    out = _render(_song(capo_position=2, tempo=110))
    assert "{capo: 2}" in out
    assert "{tempo: 110}" in out


# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


def test_verse_section_directives():
    song = _song(sections=[
        Section(SectionType.VERSE, "Verse 1", [Line("some lyrics", [ChordPosition("D", 0)])])
    ])
    out = _render(song)
    assert "{start_of_verse: Verse 1}" in out
    assert "{end_of_verse}" in out
    assert "[D]some lyrics" in out


def test_chorus_section_directives():
    song = _song(sections=[Section(SectionType.CHORUS, "Chorus", [Line("chorus line")])])
    out = _render(song)
    assert "{start_of_chorus: Chorus}" in out
    assert "{end_of_chorus}" in out


def test_bridge_without_name_uses_kind():
    song = _song(sections=[Section(SectionType.BRIDGE, None, [Line("bridge")])])
    assert "{start_of_bridge: Bridge}" in _render(song)


def test_intro_rendered_as_comment():
    song = _song(sections=[Section(SectionType.INTRO, "Intro", [Line("  ", [ChordPosition("D", 0)])])])
    out = _render(song)
    assert "{comment: Intro}" in out
    assert "{start_of_intro}" not in out


def test_outro_name_without_keyword_gets_prefix():
    song = _song(sections=[Section(SectionType.OUTRO, "Coda", [Line("end")])])
    assert "{comment: Outro Coda}" in _render(song)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def test_blank_line_between_sections():
    song = _song(sections=[
        Section(SectionType.VERSE, "Verse 1", [Line("line one")]),
        Section(SectionType.CHORUS, "Chorus", [Line("line two")]),
    ])
    assert "{end_of_verse}\n\n{start_of_chorus: Chorus}" in _render(song)


def test_output_ends_with_newline():
    assert _render(_song()).endswith("\n")


def test_export_parses_back():
    text = (
        "Title: Dark Star\nArtist: Grateful Dead\nKey: A\nCapo: 2\n\n"
        "Intro:\n[A] [G]\n\nVerse 1:\n[A]Dark star [G]crashes\n\n"
        "Chorus:\npouring its [D]light\n\nOutro/Tag:\n[A]\n"
    )
    song = parse_song(text, "dark-star")
    assert parse_song(_render(song), "dark-star") == song


# ---------------------------------------------------------------------------
# Formatter registry
# ---------------------------------------------------------------------------


def test_format_names():
    assert set(format_names()) == {"sheet", "text", "chordpro"}


def test_get_formatter_chordpro():
    assert get_formatter("chordpro")(_song()).startswith("{title: Dark Star}")


def test_get_formatter_text():
    assert get_formatter("text")(_song()).startswith("Title: Dark Star\n")


def test_file_extensions():
    assert file_extension("chordpro") == "cho"
    assert file_extension("text") == "txt"


def test_unknown_format_raises():
    with pytest.raises(UnsupportedFormatError) as exc_info:
        get_formatter("pdf")
    assert exc_info.value.name == "pdf"
    with pytest.raises(UnsupportedFormatError):
        file_extension("pdf")
