from chordsheet.models import ChordPosition, Line, Section, SectionType, Song


def test_line_defaults():
    line = Line(lyrics="Amazing grace")
    assert line.chords == []
    assert not line.is_instrumental


def test_line_instrumental():
    assert Line("", [ChordPosition("G", 0)]).is_instrumental
    assert Line("   ", [ChordPosition("G", 0)]).is_instrumental
    assert not Line("", []).is_instrumental


def test_sorted_chords_stable():
    line = Line("abc", [ChordPosition("C", 2), ChordPosition("A", 0), ChordPosition("B", 0)])
    assert [c.chord for c in line.sorted_chords()] == ["A", "B", "C"]
    assert line.chords[0].chord == "C"  # stored order untouched


def test_section_defaults():
    section = Section(type=SectionType.VERSE)
    assert section.name is None
    assert section.lines == []


def test_section_type_values():
    assert SectionType("chorus") is SectionType.CHORUS
    assert SectionType.OUTRO == "outro"


def test_song_defaults():
    song = Song(id="s", title="The Weight", artist="The Band", original_key="A")
    assert song.capo_position == 0
    assert song.tempo is None
    assert song.sections == []
    assert song.notes is None
    assert song.scripture_reference is None
    assert song.book is None


def test_effective_key():
    song = Song(id="s", title="t", artist="a", original_key="D", capo_position=2)
    assert song.effective_key == "E"


def _song() -> Song:
    return Song(
        id="s",
        title="t",
        artist="a",
        original_key="G",
        capo_position=1,
        sections=[
            Section(
                SectionType.VERSE,
                "Verse 1",
                [Line("Hello world", [ChordPosition("G", 0), ChordPosition("D/F#", 6)])],
            )
        ],
    )


def test_transposed_moves_chords_and_key():
    moved = _song().transposed("A")
    assert moved.original_key == "A"
    assert moved.capo_position == 1
    assert [c.chord for c in moved.sections[0].lines[0].chords] == ["A", "E/G#"]
    assert [c.position for c in moved.sections[0].lines[0].chords] == [0, 6]


def test_transposed_overrides_capo_only():
    moved = _song().transposed(capo=4)
    assert moved.original_key == "G"
    assert moved.capo_position == 4
    assert moved.sections == _song().sections


def test_transposed_leaves_original_untouched():
    song = _song()
    song.transposed("C")
    assert song.original_key == "G"
    assert song.sections[0].lines[0].chords[0].chord == "G"
