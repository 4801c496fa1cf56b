import pytest

from chord_grid import Measure, Section, Song, TimeSignature
from chord_grid.transpose import (
    describe_interval,
    transpose_chord,
    transpose_key,
    transpose_measure,
    transpose_section,
    transpose_song,
)

FOUR_FOUR = TimeSignature(4, 4)


class TestTransposeChord:
    @pytest.mark.parametrize(
        ("symbol", "semitones", "expected"),
        [
            ("C", 2, "D"),
            ("Am", 3, "Cm"),
            ("C#m7", 2, "D#m7"),
            ("B°", 1, "C°"),
            ("E+", -1, "D#+"),
            ("G7", 5, "C7"),
            ("Bb", 2, "C"),
            ("F#m", -6, "Cm"),
            ("C/E", 2, "D/F#"),
            ("Dsus4", 12, "Dsus4"),
        ],
    )
    def test_transpose(self, symbol, semitones, expected):
        assert transpose_chord(symbol, semitones) == expected

    def test_flats(self):
        assert transpose_chord("A/C#", 1, use_flats=True) == "Bb/D"

    @pytest.mark.parametrize("symbol", ["-", "%", ""])
    def test_placeholders_unchanged(self, symbol):
        assert transpose_chord(symbol, 3) == symbol

    def test_unparseable_unchanged(self):
        assert transpose_chord("N.C.", 3) == "N.C."


class TestTransposeKey:
    @pytest.mark.parametrize(
        ("key", "semitones", "expected"),
        [
            ("C", 1, "Db"),
            ("C", 6, "F#"),
            ("G", -2, "F"),
            ("Bb", 2, "C"),
            ("Am", 3, "Cm"),
            ("Am", 4, "C#m"),
            ("Em", -1, "D#m"),
            ("Dm", -4, "Bbm"),
            ("F#m", 12, "F#m"),
        ],
    )
    def test_transpose(self, key, semitones, expected):
        assert transpose_key(key, semitones) == expected

    def test_empty(self):
        assert transpose_key("", 3) == ""

    def test_unknown(self):
        with pytest.raises(ValueError):
            transpose_key("H", 1)


class TestTransposeSong:
    def test_measure(self):
        measure = Measure(2, FOUR_FOUR, ("C", "-", "G/B", "%"))
        transposed = transpose_measure(measure, 2)
        assert transposed.beat_chords == ("D", "-", "A/C#", "%")
        assert transposed.order == 2

    def test_enharmonic_repeat_recompacted(self):
        measure = Measure(0, FOUR_FOUR, ("C#", "-", "Db", "-"))
        assert transpose_measure(measure, 1).beat_chords == ("D", "-", "-", "-")

    def test_rest_still_resets_after_transposition(self):
        measure = Measure(0, FOUR_FOUR, ("C#", "%", "Db", "-"))
        assert transpose_measure(measure, 1).beat_chords == ("D", "%", "D", "-")

    def test_section(self):
        section = Section("VERSE", "A", 0, (Measure(0, FOUR_FOUR, ("Am", "-", "F", "-")),), name="Intro")
        transposed = transpose_section(section, -2)
        assert transposed.measures[0].beat_chords == ("Gm", "-", "D#", "-")
        assert transposed.name == "Intro"

    def test_song(self):
        section = Section("VERSE", "A", 0, (Measure(0, FOUR_FOUR, ("C", "-", "G", "-")),))
        song = Song(title="t", key="C", time_signature=FOUR_FOUR, tempo=100, sections=(section,))

        transposed = transpose_song(song, 3, use_flats=True)

        assert transposed.key == "Eb"
        assert transposed.measures[0].beat_chords == ("Eb", "-", "Bb", "-")
        assert transposed.title == "t"
        assert song.key == "C"


class TestDescribeInterval:
    @pytest.mark.parametrize(
        ("semitones", "expected"),
        [
            (0, "Original Key"),
            (1, "Up 1 Semitone"),
            (-2, "Down 1 Whole Step"),
            (5, "Up Perfect 4th"),
            (-5, "Down Perfect 4th"),
            (6, "Up Tritone"),
            (12, "Up Octave"),
            (-13, "Down 13 Semitones"),
        ],
    )
    def test_descriptions(self, semitones, expected):
        assert describe_interval(semitones) == expected
