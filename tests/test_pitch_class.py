import pytest

from chord_grid.pitch_class import note_to_pc, pc_to_note, transpose_note


class TestNoteToPc:
    @pytest.mark.parametrize(
        ("note", "expected"),
        [("C", 0), ("C#", 1), ("Db", 1), ("E", 4), ("F#", 6), ("Bb", 10), ("B", 11), ("Cb", 11), ("B#", 0)],
    )
    def test_ascii_spellings(self, note, expected):
        assert note_to_pc(note) == expected

    def test_unicode_accidentals(self):
        assert note_to_pc("B♭") == 10
        assert note_to_pc("F♯") == 6

    def test_unknown_note(self):
        with pytest.raises(ValueError, match="Unknown note"):
            note_to_pc("H")


class TestPcToNote:
    def test_sharps_by_default(self):
        assert pc_to_note(1) == "C#"

    def test_flats(self):
        assert pc_to_note(1, use_flats=True) == "Db"

    def test_wraps(self):
        assert pc_to_note(13) == "C#"
        assert pc_to_note(-1) == "B"


class TestTransposeNote:
    def test_up(self):
        assert transpose_note("C", 7) == "G"

    def test_down_wraps(self):
        assert transpose_note("C", -1) == "B"

    def test_flats(self):
        assert transpose_note("A", 1, use_flats=True) == "Bb"
