import pytest

from chord_grid import ChordEvent, Measure, Section, Song, TimeSignature


class TestTimeSignature:
    def test_default_is_four_four(self):
        assert TimeSignature() == TimeSignature(4, 4)

    def test_str(self):
        assert str(TimeSignature(6, 8)) == "6/8"

    def test_beats_per_measure_is_numerator(self):
        assert TimeSignature(6, 8).beats_per_measure == 6

    @pytest.mark.parametrize(("numerator", "denominator"), [(0, 4), (17, 4), (4, 3), (4, 64), (True, 4)])
    def test_out_of_range(self, numerator, denominator):
        with pytest.raises(ValueError, match="Invalid time signature"):
            TimeSignature(numerator, denominator)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("3/4", TimeSignature(3, 4)),
            ("7", TimeSignature(7, 4)),
            (5, TimeSignature(5, 4)),
            ([6, 8], TimeSignature(6, 8)),
            ((12, 8), TimeSignature(12, 8)),
            (TimeSignature(2, 2), TimeSignature(2, 2)),
        ],
    )
    def test_parse(self, value, expected):
        assert TimeSignature.parse(value) == expected

    @pytest.mark.parametrize("value", ["three/four", "3/", None, 4.0, False, ["3", "4"]])
    def test_parse_rejects(self, value):
        with pytest.raises(ValueError):
            TimeSignature.parse(value)


class TestChordEvent:
    def test_no_chord(self):
        assert ChordEvent("N", 0, 1).is_no_chord
        assert not ChordEvent("C:maj", 0, 1).is_no_chord

    def test_duration(self):
        assert ChordEvent("C:maj", 1.5, 4.0).duration == pytest.approx(2.5)


class TestMeasure:
    def test_slot_count_must_match_numerator(self):
        with pytest.raises(ValueError, match="expected 3"):
            Measure(0, TimeSignature(3, 4), ("C", "-", "-", "-"))

    def test_negative_order(self):
        with pytest.raises(ValueError, match="order"):
            Measure(-1, TimeSignature(2, 4), ("C", "-"))

    def test_chords_skip_placeholders(self):
        measure = Measure(0, TimeSignature(4, 4), ("C", "-", "%", "G"))
        assert measure.chords == ("C", "G")
        assert not measure.is_empty

    def test_empty(self):
        assert Measure(0, TimeSignature(2, 4), ("%", "%")).is_empty

    def test_display_text(self):
        assert Measure(0, TimeSignature(4, 4), ("C", "-", "G", "-")).display_text == "C - G -"


class TestSong:
    def test_to_dict(self):
        measure = Measure(0, TimeSignature(3, 4), ("Am", "-", "-"))
        section = Section("VERSE", "A", 0, (measure,))
        song = Song(title="demo", key="Am", time_signature=TimeSignature(3, 4), tempo=90, sections=(section,))

        assert song.to_dict() == {
            "title": "demo",
            "artist": "Unknown",
            "key": "Am",
            "time_signature": "3/4",
            "tempo": 90,
            "sections": [
                {
                    "section_type": "VERSE",
                    "label": "A",
                    "order": 0,
                    "name": None,
                    "measures": [{"order": 0, "time_signature": "3/4", "beat_chords": ["Am", "-", "-"]}],
                }
            ],
        }

    def test_measures_flatten_sections(self):
        ts = TimeSignature(2, 4)
        first = Section("VERSE", "A", 0, (Measure(0, ts, ("C", "-")),))
        second = Section("CHORUS", "B", 1, (Measure(0, ts, ("G", "-")), Measure(1, ts, ("F", "-"))))
        song = Song(title="t", key="C", time_signature=ts, tempo=100, sections=(first, second))
        assert [m.beat_chords[0] for m in song.measures] == ["C", "G", "F"]
