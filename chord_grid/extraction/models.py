"""Data models for the beat-synchronized chord extraction pipeline.

This module defines the records that flow through the pipeline: timed
chord events and beat grids from the analysis service, time signatures,
the quantized measures built from them, and the sections, songs and
display grids they are assembled into.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

# Slot placeholders
EMPTY_SLOT = ""
SAME_CHORD = "-"
NO_CHORD = "%"
PLACEHOLDERS: frozenset[str] = frozenset({EMPTY_SLOT, SAME_CHORD, NO_CHORD})

MIN_NUMERATOR = 1
MAX_NUMERATOR = 16
VALID_DENOMINATORS: frozenset[int] = frozenset({1, 2, 4, 8, 16, 32})

_TIME_SIGNATURE_RE = re.compile(r"^\s*(\d+)\s*(?:/\s*(\d+)\s*)?$")


@dataclass(frozen=True)
class ChordEvent:
    """A chord with timing information, as returned by the service.

    Parameters
    ----------
    chord : str
        Service chord label (e.g., "C#:min7"), or "N" for no chord.
    start : float
        Start time in seconds.
    end : float
        End time in seconds.
    """

    chord: str
    start: float
    end: float

    @property
    def is_no_chord(self) -> bool:
        """Whether this event marks a stretch without a chord."""
        return self.chord == "N"

    @property
    def duration(self) -> float:
        """Get the event duration in seconds."""
        return self.end - self.start


@dataclass(frozen=True)
class BeatSet:
    """Beat tracking result for one audio file.

    Parameters
    ----------
    beats : tuple[float, ...]
        All beat positions in seconds, sorted ascending.
    downbeats : tuple[float, ...]
        Measure start positions in seconds, sorted ascending.
    bpm : float
        Detected tempo in beats per minute.
    declared_time_signature : str | int | list | None
        Time signature as reported by the service, unvalidated.
    """

    beats: tuple[float, ...]
    downbeats: tuple[float, ...]
    bpm: float
    declared_time_signature: Any = None


@dataclass(frozen=True)
class TimeSignature:
    """A musical meter.

    Parameters
    ----------
    numerator : int
        Beats per measure, 1 to 16. Also the number of chord slots per
        measure (6/8 has six slots).
    denominator : int
        Beat unit, one of 1, 2, 4, 8, 16, 32.

    Raises
    ------
    ValueError
        If either value is out of range.

    Examples
    --------
    >>> str(TimeSignature(6, 8))
    '6/8'
    >>> TimeSignature.parse("3/4").beats_per_measure
    3
    """

    numerator: int = 4
    denominator: int = 4

    def __post_init__(self) -> None:
        if isinstance(self.numerator, bool) or not MIN_NUMERATOR <= self.numerator <= MAX_NUMERATOR:
            msg = f"Invalid time signature numerator: {self.numerator}"
            raise ValueError(msg)
        if self.denominator not in VALID_DENOMINATORS:
            msg = f"Invalid time signature denominator: {self.denominator}"
            raise ValueError(msg)

    @property
    def beats_per_measure(self) -> int:
        """Number of chord slots in a measure of this meter."""
        return self.numerator

    @classmethod
    def parse(cls, value: Any) -> TimeSignature:
        """Parse a time signature from the formats the service emits.

        Parameters
        ----------
        value : Any
            ``"N/D"``, ``"N"`` (denominator 4), ``[N, D]``/``(N, D)`` or a
            bare int (denominator 4).

        Returns
        -------
        TimeSignature
            The validated time signature.

        Raises
        ------
        ValueError
            If the value has an unknown format or is out of range.
        """
        if isinstance(value, TimeSignature):
            return value
        if isinstance(value, bool):
            msg = f"Unsupported time signature value: {value!r}"
            raise ValueError(msg)
        if isinstance(value, int):
            return cls(value, 4)
        if isinstance(value, (list, tuple)) and len(value) >= 2:
            numerator, denominator = value[0], value[1]
            if not all(isinstance(v, int) and not isinstance(v, bool) for v in (numerator, denominator)):
                msg = f"Unsupported time signature value: {value!r}"
                raise ValueError(msg)
            return cls(numerator, denominator)
        if isinstance(value, str):
            match = _TIME_SIGNATURE_RE.match(value)
            if match:
                denominator = int(match.group(2)) if match.group(2) else 4
                return cls(int(match.group(1)), denominator)
        msg = f"Unsupported time signature value: {value!r}"
        raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"


@dataclass(frozen=True)
class Measure:
    """One measure of a chord chart, quantized to beat slots.

    Parameters
    ----------
    order : int
        Zero-based position of the measure in its section.
    time_signature : TimeSignature
        Meter of the measure.
    beat_chords : tuple[str, ...]
        One entry per beat: a display chord, ``"-"`` (same as previous
        beat) or ``"%"`` (no chord).

    Raises
    ------
    ValueError
        If the slot count does not match the time signature or the order
        is negative.
    """

    order: int
    time_signature: TimeSignature
    beat_chords: tuple[str, ...]

    def __post_init__(self) -> None:
        if self.order < 0:
            msg = f"Measure order must be >= 0, got {self.order}"
            raise ValueError(msg)
        if len(self.beat_chords) != self.time_signature.beats_per_measure:
            msg = (
                f"Measure {self.order} has {len(self.beat_chords)} beat slots, "
                f"expected {self.time_signature.beats_per_measure} for {self.time_signature}"
            )
            raise ValueError(msg)

    @property
    def chords(self) -> tuple[str, ...]:
        """The literal chord symbols of the measure, placeholders removed."""
        return tuple(c for c in self.beat_chords if c not in PLACEHOLDERS)

    @property
    def is_empty(self) -> bool:
        """Whether the measure holds no chord at all."""
        return not self.chords

    @property
    def display_text(self) -> str:
        """Space-separated slot values, e.g. ``"C - G -"``."""
        return " ".join(self.beat_chords)


@dataclass(frozen=True)
class SectionMeta:
    """Labeling for an assembled section.

    Parameters
    ----------
    section_type : str
        Section kind (e.g., "VERSE", "CHORUS").
    label : str
        Short label shown in the chart (e.g., "A").
    order : int
        Position of the section in its song.
    name : str | None
        Optional free-form name.
    """

    section_type: str = "VERSE"
    label: str = "A"
    order: int = 0
    name: str | None = None


@dataclass(frozen=True)
class Section:
    """An ordered run of measures with a label."""

    section_type: str
    label: str
    order: int
    measures: tuple[Measure, ...]
    name: str | None = None


@dataclass(frozen=True)
class Song:
    """A chord chart produced from one audio analysis.

    Parameters
    ----------
    title : str
        Song title, inferred from the audio file name.
    artist : str
        Artist name; the pipeline does not know it.
    key : str
        Detected key (e.g., "C", "F#m").
    time_signature : TimeSignature
        Inferred meter.
    tempo : int
        Tempo rounded to whole BPM.
    sections : tuple[Section, ...]
        Song sections in order.
    """

    title: str
    key: str
    time_signature: TimeSignature
    tempo: int
    sections: tuple[Section, ...] = ()
    artist: str = "Unknown"

    @property
    def measures(self) -> tuple[Measure, ...]:
        """All measures of all sections, in order."""
        return tuple(m for section in self.sections for m in section.measures)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view for storage and serialization layers."""
        return {
            "title": self.title,
            "artist": self.artist,
            "key": self.key,
            "time_signature": str(self.time_signature),
            "tempo": self.tempo,
            "sections": [
                {
                    "section_type": section.section_type,
                    "label": section.label,
                    "order": section.order,
                    "name": section.name,
                    "measures": [
                        {
                            "order": measure.order,
                            "time_signature": str(measure.time_signature),
                            "beat_chords": list(measure.beat_chords),
                        }
                        for measure in section.measures
                    ],
                }
                for section in self.sections
            ],
        }


@dataclass(frozen=True)
class GridCell:
    """One beat slot of a display grid.

    Parameters
    ----------
    chord : str
        Slot value as stored in the measure.
    measure_index : int
        Index of the measure in the flat measure list.
    beat_index : int
        Index of the beat inside its measure.
    is_downbeat : bool
        True for the first beat of a measure.
    is_empty : bool
        True when no chord sounds in the slot (``""`` or ``"%"``).
    """

    chord: str
    measure_index: int
    beat_index: int
    is_downbeat: bool
    is_empty: bool


@dataclass(frozen=True)
class ChordGrid:
    """A row-major display grid with a fixed number of measures per row.

    Parameters
    ----------
    rows : tuple[tuple[GridCell, ...], ...]
        Cells of each row, measure by measure, beat by beat.
    measures_per_row : int
        Number of measures laid out on a full row.
    """

    rows: tuple[tuple[GridCell, ...], ...]
    measures_per_row: int

    @property
    def cells(self) -> tuple[GridCell, ...]:
        """All cells in reading order."""
        return tuple(cell for row in self.rows for cell in row)

    def pages(self, rows_per_page: int) -> list[tuple[tuple[GridCell, ...], ...]]:
        """Split the rows into pages of ``rows_per_page`` rows.

        Raises
        ------
        ValueError
            If ``rows_per_page`` is not positive.
        """
        if rows_per_page < 1:
            msg = f"rows_per_page must be >= 1, got {rows_per_page}"
            raise ValueError(msg)
        return [self.rows[i : i + rows_per_page] for i in range(0, len(self.rows), rows_per_page)]
