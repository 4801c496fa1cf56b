"""Transpose chord charts by a number of semitones."""

from __future__ import annotations

import re
from dataclasses import replace

from chord_grid.extraction.key import MAJOR_KEYS, MINOR_KEYS
from chord_grid.extraction.measures import compact
from chord_grid.extraction.models import PLACEHOLDERS, Measure, Section, Song
from chord_grid.pitch_class import note_to_pc, transpose_note

_NOTE = r"[A-G](?:#|b|♯|♭)?"
_CHORD_RE = re.compile(rf"^(?P<root>{_NOTE})(?P<suffix>.*?)(?:/(?P<bass>{_NOTE}))?$")

# Key names by tonic pitch class, spelled as the key detector spells them
_MAJOR_BY_PC: dict[int, str] = {note_to_pc(k): k for k in MAJOR_KEYS}
_MINOR_BY_PC: dict[int, str] = {note_to_pc(k[:-1]): k for k in MINOR_KEYS}

_INTERVAL_NAMES: dict[int, str] = {
    1: "1 Semitone",
    2: "1 Whole Step",
    3: "Minor 3rd",
    4: "Major 3rd",
    5: "Perfect 4th",
    6: "Tritone",
    7: "Perfect 5th",
    8: "Minor 6th",
    9: "Major 6th",
    10: "Minor 7th",
    11: "Major 7th",
    12: "Octave",
}


def transpose_chord(symbol: str, semitones: int, use_flats: bool = False) -> str:
    """Transpose a display chord symbol.

    The root and an optional slash bass are shifted; the quality suffix is
    kept as is. Placeholders and symbols that do not start with a note
    name are returned unchanged.

    Examples
    --------
    >>> transpose_chord("C#m7", 2)
    'D#m7'
    >>> transpose_chord("G/B", -2, use_flats=True)
    'F/A'
    >>> transpose_chord("-", 3)
    '-'
    """
    if symbol in PLACEHOLDERS:
        return symbol
    match = _CHORD_RE.match(symbol)
    if not match:
        return symbol

    root = transpose_note(match["root"], semitones, use_flats=use_flats)
    result = f"{root}{match['suffix']}"
    if match["bass"]:
        result += "/" + transpose_note(match["bass"], semitones, use_flats=use_flats)
    return result


def transpose_measure(measure: Measure, semitones: int, use_flats: bool = False) -> Measure:
    # Enharmonic spellings can merge after transposition
    return replace(
        measure,
        beat_chords=tuple(compact([transpose_chord(c, semitones, use_flats=use_flats) for c in measure.beat_chords])),
    )


def transpose_section(section: Section, semitones: int, use_flats: bool = False) -> Section:
    return replace(
        section,
        measures=tuple(transpose_measure(m, semitones, use_flats=use_flats) for m in section.measures),
    )


def transpose_key(key: str, semitones: int) -> str:
    """Transpose a key name such as "Eb" or "F#m".

    Raises
    ------
    ValueError
        If the tonic is not a note name.

    Examples
    --------
    >>> transpose_key("C", 1)
    'Db'
    >>> transpose_key("Am", 3)
    'Cm'
    """
    if not key:
        return key
    if key.endswith("m"):
        return _MINOR_BY_PC[(note_to_pc(key[:-1]) + semitones) % 12]
    return _MAJOR_BY_PC[(note_to_pc(key) + semitones) % 12]


def transpose_song(song: Song, semitones: int, use_flats: bool = False) -> Song:
    """Transpose every measure of a song and its key."""
    return replace(
        song,
        key=transpose_key(song.key, semitones),
        sections=tuple(transpose_section(s, semitones, use_flats=use_flats) for s in song.sections),
    )


def describe_interval(semitones: int) -> str:
    """Describe a transposition for display.

    Examples
    --------
    >>> describe_interval(0)
    'Original Key'
    >>> describe_interval(-5)
    'Down Perfect 4th'
    >>> describe_interval(14)
    'Up 14 Semitones'
    """
    if semitones == 0:
        return "Original Key"
    direction = "Up" if semitones > 0 else "Down"
    distance = abs(semitones)
    return f"{direction} {_INTERVAL_NAMES.get(distance, f'{distance} Semitones')}"
