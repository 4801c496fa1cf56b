"""Pitch class operations for chord roots and key names.

This module provides pitch class (0-11) lookups for note names as they
appear in service labels and chart symbols, including the Unicode
accidentals used for display.
"""

from __future__ import annotations

# Note name to pitch class (0-11, where C=0)
NOTE_TO_PC: dict[str, int] = {
    "C": 0,
    "C#": 1,
    "Db": 1,
    "D": 2,
    "D#": 3,
    "Eb": 3,
    "E": 4,
    "Fb": 4,
    "E#": 5,
    "F": 5,
    "F#": 6,
    "Gb": 6,
    "G": 7,
    "G#": 8,
    "Ab": 8,
    "A": 9,
    "A#": 10,
    "Bb": 10,
    "B": 11,
    "Cb": 11,
    "B#": 0,
}

SHARP_NOTE_NAMES: tuple[str, ...] = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
FLAT_NOTE_NAMES: tuple[str, ...] = ("C", "Db", "D", "Eb", "E", "F", "Gb", "G", "Ab", "A", "Bb", "B")

_UNICODE_ACCIDENTALS = {"♯": "#", "♭": "b"}


def _ascii_accidentals(note: str) -> str:
    for symbol, ascii_symbol in _UNICODE_ACCIDENTALS.items():
        note = note.replace(symbol, ascii_symbol)
    return note


def note_to_pc(note: str) -> int:
    """Convert a note name to pitch class (0-11).

    Parameters
    ----------
    note : str
        Note name (e.g., "C", "F#", "Bb", "B♭").

    Returns
    -------
    int
        Pitch class (0-11, where C=0).

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> note_to_pc("F#")
    6
    >>> note_to_pc("B♭")
    10
    """
    ascii_note = _ascii_accidentals(note)
    if ascii_note in NOTE_TO_PC:
        return NOTE_TO_PC[ascii_note]
    msg = f"Unknown note: {note}"
    raise ValueError(msg)


def pc_to_note(pitch_class: int, use_flats: bool = False) -> str:
    """Spell a pitch class as a note name.

    Examples
    --------
    >>> pc_to_note(10)
    'A#'
    >>> pc_to_note(10, use_flats=True)
    'Bb'
    """
    names = FLAT_NOTE_NAMES if use_flats else SHARP_NOTE_NAMES
    return names[pitch_class % 12]


def transpose_note(note: str, semitones: int, use_flats: bool = False) -> str:
    """Transpose a note name by a number of semitones.

    Parameters
    ----------
    note : str
        The note to transpose.
    semitones : int
        Number of semitones to transpose (positive = up).
    use_flats : bool
        Spell the result with flats instead of sharps.

    Returns
    -------
    str
        Transposed note name.

    Raises
    ------
    ValueError
        If the note name is not recognized.

    Examples
    --------
    >>> transpose_note("C", 2)
    'D'
    >>> transpose_note("C", -1)
    'B'
    """
    return pc_to_note(note_to_pc(note) + semitones, use_flats=use_flats)
