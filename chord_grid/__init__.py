"""Chord-grid: turn audio-analysis chord and beat data into chord charts.

The analysis service reports timed chords in Harte-style notation
(e.g., "C#:min7") and beat/downbeat timestamps. This library quantizes
them into measures of beat slots in chart notation (e.g., "C#m7"),
infers the time signature and key, and assembles a song.

Examples
--------
>>> from chord_grid import normalize, song_from_payloads

>>> normalize("C#:min7")
'C#m7'

>>> chord_payload = {
...     "success": True,
...     "chords": [
...         {"chord": "C:maj", "start": 0.0, "end": 2.0},
...         {"chord": "G:maj", "start": 2.0, "end": 4.0},
...     ],
... }
>>> beat_payload = {
...     "success": True,
...     "beats": [0.0, 1.0, 2.0, 3.0],
...     "downbeats": [0.0, 4.0],
...     "bpm": 60.0,
...     "time_signature": "4/4",
... }
>>> song = song_from_payloads(chord_payload, beat_payload, "my_song.mp3")
>>> song.measures[0].beat_chords
('C', '-', 'G', '-')
"""

import logging

from chord_grid.config import ServiceConfig
from chord_grid.converter import base_quality, canonicalize, from_harte, from_pychord, normalize
from chord_grid.errors import (
    ChordGridError,
    DegradedInputWarning,
    MalformedPayloadError,
    PipelineError,
    ServiceError,
    ServiceTimeoutError,
)
from chord_grid.extraction import (
    AnalysisClient,
    BeatSet,
    ChordEvent,
    ChordGrid,
    GridCell,
    Measure,
    Section,
    SectionMeta,
    Song,
    TimeSignature,
    assemble,
    build_measures,
    detect_key,
    extract_song,
    infer_time_signature,
    song_from_payloads,
)
from chord_grid.models import Chord
from chord_grid.transpose import describe_interval, transpose_chord, transpose_key, transpose_song

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AnalysisClient",
    "BeatSet",
    "Chord",
    "ChordEvent",
    "ChordGrid",
    "ChordGridError",
    "DegradedInputWarning",
    "GridCell",
    "MalformedPayloadError",
    "Measure",
    "PipelineError",
    "Section",
    "SectionMeta",
    "ServiceConfig",
    "ServiceError",
    "ServiceTimeoutError",
    "Song",
    "TimeSignature",
    "assemble",
    "base_quality",
    "build_measures",
    "canonicalize",
    "describe_interval",
    "detect_key",
    "extract_song",
    "from_harte",
    "from_pychord",
    "infer_time_signature",
    "normalize",
    "song_from_payloads",
    "transpose_chord",
    "transpose_key",
    "transpose_song",
]
