"""Beat-synchronized chord extraction.

This package turns the chord and beat payloads of the audio-analysis
service into measure-based chord charts: time signature inference, key
detection, measure quantization and song assembly.
"""

from chord_grid.extraction.api import extract_song, song_from_payloads
from chord_grid.extraction.assembler import (
    assemble,
    assemble_grid,
    assemble_section,
    assemble_song,
    song_title_from_filename,
)
from chord_grid.extraction.client import AnalysisClient
from chord_grid.extraction.key import detect_key, score_keys
from chord_grid.extraction.measures import build_measures, compact, forward_fill
from chord_grid.extraction.models import (
    BeatSet,
    ChordEvent,
    ChordGrid,
    GridCell,
    Measure,
    Section,
    SectionMeta,
    Song,
    TimeSignature,
)
from chord_grid.extraction.payload import load_payload, parse_beat_payload, parse_chord_payload
from chord_grid.extraction.time_signature import (
    beat_count_to_time_signature,
    infer_time_signature,
    parse_declared_time_signature,
)

__all__ = [
    "AnalysisClient",
    "BeatSet",
    "ChordEvent",
    "ChordGrid",
    "GridCell",
    "Measure",
    "Section",
    "SectionMeta",
    "Song",
    "TimeSignature",
    "assemble",
    "assemble_grid",
    "assemble_section",
    "assemble_song",
    "beat_count_to_time_signature",
    "build_measures",
    "compact",
    "detect_key",
    "extract_song",
    "forward_fill",
    "infer_time_signature",
    "load_payload",
    "parse_beat_payload",
    "parse_chord_payload",
    "parse_declared_time_signature",
    "score_keys",
    "song_from_payloads",
    "song_title_from_filename",
]
