"""High-level entry points: service payloads or an audio file to a Song."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from chord_grid.extraction.assembler import assemble_song, song_title_from_filename
from chord_grid.extraction.client import AnalysisClient
from chord_grid.extraction.key import detect_key
from chord_grid.extraction.measures import build_measures
from chord_grid.extraction.models import SectionMeta, Song
from chord_grid.extraction.payload import parse_beat_payload, parse_chord_payload
from chord_grid.extraction.time_signature import infer_time_signature

logger = logging.getLogger(__name__)


def song_from_payloads(
    chord_payload: Any,
    beat_payload: Any,
    file_name: str,
    section_meta: SectionMeta | None = None,
) -> Song:
    """Build a chord chart from the two service payloads.

    Parameters
    ----------
    chord_payload : Any
        Decoded chord recognition response.
    beat_payload : Any
        Decoded beat detection response.
    file_name : str
        Name of the analyzed audio file; the song title is derived from it.
    section_meta : SectionMeta | None
        Labeling for the single section. Defaults to ``VERSE``/``A``.

    Returns
    -------
    Song
        One-section song with detected key, inferred time signature and
        rounded tempo.

    Raises
    ------
    ServiceError
        If either payload reports failure.
    MalformedPayloadError
        If either payload lacks required data. Nothing is built in that case.
    """
    chords = parse_chord_payload(chord_payload)
    beat_set = parse_beat_payload(beat_payload)

    time_signature = infer_time_signature(
        beat_set.beats, beat_set.downbeats, declared=beat_set.declared_time_signature
    )
    # Payload order is not guaranteed to be time order
    key = detect_key(sorted(chords, key=lambda c: c.start))
    measures = build_measures(chords, beat_set.downbeats, time_signature)

    return assemble_song(
        measures,
        title=song_title_from_filename(file_name),
        key=key,
        time_signature=time_signature,
        bpm=beat_set.bpm,
        meta=section_meta,
    )


async def extract_song(
    audio_path: str | Path,
    client: AnalysisClient | None = None,
    section_meta: SectionMeta | None = None,
) -> Song:
    """Analyze an audio file with the service and build its chord chart.

    Parameters
    ----------
    audio_path : str | Path
        Audio file to upload.
    client : AnalysisClient | None
        Client to use. A default client is created (and closed) when
        omitted.
    section_meta : SectionMeta | None
        Labeling for the single section.

    Returns
    -------
    Song
        The extracted song.

    Raises
    ------
    FileNotFoundError
        If the audio file does not exist.
    PipelineError
        On any service or payload failure.
    """
    path = Path(audio_path)
    logger.info("Extracting chords and beats from %s", path)
    if client is None:
        with AnalysisClient() as default_client:
            chord_payload, beat_payload = await default_client.analyze(path)
    else:
        chord_payload, beat_payload = await client.analyze(path)
    return song_from_payloads(chord_payload, beat_payload, path.name, section_meta=section_meta)
