"""Group built measures into sections, songs and display grids."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import PurePath

from chord_grid.extraction.models import (
    EMPTY_SLOT,
    NO_CHORD,
    ChordGrid,
    GridCell,
    Measure,
    Section,
    SectionMeta,
    Song,
    TimeSignature,
)
from chord_grid.extraction.time_signature import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_MEASURES_PER_ROW = 4
UNKNOWN_ARTIST = "Unknown"


def assemble_section(measures: Sequence[Measure], meta: SectionMeta | None = None) -> Section:
    """Wrap measures in a single labeled section."""
    meta = meta or SectionMeta()
    return Section(
        section_type=meta.section_type,
        label=meta.label,
        order=meta.order,
        measures=tuple(measures),
        name=meta.name,
    )


def assemble_grid(measures: Sequence[Measure], measures_per_row: int = DEFAULT_MEASURES_PER_ROW) -> ChordGrid:
    """Lay measures out row by row as beat cells.

    Parameters
    ----------
    measures : Sequence[Measure]
        Measures in song order.
    measures_per_row : int
        Measures per full row; the last row may be shorter.

    Returns
    -------
    ChordGrid
        Grid whose cells carry the measure and beat position of each slot.

    Raises
    ------
    ValueError
        If ``measures_per_row`` is not positive.
    """
    if measures_per_row < 1:
        msg = f"measures_per_row must be >= 1, got {measures_per_row}"
        raise ValueError(msg)

    rows: list[tuple[GridCell, ...]] = []
    for row_start in range(0, len(measures), measures_per_row):
        row: list[GridCell] = []
        for measure_index in range(row_start, min(row_start + measures_per_row, len(measures))):
            for beat_index, chord in enumerate(measures[measure_index].beat_chords):
                row.append(
                    GridCell(
                        chord=chord,
                        measure_index=measure_index,
                        beat_index=beat_index,
                        is_downbeat=beat_index == 0,
                        is_empty=chord in (EMPTY_SLOT, NO_CHORD),
                    )
                )
        rows.append(tuple(row))
    return ChordGrid(rows=tuple(rows), measures_per_row=measures_per_row)


def assemble(
    measures: Sequence[Measure],
    section_meta: SectionMeta | None = None,
    page_size: int | None = None,
) -> Section | ChordGrid:
    """Assemble measures as a section, or as a grid when ``page_size`` is given.

    ``page_size`` is the number of measures per grid row.
    """
    if page_size is None:
        return assemble_section(measures, section_meta)
    return assemble_grid(measures, measures_per_row=page_size)


def song_title_from_filename(file_name: str) -> str:
    """Derive a song title from an audio file name.

    Examples
    --------
    >>> song_title_from_filename("/music/my_song-live.mp3")
    'my song live'
    """
    stem = PurePath(file_name).stem
    return stem.replace("_", " ").replace("-", " ").strip()


def assemble_song(
    measures: Sequence[Measure],
    *,
    title: str,
    key: str,
    time_signature: TimeSignature,
    bpm: float,
    artist: str = UNKNOWN_ARTIST,
    meta: SectionMeta | None = None,
) -> Song:
    """Build a one-section song from measures and analysis metadata."""
    song = Song(
        title=title,
        artist=artist,
        key=key,
        time_signature=time_signature,
        tempo=round_half_up(bpm),
        sections=(assemble_section(measures, meta),),
    )
    logger.info(
        "Assembled %r: key %s, %s, %d BPM, %d measures",
        song.title,
        song.key,
        song.time_signature,
        song.tempo,
        len(measures),
    )
    return song
