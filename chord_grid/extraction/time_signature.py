"""Time signature inference from beat tracking output.

The meter is estimated by counting beats between consecutive downbeats
and mapping the most common count to a supported time signature. This is
best-effort signal detection, not exact meter recovery: beat trackers
frequently double or halve the pulse, and compound meters are reported as
their eighth-note count (six beats for 6/8).
"""

from __future__ import annotations

import logging
import math
import warnings
from collections import Counter
from collections.abc import Sequence
from typing import Any

import numpy as np

from chord_grid.errors import DegradedInputWarning
from chord_grid.extraction.models import TimeSignature

logger = logging.getLogger(__name__)

MIN_BEATS = 4
MIN_DOWNBEATS = 2
BEAT_TOLERANCE = 0.05  # seconds
MIN_CONFIDENCE = 0.5

DEFAULT_TIME_SIGNATURE = TimeSignature(4, 4)

# Beat count per measure -> (numerator, denominator)
BEAT_COUNT_TO_SIGNATURE: dict[int, tuple[int, int]] = {
    1: (2, 4),
    2: (2, 4),
    3: (3, 4),
    4: (4, 4),
    5: (5, 4),
    6: (6, 8),
    7: (7, 8),
    8: (4, 4),  # doubled 4/4
    9: (9, 8),
    10: (6, 8),
    11: (6, 8),
    12: (12, 8),
}


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero.

    Examples
    --------
    >>> round_half_up(2.5)
    3
    >>> round_half_up(-0.5)
    -1
    """
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def beat_count_to_time_signature(beat_count: int) -> TimeSignature:
    """Map a beats-per-measure count to a supported time signature.

    Parameters
    ----------
    beat_count : int
        Number of beats counted in a typical measure.

    Returns
    -------
    TimeSignature
        The matching meter; counts with no mapping give 4/4.

    Examples
    --------
    >>> str(beat_count_to_time_signature(6))
    '6/8'
    >>> str(beat_count_to_time_signature(8))
    '4/4'
    """
    if beat_count not in BEAT_COUNT_TO_SIGNATURE:
        logger.debug("Unusual beat count %d, using 4/4", beat_count)
        return DEFAULT_TIME_SIGNATURE
    return TimeSignature(*BEAT_COUNT_TO_SIGNATURE[beat_count])


def parse_declared_time_signature(declared: Any) -> TimeSignature | None:
    """Validate a time signature reported by the service.

    Parameters
    ----------
    declared : Any
        ``"N/D"``, ``"N"``, ``[N, D]`` or a bare int; None when absent.

    Returns
    -------
    TimeSignature | None
        The parsed meter, or None if it is absent, malformed or out of
        range (numerator 1-16, denominator 1, 2, 4, 8, 16 or 32).
    """
    if declared is None:
        return None
    try:
        return TimeSignature.parse(declared)
    except ValueError as exc:
        logger.debug("Rejected declared time signature %r: %s", declared, exc)
        return None


def count_beats_per_measure(beats: Sequence[float], downbeats: Sequence[float]) -> int | None:
    """Estimate the number of beats in a typical measure.

    Parameters
    ----------
    beats : Sequence[float]
        All beat times in seconds.
    downbeats : Sequence[float]
        Downbeat times in seconds.

    Returns
    -------
    int | None
        Estimated beat count, or None when there is too little data.

    Notes
    -----
    For each downbeat interval the beats inside ``[start, end)`` (shifted by
    a 50 ms tolerance) are counted and compared with the count expected
    from the average beat interval; the expected count replaces the
    counted one when they differ by more than one beat. The mode of the
    per-measure counts is used unless fewer than half of the measures
    agree on it, in which case the average measure duration decides.
    """
    if len(beats) < MIN_BEATS or len(downbeats) < MIN_DOWNBEATS:
        logger.debug(
            "Insufficient beat data for time signature inference (%d beats, %d downbeats)",
            len(beats),
            len(downbeats),
        )
        return None

    beat_times = np.sort(np.asarray(beats, dtype=np.float64))
    downbeat_times = np.sort(np.asarray(downbeats, dtype=np.float64))

    avg_beat = float(np.mean(np.diff(beat_times)))
    if avg_beat <= 0:
        return None

    counts: list[int] = []
    for start, end in zip(downbeat_times[:-1], downbeat_times[1:], strict=True):
        counted = int(np.count_nonzero((beat_times >= start - BEAT_TOLERANCE) & (beat_times < end - BEAT_TOLERANCE)))
        expected = round_half_up((end - start) / avg_beat)
        logger.debug(
            "Measure %.3f-%.3f: counted=%d expected=%d", start, end, counted, expected
        )
        if counted > 0:
            counts.append(counted if abs(counted - expected) <= 1 else expected)

    if not counts:
        return None

    beat_count, frequency = Counter(counts).most_common(1)[0]
    confidence = frequency / len(counts)
    logger.debug(
        "Most common beats per measure: %d (confidence %.1f%%, %d/%d measures)",
        beat_count,
        confidence * 100,
        frequency,
        len(counts),
    )

    if confidence < MIN_CONFIDENCE:
        avg_measure = float(np.mean(np.diff(downbeat_times)))
        beat_count = round_half_up(avg_measure / avg_beat)
        logger.debug("Low confidence, estimated %d beats from measure duration", beat_count)

    return beat_count


def infer_time_signature(
    beats: Sequence[float],
    downbeats: Sequence[float],
    declared: Any = None,
) -> TimeSignature:
    """Infer the meter of a song from its beats and downbeats.

    Parameters
    ----------
    beats : Sequence[float]
        All beat times in seconds, in any order.
    downbeats : Sequence[float]
        Downbeat times in seconds, in any order.
    declared : Any
        Time signature reported by the service. Only used when the beat
        data is insufficient for inference.

    Returns
    -------
    TimeSignature
        The inferred meter, the declared one, or 4/4.

    Warns
    -----
    DegradedInputWarning
        When the beat data cannot be used, and again when the declared
        time signature is missing or invalid.

    Examples
    --------
    >>> str(infer_time_signature([0, 1, 2, 3, 4, 5], [0, 3]))
    '3/4'
    """
    beat_count = count_beats_per_measure(beats, downbeats)
    if beat_count is not None:
        time_signature = beat_count_to_time_signature(beat_count)
        logger.info("Inferred time signature %s from %d beats per measure", time_signature, beat_count)
        return time_signature

    warnings.warn(
        f"Cannot infer time signature from {len(beats)} beats and {len(downbeats)} downbeats",
        DegradedInputWarning,
        stacklevel=2,
    )

    parsed = parse_declared_time_signature(declared)
    if parsed is not None:
        logger.info("Using declared time signature %s", parsed)
        return parsed

    warnings.warn(
        f"No usable declared time signature ({declared!r}), defaulting to {DEFAULT_TIME_SIGNATURE}",
        DegradedInputWarning,
        stacklevel=2,
    )
    return DEFAULT_TIME_SIGNATURE
