"""Quantize timed chord events into fixed-size measures.

Downbeats split the timeline into measure windows, each window is divided
into one slot per beat, and every slot receives the chord active at that
beat. Unassigned slots are forward-filled, repeated chords are compacted
to ``"-"``, and short songs are padded to a minimum length.

The process is deliberately lossy: chord onsets are snapped to the
nearest beat and only one chord per beat survives.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from chord_grid.converter import normalize
from chord_grid.extraction.models import (
    EMPTY_SLOT,
    NO_CHORD,
    PLACEHOLDERS,
    SAME_CHORD,
    ChordEvent,
    Measure,
    TimeSignature,
)
from chord_grid.extraction.time_signature import round_half_up

logger = logging.getLogger(__name__)

MIN_MEASURES = 4

# Float noise allowed when comparing a chord end with a beat time
_TIME_EPSILON = 1e-6


def measure_windows(chords: Sequence[ChordEvent], downbeats: Sequence[float]) -> list[tuple[float, float]]:
    """Compute the ``[start, end)`` window of every measure.

    Consecutive downbeats bound the regular measures. An intro window
    ``[0, first_downbeat)`` is added when a chord starts before the first
    downbeat, and a trailing window after the last downbeat when a chord
    starts at or after it. No-chord events never trigger either.

    Parameters
    ----------
    chords : Sequence[ChordEvent]
        Chord events in any order.
    downbeats : Sequence[float]
        Downbeat times in seconds, in any order.

    Returns
    -------
    list[tuple[float, float]]
        Measure windows in time order.
    """
    if not downbeats:
        return []

    bars = sorted(float(d) for d in downbeats)
    sounding = [c for c in chords if not c.is_no_chord]
    windows: list[tuple[float, float]] = []

    if bars[0] > 0 and any(c.start < bars[0] for c in sounding):
        windows.append((0.0, bars[0]))

    # Duplicate downbeats would give zero-length measures
    windows.extend((start, end) for start, end in zip(bars[:-1], bars[1:], strict=True) if end > start)

    if any(c.start >= bars[-1] for c in sounding):
        if len(bars) > 1:
            end = bars[-1] + float(np.mean(np.diff(bars)))
        else:
            end = max(max(c.start, c.end) for c in chords)
        if end > bars[-1]:
            windows.append((bars[-1], end))
        else:
            logger.debug("Skipping empty trailing measure at %.3f", bars[-1])

    return windows


def _overlaps(event: ChordEvent, start: float, end: float) -> bool:
    event_end = max(event.start, event.end)
    if event.start >= end:
        return False
    if event_end > start:
        return True
    # Zero-duration events count only inside the window
    return event.start == event_end and event.start >= start


def assign_beats(
    chords: Sequence[ChordEvent],
    start: float,
    end: float,
    beats_per_measure: int,
) -> list[str]:
    """Assign the active chord to each beat slot of one measure window.

    Each overlapping event is snapped to its nearest beat index (clamped
    to the measure). Sweeping the beats in order, the active event is the
    last one whose snapped index has been reached; it fills the slot at
    its own index and at later beats it still sounds on. When two events
    snap to the same beat the later one wins.

    Returns
    -------
    list[str]
        Display chords, ``"%"`` for no-chord events and ``""`` for slots
        no event covers.
    """
    beat_duration = (end - start) / beats_per_measure
    quantized: list[tuple[int, ChordEvent]] = []
    for event in chords:
        if not _overlaps(event, start, end):
            continue
        index = round_half_up((event.start - start) / beat_duration)
        quantized.append((min(max(index, 0), beats_per_measure - 1), event))
    quantized.sort(key=lambda item: (item[0], item[1].start))

    slots = [EMPTY_SLOT] * beats_per_measure
    active = -1
    for beat in range(beats_per_measure):
        while active + 1 < len(quantized) and quantized[active + 1][0] <= beat:
            active += 1
        if active < 0:
            continue
        index, event = quantized[active]
        beat_time = start + beat * beat_duration
        if index == beat or max(event.start, event.end) - beat_time > _TIME_EPSILON:
            slots[beat] = normalize(event.chord, no_chord=NO_CHORD)
    return slots


def last_chord(slots: Sequence[str]) -> str | None:
    """Return the last literal chord of a slot sequence, if any."""
    for slot in reversed(slots):
        if slot not in PLACEHOLDERS:
            return slot
    return None


def forward_fill(slots: Sequence[str], previous: Sequence[str] | None = None) -> list[str]:
    """Fill empty slots from the nearest prior slot.

    Leading empty slots borrow the last literal chord of ``previous`` (the
    slots of the preceding measure) and become ``"%"`` when there is
    nothing to borrow.

    Examples
    --------
    >>> forward_fill(["", "C", "", "G"], previous=["A", "-", "-", "-"])
    ['A', 'C', 'C', 'G']
    >>> forward_fill(["", "", "", ""])
    ['%', '%', '%', '%']
    """
    filled: list[str] = []
    for slot in slots:
        if slot == EMPTY_SLOT:
            if filled:
                slot = filled[-1]
            else:
                slot = (last_chord(previous) if previous else None) or NO_CHORD
        filled.append(slot)
    return filled


def compact(slots: Sequence[str]) -> list[str]:
    """Replace repeats of the chord in effect with ``"-"``.

    ``"%"`` ends the chord in effect, so a chord repeated after a rest is
    written out again.

    Examples
    --------
    >>> compact(["C", "C", "G", "G"])
    ['C', '-', 'G', '-']
    >>> compact(["C", "%", "C", "C"])
    ['C', '%', 'C', '-']
    """
    compacted: list[str] = []
    in_effect: str | None = None
    for slot in slots:
        if slot in (EMPTY_SLOT, SAME_CHORD):
            compacted.append(slot)
        elif slot == NO_CHORD:
            in_effect = None
            compacted.append(slot)
        elif slot == in_effect:
            compacted.append(SAME_CHORD)
        else:
            in_effect = slot
            compacted.append(slot)
    return compacted


def pad_measures(measures: list[Measure], time_signature: TimeSignature, minimum: int = MIN_MEASURES) -> list[Measure]:
    """Append measures holding the last known chord until ``minimum`` is reached."""
    if len(measures) >= minimum:
        return measures

    n = time_signature.beats_per_measure
    chord = None
    for measure in reversed(measures):
        chord = last_chord(measure.beat_chords)
        if chord is not None:
            break
    slots = compact([chord] * n) if chord is not None else [NO_CHORD] * n

    logger.debug("Padding %d measures to %d with %s", len(measures), minimum, slots)
    padded = list(measures)
    while len(padded) < minimum:
        padded.append(Measure(order=len(padded), time_signature=time_signature, beat_chords=tuple(slots)))
    return padded


def build_measures(
    chords: Sequence[ChordEvent],
    downbeats: Sequence[float],
    time_signature: TimeSignature,
) -> list[Measure]:
    """Build beat-synchronized measures from timed chord events.

    Parameters
    ----------
    chords : Sequence[ChordEvent]
        Chord events from the service, in any order.
    downbeats : Sequence[float]
        Downbeat times in seconds, in any order.
    time_signature : TimeSignature
        Meter of the song; its numerator sets the slots per measure.

    Returns
    -------
    list[Measure]
        At least ``MIN_MEASURES`` measures, each with exactly
        ``time_signature.beats_per_measure`` slots holding a display chord,
        ``"-"`` or ``"%"``.

    Examples
    --------
    >>> events = [ChordEvent("C:maj", 0, 2), ChordEvent("G:maj", 2, 4)]
    >>> measures = build_measures(events, [0, 4], TimeSignature(4, 4))
    >>> measures[0].beat_chords
    ('C', '-', 'G', '-')
    >>> len(measures)
    4
    """
    events = sorted(chords, key=lambda c: c.start)
    n = time_signature.beats_per_measure
    windows = measure_windows(events, downbeats)
    if not windows:
        logger.warning("No measure windows for %d chords and %d downbeats", len(events), len(downbeats))

    measures: list[Measure] = []
    previous: tuple[str, ...] | None = None
    for order, (start, end) in enumerate(windows):
        assigned = assign_beats(events, start, end, n)
        slots = tuple(compact(forward_fill(assigned, previous)))
        logger.debug("Measure %d [%.3f, %.3f): %s", order, start, end, " ".join(slots))
        measure = Measure(order=order, time_signature=time_signature, beat_chords=slots)
        measures.append(measure)
        previous = measure.beat_chords

    logger.info("Built %d measures in %s", len(measures), time_signature)
    return pad_measures(measures, time_signature)
