"""Validate analysis-service JSON payloads and convert them to records.

Chord payload::

    {"success": true, "chords": [{"chord": "C:maj", "start": 0.0, "end": 2.1}, ...]}

Beat payload::

    {"success": true, "beats": [...], "downbeats": [...], "bpm": 120.0,
     "time_signature": "4/4"}
"""

from __future__ import annotations

import json
import logging
import math
import numbers
from pathlib import Path
from typing import Any

from chord_grid.errors import MalformedPayloadError, ServiceError
from chord_grid.extraction.models import BeatSet, ChordEvent

logger = logging.getLogger(__name__)


def check_success(data: Any, what: str) -> dict[str, Any]:
    """Ensure ``data`` is a successful service response.

    Parameters
    ----------
    data : Any
        Decoded JSON payload.
    what : str
        Name of the operation, used in error messages (e.g., "Chord recognition").

    Returns
    -------
    dict[str, Any]
        The payload itself.

    Raises
    ------
    MalformedPayloadError
        If the payload is not a JSON object.
    ServiceError
        If the payload does not report ``success: true``.
    """
    if not isinstance(data, dict):
        msg = f"{what} payload must be a JSON object, got {type(data).__name__}"
        raise MalformedPayloadError(msg)
    if data.get("success") is not True:
        msg = f"{what} failed: {data.get('error') or 'Unknown error'}"
        raise ServiceError(msg)
    return data


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _parse_times(values: Any, field: str) -> tuple[float, ...]:
    if not isinstance(values, list) or not all(_is_number(v) for v in values):
        msg = f"Field {field!r} must be a list of numbers"
        raise MalformedPayloadError(msg)
    return tuple(sorted(float(v) for v in values))


def parse_chord_payload(data: Any) -> tuple[ChordEvent, ...]:
    """Parse a chord recognition payload into chord events.

    Events keep the order of the payload, which is not guaranteed to be
    time order.

    Raises
    ------
    ServiceError
        If the payload reports failure.
    MalformedPayloadError
        If ``chords`` is missing or empty, or an entry lacks a string
        ``chord`` or numeric ``start``/``end``.
    """
    payload = check_success(data, "Chord recognition")
    entries = payload.get("chords")
    if not isinstance(entries, list) or not entries:
        msg = "Chord payload has no chords"
        raise MalformedPayloadError(msg)

    events: list[ChordEvent] = []
    for i, entry in enumerate(entries):
        if not isinstance(entry, dict):
            msg = f"Chord entry {i} is not an object: {entry!r}"
            raise MalformedPayloadError(msg)
        chord, start, end = entry.get("chord"), entry.get("start"), entry.get("end")
        if not isinstance(chord, str) or not _is_number(start) or not _is_number(end):
            msg = f"Malformed chord entry {i}: {entry!r}"
            raise MalformedPayloadError(msg)
        events.append(ChordEvent(chord=chord, start=float(start), end=float(end)))

    logger.info("Parsed %d chord events", len(events))
    return tuple(events)


def parse_beat_payload(data: Any) -> BeatSet:
    """Parse a beat detection payload into a BeatSet.

    ``beats`` may be absent or empty; the time signature inference then
    falls back to the declared value. ``time_signature`` is passed through
    unvalidated.

    Raises
    ------
    ServiceError
        If the payload reports failure.
    MalformedPayloadError
        If ``downbeats`` is missing or empty, or ``bpm`` is missing or not
        a number.
    """
    payload = check_success(data, "Beat detection")

    downbeats = payload.get("downbeats")
    if not downbeats:
        msg = "Beat payload has no downbeats"
        raise MalformedPayloadError(msg)

    bpm = payload.get("bpm")
    if not _is_number(bpm):
        msg = f"Beat payload has no numeric bpm: {bpm!r}"
        raise MalformedPayloadError(msg)

    beat_set = BeatSet(
        beats=_parse_times(payload.get("beats") or [], "beats"),
        downbeats=_parse_times(downbeats, "downbeats"),
        bpm=float(bpm),
        declared_time_signature=payload.get("time_signature"),
    )
    logger.info(
        "Parsed %d beats, %d downbeats at %.1f BPM",
        len(beat_set.beats),
        len(beat_set.downbeats),
        beat_set.bpm,
    )
    return beat_set


def decode_json(text: str, source: str) -> Any:
    """Decode JSON text, raising MalformedPayloadError on invalid input."""
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON from {source}: {exc}"
        raise MalformedPayloadError(msg) from exc


def load_payload(path: str | Path) -> Any:
    """Load a saved service payload from a JSON file.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    MalformedPayloadError
        If the file is not valid JSON.
    """
    path = Path(path)
    return decode_json(path.read_text(encoding="utf-8"), str(path))
