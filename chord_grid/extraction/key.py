"""Key detection by diatonic chord scoring.

Every chord of a progression is matched against the diatonic triads of
the 24 major and natural minor keys. Tonic, dominant and subdominant
matches weigh more than other degrees, and a tonic that opens or closes
the progression gets a bonus.
"""

from __future__ import annotations

import logging
import warnings
from collections.abc import Iterable
from dataclasses import dataclass

from chord_grid.converter import NO_CHORD_LABEL, canonicalize
from chord_grid.errors import DegradedInputWarning
from chord_grid.extraction.models import ChordEvent
from chord_grid.pitch_class import note_to_pc

logger = logging.getLogger(__name__)

DEFAULT_KEY = "C"

# Circle-of-fifths order; also the tie-break order
MAJOR_KEYS: tuple[str, ...] = ("C", "G", "D", "A", "E", "B", "F#", "Db", "Ab", "Eb", "Bb", "F")
MINOR_KEYS: tuple[str, ...] = ("Am", "Em", "Bm", "F#m", "C#m", "G#m", "D#m", "Bbm", "Fm", "Cm", "Gm", "Dm")

# Scale degrees as (semitones above tonic, base quality)
MAJOR_SCALE: tuple[tuple[int, str], ...] = (
    (0, "maj"),
    (2, "min"),
    (4, "min"),
    (5, "maj"),
    (7, "maj"),
    (9, "min"),
    (11, "dim"),
)
MINOR_SCALE: tuple[tuple[int, str], ...] = (
    (0, "min"),
    (2, "dim"),
    (3, "maj"),
    (5, "min"),
    (7, "min"),
    (8, "maj"),
    (10, "maj"),
)

TONIC_WEIGHT = 3.0
DOMINANT_WEIGHT = 2.5
SUBDOMINANT_WEIGHT = 2.0
DIATONIC_WEIGHT = 1.0
TONIC_POSITION_BONUS = 2.0


@dataclass(frozen=True)
class KeyProfile:
    """Diatonic triads of one key, keyed by (pitch class, base quality)."""

    name: str
    degrees: tuple[tuple[int, str], ...]

    @classmethod
    def build(cls, name: str) -> KeyProfile:
        is_minor = name.endswith("m")
        tonic = note_to_pc(name[:-1] if is_minor else name)
        scale = MINOR_SCALE if is_minor else MAJOR_SCALE
        return cls(name, tuple(((tonic + offset) % 12, quality) for offset, quality in scale))

    def degree_of(self, pitch_class: int, quality: str) -> int | None:
        """Zero-based scale degree of a triad, or None if it is not diatonic."""
        try:
            return self.degrees.index((pitch_class, quality))
        except ValueError:
            return None


KEY_PROFILES: tuple[KeyProfile, ...] = tuple(KeyProfile.build(name) for name in MAJOR_KEYS + MINOR_KEYS)


def _degree_weight(degree: int) -> float:
    if degree == 0:
        return TONIC_WEIGHT
    if degree == 4:
        return DOMINANT_WEIGHT
    if degree == 3:
        return SUBDOMINANT_WEIGHT
    return DIATONIC_WEIGHT


def _chord_label(chord: ChordEvent | str) -> str:
    return chord.chord if isinstance(chord, ChordEvent) else chord


def canonical_triads(chords: Iterable[ChordEvent | str]) -> list[tuple[int, str] | None]:
    """Reduce a progression to ``(root pitch class, base quality)`` pairs.

    No-chord labels are dropped. Unparseable symbols and unknown roots
    keep their position as ``None`` so they still count when locating the
    first and last chord.
    """
    triads: list[tuple[int, str] | None] = []
    for chord in chords:
        label = _chord_label(chord)
        if not label or label == NO_CHORD_LABEL:
            continue
        canonical = canonicalize(label)
        if canonical is None:
            logger.debug("Unparseable chord kept as non-diatonic: %r", label)
            triads.append(None)
            continue
        root, quality = canonical.split(":", 1)
        try:
            triads.append((note_to_pc(root), quality))
        except ValueError:
            logger.debug("Unknown root kept as non-diatonic: %r", canonical)
            triads.append(None)
    return triads


def score_keys(chords: Iterable[ChordEvent | str]) -> dict[str, float]:
    """Score a progression against all 24 major and minor keys.

    Parameters
    ----------
    chords : Iterable[ChordEvent | str]
        Chord events or labels, in progression order. Service labels
        ("A:min7") and display symbols ("Am7") are both accepted.

    Returns
    -------
    dict[str, float]
        Score per key name, majors first in circle-of-fifths order, then
        minors.

    Examples
    --------
    >>> scores = score_keys(["C:maj", "F:maj", "G:maj", "C:maj"])
    >>> scores["C"]
    14.5
    """
    triads = canonical_triads(chords)
    scores: dict[str, float] = {}
    for profile in KEY_PROFILES:
        score = 0.0
        for i, triad in enumerate(triads):
            degree = profile.degree_of(*triad) if triad is not None else None
            if degree is None:
                continue
            score += _degree_weight(degree)
            if degree == 0 and (i == 0 or i == len(triads) - 1):
                score += TONIC_POSITION_BONUS
        scores[profile.name] = score
    return scores


def detect_key(chords: Iterable[ChordEvent | str]) -> str:
    """Detect the most likely key of a chord progression.

    Parameters
    ----------
    chords : Iterable[ChordEvent | str]
        Chord events or labels, in progression order.

    Returns
    -------
    str
        Key name such as "G" or "F#m". Ties keep the first key in
        circle-of-fifths order, majors before minors.

    Warns
    -----
    DegradedInputWarning
        When no chord matches any key; "C" is returned.

    Examples
    --------
    >>> detect_key(["A:min", "D:min", "E:min", "A:min"])
    'Am'
    """
    scores = score_keys(chords)

    best_key = DEFAULT_KEY
    best_score = 0.0
    for key, score in scores.items():
        if score > best_score:
            best_key, best_score = key, score

    if best_score == 0.0:
        warnings.warn(
            f"No diatonic chords found, defaulting to key {DEFAULT_KEY}",
            DegradedInputWarning,
            stacklevel=2,
        )
    else:
        logger.info("Detected key %s (score %.1f)", best_key, best_score)
    return best_key
