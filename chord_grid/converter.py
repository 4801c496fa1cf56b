"""Chord notation converter for analysis-service chord labels.

The audio-analysis service labels chords in Harte-style notation
(``root:quality``, e.g. "C#:min7", "B:7", or "N" for no chord). This module
converts those labels to the display notation used in chord charts
(e.g. "C#m7", "B7") and to the canonical ``root:baseQuality`` form used for
key scoring.
"""

from __future__ import annotations

from chord_grid.models import Chord

NO_CHORD_LABEL = "N"

DIMINISHED_SIGN = "°"
AUGMENTED_SIGN = "+"

# Qualities that reduce to a triad family for key scoring
BASE_QUALITIES: tuple[str, ...] = ("maj", "min", "dim", "aug")

# Mapping from pychord quality names to Harte shorthand
PYCHORD_TO_HARTE_QUALITY: dict[str, str] = {
    "": "maj",
    "m": "min",
    "m7": "min7",
    "7": "7",
    "maj7": "maj7",
    "M7": "maj7",
    "dim": "dim",
    "dim7": "dim7",
    "dim6": "dim6",
    "aug": "aug",
    "aug7": "aug7",
    "m7-5": "hdim7",
    "m7b5": "hdim7",
    "sus4": "sus4",
    "sus2": "sus2",
    "7sus4": "7sus4",
    "7sus2": "7sus2",
    "add9": "maj(9)",
    "madd9": "min(9)",
    "9": "9",
    "m9": "min9",
    "maj9": "maj9",
    "11": "11",
    "m11": "min11",
    "13": "13",
    "m13": "min13",
    "6": "maj6",
    "m6": "min6",
    "mmaj7": "minmaj7",
    "mM7": "minmaj7",
    "5": "5",
}


def normalize(api_chord: str, no_chord: str = "") -> str:
    """Convert a service chord label to display notation.

    Parameters
    ----------
    api_chord : str
        Chord label from the service (e.g., "E:maj", "C#:min7", "B:7", "N").
    no_chord : str
        Value returned for the "N" (no chord) label. Defaults to ``""``;
        the measure builder passes ``"%"``.

    Returns
    -------
    str
        Display chord (e.g., "E", "C#m7", "B7"). Labels without a ``:``
        are returned unchanged. Never raises.

    Examples
    --------
    >>> normalize("C#:min7")
    'C#m7'
    >>> normalize("F:maj")
    'F'
    >>> normalize("Bb:dim")
    'Bb°'
    >>> normalize("N")
    ''
    """
    if api_chord == NO_CHORD_LABEL:
        return no_chord
    if ":" not in api_chord:
        return api_chord

    root, quality = api_chord.split(":", 1)

    if quality.startswith("min"):
        return f"{root}m{quality[3:]}"
    if quality.startswith("maj"):
        return f"{root}{quality[3:]}"
    if quality.startswith("dim"):
        return f"{root}{DIMINISHED_SIGN}{quality[3:]}"
    if quality.startswith("aug"):
        return f"{root}{AUGMENTED_SIGN}{quality[3:]}"
    # Extensions (B:7, B:9) and unknown qualities are appended verbatim
    return f"{root}{quality}"


def base_quality(quality: str) -> str:
    """Reduce a Harte quality to its triad family.

    Parameters
    ----------
    quality : str
        Harte quality (e.g., "min7", "maj7", "7", "hdim7").

    Returns
    -------
    str
        One of "maj", "min", "dim", "aug", or the input unchanged when the
        quality has no triad family (e.g., "sus4").

    Examples
    --------
    >>> base_quality("min7")
    'min'
    >>> base_quality("7")
    'maj'
    >>> base_quality("sus4")
    'sus4'
    """
    if quality.startswith("min"):
        return "min"
    if quality.startswith("maj"):
        return "maj"
    if quality.startswith(("dim", "hdim")):
        return "dim"
    if quality.startswith("aug"):
        return "aug"
    if quality[:1].isdigit() or "7" in quality:
        return "maj"
    return quality


def from_harte(chord_str: str) -> Chord:
    """Parse a Harte-style service label into a Chord object.

    Parameters
    ----------
    chord_str : str
        Chord in Harte notation (e.g., "G:min7", "C:maj/3", "C:maj(9)").

    Returns
    -------
    Chord
        Unified chord representation. The bass part of a slash chord is
        kept verbatim.

    Raises
    ------
    ValueError
        If the label has no ``root:quality`` separator, an empty root, or
        does not follow the Harte grammar.

    Examples
    --------
    >>> from_harte("G:min7")
    Chord(root='G', quality='min7', bass=None)
    """
    from harte.harte import Harte

    if ":" not in chord_str:
        msg = f"Not a Harte chord label: {chord_str}"
        raise ValueError(msg)
    if chord_str.startswith(":"):
        msg = f"Missing chord root: {chord_str}"
        raise ValueError(msg)

    try:
        hc = Harte(chord_str)
    except Exception as exc:
        msg = f"Invalid Harte chord label: {chord_str}"
        raise ValueError(msg) from exc

    root = hc.get_root()
    shorthand = hc.get_shorthand()

    bass = None
    if "/" in chord_str:
        bass = chord_str.split("/")[-1]

    return Chord(root=root, quality=shorthand if shorthand else "maj", bass=bass)


def from_pychord(chord_str: str) -> Chord:
    """Parse a display chord symbol into a Chord object using pychord.

    Parameters
    ----------
    chord_str : str
        Chord in pychord notation (e.g., "Gm7", "C", "F#dim7/A").

    Returns
    -------
    Chord
        Unified chord representation.

    Raises
    ------
    ValueError
        If pychord cannot parse the symbol or the quality has no Harte
        equivalent.

    Examples
    --------
    >>> from_pychord("Gm7").quality
    'min7'
    """
    from pychord import Chord as PyChord

    pc = PyChord(chord_str)
    quality_name = str(pc.quality)
    if quality_name not in PYCHORD_TO_HARTE_QUALITY:
        msg = f"Unknown pychord quality: {quality_name}"
        raise ValueError(msg)

    return Chord(
        root=pc.root,
        quality=PYCHORD_TO_HARTE_QUALITY[quality_name],
        bass=pc.on if pc.on else None,
    )


def canonicalize(chord_str: str) -> str | None:
    """Reduce a chord label to the ``root:baseQuality`` form.

    Service labels are parsed with the harte grammar; display symbols with
    pychord.

    Parameters
    ----------
    chord_str : str
        A service label ("C#:min7") or a display symbol ("C#m7").

    Returns
    -------
    str | None
        Canonical form (e.g., "C#:min"), or None for "N", empty input and
        symbols that cannot be parsed.

    Examples
    --------
    >>> canonicalize("C#:min7")
    'C#:min'
    >>> canonicalize("B:7")
    'B:maj'
    >>> canonicalize("N") is None
    True
    """
    if not chord_str or chord_str == NO_CHORD_LABEL:
        return None

    try:
        chord = from_harte(chord_str) if ":" in chord_str else from_pychord(chord_str)
    except ValueError:
        return None

    return f"{chord.root}:{chord.base_quality}"
