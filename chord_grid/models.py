"""Chord data model for chord-grid.

This module provides a common representation for a single chord that can
be rendered both in the analysis service's Harte-style notation
(e.g., "G:min7") and in chart display notation (e.g., "Gm7").
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Chord:
    """Unified chord representation.

    Parameters
    ----------
    root : str
        The root note of the chord (e.g., "C", "F#", "Bb").
    quality : str
        The chord quality in Harte notation (e.g., "maj", "min7", "dim").
    bass : str | None
        The bass part of a slash chord, kept verbatim (e.g., "E" or "3").

    Examples
    --------
    >>> chord = Chord(root="G", quality="min7")
    >>> chord.to_harte()
    'G:min7'
    >>> chord.to_display()
    'Gm7'
    >>> chord.base_quality
    'min'
    """

    root: str
    quality: str
    bass: str | None = None

    def to_harte(self) -> str:
        """Convert to Harte notation string.

        Returns
        -------
        str
            Chord in Harte notation (e.g., "G:min7", "C:maj/3").
        """
        result = f"{self.root}:{self.quality}"
        if self.bass:
            result = f"{result}/{self.bass}"
        return result

    def to_display(self) -> str:
        """Convert to chart display notation.

        Returns
        -------
        str
            Chord in display notation (e.g., "Gm7", "B°", "C/E").
        """
        from chord_grid.converter import normalize

        return normalize(self.to_harte())

    @property
    def base_quality(self) -> str:
        """The quality reduced to maj, min, dim or aug where possible."""
        from chord_grid.converter import base_quality

        return base_quality(self.quality)

    def __str__(self) -> str:
        """Return Harte notation as default string representation."""
        return self.to_harte()
