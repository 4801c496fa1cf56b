"""Configuration for the audio-analysis service client."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

DEFAULT_BASE_URL = "https://chordmini-backend-191567167632.us-central1.run.app"
DEFAULT_CHORD_MODEL = "chord-cnn-lstm"
DEFAULT_BEAT_MODEL = "auto"
DEFAULT_TIMEOUT = 120.0

ENV_PREFIX = "CHORD_GRID_"


@dataclass(frozen=True)
class ServiceConfig:
    """Connection settings for the chord recognition and beat detection API.

    Parameters
    ----------
    base_url : str
        Root URL of the service; endpoint paths are appended to it.
    chord_model : str
        Value of the ``model`` form field sent to the chord endpoint.
    beat_model : str
        Value of the ``model`` form field sent to the beat endpoint.
    timeout : float
        Per-request timeout in seconds.
    """

    base_url: str = DEFAULT_BASE_URL
    chord_model: str = DEFAULT_CHORD_MODEL
    beat_model: str = DEFAULT_BEAT_MODEL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if self.timeout <= 0:
            msg = f"timeout must be positive, got {self.timeout}"
            raise ValueError(msg)

    def endpoint(self, path: str) -> str:
        """Join ``path`` onto the base URL."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServiceConfig:
        """Build a config from ``CHORD_GRID_*`` environment variables.

        Recognized variables are ``CHORD_GRID_BASE_URL``,
        ``CHORD_GRID_CHORD_MODEL``, ``CHORD_GRID_BEAT_MODEL`` and
        ``CHORD_GRID_TIMEOUT``. Unset variables keep their defaults.

        Raises
        ------
        ValueError
            If ``CHORD_GRID_TIMEOUT`` is not a positive number.
        """
        env = os.environ if environ is None else environ
        timeout_raw = env.get(f"{ENV_PREFIX}TIMEOUT")
        return cls(
            base_url=env.get(f"{ENV_PREFIX}BASE_URL", DEFAULT_BASE_URL),
            chord_model=env.get(f"{ENV_PREFIX}CHORD_MODEL", DEFAULT_CHORD_MODEL),
            beat_model=env.get(f"{ENV_PREFIX}BEAT_MODEL", DEFAULT_BEAT_MODEL),
            timeout=float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT,
        )
