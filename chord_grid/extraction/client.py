"""HTTP client for the chord recognition and beat detection service.

Both endpoints take the audio file as a multipart upload plus a ``model``
form field and answer with a JSON payload carrying a ``success`` flag.
The two requests are independent; ``AnalysisClient.analyze`` runs them
concurrently. Requests are never retried.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import requests

from chord_grid.config import ServiceConfig
from chord_grid.errors import ServiceError, ServiceTimeoutError
from chord_grid.extraction.payload import check_success, decode_json

logger = logging.getLogger(__name__)

CHORDS_ENDPOINT = "/api/recognize-chords"
BEATS_ENDPOINT = "/api/detect-beats"


class AnalysisClient:
    """Client for the audio-analysis service.

    Parameters
    ----------
    config : ServiceConfig | None
        Service URL, model names and timeout. Defaults to ``ServiceConfig()``.
    session : requests.Session | None
        Session shared by every request, including the two concurrent ones
        of ``analyze``, so it must be safe to use from two threads. When
        omitted, each request opens and closes its own ``requests.Session``.

    Examples
    --------
    >>> client = AnalysisClient(ServiceConfig(timeout=60))  # doctest: +SKIP
    >>> chord_payload, beat_payload = asyncio.run(client.analyze("song.mp3"))  # doctest: +SKIP
    """

    def __init__(self, config: ServiceConfig | None = None, session: requests.Session | None = None) -> None:
        self.config = config or ServiceConfig()
        self.session = session

    @contextmanager
    def _session(self) -> Iterator[requests.Session]:
        if self.session is not None:
            yield self.session
            return
        with requests.Session() as session:
            yield session

    def _upload(self, endpoint: str, audio_path: str | Path, model: str, what: str) -> dict[str, Any]:
        path = Path(audio_path)
        if not path.is_file():
            msg = f"Audio file not found: {path}"
            raise FileNotFoundError(msg)

        url = self.config.endpoint(endpoint)
        logger.info("Sending %s request for %s to %s (model %s)", what.lower(), path.name, url, model)
        with self._session() as session, path.open("rb") as audio:
            try:
                response = session.post(
                    url,
                    files={"file": (path.name, audio)},
                    data={"model": model},
                    timeout=self.config.timeout,
                )
            except requests.Timeout as exc:
                msg = f"{what} request timed out after {self.config.timeout}s"
                raise ServiceTimeoutError(msg) from exc
            except requests.RequestException as exc:
                msg = f"{what} request failed: {exc}"
                raise ServiceError(msg) from exc

        if response.status_code != 200:
            msg = f"{what} API failed: {response.status_code} - {response.text}"
            raise ServiceError(msg, status_code=response.status_code, body=response.text)

        data = check_success(decode_json(response.text, url), what)
        logger.debug("%s response keys: %s", what, sorted(data))
        return data

    def recognize_chords(self, audio_path: str | Path) -> dict[str, Any]:
        """Upload an audio file to the chord recognition endpoint.

        Returns
        -------
        dict[str, Any]
            The successful chord payload.

        Raises
        ------
        FileNotFoundError
            If the audio file does not exist.
        ServiceTimeoutError
            If the request times out.
        ServiceError
            On connection failure, a non-200 status or ``success: false``.
        MalformedPayloadError
            If the response is not valid JSON.
        """
        return self._upload(CHORDS_ENDPOINT, audio_path, self.config.chord_model, "Chord recognition")

    def detect_beats(self, audio_path: str | Path) -> dict[str, Any]:
        """Upload an audio file to the beat detection endpoint.

        Raises the same errors as ``recognize_chords``.
        """
        return self._upload(BEATS_ENDPOINT, audio_path, self.config.beat_model, "Beat detection")

    async def analyze(self, audio_path: str | Path) -> tuple[dict[str, Any], dict[str, Any]]:
        """Run chord recognition and beat detection concurrently.

        Both requests run to completion before any failure propagates, so
        the client can be closed as soon as this returns or raises.

        Returns
        -------
        tuple[dict[str, Any], dict[str, Any]]
            The chord payload and the beat payload.

        Raises
        ------
        FileNotFoundError
            If the audio file does not exist. Nothing is sent.
        PipelineError
            The chord request's failure when both fail, else the one that
            failed.
        """
        path = Path(audio_path)
        if not path.is_file():
            msg = f"Audio file not found: {path}"
            raise FileNotFoundError(msg)

        results = await asyncio.gather(
            asyncio.to_thread(self.recognize_chords, path),
            asyncio.to_thread(self.detect_beats, path),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        chord_payload, beat_payload = results
        return chord_payload, beat_payload

    def close(self) -> None:
        """Close the injected session, if any."""
        if self.session is not None:
            self.session.close()

    def __enter__(self) -> AnalysisClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
