"""Exception and warning types raised by the extraction pipeline."""

from __future__ import annotations


class ChordGridError(Exception):
    """Base class for all chord-grid errors."""


class PipelineError(ChordGridError):
    """A fatal error that aborts song extraction. No partial result exists."""


class ServiceError(PipelineError):
    """The audio-analysis service rejected a request or reported failure.

    Parameters
    ----------
    message : str
        Human-readable description, including the upstream status/body.
    status_code : int | None
        HTTP status of the failed response, when one was received.
    body : str | None
        Raw response body, when one was received.
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ServiceTimeoutError(ServiceError):
    """A request to the audio-analysis service timed out."""


class MalformedPayloadError(PipelineError, ValueError):
    """A service payload is missing required data or is not valid JSON."""


class DegradedInputWarning(UserWarning):
    """Input was unusable and a documented fallback value was applied."""
