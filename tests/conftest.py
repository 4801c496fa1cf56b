import json

import pytest


class FakeResponse:
    def __init__(self, status_code, text):
        self.status_code = status_code
        self.text = text


class FakeSession:
    """Stand-in for ``requests.Session`` that answers by endpoint path.

    ``responses`` maps a URL suffix to ``(status_code, body)``; dict bodies
    are sent as JSON, strings verbatim.
    """

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []
        self.closed = False

    def post(self, url, files=None, data=None, timeout=None):
        name, handle = files["file"]
        self.calls.append({"url": url, "file_name": name, "content": handle.read(), "data": data, "timeout": timeout})
        if self.error is not None:
            raise self.error
        for path, (status_code, body) in self.responses.items():
            if url.endswith(path):
                return FakeResponse(status_code, body if isinstance(body, str) else json.dumps(body))
        return FakeResponse(404, "not found")

    def close(self):
        self.closed = True

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()


@pytest.fixture
def fake_session():
    """Factory for fake HTTP sessions."""
    return FakeSession


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "my_song.mp3"
    path.write_bytes(b"ID3 fake audio")
    return path
