"""
conftest.py

Test configuration for splashy tests.

Defines Pytest fixtures for supplying test data to tests across the entire test suite. Fixtures
used within only a single module are defined directly in that module.

No test talks to the real Unsplash API. Client tests inject a RecordingTransport, a test double
that hands back canned RawResponses and remembers every request it was asked to send, so tests can
also check that *nothing* was sent.
"""

import json
from pathlib import Path

import pytest

from splashy.client import UnsplashClient
from splashy.config import SplashyConfig
from splashy.request_builder import Credential
from splashy.transport import RawResponse

TEST_DATA = Path(__file__).parent / "tests" / "test_data"

ACCESS_KEY = "test-access-key-0123456789"


def make_response(status: int = 200, payload=None, headers: dict = None, body: bytes = None):
    """Build a RawResponse with payload serialized as JSON (or body verbatim)."""

    if body is None:
        body = json.dumps(payload).encode("utf-8")
    return RawResponse(status=status, headers=headers or {}, body=body)


class RecordingTransport:
    """
    Transport test double. Replies with the queued responses in order (the last one repeats) and
    records every request it sends. A queued exception is raised instead of returned.
    """

    def __init__(self, *responses):
        self.responses = list(responses) or [make_response(200, {})]
        self.requests = []
        self.closed = False

    def send(self, request):
        self.requests.append(request)
        reply = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self):
        self.closed = True

    @property
    def invoked(self) -> bool:
        return bool(self.requests)


@pytest.fixture(scope="session")
def photo_json() -> dict:
    return json.loads((TEST_DATA / "photo.json").read_text())


@pytest.fixture(scope="session")
def user_json() -> dict:
    return json.loads((TEST_DATA / "user.json").read_text())


@pytest.fixture
def config() -> SplashyConfig:
    return SplashyConfig()


@pytest.fixture
def credential() -> Credential:
    return Credential.access_key(ACCESS_KEY)


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(credential, transport, config) -> UnsplashClient:
    """A client wired to the recording transport. Queue replies on client.transport.responses."""

    return UnsplashClient(credential, transport=transport, config=config)
