"""
Transport

The only part of splashy that touches the network. A Transport is anything with a
send(request) method that takes a requests.PreparedRequest and returns a RawResponse, raising
TransportError if no response could be obtained. The client never looks past this interface, so
tests (or applications wanting retries, caching, a proxy...) can inject their own.

RequestsTransport is the default and is a thin wrapper around a requests.Session.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol

import requests
from requests.structures import CaseInsensitiveDict

from splashy.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """Status code, headers and undecoded body of one HTTP response."""

    status: int
    headers: Mapping[str, str] = field(default_factory=CaseInsensitiveDict)
    body: bytes = b""

    def __post_init__(self):
        # header lookups are case insensitive whatever mapping was passed in
        if not isinstance(self.headers, CaseInsensitiveDict):
            object.__setattr__(self, "headers", CaseInsensitiveDict(self.headers))

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300


class Transport(Protocol):
    def send(self, request: requests.PreparedRequest) -> RawResponse:
        ...


class RequestsTransport:
    """
    Send requests with a requests.Session. The session is created on demand unless one is passed
    in, and is only closed by close() if this transport created it.
    """

    def __init__(self, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def send(self, request: requests.PreparedRequest) -> RawResponse:
        try:
            r = self.session.send(request, timeout=self.timeout)

        except requests.exceptions.RequestException as error:
            logger.debug("transport failure for %s %s: %s", request.method, request.url, error)
            raise TransportError(
                f"something went wrong trying to reach {request.url}: {error}"
            ) from error

        logger.debug("%s %s -> %s", request.method, request.url, r.status_code)
        return RawResponse(status=r.status_code, headers=r.headers, body=r.content)

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
