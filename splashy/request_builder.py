"""
Request Builder

Turn a CallDescriptor (what to call) and a Credential (who is calling) into a fully formed
requests.PreparedRequest that any Transport can send.

Two rules are enforced here for every request regardless of the endpoint:

- query values are percent-encoded (RFC 3986, so a space becomes %20 and not '+')
- the credential travels only in the Authorization header. It never appears in the url, where
  it would end up in server logs and proxy caches. For the same reason a request is refused if
  its url points anywhere other than the configured API host.

Endpoint specific validation (empty search queries, page numbers...) happens earlier, when the
descriptor is created. See splashy.endpoints.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional
from urllib.parse import quote, urlencode, urljoin, urlsplit, urlunsplit

import requests

from splashy.config import SplashyConfig
from splashy.errors import InvalidParameter

logger = logging.getLogger(__name__)

CLIENT_ID = "Client-ID"
BEARER = "Bearer"


@dataclass(frozen=True)
class Credential:
    """
    Opaque secret attached to every request made by a client. Unsplash accepts an application
    access key ("Client-ID" scheme) for public actions, and a user's OAuth token ("Bearer" scheme)
    for actions on behalf of that user such as /me.

    The secret is left out of repr() so a Credential can be logged or shown in a traceback
    without leaking it.
    """

    secret: str = field(repr=False)
    scheme: str = CLIENT_ID

    def __post_init__(self):
        if not isinstance(self.secret, str) or not self.secret.strip():
            raise InvalidParameter("credential secret must be a non-empty string.")

        # the secret goes verbatim into a header value: visible ascii only
        if not all("!" <= char <= "~" for char in self.secret.strip()):
            raise InvalidParameter(
                "credential secret may only contain printable ascii characters without whitespace."
            )

        if self.scheme not in (CLIENT_ID, BEARER):
            raise InvalidParameter(
                f"credential scheme must be '{CLIENT_ID}' or '{BEARER}', got '{self.scheme}'."
            )

    @classmethod
    def access_key(cls, key: str) -> "Credential":
        return cls(secret=key, scheme=CLIENT_ID)

    @classmethod
    def bearer(cls, token: str) -> "Credential":
        return cls(secret=token, scheme=BEARER)

    @property
    def header(self) -> str:
        """Value of the Authorization header."""

        return f"{self.scheme} {self.secret.strip()}"


@dataclass(frozen=True)
class CallDescriptor:
    """
    In-memory description of one API operation: method, path relative to the API root, ordered
    query parameters and an optional JSON body. Parameters set to None are left out of the query
    string entirely.
    """

    method: str
    path: str
    params: Mapping[str, Any] = field(default_factory=dict)
    body: Optional[Mapping[str, Any]] = None


def encode_value(value) -> str:
    """
    Convert a single query parameter value to the string form Unsplash expects. Booleans are
    lowercase, enums use their value and sequences become a comma separated list.
    """

    if isinstance(value, bool):
        return "true" if value else "false"

    if isinstance(value, Enum):
        return str(value.value)

    if isinstance(value, (list, tuple)):
        return ",".join(encode_value(item) for item in value)

    return str(value)


def encode_query(params: Mapping[str, Any]) -> str:
    """
    Build a percent-encoded query string (without leading '?') preserving parameter order.
    """

    pairs = [(name, encode_value(value)) for name, value in params.items() if value is not None]

    # quote (not quote_plus) with nothing marked safe, so every reserved character is escaped
    return urlencode(pairs, quote_via=quote)


def resolve_url(descriptor: CallDescriptor, config: SplashyConfig) -> str:
    """
    Join the descriptor path onto the API root and append the query string. A path may also be
    an absolute url (Unsplash hands out absolute links such as a photo's download_location) as
    long as it points at the API host. Any query already present on such a url is kept.
    """

    if not descriptor.path or not descriptor.path.strip():
        raise InvalidParameter("call descriptor has an empty path.")

    try:
        # absolute urls pass through urljoin untouched
        url = urljoin(config.api_url, descriptor.path.lstrip("/"))
        parts = urlsplit(url)
    except ValueError as error:
        raise InvalidParameter(f"call descriptor path is not a valid url: {error}") from error

    if parts.netloc != config.api_host or parts.scheme != urlsplit(config.api_url).scheme:
        raise InvalidParameter(
            f"refusing to send credentials to '{parts.scheme}://{parts.netloc}', expected {config.api_url}"
        )

    query = "&".join(q for q in (parts.query, encode_query(descriptor.params)) if q)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))


def build_request(
    descriptor: CallDescriptor, credential: Credential, config: SplashyConfig
) -> requests.PreparedRequest:
    """
    Produce the outbound request for descriptor. Raises InvalidParameter if the descriptor can not
    be turned into a request for the configured API.
    """

    url = resolve_url(descriptor, config)

    headers = {
        "Accept": "application/json",
        "Accept-Version": "v1",
        "User-Agent": config.user_agent,
        "Authorization": credential.header,
    }

    request = requests.Request(
        method=descriptor.method.upper(),
        url=url,
        headers=headers,
        json=dict(descriptor.body) if descriptor.body is not None else None,
    )

    try:
        prepared = request.prepare()
    except (requests.exceptions.InvalidHeader, requests.exceptions.InvalidURL) as error:
        raise InvalidParameter(f"request could not be built: {error}") from error

    logger.debug("built request %s %s", prepared.method, prepared.url)
    return prepared
