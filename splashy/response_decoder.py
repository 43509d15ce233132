"""
Response Decoder

Turn a RawResponse into either a typed value or a typed error. The branch is taken on the status
code alone:

- 2xx: the JSON body is handed to the decoder for the expected type (see splashy.models). A body
  of the wrong shape raises DecodeError.
- anything else: the JSON body is read as an Unsplash error envelope and an ApiError is raised.
  Unsplash normally answers {"errors": ["..."]} but {"status": 404, "message": "..."} is also
  understood. If the envelope can't be made sense of, the raw body text becomes the message.

A body that is not JSON at all raises DecodeError whatever the status. Every error keeps the raw
body for diagnostics.

Decoding never touches the network or any shared state, so decoding the same response twice gives
equal results.
"""

import json
import logging
from dataclasses import dataclass
from math import ceil
from typing import Any, Callable, Generic, Optional, TypeVar
from urllib.parse import parse_qs, urlsplit

from requests.utils import parse_header_links

from splashy.errors import ApiError, DecodeError, Forbidden, SplashyError, Unauthorized
from splashy.models import Page, list_of
from splashy.transport import RawResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

ERRORS_BY_STATUS = {401: Unauthorized, 403: Forbidden}


@dataclass(frozen=True)
class ApiResponse(Generic[T]):
    """
    Result of one client call: exactly one of value or error is set. Use ok to tell which, or
    unwrap() to get the value and have the error raised instead.

        >>> response = client.random_photo(query="tokyo")
        >>> if response.ok:
        ...     print(response.value.urls.regular)
    """

    value: Optional[T] = None
    error: Optional[SplashyError] = None

    def __post_init__(self):
        if (self.value is None) == (self.error is None):
            raise ValueError("ApiResponse needs exactly one of value or error.")

    @classmethod
    def success(cls, value: T) -> "ApiResponse[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: SplashyError) -> "ApiResponse[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


def parse_json(raw: RawResponse) -> Any:
    try:
        return json.loads(raw.body)

    # JSONDecodeError and UnicodeDecodeError are both ValueErrors
    except ValueError as error:
        raise DecodeError(
            f"response (status {raw.status}) is not valid JSON: {error}", raw.body
        ) from error


def error_from(raw: RawResponse, payload: Any) -> ApiError:
    """
    Build the ApiError for an unsuccessful response whose body has already been parsed as JSON.
    """

    error_type = ERRORS_BY_STATUS.get(raw.status, ApiError)
    status, message = raw.status, None

    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors and all(isinstance(e, str) for e in errors):
            message = "\n".join(errors)

        elif isinstance(payload.get("message"), str):
            message = payload["message"]
            if isinstance(payload.get("status"), int) and not isinstance(payload["status"], bool):
                status = payload["status"]

    if message is None:
        logger.debug("unrecognized error envelope for status %s", raw.status)
        message = raw.body.decode("utf-8", errors="replace")

    return error_type(status, message, raw.body)


def decode(raw: RawResponse, decoder: Callable[[Any], T]) -> T:
    """
    Decode raw with decoder (e.g. Photo.from_json) or raise the appropriate SplashyError.
    """

    payload = parse_json(raw)

    if not raw.is_success:
        raise error_from(raw, payload)

    try:
        return decoder(payload)
    except DecodeError as error:
        raise DecodeError(
            f"response does not match the expected shape: {error}", raw.body
        ) from error


def next_page_from_link(link_header: Optional[str]) -> Optional[int]:
    """
    Read the page number of the rel="next" link from a Link header, e.g.

        <https://api.unsplash.com/photos?page=3>; rel="next", <...?page=1>; rel="first"
    """

    if not link_header:
        return None

    for link in parse_header_links(link_header):
        if link.get("rel") != "next":
            continue

        page = parse_qs(urlsplit(link.get("url", "")).query).get("page")
        if page:
            return _decimal(page[0])

    return None


def _decimal(value: Optional[str]) -> Optional[int]:
    """Parse a non-negative base 10 integer, or return None for anything else."""

    if value is None:
        return None

    value = value.strip()

    # isdigit alone also accepts characters like superscripts that int() refuses
    if value.isascii() and value.isdecimal():
        return int(value)
    return None


def _int_header(headers, name: str) -> Optional[int]:
    return _decimal(headers.get(name))


def decode_page(
    raw: RawResponse,
    decoder: Callable[[Any], T],
    page: int = 1,
    results_key: Optional[str] = None,
) -> Page:
    """
    Decode one page of a listing. Plain listings are a JSON array with totals in the X-Total and
    X-Per-Page headers. Search listings wrap the array in an object under results_key alongside
    total and total_pages.
    """

    def page_of(payload) -> Page:
        if results_key is None:
            items = list_of(decoder)(payload)
            total = _int_header(raw.headers, "X-Total")
            per_page = _int_header(raw.headers, "X-Per-Page")
            total_pages = ceil(total / per_page) if total is not None and per_page else None

        else:
            if not isinstance(payload, dict):
                raise DecodeError(f"expected a JSON object, got {type(payload).__name__}")
            items = list_of(decoder)(payload.get(results_key))
            total = payload.get("total") if isinstance(payload.get("total"), int) else None
            total_pages = (
                payload.get("total_pages") if isinstance(payload.get("total_pages"), int) else None
            )

        next_page = next_page_from_link(raw.headers.get("Link"))
        if next_page is None and total_pages is not None and page < total_pages:
            next_page = page + 1

        return Page(
            items=tuple(items),
            page=page,
            next_page=next_page,
            total=total,
            total_pages=total_pages,
        )

    return decode(raw, page_of)
