"""
Tests for request_builder.py

Verify that call descriptors are turned into well formed requests: the url is built from the
configured API root, query values are percent-encoded and the credential only ever travels in
the Authorization header.

*** Fixtures ***
- credential, config (defined in conftest.py)
"""

from urllib.parse import parse_qs, urlsplit

import pytest

from splashy.config import SplashyConfig
from splashy.errors import InvalidParameter
from splashy.models import Order
from splashy.request_builder import (
    CallDescriptor,
    Credential,
    build_request,
    encode_query,
    encode_value,
)
from splashy.conftest import ACCESS_KEY


@pytest.mark.parametrize(
    "descriptor",
    [
        CallDescriptor("GET", "photos"),
        CallDescriptor("GET", "photos", {"page": 2, "per_page": 30, "order_by": Order.POPULAR}),
        CallDescriptor("GET", "search/photos", {"query": ACCESS_KEY}),
        CallDescriptor("PUT", "me", body={"bio": "hello"}),
        CallDescriptor("GET", "https://api.unsplash.com/photos/abc/download?ixid=xyz"),
    ],
)
def test_credential_only_in_header(descriptor, credential, config):
    """
    Exactly one Authorization header carries the credential, and the secret is never part of the
    url. Searching for the secret itself proves the check isn't just looking at the path.
    """

    request = build_request(descriptor, credential, config)

    auth_headers = [name for name in request.headers if name.lower() == "authorization"]
    assert len(auth_headers) == 1
    assert request.headers["Authorization"] == f"Client-ID {ACCESS_KEY}"

    if descriptor.params.get("query") != ACCESS_KEY:
        assert ACCESS_KEY not in request.url


def test_bearer_credential_header(config):
    request = build_request(CallDescriptor("GET", "me"), Credential.bearer("tok"), config)

    assert request.headers["Authorization"] == "Bearer tok"


def test_standard_headers(credential, config):
    request = build_request(CallDescriptor("GET", "photos"), credential, config)

    assert request.headers["Accept"] == "application/json"
    assert request.headers["Accept-Version"] == "v1"
    assert request.headers["User-Agent"].startswith("splashy/")


def test_url_from_api_root(credential, config):
    request = build_request(CallDescriptor("GET", "photos/random"), credential, config)

    assert request.url == "https://api.unsplash.com/photos/random"
    assert request.method == "GET"


@pytest.mark.parametrize(
    "value",
    [
        "new york city",
        "cats & dogs",
        "100% pure",
        "a=b;c/d?e#f",
        "café, naïve",
        "plus+sign",
    ],
)
def test_query_percent_encoding_round_trip(value, credential, config):
    request = build_request(CallDescriptor("GET", "search/photos", {"query": value}), credential, config)

    query = urlsplit(request.url).query
    assert " " not in query
    assert parse_qs(query)["query"] == [value]


def test_query_order_preserved_and_none_dropped():
    query = encode_query({"b": 1, "a": None, "c": "x", "featured": True})

    assert query == "b=1&c=x&featured=true"


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, "true"),
        (False, "false"),
        (Order.LATEST, "latest"),
        (("abc", "def"), "abc,def"),
        (7, "7"),
    ],
)
def test_encode_value(value, expected):
    assert encode_value(value) == expected


def test_json_body(credential, config):
    request = build_request(CallDescriptor("PUT", "me", body={"bio": "hi"}), credential, config)

    assert request.method == "PUT"
    assert request.headers["Content-Type"] == "application/json"
    assert b'"bio"' in request.body


def test_absolute_url_keeps_existing_query(credential, config):
    descriptor = CallDescriptor(
        "GET", "https://api.unsplash.com/photos/abc/download?ixid=xyz", {"extra": "1"}
    )
    request = build_request(descriptor, credential, config)

    assert parse_qs(urlsplit(request.url).query) == {"ixid": ["xyz"], "extra": ["1"]}


@pytest.mark.parametrize(
    "path",
    [
        "https://evil.example.com/steal",
        "http://api.unsplash.com/photos",
        "",
        "   ",
    ],
)
def test_invalid_paths_rejected(path, credential, config):
    with pytest.raises(InvalidParameter):
        build_request(CallDescriptor("GET", path), credential, config)


def test_custom_api_root(credential):
    config = SplashyConfig(api_url="https://unsplash.test/v1")
    request = build_request(CallDescriptor("GET", "photos"), credential, config)

    assert request.url == "https://unsplash.test/v1/photos"


@pytest.mark.parametrize("secret", ["", "   ", None])
def test_empty_credential_rejected(secret):
    with pytest.raises(InvalidParameter):
        Credential.access_key(secret)


def test_credential_unknown_scheme():
    with pytest.raises(InvalidParameter):
        Credential("secret", scheme="Basic")


def test_credential_repr_hides_secret(credential):
    assert ACCESS_KEY not in repr(credential)


@pytest.mark.parametrize("secret", ["abc\ndef", "abc\r\nX-Injected: 1", "ab cd", "café", "abc\x00", "ke\ty"])
def test_credential_rejects_characters_illegal_in_header(secret):
    with pytest.raises(InvalidParameter):
        Credential.access_key(secret)


@pytest.mark.parametrize("path", ["https://[api.unsplash.com/photos", "http://[::1/photos"])
def test_unparseable_path_rejected(path, credential, config):
    with pytest.raises(InvalidParameter):
        build_request(CallDescriptor("GET", path), credential, config)


def test_unsendable_header_rejected(credential):
    config = SplashyConfig(user_agent="splashy\r\nX-Injected: 1")

    with pytest.raises(InvalidParameter):
        build_request(CallDescriptor("GET", "photos"), credential, config)
