"""
Tests for models.py

Decode the sample payloads from the Unsplash documentation (see test_data/) and check that
missing or mistyped fields are reported as DecodeError.
"""

from datetime import datetime, timedelta, timezone

import pytest

from splashy.errors import DecodeError, InvalidParameter
from splashy.models import (
    DownloadLink,
    Order,
    Orientation,
    Photo,
    User,
    UserUpdate,
    coerce_enum,
    list_of,
)


def test_photo_from_json(photo_json):
    photo = Photo.from_json(photo_json)

    assert photo.width == 2448
    assert photo.height == 3264
    assert photo.color == "#6E633A"
    assert photo.liked_by_user is False
    assert photo.description == "A man drinking a coffee."
    assert photo.created_at == datetime(2016, 5, 3, 11, 0, 28, tzinfo=timezone(timedelta(hours=-4)))
    assert photo.urls.raw.startswith("https://images.unsplash.com/")
    assert photo.links.self_link == "https://api.unsplash.com/photos/Dwu85P9SOIk"
    assert photo.user.username == "exampleuser"
    assert photo.user.email is None


def test_photo_collections(photo_json):
    photo = Photo.from_json(photo_json)

    assert len(photo.current_user_collections) == 1
    collection = photo.current_user_collections[0]
    assert collection.id == "206"
    assert collection.title == "Makers: Cat and Ben"
    assert collection.curated is False


@pytest.mark.parametrize("collection_id", [True, False, 2.5, None])
def test_collection_id_must_be_string_or_number(photo_json, collection_id):
    data = dict(photo_json)
    data["current_user_collections"] = [
        dict(photo_json["current_user_collections"][0], id=collection_id)
    ]

    with pytest.raises(DecodeError):
        Photo.from_json(data)


def test_collection_numeric_id(photo_json):
    data = dict(photo_json)
    data["current_user_collections"] = [dict(photo_json["current_user_collections"][0], id=206)]

    assert Photo.from_json(data).current_user_collections[0].id == "206"


def test_photo_without_collections(photo_json):
    data = {k: v for k, v in photo_json.items() if k != "current_user_collections"}

    assert Photo.from_json(data).current_user_collections == ()


def test_user_from_json(user_json):
    user = User.from_json(user_json)

    assert user.username == "jimmyexample"
    assert user.email == "jim@example.com"
    assert user.portfolio_url is None
    assert user.total_photos == 10
    assert user.followed_by_user is False
    assert user.links.self_link.endswith("/users/jimmyexample")
    assert user.profile_image.small.endswith("w=32")


@pytest.mark.parametrize("field", ["id", "username", "name", "total_likes", "profile_image", "links"])
def test_user_missing_required_field(user_json, field):
    data = dict(user_json)
    del data[field]

    with pytest.raises(DecodeError):
        User.from_json(data)


@pytest.mark.parametrize(
    "field, value",
    [
        ("width", "2448"),
        ("likes", True),
        ("liked_by_user", "no"),
        ("created_at", "yesterday"),
        ("urls", ["not", "an", "object"]),
        ("current_user_collections", {"id": 1}),
    ],
)
def test_photo_wrong_types(photo_json, field, value):
    data = dict(photo_json)
    data[field] = value

    with pytest.raises(DecodeError):
        Photo.from_json(data)


def test_photo_not_an_object():
    with pytest.raises(DecodeError):
        Photo.from_json(["Dwu85P9SOIk"])


def test_zulu_timestamps(photo_json):
    data = dict(photo_json, created_at="2021-01-01T00:00:00Z")

    assert Photo.from_json(data).created_at == datetime(2021, 1, 1, tzinfo=timezone.utc)


def test_download_link():
    link = DownloadLink.from_json({"url": "https://image.example/abc.jpg"})

    assert str(link) == "https://image.example/abc.jpg"


def test_list_of(photo_json):
    photos = list_of(Photo.from_json)([photo_json])

    assert [p.id for p in photos] == ["Dwu85P9SOIk"]

    with pytest.raises(DecodeError):
        list_of(Photo.from_json)(photo_json)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("latest", Order.LATEST),
        ("POPULAR", Order.POPULAR),
        (Order.OLDEST, Order.OLDEST),
        (None, None),
    ],
)
def test_coerce_enum(value, expected):
    assert coerce_enum(Order, value, "order_by") is expected


def test_coerce_enum_invalid():
    with pytest.raises(InvalidParameter):
        coerce_enum(Orientation, "diagonal", "orientation")


def test_user_update_to_json():
    update = UserUpdate(bio="new bio", location="Lisbon")

    assert update.to_json() == {"location": "Lisbon", "bio": "new bio"}
    assert UserUpdate().to_json() == {}
