"""
Unsplash Models

Typed, immutable records for every payload splashy decodes. Each record has a from_json
classmethod that accepts the already-parsed JSON object and raises DecodeError if a field Unsplash
guarantees is missing or has the wrong type. Optional fields (Unsplash sends null or omits them)
default to None.

Field names follow the Unsplash API documentation (https://unsplash.com/documentation) except for
"self" links, which are exposed as self_link.
"""

from dataclasses import dataclass, fields
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from splashy.errors import DecodeError, InvalidParameter

T = TypeVar("T")


class Order(Enum):
    """Ordering of photo listings. Unsplash defaults to LATEST."""

    LATEST = "latest"
    OLDEST = "oldest"
    POPULAR = "popular"
    RELEVANT = "relevant"  # search only


class Orientation(Enum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    SQUARISH = "squarish"


def coerce_enum(enum_type, value, name: str):
    """
    Accept an enum member or its string value (case insensitive) and return the member. Raise
    InvalidParameter for anything else.
    """

    if value is None or isinstance(value, enum_type):
        return value

    try:
        return enum_type(str(value).lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise InvalidParameter(f"{name} must be one of: {allowed} (got '{value}').") from None


"""
Decoding helpers
"""


def _require(data: dict, key: str, kind):
    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}")

    if key not in data or data[key] is None:
        raise DecodeError(f"missing required field '{key}'")

    value = data[key]

    # bool is a subclass of int, which is never what a count or id field means
    wants_int = kind is int or (isinstance(kind, tuple) and int in kind)
    if (wants_int and isinstance(value, bool)) or not isinstance(value, kind):
        raise DecodeError(
            f"field '{key}' has the wrong type ({type(value).__name__}: {value!r})"
        )

    return value


def _optional(data: dict, key: str, kind):
    if isinstance(data, dict) and data.get(key) is None:
        return None
    return _require(data, key, kind)


def _timestamp(data: dict, key: str, required: bool = True) -> Optional[datetime]:
    raw = _require(data, key, str) if required else _optional(data, key, str)
    if raw is None:
        return None

    try:
        # fromisoformat only learned to read a trailing 'Z' in 3.11
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as error:
        raise DecodeError(f"field '{key}' is not an ISO-8601 timestamp: {raw}") from error


def _nested(data: dict, key: str, model):
    return model.from_json(_require(data, key, dict))


@dataclass(frozen=True)
class ProfileImages:
    small: str
    medium: str
    large: str

    @classmethod
    def from_json(cls, data: dict) -> "ProfileImages":
        return cls(**{f.name: _require(data, f.name, str) for f in fields(cls)})


@dataclass(frozen=True)
class UserLinks:
    self_link: str
    html: str
    photos: str
    likes: str
    portfolio: str

    @classmethod
    def from_json(cls, data: dict) -> "UserLinks":
        return cls(
            self_link=_require(data, "self", str),
            html=_require(data, "html", str),
            photos=_require(data, "photos", str),
            likes=_require(data, "likes", str),
            portfolio=_require(data, "portfolio", str),
        )


@dataclass(frozen=True)
class User:
    """A user on Unsplash. email is only present when reading the current user via /me."""

    id: str
    username: str
    name: str
    total_likes: int
    total_photos: int
    total_collections: int
    profile_image: ProfileImages
    links: UserLinks
    portfolio_url: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    location: Optional[str] = None
    instagram_username: Optional[str] = None
    twitter_username: Optional[str] = None
    updated_at: Optional[datetime] = None
    followed_by_user: Optional[bool] = None

    @classmethod
    def from_json(cls, data: dict) -> "User":
        return cls(
            id=_require(data, "id", str),
            username=_require(data, "username", str),
            name=_require(data, "name", str),
            total_likes=_require(data, "total_likes", int),
            total_photos=_require(data, "total_photos", int),
            total_collections=_require(data, "total_collections", int),
            profile_image=_nested(data, "profile_image", ProfileImages),
            links=_nested(data, "links", UserLinks),
            portfolio_url=_optional(data, "portfolio_url", str),
            email=_optional(data, "email", str),
            bio=_optional(data, "bio", str),
            location=_optional(data, "location", str),
            instagram_username=_optional(data, "instagram_username", str),
            twitter_username=_optional(data, "twitter_username", str),
            updated_at=_timestamp(data, "updated_at", required=False),
            followed_by_user=_optional(data, "followed_by_user", bool),
        )


@dataclass(frozen=True)
class Urls:
    """Links to the image file itself in various sizes."""

    raw: str
    full: str
    regular: str
    small: str
    thumb: str

    @classmethod
    def from_json(cls, data: dict) -> "Urls":
        return cls(**{f.name: _require(data, f.name, str) for f in fields(cls)})


@dataclass(frozen=True)
class PhotoLinks:
    self_link: str
    html: str
    download: str
    download_location: str

    @classmethod
    def from_json(cls, data: dict) -> "PhotoLinks":
        return cls(
            self_link=_require(data, "self", str),
            html=_require(data, "html", str),
            download=_require(data, "download", str),
            download_location=_require(data, "download_location", str),
        )


@dataclass(frozen=True)
class Collection:
    """Summary of a collection as embedded in a photo's current_user_collections."""

    id: str
    title: str
    published_at: datetime
    updated_at: datetime
    curated: bool

    @classmethod
    def from_json(cls, data: dict) -> "Collection":
        return cls(
            # older API responses used numeric ids
            id=str(_require(data, "id", (str, int))),
            title=_require(data, "title", str),
            published_at=_timestamp(data, "published_at"),
            updated_at=_timestamp(data, "updated_at"),
            curated=_require(data, "curated", bool),
        )


@dataclass(frozen=True)
class Photo:
    id: str
    created_at: datetime
    updated_at: datetime
    width: int
    height: int
    color: str
    likes: int
    liked_by_user: bool
    user: User
    urls: Urls
    links: PhotoLinks
    description: Optional[str] = None
    current_user_collections: tuple = ()

    @classmethod
    def from_json(cls, data: dict) -> "Photo":
        collections = _optional(data, "current_user_collections", list) or []

        return cls(
            id=_require(data, "id", str),
            created_at=_timestamp(data, "created_at"),
            updated_at=_timestamp(data, "updated_at"),
            width=_require(data, "width", int),
            height=_require(data, "height", int),
            color=_require(data, "color", str),
            likes=_require(data, "likes", int),
            liked_by_user=_require(data, "liked_by_user", bool),
            user=_nested(data, "user", User),
            urls=_nested(data, "urls", Urls),
            links=_nested(data, "links", PhotoLinks),
            description=_optional(data, "description", str),
            current_user_collections=tuple(Collection.from_json(c) for c in collections),
        )


@dataclass(frozen=True)
class DownloadLink:
    """
    Url returned by a photo's download endpoint. Unsplash asks API users to fetch images from this
    url (and not from Photo.urls) when a photo is downloaded, so the download is counted.
    """

    url: str

    @classmethod
    def from_json(cls, data: dict) -> "DownloadLink":
        return cls(url=_require(data, "url", str))

    def __str__(self):
        return self.url


@dataclass(frozen=True)
class Page(Generic[T]):
    """
    One page of a paginated listing. next_page is the cursor for the following page and is None
    on the last one. total and total_pages are filled in when Unsplash reports them.
    """

    items: tuple
    page: int = 1
    next_page: Optional[int] = None
    total: Optional[int] = None
    total_pages: Optional[int] = None

    def __iter__(self):
        return iter(self.items)

    def __len__(self):
        return len(self.items)

    @property
    def has_next(self) -> bool:
        return self.next_page is not None


def list_of(model: Callable[[Any], T]) -> Callable[[Any], list]:
    """Return a decoder for a JSON array of model."""

    def decode(data) -> list:
        if not isinstance(data, list):
            raise DecodeError(f"expected a JSON array, got {type(data).__name__}")
        return [model(item) for item in data]

    return decode


@dataclass(frozen=True)
class UserUpdate:
    """
    Fields to change on the current user's profile. Only fields that are set are sent; at least
    one must be.
    """

    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    url: Optional[str] = None
    location: Optional[str] = None
    bio: Optional[str] = None
    instagram_username: Optional[str] = None

    def to_json(self) -> dict:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return {name: value for name, value in values.items() if value is not None}
