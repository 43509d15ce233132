"""
Photos endpoints

https://unsplash.com/documentation#photos
"""

from typing import Optional, Sequence, Union

from splashy.endpoints import MAX_PER_PAGE, check_range, endpoint, paginated, required
from splashy.errors import InvalidParameter
from splashy.models import Order, Orientation, Photo, coerce_enum
from splashy.request_builder import CallDescriptor

LIST_ORDERS = (Order.LATEST, Order.OLDEST, Order.POPULAR)


def collection_ids(collections) -> Optional[tuple]:
    """Accept a single collection id or a sequence of them. Returns None for no collections."""

    if collections is None:
        return None

    if isinstance(collections, (str, int)):
        collections = (collections,)

    ids = tuple(str(c).strip() for c in collections)
    if not ids or not all(ids):
        raise InvalidParameter("collections must not contain empty ids.")
    return ids


@endpoint("GET", "photos")
@paginated
def list_photos(
    page: int = 1, per_page: int = 10, order_by: Union[Order, str] = None
) -> dict:
    """
    A single page from the list of all photos, newest first unless order_by says otherwise.
    """

    order_by = coerce_enum(Order, order_by, "order_by")
    if order_by is not None and order_by not in LIST_ORDERS:
        raise InvalidParameter(f"photos can not be listed by '{order_by.value}'.")

    return {"page": page, "per_page": per_page, "order_by": order_by}


@endpoint("GET", "photos/{photo_id}")
@required("photo_id")
def get_photo(photo_id: str) -> dict:
    return {}


def _random_filters(
    featured: Optional[bool],
    username: Optional[str],
    query: Optional[str],
    collections,
    orientation,
    width: Optional[int],
    height: Optional[int],
) -> dict:
    """
    Validate the filters shared by random_photo and random_photos. Unsplash refuses a query and
    collections in the same request, so that combination is rejected up front.
    """

    if query is not None and not str(query).strip():
        raise InvalidParameter("query must not be empty when given.")

    if username is not None and not str(username).strip():
        raise InvalidParameter("username must not be empty when given.")

    collections = collection_ids(collections)
    if query is not None and collections is not None:
        raise InvalidParameter("a random photo can be filtered by query or collections, not both.")

    check_range("width", width, 1)
    check_range("height", height, 1)

    return {
        "featured": featured,
        "username": username,
        "query": query,
        "collections": collections,
        "orientation": coerce_enum(Orientation, orientation, "orientation"),
        "w": width,
        "h": height,
    }


@endpoint("GET", "photos/random")
def random_photo(
    featured: bool = None,
    username: str = None,
    query: str = None,
    collections: Union[str, Sequence[str]] = None,
    orientation: Union[Orientation, str] = None,
    width: int = None,
    height: int = None,
) -> dict:
    """
    A single random photo, optionally narrowed down by the given filters.
    """

    return _random_filters(featured, username, query, collections, orientation, width, height)


@endpoint("GET", "photos/random")
def random_photos(
    count: int,
    featured: bool = None,
    username: str = None,
    query: str = None,
    collections: Union[str, Sequence[str]] = None,
    orientation: Union[Orientation, str] = None,
    width: int = None,
    height: int = None,
) -> dict:
    """
    Between 1 and 30 random photos. Unsplash answers with a JSON array whenever count is sent,
    even for count=1.
    """

    if count is None:
        raise InvalidParameter("random_photos requires a count.")
    check_range("count", count, 1, MAX_PER_PAGE)

    params = _random_filters(featured, username, query, collections, orientation, width, height)
    params["count"] = count
    return params


def photo_download(photo: Photo) -> CallDescriptor:
    """
    Track a download of photo and get the url to fetch the image from. The endpoint lives at the
    absolute url Unsplash gave in the photo's links.download_location.
    """

    location = photo.links.download_location if isinstance(photo, Photo) else None
    if not location:
        raise InvalidParameter("photo_download requires a Photo with a download_location.")

    return CallDescriptor(method="GET", path=location)
