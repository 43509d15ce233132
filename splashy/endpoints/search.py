"""
Search endpoints

https://unsplash.com/documentation#search-photos
"""

from typing import Sequence, Union

from splashy.endpoints import endpoint, paginated, required
from splashy.endpoints.photos import collection_ids
from splashy.errors import InvalidParameter
from splashy.models import Order, Orientation, coerce_enum

SEARCH_ORDERS = (Order.RELEVANT, Order.LATEST)


@endpoint("GET", "search/photos")
@required("query")
@paginated
def search_photos(
    query: str,
    page: int = 1,
    per_page: int = 10,
    order_by: Union[Order, str] = None,
    orientation: Union[Orientation, str] = None,
    collections: Union[str, Sequence[str]] = None,
) -> dict:
    """
    A single page of photos matching query. Results are ordered by relevance unless order_by is
    Order.LATEST.
    """

    order_by = coerce_enum(Order, order_by, "order_by")
    if order_by is not None and order_by not in SEARCH_ORDERS:
        raise InvalidParameter(f"search results can not be ordered by '{order_by.value}'.")

    return {
        "query": query,
        "page": page,
        "per_page": per_page,
        "order_by": order_by,
        "orientation": coerce_enum(Orientation, orientation, "orientation"),
        "collections": collection_ids(collections),
    }
