"""
Unsplash API Client

UnsplashClient glues the pieces together: an endpoint function describes the call, the request
builder attaches the credential, the transport sends it and the response decoder turns the answer
into a typed value. Every public method returns an ApiResponse and never raises a SplashyError;
failures are reported in ApiResponse.error instead.

    >>> from splashy import Credential, UnsplashClient
    >>> with UnsplashClient(Credential.access_key("my-access-key")) as client:
    ...     page = client.search_photos("tokyo", per_page=5).unwrap()
    ...     for photo in page:
    ...         print(photo.urls.regular)

The client holds no mutable state of its own. The credential and config are immutable, so one
client can be shared between threads as long as its transport can.
"""

import logging
from typing import Callable, Optional, Sequence, Union

from splashy.config import SplashyConfig, load_config
from splashy.endpoints import me as me_endpoints
from splashy.endpoints import photos, search
from splashy.errors import SplashyConfigError, SplashyError
from splashy.models import (
    DownloadLink,
    Order,
    Orientation,
    Page,
    Photo,
    User,
    UserUpdate,
    list_of,
)
from splashy.request_builder import CallDescriptor, Credential, build_request
from splashy.response_decoder import ApiResponse, decode, decode_page
from splashy.transport import RawResponse, RequestsTransport, Transport

logger = logging.getLogger(__name__)


class UnsplashClient:
    """
    Typed access to the Unsplash API for a single credential. A transport may be injected; by
    default a RequestsTransport is created (and closed again by close()).
    """

    def __init__(
        self,
        credential: Credential,
        transport: Optional[Transport] = None,
        config: Optional[SplashyConfig] = None,
    ):
        if not isinstance(credential, Credential):
            raise TypeError(f"credential must be a Credential, got {type(credential).__name__}")

        self.credential = credential
        self.config = config if config is not None else SplashyConfig()
        self._owns_transport = transport is None
        self.transport = (
            transport if transport is not None else RequestsTransport(timeout=self.config.timeout)
        )

    @classmethod
    def from_env(cls, transport: Optional[Transport] = None) -> "UnsplashClient":
        """
        Build a client from UNSPLASH_ACCESS_KEY and the other SPLASHY_* variables (a .env file is
        read too). Raises SplashyConfigError if no access key is configured.
        """

        config = load_config()
        if not config.access_key:
            raise SplashyConfigError("UNSPLASH_ACCESS_KEY is not set.")

        return cls(Credential.access_key(config.access_key), transport=transport, config=config)

    def __repr__(self):
        return f"{type(self).__name__}(credential={self.credential!r}, api_url='{self.config.api_url}')"

    """
    Plumbing
    """

    def _exchange(self, descriptor: CallDescriptor) -> RawResponse:
        request = build_request(descriptor, self.credential, self.config)
        return self.transport.send(request)

    def _call(self, describe: Callable[[], CallDescriptor], handle: Callable[[RawResponse], object]):
        """
        Run one operation: describe() builds (and validates) the descriptor, the request is sent
        exactly once and handle() decodes the raw response. Any SplashyError along the way ends up
        in the returned ApiResponse.
        """

        try:
            descriptor = describe()
            raw = self._exchange(descriptor)
            return ApiResponse.success(handle(raw))

        except SplashyError as error:
            logger.debug("call failed: %s: %s", type(error).__name__, error)
            return ApiResponse.failure(error)

    """
    Photos
    """

    def list_photos(
        self, page: int = 1, per_page: int = 10, order_by: Union[Order, str] = None
    ) -> ApiResponse[Page]:
        """One page of all photos. Follow page.next_page to walk the listing."""

        return self._call(
            lambda: photos.list_photos(page=page, per_page=per_page, order_by=order_by),
            lambda raw: decode_page(raw, Photo.from_json, page=page),
        )

    def get_photo(self, photo_id: str) -> ApiResponse[Photo]:
        return self._call(
            lambda: photos.get_photo(photo_id),
            lambda raw: decode(raw, Photo.from_json),
        )

    def random_photo(
        self,
        featured: bool = None,
        username: str = None,
        query: str = None,
        collections: Union[str, Sequence[str]] = None,
        orientation: Union[Orientation, str] = None,
        width: int = None,
        height: int = None,
    ) -> ApiResponse[Photo]:
        """A single random photo. query and collections can not be combined."""

        return self._call(
            lambda: photos.random_photo(
                featured=featured,
                username=username,
                query=query,
                collections=collections,
                orientation=orientation,
                width=width,
                height=height,
            ),
            lambda raw: decode(raw, Photo.from_json),
        )

    def random_photos(
        self,
        count: int,
        featured: bool = None,
        username: str = None,
        query: str = None,
        collections: Union[str, Sequence[str]] = None,
        orientation: Union[Orientation, str] = None,
        width: int = None,
        height: int = None,
    ) -> ApiResponse[list]:
        """Between 1 and 30 random photos, with the same filters as random_photo."""

        return self._call(
            lambda: photos.random_photos(
                count,
                featured=featured,
                username=username,
                query=query,
                collections=collections,
                orientation=orientation,
                width=width,
                height=height,
            ),
            lambda raw: decode(raw, list_of(Photo.from_json)),
        )

    def photo_download_link(self, photo: Photo) -> ApiResponse[DownloadLink]:
        """
        Register a download of photo with Unsplash and return the url to fetch the image from.
        Unsplash's API guidelines require this whenever an application downloads a photo.
        """

        return self._call(
            lambda: photos.photo_download(photo),
            lambda raw: decode(raw, DownloadLink.from_json),
        )

    """
    Search
    """

    def search_photos(
        self,
        query: str,
        page: int = 1,
        per_page: int = 10,
        order_by: Union[Order, str] = None,
        orientation: Union[Orientation, str] = None,
        collections: Union[str, Sequence[str]] = None,
    ) -> ApiResponse[Page]:
        return self._call(
            lambda: search.search_photos(
                query,
                page=page,
                per_page=per_page,
                order_by=order_by,
                orientation=orientation,
                collections=collections,
            ),
            lambda raw: decode_page(raw, Photo.from_json, page=page, results_key="results"),
        )

    """
    Current user (requires a Bearer credential)
    """

    def me(self) -> ApiResponse[User]:
        return self._call(me_endpoints.me, lambda raw: decode(raw, User.from_json))

    def update_me(self, update: UserUpdate) -> ApiResponse[User]:
        return self._call(
            lambda: me_endpoints.update_me(update),
            lambda raw: decode(raw, User.from_json),
        )

    """
    Resources
    """

    def close(self):
        if self._owns_transport:
            self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
