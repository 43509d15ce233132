"""
splashy - a typed client for the Unsplash API.
"""

__version__ = "0.1.0"

from splashy.console import enable_logging
from splashy.errors import (
    ApiError,
    DecodeError,
    Forbidden,
    InvalidParameter,
    SplashyConfigError,
    SplashyError,
    TransportError,
    Unauthorized,
)
from splashy.models import (
    Collection,
    DownloadLink,
    Order,
    Orientation,
    Page,
    Photo,
    User,
    UserUpdate,
)
from splashy.request_builder import CallDescriptor, Credential
from splashy.response_decoder import ApiResponse
from splashy.transport import RawResponse, RequestsTransport
from splashy.client import UnsplashClient
