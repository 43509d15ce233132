"""
splashy Errors

Every failure splashy can report is one of the exceptions defined here. Modules raise these
directly (or convert a third-party exception into one of them at the point it is first seen) and
the client catches SplashyError at its boundary to wrap the failure in an ApiResponse.

Nothing in splashy retries on your behalf. A TransportError, for example, is handed straight
back to the caller who can decide whether a second attempt makes sense.
"""


class SplashyError(Exception):
    """Base class for all errors raised by splashy."""

    pass


class SplashyConfigError(SplashyError):
    """Raise when an issue occurs with loading splashy configuration."""

    pass


class InvalidParameter(SplashyError):
    """
    Raised when the caller supplies a malformed or missing value for an operation, e.g. an empty
    search query. Always raised before any request is sent.
    """

    pass


class TransportError(SplashyError):
    """
    Raised when a request could not be exchanged with the server at all (DNS failure, refused
    connection, timeout...). Wraps the underlying requests exception as __cause__.
    """

    pass


class DecodeError(SplashyError):
    """
    Raised when a response body is not JSON or does not have the shape expected for the
    operation. The raw body is kept for diagnostics.
    """

    def __init__(self, message: str, raw: bytes = b""):
        super().__init__(message)
        self.raw = raw


class ApiError(SplashyError):
    """
    Raised when Unsplash rejects a request at the application level. Carries the HTTP status and
    the message supplied by Unsplash. If the error body could not be understood the message is
    the raw body text.
    """

    def __init__(self, status: int, message: str, raw: bytes = b""):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message
        self.raw = raw

    def __eq__(self, other):
        if not isinstance(other, ApiError):
            return NotImplemented
        return (type(self), self.status, self.message) == (
            type(other),
            other.status,
            other.message,
        )

    def __hash__(self):
        return hash((type(self), self.status, self.message))


class Unauthorized(ApiError):
    """401 - the credential is missing, malformed or revoked."""

    pass


class Forbidden(ApiError):
    """403 - the credential is valid but lacks permission (or the rate limit was exceeded)."""

    pass
