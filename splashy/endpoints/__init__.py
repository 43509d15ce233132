"""
Unsplash API - Call Descriptor Builders

Each supported Unsplash operation is a plain function that takes typed arguments and returns a
CallDescriptor. The functions themselves only decide which query parameters (or body fields) to
send. The decorators below take care of the rest:

- @endpoint injects the HTTP method and path, filling {placeholders} in the path from the
  function's own arguments (percent-encoded)
- @required rejects empty string arguments
- @paginated checks page and per_page

All validation happens here, before a request exists, so a bad argument is reported as
InvalidParameter without anything being sent.

    @endpoint("GET", "photos/{photo_id}")
    @required("photo_id")
    def get_photo(photo_id: str) -> dict:
        return {}
"""

from functools import wraps
from inspect import signature
from urllib.parse import quote

from splashy.errors import InvalidParameter
from splashy.request_builder import CallDescriptor

MAX_PER_PAGE = 30


def check_range(name: str, value, low: int, high: int = None):
    """Raise InvalidParameter unless value is an int within [low, high]."""

    if value is None:
        return

    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameter(f"{name} must be an integer, got {value!r}.")

    if value < low or (high is not None and value > high):
        bounds = f"between {low} and {high}" if high is not None else f"at least {low}"
        raise InvalidParameter(f"{name} must be {bounds}, got {value}.")


def endpoint(method: str, path: str):
    """
    Use this decorator to turn a function returning query parameters (or, for methods other than
    GET, body fields) into one returning a CallDescriptor for the given method and path.
    """

    def wrapper(func):
        @wraps(func)
        def inner(*args, **kwargs):
            arguments = signature(func).bind(*args, **kwargs)
            arguments.apply_defaults()

            fields = func(*args, **kwargs)

            resolved = path.format(
                **{name: quote(str(value), safe="") for name, value in arguments.arguments.items()}
            )

            if method == "GET":
                return CallDescriptor(method=method, path=resolved, params=fields)
            return CallDescriptor(method=method, path=resolved, body=fields)

        return inner

    return wrapper


def required(*names: str):
    """
    Use this decorator to reject calls where any of the named arguments is missing, not a string,
    or blank.
    """

    def wrapper(func):
        @wraps(func)
        def inner(*args, **kwargs):
            arguments = signature(func).bind(*args, **kwargs).arguments

            for name in names:
                value = arguments.get(name)
                if not isinstance(value, str) or not value.strip():
                    raise InvalidParameter(f"'{func.__name__}' requires a non-empty {name}.")

            return func(*args, **kwargs)

        return inner

    return wrapper


def paginated(func):
    """
    This decorator validates the page and per_page arguments of a listing. Pages start at 1 and
    Unsplash caps per_page at 30.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        arguments = signature(func).bind(*args, **kwargs)
        arguments.apply_defaults()

        check_range("page", arguments.arguments.get("page"), 1)
        check_range("per_page", arguments.arguments.get("per_page"), 1, MAX_PER_PAGE)

        return func(*args, **kwargs)

    return wrapper
