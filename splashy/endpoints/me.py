"""
Current user endpoints

Both operations act on the user who authorized the client, so the client must be built with a
Bearer credential (Credential.bearer). An access key gets a 401 from Unsplash.

https://unsplash.com/documentation#current-user
"""

from splashy.endpoints import endpoint
from splashy.errors import InvalidParameter
from splashy.models import UserUpdate


@endpoint("GET", "me")
def me() -> dict:
    return {}


@endpoint("PUT", "me")
def update_me(update: UserUpdate) -> dict:
    if not isinstance(update, UserUpdate):
        raise InvalidParameter(f"update_me expects a UserUpdate, got {type(update).__name__}.")

    fields = update.to_json()
    if not fields:
        raise InvalidParameter("update_me needs at least one field to change.")

    for name, value in fields.items():
        if not isinstance(value, str):
            raise InvalidParameter(f"{name} must be a string, got {value!r}.")

    return fields
