import re

from src.app.repositories.user_repository import IUserRepository

USERNAME_BASE_MAX_LENGTH = 16
DEFAULT_USERNAME_BASE = "user"

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def username_base(display_name: str) -> str:
    base = _NON_ALPHANUMERIC.sub("", display_name.lower())[:USERNAME_BASE_MAX_LENGTH]
    return base or DEFAULT_USERNAME_BASE


async def generate_username(display_name: str, users: IUserRepository) -> str:
    """
    Derive a free username from a display name.

    "Alice!" tries alice, alice1, alice2, ... and returns the first one not
    taken. The lookup is only a hint: two registrations can pick the same
    candidate concurrently, and the unique constraint on users.username makes
    the losing insert fail.
    """
    base = username_base(display_name)
    username = base
    counter = 1
    while await users.get_by_username(username) is not None:
        username = f"{base}{counter}"
        counter += 1
    return username
