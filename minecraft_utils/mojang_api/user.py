"""Resolving usernames and checking their syntax."""

import logging
from typing import Optional

import aiohttp

from minecraft_utils.config import ApiConfig
from minecraft_utils.models import User
from minecraft_utils.mojang_api.client import get
from minecraft_utils.mojang_api.errors import (
    EmptyUsernameError,
    InvalidCharacterError,
    UsernameTooLongError,
)

logger = logging.getLogger(__name__)

MAX_USERNAME_LENGTH = 16


def validate_username(username: str) -> None:
    """Check that a username is one the API may return.

    This does not check whether the name is taken or currently valid. Names
    shorter than 3 characters are accepted, as some very old accounts have
    them.

    Raises:
        EmptyUsernameError: The username is empty.
        UsernameTooLongError: The username is longer than 16 bytes in UTF-8.
        InvalidCharacterError: A character is not ASCII alphanumeric or ``_``.
    """
    if not username:
        raise EmptyUsernameError()

    if len(username.encode("utf-8")) > MAX_USERNAME_LENGTH:
        raise UsernameTooLongError()

    for ch in username:
        if not (ch.isascii() and ch.isalnum()) and ch != "_":
            raise InvalidCharacterError(ch)


def normalize_uuid(value: str) -> str:
    """Strip dashes from a UUID so it can be used in API paths."""
    return value.replace("-", "")


async def fetch_user(
    username: str,
    session: Optional[aiohttp.ClientSession] = None,
    api: Optional[ApiConfig] = None,
) -> User:
    api = api or ApiConfig()
    url = api.api_url(f"/users/profiles/minecraft/{username}")
    response = await get(
        url, session=session, timeout=api.timeout, user_agent=api.user_agent
    )
    return User.model_validate(response.json())


async def get_username_uuid(
    username: str,
    session: Optional[aiohttp.ClientSession] = None,
    api: Optional[ApiConfig] = None,
) -> str:
    """Get the UUID of a username."""
    user = await fetch_user(username, session=session, api=api)
    logger.debug(f"Resolved {username} to {user.id}")
    return user.id
