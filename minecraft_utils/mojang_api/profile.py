"""Fetching the profile, textures and username history of a user."""

import logging
from typing import Optional

import aiohttp

from minecraft_utils.config import ApiConfig
from minecraft_utils.models import Profile, UsernameEntry
from minecraft_utils.mojang_api.client import get

logger = logging.getLogger(__name__)


async def fetch_profile(
    uuid: str,
    session: Optional[aiohttp.ClientSession] = None,
    api: Optional[ApiConfig] = None,
) -> Profile:
    """Fetch the profile of a user, including skin and cape textures."""
    api = api or ApiConfig()
    url = api.session_url(f"/session/minecraft/profile/{uuid}")
    response = await get(
        url, session=session, timeout=api.timeout, user_agent=api.user_agent
    )
    return Profile.model_validate(response.json())


async def get_username_history(
    uuid: str,
    session: Optional[aiohttp.ClientSession] = None,
    api: Optional[ApiConfig] = None,
) -> list[UsernameEntry]:
    """Fetch every name a user has had, oldest first."""
    api = api or ApiConfig()
    url = api.api_url(f"/user/profiles/{uuid}/names")
    response = await get(
        url, session=session, timeout=api.timeout, user_agent=api.user_agent
    )
    entries = [UsernameEntry.model_validate(e) for e in response.json()]
    logger.debug(f"Found {len(entries)} names for {uuid}")
    return entries
