"""Helpers for the Mojang web API."""

from minecraft_utils.mojang_api.blocked_servers import (
    BlockedServers,
    fetch_blocked_servers,
    load_blocked_servers,
)
from minecraft_utils.mojang_api.errors import ApiError, UsernameError
from minecraft_utils.mojang_api.profile import fetch_profile, get_username_history
from minecraft_utils.mojang_api.stats import Metrics, fetch_stats
from minecraft_utils.mojang_api.user import get_username_uuid, validate_username

__all__ = [
    "ApiError",
    "BlockedServers",
    "Metrics",
    "UsernameError",
    "fetch_blocked_servers",
    "fetch_profile",
    "fetch_stats",
    "get_username_history",
    "get_username_uuid",
    "load_blocked_servers",
    "validate_username",
]
