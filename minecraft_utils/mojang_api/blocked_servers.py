"""Matching addresses against the published blocked servers list.

The list only carries SHA-1 digests of patterns such as ``*.example.com``,
``192.0.*`` or ``127.0.0.1``. An address is checked by generalising it one
step at a time and hashing every candidate until one is found in the list.
"""

import hashlib
import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Union

import aiohttp

from minecraft_utils.config import ApiConfig
from minecraft_utils.mojang_api.client import get

logger = logging.getLogger(__name__)

BLOCKED_SERVERS_PATH = "/blockedservers"


def is_ipv4(parts: Sequence[str]) -> bool:
    """Naively check whether split address parts look like an IPv4 address.

    Matches how the Minecraft client decides: exactly four parts, each a
    decimal number from 0 to 255. Leading zeros are accepted, so a hostname
    made of four small numeric labels is treated as an address.
    """
    if len(parts) != 4:
        return False
    # str.isdigit() accepts superscripts and other unicode digits
    return all(
        part.isascii() and part.isdigit() and int(part) <= 255 for part in parts
    )


def hash_pattern(pattern: str) -> str:
    """Return the lowercase hex SHA-1 digest of a pattern."""
    return hashlib.sha1(pattern.encode("utf-8")).hexdigest()


def candidate_patterns(address: str) -> Iterator[str]:
    """Yield the patterns an address may be blocked by, most specific first.

    IPv4 addresses are generalised by dropping trailing octets
    (``192.0.2.*``, ``192.0.*``, ``192.*``); hostnames by dropping leading
    labels (``*.example.com``, ``*.com``). The bare ``*`` is never produced.
    """
    yield address

    parts = address.split(".")
    if is_ipv4(parts):
        for i in range(len(parts) - 1, 0, -1):
            yield ".".join(parts[:i]) + ".*"
    else:
        for i in range(1, len(parts)):
            yield "*." + ".".join(parts[i:])


class BlockedServers:
    """A set of hashes of blocked server patterns.

    The hash set is frozen on construction, so one instance can be shared
    between threads. To refresh the list, build a new instance and swap it in.

    Example:
        >>> blocked = BlockedServers([
        ...     "8c7122d652cb7be22d1986f1f30b07fd5108d9c0",  # *.example.com
        ...     "8c15fb642b3e8f58480df51798382f1016e748eb",  # 192.0.*
        ...     "4b84b15bff6ee5796152495a230e45e3d7e947d9",  # 127.0.0.1
        ... ])
        >>> blocked.find_blocked_pattern("mc.example.com")
        '*.example.com'
        >>> blocked.is_blocked("127.0.0.2")
        False
    """

    def __init__(self, hashes: Iterable[str] = ()):
        self.hashes: frozenset[str] = frozenset(
            h.strip().lower() for h in hashes if h and h.strip()
        )

    @classmethod
    def from_lines(cls, lines: Union[str, Iterable[str]]) -> "BlockedServers":
        """Build from a newline separated body or an iterable of lines."""
        if isinstance(lines, str):
            lines = lines.splitlines()
        return cls(lines)

    def is_pattern_blocked(self, pattern: str) -> bool:
        """Check if a pattern is in the hashed pattern list."""
        return hash_pattern(pattern) in self.hashes

    def find_blocked_pattern(self, address: str) -> Optional[str]:
        """Return the most specific pattern blocking an address, if any."""
        for pattern in candidate_patterns(address):
            if self.is_pattern_blocked(pattern):
                return pattern
        return None

    def is_blocked(self, address: str) -> bool:
        """Check if the address is in the blocklist."""
        return self.find_blocked_pattern(address) is not None

    def __contains__(self, address: str) -> bool:
        return self.is_blocked(address)

    def __len__(self) -> int:
        return len(self.hashes)

    def __repr__(self) -> str:
        return f"BlockedServers(<{len(self.hashes)} hashes>)"


async def fetch_blocked_servers(
    session: Optional[aiohttp.ClientSession] = None,
    api: Optional[ApiConfig] = None,
) -> BlockedServers:
    """Fetch the current blocked servers list."""
    api = api or ApiConfig()
    url = api.session_url(BLOCKED_SERVERS_PATH)
    response = await get(
        url, session=session, timeout=api.timeout, user_agent=api.user_agent
    )
    blocked = BlockedServers.from_lines(response.text())
    logger.debug(f"Loaded {len(blocked)} blocked server hashes from {url}")
    return blocked


def load_blocked_servers(path: Path) -> BlockedServers:
    """Load a blocked servers list saved as one hash per line."""
    if not path.exists():
        raise ValueError(f"Blocked servers file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        blocked = BlockedServers.from_lines(f)

    logger.debug(f"Loaded {len(blocked)} blocked server hashes from {path}")
    return blocked
