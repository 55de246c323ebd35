"""HTTP helpers for talking to the Mojang web API."""

import asyncio
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

import aiohttp

from minecraft_utils import __version__
from minecraft_utils.mojang_api.errors import FetchError, RequestError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
USER_AGENT = f"minecraft_utils/{__version__}"


@dataclass
class Response:
    """A successful (status 200) API response."""

    status: int
    reason: str
    content: bytes
    url: str

    def text(self) -> str:
        try:
            return self.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FetchError(e) from e

    def json(self) -> Any:
        try:
            return json.loads(self.content)
        except ValueError as e:
            raise FetchError(e) from e


async def request(
    method: str,
    url: str,
    session: Optional[aiohttp.ClientSession] = None,
    timeout: int = DEFAULT_TIMEOUT,
    body: Any = None,
    user_agent: str = USER_AGENT,
) -> Response:
    """Send a request and return the response if it has status 200.

    Raises:
        RequestError: The API answered with another status.
        FetchError: The request failed before a response was read.
    """
    close_session = False
    if session is None:
        session = create_session(user_agent)
        close_session = True

    headers = {}
    if "User-Agent" not in session.headers:
        headers["User-Agent"] = user_agent

    try:
        client_timeout = aiohttp.ClientTimeout(total=timeout)
        async with session.request(
            method,
            url,
            json=body,
            timeout=client_timeout,
            headers=headers,
        ) as response:
            content = await response.read()

            if response.status != 200:
                reason = response.reason or ""
                logger.warning(f"{method} {url} returned {response.status} {reason}")
                raise RequestError(response.status, reason)

            return Response(
                status=response.status,
                reason=response.reason or "",
                content=content,
                url=str(response.url),
            )
    except asyncio.TimeoutError as e:
        logger.warning(f"Timeout fetching {url}")
        raise FetchError("request timed out") from e
    except aiohttp.ClientError as e:
        logger.warning(f"Error fetching {url}: {e}")
        raise FetchError(e) from e
    finally:
        if close_session:
            await session.close()


async def get(
    url: str,
    session: Optional[aiohttp.ClientSession] = None,
    timeout: int = DEFAULT_TIMEOUT,
    user_agent: str = USER_AGENT,
) -> Response:
    return await request(
        "GET", url, session=session, timeout=timeout, user_agent=user_agent
    )


async def post(
    url: str,
    body: Any,
    session: Optional[aiohttp.ClientSession] = None,
    timeout: int = DEFAULT_TIMEOUT,
    user_agent: str = USER_AGENT,
) -> Response:
    return await request(
        "POST", url, session=session, timeout=timeout, body=body,
        user_agent=user_agent,
    )


def create_session(user_agent: str = USER_AGENT) -> aiohttp.ClientSession:
    """Create a reusable aiohttp session with connection pooling."""
    connector = aiohttp.TCPConnector(limit=20, limit_per_host=5)
    return aiohttp.ClientSession(
        connector=connector, headers={"User-Agent": user_agent}
    )
