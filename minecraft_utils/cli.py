"""CLI interface for minecraft_utils."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click

from minecraft_utils.config import ApiConfig, Config, load_config
from minecraft_utils.models import Profile, Stats
from minecraft_utils.mojang_api.blocked_servers import (
    BlockedServers,
    fetch_blocked_servers,
    hash_pattern,
    load_blocked_servers,
)
from minecraft_utils.mojang_api.client import create_session
from minecraft_utils.mojang_api.errors import ApiError
from minecraft_utils.mojang_api.profile import fetch_profile
from minecraft_utils.mojang_api.stats import METRIC_KEYS, Metrics, fetch_stats
from minecraft_utils.mojang_api.user import (
    MAX_USERNAME_LENGTH,
    get_username_uuid,
    normalize_uuid,
    validate_username,
)

DEFAULT_CONFIG = "minecraft_utils.yaml"


@click.group()
def cli():
    """minecraft-utils - Query the Mojang API and its blocked servers list."""
    pass


def setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure logging based on verbosity."""
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def _load_config_or_exit(config_path: Path) -> Config:
    try:
        return load_config(config_path)
    except ValueError as e:
        click.echo(f"Error loading config: {e}", err=True)
        sys.exit(1)


async def _fetch_blocked(api: ApiConfig) -> BlockedServers:
    async with create_session(api.user_agent) as session:
        return await fetch_blocked_servers(session=session, api=api)


async def _fetch_profile(name_or_uuid: str, api: ApiConfig) -> Profile:
    """Resolve a username (or take a UUID as is) and fetch its profile."""
    async with create_session(api.user_agent) as session:
        if len(name_or_uuid) > MAX_USERNAME_LENGTH:
            uuid = normalize_uuid(name_or_uuid)
        else:
            validate_username(name_or_uuid)
            uuid = await get_username_uuid(name_or_uuid, session=session, api=api)
        return await fetch_profile(uuid, session=session, api=api)


async def _fetch_stats(metrics: Metrics, api: ApiConfig) -> Stats:
    async with create_session(api.user_agent) as session:
        return await fetch_stats(metrics, session=session, api=api)


@cli.command(name="blocked")
@click.argument("addresses", nargs=-1, required=True)
@click.option(
    "--hashes",
    "-H",
    "hashes_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Local file of blocked server hashes (default: fetch from Mojang)",
)
@click.option(
    "--fail-on-match",
    is_flag=True,
    help="Exit with status 1 if any address is blocked",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=DEFAULT_CONFIG,
    help=f"Config file path (default: {DEFAULT_CONFIG})",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Detailed logging",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Minimal output",
)
def blocked_command(
    addresses: tuple[str, ...],
    hashes_file: Optional[Path],
    fail_on_match: bool,
    config_path: Path,
    verbose: bool,
    quiet: bool,
) -> None:
    """Check server addresses against the blocked servers list.

    Prints the most specific blocking pattern for every blocked address.

    Examples:
        minecraft-utils blocked mc.example.com 192.0.2.235
        minecraft-utils blocked --hashes blockedservers.txt mc.example.com
    """
    setup_logging(verbose, quiet)
    logger = logging.getLogger(__name__)
    config = _load_config_or_exit(config_path)

    if not hashes_file and config.blocklist_file:
        hashes_file = Path(config.blocklist_file)

    try:
        if hashes_file:
            logger.info(f"Loading blocked servers from {hashes_file}")
            blocked = load_blocked_servers(hashes_file)
        else:
            logger.info("Fetching blocked servers list")
            blocked = asyncio.run(_fetch_blocked(config.api))
    except (ApiError, ValueError) as e:
        click.echo(f"Error loading blocked servers: {e}", err=True)
        sys.exit(1)

    logger.debug(f"Checking {len(addresses)} addresses against {len(blocked)} hashes")

    any_blocked = False
    for address in addresses:
        pattern = blocked.find_blocked_pattern(address)
        if pattern is None:
            click.echo(f"{address}: not blocked")
        else:
            any_blocked = True
            click.echo(f"{address}: blocked ({pattern})")

    if fail_on_match and any_blocked:
        sys.exit(1)


@cli.command(name="hash")
@click.argument("patterns", nargs=-1, required=True)
def hash_command(patterns: tuple[str, ...]) -> None:
    """Print the blocklist hash of each pattern.

    Examples:
        minecraft-utils hash "*.example.com" "192.0.*"
    """
    for pattern in patterns:
        click.echo(f"{hash_pattern(pattern)}  {pattern}")


@cli.command(name="profile")
@click.argument("name_or_uuid")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=DEFAULT_CONFIG,
    help=f"Config file path (default: {DEFAULT_CONFIG})",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Detailed logging",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Minimal output",
)
def profile_command(
    name_or_uuid: str,
    config_path: Path,
    verbose: bool,
    quiet: bool,
) -> None:
    """Show the profile of a user given a username or UUID.

    Anything longer than 16 characters is taken as a UUID.
    """
    setup_logging(verbose, quiet)
    config = _load_config_or_exit(config_path)

    try:
        profile = asyncio.run(_fetch_profile(name_or_uuid, config.api))
    except (ApiError, ValueError) as e:
        click.echo(f"Error fetching profile: {e}", err=True)
        sys.exit(1)

    textures = profile.textures()
    click.echo(f"uuid: {profile.id}")
    click.echo(f"name: {profile.name}")
    click.echo(f"skin model: {'alex' if profile.slim_model() else 'steve'}")
    click.echo(f"skin url: {textures.skin.url}")
    click.echo(f"cape url: {textures.cape.url if textures.cape else ''}")


@cli.command(name="stats")
@click.option(
    "--metric",
    "-m",
    "metric_names",
    multiple=True,
    type=click.Choice(list(METRIC_KEYS)),
    help="Metric to include (repeatable, default: Minecraft sales)",
)
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, path_type=Path),
    default=DEFAULT_CONFIG,
    help=f"Config file path (default: {DEFAULT_CONFIG})",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Detailed logging",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Minimal output",
)
def stats_command(
    metric_names: tuple[str, ...],
    config_path: Path,
    verbose: bool,
    quiet: bool,
) -> None:
    """Show combined sales statistics of Mojang's games."""
    setup_logging(verbose, quiet)
    config = _load_config_or_exit(config_path)

    metrics = Metrics.from_names(list(metric_names)) if metric_names else Metrics.minecraft()

    try:
        stats = asyncio.run(_fetch_stats(metrics, config.api))
    except (ApiError, ValueError) as e:
        click.echo(f"Error fetching statistics: {e}", err=True)
        sys.exit(1)

    click.echo(f"total: {stats.total}")
    click.echo(f"last 24h: {stats.last24h}")
    click.echo(f"sales per second: {stats.sale_velocity_per_seconds}")


if __name__ == "__main__":
    cli()
