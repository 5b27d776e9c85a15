"""
Remote app store operations.

Reads go through GraphQL; publishing creates a REST entry. Absence is
returned as None (or an empty list for channels); failures of the
transport raise TransportError and are left to the caller.

Invariants:
    - A missing maturity argument means "the installed channel"
    - publish_version never writes when the name exists or the channel is missing
"""

from __future__ import annotations

import logging
from typing import Any

from . import queries
from .context import AppContext
from .errors import ChannelNotFoundError, VersionConflictError
from .normalize import flatten, select_by_name
from .types import ChannelRecord, VersionRecord
from .validate import ensure_publishable

logger = logging.getLogger(__name__)


def _first_app_channels(data: dict[str, Any]) -> list[ChannelRecord] | None:
    """Channels of the first matching app, or None if no app matched."""
    apps = data.get("apps") or []
    if not apps:
        return None
    return apps[0].get("channels") or []


def _first_channel(data: dict[str, Any]) -> ChannelRecord | None:
    channels = _first_app_channels(data)
    if not channels:
        return None
    return channels[0]


async def get_remote_app_version(ctx: AppContext, name: str) -> VersionRecord | None:
    """Find a version by exact name across all channels of the app."""
    query = queries.version_query(ctx.app, ctx.username, name, ctx.version_fields)
    channels = _first_app_channels(await ctx.client.execute(query))
    if channels is None:
        return None
    return select_by_name(flatten(channels), name)


async def get_latest_remote_app_version(
    ctx: AppContext,
    maturity: str | None = None,
) -> VersionRecord | None:
    """Newest version of a channel, tagged with its maturity.

    Args:
        ctx: App dependencies
        maturity: Channel to look at (default: installed channel)

    Returns:
        The version merged with ``maturity``, or None if the channel is empty
    """
    maturity = await ctx.resolve_maturity(maturity)
    query = queries.latest_version_query(ctx.app, ctx.username, maturity, ctx.version_fields)
    channel = _first_channel(await ctx.client.execute(query))
    versions = (channel or {}).get("versions") or []
    if not versions:
        return None
    return {**versions[0], "maturity": maturity}


async def get_remote_app_changelog(
    ctx: AppContext,
    maturity: str | None = None,
    limit: int = 10,
    start: int = 0,
) -> ChannelRecord | None:
    """A page of a channel's versions, newest first, in channel shape."""
    maturity = await ctx.resolve_maturity(maturity)
    query = queries.changelog_query(
        ctx.app, ctx.username, maturity, ctx.version_fields, limit=limit, start=start
    )
    return _first_channel(await ctx.client.execute(query))


async def get_remote_app_channels(ctx: AppContext) -> list[str]:
    """Maturity of every channel of the app (empty if the app is unknown)."""
    query = queries.channels_query(ctx.app, ctx.username)
    channels = _first_app_channels(await ctx.client.execute(query)) or []
    return [channel["maturity"] for channel in channels]


async def get_remote_app_channel(ctx: AppContext, maturity: str) -> ChannelRecord | None:
    """The app's channel for ``maturity``."""
    query = queries.channel_query(ctx.app, ctx.username, str(maturity))
    return _first_channel(await ctx.client.execute(query))


async def publish_version(ctx: AppContext, version: VersionRecord) -> dict[str, Any]:
    """Publish a new version to its maturity's channel.

    Args:
        ctx: App dependencies
        version: Version fields; needs name, dockerTag and maturity

    Returns:
        The created version entry

    Raises:
        ValidationError: If required fields are missing
        VersionConflictError: If the name is already published for the app
        ChannelNotFoundError: If the app has no channel for the maturity
    """
    version = ensure_publishable(version)

    if await get_remote_app_version(ctx, version["name"]):
        raise VersionConflictError(version["name"], ctx.app)

    channel = await get_remote_app_channel(ctx, version["maturity"])
    if not channel or channel.get("id") is None:
        raise ChannelNotFoundError(ctx.app, version["maturity"])

    entry = await ctx.client.create_entry("versions", {**version, "channel": channel["id"]})
    logger.info(f"Published version {version['name']} of {ctx.app} to {version['maturity']}")
    return entry
