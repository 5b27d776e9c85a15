"""
Local installed-version and changelog records.

The installed-version record says what is deployed for an app; its
maturity is the app's installed channel. The changelog record is a
snapshot of that channel's history, fetched from the app store so that
version lookups keep working offline.
"""

from __future__ import annotations

import logging
from typing import Any

from .context import AppContext
from .errors import MissingHistoryError
from .normalize import flatten_channel, select_by_name
from .remote import get_remote_app_changelog
from .types import ChannelRecord, VersionRecord

logger = logging.getLogger(__name__)

ALL = -1


async def get_installed_version(ctx: AppContext) -> VersionRecord:
    """Read the installed-version record (LocalRecordNotFoundError if unset)."""
    return await ctx.read_installed_version()


async def set_installed_version(ctx: AppContext, version: Any) -> Any:
    """Overwrite the installed-version record with ``version`` verbatim."""
    await ctx.installed_versions.write_blob(ctx.app, version)
    return version


async def get_installed_channel(ctx: AppContext) -> str:
    return await ctx.installed_channel()


async def get_local_app_changelog(
    ctx: AppContext,
    limit: int = 10,
    start: int = 0,
) -> ChannelRecord:
    """Read the cached changelog.

    Args:
        ctx: App dependencies
        limit: Page size, or -1 for the whole snapshot
        start: Offset of the first version in the page

    Returns:
        The cached channel with ``versions[start:start + limit]``
    """
    history = await ctx.changelogs.read_blob(ctx.app)
    if limit == ALL:
        return history
    versions = history.get("versions") or []
    return {**history, "versions": versions[start:start + limit]}


async def set_local_app_changelog(ctx: AppContext) -> ChannelRecord:
    """Refresh the changelog cache from the installed channel's remote history.

    Raises:
        MissingHistoryError: If the app store has no history for the channel
    """
    maturity = await ctx.installed_channel()
    history = await get_remote_app_changelog(ctx, maturity)
    if not history:
        raise MissingHistoryError(ctx.app, maturity)

    await ctx.changelogs.write_blob(ctx.app, history)
    logger.info(f"Cached {len(history.get('versions') or [])} versions of {ctx.app} ({maturity})")
    return history


async def get_local_app_version(ctx: AppContext, name: str) -> VersionRecord | None:
    """Find a version by name in the cached changelog."""
    changelog = await get_local_app_changelog(ctx, ALL)
    return select_by_name(flatten_channel(changelog), name)


async def get_latest_local_app_version(ctx: AppContext) -> VersionRecord | None:
    changelog = await get_local_app_changelog(ctx, 1)
    versions = flatten_channel(changelog)
    return versions[0] if versions else None
