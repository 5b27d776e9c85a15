"""
App Store client for Python SDK.

This module provides the per-app handle and the factories building it:
- AppStoreApp: Version, channel and changelog operations for one app
- get_app_factory: Build a handle from AppOptions
- get_app_by_docker_image / get_app_maturity / get_app_by_environment

Example:
    >>> options = AppOptions(
    ...     app="sicon/backend",
    ...     installed_version_path="/var/lib/appstore/installed",
    ...     changelog_path="/var/lib/appstore/changelog",
    ... )
    >>> async with get_app_factory(options) as app:
    ...     latest = await app.get_latest_version("stable")

Invariants:
    - get_version, get_latest_version and get_changelog are remote-first
      with local fallback
    - get_installed_version is always local; get_channels and get_channel
      are always remote
    - Each handle owns its transport; nothing is shared between handles
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from . import local, remote
from ._graphql_client import GraphQLClient
from .config import AppOptions, AppStoreSettings
from .context import AppContext
from .resolution import remote_first_try
from .store import JsonBlobStore
from .types import AppRef, ChannelRecord, Maturity, VersionRecord

logger = logging.getLogger(__name__)


class AppStoreApp:
    """Handle for one app in the app store.

    Binds the app identifier, credentials, local paths and field
    selection once and exposes the read/write operations on top of them.

    The handle opens its own HTTP client on first use; close it with
    ``await app.close()`` or use it as an async context manager.

    Example:
        >>> async with get_app_factory(AppOptions(app="sicon/backend")) as app:
        ...     channels = await app.get_channels()
    """

    def __init__(
        self,
        options: AppOptions,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the handle.

        Args:
            options: App dependencies
            http_client: Optional httpx client to send requests through
        """
        self.options = options
        self._client = GraphQLClient(
            options.url,
            options.username,
            options.password,
            timeout=options.timeout,
            http_client=http_client,
        )
        self._ctx = AppContext(
            app=options.app,
            username=options.username,
            client=self._client,
            installed_versions=JsonBlobStore(options.installed_version_path),
            changelogs=JsonBlobStore(options.changelog_path),
            version_fields=options.retrieve_version_fields,
        )

    @property
    def app(self) -> str:
        return self.options.app

    @property
    def context(self) -> AppContext:
        return self._ctx

    async def close(self) -> None:
        await self._client.close()

    async def __aenter__(self) -> AppStoreApp:
        await self._client.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    # Remote first, local fallback

    async def get_version(self, name: str) -> VersionRecord | None:
        """Look up a version by name in any channel.

        Args:
            name: Exact version name (e.g. ``r1.0.0``)

        Returns:
            The version with its maturity, or None if it does not exist
        """
        return await remote_first_try(
            remote=lambda: remote.get_remote_app_version(self._ctx, name),
            local=lambda: local.get_local_app_version(self._ctx, name),
            should_try_remote=self.options.should_try_remote,
            description=f"lookup of version {name} for {self.app}",
        )

    async def get_latest_version(
        self,
        maturity: Maturity | str | None = None,
    ) -> VersionRecord | None:
        """Newest version of a channel.

        Args:
            maturity: Channel to look at (default: installed channel)

        Returns:
            The newest version, or None if the channel has none
        """
        maturity = str(maturity) if maturity else None
        return await remote_first_try(
            remote=lambda: remote.get_latest_remote_app_version(self._ctx, maturity),
            local=lambda: local.get_latest_local_app_version(self._ctx),
            should_try_remote=self.options.should_try_remote,
            description=f"lookup of latest {maturity or 'installed channel'} version for {self.app}",
        )

    async def get_changelog(
        self,
        maturity: Maturity | str | None = None,
        limit: int = 10,
        start: int = 0,
    ) -> ChannelRecord | None:
        """A page of a channel's versions, newest first.

        Args:
            maturity: Channel to look at (default: installed channel)
            limit: Page size
            start: Offset of the first version

        Returns:
            Channel record with a ``versions`` page
        """
        maturity = str(maturity) if maturity else None
        return await remote_first_try(
            remote=lambda: remote.get_remote_app_changelog(self._ctx, maturity, limit, start),
            local=lambda: local.get_local_app_changelog(self._ctx, limit, start),
            should_try_remote=self.options.should_try_remote,
            description=f"changelog lookup for {self.app}",
        )

    # Always local

    async def get_installed_version(self) -> VersionRecord:
        return await local.get_installed_version(self._ctx)

    async def set_installed_version(self, version: Any) -> Any:
        return await local.set_installed_version(self._ctx, version)

    async def get_installed_channel(self) -> str:
        return await local.get_installed_channel(self._ctx)

    # Always remote

    async def get_channels(self) -> list[str]:
        return await remote.get_remote_app_channels(self._ctx)

    async def get_channel(self, maturity: Maturity | str) -> ChannelRecord | None:
        return await remote.get_remote_app_channel(self._ctx, str(maturity))

    async def set_changelog_cache(self) -> ChannelRecord:
        """Refresh the local changelog from the installed channel."""
        return await local.set_local_app_changelog(self._ctx)

    async def publish_version(self, version: VersionRecord) -> dict[str, Any]:
        """Publish a new version (see remote.publish_version)."""
        return await remote.publish_version(self._ctx, version)


def get_app_factory(
    options: AppOptions,
    *,
    http_client: httpx.AsyncClient | None = None,
) -> AppStoreApp:
    """Retrieve a handle with all operations for an app."""
    return AppStoreApp(options, http_client=http_client)


def get_app_by_docker_image(options: AppOptions, ref: AppRef) -> AppStoreApp:
    """Handle for the app identified by a vendor/app pair."""
    return get_app_factory(options.with_app(ref.docker_image))


async def get_app_maturity(
    options: AppOptions,
    ref: AppRef,
    maturity: Maturity | str | None = None,
) -> tuple[AppStoreApp, str]:
    """Handle for an app plus the maturity to use for it.

    The maturity defaults to the app's installed channel. The caller
    owns the returned handle and must close it.
    """
    app = get_app_by_docker_image(options, ref)
    if maturity:
        return app, str(maturity)
    return app, await app.get_installed_channel()


def get_app_by_environment(
    app: str,
    settings: AppStoreSettings | None = None,
) -> AppStoreApp:
    """Handle using credentials from ``APPSTORE_LOGIN_*`` variables.

    Local paths come from settings and are empty by default, which is
    fine for publishing and remote lookups.
    """
    return get_app_factory(AppOptions.from_settings(app, settings))
