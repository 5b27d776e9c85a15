"""
Configuration for the App Store SDK.

Two layers:
- AppStoreSettings: process-wide settings loaded from ``APPSTORE_*``
  environment variables via pydantic-settings
- AppOptions: the fixed dependencies of one app handle, with defaults
  applied field by field

Invariants:
    - Every option has a default except the app identifier
    - Credentials are never logged or included in repr output

How to change safely:
    - Add new settings with defaults that keep existing callers working
    - Keep AppOptions field names stable; they are the public factory API
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

from ._graphql_client import APPSTORE_URL
from .queries import VersionFields
from .resolution import ShouldTryRemote
from .types import DEFAULT_VERSION_FIELDS


class AppStoreSettings(BaseSettings):
    """App store configuration loaded from environment."""

    url: str = Field(default=APPSTORE_URL, description="App store server URL")
    login_username: str = Field(default="", description="Login identifier for publishing")
    login_password: str = Field(default="", repr=False, description="Login password")

    installed_version_path: str = Field(
        default="", description="Folder holding installed-version records"
    )
    changelog_path: str = Field(default="", description="Folder holding cached changelogs")
    timeout: float = Field(default=30.0, description="Request timeout seconds")

    log_level: str = Field(default="WARNING", description="Root log level")
    log_format: str = Field(default="text", description="text or json")
    debug: bool = Field(
        default=False,
        validation_alias=AliasChoices("APPSTORE_DEBUG", "DEBUG", "debug"),
        description="Print full error details",
    )

    model_config = {"env_prefix": "APPSTORE_", "populate_by_name": True, "extra": "ignore"}

    @field_validator("debug", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() not in ("", "0", "false", "no", "off")
        return bool(value)

    @property
    def has_credentials(self) -> bool:
        return bool(self.login_username and self.login_password)


@dataclass(frozen=True)
class AppOptions:
    """Dependencies of one app handle.

    Attributes:
        app: Docker namespace app name (e.g. ``sicon/backend``)
        username: App store login, also used as author filter
        password: App store password
        installed_version_path: Folder where installed version info is stored
        changelog_path: Folder where changelogs are stored
        retrieve_version_fields: Version fields to fetch from GraphQL
        should_try_remote: Whether (or a predicate deciding whether) to try
            the app store before the local files
        url: App store server URL
        timeout: Request timeout in seconds
    """

    app: str
    username: str = ""
    password: str = field(default="", repr=False)
    installed_version_path: str = ""
    changelog_path: str = ""
    retrieve_version_fields: VersionFields = DEFAULT_VERSION_FIELDS
    should_try_remote: ShouldTryRemote = True
    url: str = APPSTORE_URL
    timeout: float = 30.0

    @classmethod
    def from_settings(cls, app: str, settings: AppStoreSettings | None = None) -> AppOptions:
        """Build options for ``app`` from environment settings."""
        settings = settings or AppStoreSettings()
        return cls(
            app=app,
            username=settings.login_username,
            password=settings.login_password,
            installed_version_path=settings.installed_version_path,
            changelog_path=settings.changelog_path,
            url=settings.url,
            timeout=settings.timeout,
        )

    def with_app(self, app: str) -> AppOptions:
        """Same dependencies for another app."""
        return replace(self, app=app)
