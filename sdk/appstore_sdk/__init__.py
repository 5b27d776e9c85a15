"""
App Store Python SDK - Client library for the versioned-release app store.

This SDK fetches, caches and publishes version metadata for apps
identified by docker image (``<vendor>/<app>``):
- AppStoreApp handle with remote-first version and changelog lookups
- Local installed-version and changelog records for offline use
- Update target resolution by version name or maturity
- Publishing new versions to a maturity channel

Example:
    >>> from appstore_sdk import AppOptions, get_app_factory, get_update_target_version
    >>>
    >>> options = AppOptions(
    ...     app="sicon/backend",
    ...     installed_version_path="/var/lib/appstore/installed",
    ...     changelog_path="/var/lib/appstore/changelog",
    ... )
    >>> async with get_app_factory(options) as app:
    ...     target = await get_update_target_version(app)

Invariants:
    - Version names are unique per app; publishing one twice fails
    - Reads fall back to local records only when the app store fails
    - Flattened versions carry the maturity of their channel

Version: 1.0.0
"""

__version__ = "1.0.0"

from ._graphql_client import APPSTORE_URL
from .client import (
    AppStoreApp,
    get_app_by_docker_image,
    get_app_by_environment,
    get_app_factory,
    get_app_maturity,
)
from .config import AppOptions, AppStoreSettings
from .errors import (
    AppStoreError,
    AuthenticationError,
    ChannelNotFoundError,
    LocalRecordNotFoundError,
    MissingHistoryError,
    TargetVersionNotFoundError,
    TransportError,
    ValidationError,
    VersionConflictError,
)
from .local import get_latest_local_app_version, get_local_app_changelog, get_local_app_version
from .normalize import flatten, flatten_channel, select_by_name
from .resolution import FallbackStrategy, remote_first_try, resolve
from .types import DEFAULT_VERSION_FIELDS, AppRef, Maturity
from .update import get_update_target_version

__all__ = [
    # Version
    "__version__",
    "APPSTORE_URL",
    # Types
    "AppRef",
    "Maturity",
    "DEFAULT_VERSION_FIELDS",
    # Config
    "AppOptions",
    "AppStoreSettings",
    # Client
    "AppStoreApp",
    "get_app_factory",
    "get_app_by_docker_image",
    "get_app_maturity",
    "get_app_by_environment",
    "get_update_target_version",
    # Local cache
    "get_local_app_changelog",
    "get_local_app_version",
    "get_latest_local_app_version",
    # Normalization and resolution
    "flatten",
    "flatten_channel",
    "select_by_name",
    "FallbackStrategy",
    "remote_first_try",
    "resolve",
    # Errors
    "AppStoreError",
    "TransportError",
    "AuthenticationError",
    "ValidationError",
    "VersionConflictError",
    "ChannelNotFoundError",
    "MissingHistoryError",
    "TargetVersionNotFoundError",
    "LocalRecordNotFoundError",
]
