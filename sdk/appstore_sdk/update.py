"""
Update target resolution.

Decides which version an update should move an app to, from an optional
explicit version name and an optional maturity.
"""

from __future__ import annotations

import logging

from .client import AppStoreApp
from .errors import TargetVersionNotFoundError
from .types import Maturity, VersionRecord

logger = logging.getLogger(__name__)


async def get_update_target_version(
    app: AppStoreApp,
    target_version_name: str | None = None,
    target_version_maturity: Maturity | str | None = None,
) -> VersionRecord | None:
    """Resolve the version an update should install.

    Args:
        app: App handle
        target_version_name: Exact version to update to; wins over maturity
        target_version_maturity: Channel whose latest version to update to

    Returns:
        The target version. With no arguments this is the latest version
        of the installed channel.

    Raises:
        TargetVersionNotFoundError: If a named version does not exist
    """
    if not target_version_name:
        if target_version_maturity:
            maturity = str(target_version_maturity)
        else:
            maturity = (await app.get_installed_version())["maturity"]
        logger.debug(f"Update target for {app.app}: latest {maturity}")
        return await app.get_latest_version(maturity)

    target_version = await app.get_version(target_version_name)
    if not target_version:
        raise TargetVersionNotFoundError(target_version_name)
    return target_version
