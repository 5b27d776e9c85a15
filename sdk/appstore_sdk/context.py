"""
Bound dependencies shared by remote and local operations.

An AppContext is what every operation in ``remote`` and ``local`` receives:
the app identifier, the author filter, the version field selection, the
transport and the two local stores.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ._graphql_client import GraphQLClient
from .queries import VersionFields
from .store import JsonBlobStore
from .types import DEFAULT_VERSION_FIELDS


@dataclass
class AppContext:
    """Dependencies for one app.

    Attributes:
        app: Docker image name (``<vendor>/<app>``)
        username: Author filter for app lookups (empty for none)
        client: Transport to the app store
        installed_versions: Store for installed-version records
        changelogs: Store for cached changelog records
        version_fields: GraphQL fields fetched for each version
    """

    app: str
    username: str
    client: GraphQLClient
    installed_versions: JsonBlobStore
    changelogs: JsonBlobStore
    version_fields: VersionFields = DEFAULT_VERSION_FIELDS

    async def read_installed_version(self) -> Any:
        return await self.installed_versions.read_blob(self.app)

    async def installed_channel(self) -> str:
        """Maturity of the locally installed version."""
        return (await self.read_installed_version())["maturity"]

    async def resolve_maturity(self, maturity: str | None) -> str:
        """Use ``maturity`` when given, else the installed channel."""
        if maturity:
            return str(maturity)
        return await self.installed_channel()
