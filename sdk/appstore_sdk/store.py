"""
Local JSON blob store.

Keeps one JSON document per app under a root directory. The app's
docker image name (``<vendor>/<app>``) is used as a relative path, so
``sicon/backend`` lives at ``<root>/sicon/backend``.

Invariants:
    - Keys never resolve outside the root directory
    - A write fully replaces the previous document
    - No locking: concurrent writers to one key may lose updates
"""

from __future__ import annotations

import json
import logging
from pathlib import Path, PurePosixPath
from typing import Any

import aiofiles

from .errors import LocalRecordNotFoundError, ValidationError

logger = logging.getLogger(__name__)


class JsonBlobStore:
    """Per-key JSON documents on the local filesystem.

    Example:
        >>> store = JsonBlobStore("/var/lib/appstore/installed")
        >>> await store.write_blob("sicon/backend", {"name": "r1.0.0"})
        >>> await store.read_blob("sicon/backend")
        {'name': 'r1.0.0'}
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def path_for(self, key: str) -> Path:
        """File path for a key.

        Raises:
            ValidationError: If the key is empty, absolute or contains ``..``
        """
        parts = PurePosixPath(key).parts
        if not key or PurePosixPath(key).is_absolute() or ".." in parts:
            raise ValidationError(f"Invalid store key {key!r}", field_name="app")
        return self._root.joinpath(*parts)

    def exists(self, key: str) -> bool:
        return self.path_for(key).is_file()

    async def read_blob(self, key: str) -> Any:
        """Read and decode the document stored under ``key``.

        Raises:
            LocalRecordNotFoundError: If nothing was ever written for ``key``
        """
        path = self.path_for(key)
        try:
            async with aiofiles.open(path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError as e:
            raise LocalRecordNotFoundError(key, str(path)) from e
        return json.loads(content)

    async def write_blob(self, key: str, value: Any) -> None:
        """Replace the document stored under ``key``, creating parent folders."""
        path = self.path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(value, indent=2, default=str))
        logger.debug(f"Wrote local record {key} to {path}")
