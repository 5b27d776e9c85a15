"""
Data types for the App Store SDK.

This module provides the shapes exchanged with the app store:
- Maturity: Release channel level (alpha, beta, stable)
- AppRef: Vendor/app pair identifying a docker image
- VersionRecord / ChannelRecord: JSON records as returned by GraphQL

Version and channel records stay plain dictionaries because the set of
version fields fetched from the server is configurable per app.

Invariants:
    - One channel per maturity per app (assumed by lookups)
    - A version name is unique within an app
    - A flattened version carries the maturity of its channel
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict

from .errors import ValidationError

VersionRecord = Dict[str, Any]
ChannelRecord = Dict[str, Any]

DEFAULT_VERSION_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "changelog",
    "dockerTag",
    "created_at",
)

REQUIRED_PUBLISH_FIELDS: tuple[str, ...] = ("name", "dockerTag", "maturity")


class Maturity(str, Enum):
    """Release channel maturity levels."""

    ALPHA = "alpha"
    BETA = "beta"
    STABLE = "stable"

    @classmethod
    def parse(cls, value: Maturity | str) -> Maturity:
        """Convert a string to Maturity.

        Raises:
            ValidationError: If value is not a known maturity
        """
        if isinstance(value, cls):
            return value
        for maturity in cls:
            if maturity.value == value:
                return maturity
        choices = ", ".join(m.value for m in cls)
        raise ValidationError(
            f"Invalid maturity {value!r}, expected one of {choices}",
            field_name="maturity",
        )

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AppRef:
    """An app identified by its docker namespace.

    Attributes:
        vendor: Docker namespace (e.g. ``sicon``)
        app: Image name within the namespace (e.g. ``backend``)
    """

    vendor: str
    app: str

    @property
    def docker_image(self) -> str:
        """``<vendor>/<app>`` form used as the app identifier."""
        return f"{self.vendor}/{self.app}"

    @classmethod
    def parse(cls, docker_image: str) -> AppRef:
        """Split ``<vendor>/<app>`` into an AppRef."""
        vendor, sep, app = docker_image.partition("/")
        if not sep or not vendor or not app or "/" in app:
            raise ValidationError(
                f"App must be given as <vendor>/<app>, got {docker_image!r}",
                field_name="app",
            )
        return cls(vendor=vendor, app=app)

    def __str__(self) -> str:
        return self.docker_image
