"""
Error types for the App Store SDK.

This module defines all exception types raised by the SDK:
- AppStoreError: Base exception
- TransportError: GraphQL/HTTP request failed
- AuthenticationError: Login against the app store failed
- ValidationError: Version payload or argument is invalid
- VersionConflictError: Version name already published for the app
- ChannelNotFoundError: No channel for the requested maturity
- MissingHistoryError: No remote history to cache for a channel
- TargetVersionNotFoundError: Named update target does not exist
- LocalRecordNotFoundError: Local installed-version/changelog blob missing

Invariants:
    - All errors inherit from AppStoreError
    - Only TransportError (and subclasses) is treated as recoverable
      by callers that fall back to the local cache
    - Error messages name the app, version or channel involved
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class AppStoreError(Exception):
    """Base exception for all App Store SDK errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "APPSTORE_ERROR"
        self.details = details or {}


class TransportError(AppStoreError):
    """Request to the app store backend failed.

    Raised when:
    - The server is unreachable or times out
    - The server answers with an HTTP error status
    - The GraphQL response carries an ``errors`` member
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        code: str = "TRANSPORT_ERROR",
    ) -> None:
        super().__init__(
            message,
            code=code,
            details={"url": url, "status_code": status_code},
        )
        self.url = url
        self.status_code = status_code


class AuthenticationError(TransportError):
    """Login against the app store failed."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, url=url, status_code=status_code, code="AUTHENTICATION_ERROR")


class ValidationError(AppStoreError):
    """Payload or argument validation failed.

    Raised when:
    - A version to publish lacks name, dockerTag or maturity
    - A maturity is not one of alpha, beta, stable
    - A local store key escapes the store root
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"field": field_name, "errors": errors or []},
        )
        self.field_name = field_name
        self.errors = errors or []


class VersionConflictError(AppStoreError):
    """A version with this name was already published for the app."""

    def __init__(self, version: str, app: str) -> None:
        super().__init__(
            f"can't republish an existing version {version} for app {app}",
            code="VERSION_CONFLICT",
            details={"version": version, "app": app},
        )
        self.version = version
        self.app = app


class ChannelNotFoundError(AppStoreError):
    """The app has no channel for the requested maturity."""

    def __init__(self, app: str, maturity: str) -> None:
        super().__init__(
            f'No channel "{maturity}" found for app "{app}"',
            code="CHANNEL_NOT_FOUND",
            details={"app": app, "maturity": maturity},
        )
        self.app = app
        self.maturity = maturity


class MissingHistoryError(AppStoreError):
    """No remote history exists for the app's installed channel."""

    def __init__(self, app: str, maturity: str) -> None:
        super().__init__(
            f'No history found for app "{app}" channel "{maturity}". aborting.',
            code="MISSING_HISTORY",
            details={"app": app, "maturity": maturity},
        )
        self.app = app
        self.maturity = maturity


class TargetVersionNotFoundError(AppStoreError):
    """An explicitly requested update target version does not exist."""

    def __init__(self, version: str) -> None:
        super().__init__(
            f"Update - Target version {version} does not exist in app-store",
            code="TARGET_NOT_FOUND",
            details={"version": version},
        )
        self.version = version


class LocalRecordNotFoundError(AppStoreError):
    """A local JSON record was read before it was ever written.

    Attributes:
        key: Store key (the docker image name of the app)
        path: File the record was expected at
    """

    def __init__(self, key: str, path: str) -> None:
        super().__init__(
            f"No local record for {key} at {path}",
            code="NOT_FOUND",
            details={"key": key, "path": path},
        )
        self.key = key
        self.path = path
