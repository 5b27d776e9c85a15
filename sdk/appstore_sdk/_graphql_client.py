"""
Internal GraphQL client for the App Store SDK.

This module provides the low-level HTTP communication layer with the
Strapi-based app store: login, GraphQL queries and REST entry creation.
It is internal to the SDK and should not be used directly by users.

Users should use AppStoreApp instead, which provides a clean Python API.

Invariants:
    - Authentication happens at most once per client instance
    - Anonymous access is used when no credentials are configured
    - Every failure surfaces as TransportError (or AuthenticationError)
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import AuthenticationError, TransportError

logger = logging.getLogger(__name__)

APPSTORE_URL = "https://app-store-api.service.sicon.eco"


class GraphQLClient:
    """Internal HTTP client for the app store.

    Manages the httpx connection lifecycle and a lazily acquired JWT.

    This is an internal class - users should use AppStoreApp instead.
    """

    def __init__(
        self,
        base_url: str = APPSTORE_URL,
        username: str = "",
        password: str = "",
        *,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: App store server URL
            username: Login identifier (empty for anonymous access)
            password: Login password
            timeout: Request timeout in seconds
            http_client: Optional preconfigured httpx client (not closed by us)
        """
        self._base_url = base_url.rstrip("/")
        self._username = username
        self._password = password
        self._timeout = timeout
        self._http = http_client
        self._owns_http = http_client is None
        self._token: str | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def authenticated(self) -> bool:
        """Whether a JWT has been obtained."""
        return self._token is not None

    async def connect(self) -> None:
        """Create the underlying HTTP client if needed."""
        if self._http is not None:
            return

        self._http = httpx.AsyncClient(base_url=self._base_url, timeout=self._timeout)
        self._owns_http = True
        logger.debug(f"Connected to app store at {self._base_url}")

    async def close(self) -> None:
        """Close the HTTP client if we created it."""
        if self._http is not None and self._owns_http:
            await self._http.aclose()
            self._http = None
            logger.debug("Disconnected from app store")
        self._token = None

    async def __aenter__(self) -> GraphQLClient:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    def _ensure_connected(self) -> httpx.AsyncClient:
        """Ensure we're connected and return the HTTP client."""
        if self._http is None:
            raise RuntimeError("Not connected. Call connect() first.")
        return self._http

    def _headers(self) -> dict[str, str]:
        if self._token is None:
            return {}
        return {"Authorization": f"Bearer {self._token}"}

    async def _post(self, path: str, payload: dict[str, Any], *, authenticate: bool = True) -> Any:
        """POST JSON and return the decoded body."""
        await self.connect()
        http = self._ensure_connected()
        if authenticate:
            await self.login()

        url = f"{self._base_url}{path}"
        try:
            response = await http.post(url, json=payload, headers=self._headers())
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"App store request to {path} failed with status {e.response.status_code}",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"App store request to {path} failed: {e}", url=url) from e
        except ValueError as e:
            raise TransportError(f"App store returned invalid JSON for {path}: {e}", url=url) from e

    async def login(self) -> None:
        """Authenticate once; no-op when already authenticated or anonymous."""
        if self.authenticated or not self._username:
            return

        try:
            body = await self._post(
                "/auth/local",
                {"identifier": self._username, "password": self._password},
                authenticate=False,
            )
        except TransportError as e:
            raise AuthenticationError(
                f"Login failed for user {self._username}: {e.message}",
                url=e.url,
                status_code=e.status_code,
            ) from e

        token = body.get("jwt") if isinstance(body, dict) else None
        if not token:
            raise AuthenticationError(
                f"Login for user {self._username} returned no token",
                url=f"{self._base_url}/auth/local",
            )
        self._token = token
        logger.debug(f"Authenticated against app store as {self._username}")

    async def execute(self, query: str) -> dict[str, Any]:
        """Run a GraphQL query.

        Args:
            query: GraphQL query document

        Returns:
            The ``data`` member of the response

        Raises:
            TransportError: On HTTP failure or GraphQL errors
        """
        logger.debug(f"GraphQL query: {' '.join(query.split())}")
        body = await self._post("/graphql", {"query": query})

        errors = body.get("errors") if isinstance(body, dict) else None
        if errors:
            messages = "; ".join(str(error.get("message", error)) for error in errors)
            raise TransportError(f"GraphQL query failed: {messages}", url=f"{self._base_url}/graphql")

        data = body.get("data") if isinstance(body, dict) else None
        return data or {}

    async def create_entry(self, collection: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Create an entry in a REST collection.

        Args:
            collection: Collection name (e.g. ``versions``)
            payload: Entry fields

        Returns:
            The created entry as returned by the server
        """
        return await self._post(f"/{collection}", payload)
