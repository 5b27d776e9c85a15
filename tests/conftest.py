"""
Shared fixtures for the App Store SDK tests.

FakeAppStore stands in for the Strapi server behind an
``httpx.MockTransport``: it issues a JWT on login, answers GraphQL
queries from a queue of canned ``data`` payloads and echoes created
version entries.
"""

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from appstore_sdk.config import AppOptions


class FakeAppStore:
    """Scriptable app store backend."""

    def __init__(self) -> None:
        self.graphql_responses: list[Any] = []
        self.logins = 0
        self.queries: list[str] = []
        self.created: list[dict[str, Any]] = []
        self.auth_headers: list[str | None] = []
        self.fail_graphql_with: int | None = None
        self.fail_login = False

    def queue(self, *data: dict[str, Any]) -> None:
        """Queue GraphQL ``data`` payloads, answered in order."""
        self.graphql_responses.extend(data)

    def queue_errors(self, *messages: str) -> None:
        self.graphql_responses.append({"errors": [{"message": m} for m in messages]})

    def handler(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content or b"{}")

        if request.url.path == "/auth/local":
            self.logins += 1
            if self.fail_login:
                return httpx.Response(400, json={"message": "Invalid identifier or password"})
            return httpx.Response(200, json={"jwt": "token-123", "user": {"username": body["identifier"]}})

        self.auth_headers.append(request.headers.get("Authorization"))

        if request.url.path == "/graphql":
            self.queries.append(body["query"])
            if self.fail_graphql_with is not None:
                return httpx.Response(self.fail_graphql_with, json={"message": "boom"})
            response = self.graphql_responses.pop(0)
            if "errors" in response:
                return httpx.Response(200, json=response)
            return httpx.Response(200, json={"data": response})

        if request.url.path == "/versions":
            entry = {"id": 100 + len(self.created), **body}
            self.created.append(entry)
            return httpx.Response(200, json=entry)

        return httpx.Response(404, json={"message": "Not Found"})

    def http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self.handler),
            base_url="https://appstore.test",
        )


def apps(*channels: dict[str, Any], app_id: int = 1) -> dict[str, Any]:
    """GraphQL ``data`` for one app owning ``channels``."""
    return {"apps": [{"id": app_id, "channels": list(channels)}]}


def channel(channel_id: int, maturity: str, *versions: dict[str, Any]) -> dict[str, Any]:
    return {"id": channel_id, "maturity": maturity, "versions": list(versions)}


def version(name: str, version_id: int = 1, **fields: Any) -> dict[str, Any]:
    return {
        "id": version_id,
        "name": name,
        "changelog": f"changes in {name}",
        "dockerTag": name,
        "created_at": "2020-01-01T00:00:00.000Z",
        **fields,
    }


@pytest.fixture
def fake_store() -> FakeAppStore:
    return FakeAppStore()


@pytest.fixture
def options(tmp_path) -> AppOptions:
    """Options with temporary local paths and test credentials."""
    return AppOptions(
        app="sicon/backend",
        username="sicon",
        password="secret",
        installed_version_path=str(tmp_path / "installed"),
        changelog_path=str(tmp_path / "changelog"),
        url="https://appstore.test",
    )
