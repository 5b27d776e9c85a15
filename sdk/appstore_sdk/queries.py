"""
GraphQL query builders for the app store schema.

Every query selects the app by docker image (optionally narrowed to an
author), then its channels, then the versions of interest. String
arguments are emitted as JSON string literals, which are valid GraphQL
strings, so names containing quotes cannot break the document.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from typing import Union

VersionFields = Union[Sequence[str], str]


def _literal(value: str) -> str:
    return json.dumps(str(value))


def format_fields(fields: VersionFields) -> str:
    """Render a field selection from a sequence or whitespace-separated string."""
    names = fields.split() if isinstance(fields, str) else list(fields)
    return "\n".join(names)


def apps_condition(app: str, username: str = "") -> str:
    """``apps(where: ...)`` selector for an app, optionally by author."""
    condition = f"dockerImage: {_literal(app)}"
    if username:
        condition += f", author: {{ username: {_literal(username)} }}"
    return f"apps(where: {{ {condition} }})"


def _channels_query(app: str, username: str, channel_args: str, versions_block: str = "") -> str:
    return f"""{{
    {apps_condition(app, username)} {{
        id
        channels{channel_args} {{
            id
            maturity
            {versions_block}
        }}
    }}
}}"""


def channels_query(app: str, username: str = "") -> str:
    """All channels of an app."""
    return _channels_query(app, username, "")


def channel_query(app: str, username: str, maturity: str) -> str:
    """The channel of an app matching ``maturity``."""
    return _channels_query(app, username, f"(where: {{ maturity: {_literal(maturity)} }})")


def version_query(app: str, username: str, name: str, fields: VersionFields) -> str:
    """At most one version per channel named ``name``, newest first."""
    versions = (
        f'versions(limit: 1, sort: "created_at:desc", where: {{ name: {_literal(name)} }}) '
        f"{{\n{format_fields(fields)}\n}}"
    )
    return _channels_query(app, username, "", versions)


def latest_version_query(app: str, username: str, maturity: str, fields: VersionFields) -> str:
    """The newest version of the channel matching ``maturity``."""
    versions = f'versions(limit: 1, sort: "created_at:desc") {{\n{format_fields(fields)}\n}}'
    return _channels_query(
        app, username, f"(where: {{ maturity: {_literal(maturity)} }})", versions
    )


def changelog_query(
    app: str,
    username: str,
    maturity: str,
    fields: VersionFields,
    limit: int = 10,
    start: int = 0,
) -> str:
    """A page of versions of the channel matching ``maturity``, newest first."""
    versions = (
        f'versions(limit: {int(limit)}, start: {int(start)}, sort: "created_at:desc") '
        f"{{\n{format_fields(fields)}\n}}"
    )
    return _channels_query(
        app, username, f"(where: {{ maturity: {_literal(maturity)} }})", versions
    )
