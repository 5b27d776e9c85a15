"""
Channel/version normalization.

GraphQL returns versions nested under their channel. Callers want flat
version records that still know which maturity they came from.

Invariants:
    - Every flattened version carries its channel's maturity
    - The nested ``versions`` list never leaks into a flattened record
    - Order is preserved: channel by channel, versions in query order
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .types import ChannelRecord, VersionRecord


def flatten_channel(channel: ChannelRecord) -> list[VersionRecord]:
    """Merge a channel's scalar attributes into each of its versions.

    Version keys win on collision except ``maturity``, which always
    comes from the channel.
    """
    scalars = {key: value for key, value in channel.items() if key != "versions"}
    flattened = []
    for version in channel.get("versions") or []:
        record = {**scalars, **version}
        if "maturity" in channel:
            record["maturity"] = channel["maturity"]
        flattened.append(record)
    return flattened


def flatten(channels: Iterable[ChannelRecord]) -> list[VersionRecord]:
    """Flatten channels into one version list, channel by channel."""
    versions: list[VersionRecord] = []
    for channel in channels:
        versions.extend(flatten_channel(channel))
    return versions


def select_by_name(
    versions: Sequence[VersionRecord] | None,
    name: str,
) -> VersionRecord | None:
    """Return the first version whose name matches exactly, or None."""
    for version in versions or ():
        if version.get("name") == name:
            return version
    return None
