"""
Remote-first resolution with local fallback.

Read operations try the app store first and fall back to the local
cache when the remote attempt raises. A remote result of None is a
valid answer and is returned as is; only an exception triggers the
fallback.

Example:
    >>> version = await remote_first_try(
    ...     remote=lambda: get_remote_app_version(ctx, "r1.0.0"),
    ...     local=lambda: get_local_app_version(ctx, "r1.0.0"),
    ...     should_try_remote=True,
    ... )

Invariants:
    - should_try_remote is evaluated once, before any producer runs
    - A failing should_try_remote predicate propagates; no producer runs
    - With should_try_remote False the remote producer is never called
    - A local failure after a remote failure propagates unchanged
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")

Producer = Callable[[], Awaitable[T]]
ShouldTryRemote = Union[bool, Callable[[], Union[bool, Awaitable[bool]]]]


@dataclass
class FallbackStrategy(Generic[T]):
    """A primary producer and the fallback used when it fails.

    Attributes:
        primary: Zero-argument coroutine function tried first
        fallback: Zero-argument coroutine function used on primary failure
        description: Label for log messages
    """

    primary: Producer[T]
    fallback: Producer[T]
    description: str = "remote lookup"

    async def attempt_primary(self) -> T:
        return await self.primary()

    async def attempt_fallback(self) -> T:
        return await self.fallback()


async def evaluate_should_try_remote(should_try_remote: ShouldTryRemote) -> bool:
    """Resolve a bool or (async) predicate to a bool."""
    if not callable(should_try_remote):
        return bool(should_try_remote)
    result: Any = should_try_remote()
    if inspect.isawaitable(result):
        result = await result
    return bool(result)


async def resolve(
    strategy: FallbackStrategy[T],
    should_try_remote: ShouldTryRemote = True,
) -> T:
    """Run a strategy: primary first, fallback on failure.

    Args:
        strategy: Producers to coordinate
        should_try_remote: Whether to attempt the primary at all

    Returns:
        The primary's result, or the fallback's when the primary raised
        or was skipped
    """
    if not await evaluate_should_try_remote(should_try_remote):
        return await strategy.attempt_fallback()

    try:
        return await strategy.attempt_primary()
    except Exception as e:
        logger.warning(f"{strategy.description} failed, now trying local: {e}")
        logger.debug("remote failure details", exc_info=True)

    return await strategy.attempt_fallback()


async def remote_first_try(
    remote: Producer[T],
    local: Producer[T],
    should_try_remote: ShouldTryRemote = True,
    description: str = "remote lookup",
) -> T:
    """Return the remote result, falling back to local if remote raises."""
    strategy = FallbackStrategy(primary=remote, fallback=local, description=description)
    return await resolve(strategy, should_try_remote)
