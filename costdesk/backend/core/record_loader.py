"""
Cancellable single-record loader.

A page fetches one record by identifier when it is rendered and gates its
content on the outcome.  :class:`RecordLoader` models that fetch as an
asyncio task keyed by the requested identifier:

- ``load(id)`` starts the fetch and moves to ``LOADING``;
- a later ``load`` with another identifier, or ``dispose()``, cancels the
  in-flight task, and a result that still arrives for a superseded
  identifier is discarded;
- the fetch settles in ``LOADED``, ``NOT_FOUND`` or ``ERROR``.

``NOT_FOUND`` is its own state: an absent record never leaves the loader
stuck in ``LOADING``.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from costdesk.backend.core.errors import RecordNotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    NOT_FOUND = "not_found"
    ERROR = "error"


@dataclass(frozen=True)
class LoaderSnapshot(Generic[T]):
    """Immutable view of the loader at one point in time."""

    identifier: str | None
    state: LoadState
    record: T | None = None
    error: BaseException | None = None

    @property
    def settled(self) -> bool:
        return self.state in (LoadState.LOADED, LoadState.NOT_FOUND, LoadState.ERROR)


Listener = Callable[[LoaderSnapshot[Any]], None]


class RecordLoader(Generic[T]):
    """
    Fetch one record by identifier with cancellation of stale requests.

    Args:
        fetch: Coroutine function returning the record for an identifier.
            Returning ``None`` or raising :class:`RecordNotFoundError` means
            the record does not exist; any other exception is an error.

    Usage:
        async with RecordLoader(fetch_project) as loader:
            loader.load(project_id)
            snapshot = await loader.wait()
    """

    def __init__(self, fetch: Callable[[str], Awaitable[T | None]]) -> None:
        self._fetch = fetch
        self._task: asyncio.Task[None] | None = None
        self._listeners: list[Listener] = []
        self._disposed = False
        self.snapshot: LoaderSnapshot[T] = LoaderSnapshot(identifier=None, state=LoadState.IDLE)

    # ── Public API ───────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` on every state transition; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def load(self, identifier: str) -> asyncio.Task[None] | None:
        """
        Start fetching ``identifier``.

        Re-requesting the identifier that is already loading or loaded is a
        no-op, so a loaded record never reverts to ``LOADING``.

        Raises:
            RuntimeError: If the loader has been disposed
        """
        if self._disposed:
            raise RuntimeError("RecordLoader has been disposed")

        if identifier == self.snapshot.identifier and self.snapshot.state in (LoadState.LOADING, LoadState.LOADED):
            return self._task

        self._cancel_pending()
        self._transition(LoaderSnapshot(identifier=identifier, state=LoadState.LOADING))
        self._task = asyncio.get_running_loop().create_task(self._run(identifier))
        return self._task

    async def wait(self, timeout: float | None = None) -> LoaderSnapshot[T]:
        """
        Wait until the current fetch settles (or is cancelled) and return the snapshot.

        With ``timeout`` the wait gives up after that many seconds and the
        snapshot may still be ``LOADING``; the fetch itself keeps running.
        """
        loop = asyncio.get_running_loop()
        deadline = None if timeout is None else loop.time() + timeout
        while self._task is not None and not self._task.done():
            remaining = None if deadline is None else deadline - loop.time()
            if remaining is not None and remaining <= 0:
                break
            await asyncio.wait({self._task}, timeout=remaining)
        return self.snapshot

    def dispose(self) -> None:
        """Cancel any in-flight fetch and drop all listeners."""
        self._cancel_pending()
        self._disposed = True
        self._listeners.clear()

    async def __aenter__(self) -> RecordLoader[T]:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        self.dispose()

    # ── Internals ────────────────────────────────────────────────────────────

    async def _run(self, identifier: str) -> None:
        try:
            record = await self._fetch(identifier)
        except RecordNotFoundError:
            self._settle(identifier, LoadState.NOT_FOUND)
        except Exception as exc:
            logger.warning("Fetching %r failed: %s", identifier, exc)
            self._settle(identifier, LoadState.ERROR, error=exc)
        else:
            if record is None:
                self._settle(identifier, LoadState.NOT_FOUND)
            else:
                self._settle(identifier, LoadState.LOADED, record=record)

    def _settle(
        self,
        identifier: str,
        state: LoadState,
        record: T | None = None,
        error: BaseException | None = None,
    ) -> None:
        if self._disposed or identifier != self.snapshot.identifier:
            logger.debug("Discarding stale result for %r", identifier)
            return
        self._transition(LoaderSnapshot(identifier=identifier, state=state, record=record, error=error))

    def _transition(self, snapshot: LoaderSnapshot[T]) -> None:
        self.snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
