"""
Query synchronizer — the memoized task list plus the pending overlay.

The synchronizer keeps one committed list fetched from the backend and
memoizes it under the *version key*: the tuple of every tracked stream's
version.  A read re-fetches only when the key moved since the last
successful fetch; otherwise the memo is reused as is.

On top of the committed list it lays the **pending overlay**: the
submissions of the overlay stream (the add stream) that are still
PENDING, in issue order.  Submissions of every tracked stream that had
settled *before* a fetch started are dropped from their arenas once that
fetch succeeds, so a settled submission never outlives the first
successful refresh after it settled.

Reads are serialized by a lock; reads queued behind a refresh reuse its
result, which coalesces bursts of version changes into one fetch.

If a fetch fails the read returns the classified error and the last
known-good view is kept with ``failed=True``.  The memo key is not
advanced, so the next read tries again.

Example::

    dispatcher = MutationDispatcher(backend)
    sync = QuerySynchronizer.for_dispatcher(dispatcher)

    dispatcher.submit_add("Buy milk")
    view = (await sync.read()).data       # "Buy milk" shown as pending
    await dispatcher.drain()
    view = (await sync.read()).data       # "Buy milk" committed, overlay empty

Tags:
    tasklist, sync, memoization, optimistic-ui, reconciliation
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any

from tasklist.core.errors import AppError, classify
from tasklist.core.logging import get_logger
from tasklist.core.models import Task
from tasklist.ops.result import OperationError, OperationResult
from tasklist.sync.dispatcher import MutationDispatcher, MutationStream, Submission

logger = get_logger(__name__)

Fetch = Callable[[], Awaitable[OperationResult[list[Task]]]]


@dataclass(frozen=True, slots=True)
class DisplayRow:
    """One rendered line: a committed task or a pending submission."""

    title: str
    id: int | None = None
    completed: bool = False
    pending: bool = False
    seq: int | None = None


@dataclass(frozen=True)
class TaskListView:
    """Committed tasks followed by the pending overlay.

    Attributes:
        tasks: Committed tasks from the last successful fetch.
        pending: PENDING add submissions, in issue order.
        failed: ``True`` when the most recent fetch failed (``tasks`` is
            then the last known-good list).
        error: The classified failure when ``failed``.
        version_key: The version key ``tasks`` was fetched under.
    """

    tasks: tuple[Task, ...] = ()
    pending: tuple[Submission[str], ...] = ()
    failed: bool = False
    error: OperationError | None = None
    version_key: tuple[int, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.tasks and not self.pending

    def rows(self) -> list[DisplayRow]:
        rows = [DisplayRow(title=t.title, id=t.id, completed=t.completed) for t in self.tasks]
        rows.extend(DisplayRow(title=s.input, pending=True, seq=s.seq) for s in self.pending)
        return rows


def _unique(streams: Iterable[MutationStream[Any]]) -> tuple[MutationStream[Any], ...]:
    seen: dict[int, MutationStream[Any]] = {}
    for stream in streams:
        seen.setdefault(id(stream), stream)
    return tuple(seen.values())


class QuerySynchronizer:
    """Memoized list query invalidated by mutation stream versions."""

    def __init__(
        self,
        fetch: Fetch,
        *,
        tracked: Iterable[MutationStream[Any]],
        overlay: MutationStream[str] | None = None,
    ) -> None:
        self._fetch = fetch
        # Each distinct stream is tracked once, however often it is passed in.
        self._tracked = _unique(tracked)
        self._overlay = overlay

        self._key: tuple[int, ...] | None = None
        self._tasks: tuple[Task, ...] = ()
        self._view: TaskListView | None = None
        self._failed_key: tuple[int, ...] | None = None
        self._lock = asyncio.Lock()
        self._changed = asyncio.Event()
        self._unsubscribers = [s.subscribe(self._on_settle) for s in self._tracked]
        self.fetch_count = 0

    @classmethod
    def for_dispatcher(cls, dispatcher: MutationDispatcher) -> QuerySynchronizer:
        """Track both streams of *dispatcher* and overlay its add stream."""
        return cls(
            dispatcher.backend.list_tasks,
            tracked=dispatcher.streams,
            overlay=dispatcher.add_stream,
        )

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def tracked(self) -> tuple[MutationStream[Any], ...]:
        return self._tracked

    def version_key(self) -> tuple[int, ...]:
        return tuple(s.version for s in self._tracked)

    @property
    def stale(self) -> bool:
        """``True`` when the next read will re-fetch."""
        return self._key is None or self._key != self.version_key()

    @property
    def view(self) -> TaskListView | None:
        """The last view handed out (possibly a failed one)."""
        return self._view

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    async def read(self) -> OperationResult[TaskListView]:
        """Return the current view, re-fetching first if the key moved."""
        async with self._lock:
            if self.stale:
                failure = await self._refresh()
                if failure is not None:
                    return failure
            self._view = TaskListView(
                tasks=self._tasks,
                pending=self._pending(),
                version_key=self._key or (),
            )
            return OperationResult.ok(self._view)

    async def changes(self) -> AsyncIterator[OperationResult[TaskListView]]:
        """Yield a fresh read after every (possibly coalesced) version change.

        The first iteration yields immediately if nothing was read yet.  A
        failed read is not retried until the version key moves again.
        """
        while True:
            if self._view is not None and not self._needs_read():
                self._changed.clear()
                await self._changed.wait()
            yield await self.read()

    def close(self) -> None:
        """Stop listening to the tracked streams."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _pending(self) -> tuple[Submission[str], ...]:
        if self._overlay is None:
            return ()
        return tuple(self._overlay.pending())

    def _arenas(self) -> tuple[MutationStream[Any], ...]:
        extra = (self._overlay,) if self._overlay is not None else ()
        return _unique((*self._tracked, *extra))

    def _needs_read(self) -> bool:
        if not self.stale:
            return False
        return self._failed_key != self.version_key()

    def _on_settle(self, stream: MutationStream[Any], sub: Submission[Any]) -> None:
        self._changed.set()

    async def _refresh(self) -> OperationResult[TaskListView] | None:
        key = self.version_key()
        settled = [
            (stream, [s for s in stream.submissions() if s.settled]) for stream in self._arenas()
        ]

        try:
            result = await self._fetch()
        except Exception as exc:
            logger.exception("query_fetch_raised")
            result = OperationResult.fail(classify(exc), str(exc))
        self.fetch_count += 1

        if not result.success:
            error = result.error or OperationError(kind=AppError.INTERNAL_SERVER_ERROR)
            prior = self._view or TaskListView()
            self._view = TaskListView(
                tasks=prior.tasks,
                pending=self._pending(),
                failed=True,
                error=error,
                version_key=prior.version_key,
            )
            self._failed_key = key
            logger.warning("query_failed", kind=error.kind.value, detail=error.detail)
            return OperationResult.fail(error.kind, error.detail)

        self._tasks = tuple(result.data or ())
        self._key = key
        self._failed_key = None
        for stream, subs in settled:
            stream.discard(subs)
        logger.debug("query_refreshed", version_key=key, count=len(self._tasks))
        return None
