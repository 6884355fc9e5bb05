"""
Mutation dispatcher — issues add/delete mutations and versions their settlement.

Each mutation kind is a :class:`MutationStream`.  A stream owns:

- a **version** counter, bumped exactly once every time one of its
  submissions settles (committed *or* failed);
- an **arena** of :class:`Submission` objects keyed by a local sequence
  number (the server id is unknown until commit).

Submission lifecycle::

    IDLE ──issue──▶ PENDING ──ok──▶ COMMITTED
                       │
                       └──fail──▶ FAILED

PENDING is entered synchronously when the caller issues the mutation,
before the backend is awaited, so a reader sees the submission at once.
COMMITTED and FAILED are terminal.  Several submissions of one stream may
be PENDING together; each settles on its own.

Settlement runs in its own task, shielded from the issuing caller: a
caller that stops waiting does not cancel, retry or roll back the
mutation, and the version still advances when it concludes.

Tags:
    tasklist, sync, mutations, optimistic-ui, versioning
"""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Awaitable, Callable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from tasklist.core.errors import AppError, classify
from tasklist.core.logging import get_logger
from tasklist.ops.result import OperationError, OperationResult
from tasklist.sync.ports import TaskBackend

logger = get_logger(__name__)

P = TypeVar("P")

SettleListener = Callable[["MutationStream[Any]", "Submission[Any]"], None]


class SubmissionState(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    FAILED = "failed"


_TRANSITIONS: dict[SubmissionState, frozenset[SubmissionState]] = {
    SubmissionState.IDLE: frozenset({SubmissionState.PENDING}),
    SubmissionState.PENDING: frozenset({SubmissionState.COMMITTED, SubmissionState.FAILED}),
    SubmissionState.COMMITTED: frozenset(),
    SubmissionState.FAILED: frozenset(),
}


class InvalidTransition(RuntimeError):
    """A submission was asked to move along an edge the lifecycle forbids."""


@dataclass(eq=False)
class Submission(Generic[P]):
    """One issued mutation.

    Attributes:
        seq: Local sequence number, unique across every stream of a dispatcher.
        stream: Name of the owning stream (``"add"``, ``"delete"``).
        input: The mutation payload (a title, a task id, ...).
        state: Current lifecycle state.
        result: The backend's result once settled.
    """

    seq: int
    stream: str
    input: P
    state: SubmissionState = SubmissionState.IDLE
    result: OperationResult[Any] | None = None
    _settled: asyncio.Event = field(default_factory=asyncio.Event, init=False, repr=False)

    @property
    def pending(self) -> bool:
        return self.state is SubmissionState.PENDING

    @property
    def settled(self) -> bool:
        return self.state in (SubmissionState.COMMITTED, SubmissionState.FAILED)

    @property
    def error(self) -> OperationError | None:
        return self.result.error if self.result is not None else None

    def transition(self, to: SubmissionState) -> None:
        if to not in _TRANSITIONS[self.state]:
            raise InvalidTransition(f"submission {self.seq}: {self.state.value} -> {to.value}")
        self.state = to
        if self.settled:
            self._settled.set()

    async def wait(self) -> Submission[P]:
        """Wait until this submission settles."""
        await self._settled.wait()
        return self


class MutationStream(Generic[P]):
    """A single mutation kind with its version counter and submission arena."""

    def __init__(
        self,
        name: str,
        operation: Callable[[P], Awaitable[OperationResult[Any]]],
        *,
        sequence: Iterator[int] | None = None,
    ) -> None:
        self.name = name
        self._operation = operation
        self._sequence = sequence or itertools.count(1)
        self._version = 0
        self._submissions: dict[int, Submission[P]] = {}
        self._inflight: set[asyncio.Task[None]] = set()
        self._listeners: list[SettleListener] = []

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    @property
    def version(self) -> int:
        """Number of settlements so far.  Strictly increasing."""
        return self._version

    def submissions(self) -> list[Submission[P]]:
        """Every submission still in the arena, in issue order."""
        return [self._submissions[seq] for seq in sorted(self._submissions)]

    def pending(self) -> list[Submission[P]]:
        return [s for s in self.submissions() if s.pending]

    def subscribe(self, listener: SettleListener) -> Callable[[], None]:
        """Call *listener(stream, submission)* after every settlement.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener)

    def discard(self, submissions: list[Submission[P]]) -> None:
        """Drop settled submissions from the arena (after reconciliation)."""
        for sub in submissions:
            if not sub.settled:
                raise InvalidTransition(f"submission {sub.seq} is still {sub.state.value}")
            self._submissions.pop(sub.seq, None)

    # ------------------------------------------------------------------
    # Issuing
    # ------------------------------------------------------------------

    def submit(self, payload: P) -> Submission[P]:
        """Issue a mutation and return its PENDING submission immediately.

        Must be called from within a running event loop.
        """
        sub: Submission[P] = Submission(seq=next(self._sequence), stream=self.name, input=payload)
        sub.transition(SubmissionState.PENDING)
        self._submissions[sub.seq] = sub

        task = asyncio.get_running_loop().create_task(self._run(sub))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return sub

    async def dispatch(self, payload: P) -> Submission[P]:
        """Issue a mutation and wait for it to settle."""
        sub = self.submit(payload)
        return await sub.wait()

    async def drain(self) -> None:
        """Wait for every in-flight submission of this stream to settle."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight))

    async def _run(self, sub: Submission[P]) -> None:
        try:
            result = await self._operation(sub.input)
        except asyncio.CancelledError:
            # The settlement task itself was cancelled (e.g. loop shutdown).
            cancelled = OperationResult.fail(
                AppError.INTERNAL_SERVER_ERROR, "Mutation cancelled before settlement"
            )
            self._settle(sub, cancelled)
            raise
        except Exception as exc:
            logger.exception("mutation_raised", stream=self.name, seq=sub.seq)
            result = OperationResult.fail(classify(exc), str(exc))
        self._settle(sub, result)

    def _settle(self, sub: Submission[P], result: OperationResult[Any]) -> None:
        sub.result = result
        sub.transition(SubmissionState.COMMITTED if result.success else SubmissionState.FAILED)
        self._version += 1
        if result.success:
            logger.debug("mutation_committed", stream=self.name, seq=sub.seq, version=self._version)
        else:
            logger.info(
                "mutation_failed",
                stream=self.name,
                seq=sub.seq,
                version=self._version,
                kind=result.kind.value if result.kind else None,
            )
        for listener in list(self._listeners):
            listener(self, sub)

    def __repr__(self) -> str:
        return f"MutationStream({self.name!r}, version={self._version})"


class MutationDispatcher:
    """Owns the add and delete streams for one :class:`TaskBackend`.

    Example::

        dispatcher = MutationDispatcher(LocalTaskBackend(store))
        sub = dispatcher.submit_add("Buy milk")     # PENDING right away
        await sub.wait()                            # COMMITTED or FAILED
        dispatcher.versions()                       # (1, 0)
    """

    def __init__(self, backend: TaskBackend) -> None:
        self.backend = backend
        sequence = itertools.count(1)
        self.add_stream: MutationStream[str] = MutationStream(
            "add", backend.add_task, sequence=sequence
        )
        self.delete_stream: MutationStream[int] = MutationStream(
            "delete", backend.delete_task, sequence=sequence
        )

    @property
    def streams(self) -> tuple[MutationStream[Any], ...]:
        return (self.add_stream, self.delete_stream)

    def versions(self) -> tuple[int, ...]:
        return tuple(s.version for s in self.streams)

    def submit_add(self, title: str) -> Submission[str]:
        return self.add_stream.submit(title)

    def submit_delete(self, task_id: int) -> Submission[int]:
        return self.delete_stream.submit(task_id)

    async def add(self, title: str) -> Submission[str]:
        return await self.add_stream.dispatch(title)

    async def delete(self, task_id: int) -> Submission[int]:
        return await self.delete_stream.dispatch(task_id)

    async def drain(self) -> None:
        await asyncio.gather(*(s.drain() for s in self.streams))
