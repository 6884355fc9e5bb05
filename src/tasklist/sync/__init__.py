"""
Client-side synchronization: mutation dispatcher and query synchronizer.

- :class:`MutationDispatcher` issues add/delete mutations and versions
  their settlement per stream.
- :class:`QuerySynchronizer` memoizes the task list under the version key
  and overlays still-pending adds.
- :class:`LocalTaskBackend` / :class:`HttpTaskBackend` are the two ways to
  reach the remote operations.
"""

from tasklist.sync.dispatcher import (
    InvalidTransition,
    MutationDispatcher,
    MutationStream,
    Submission,
    SubmissionState,
)
from tasklist.sync.http import HttpTaskBackend
from tasklist.sync.ports import LocalTaskBackend, TaskBackend
from tasklist.sync.synchronizer import DisplayRow, QuerySynchronizer, TaskListView

__all__ = [
    "DisplayRow",
    "HttpTaskBackend",
    "InvalidTransition",
    "LocalTaskBackend",
    "MutationDispatcher",
    "MutationStream",
    "QuerySynchronizer",
    "Submission",
    "SubmissionState",
    "TaskBackend",
    "TaskListView",
]
