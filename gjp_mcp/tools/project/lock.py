import threading
from contextlib import AbstractContextManager, nullcontext
from typing import Protocol


class ProjectLock(Protocol):
    """
    A lease held for the duration of a phase transition.

    Concurrent use of one project directory by several processes is not
    supported; callers that need it can inject a real lock here.
    """

    def hold(self) -> AbstractContextManager[None]: ...


class NullLock:
    """A lock that never blocks."""

    def hold(self) -> AbstractContextManager[None]:
        return nullcontext()


class ThreadLock:
    """Serializes transitions among the threads of one process."""

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def hold(self) -> AbstractContextManager[None]:
        return self._lock
