"""Cooperative cancellation for pagination runs.

A :class:`Context` is threaded through every capability call. The paginator
checks it before each page fetch; capabilities may check it themselves to
abandon in-flight work early.
"""

import time

from github_paginator.exceptions import (
    DeadlineExceededError,
    PaginationCancelledError,
)


class Context:
    """Cancellation token with an optional deadline."""

    def __init__(self, deadline: float | None = None):
        self._deadline = deadline  # time.monotonic() value
        self._cancelled = False

    @classmethod
    def background(cls) -> "Context":
        """A context that is never cancelled unless cancel() is called."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> "Context":
        """A context whose deadline passes ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        """Cancel the context. Idempotent."""
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def done(self) -> bool:
        """True once the context has been cancelled or its deadline passed."""
        return self._cancelled or self.expired

    def remaining(self) -> float | None:
        """Seconds until the deadline, or None when there is no deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def err(self) -> PaginationCancelledError | None:
        """The cancellation error, or None while the context is live."""
        if self._cancelled:
            return PaginationCancelledError()
        if self.expired:
            return DeadlineExceededError()
        return None

    def __repr__(self) -> str:
        return f"Context(cancelled={self._cancelled}, deadline={self._deadline})"
