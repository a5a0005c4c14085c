##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Cancellation and deadline handling for store operations.

Every store operation accepts an optional `OperationContext`. A context can
be cancelled explicitly from another thread and can carry a deadline.
Stores call `check()` at the points where they can suspend (waiting on a
lock, before an I/O round-trip) so that work never starts after the caller
has given up on it.
"""

import logging
import threading
import time
from typing import Optional

from movies.exceptions import DeadlineExceededError, OperationCancelledError


LOG = logging.getLogger(__name__)


class OperationContext:
    """
    Carries the cancellation signal and optional deadline for one operation.

    Attributes:
        deadline: The `time.monotonic()` value after which the context is expired,
            or None if there is no deadline.

    Methods:
        with_timeout: Create a context that expires `timeout` seconds from now.
        cancel: Cancel this context.
        cancelled: Whether `cancel` was called on this context.
        expired: Whether the deadline has passed.
        done: Whether the context is cancelled or expired.
        remaining: Seconds left before the deadline, None if unbounded.
        check: Raise if the context is done.
    """

    def __init__(self, deadline: Optional[float] = None):
        """
        Initialize the context.

        Args:
            deadline: A `time.monotonic()` timestamp after which the context expires.
        """
        self.deadline: Optional[float] = deadline
        self._cancel_event = threading.Event()

    @classmethod
    def with_timeout(cls, timeout: Optional[float]) -> "OperationContext":
        """
        Create a context that expires `timeout` seconds from now.

        Args:
            timeout: Number of seconds until the context expires. None means no deadline.

        Returns:
            A new `OperationContext`.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        return cls(deadline=deadline)

    def cancel(self):
        """Cancel this context."""
        self._cancel_event.set()

    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def done(self) -> bool:
        return self.cancelled() or self.expired()

    def remaining(self) -> Optional[float]:
        """
        Compute the time left before the deadline.

        Returns:
            Seconds remaining (can be negative once expired), or None if the
            context has no deadline.
        """
        if self.deadline is None:
            return None
        return self.deadline - time.monotonic()

    def check(self, operation: str = "operation"):
        """
        Raise if the context is done.

        Args:
            operation: A short description used in the error message.

        Raises:
            OperationCancelledError: If the context was cancelled.
            DeadlineExceededError: If the deadline has passed.
        """
        if self.cancelled():
            LOG.debug(f"Context cancelled before {operation}.")
            raise OperationCancelledError(f"{operation} cancelled")
        if self.expired():
            LOG.debug(f"Context deadline exceeded before {operation}.")
            raise DeadlineExceededError(f"{operation} deadline exceeded")


def ensure_context(ctx: Optional[OperationContext]) -> OperationContext:
    """
    Return `ctx`, or a context that is never cancelled if `ctx` is None.

    Args:
        ctx: The context given by the caller.

    Returns:
        A usable `OperationContext`.
    """
    return OperationContext() if ctx is None else ctx
