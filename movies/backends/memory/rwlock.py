##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
A reader/writer lock for threads.

Any number of readers may hold the lock at the same time; a writer holds it
alone. Writers are preferred: as soon as a writer is waiting, new readers
queue behind it so a steady stream of reads can't starve writes.
"""

import threading
import time
from contextlib import contextmanager
from typing import Iterator, Optional


class ReadWriteLock:
    """
    A writer-preferring reader/writer lock.

    Methods:
        acquire_read: Acquire the lock in shared mode.
        release_read: Release a shared hold.
        acquire_write: Acquire the lock in exclusive mode.
        release_write: Release the exclusive hold.
        read_locked: Context manager for a shared hold.
        write_locked: Context manager for an exclusive hold.
    """

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @staticmethod
    def _wait_for(cond: threading.Condition, predicate, timeout: Optional[float]) -> bool:
        if timeout is not None and timeout <= 0:
            return predicate()
        return cond.wait_for(predicate, timeout=timeout)

    def acquire_read(self, timeout: Optional[float] = None) -> bool:
        """
        Acquire the lock in shared mode.

        Args:
            timeout: Seconds to wait at most. None waits forever.

        Returns:
            True if the lock was acquired, False if the timeout elapsed.
        """
        with self._cond:
            acquired = self._wait_for(self._cond, lambda: not self._writer and not self._writers_waiting, timeout)
            if acquired:
                self._readers += 1
            return acquired

    def release_read(self):
        with self._cond:
            if self._readers <= 0:
                raise RuntimeError("release_read called on a lock that is not read-held")
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self, timeout: Optional[float] = None) -> bool:
        """
        Acquire the lock in exclusive mode.

        Args:
            timeout: Seconds to wait at most. None waits forever.

        Returns:
            True if the lock was acquired, False if the timeout elapsed.
        """
        with self._cond:
            self._writers_waiting += 1
            try:
                acquired = self._wait_for(self._cond, lambda: not self._writer and self._readers == 0, timeout)
            finally:
                self._writers_waiting -= 1
            if acquired:
                self._writer = True
            else:
                # Readers may have queued behind this writer
                self._cond.notify_all()
            return acquired

    def release_write(self):
        with self._cond:
            if not self._writer:
                raise RuntimeError("release_write called on a lock that is not write-held")
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read_locked(self, timeout: Optional[float] = None) -> Iterator[None]:
        """
        Hold the lock in shared mode for the duration of a `with` block.

        Args:
            timeout: Seconds to wait at most. None waits forever.

        Raises:
            TimeoutError: If the lock couldn't be acquired in time.
        """
        start = time.monotonic()
        if not self.acquire_read(timeout):
            raise TimeoutError(f"timed out after {time.monotonic() - start:.3f}s waiting for a read lock")
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write_locked(self, timeout: Optional[float] = None) -> Iterator[None]:
        """
        Hold the lock in exclusive mode for the duration of a `with` block.

        Args:
            timeout: Seconds to wait at most. None waits forever.

        Raises:
            TimeoutError: If the lock couldn't be acquired in time.
        """
        start = time.monotonic()
        if not self.acquire_write(timeout):
            raise TimeoutError(f"timed out after {time.monotonic() - start:.3f}s waiting for a write lock")
        try:
            yield
        finally:
            self.release_write()
