##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
In-memory store implementation for the Movies application.

This module defines `MemoryMoviesStore`, the reference implementation of the
`MoviesStore` contract. Movies live in a process-local dictionary keyed by id,
guarded by one store-wide reader/writer lock: reads share the lock, writes hold
it exclusively for the whole operation, so every operation is atomic with
respect to concurrent callers and writes are totally ordered.
"""

import logging
import uuid
from contextlib import ExitStack, contextmanager
from typing import Dict, Iterator, List

from movies.backends.memory.rwlock import ReadWriteLock
from movies.backends.store_base import MoviesStore
from movies.context import OperationContext, ensure_context
from movies.data_models import CreateMovieParams, Movie, UpdateMovieParams
from movies.exceptions import DuplicateKeyError, RecordNotFoundError
from movies.utils import ensure_uuid, utc_now


LOG = logging.getLogger(__name__)

# Longest single wait on the lock before the context is checked again
LOCK_POLL_INTERVAL = 0.05


class MemoryMoviesStore(MoviesStore):
    """
    A process-local store for `Movie` objects.

    The store owns its dictionary exclusively. Callers only ever receive copies
    of the stored movies, so mutating a returned movie never changes the store.

    Attributes:
        backend_name (str): The name of the backend ("memory").

    Methods:
        get_all: Retrieve every movie in the store.
        get_by_id: Retrieve one movie by id.
        create: Create a new movie.
        update: Replace the mutable fields of an existing movie.
        delete: Delete a movie by id.
    """

    backend_name = "memory"

    def __init__(self, **kwargs):
        """
        Initialize an empty store.

        Args:
            kwargs: Settings meant for other backends; ignored.
        """
        if kwargs:
            LOG.debug(f"MemoryMoviesStore ignoring settings: {sorted(kwargs)}")
        self._movies: Dict[uuid.UUID, Movie] = {}
        self._lock = ReadWriteLock()

    @contextmanager
    def _locked(self, exclusive: bool, ctx: OperationContext, operation: str) -> Iterator[None]:
        """
        Hold the store lock while honouring the context's cancellation and deadline.

        Args:
            exclusive: True for a write hold, False for a read hold.
            ctx: The context of the operation.
            operation: Name of the operation, for error messages.

        Raises:
            OperationCancelledError: If the context is cancelled while waiting.
            DeadlineExceededError: If the deadline passes while waiting.
        """
        hold = self._lock.write_locked if exclusive else self._lock.read_locked

        with ExitStack() as stack:
            while True:
                ctx.check(operation)
                remaining = ctx.remaining()
                wait = LOCK_POLL_INTERVAL if remaining is None else max(0.0, min(LOCK_POLL_INTERVAL, remaining))
                try:
                    stack.enter_context(hold(wait))
                    break
                except TimeoutError:
                    continue
            yield

    def get_all(self, ctx: OperationContext = None) -> List[Movie]:
        """
        Retrieve every movie in the store.

        Args:
            ctx: The context of the operation.

        Returns:
            A list of copies of the stored movies, empty if there are none.
        """
        ctx = ensure_context(ctx)
        with self._locked(False, ctx, "get_all"):
            movies = [movie.copy() for movie in self._movies.values()]
        LOG.debug(f"Retrieved {len(movies)} movies from memory.")
        return movies

    def get_by_id(self, movie_id: uuid.UUID, ctx: OperationContext = None) -> Movie:
        """
        Retrieve a movie by its id.

        Args:
            movie_id: The id of the movie to retrieve.
            ctx: The context of the operation.

        Returns:
            A copy of the stored movie.

        Raises:
            RecordNotFoundError: If no movie with `movie_id` exists.
        """
        ctx = ensure_context(ctx)
        movie_id = ensure_uuid(movie_id)
        with self._locked(False, ctx, "get_by_id"):
            movie = self._movies.get(movie_id)
            if movie is None:
                raise RecordNotFoundError(movie_id)
            return movie.copy()

    def create(self, params: CreateMovieParams, ctx: OperationContext = None):
        """
        Create a new movie.

        The presence check and the insert happen under the same exclusive hold,
        so two concurrent creates of one id can't both succeed.

        Args:
            params: The fields of the new movie.
            ctx: The context of the operation.

        Raises:
            DuplicateKeyError: If a movie with `params.id` already exists.
        """
        ctx = ensure_context(ctx)
        with self._locked(True, ctx, "create"):
            if params.id in self._movies:
                raise DuplicateKeyError(params.id)
            self._movies[params.id] = params.to_movie(utc_now())
        LOG.debug(f"Created movie with id '{params.id}' in memory.")

    def update(self, movie_id: uuid.UUID, params: UpdateMovieParams, ctx: OperationContext = None):
        """
        Replace the mutable fields of an existing movie.

        Args:
            movie_id: The id of the movie to update.
            params: The new values of the mutable fields.
            ctx: The context of the operation.

        Raises:
            RecordNotFoundError: If no movie with `movie_id` exists.
        """
        ctx = ensure_context(ctx)
        movie_id = ensure_uuid(movie_id)
        with self._locked(True, ctx, "update"):
            existing = self._movies.get(movie_id)
            if existing is None:
                raise RecordNotFoundError(movie_id)
            self._movies[movie_id] = params.apply_to(existing, utc_now())
        LOG.debug(f"Updated movie with id '{movie_id}' in memory.")

    def delete(self, movie_id: uuid.UUID, ctx: OperationContext = None):
        """
        Delete a movie by its id. Unknown ids are ignored.

        Args:
            movie_id: The id of the movie to delete.
            ctx: The context of the operation.
        """
        ctx = ensure_context(ctx)
        movie_id = ensure_uuid(movie_id)
        with self._locked(True, ctx, "delete"):
            removed = self._movies.pop(movie_id, None)
        if removed is None:
            LOG.debug(f"No movie with id '{movie_id}' to delete from memory.")
        else:
            LOG.debug(f"Deleted movie with id '{movie_id}' from memory.")
