##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Redis-based store implementation for movies.

Each movie is stored as a hash at `<key>:<id>`. Creates and updates run as
optimistic WATCH/MULTI transactions so that the existence check and the write
are atomic with respect to other clients; redis-py retries the transaction if
the watched key changes underneath it.

See also:
    - movies.backends.store_base: Base class
    - movies.backends.utils: Serialization helpers
"""

import logging
import uuid
from typing import List

from redis import Redis
from redis.client import Pipeline

from movies.backends.store_base import MoviesStore
from movies.backends.utils import deserialize_movie, serialize_movie
from movies.config.configfile import DEFAULT_POOL_SIZE
from movies.context import OperationContext, ensure_context
from movies.data_models import CreateMovieParams, Movie, UpdateMovieParams
from movies.exceptions import ConfigurationError, DuplicateKeyError, RecordNotFoundError
from movies.utils import ensure_uuid, utc_now


LOG = logging.getLogger(__name__)


class RedisMoviesStore(MoviesStore):
    """
    A Redis-based store for `Movie` objects.

    Attributes:
        backend_name (str): The name of the backend ("redis").
        client (Redis): The Redis client used for database operations.
        key (str): The prefix key used for Redis entries.

    Methods:
        get_all: Retrieve every movie in the store.
        get_by_id: Retrieve one movie by id.
        create: Create a new movie.
        update: Replace the mutable fields of an existing movie.
        delete: Delete a movie by id.
        get_version: Query Redis for its version.
        close: Close the Redis client and its connection pool.
    """

    backend_name = "redis"

    def __init__(
        self,
        database_url: str = None,
        key: str = "movie",
        socket_timeout: float = None,
        pool_size: int = DEFAULT_POOL_SIZE,
        client: Redis = None,
        **kwargs,
    ):
        """
        Initialize the Redis store with a Redis client.

        Args:
            database_url: A `redis://` or `rediss://` URL. Not needed if `client` is given.
            key: The prefix key used for Redis entries.
            socket_timeout: Seconds to wait on a Redis socket before failing.
            pool_size: The most connections the client's pool opens.
            client: An existing Redis client to use instead of creating one.
            kwargs: Settings meant for other backends; ignored.

        Raises:
            ConfigurationError: If neither `database_url` nor `client` is given.
        """
        if kwargs:
            LOG.debug(f"RedisMoviesStore ignoring settings: {sorted(kwargs)}")
        if client is None:
            if not database_url:
                raise ConfigurationError("A database_url is required for the redis backend.")
            client = Redis.from_url(
                database_url, decode_responses=True, socket_timeout=socket_timeout, max_connections=pool_size
            )
        self.client: Redis = client
        self.key: str = key

    def _get_full_key(self, movie_id: uuid.UUID) -> str:
        """
        Get the full Redis key for a movie.

        Args:
            movie_id: The movie id.

        Returns:
            The full Redis key.
        """
        return f"{self.key}:{movie_id}"

    def get_all(self, ctx: OperationContext = None) -> List[Movie]:
        """
        Query the Redis database for all movies.

        Keys that disappear between the scan and the read (a concurrent delete)
        are skipped.

        Args:
            ctx: The context of the operation.

        Returns:
            A list of movies.
        """
        ctx = ensure_context(ctx)
        ctx.check("get_all")
        movies = []

        for entry_key in self.client.scan_iter(match=f"{self.key}:*"):
            ctx.check("get_all")
            data = self.client.hgetall(entry_key)
            if not data:
                LOG.debug(f"Movie at key '{entry_key}' was removed while listing.")
                continue
            movies.append(deserialize_movie(data))

        LOG.debug(f"Retrieved {len(movies)} movies from Redis.")
        return movies

    def get_by_id(self, movie_id: uuid.UUID, ctx: OperationContext = None) -> Movie:
        """
        Retrieve a movie from the Redis database by id.

        Args:
            movie_id: The id of the movie to retrieve.
            ctx: The context of the operation.

        Returns:
            The movie.

        Raises:
            RecordNotFoundError: If no movie with `movie_id` exists.
        """
        ctx = ensure_context(ctx)
        movie_id = ensure_uuid(movie_id)
        ctx.check("get_by_id")
        data = self.client.hgetall(self._get_full_key(movie_id))
        if not data:
            raise RecordNotFoundError(movie_id)
        return deserialize_movie(data)

    def create(self, params: CreateMovieParams, ctx: OperationContext = None):
        """
        Create a new movie in the Redis database.

        Args:
            params: The fields of the new movie.
            ctx: The context of the operation.

        Raises:
            DuplicateKeyError: If a movie with `params.id` already exists.
        """
        ctx = ensure_context(ctx)
        entity_key = self._get_full_key(params.id)

        def _create(pipe: Pipeline):
            if pipe.exists(entity_key):
                raise DuplicateKeyError(params.id)
            serialized_data = serialize_movie(params.to_movie(utc_now()))
            ctx.check("create")
            pipe.multi()
            pipe.hset(entity_key, mapping=serialized_data)

        ctx.check("create")
        self.client.transaction(_create, entity_key)
        LOG.debug(f"Created movie with id '{params.id}' in Redis.")

    def update(self, movie_id: uuid.UUID, params: UpdateMovieParams, ctx: OperationContext = None):
        """
        Update the mutable fields of a movie in the Redis database.

        Args:
            movie_id: The id of the movie to update.
            params: The new values of the mutable fields.
            ctx: The context of the operation.

        Raises:
            RecordNotFoundError: If no movie with `movie_id` exists.
        """
        ctx = ensure_context(ctx)
        movie_id = ensure_uuid(movie_id)
        entity_key = self._get_full_key(movie_id)

        def _update(pipe: Pipeline):
            existing_data = pipe.hgetall(entity_key)
            if not existing_data:
                raise RecordNotFoundError(movie_id)
            updated = params.apply_to(deserialize_movie(existing_data), utc_now())
            ctx.check("update")
            pipe.multi()
            pipe.hset(entity_key, mapping=serialize_movie(updated))

        ctx.check("update")
        self.client.transaction(_update, entity_key)
        LOG.debug(f"Updated movie with id '{movie_id}' in Redis.")

    def delete(self, movie_id: uuid.UUID, ctx: OperationContext = None):
        """
        Delete a movie from the Redis database by id. Unknown ids are ignored.

        Args:
            movie_id: The id of the movie to delete.
            ctx: The context of the operation.
        """
        ctx = ensure_context(ctx)
        movie_id = ensure_uuid(movie_id)
        ctx.check("delete")
        removed = self.client.delete(self._get_full_key(movie_id))
        if removed:
            LOG.debug(f"Deleted movie with id '{movie_id}' from Redis.")
        else:
            LOG.debug(f"No movie with id '{movie_id}' to delete from Redis.")

    def get_version(self) -> str:
        """
        Query the Redis backend for the current version.

        Returns:
            A string representing the current version of Redis.
        """
        client_info = self.client.info()
        return client_info.get("redis_version", "N/A")

    def close(self):
        """
        Close the Redis client.
        """
        self.client.close()
