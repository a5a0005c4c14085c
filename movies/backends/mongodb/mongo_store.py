##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
MongoDB-based store implementation for movies.

Movies are stored as one document per movie with the movie id (as a string)
in `_id`, so the uniqueness of ids is enforced by MongoDB's built-in index on
`_id`. One `MongoClient` is kept for the lifetime of the store and its
connection pool is shared by every operation.
"""

import logging
import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List

import pymongo
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError as MongoDuplicateKeyError
from pymongo.errors import PyMongoError
from pymongo.server_api import ServerApi

from movies.backends.store_base import MoviesStore
from movies.config.configfile import DEFAULT_COLLECTION_NAME, DEFAULT_DATABASE_NAME, DEFAULT_POOL_SIZE
from movies.context import OperationContext, ensure_context
from movies.data_models import CreateMovieParams, Movie, UpdateMovieParams
from movies.exceptions import ConfigurationError, DeadlineExceededError, DuplicateKeyError, RecordNotFoundError
from movies.utils import ensure_uuid, utc_now


LOG = logging.getLogger(__name__)


def movie_to_document(movie: Movie) -> Dict[str, Any]:
    """
    Convert a `Movie` into a MongoDB document.

    Args:
        movie: The movie to convert.

    Returns:
        The document, keyed by `_id`.
    """
    return {
        "_id": str(movie.id),
        "title": movie.title,
        "director": movie.director,
        "release_date": movie.release_date,
        "ticket_price": movie.ticket_price,
        "created_at": movie.created_at,
        "updated_at": movie.updated_at,
    }


def document_to_movie(document: Dict[str, Any]) -> Movie:
    """
    Convert a MongoDB document into a `Movie`.

    Args:
        document: The document read from the collection.

    Returns:
        The movie.
    """
    data = dict(document)
    data["id"] = data.pop("_id")
    return Movie.from_dict(data)


class MongoMoviesStore(MoviesStore):
    """
    A MongoDB-based store for `Movie` objects.

    Attributes:
        backend_name (str): The name of the backend ("mongodb").
        client (MongoClient): The client, and connection pool, used for every operation.
        collection (Collection): The collection that movies are stored in.

    Methods:
        get_all: Retrieve every movie in the store.
        get_by_id: Retrieve one movie by id.
        create: Create a new movie.
        update: Replace the mutable fields of an existing movie.
        delete: Delete a movie by id.
        get_version: Query MongoDB for its version.
        close: Close the client.
    """

    backend_name = "mongodb"

    def __init__(
        self,
        database_url: str = None,
        database_name: str = DEFAULT_DATABASE_NAME,
        collection_name: str = DEFAULT_COLLECTION_NAME,
        pool_size: int = DEFAULT_POOL_SIZE,
        client: MongoClient = None,
        **kwargs,
    ):
        """
        Initialize the store and its client.

        Args:
            database_url: A `mongodb://` or `mongodb+srv://` URL. Not needed if `client` is given.
            database_name: The database that holds the collection.
            collection_name: The collection that movies are stored in.
            pool_size: The largest number of connections the client keeps open.
            client: An existing client to use instead of creating one.
            kwargs: Settings meant for other backends; ignored.

        Raises:
            ConfigurationError: If neither `database_url` nor `client` is given.
        """
        if kwargs:
            LOG.debug(f"MongoMoviesStore ignoring settings: {sorted(kwargs)}")
        if client is None:
            if not database_url:
                raise ConfigurationError("A database_url is required for the mongodb backend.")
            client = MongoClient(database_url, maxPoolSize=pool_size, tz_aware=True, server_api=ServerApi("1"))
        self.client: MongoClient = client
        self.collection: Collection = self.client[database_name][collection_name]

    @contextmanager
    def _bounded(self, ctx: OperationContext, operation: str) -> Iterator[None]:
        """
        Bound the MongoDB calls made inside this block by the context's deadline.

        Args:
            ctx: The context of the operation.
            operation: Name of the operation, for error messages.

        Raises:
            OperationCancelledError: If the context is cancelled before the call.
            DeadlineExceededError: If the deadline passes before or during the call.
        """
        ctx.check(operation)
        remaining = ctx.remaining()
        # pymongo rejects negative timeouts
        with pymongo.timeout(None if remaining is None else max(remaining, 0.0)):
            try:
                yield
            except PyMongoError as exc:
                if exc.timeout and ctx.expired():
                    raise DeadlineExceededError(f"{operation} deadline exceeded") from exc
                raise

    def get_all(self, ctx: OperationContext = None) -> List[Movie]:
        """
        Query the collection for all movies.

        Args:
            ctx: The context of the operation.

        Returns:
            A list of movies.
        """
        ctx = ensure_context(ctx)
        with self._bounded(ctx, "get_all"):
            movies = [document_to_movie(document) for document in self.collection.find({})]
        LOG.debug(f"Retrieved {len(movies)} movies from MongoDB.")
        return movies

    def get_by_id(self, movie_id: uuid.UUID, ctx: OperationContext = None) -> Movie:
        """
        Retrieve a movie from the collection by id.

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
        with self._bounded(ctx, "get_by_id"):
            document = self.collection.find_one({"_id": str(movie_id)})
        if document is None:
            raise RecordNotFoundError(movie_id)
        return document_to_movie(document)

    def create(self, params: CreateMovieParams, ctx: OperationContext = None):
        """
        Insert a new movie into the collection.

        Args:
            params: The fields of the new movie.
            ctx: The context of the operation.

        Raises:
            DuplicateKeyError: If a movie with `params.id` already exists.
        """
        ctx = ensure_context(ctx)
        document = movie_to_document(params.to_movie(utc_now()))
        try:
            with self._bounded(ctx, "create"):
                self.collection.insert_one(document)
        except MongoDuplicateKeyError as exc:
            raise DuplicateKeyError(params.id) from exc
        LOG.debug(f"Created movie with id '{params.id}' in MongoDB.")

    def update(self, movie_id: uuid.UUID, params: UpdateMovieParams, ctx: OperationContext = None):
        """
        Update the mutable fields of a movie in the collection.

        `$max` keeps `updated_at` from moving backwards.

        Args:
            movie_id: The id of the movie to update.
            params: The new values of the mutable fields.
            ctx: The context of the operation.

        Raises:
            RecordNotFoundError: If no movie with `movie_id` exists.
        """
        ctx = ensure_context(ctx)
        movie_id = ensure_uuid(movie_id)
        update = {
            "$set": {
                "title": params.title,
                "director": params.director,
                "release_date": params.release_date,
                "ticket_price": params.ticket_price,
            },
            "$max": {"updated_at": utc_now()},
        }
        with self._bounded(ctx, "update"):
            result = self.collection.update_one({"_id": str(movie_id)}, update)
        if result.matched_count == 0:
            raise RecordNotFoundError(movie_id)
        LOG.debug(f"Updated movie with id '{movie_id}' in MongoDB.")

    def delete(self, movie_id: uuid.UUID, ctx: OperationContext = None):
        """
        Delete a movie from the collection by id. Unknown ids are ignored.

        Args:
            movie_id: The id of the movie to delete.
            ctx: The context of the operation.
        """
        ctx = ensure_context(ctx)
        movie_id = ensure_uuid(movie_id)
        with self._bounded(ctx, "delete"):
            result = self.collection.delete_one({"_id": str(movie_id)})
        if result.deleted_count == 0:
            LOG.debug(f"No movie with id '{movie_id}' to delete from MongoDB.")
        else:
            LOG.debug(f"Deleted movie with id '{movie_id}' from MongoDB.")

    def get_version(self) -> str:
        """
        Query MongoDB for the server version.

        Returns:
            The server version string.
        """
        return self.client.server_info().get("version", "N/A")

    def close(self):
        """
        Close the client and its connection pool.
        """
        self.client.close()
