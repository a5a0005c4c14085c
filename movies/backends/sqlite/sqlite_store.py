##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
SQLite-based store implementation for movies.

This module defines `SQLiteMoviesStore`, which persists movies in a single SQLite
table. Each operation opens its own connection through `SQLiteConnection` and
closes it when done. Uniqueness of the id is enforced by the table's primary key,
and constraint violations are classified using the structured error code that
`sqlite3` exposes.

See also:
    - movies.backends.store_base: Base class
    - movies.backends.sqlite.sqlite_connection: Connection handling
"""

import logging
import sqlite3
import uuid
from typing import List

from movies.backends.sqlite.sqlite_connection import SQLiteConnection
from movies.backends.store_base import MoviesStore
from movies.backends.utils import deserialize_movie, error_text_contains, serialize_movie
from movies.context import OperationContext, ensure_context
from movies.data_models import CreateMovieParams, Movie, UpdateMovieParams
from movies.exceptions import DuplicateKeyError, RecordNotFoundError
from movies.utils import ensure_uuid, utc_now


LOG = logging.getLogger(__name__)

DEFAULT_DB_PATH = "movies.db"

COLUMNS = ("id", "title", "director", "release_date", "ticket_price", "created_at", "updated_at")

# Extended result codes for constraint violations on a key column
DUPLICATE_KEY_ERROR_CODES = {
    getattr(sqlite3, "SQLITE_CONSTRAINT_PRIMARYKEY", 1555),
    getattr(sqlite3, "SQLITE_CONSTRAINT_UNIQUE", 2067),
}
DUPLICATE_KEY_MESSAGES = ("UNIQUE constraint failed",)


def is_duplicate_key_error(exc: sqlite3.Error) -> bool:
    """
    Determine whether a sqlite3 error is a primary key or unique constraint violation.

    Args:
        exc: The error raised by sqlite3.

    Returns:
        True if the error signals a duplicate key, False otherwise.
    """
    if not isinstance(exc, sqlite3.IntegrityError):
        return False
    error_code = getattr(exc, "sqlite_errorcode", None)  # added in python 3.11
    if error_code is not None:
        return error_code in DUPLICATE_KEY_ERROR_CODES
    return error_text_contains(exc, DUPLICATE_KEY_MESSAGES)


class SQLiteMoviesStore(MoviesStore):
    """
    A SQLite-based store for `Movie` objects.

    Attributes:
        backend_name (str): The name of the backend ("sqlite").
        db_path (str): The path to the SQLite database file.
        table_name (str): The table that movies are stored in.

    Methods:
        create_table_if_not_exists: Create the movies table if it doesn't exist.
        get_all: Retrieve every movie in the store.
        get_by_id: Retrieve one movie by id.
        create: Create a new movie.
        update: Replace the mutable fields of an existing movie.
        delete: Delete a movie by id.
        get_version: Query SQLite for its version.
    """

    backend_name = "sqlite"

    def __init__(self, database_url: str = None, table_name: str = "movies", **kwargs):
        """
        Initialize the SQLite store and make sure its table exists.

        Args:
            database_url: Path to the SQLite database file. A `sqlite:///` prefix is accepted.
            table_name: The table that movies are stored in.
            kwargs: Settings meant for other backends; ignored.
        """
        if kwargs:
            LOG.debug(f"SQLiteMoviesStore ignoring settings: {sorted(kwargs)}")
        db_path = database_url or DEFAULT_DB_PATH
        if db_path.startswith("sqlite:///"):
            db_path = db_path[len("sqlite:///") :]
        self.db_path: str = db_path
        self.table_name: str = table_name
        self.create_table_if_not_exists()

    def _connect(self, ctx: OperationContext = None) -> SQLiteConnection:
        return SQLiteConnection(self.db_path, ctx=ctx)

    def create_table_if_not_exists(self):
        """
        Create the table if it doesn't exist.
        """
        with self._connect() as conn:
            conn.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {self.table_name} (
                    id TEXT PRIMARY KEY,
                    title TEXT NOT NULL,
                    director TEXT NOT NULL,
                    release_date TEXT NOT NULL,
                    ticket_price REAL NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )

    def _row_to_movie(self, row: sqlite3.Row) -> Movie:
        return deserialize_movie(dict(row))

    def _execute(self, ctx: OperationContext, operation: str, query: str, params=()):
        """
        Execute a single statement, translating an interrupted statement into a context error.

        Args:
            ctx: The context of the operation.
            operation: Name of the operation, for error messages.
            query: The SQL statement.
            params: The statement parameters.

        Returns:
            A tuple of (rows, rowcount).
        """
        ctx.check(operation)
        with self._connect(ctx) as conn:
            try:
                cursor = conn.execute(query, params)
                return cursor.fetchall(), cursor.rowcount
            except sqlite3.OperationalError:
                if ctx.done():
                    ctx.check(operation)
                raise

    def get_all(self, ctx: OperationContext = None) -> List[Movie]:
        """
        Query the SQLite database for all movies.

        Args:
            ctx: The context of the operation.

        Returns:
            A list of movies.
        """
        ctx = ensure_context(ctx)
        rows, _ = self._execute(ctx, "get_all", f"SELECT {', '.join(COLUMNS)} FROM {self.table_name}")
        movies = [self._row_to_movie(row) for row in rows]
        LOG.debug(f"Retrieved {len(movies)} movies from SQLite.")
        return movies

    def get_by_id(self, movie_id: uuid.UUID, ctx: OperationContext = None) -> Movie:
        """
        Retrieve a movie from the SQLite database by id.

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
        rows, _ = self._execute(
            ctx,
            "get_by_id",
            f"SELECT {', '.join(COLUMNS)} FROM {self.table_name} WHERE id = :id",
            {"id": str(movie_id)},
        )
        if not rows:
            raise RecordNotFoundError(movie_id)
        return self._row_to_movie(rows[0])

    def create(self, params: CreateMovieParams, ctx: OperationContext = None):
        """
        Insert a new movie into the SQLite database.

        Args:
            params: The fields of the new movie.
            ctx: The context of the operation.

        Raises:
            DuplicateKeyError: If a movie with `params.id` already exists.
        """
        ctx = ensure_context(ctx)
        serialized_data = serialize_movie(params.to_movie(utc_now()))
        columns_str = ", ".join(COLUMNS)
        placeholders_str = ", ".join(f":{name}" for name in COLUMNS)
        try:
            self._execute(
                ctx,
                "create",
                f"INSERT INTO {self.table_name} ({columns_str}) VALUES ({placeholders_str})",
                serialized_data,
            )
        except sqlite3.IntegrityError as exc:
            if is_duplicate_key_error(exc):
                raise DuplicateKeyError(params.id) from exc
            raise
        LOG.debug(f"Created movie with id '{params.id}' in SQLite.")

    def update(self, movie_id: uuid.UUID, params: UpdateMovieParams, ctx: OperationContext = None):
        """
        Update the mutable fields of a movie in the SQLite database.

        `updated_at` is only ever moved forward by the statement itself, so a
        clock that steps backwards can't make it decrease.

        Args:
            movie_id: The id of the movie to update.
            params: The new values of the mutable fields.
            ctx: The context of the operation.

        Raises:
            RecordNotFoundError: If no movie with `movie_id` exists.
        """
        ctx = ensure_context(ctx)
        movie_id = ensure_uuid(movie_id)
        values = serialize_movie(
            Movie(
                id=movie_id,
                title=params.title,
                director=params.director,
                release_date=params.release_date,
                ticket_price=params.ticket_price,
                updated_at=utc_now(),
            )
        )
        _, rowcount = self._execute(
            ctx,
            "update",
            f"""
            UPDATE {self.table_name}
            SET title = :title, director = :director, release_date = :release_date,
                ticket_price = :ticket_price, updated_at = MAX(updated_at, :updated_at)
            WHERE id = :id
            """,
            values,
        )
        if rowcount == 0:
            raise RecordNotFoundError(movie_id)
        LOG.debug(f"Updated movie with id '{movie_id}' in SQLite.")

    def delete(self, movie_id: uuid.UUID, ctx: OperationContext = None):
        """
        Delete a movie from the SQLite database by id. Unknown ids are ignored.

        Args:
            movie_id: The id of the movie to delete.
            ctx: The context of the operation.
        """
        ctx = ensure_context(ctx)
        movie_id = ensure_uuid(movie_id)
        _, rowcount = self._execute(
            ctx, "delete", f"DELETE FROM {self.table_name} WHERE id = :id", {"id": str(movie_id)}
        )
        if rowcount == 0:
            LOG.debug(f"No movie with id '{movie_id}' to delete from SQLite.")
        else:
            LOG.debug(f"Deleted movie with id '{movie_id}' from SQLite.")

    def get_version(self) -> str:
        """
        Query SQLite for the current version.

        Returns:
            The SQLite version string.
        """
        with self._connect() as conn:
            cursor = conn.execute("SELECT sqlite_version()")
            return cursor.fetchone()[0]
