##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Shared store implementation for relational database servers.

This module defines `SQLAlchemyMoviesStore`, which uses SQLAlchemy Core to
implement the movies store contract against any database SQLAlchemy has a
dialect for. The table layout, the statements and the connection pool are the
same for every server; subclasses only decide which driver errors mean
"duplicate key" for their server.

See also:
    - movies.backends.sql.sql_stores: The per-server subclasses
    - movies.backends.store_base: Base class
"""

import logging
import uuid
from abc import abstractmethod
from typing import Any, Dict, List, Tuple

from sqlalchemy import Column, DateTime, Float, MetaData, String, Table, TypeDecorator, Uuid, case, create_engine
from sqlalchemy import delete as sql_delete
from sqlalchemy import insert, literal, select
from sqlalchemy import update as sql_update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import Executable

from movies.backends.store_base import MoviesStore
from movies.config.configfile import DEFAULT_POOL_SIZE
from movies.context import OperationContext, ensure_context
from movies.data_models import CreateMovieParams, Movie, UpdateMovieParams
from movies.exceptions import ConfigurationError, DuplicateKeyError, RecordNotFoundError
from movies.utils import ensure_utc, ensure_uuid, utc_now


LOG = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator):  # pylint: disable=too-many-ancestors
    """
    A datetime column that stores naive UTC values and reads back aware UTC values.

    Not every server keeps a timezone with its datetime columns, so everything
    is normalized to UTC before it's written.
    """

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return ensure_utc(value).replace(tzinfo=None)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return ensure_utc(value)


def build_movies_table(table_name: str, metadata: MetaData) -> Table:
    """
    Define the movies table.

    Args:
        table_name: The name of the table.
        metadata: The `MetaData` collection the table belongs to.

    Returns:
        The SQLAlchemy `Table`.
    """
    return Table(
        table_name,
        metadata,
        Column("id", Uuid, primary_key=True),
        Column("title", String(255), nullable=False),
        Column("director", String(255), nullable=False),
        Column("release_date", UTCDateTime, nullable=False),
        Column("ticket_price", Float, nullable=False),
        Column("created_at", UTCDateTime, nullable=False),
        Column("updated_at", UTCDateTime, nullable=False),
    )


class SQLAlchemyMoviesStore(MoviesStore):
    """
    A relational store for `Movie` objects built on a pooled SQLAlchemy `Engine`.

    Every operation is a single statement run in its own transaction, so each
    operation inherits the isolation of the database server.

    Attributes:
        backend_name (str): The name of the backend; set by subclasses.
        engine (Engine): The engine (and connection pool) used for every operation.
        table (Table): The movies table.

    Methods:
        is_duplicate_key_error: Decide whether an `IntegrityError` is a key violation.
        create_table_if_not_exists: Create the movies table if it doesn't exist.
        get_all: Retrieve every movie in the store.
        get_by_id: Retrieve one movie by id.
        create: Create a new movie.
        update: Replace the mutable fields of an existing movie.
        delete: Delete a movie by id.
        get_version: Query the server for its version.
        close: Dispose of the connection pool.
    """

    def __init__(
        self,
        database_url: str = None,
        pool_size: int = DEFAULT_POOL_SIZE,
        table_name: str = "movies",
        initialize_schema: bool = False,
        engine: Engine = None,
        **kwargs,
    ):
        """
        Initialize the store and its connection pool.

        Args:
            database_url: A SQLAlchemy database URL. Not needed if `engine` is given.
            pool_size: The number of connections to keep in the pool.
            table_name: The table that movies are stored in.
            initialize_schema: If True, create the table when it doesn't exist.
            engine: An existing engine to use instead of creating one.
            kwargs: Settings meant for other backends; ignored.

        Raises:
            ConfigurationError: If neither `database_url` nor `engine` is given.
        """
        if kwargs:
            LOG.debug(f"{self.__class__.__name__} ignoring settings: {sorted(kwargs)}")
        if engine is None:
            if not database_url:
                raise ConfigurationError(f"A database_url is required for the {self.backend_name} backend.")
            engine = create_engine(database_url, pool_size=pool_size, pool_pre_ping=True)
        self.engine: Engine = engine
        self.metadata = MetaData()
        self.table: Table = build_movies_table(table_name, self.metadata)

        if initialize_schema:
            self.create_table_if_not_exists()

    @abstractmethod
    def is_duplicate_key_error(self, exc: IntegrityError) -> bool:
        """
        Decide whether an integrity error raised by the driver is a primary key violation.

        Args:
            exc: The error raised by SQLAlchemy. The driver's own error is `exc.orig`.

        Returns:
            True if the error signals a duplicate key, False otherwise.
        """
        raise NotImplementedError("Subclasses of `SQLAlchemyMoviesStore` must implement an `is_duplicate_key_error` method.")

    def create_table_if_not_exists(self):
        """
        Create the table if it doesn't exist.
        """
        self.metadata.create_all(self.engine, checkfirst=True)
        LOG.debug(f"Ensured table '{self.table.name}' exists.")

    def _execute(
        self, ctx: OperationContext, operation: str, statement: Executable, fetch: bool = False
    ) -> Tuple[List[Any], int]:
        """
        Run one statement in its own transaction.

        Args:
            ctx: The context of the operation.
            operation: Name of the operation, for error messages.
            statement: The statement to run.
            fetch: Whether to fetch the resulting rows.

        Returns:
            A tuple of (rows, rowcount).
        """
        ctx.check(operation)
        with self.engine.begin() as conn:
            result = conn.execute(statement)
            rows = result.mappings().all() if fetch else []
            return rows, result.rowcount

    def _row_to_movie(self, row: Dict[str, Any]) -> Movie:
        return Movie.from_dict(dict(row))

    def get_all(self, ctx: OperationContext = None) -> List[Movie]:
        """
        Query the database for all movies.

        Args:
            ctx: The context of the operation.

        Returns:
            A list of movies.
        """
        ctx = ensure_context(ctx)
        rows, _ = self._execute(ctx, "get_all", select(self.table), fetch=True)
        movies = [self._row_to_movie(row) for row in rows]
        LOG.debug(f"Retrieved {len(movies)} movies from {self.backend_name}.")
        return movies

    def get_by_id(self, movie_id: uuid.UUID, ctx: OperationContext = None) -> Movie:
        """
        Retrieve a movie from the database by id.

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
        statement = select(self.table).where(self.table.c.id == movie_id)
        rows, _ = self._execute(ctx, "get_by_id", statement, fetch=True)
        if not rows:
            raise RecordNotFoundError(movie_id)
        return self._row_to_movie(rows[0])

    def create(self, params: CreateMovieParams, ctx: OperationContext = None):
        """
        Insert a new movie into the database.

        Args:
            params: The fields of the new movie.
            ctx: The context of the operation.

        Raises:
            DuplicateKeyError: If a movie with `params.id` already exists.
        """
        ctx = ensure_context(ctx)
        movie = params.to_movie(utc_now())
        statement = insert(self.table).values(
            id=movie.id,
            title=movie.title,
            director=movie.director,
            release_date=movie.release_date,
            ticket_price=movie.ticket_price,
            created_at=movie.created_at,
            updated_at=movie.updated_at,
        )
        try:
            self._execute(ctx, "create", statement)
        except IntegrityError as exc:
            if self.is_duplicate_key_error(exc):
                raise DuplicateKeyError(params.id) from exc
            raise
        LOG.debug(f"Created movie with id '{params.id}' in {self.backend_name}.")

    def update(self, movie_id: uuid.UUID, params: UpdateMovieParams, ctx: OperationContext = None):
        """
        Update the mutable fields of a movie in the database.

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
        now = literal(utc_now(), type_=UTCDateTime)
        statement = (
            sql_update(self.table)
            .where(self.table.c.id == movie_id)
            .values(
                title=params.title,
                director=params.director,
                release_date=params.release_date,
                ticket_price=params.ticket_price,
                updated_at=case((self.table.c.updated_at > now, self.table.c.updated_at), else_=now),
            )
        )
        _, rowcount = self._execute(ctx, "update", statement)
        if rowcount == 0:
            raise RecordNotFoundError(movie_id)
        LOG.debug(f"Updated movie with id '{movie_id}' in {self.backend_name}.")

    def delete(self, movie_id: uuid.UUID, ctx: OperationContext = None):
        """
        Delete a movie from the database by id. Unknown ids are ignored.

        Args:
            movie_id: The id of the movie to delete.
            ctx: The context of the operation.
        """
        ctx = ensure_context(ctx)
        movie_id = ensure_uuid(movie_id)
        statement = sql_delete(self.table).where(self.table.c.id == movie_id)
        _, rowcount = self._execute(ctx, "delete", statement)
        if rowcount == 0:
            LOG.debug(f"No movie with id '{movie_id}' to delete from {self.backend_name}.")
        else:
            LOG.debug(f"Deleted movie with id '{movie_id}' from {self.backend_name}.")

    def get_version(self) -> str:
        """
        Query the database server for its version.

        Returns:
            The server version as a dotted string, or "N/A" if the dialect doesn't report one.
        """
        with self.engine.connect():
            version_info = self.engine.dialect.server_version_info
        if not version_info:
            return "N/A"
        return ".".join(str(part) for part in version_info)

    def close(self):
        """
        Dispose of the connection pool.
        """
        self.engine.dispose()
        LOG.debug(f"Disposed of the {self.backend_name} connection pool.")
