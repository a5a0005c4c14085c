##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Fixtures related to movies stores.

The `store` fixture runs a test once against every store that doesn't need a
database server. Stores that do need one get mocked clients instead.
"""

import uuid
from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from pymongo import MongoClient
from pymongo.collection import Collection
from pytest_mock import MockerFixture
from redis import Redis
from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError

from movies.backends.memory.memory_store import MemoryMoviesStore
from movies.backends.sql.sql_store_base import SQLAlchemyMoviesStore
from movies.backends.sqlite.sqlite_store import SQLiteMoviesStore, is_duplicate_key_error
from movies.data_models import CreateMovieParams, UpdateMovieParams
from tests.fixture_types import FixtureCallable, FixtureMongoClient, FixtureRedis, FixtureStore


INCEPTION_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")


class SQLiteEngineMoviesStore(SQLAlchemyMoviesStore):
    """`SQLAlchemyMoviesStore` running on SQLite, so the shared SQL code can be tested without a server."""

    backend_name = "sqlalchemy-sqlite"

    def is_duplicate_key_error(self, exc: IntegrityError) -> bool:
        return is_duplicate_key_error(exc.orig)


@pytest.fixture
def make_create_params() -> FixtureCallable:
    """
    Provide a function that builds `CreateMovieParams` with sensible defaults.

    Returns:
        A function accepting any field of `CreateMovieParams` as a keyword
        argument. A random id is used unless one is given.
    """

    def _make_create_params(**overrides) -> CreateMovieParams:
        fields = {
            "id": uuid.uuid4(),
            "title": "Inception",
            "director": "Christopher Nolan",
            "release_date": datetime(2010, 7, 16, tzinfo=timezone.utc),
            "ticket_price": 12.50,
        }
        fields.update(overrides)
        return CreateMovieParams(**fields)

    return _make_create_params


@pytest.fixture
def make_update_params() -> FixtureCallable:
    """
    Provide a function that builds `UpdateMovieParams` with sensible defaults.

    Returns:
        A function accepting any field of `UpdateMovieParams` as a keyword argument.
    """

    def _make_update_params(**overrides) -> UpdateMovieParams:
        fields = {
            "title": "Inception (2010)",
            "director": "Christopher Nolan",
            "release_date": datetime(2010, 7, 16, tzinfo=timezone.utc),
            "ticket_price": 13.00,
        }
        fields.update(overrides)
        return UpdateMovieParams(**fields)

    return _make_update_params


@pytest.fixture
def memory_store() -> FixtureStore:
    """An empty in-memory store."""
    return MemoryMoviesStore()


@pytest.fixture
def sqlite_store(tmp_path) -> FixtureStore:
    """
    An empty SQLite store backed by a file in a temporary directory.

    Args:
        tmp_path: A temporary directory unique to the test.
    """
    return SQLiteMoviesStore(database_url=str(tmp_path / "movies.db"))


@pytest.fixture
def sqlalchemy_store(tmp_path) -> FixtureStore:
    """
    An empty `SQLAlchemyMoviesStore` backed by a SQLite file in a temporary directory.

    Args:
        tmp_path: A temporary directory unique to the test.
    """
    engine = create_engine(f"sqlite:///{tmp_path / 'movies_sa.db'}")
    store = SQLiteEngineMoviesStore(engine=engine, initialize_schema=True)
    yield store
    store.close()


@pytest.fixture(params=["memory_store", "sqlite_store", "sqlalchemy_store"])
def store(request: pytest.FixtureRequest) -> FixtureStore:
    """
    Every store that can run without a database server, one per test run.

    Args:
        request: PyTest request fixture; its param names the store fixture to use.
    """
    return request.getfixturevalue(request.param)


@pytest.fixture
def mock_redis(mocker: MockerFixture) -> FixtureRedis:
    """Create a mock Redis client."""
    redis_mock = mocker.MagicMock(spec=Redis)
    return redis_mock


@pytest.fixture
def mock_mongo_client(mocker: MockerFixture) -> FixtureMongoClient:
    """
    Create a mock MongoDB client whose databases all hand out the same mock collection.

    The collection is available as `mock_mongo_client.collection`.

    Args:
        mocker: PyTest mocker fixture.
    """
    collection = mocker.MagicMock(spec=Collection)
    database = MagicMock()
    database.__getitem__.return_value = collection

    client = mocker.MagicMock(spec=MongoClient)
    client.__getitem__.return_value = database
    client.collection = collection
    return client
