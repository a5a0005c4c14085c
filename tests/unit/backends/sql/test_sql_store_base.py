##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Tests for the `sql_store_base.py` module.

The shared SQL code runs here against SQLite through SQLAlchemy, using the
`SQLiteEngineMoviesStore` defined with the store fixtures.
"""

import sqlite3
from datetime import datetime, timedelta, timezone

import pytest
from pytest_mock import MockerFixture
from sqlalchemy import MetaData, create_engine, inspect
from sqlalchemy.exc import IntegrityError, OperationalError

from movies.backends.sql.sql_store_base import UTCDateTime, build_movies_table
from movies.exceptions import DuplicateKeyError
from tests.fixture_types import FixtureCallable
from tests.fixtures.stores import SQLiteEngineMoviesStore


class TestUTCDateTime:
    """Tests for the `UTCDateTime` column type."""

    def test_bind_converts_to_naive_utc(self):
        """
        Test that values are written as naive datetimes in UTC.
        """
        value = datetime(2010, 7, 16, 2, 0, tzinfo=timezone(timedelta(hours=2)))
        assert UTCDateTime().process_bind_param(value, None) == datetime(2010, 7, 16, 0, 0)

    def test_result_is_aware_utc(self):
        """
        Test that naive values read back are marked as UTC.
        """
        result = UTCDateTime().process_result_value(datetime(2010, 7, 16), None)
        assert result == datetime(2010, 7, 16, tzinfo=timezone.utc)

    def test_none_passes_through(self):
        """
        Test that NULLs are left alone in both directions.
        """
        assert UTCDateTime().process_bind_param(None, None) is None
        assert UTCDateTime().process_result_value(None, None) is None


def test_build_movies_table():
    """
    Test that the movies table has one column per movie field, keyed by id.
    """
    table = build_movies_table("films", MetaData())

    assert table.name == "films"
    assert [column.name for column in table.columns] == [
        "id",
        "title",
        "director",
        "release_date",
        "ticket_price",
        "created_at",
        "updated_at",
    ]
    assert [column.name for column in table.primary_key.columns] == ["id"]
    assert not any(column.nullable for column in table.columns)


class TestSQLAlchemyMoviesStore:
    """Tests for the `SQLAlchemyMoviesStore` class."""

    def test_initialize_schema_creates_table(self, tmp_path):
        """
        Test that the table is only created when `initialize_schema` is set.

        Args:
            tmp_path: A temporary directory unique to the test.
        """
        engine = create_engine(f"sqlite:///{tmp_path / 'schema.db'}")

        SQLiteEngineMoviesStore(engine=engine, table_name="films")
        assert not inspect(engine).has_table("films")

        SQLiteEngineMoviesStore(engine=engine, table_name="films", initialize_schema=True)
        assert inspect(engine).has_table("films")
        engine.dispose()

    def test_missing_table_raises(self, tmp_path):
        """
        Test that using a store whose table doesn't exist fails loudly.

        Args:
            tmp_path: A temporary directory unique to the test.
        """
        store = SQLiteEngineMoviesStore(engine=create_engine(f"sqlite:///{tmp_path / 'empty.db'}"))

        with pytest.raises(OperationalError):
            store.get_all()
        store.close()

    def test_duplicate_keeps_driver_error_as_cause(
        self, sqlalchemy_store: SQLiteEngineMoviesStore, make_create_params: FixtureCallable
    ):
        """
        Test that the `DuplicateKeyError` raised for a duplicate is chained to SQLAlchemy's error.

        Args:
            sqlalchemy_store: An empty store backed by SQLite through SQLAlchemy.
            make_create_params: A fixture that builds `CreateMovieParams`.
        """
        params = make_create_params()
        sqlalchemy_store.create(params)

        with pytest.raises(DuplicateKeyError) as exc_info:
            sqlalchemy_store.create(params)
        assert isinstance(exc_info.value.__cause__, IntegrityError)
        assert isinstance(exc_info.value.__cause__.orig, sqlite3.IntegrityError)

    def test_unclassified_integrity_error_propagates(
        self,
        mocker: MockerFixture,
        sqlalchemy_store: SQLiteEngineMoviesStore,
        make_create_params: FixtureCallable,
    ):
        """
        Test that an integrity error the store doesn't recognize is raised unchanged.

        Args:
            mocker: PyTest mocker fixture.
            sqlalchemy_store: An empty store backed by SQLite through SQLAlchemy.
            make_create_params: A fixture that builds `CreateMovieParams`.
        """
        mocker.patch.object(sqlalchemy_store, "is_duplicate_key_error", return_value=False)
        params = make_create_params()
        sqlalchemy_store.create(params)

        with pytest.raises(IntegrityError):
            sqlalchemy_store.create(params)

    def test_update_under_clock_regression(
        self,
        mocker: MockerFixture,
        sqlalchemy_store: SQLiteEngineMoviesStore,
        make_create_params: FixtureCallable,
        make_update_params: FixtureCallable,
    ):
        """
        Test that the UPDATE statement keeps `updated_at` from decreasing.

        Args:
            mocker: PyTest mocker fixture.
            sqlalchemy_store: An empty store backed by SQLite through SQLAlchemy.
            make_create_params: A fixture that builds `CreateMovieParams`.
            make_update_params: A fixture that builds `UpdateMovieParams`.
        """
        params = make_create_params()
        sqlalchemy_store.create(params)
        created = sqlalchemy_store.get_by_id(params.id)

        mocker.patch(
            "movies.backends.sql.sql_store_base.utc_now", return_value=created.updated_at - timedelta(days=1)
        )
        sqlalchemy_store.update(params.id, make_update_params(title="Later"))

        updated = sqlalchemy_store.get_by_id(params.id)
        assert updated.title == "Later"
        assert updated.updated_at == created.updated_at

    def test_get_version(self, sqlalchemy_store: SQLiteEngineMoviesStore):
        """
        Test that the version is reported as a dotted string.

        Args:
            sqlalchemy_store: An empty store backed by SQLite through SQLAlchemy.
        """
        assert sqlalchemy_store.get_version() == sqlite3.sqlite_version

    def test_close_disposes_engine(self, mocker: MockerFixture):
        """
        Test that closing the store disposes of its connection pool.

        Args:
            mocker: PyTest mocker fixture.
        """
        engine = mocker.MagicMock()
        store = SQLiteEngineMoviesStore(engine=engine)

        store.close()

        engine.dispose.assert_called_once()
