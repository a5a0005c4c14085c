##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Relational database stores for PostgreSQL, MySQL, and SQL Server.

Each store here differs from `SQLAlchemyMoviesStore` only in how it recognizes
a primary key violation. The driver's structured error code is always checked
first; matching on the error text is a fallback for drivers that don't expose
one. An integrity error that matches neither is propagated unchanged.
"""

import logging

from sqlalchemy.exc import IntegrityError

from movies.backends.sql.sql_store_base import SQLAlchemyMoviesStore
from movies.backends.utils import error_text_contains


LOG = logging.getLogger(__name__)

POSTGRES_UNIQUE_VIOLATION = "23505"
POSTGRES_DUPLICATE_KEY_MESSAGES = (f"SQLSTATE {POSTGRES_UNIQUE_VIOLATION}", "duplicate key value")

MYSQL_DUPLICATE_ENTRY = 1062
MYSQL_DUPLICATE_KEY_MESSAGES = (f"Error {MYSQL_DUPLICATE_ENTRY}", "Duplicate entry")

# 2627 is a PRIMARY KEY/UNIQUE constraint violation, 2601 a unique index violation
SQLSERVER_DUPLICATE_KEY_ERRORS = {2627, 2601}
SQLSERVER_DUPLICATE_KEY_MESSAGES = ("2627", "2601", "Violation of PRIMARY KEY")


def _driver_error_number(exc: IntegrityError):
    """
    Get the numeric error code that MySQL and SQL Server drivers put first in their error args.

    Args:
        exc: The error raised by SQLAlchemy.

    Returns:
        The error number, or None if the driver error doesn't carry one.
    """
    args = getattr(exc.orig, "args", ())
    if args and isinstance(args[0], int):
        return args[0]
    return None


def is_postgres_duplicate_key_error(exc: IntegrityError) -> bool:
    """
    Check for a PostgreSQL unique_violation.

    psycopg2 exposes the SQLSTATE as `pgcode` and psycopg 3 as `sqlstate`.

    Args:
        exc: The error raised by SQLAlchemy.

    Returns:
        True if the error signals a duplicate key, False otherwise.
    """
    sqlstate = getattr(exc.orig, "pgcode", None) or getattr(exc.orig, "sqlstate", None)
    if sqlstate is not None:
        return sqlstate == POSTGRES_UNIQUE_VIOLATION
    return error_text_contains(exc, POSTGRES_DUPLICATE_KEY_MESSAGES)


def is_mysql_duplicate_key_error(exc: IntegrityError) -> bool:
    """
    Check for a MySQL ER_DUP_ENTRY error.

    Args:
        exc: The error raised by SQLAlchemy.

    Returns:
        True if the error signals a duplicate key, False otherwise.
    """
    error_number = _driver_error_number(exc)
    if error_number is not None:
        return error_number == MYSQL_DUPLICATE_ENTRY
    return error_text_contains(exc, MYSQL_DUPLICATE_KEY_MESSAGES)


def is_sqlserver_duplicate_key_error(exc: IntegrityError) -> bool:
    """
    Check for a SQL Server primary key or unique index violation.

    pymssql reports the native error number directly. pyodbc only reports the
    SQLSTATE, so for it the native number is found in the message text.

    Args:
        exc: The error raised by SQLAlchemy.

    Returns:
        True if the error signals a duplicate key, False otherwise.
    """
    error_number = _driver_error_number(exc)
    if error_number is not None:
        return error_number in SQLSERVER_DUPLICATE_KEY_ERRORS
    return error_text_contains(exc, SQLSERVER_DUPLICATE_KEY_MESSAGES)


class PostgresMoviesStore(SQLAlchemyMoviesStore):
    """A PostgreSQL store for `Movie` objects."""

    backend_name = "postgres"

    def is_duplicate_key_error(self, exc: IntegrityError) -> bool:
        return is_postgres_duplicate_key_error(exc)


class MySqlMoviesStore(SQLAlchemyMoviesStore):
    """A MySQL store for `Movie` objects."""

    backend_name = "mysql"

    def is_duplicate_key_error(self, exc: IntegrityError) -> bool:
        return is_mysql_duplicate_key_error(exc)


class SqlServerMoviesStore(SQLAlchemyMoviesStore):
    """A Microsoft SQL Server store for `Movie` objects."""

    backend_name = "sqlserver"

    def is_duplicate_key_error(self, exc: IntegrityError) -> bool:
        return is_sqlserver_duplicate_key_error(exc)
