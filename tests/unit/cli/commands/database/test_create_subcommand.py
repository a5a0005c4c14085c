##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Tests for the `create.py` file of the `cli/commands/database/` folder.
"""

from datetime import datetime, timezone
from typing import List

import pytest

from movies.backends.sqlite.sqlite_store import SQLiteMoviesStore
from movies.cli.commands.database import DatabaseCommand
from movies.exceptions import DuplicateKeyError
from tests.fixture_types import FixtureCallable, FixtureStr
from tests.fixtures.stores import INCEPTION_ID


INCEPTION_ARGS = [
    "--title",
    "Inception",
    "--director",
    "Christopher Nolan",
    "--release-date",
    "2010-07-16",
    "--ticket-price",
    "12.50",
]


def run(create_parser: FixtureCallable, argv: List[str]):
    """Parse `argv` with the `database` command and process it."""
    args = create_parser(DatabaseCommand()).parse_args(argv)
    args.func(args)


def test_create_with_id(create_parser: FixtureCallable, store_args: List[str], cli_db_path: FixtureStr):
    """
    Test that `database create --id` stores the movie under that id.

    Args:
        create_parser: A fixture to help create a parser.
        store_args: The options that point the command at a SQLite database.
        cli_db_path: The path of that database.
    """
    run(create_parser, ["database", "create", "--id", str(INCEPTION_ID), *INCEPTION_ARGS, *store_args])

    movie = SQLiteMoviesStore(cli_db_path).get_by_id(INCEPTION_ID)
    assert movie.title == "Inception"
    assert movie.director == "Christopher Nolan"
    assert movie.release_date == datetime(2010, 7, 16, tzinfo=timezone.utc)
    assert movie.ticket_price == 12.5
    assert movie.created_at == movie.updated_at


def test_create_without_id(create_parser: FixtureCallable, store_args: List[str], cli_db_path: FixtureStr):
    """
    Test that a random id is generated when `--id` is omitted.

    Args:
        create_parser: A fixture to help create a parser.
        store_args: The options that point the command at a SQLite database.
        cli_db_path: The path of that database.
    """
    run(create_parser, ["database", "create", *INCEPTION_ARGS, *store_args])
    run(create_parser, ["database", "create", *INCEPTION_ARGS, *store_args])

    movies = SQLiteMoviesStore(cli_db_path).get_all()
    assert len(movies) == 2
    assert movies[0].id != movies[1].id


def test_create_duplicate(create_parser: FixtureCallable, store_args: List[str]):
    """
    Test that creating the same id twice raises `DuplicateKeyError`.

    Args:
        create_parser: A fixture to help create a parser.
        store_args: The options that point the command at a SQLite database.
    """
    argv = ["database", "create", "--id", str(INCEPTION_ID), *INCEPTION_ARGS, *store_args]
    run(create_parser, argv)

    with pytest.raises(DuplicateKeyError):
        run(create_parser, argv)


@pytest.mark.parametrize(
    "bad_args",
    [
        ["--id", "inception"],
        ["--release-date", "someday"],
        ["--ticket-price", "free"],
    ],
)
def test_invalid_arguments(create_parser: FixtureCallable, store_args: List[str], bad_args: List[str]):
    """
    Test that malformed fields are rejected by the parser.

    Args:
        create_parser: A fixture to help create a parser.
        store_args: The options that point the command at a SQLite database.
        bad_args: The malformed options, appended after the valid ones.
    """
    with pytest.raises(SystemExit):
        create_parser(DatabaseCommand()).parse_args(["database", "create", *INCEPTION_ARGS, *bad_args, *store_args])
