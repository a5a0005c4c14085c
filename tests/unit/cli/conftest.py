##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Fixtures for files in this `cli/` test directory.
"""

from argparse import ArgumentParser
from typing import List

import pytest

from movies.cli.commands.command_entry_point import CommandEntryPoint
from tests.fixture_types import FixtureCallable, FixtureStr


@pytest.fixture
def create_parser() -> FixtureCallable:
    """
    A fixture to help create a parser for any command.

    Returns:
        A function that creates a parser.
    """

    def _create_parser(cmd: CommandEntryPoint) -> ArgumentParser:
        """
        Returns an `ArgumentParser` configured with the `cmd` command and its subcommands.

        Returns:
            Parser with the `cmd` command and its subcommands registered.
        """
        parser = ArgumentParser()
        parser.add_argument("--level", default="INFO")
        subparsers = parser.add_subparsers(dest="main_command")
        cmd.add_parser(subparsers)
        return parser

    return _create_parser


@pytest.fixture
def cli_db_path(tmp_path) -> FixtureStr:
    """
    The path of a SQLite database that CLI commands under test can share.

    Args:
        tmp_path: A temporary directory unique to the test.

    Returns:
        The path to the database file.
    """
    return str(tmp_path / "cli" / "movies.db")


@pytest.fixture
def store_args(cli_db_path: FixtureStr) -> List[str]:
    """
    The command-line options that point a command at the SQLite database in `cli_db_path`.

    Args:
        cli_db_path: The path of the database file.

    Returns:
        The options, ready to be appended to a command line.
    """
    return ["--backend", "sqlite", "--database-url", cli_db_path]
