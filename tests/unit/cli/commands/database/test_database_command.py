##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Tests for the `database.py` file of the `cli/commands/database/` folder.
"""

import pytest

from movies.cli.commands.database import DatabaseCommand
from movies.cli.commands.database.create import DatabaseCreateCommand
from movies.cli.commands.database.delete import DatabaseDeleteCommand
from movies.cli.commands.database.get import DatabaseGetCommand
from movies.cli.commands.database.info import DatabaseInfoCommand
from movies.cli.commands.database.update import DatabaseUpdateCommand
from tests.fixture_types import FixtureCallable


def test_subcommands():
    """Test that the `database` command owns one handler per subcommand."""
    command = DatabaseCommand()

    assert [type(subcommand) for subcommand in command.subcommands] == [
        DatabaseInfoCommand,
        DatabaseGetCommand,
        DatabaseCreateCommand,
        DatabaseUpdateCommand,
        DatabaseDeleteCommand,
    ]


@pytest.mark.parametrize(
    "argv, expected_handler",
    [
        (["database", "info"], DatabaseInfoCommand),
        (["database", "get", "all"], DatabaseGetCommand),
        (["database", "delete", "11111111-1111-1111-1111-111111111111"], DatabaseDeleteCommand),
    ],
)
def test_subcommands_route_to_their_handlers(create_parser: FixtureCallable, argv, expected_handler):
    """
    Test that each subcommand dispatches to its own `process_command`.

    Args:
        create_parser: A fixture to help create a parser.
        argv: The command line to parse.
        expected_handler: The class whose `process_command` should be called.
    """
    parser = create_parser(DatabaseCommand())

    args = parser.parse_args(argv)

    assert isinstance(args.func.__self__, expected_handler)


def test_subcommand_is_required(create_parser: FixtureCallable):
    """
    Test that `database` on its own is a usage error.

    Args:
        create_parser: A fixture to help create a parser.
    """
    parser = create_parser(DatabaseCommand())

    with pytest.raises(SystemExit):
        parser.parse_args(["database"])
