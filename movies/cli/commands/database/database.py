##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
This module defines the `DatabaseCommand` class, which provides CLI subcommands
for reading and modifying the movies in the configured store.

The commands are registered under the `database` top-level command.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from movies.cli.commands.command_entry_point import CommandEntryPoint
from movies.cli.commands.database.create import DatabaseCreateCommand
from movies.cli.commands.database.delete import DatabaseDeleteCommand
from movies.cli.commands.database.get import DatabaseGetCommand
from movies.cli.commands.database.info import DatabaseInfoCommand
from movies.cli.commands.database.update import DatabaseUpdateCommand


LOG = logging.getLogger(__name__)


class DatabaseCommand(CommandEntryPoint):
    """
    Handles `database` CLI commands for interacting with the movies store.

    Attributes:
        subcommands (List[CommandEntryPoint]): The handlers of the `database` subcommands.

    Methods:
        add_parser: Adds the `database` command and its subcommands to the CLI parser.
        process_command: Does nothing; each subcommand processes itself.
    """

    def __init__(self):
        """
        Initialize the `DatabaseCommand` instance and its subcommand handlers.
        """
        self.subcommands = [
            DatabaseInfoCommand(),
            DatabaseGetCommand(),
            DatabaseCreateCommand(),
            DatabaseUpdateCommand(),
            DatabaseDeleteCommand(),
        ]

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `database` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `database` command parser will be added.
        """
        database: ArgumentParser = subparsers.add_parser(
            "database",
            help="Interact with the movies database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        database.set_defaults(func=self.process_command)

        database_commands: ArgumentParser = database.add_subparsers(dest="commands", required=True)
        for subcommand in self.subcommands:
            subcommand.add_parser(database_commands)

    def process_command(self, args: Namespace):
        """
        This method doesn't do anything as the subcommands each have logic
        for processing their respective commands. This still has to be implemented
        as we inherit from CommandEntryPoint.

        Args:
            args: An argparse Namespace containing user arguments.
        """
