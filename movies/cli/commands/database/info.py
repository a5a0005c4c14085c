##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Implements the `database info` subcommand for the Movies CLI.

Prints which backend the configuration selects, the class implementing it,
the version of the database server (where the store can report it), and how
many movies are stored.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from tabulate import tabulate

from movies.backends.backend_factory import store_factory
from movies.cli.commands.command_entry_point import CommandEntryPoint
from movies.cli.utils import add_store_arguments, get_config_from_args, get_store_from_config


LOG = logging.getLogger(__name__)


class DatabaseInfoCommand(CommandEntryPoint):
    """
    Handles the `database info` subcommand.

    Methods:
        add_parser: Adds the `database info` parser.
        process_command: Prints information about the store.
    """

    def add_parser(self, database_commands: ArgumentParser):  # pylint: disable=arguments-renamed
        """
        Add the `database info` subcommand parser to the CLI argument parser.

        Parameters:
            database_commands: The subparsers object to which the `database info`
                subcommand parser will be added.
        """
        db_info_parser = database_commands.add_parser(
            "info",
            help="Print information about the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        db_info_parser.set_defaults(func=self.process_command)
        add_store_arguments(db_info_parser)

    def process_command(self, args: Namespace):
        """
        Process the `database info` command using the provided CLI arguments.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        config = get_config_from_args(args)
        backend = store_factory.resolve(config.store.backend)

        with get_store_from_config(config) as store:
            get_version = getattr(store, "get_version", None)
            version = get_version() if get_version is not None else "N/A"
            rows = [
                ["Backend", backend],
                ["Class", f"{store.__class__.__module__}.{store.__class__.__name__}"],
                ["Version", version],
                ["Movies", len(store.get_all())],
            ]

        print(tabulate(rows))
