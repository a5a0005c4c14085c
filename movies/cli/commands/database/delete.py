##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Implements the `database delete` subcommand for the Movies CLI.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from movies.cli.commands.command_entry_point import CommandEntryPoint
from movies.cli.utils import add_store_arguments, get_store_from_args, parse_movie_id


LOG = logging.getLogger(__name__)


class DatabaseDeleteCommand(CommandEntryPoint):
    """
    Handles the `database delete` subcommand, which removes movies from the store.

    Methods:
        add_parser: Adds the `database delete` parser.
        process_command: Deletes the movies.
    """

    def add_parser(self, database_commands: ArgumentParser):  # pylint: disable=arguments-renamed
        """
        Add the `database delete` subcommand parser to the CLI argument parser.

        Parameters:
            database_commands: The subparsers object to which the `database delete`
                subcommand parser will be added.
        """
        db_delete_parser = database_commands.add_parser(
            "delete",
            help="Delete movies from the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        db_delete_parser.set_defaults(func=self.process_command)
        db_delete_parser.add_argument(
            "ids",
            type=parse_movie_id,
            nargs="+",
            help="A space-delimited list of ids of the movies to delete.",
        )
        add_store_arguments(db_delete_parser)

    def process_command(self, args: Namespace):
        """
        Process the `database delete` command using the provided CLI arguments.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        with get_store_from_args(args) as store:
            for movie_id in args.ids:
                store.delete(movie_id)
                LOG.info(f"Deleted movie with id '{movie_id}'.")
