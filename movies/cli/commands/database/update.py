##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Implements the `database update` subcommand for the Movies CLI.

Updates replace all four mutable fields of a movie, so every field must be given.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from movies.cli.commands.command_entry_point import CommandEntryPoint
from movies.cli.utils import add_movie_field_arguments, add_store_arguments, get_store_from_args, parse_movie_id
from movies.data_models import UpdateMovieParams


LOG = logging.getLogger(__name__)


class DatabaseUpdateCommand(CommandEntryPoint):
    """
    Handles the `database update` subcommand, which replaces the fields of a movie.

    Methods:
        add_parser: Adds the `database update` parser.
        process_command: Updates the movie.
    """

    def add_parser(self, database_commands: ArgumentParser):  # pylint: disable=arguments-renamed
        """
        Add the `database update` subcommand parser to the CLI argument parser.

        Parameters:
            database_commands: The subparsers object to which the `database update`
                subcommand parser will be added.
        """
        db_update_parser = database_commands.add_parser(
            "update",
            help="Update a movie in the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        db_update_parser.set_defaults(func=self.process_command)
        db_update_parser.add_argument("id", type=parse_movie_id, help="The id of the movie to update.")
        add_movie_field_arguments(db_update_parser)
        add_store_arguments(db_update_parser)

    def process_command(self, args: Namespace):
        """
        Process the `database update` command using the provided CLI arguments.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        params = UpdateMovieParams(
            title=args.title,
            director=args.director,
            release_date=args.release_date,
            ticket_price=args.ticket_price,
        )
        with get_store_from_args(args) as store:
            store.update(args.id, params)
        LOG.info(f"Updated movie with id '{args.id}'.")
