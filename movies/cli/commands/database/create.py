##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Implements the `database create` subcommand for the Movies CLI.
"""

import logging
import uuid
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from movies.cli.commands.command_entry_point import CommandEntryPoint
from movies.cli.utils import add_movie_field_arguments, add_store_arguments, get_store_from_args, parse_movie_id
from movies.data_models import CreateMovieParams


LOG = logging.getLogger(__name__)


class DatabaseCreateCommand(CommandEntryPoint):
    """
    Handles the `database create` subcommand, which adds a movie to the store.

    Methods:
        add_parser: Adds the `database create` parser.
        process_command: Creates the movie.
    """

    def add_parser(self, database_commands: ArgumentParser):  # pylint: disable=arguments-renamed
        """
        Add the `database create` subcommand parser to the CLI argument parser.

        Parameters:
            database_commands: The subparsers object to which the `database create`
                subcommand parser will be added.
        """
        db_create_parser = database_commands.add_parser(
            "create",
            help="Create a movie in the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        db_create_parser.set_defaults(func=self.process_command)
        db_create_parser.add_argument(
            "--id",
            type=parse_movie_id,
            default=None,
            help="The id of the new movie. A random id is used if omitted.",
        )
        add_movie_field_arguments(db_create_parser)
        add_store_arguments(db_create_parser)

    def process_command(self, args: Namespace):
        """
        Process the `database create` command using the provided CLI arguments.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        params = CreateMovieParams(
            id=args.id or uuid.uuid4(),
            title=args.title,
            director=args.director,
            release_date=args.release_date,
            ticket_price=args.ticket_price,
        )
        with get_store_from_args(args) as store:
            store.create(params)
        LOG.info(f"Created movie '{params.title}' with id '{params.id}'.")
