##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Implements the `database get` subcommand for the Movies CLI.

Main Capabilities:
- `database get all`: Retrieve every movie in the store.
- `database get <ids...>`: Retrieve one or more movies by id.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace
from typing import List

from movies.backends.store_base import MoviesStore
from movies.cli.commands.command_entry_point import CommandEntryPoint
from movies.cli.utils import add_store_arguments, format_movies, get_store_from_args, parse_movie_id
from movies.data_models import Movie
from movies.exceptions import RecordNotFoundError


LOG = logging.getLogger(__name__)


class DatabaseGetCommand(CommandEntryPoint):
    """
    Handles the `database get` subcommand, which prints movies from the store.

    Methods:
        add_parser: Adds the `database get` parser.
        process_command: Fetches and prints the requested movies.
    """

    def add_parser(self, database_commands: ArgumentParser):  # pylint: disable=arguments-renamed
        """
        Add the `database get` subcommand parser to the CLI argument parser.

        Parameters:
            database_commands: The subparsers object to which the `database get`
                subcommand parser will be added.
        """
        db_get_parser = database_commands.add_parser(
            "get",
            help="Get movies stored in the database.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        db_get_parser.set_defaults(func=self.process_command)
        db_get_parser.add_argument(
            "movies",
            type=str,
            nargs="+",
            help="'all' to get every movie, or a space-delimited list of movie ids.",
        )
        add_store_arguments(db_get_parser)

    def _get_by_ids(self, store: MoviesStore, identifiers: List[str]) -> List[Movie]:
        """
        Fetch specific movies. Ids that aren't in the store are reported and skipped.

        Args:
            store: The store to read from.
            identifiers: The ids given on the command line.

        Returns:
            The movies that were found.
        """
        movies = []
        for identifier in identifiers:
            try:
                movies.append(store.get_by_id(parse_movie_id(identifier)))
            except RecordNotFoundError as exc:
                LOG.warning(str(exc))
        return movies

    def process_command(self, args: Namespace):
        """
        Process the `database get` command using the provided CLI arguments.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        with get_store_from_args(args) as store:
            if args.movies == ["all"]:
                movies = store.get_all()
            else:
                movies = self._get_by_ids(store, args.movies)

        if movies:
            print(format_movies(movies))
        else:
            LOG.info("No movies found.")
