##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Utility functions to support Movies CLI command handlers.

This module provides the helpers shared by the CLI commands: the options that
select and locate the store, building the configuration and the store from
those options, parsing movie fields given on the command line, and printing
movies as a table.
"""

import logging
import uuid
from argparse import ArgumentParser, ArgumentTypeError, Namespace
from datetime import datetime
from typing import List

from tabulate import tabulate

from movies.backends.backend_factory import store_factory
from movies.backends.store_base import MoviesStore
from movies.config import Config
from movies.config.configfile import get_store_settings, initialize_config
from movies.data_models import Movie
from movies.utils import ensure_utc


LOG = logging.getLogger(__name__)

MOVIE_TABLE_HEADERS = ["ID", "Title", "Director", "Release Date", "Ticket Price", "Created At", "Updated At"]


def add_store_arguments(parser: ArgumentParser):
    """
    Add the options that override which store a command uses.

    Args:
        parser: The parser of the command.
    """
    parser.add_argument(
        "-b",
        "--backend",
        type=str,
        default=None,
        help="The store backend to use. Overrides the configuration and MOVIES_BACKEND.",
    )
    parser.add_argument(
        "-d",
        "--database-url",
        type=str,
        default=None,
        help="The URL (or, for sqlite, the path) of the database. Overrides the configuration and DATABASE_URL.",
    )


def get_config_from_args(args: Namespace) -> Config:
    """
    Build the configuration and apply the store options given on the command line.

    Args:
        args: An argparse Namespace containing user arguments.

    Returns:
        The configuration object.
    """
    config = initialize_config()
    if getattr(args, "backend", None):
        config.store.backend = args.backend
    if getattr(args, "database_url", None):
        config.store.database_url = args.database_url
    LOG.debug(f"Using {config}")
    return config


def get_store_from_config(config: Config) -> MoviesStore:
    """
    Create the store that the configuration selects.

    Args:
        config: The configuration object.

    Returns:
        A new store. The caller is responsible for closing it.
    """
    backend, settings = get_store_settings(config)
    LOG.debug(f"Creating '{backend}' store.")
    store = store_factory.create(backend, settings)
    if store_factory.resolve(backend) == "memory":
        LOG.warning("The memory backend doesn't keep movies between commands.")
    return store


def get_store_from_args(args: Namespace) -> MoviesStore:
    """
    Create the store selected by the configuration and the command line.

    Args:
        args: An argparse Namespace containing user arguments.

    Returns:
        A new store. The caller is responsible for closing it.
    """
    return get_store_from_config(get_config_from_args(args))


def parse_movie_id(value: str) -> uuid.UUID:
    """
    Argparse type for movie ids.

    Args:
        value: The raw argument.

    Returns:
        The id as a UUID.

    Raises:
        ArgumentTypeError: If `value` is not a UUID.
    """
    try:
        return uuid.UUID(value)
    except ValueError as exc:
        raise ArgumentTypeError(f"'{value}' is not a valid movie id (expected a UUID).") from exc


def parse_release_date(value: str) -> datetime:
    """
    Argparse type for release dates. Dates without a timezone are taken as UTC.

    Args:
        value: The raw argument, e.g. "2010-07-16" or "2010-07-16T00:00:00Z".

    Returns:
        The date as an aware UTC datetime.

    Raises:
        ArgumentTypeError: If `value` is not an ISO 8601 date.
    """
    try:
        return ensure_utc(value)
    except ValueError as exc:
        raise ArgumentTypeError(f"'{value}' is not an ISO 8601 date.") from exc


def add_movie_field_arguments(parser: ArgumentParser):
    """
    Add the options for the mutable fields of a movie. All of them are required.

    Args:
        parser: The parser of the command.
    """
    parser.add_argument("--title", type=str, required=True, help="The title of the movie.")
    parser.add_argument("--director", type=str, required=True, help="The director of the movie.")
    parser.add_argument(
        "--release-date", type=parse_release_date, required=True, help="The release date, in ISO 8601 format."
    )
    parser.add_argument("--ticket-price", type=float, required=True, help="The price of a ticket.")


def format_movies(movies: List[Movie]) -> str:
    """
    Format movies as a table.

    Args:
        movies: The movies to format.

    Returns:
        The table.
    """
    rows = [
        [
            str(movie.id),
            movie.title,
            movie.director,
            movie.release_date.isoformat(),
            f"{movie.ticket_price:.2f}",
            movie.created_at.isoformat() if movie.created_at else "",
            movie.updated_at.isoformat() if movie.updated_at else "",
        ]
        for movie in movies
    ]
    return tabulate(rows, headers=MOVIE_TABLE_HEADERS, disable_numparse=True)
