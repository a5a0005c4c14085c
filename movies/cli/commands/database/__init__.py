##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
CLI command package for interacting with the movies store.

Modules:
    database: Entry point for the `database` command group. Registers the subcommands below.
    get: Defines the `database get` subcommand, which prints movies.
    create: Defines the `database create` subcommand, which adds a movie.
    update: Defines the `database update` subcommand, which replaces the fields of a movie.
    delete: Defines the `database delete` subcommand, which removes movies.
    info: Defines the `database info` subcommand, which describes the configured store.
"""

from movies.cli.commands.database.database import DatabaseCommand


__all__ = ["DatabaseCommand"]
