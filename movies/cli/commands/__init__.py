##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Movies CLI Commands Package.

Each module encapsulates the logic and argument parsing for a distinct
command, built around the `CommandEntryPoint` interface.

Modules:
    command_entry_point: Defines the abstract base class `CommandEntryPoint` for all CLI commands.
    backends: Implements the `backends` command for listing the available store backends.
    database: Implements the `database` command group for reading and modifying movies.
    serve: Implements the `serve` command for running the HTTP API.
"""

from movies.cli.commands.backends import BackendsCommand
from movies.cli.commands.database import DatabaseCommand
from movies.cli.commands.serve import ServeCommand


# Keep these in alphabetical order
ALL_COMMANDS = [
    BackendsCommand(),
    DatabaseCommand(),
    ServeCommand(),
]
