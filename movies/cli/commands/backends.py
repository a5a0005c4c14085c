##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
CLI module for listing the available store backends.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

from tabulate import tabulate

from movies.backends.backend_factory import store_factory
from movies.cli.commands.command_entry_point import CommandEntryPoint


LOG = logging.getLogger(__name__)


class BackendsCommand(CommandEntryPoint):
    """
    Handles the `backends` command, which prints every registered store backend.

    Methods:
        add_parser: Adds the `backends` command parser to the CLI argument parser.
        process_command: Prints the table of backends.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `backends` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `backends` command parser will be added.
        """
        backends: ArgumentParser = subparsers.add_parser(
            "backends",
            help="List the available store backends.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        backends.set_defaults(func=self.process_command)

    def process_command(self, args: Namespace):
        """
        Print the name, aliases, and class of every registered backend.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        rows = []
        for name in store_factory.list_available():
            info = store_factory.get_component_info(name)
            rows.append([name, ", ".join(info["aliases"]), f"{info['module']}.{info['class']}"])
        print(tabulate(rows, headers=["Backend", "Aliases", "Class"]))
