##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
CLI module for serving the Movies HTTP API.

This module defines the `ServeCommand` class, which builds the configured
store, wraps it in the FastAPI application, and runs it with uvicorn until
the process is interrupted. The store is closed when the server stops.
"""

import logging
from argparse import ArgumentDefaultsHelpFormatter, ArgumentParser, Namespace

import uvicorn

from movies.api import create_app
from movies.cli.commands.command_entry_point import CommandEntryPoint
from movies.cli.utils import add_store_arguments, get_config_from_args, get_store_from_config


LOG = logging.getLogger(__name__)


class ServeCommand(CommandEntryPoint):
    """
    Handles the `serve` command, which runs the Movies HTTP API.

    Methods:
        add_parser: Adds the `serve` command parser to the CLI argument parser.
        process_command: Processes the CLI input and runs the server.
    """

    def add_parser(self, subparsers: ArgumentParser):
        """
        Add the `serve` command parser to the CLI argument parser.

        Parameters:
            subparsers: The subparsers object to which the `serve` command parser will be added.
        """
        serve: ArgumentParser = subparsers.add_parser(
            "serve",
            help="Serve the Movies HTTP API.",
            formatter_class=ArgumentDefaultsHelpFormatter,
        )
        serve.set_defaults(func=self.process_command)
        serve.add_argument("--host", type=str, default=None, help="The interface to bind. Overrides HOST.")
        serve.add_argument("--port", type=int, default=None, help="The port to listen on. Overrides PORT.")
        add_store_arguments(serve)

    def process_command(self, args: Namespace):
        """
        Run the HTTP API until interrupted.

        Args:
            args: An argparse Namespace containing user arguments.
        """
        config = get_config_from_args(args)
        host = args.host or config.server.host
        port = args.port or config.server.port

        store = get_store_from_config(config)
        try:
            app = create_app(store, request_timeout=config.server.request_timeout)
            LOG.info(f"Serving Movies API on {host}:{port} using the '{config.store.backend}' backend.")
            uvicorn.run(app, host=host, port=port, log_level=args.level.lower())
        finally:
            store.close()
