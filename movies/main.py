##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Main entry point into the Movies codebase.
"""

import logging
import sys
import traceback
from typing import List

from movies.cli.argparse_main import build_main_parser
from movies.log_formatter import setup_logging


LOG = logging.getLogger("movies")


def main(argv: List[str] = None):
    """
    Entry point for the Movies command-line interface (CLI).

    This function sets up the argument parser, initializes logging, and
    executes the function of the command that was given. Errors raised by
    the command are logged and turned into a non-zero exit code.

    Args:
        argv: The command-line arguments. Defaults to `sys.argv[1:]`.
    """
    argv = sys.argv[1:] if argv is None else argv
    parser = build_main_parser()
    if not argv:
        parser.print_help(sys.stdout)
        sys.exit(1)
    args = parser.parse_args(argv)

    setup_logging(logger=LOG, log_level=args.level.upper(), colors=True)

    try:
        args.func(args)
        # Being at the literal top of the program stack, a broad except is ok here.
    except Exception as excpt:  # pylint: disable=broad-except
        LOG.debug(traceback.format_exc())
        LOG.error(str(excpt))
        sys.exit(1)

    sys.exit()


if __name__ == "__main__":
    main()
