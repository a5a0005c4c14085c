##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
The command-line interface of the Movies application.

Modules:
    argparse_main: Builds the main `movies` argument parser.
    utils: Helpers shared by the commands.

Subpackages:
    commands: One module per command.
"""
