##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
This module stores constants representing file paths that will be needed for
the Movies configuration.
"""

import os


APP_FILENAME: str = "app.yaml"
USER_HOME: str = os.path.expanduser("~")
DEFAULT_MOVIES_HOME: str = os.path.join(USER_HOME, ".movies")
MOVIES_HOME_ENV: str = "MOVIES_HOME"
