##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Movies: a CRUD service for movies over swappable storage backends.

This module contains the source code for Movies.
"""


__version__ = "1.0.0"
VERSION = __version__
