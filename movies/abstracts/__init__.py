##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
The `abstracts` package provides ABC classes that can be used throughout
the Movies codebase.

Modules:
    factory: Contains `MoviesBaseFactory`, used to manage pluggable components.
"""

from movies.abstracts.factory import MoviesBaseFactory


__all__ = ["MoviesBaseFactory"]
