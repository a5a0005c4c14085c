##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
SQLite-based store for the Movies application.

Modules:
    sqlite_connection: Provides a context-managed SQLite connection with safe configuration.
    sqlite_store: Implements `MoviesStore` using SQLite.
"""
