##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Redis-based store for the Movies application.

Modules:
    redis_store: Implements `MoviesStore` using Redis hashes.
"""
