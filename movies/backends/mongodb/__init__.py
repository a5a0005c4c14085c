##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
MongoDB-based store for the Movies application.

Modules:
    mongo_store: Implements `MoviesStore` using a MongoDB collection.
"""
