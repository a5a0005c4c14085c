##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
In-memory store for the Movies application.

Modules:
    memory_store: The reference `MoviesStore` implementation.
    rwlock: A writer-preferring reader/writer lock.
"""
