##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Store infrastructure for the Movies application.

The `backends` package defines the store interface (`MoviesStore`) that every
persistence backend satisfies, the concrete implementations of it, shared
serialization helpers, and a factory that picks an implementation by name.

Subpackages:
    memory: The in-memory reference implementation and its reader/writer lock.
    sqlite: SQLite-based store with per-operation connections.
    redis: Redis-based store built on hashes and WATCH transactions.
    sql: SQLAlchemy-based stores for PostgreSQL, MySQL, and SQL Server.
    mongodb: MongoDB-based store.

Modules:
    backend_factory: Contains `MoviesStoreFactory`, used to select and instantiate a store.
    store_base: Provides the abstract `MoviesStore` class.
    utils: Utility functions for serialization and error classification across backends.
"""
