##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Backend factory for selecting and instantiating movies stores.

This module defines the `MoviesStoreFactory` class, which serves as an abstraction
layer for managing available store implementations. The store used by a process is
chosen once at start-up, by name, from the configuration.

The factory maintains mappings of backend names and aliases, and raises a clear error
if an unsupported backend is requested.
"""

from typing import Any

from movies.abstracts import MoviesBaseFactory
from movies.backends.memory.memory_store import MemoryMoviesStore
from movies.backends.mongodb.mongo_store import MongoMoviesStore
from movies.backends.redis.redis_store import RedisMoviesStore
from movies.backends.sql.sql_stores import MySqlMoviesStore, PostgresMoviesStore, SqlServerMoviesStore
from movies.backends.sqlite.sqlite_store import SQLiteMoviesStore
from movies.backends.store_base import MoviesStore
from movies.exceptions import BackendNotSupportedError, ConfigurationError


class MoviesStoreFactory(MoviesBaseFactory):
    """
    Factory class for managing and instantiating supported movies stores.

    Attributes:
        _registry (Dict[str, MoviesStore]): Maps canonical backend names to store classes.
        _aliases (Dict[str, str]): Maps alternate names (and URL schemes) to canonical backend names.

    Methods:
        register: Register a new store class and optional aliases.
        list_available: Return a list of supported backend names.
        create: Instantiate a store class by name or alias.
        get_component_info: Return metadata about a registered store.
    """

    def _register_builtins(self):
        """
        Register built-in store implementations.
        """
        self.register("memory", MemoryMoviesStore, aliases=["in-memory", "inmemory"])
        self.register("sqlite", SQLiteMoviesStore)
        self.register("redis", RedisMoviesStore, aliases=["rediss"])
        self.register("postgres", PostgresMoviesStore, aliases=["postgresql"])
        self.register("mysql", MySqlMoviesStore)
        self.register("sqlserver", SqlServerMoviesStore, aliases=["mssql"])
        self.register("mongodb", MongoMoviesStore, aliases=["mongo"])

    def _validate_component(self, component_class: Any):
        """
        Ensure registered component is a subclass of MoviesStore.

        Args:
            component_class: The class to validate.

        Raises:
            TypeError: If the component does not subclass MoviesStore.
        """
        if not isinstance(component_class, type) or not issubclass(component_class, MoviesStore):
            raise TypeError(f"{component_class} must inherit from MoviesStore")

    def _entry_point_group(self) -> str:
        """
        Entry point group used for discovering store plugins.

        Returns:
            The entry point namespace for movies store plugins.
        """
        return "movies.backends"

    def _raise_component_error_class(self, msg: str):
        """
        Raise an appropriate exception for unsupported backends.

        Args:
            msg: The message to add to the error being raised.

        Raises:
            BackendNotSupportedError: Always.
        """
        raise BackendNotSupportedError(msg)

    def _raise_creation_error(self, msg: str, exc: Exception):
        """
        Raise an appropriate exception for a store that couldn't be built from its settings.

        Args:
            msg: The message to add to the error being raised.
            exc: The exception raised by the store's constructor.

        Raises:
            ConfigurationError: Always. A `ConfigurationError` from the store is re-raised as is.
        """
        if isinstance(exc, ConfigurationError):
            raise exc
        raise ConfigurationError(msg) from exc


store_factory = MoviesStoreFactory()
