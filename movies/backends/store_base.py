##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
This module defines the abstract base class for all movie store implementations.

This module provides the `MoviesStore` class, which outlines the required interface for listing,
retrieving, creating, updating, and deleting movies in a backing data store. All concrete store
classes (in-memory, SQLite, Redis, SQL servers, MongoDB) must inherit from this class and
implement its abstract methods.

Contract shared by every implementation:
    - `get_all` returns an empty list, never an error, for an empty store.
    - `get_by_id` and `update` raise `RecordNotFoundError` for an unknown id.
    - `create` raises `DuplicateKeyError` for an id that is already stored.
    - `delete` of an unknown id is a silent success.
    - `created_at` and `updated_at` are owned by the store and are always UTC.
    - Failures that are not part of this contract (lost connections, timeouts)
      propagate unchanged and are never retried by the store.
"""

import uuid
from abc import ABC, abstractmethod
from typing import List

from movies.context import OperationContext
from movies.data_models import CreateMovieParams, Movie, UpdateMovieParams


class MoviesStore(ABC):
    """
    Base class for all movie stores.

    Every method accepts an optional `OperationContext`; implementations check
    it before starting work and wherever they may suspend.

    Attributes:
        backend_name (str): The name the store is registered under in the backend factory.

    Methods:
        get_all: Retrieve every movie in the store.
        get_by_id: Retrieve one movie by id.
        create: Create a new movie.
        update: Replace the mutable fields of an existing movie.
        delete: Delete a movie by id.
        close: Release any resources held by the store.
    """

    backend_name: str = None

    @abstractmethod
    def get_all(self, ctx: OperationContext = None) -> List[Movie]:
        """
        Retrieve every movie in the store, in no particular order.

        Args:
            ctx: The context of the operation.

        Returns:
            A list of movies, empty if the store holds none.
        """
        raise NotImplementedError("Subclasses of `MoviesStore` must implement a `get_all` method.")

    @abstractmethod
    def get_by_id(self, movie_id: uuid.UUID, ctx: OperationContext = None) -> Movie:
        """
        Retrieve a movie by its id.

        Args:
            movie_id: The id of the movie to retrieve.
            ctx: The context of the operation.

        Returns:
            The movie.

        Raises:
            RecordNotFoundError: If no movie with `movie_id` exists.
        """
        raise NotImplementedError("Subclasses of `MoviesStore` must implement a `get_by_id` method.")

    @abstractmethod
    def create(self, params: CreateMovieParams, ctx: OperationContext = None):
        """
        Create a new movie, stamping `created_at` and `updated_at` with the current UTC time.

        Args:
            params: The fields of the new movie.
            ctx: The context of the operation.

        Raises:
            DuplicateKeyError: If a movie with `params.id` already exists.
        """
        raise NotImplementedError("Subclasses of `MoviesStore` must implement a `create` method.")

    @abstractmethod
    def update(self, movie_id: uuid.UUID, params: UpdateMovieParams, ctx: OperationContext = None):
        """
        Replace the title, director, release date, and ticket price of a movie and
        stamp `updated_at` with the current UTC time.

        Args:
            movie_id: The id of the movie to update.
            params: The new values of the mutable fields.
            ctx: The context of the operation.

        Raises:
            RecordNotFoundError: If no movie with `movie_id` exists.
        """
        raise NotImplementedError("Subclasses of `MoviesStore` must implement an `update` method.")

    @abstractmethod
    def delete(self, movie_id: uuid.UUID, ctx: OperationContext = None):
        """
        Delete a movie by its id. Deleting an id that doesn't exist is not an error.

        Args:
            movie_id: The id of the movie to delete.
            ctx: The context of the operation.
        """
        raise NotImplementedError("Subclasses of `MoviesStore` must implement a `delete` method.")

    def close(self):
        """
        Release the resources (connection pools, clients) held by this store.
        """

    def __enter__(self) -> "MoviesStore":
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
