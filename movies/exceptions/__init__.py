##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Module of all Movies-specific exception types.
"""

__all__ = (
    "MoviesStoreError",
    "RecordNotFoundError",
    "DuplicateKeyError",
    "OperationCancelledError",
    "DeadlineExceededError",
    "BackendNotSupportedError",
    "ConfigurationError",
)


class MoviesStoreError(Exception):
    """
    Base class for every error that is part of the store contract.
    """


class RecordNotFoundError(MoviesStoreError):
    """
    Exception to signal that an operation targeted a movie id that
    does not exist in the store.

    Attributes:
        movie_id: The id that could not be found.
    """

    def __init__(self, movie_id=None, message: str = None):
        self.movie_id = movie_id
        if message is None:
            message = "record not found" if movie_id is None else f"Movie with id '{movie_id}' not found."
        super().__init__(message)


class DuplicateKeyError(MoviesStoreError):
    """
    Exception to signal that a create operation targeted a movie id
    that is already present in the store.

    Attributes:
        movie_id: The id that collided.
    """

    def __init__(self, movie_id=None, message: str = None):
        self.movie_id = movie_id
        if message is None:
            message = "duplicate movie id" if movie_id is None else f"duplicate movie id: {movie_id}"
        super().__init__(message)


class OperationCancelledError(MoviesStoreError):
    """
    Exception to signal that the caller cancelled an operation before
    it could complete.
    """


class DeadlineExceededError(OperationCancelledError):
    """
    Exception to signal that the deadline attached to an operation
    passed before the operation could complete.
    """


class BackendNotSupportedError(Exception):
    """
    Exception to signal that the requested store backend is not supported.
    """


class ConfigurationError(Exception):
    """
    Exception to signal that the configuration can't be used to build
    the requested component.
    """
