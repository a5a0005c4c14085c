##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Request and response bodies of the Movies HTTP API.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from movies.data_models import CreateMovieParams, Movie, UpdateMovieParams


class MovieResponse(BaseModel):
    """A movie as returned by the API."""

    id: uuid.UUID
    title: str
    director: str
    release_date: datetime
    ticket_price: float
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_movie(cls, movie: Movie) -> "MovieResponse":
        return cls(**movie.to_dict())


class CreateMovieRequest(BaseModel):
    """The body of `POST /movies`."""

    id: uuid.UUID
    title: str
    director: str
    release_date: datetime
    ticket_price: float

    def to_params(self) -> CreateMovieParams:
        return CreateMovieParams(
            id=self.id,
            title=self.title,
            director=self.director,
            release_date=self.release_date,
            ticket_price=self.ticket_price,
        )


class UpdateMovieRequest(BaseModel):
    """The body of `PUT /movies/{id}`."""

    title: str
    director: str
    release_date: datetime
    ticket_price: float

    def to_params(self) -> UpdateMovieParams:
        return UpdateMovieParams(
            title=self.title,
            director=self.director,
            release_date=self.release_date,
            ticket_price=self.ticket_price,
        )


class ErrorResponse(BaseModel):
    """The body of every error response."""

    status: str
    error: Optional[str] = None
