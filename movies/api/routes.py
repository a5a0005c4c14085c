##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Movie endpoints.

Each endpoint makes exactly one store call. Store errors are not handled
here; they propagate to the exception handlers registered in `movies.api.app`,
which turn them into status codes.
"""

import logging
import uuid
from typing import List

from fastapi import APIRouter, Depends, Request, Response

from movies.api.schemas import CreateMovieRequest, MovieResponse, UpdateMovieRequest
from movies.backends.store_base import MoviesStore
from movies.context import OperationContext


LOG = logging.getLogger(__name__)

router = APIRouter(tags=["movies"])


def get_store(request: Request) -> MoviesStore:
    """Get the store the application was created with."""
    return request.app.state.store


def get_context(request: Request) -> OperationContext:
    """Create the context for one request, bounded by the configured request timeout."""
    return OperationContext.with_timeout(request.app.state.request_timeout)


@router.get("/health")
def health():
    return {"status": "OK"}


@router.get("/movies", response_model=List[MovieResponse])
def list_movies(
    store: MoviesStore = Depends(get_store),
    ctx: OperationContext = Depends(get_context),
):
    return [MovieResponse.from_movie(movie) for movie in store.get_all(ctx)]


@router.get("/movies/{movie_id}", response_model=MovieResponse)
def get_movie(
    movie_id: uuid.UUID,
    store: MoviesStore = Depends(get_store),
    ctx: OperationContext = Depends(get_context),
):
    return MovieResponse.from_movie(store.get_by_id(movie_id, ctx))


@router.post("/movies")
def create_movie(
    movie: CreateMovieRequest,
    store: MoviesStore = Depends(get_store),
    ctx: OperationContext = Depends(get_context),
):
    store.create(movie.to_params(), ctx)
    LOG.info(f"Created movie '{movie.id}'.")
    return Response(status_code=200)


@router.put("/movies/{movie_id}")
def update_movie(
    movie_id: uuid.UUID,
    movie: UpdateMovieRequest,
    store: MoviesStore = Depends(get_store),
    ctx: OperationContext = Depends(get_context),
):
    store.update(movie_id, movie.to_params(), ctx)
    LOG.info(f"Updated movie '{movie_id}'.")
    return Response(status_code=200)


@router.delete("/movies/{movie_id}")
def delete_movie(
    movie_id: uuid.UUID,
    store: MoviesStore = Depends(get_store),
    ctx: OperationContext = Depends(get_context),
):
    store.delete(movie_id, ctx)
    LOG.info(f"Deleted movie '{movie_id}'.")
    return Response(status_code=200)
