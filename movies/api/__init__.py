##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
The HTTP API of the Movies application.

Modules:
    app: Contains `create_app`, which builds the FastAPI application around a store.
    routes: The movie endpoints.
    schemas: Request and response bodies.
"""

from movies.api.app import create_app


__all__ = ["create_app"]
