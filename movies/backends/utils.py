##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Utility functions for backends in the Movies application.

These utilities convert movies into a flat, string-valued format that key-value
and file-based backends can persist, convert such data back into `Movie` objects,
and provide the text-matching fallback used when classifying driver errors.
"""

import logging
from datetime import datetime
from typing import Dict, Iterable, Mapping

from movies.data_models import Movie


LOG = logging.getLogger(__name__)


def serialize_movie(movie: Movie) -> Dict[str, str]:
    """
    Given a `Movie` instance, convert its data into a format that the database can interpret.

    Args:
        movie: A `Movie` instance.

    Returns:
        A dictionary of string values keyed by field name. Fields that are
            `None` are omitted.
    """
    serialized_data = {}

    for field in movie.get_instance_fields():
        value = getattr(movie, field.name)
        if value is None:
            # Unset timestamps are left out rather than stored as a placeholder
            continue
        if isinstance(value, datetime):
            # A fixed width keeps stored timestamps ordered when compared as text
            serialized_data[field.name] = value.isoformat(timespec="microseconds")
        elif isinstance(value, float):
            serialized_data[field.name] = repr(value)
        else:
            serialized_data[field.name] = str(value)

    return serialized_data


def deserialize_movie(data: Mapping[str, str]) -> Movie:
    """
    Given data that was retrieved from a database, convert it into a `Movie` instance.

    Args:
        data: The data retrieved that we need to deserialize.

    Returns:
        A `Movie` instance.
    """
    return Movie.from_dict(dict(data))


def error_text_contains(exc: BaseException, markers: Iterable[str]) -> bool:
    """
    Check whether the text of an exception (or the exception it wraps) contains any of `markers`.

    This is only a compatibility shim for drivers that don't expose a structured
    error code; the wording of driver messages is not stable across versions.

    Args:
        exc: The exception to inspect.
        markers: Substrings that identify the condition.

    Returns:
        True if any marker appears in the error text, False otherwise.
    """
    texts = [str(exc)]
    orig = getattr(exc, "orig", None)
    if orig is not None:
        texts.append(str(orig))
    matched = any(marker in text for marker in markers for text in texts)
    if matched:
        LOG.debug(f"Classified error by message text: {texts[-1]}")
    return matched
