##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Module for project-wide utility functions.
"""

import logging
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Dict, Union

import yaml


LOG = logging.getLogger(__name__)


def load_yaml(filepath: str) -> Dict:
    """
    Safely read a YAML file and return its contents.

    Args:
        filepath: The file path to the YAML file to be read.

    Returns:
        A dict representing the contents of the YAML file.
    """
    with open(filepath, "r") as _file:
        return yaml.safe_load(_file)


def nested_dict_to_namespaces(dic: Dict) -> SimpleNamespace:
    """
    Convert a nested dictionary into a nested SimpleNamespace structure.

    Args:
        dic: The nested dictionary to be converted.

    Returns:
        A SimpleNamespace object representing the nested structure of the input dictionary.

    Raises:
        TypeError: If the input is not a dictionary.
    """

    def recurse(dic):
        if not isinstance(dic, dict):
            return dic
        for key, val in list(dic.items()):
            dic[key] = recurse(val)
        return SimpleNamespace(**dic)

    if not isinstance(dic, dict):
        raise TypeError(f"Expected a dict, got {type(dic)}.")

    return recurse(dic)


def utc_now() -> datetime:
    """
    Get the current time as a timezone-aware UTC datetime.

    Returns:
        The current UTC time.
    """
    return datetime.now(timezone.utc)


def ensure_utc(value: Union[datetime, str]) -> datetime:
    """
    Normalize a datetime (or an ISO 8601 string) to an aware UTC datetime.

    Naive datetimes are interpreted as UTC. Several database drivers hand back
    naive values for columns that were written in UTC, so this is what makes
    values read from any backend comparable.

    Args:
        value: A datetime or an ISO 8601 formatted string.

    Returns:
        An aware datetime in UTC.

    Raises:
        TypeError: If `value` is neither a datetime nor a string.
    """
    if isinstance(value, str):
        # fromisoformat only learned to read a trailing "Z" in python 3.11
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        raise TypeError(f"Expected a datetime, got {type(value)}.")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def ensure_uuid(value: Any) -> uuid.UUID:
    """
    Convert `value` to a UUID.

    Args:
        value: A UUID, or anything whose string form is a UUID.

    Returns:
        The value as a `uuid.UUID`.

    Raises:
        ValueError: If `value` is not a valid UUID.
    """
    if isinstance(value, uuid.UUID):
        return value
    if isinstance(value, bytes) and len(value) == 16:
        return uuid.UUID(bytes=value)
    return uuid.UUID(str(value))
