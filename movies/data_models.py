##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
This module houses dataclasses that define the format of the data
that's stored by every movies store.
"""

import logging
import uuid
from dataclasses import Field, asdict, dataclass, replace
from dataclasses import fields as dataclass_fields
from datetime import datetime
from typing import Dict, Tuple, Type, TypeVar

from movies.utils import ensure_utc, ensure_uuid


LOG = logging.getLogger(__name__)
T = TypeVar("T", bound="BaseDataModel")


@dataclass
class BaseDataModel:
    """
    A base class for dataclasses that provides common serialization and
    deserialization functionality.

    Subclasses declare their fields as usual; `from_dict` coerces string
    values produced by `to_dict` (or by a database driver) back to the
    annotated types so that every backend can share one representation.

    Methods:
        to_dict:
            Convert the dataclass instance to a JSON-friendly dictionary.

        from_dict (classmethod):
            Create an instance of the dataclass from a dictionary.

        get_instance_fields:
            Retrieve the fields associated with this dataclass instance.

        get_class_fields (classmethod):
            Retrieve the fields associated with the dataclass class itself.
    """

    def to_dict(self) -> Dict:
        """
        Convert the dataclass to a dictionary of JSON-friendly values.

        UUIDs become strings and datetimes become ISO 8601 strings.

        Returns:
            The dataclass as a dictionary.
        """
        result = {}
        for key, value in asdict(self).items():
            if isinstance(value, uuid.UUID):
                value = str(value)
            elif isinstance(value, datetime):
                value = value.isoformat()
            result[key] = value
        return result

    @classmethod
    def from_dict(cls: Type[T], data: Dict) -> T:
        """
        Create an instance of the dataclass from a dictionary.

        Keys that are not fields of the dataclass are ignored with a warning.

        Args:
            data: A dictionary to turn into an instance of this dataclass.

        Returns:
            An instance of the dataclass that called this.
        """
        kwargs = {}
        for field_obj in cls.get_class_fields():
            if field_obj.name in data:
                kwargs[field_obj.name] = _coerce(field_obj.type, data[field_obj.name])

        unknown = set(data) - set(kwargs)
        if unknown:
            LOG.warning(f"Ignoring unknown fields for {cls.__name__}: {sorted(unknown)}")

        return cls(**kwargs)

    def get_instance_fields(self) -> Tuple[Field]:
        """
        Get the fields associated with this instance.

        Returns:
            A tuple of dataclass.Field objects representing the fields in this data class.
        """
        return dataclass_fields(self)

    @classmethod
    def get_class_fields(cls) -> Tuple[Field]:
        """
        Get the fields associated with this class.

        Returns:
            A tuple of dataclass.Field objects representing the fields in this data class.
        """
        return dataclass_fields(cls)


def _coerce(field_type, value):
    """
    Convert `value` to `field_type` for the handful of types movies use.

    Args:
        field_type: The annotated type of the field.
        value: The raw value.

    Returns:
        The converted value.
    """
    if value is None:
        return None
    if field_type is uuid.UUID:
        return ensure_uuid(value)
    if field_type is datetime:
        return ensure_utc(value)
    if field_type is float:
        return float(value)
    if field_type is str:
        return str(value)
    return value


@dataclass
class Movie(BaseDataModel):  # pylint: disable=too-many-instance-attributes
    """
    A dataclass to store all of the information for a movie.

    Attributes:
        id (uuid.UUID): The unique, caller-supplied id of the movie.
        title (str): The title of the movie.
        director (str): The director of the movie.
        release_date (datetime): The release date, in UTC.
        ticket_price (float): The price of a ticket.
        created_at (datetime): When the store created the record, in UTC.
        updated_at (datetime): When the store last wrote the record, in UTC.
    """

    id: uuid.UUID  # pylint: disable=invalid-name
    title: str
    director: str
    release_date: datetime
    ticket_price: float
    created_at: datetime = None
    updated_at: datetime = None

    def __post_init__(self):
        self.id = ensure_uuid(self.id)
        self.release_date = ensure_utc(self.release_date)
        self.ticket_price = float(self.ticket_price)
        if self.created_at is not None:
            self.created_at = ensure_utc(self.created_at)
        if self.updated_at is not None:
            self.updated_at = ensure_utc(self.updated_at)

    def copy(self) -> "Movie":
        """
        Get a copy of this movie that can be handed out to callers.

        Returns:
            A new `Movie` with the same field values.
        """
        return replace(self)


@dataclass
class CreateMovieParams(BaseDataModel):
    """
    The caller-supplied fields used to create a new movie.

    Attributes:
        id (uuid.UUID): The id of the new movie.
        title (str): The title of the movie.
        director (str): The director of the movie.
        release_date (datetime): The release date of the movie.
        ticket_price (float): The price of a ticket.
    """

    id: uuid.UUID  # pylint: disable=invalid-name
    title: str
    director: str
    release_date: datetime
    ticket_price: float

    def __post_init__(self):
        self.id = ensure_uuid(self.id)
        self.release_date = ensure_utc(self.release_date)
        self.ticket_price = float(self.ticket_price)

    def to_movie(self, now: datetime) -> Movie:
        """
        Build the movie that a store persists for these params.

        Args:
            now: The creation time; used for both `created_at` and `updated_at`.

        Returns:
            A new `Movie`.
        """
        return Movie(
            id=self.id,
            title=self.title,
            director=self.director,
            release_date=self.release_date,
            ticket_price=self.ticket_price,
            created_at=now,
            updated_at=now,
        )


@dataclass
class UpdateMovieParams(BaseDataModel):
    """
    The caller-supplied fields that replace the mutable fields of a movie.

    Attributes:
        title (str): The new title.
        director (str): The new director.
        release_date (datetime): The new release date.
        ticket_price (float): The new ticket price.
    """

    title: str
    director: str
    release_date: datetime
    ticket_price: float

    def __post_init__(self):
        self.release_date = ensure_utc(self.release_date)
        self.ticket_price = float(self.ticket_price)

    def apply_to(self, movie: Movie, now: datetime) -> Movie:
        """
        Build the updated version of `movie`.

        `id` and `created_at` are carried over unchanged and `updated_at` never
        moves backwards, even if the wall clock does.

        Args:
            movie: The currently stored movie.
            now: The time of the update.

        Returns:
            A new `Movie` with the mutable fields replaced.
        """
        updated_at = now if movie.updated_at is None else max(now, movie.updated_at)
        return replace(
            movie,
            title=self.title,
            director=self.director,
            release_date=self.release_date,
            ticket_price=self.ticket_price,
            updated_at=updated_at,
        )
