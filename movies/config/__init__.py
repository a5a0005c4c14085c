##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Used to store the application configuration.

The `config` package loads the settings of the Movies application from an
`app.yaml` file and the environment, and hands them to the parts of the
application that need them.

Modules:
    config_filepaths.py: Constants for the locations searched for `app.yaml`.
    configfile.py: Handles locating, loading, and defaulting the configuration,
        and applying environment overrides.
"""
from types import SimpleNamespace
from typing import Dict, List, Optional

from movies.utils import nested_dict_to_namespaces


class Config:  # pylint: disable=R0903
    """
    The Config class, meant to store all Movies config settings in one place.

    Attributes:
        store (Optional[SimpleNamespace]): A namespace containing store (backend) settings.
        server (Optional[SimpleNamespace]): A namespace containing HTTP server settings.

    Methods:
        __str__: Returns a formatted string representation of the Config instance.
        load_app_into_namespaces: Converts the provided configuration dictionary into namespaces
            and assigns them to the Config instance's attributes.
    """

    FIELDS: List[str] = ["store", "server"]

    def __init__(self, app_dict: Dict):
        """
        Initializes the Config instance with configuration data from a dictionary.

        Args:
            app_dict: A dictionary containing configuration data for the application.
                The "store" and "server" keys are each converted into a `SimpleNamespace`.
        """
        self.store: Optional[SimpleNamespace] = None
        self.server: Optional[SimpleNamespace] = None
        self.load_app_into_namespaces(app_dict)

    def __str__(self) -> str:
        """
        Returns a formatted string representation of the Config instance.

        Returns:
            A string containing the values of the `store` and `server` attributes.
        """
        formatted_str = "config:"
        for name in self.FIELDS:
            attr = getattr(self, name)
            if attr is not None:
                items = (f"    {k}: {v!r}" for k, v in attr.__dict__.items())
                joined_items = "\n".join(items)
                formatted_str += f"\n  {name}:\n{joined_items}"
            else:
                formatted_str += f"\n  {name}:\n    None"
        return formatted_str

    def load_app_into_namespaces(self, app_dict: Dict):
        """
        Converts the provided application dictionary into namespaces and assigns them
        to the Config instance's attributes.

        Args:
            app_dict: A dictionary containing configuration data for the application.
        """
        for field in self.FIELDS:
            try:
                setattr(self, field, nested_dict_to_namespaces(app_dict[field]))
            except KeyError:
                # The sections are optional
                pass
