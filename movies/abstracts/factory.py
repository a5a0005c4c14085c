##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
A registry of named, swappable implementations.

`MoviesBaseFactory` keeps a table of canonical names (plus aliases) to classes,
builds instances from keyword settings, and extends itself with classes that
other distributions publish under an entry point group. The store factory in
`movies.backends.backend_factory` is built on it.
"""

import logging
from abc import ABC, abstractmethod
from importlib.metadata import entry_points
from typing import Any, Dict, List


LOG = logging.getLogger(__name__)


class MoviesBaseFactory(ABC):
    """
    Registry and constructor for one family of implementations.

    Names are case-insensitive. Classes registered by `_register_builtins` always
    take precedence over entry point plugins of the same name.

    Subclasses provide:
        - `_register_builtins()`: register the implementations shipped with Movies
        - `_validate_component()`: reject classes that don't satisfy the family's interface
        - `_entry_point_group()`: the entry point group plugins are published under

    Attributes:
        _registry (Dict[str, Any]): Canonical name -> class.
        _aliases (Dict[str, str]): Alias -> canonical name.

    Methods:
        register: Add a class under a name and optional aliases.
        resolve: Turn a name or alias into a canonical name.
        list_available: Canonical names of every known implementation.
        list_aliases: Aliases of one implementation.
        create: Build an instance from a name and keyword settings.
        get_component_info: Describe one implementation.
    """

    def __init__(self):
        self._registry: Dict[str, Any] = {}
        # e.g. shorthand names and URL schemes
        self._aliases: Dict[str, str] = {}

        self._plugins_discovered = False
        self._register_builtins()

    @abstractmethod
    def _register_builtins(self):
        """Register the implementations that ship with Movies."""
        raise NotImplementedError("Subclasses of `MoviesBaseFactory` must implement a `_register_builtins` method.")

    @abstractmethod
    def _validate_component(self, component_class: Any):
        """
        Check a class before it's added to the registry.

        Args:
            component_class: The class being registered.

        Raises:
            TypeError: If the class doesn't belong in this factory.
        """
        raise NotImplementedError("Subclasses of `MoviesBaseFactory` must implement a `_validate_component` method.")

    @abstractmethod
    def _entry_point_group(self) -> str:
        """The entry point group that plugins for this factory are published under."""
        raise NotImplementedError("Subclasses of `MoviesBaseFactory` must implement an `_entry_point_group` method.")

    def _discover_plugins(self):
        """
        Register the classes published under `_entry_point_group()`.

        Only the first call looks at the installed distributions. A plugin that
        fails to import is logged and skipped.
        """
        if self._plugins_discovered:
            return
        self._plugins_discovered = True

        for entry_point in entry_points(group=self._entry_point_group()):
            if entry_point.name in self._registry:
                continue
            try:
                plugin_class = entry_point.load()
                self.register(entry_point.name, plugin_class)
                LOG.info(f"Loaded plugin via entry point: {entry_point.name}")
            except Exception as e:  # pylint: disable=broad-exception-caught
                LOG.warning(f"Failed to load plugin '{entry_point.name}': {e}")

    def _raise_component_error_class(self, msg: str):
        """
        Report a name that nothing is registered under. Subclasses raise their own error type.

        Args:
            msg: Description of the unknown name and the names that are available.

        Raises:
            ValueError: Unless overridden.
        """
        raise ValueError(msg)

    def _raise_creation_error(self, msg: str, exc: Exception):
        """
        Report a constructor that failed. Subclasses raise their own error type.

        Args:
            msg: Description of the failure.
            exc: What the constructor raised. Chained as the cause.

        Raises:
            ValueError: Unless overridden.
        """
        raise ValueError(msg) from exc

    def register(self, name: str, component_class: Any, aliases: List[str] = None):
        """
        Add a class to the registry.

        Args:
            name: The canonical name.
            component_class: The class.
            aliases: Other names that resolve to `name`.

        Raises:
            TypeError: If `_validate_component` rejects the class.
        """
        self._validate_component(component_class)

        self._registry[name] = component_class
        LOG.debug(f"Registered component: {name}")

        for alias in aliases or []:
            self._aliases[alias] = name
            LOG.debug(f"Registered alias '{alias}' for component '{name}'")

    def resolve(self, component_type: str) -> str:
        """
        Turn a name or alias, in any case, into a canonical name.

        Args:
            component_type: A name or alias.

        Returns:
            The canonical name. Names that aren't aliases come back lowercased.
        """
        component_type = component_type.lower()
        return self._aliases.get(component_type, component_type)

    def list_available(self) -> List[str]:
        """Canonical names of the built-in implementations and of any installed plugins."""
        self._discover_plugins()
        return list(self._registry.keys())

    def list_aliases(self, canonical_name: str) -> List[str]:
        """Aliases of `canonical_name`, in the order they were registered."""
        return [alias for alias, name in self._aliases.items() if name == canonical_name]

    def _get_component_class(self, canonical_name: str, component_type: str) -> Any:
        """
        Look up a class, loading plugins first if the name isn't a built-in.

        Args:
            canonical_name: The resolved name.
            component_type: The name as the caller gave it, for the error message.

        Returns:
            The registered class.
        """
        if canonical_name not in self._registry:
            self._discover_plugins()

        component_class = self._registry.get(canonical_name)
        if component_class is None:
            available = ", ".join(self.list_available())
            self._raise_component_error_class(
                f"Component '{component_type}' is not supported. Available components: {available}"
            )

        return component_class

    def create(self, component_type: str, config: Dict = None) -> Any:
        """
        Build an instance of a registered class.

        Args:
            component_type: A name or alias.
            config: Keyword arguments for the constructor.

        Returns:
            The new instance.
        """
        canonical_name = self.resolve(component_type)
        component_class = self._get_component_class(canonical_name, component_type)

        try:
            instance = component_class() if config is None else component_class(**config)
        except Exception as e:  # pylint: disable=broad-exception-caught
            self._raise_creation_error(f"Failed to create component '{canonical_name}': {e}", e)
        LOG.info(f"Created component '{canonical_name}'")
        return instance

    def get_component_info(self, component_type: str) -> Dict:
        """
        Describe a registered class.

        Args:
            component_type: A name or alias.

        Returns:
            The canonical name, class name, module, aliases, and docstring of the class.
        """
        canonical_name = self.resolve(component_type)
        component_class = self._get_component_class(canonical_name, component_type)

        return {
            "name": canonical_name,
            "class": component_class.__name__,
            "module": component_class.__module__,
            "aliases": self.list_aliases(canonical_name),
            "description": component_class.__doc__ or "No description available",
        }
