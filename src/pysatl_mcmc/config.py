"""
Configuration value objects with declarative constraints.

Components are configured by frozen dataclasses with named, defaulted fields.
Validation predicates are declared with :func:`constraint` and collected by the
:func:`configuration` class decorator. Alternative forms of the same
configuration (for example several parametrizations of one distribution) are
grouped in a :class:`ConfigurationFamily` and converted to a single base form
with :meth:`Configuration.transform_to_base`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC
from dataclasses import dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec

from pysatl_mcmc.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any, ClassVar


@dataclass(slots=True, frozen=True)
class ConfigurationConstraint:
    """
    Constraint on the fields of a configuration.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    """

    description: str
    check: Callable[[Any], bool]


class Configuration(ABC):
    """
    Abstract base class for configuration value objects.

    Subclasses are turned into frozen slotted dataclasses by
    :func:`configuration`.
    """

    # These attributes are set by the @configuration decorator
    __config_name__: ClassVar[str]

    _constraints: ClassVar[list[ConfigurationConstraint]] = []

    @property
    def name(self) -> str:
        """Get the name of this configuration."""
        return self.__class__.__config_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Get fields as a dictionary."""
        fields = getattr(self, "__dataclass_fields__", None)
        if fields:
            return {f: getattr(self, f) for f in fields}
        ann = getattr(self, "__annotations__", {})
        return {k: getattr(self, k) for k in ann}

    @property
    def constraints(self) -> list[ConfigurationConstraint]:
        """Get constraints for this configuration."""
        return self._constraints

    def validate(self) -> None:
        """
        Validate all constraints for this configuration.

        Raises
        ------
        ConfigurationError
            If any constraint is not satisfied.
        """
        for constraint in self._constraints:
            if not constraint.check(self):
                raise ConfigurationError(
                    f'{self.name}: constraint "{constraint.description}" does not hold '
                    f"for {self.parameters}"
                )

    def transform_to_base(self) -> Configuration:
        """
        Convert this configuration to the base form of its family.

        Returns
        -------
        Configuration
            Equivalent configuration in the base form.

        Notes
        -----
        Base implementation returns self.
        """
        return self


class ConfigurationFamily:
    """
    Named group of alternative configurations.

    Parameters
    ----------
    name : str
        Family name, e.g. the distribution the parametrizations belong to.
    base : str or None, default None
        Name of the base form. Defaults to the first registered one.
    """

    def __init__(self, name: str, base: str | None = None) -> None:
        self.name = name
        self._base = base
        self._members: dict[str, type[Configuration]] = {}

    def register(self, name: str, cls: type[Configuration]) -> None:
        """Register a configuration class under ``name``."""
        if name in self._members:
            raise ValueError(f"Configuration {name} already registered in {self.name}")
        self._members[name] = cls
        if self._base is None:
            self._base = name

    def get(self, name: str) -> type[Configuration]:
        """
        Retrieve a configuration class by name.

        Raises
        ------
        ConfigurationError
            If no configuration with the given name exists.
        """
        if name not in self._members:
            raise ConfigurationError(
                f"{self.name} has no configuration {name!r}; "
                f"known: {', '.join(self._members)}"
            )
        return self._members[name]

    @property
    def base_name(self) -> str:
        if self._base is None:
            raise ConfigurationError(f"{self.name} has no registered configurations")
        return self._base

    @property
    def names(self) -> list[str]:
        return list(self._members)

    def create(self, name: str, **fields: Any) -> Configuration:
        """
        Build, validate and return the configuration ``name``.

        Raises
        ------
        ConfigurationError
            If the form is unknown, a field is missing or a constraint fails.
        """
        cls = self.get(name)
        try:
            config = cls(**fields)
        except TypeError as e:
            raise ConfigurationError(f"{self.name}.{name}: {e}") from e
        config.validate()
        return config


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a configuration constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Returns
    -------
    Callable[[Callable[P, bool]], Callable[P, bool]]
        Decorator that marks the function as a constraint.
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return func(*args, **kwargs)

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def _collect_constraints(cls: type) -> list[ConfigurationConstraint]:
    constraints: dict[str, ConfigurationConstraint] = {}
    for klass in reversed(cls.__mro__):
        for attr_name, attr in vars(klass).items():
            if isinstance(attr, staticmethod | classmethod):
                if getattr(attr.__func__, "__is_constraint", False):
                    raise TypeError(f"@constraint '{attr_name}' must be an instance method")
                continue
            if not (callable(attr) and isfunction(attr)):
                continue
            if getattr(attr, "__is_constraint", False):
                desc = getattr(attr, "__constraint_description", attr.__name__)
                constraints[attr_name] = ConfigurationConstraint(description=desc, check=attr)
    return list(constraints.values())


def configuration(
    *,
    name: str,
    family: ConfigurationFamily | None = None,
) -> Callable[[type[Configuration]], type[Configuration]]:
    """
    Class decorator declaring a configuration value object.

    Parameters
    ----------
    name : str
        Name of the configuration.
    family : ConfigurationFamily or None, default None
        Family to register the class with.

    Returns
    -------
    Callable[[type[Configuration]], type[Configuration]]
        Class decorator.

    Notes
    -----
    Converts the class to a frozen slotted dataclass if not already one and
    collects constraint methods, including inherited ones.
    """

    def decorator(cls: type[Configuration]) -> type[Configuration]:
        if "__dataclass_fields__" not in cls.__dict__:
            cls = dataclass(slots=True, frozen=True)(cls)

        cls.__config_name__ = name
        cls._constraints = _collect_constraints(cls)

        if family is not None:
            family.register(name, cls)
        return cls

    return decorator


__all__ = [
    "Configuration",
    "ConfigurationConstraint",
    "ConfigurationFamily",
    "configuration",
    "constraint",
]
