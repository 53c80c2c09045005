"""
Value-space domains for tensors.

A :class:`Domain` is an immutable descriptor of the values a tensor element may
take. Built-in domains are module-level singletons and form a refinement
lattice used to check whether one distribution template may stand in for
another.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass, field
from math import inf, isnan
from typing import TYPE_CHECKING, ClassVar

import numpy as np

from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.types import Interval1D, Kind

if TYPE_CHECKING:
    from collections.abc import Iterable

    from pysatl_mcmc.types import Number, NumericArray


@dataclass(frozen=True, slots=True, eq=False)
class Domain:
    """
    Immutable value-space descriptor.

    Parameters
    ----------
    name : str
        Unique domain name.
    kind : Kind
        Primitive kind of the values.
    interval : Interval1D
        Admissible range (ignored for booleans).
    parent : Domain or None, default None
        Immediate superset in the refinement lattice.
    """

    name: str
    kind: Kind
    interval: Interval1D = field(default_factory=Interval1D)
    parent: Domain | None = None

    @property
    def lower(self) -> float:
        return self.interval.left

    @property
    def upper(self) -> float:
        return self.interval.right

    @property
    def lower_inclusive(self) -> bool:
        return self.interval.left_closed

    @property
    def upper_inclusive(self) -> bool:
        return self.interval.right_closed

    def is_valid(self, value: Number) -> bool:
        """
        Membership test for a single value.

        Parameters
        ----------
        value : Number
            Candidate value.

        Returns
        -------
        bool
            ``True`` if ``value`` belongs to the domain. NaN never does,
            integer domains also require an integral value.
        """
        if self.kind is Kind.BOOL:
            return isinstance(value, bool | np.bool_)
        if isinstance(value, bool | np.bool_):
            return False
        fvalue = float(value)
        if isnan(fvalue):
            return False
        if self.kind is Kind.INT and not fvalue.is_integer():
            return False
        return fvalue in self.interval

    def is_valid_all(self, values: Iterable[Number] | NumericArray) -> bool:
        """Membership test for every element of ``values``."""
        return all(self.is_valid(v) for v in np.asarray(values).tolist())

    def is_subdomain_of(self, other: Domain) -> bool:
        """
        Check whether this domain refines ``other``.

        Every domain refines itself.
        """
        node: Domain | None = self
        while node is not None:
            if node is other:
                return True
            node = node.parent
        return False

    def __repr__(self) -> str:
        return f"Domain({self.name})"


def is_compatible(a: Domain, b: Domain) -> bool:
    """Two domains are compatible when either one refines the other."""
    return a.is_subdomain_of(b) or b.is_subdomain_of(a)


Real = Domain("Real", Kind.REAL, Interval1D(-inf, inf))
"""All finite reals."""

NonNegativeReal = Domain("NonNegativeReal", Kind.REAL, Interval1D(0.0, inf), parent=Real)
"""Reals in ``[0, inf)``."""

PositiveReal = Domain(
    "PositiveReal", Kind.REAL, Interval1D(0.0, inf, left_closed=False), parent=NonNegativeReal
)
"""Reals in ``(0, inf)``."""

UnitInterval = Domain("UnitInterval", Kind.REAL, Interval1D(0.0, 1.0), parent=NonNegativeReal)
"""Reals in ``[0, 1]``."""

Int = Domain("Int", Kind.INT, Interval1D(-inf, inf))
"""All integers."""

NonNegativeInt = Domain("NonNegativeInt", Kind.INT, Interval1D(0, inf), parent=Int)
"""Integers ``0, 1, 2, ...``."""

PositiveInt = Domain("PositiveInt", Kind.INT, Interval1D(1, inf), parent=NonNegativeInt)
"""Integers ``1, 2, 3, ...``."""

Bool = Domain("Bool", Kind.BOOL)
"""``True`` and ``False``."""


class DomainRegister:
    """
    Singleton lookup of domains by name.

    Built-in domains are registered on first use.
    """

    _instance: ClassVar[DomainRegister | None] = None
    _domains: dict[str, Domain]

    def __new__(cls) -> DomainRegister:
        """Create or return the singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._domains = {
                d.name: d
                for d in (
                    Real,
                    NonNegativeReal,
                    PositiveReal,
                    UnitInterval,
                    Int,
                    NonNegativeInt,
                    PositiveInt,
                    Bool,
                )
            }
        return cls._instance

    @classmethod
    def get(cls, name: str) -> Domain:
        """
        Retrieve a domain by name.

        Raises
        ------
        ConfigurationError
            If no domain with the given name exists.
        """
        self = cls()
        if name not in self._domains:
            raise ConfigurationError(f"No domain {name} found in register")
        return self._domains[name]

    @classmethod
    def register(cls, domain: Domain) -> None:
        """
        Register a new domain.

        Raises
        ------
        ConfigurationError
            If a domain with the same name is already registered.
        """
        self = cls()
        if domain.name in self._domains:
            raise ConfigurationError(f"Domain {domain.name} already found in register")
        self._domains[domain.name] = domain

    @classmethod
    def names(cls) -> list[str]:
        return list(cls()._domains)


def _reset_domain_register_for_tests() -> None:
    """Drop user-registered domains (test helper)."""
    DomainRegister._instance = None


DEFAULT_DOMAINS: dict[Kind, Domain] = {Kind.REAL: Real, Kind.INT: Int, Kind.BOOL: Bool}


__all__ = [
    "Domain",
    "DomainRegister",
    "is_compatible",
    "Real",
    "NonNegativeReal",
    "PositiveReal",
    "UnitInterval",
    "Int",
    "NonNegativeInt",
    "PositiveInt",
    "Bool",
    "DEFAULT_DOMAINS",
]
