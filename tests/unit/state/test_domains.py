from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from math import inf, nan

import numpy as np
import pytest

from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.state.domains import (
    Bool,
    Domain,
    DomainRegister,
    Int,
    NonNegativeInt,
    NonNegativeReal,
    PositiveInt,
    PositiveReal,
    Real,
    UnitInterval,
    is_compatible,
)
from pysatl_mcmc.types import Interval1D, Kind


class TestDomainMembership:
    @pytest.mark.parametrize(
        "domain, value, expected",
        [
            (Real, -3.5, True),
            (Real, inf, False),
            (Real, nan, False),
            (NonNegativeReal, 0.0, True),
            (NonNegativeReal, -1e-300, False),
            (PositiveReal, 0.0, False),
            (PositiveReal, 1e-300, True),
            (UnitInterval, 1.0, True),
            (UnitInterval, 1.0000001, False),
            (Int, 3, True),
            (Int, 3.0, True),
            (Int, 3.5, False),
            (NonNegativeInt, 0, True),
            (NonNegativeInt, -1, False),
            (PositiveInt, 0, False),
            (PositiveInt, 1, True),
            (Bool, True, True),
            (Bool, np.bool_(False), True),
            (Bool, 1, False),
            (Real, True, False),
        ],
    )
    def test_is_valid(self, domain: Domain, value: object, expected: bool) -> None:
        assert domain.is_valid(value) is expected  # type: ignore[arg-type]

    def test_is_valid_all(self) -> None:
        assert PositiveReal.is_valid_all([0.5, 1.0, 2.0])
        assert not PositiveReal.is_valid_all(np.array([0.5, 0.0]))

    def test_bounds_properties(self) -> None:
        assert PositiveReal.lower == 0.0
        assert PositiveReal.upper == inf
        assert not PositiveReal.lower_inclusive
        assert UnitInterval.upper_inclusive


class TestDomainLattice:
    @pytest.mark.parametrize(
        "child, parent",
        [
            (PositiveReal, NonNegativeReal),
            (PositiveReal, Real),
            (UnitInterval, NonNegativeReal),
            (PositiveInt, Int),
            (Real, Real),
        ],
    )
    def test_subdomain(self, child: Domain, parent: Domain) -> None:
        assert child.is_subdomain_of(parent)
        assert is_compatible(child, parent)
        assert is_compatible(parent, child)

    @pytest.mark.parametrize(
        "a, b",
        [(PositiveReal, UnitInterval), (Real, Int), (Bool, Int), (NonNegativeInt, Real)],
    )
    def test_incompatible(self, a: Domain, b: Domain) -> None:
        assert not is_compatible(a, b)

    def test_refinement_is_not_symmetric(self) -> None:
        assert not Real.is_subdomain_of(PositiveReal)


class TestDomainRegister:
    def test_builtins_are_registered(self) -> None:
        assert DomainRegister.get("UnitInterval") is UnitInterval
        assert set(DomainRegister.names()) >= {"Real", "Int", "Bool"}

    def test_register_custom_domain(self) -> None:
        probability = Domain("Probability", Kind.REAL, Interval1D(0.0, 1.0), parent=UnitInterval)
        DomainRegister.register(probability)
        assert DomainRegister.get("Probability") is probability
        assert probability.is_subdomain_of(NonNegativeReal)

    def test_register_is_reset_between_tests(self) -> None:
        with pytest.raises(ConfigurationError, match="No domain"):
            DomainRegister.get("Probability")

    def test_duplicate_name(self) -> None:
        with pytest.raises(ConfigurationError, match="already"):
            DomainRegister.register(Domain("Real", Kind.REAL))
