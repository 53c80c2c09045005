from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from pysatl_mcmc.distributions import Exponential
from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.operators import SampleOffValuesOperator
from pysatl_mcmc.state import BoolVector, RealVector


class TestSampleOffValues:
    def test_redraws_one_off_value(self, rng: np.random.Generator) -> None:
        values = RealVector([1.0, 2.0, 3.0])
        flags = BoolVector([True, False, True])
        prior = Exponential(mean=2.0)
        op = SampleOffValuesOperator(values, flags, prior, rng=rng)
        log_hr = op.proposal()
        assert log_hr == pytest.approx(prior.calc_log_p(2.0))
        assert values.get(0) == 1.0
        assert values.get(2) == 3.0
        assert values.get(1) != 2.0

    def test_redraws_all_off_values(self, rng: np.random.Generator) -> None:
        values = RealVector([1.0, 2.0, 3.0])
        flags = BoolVector([False, True, False])
        prior = Exponential(mean=2.0)
        op = SampleOffValuesOperator(values, flags, prior, rng=rng, all=True)
        log_hr = op.proposal()
        assert log_hr == pytest.approx(prior.calc_log_p(1.0) + prior.calc_log_p(3.0))
        assert values.get(1) == 2.0
        assert values.get(0) > 0.0 and values.get(2) > 0.0

    def test_short_indicator_is_offset(self, rng: np.random.Generator) -> None:
        values = RealVector([1.0, 2.0, 3.0])
        flags = BoolVector([True, False])
        op = SampleOffValuesOperator(values, flags, Exponential(), rng=rng)
        assert op.off_positions() == [2]
        op.proposal()
        assert values.get(2) != 3.0

    def test_nothing_off(self, rng: np.random.Generator) -> None:
        values = RealVector([1.0, 2.0])
        op = SampleOffValuesOperator(values, BoolVector([True, True]), Exponential(), rng=rng)
        assert op.proposal() == -math.inf
        assert list(values) == [1.0, 2.0]

    def test_indicator_dimension(self) -> None:
        with pytest.raises(ConfigurationError, match="one less"):
            SampleOffValuesOperator(
                RealVector([1.0, 2.0, 3.0]), BoolVector([True]), Exponential()
            )

    def test_not_tuned(self) -> None:
        op = SampleOffValuesOperator(RealVector([1.0]), BoolVector([True]), Exponential())
        assert not op.config.optimise
        assert op.coercable_parameter is None
