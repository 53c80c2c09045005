from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from pysatl_mcmc.distributions import Gamma
from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.operators import ScaleOperator
from pysatl_mcmc.state import (
    BoolVector,
    PositiveReal,
    RealScalar,
    RealVector,
    State,
    UnitInterval,
)


class _FixedScaler:
    """Kernel returning one known scale factor."""

    def __init__(self, scale: float) -> None:
        self.scale = scale

    def get_random_delta(self, index: int, value: float, window: float) -> float:
        return math.log(self.scale)

    def get_scaler(self, index: int, value: float, scale_factor: float) -> float:
        return self.scale


class TestScaleOne:
    def test_zero_element_is_never_scaled(self, rng: np.random.Generator) -> None:
        x = RealScalar(0.0)
        op = ScaleOperator(x, rng=rng)
        for _ in range(50):
            assert op.proposal() == -math.inf
        assert x.value == 0.0

    def test_hastings_ratio(self, rng: np.random.Generator) -> None:
        x = RealScalar(2.0)
        op = ScaleOperator(x, kernel=_FixedScaler(1.5), rng=rng)
        assert op.proposal() == pytest.approx(math.log(1.5))
        assert x.value == pytest.approx(3.0)

    def test_out_of_domain(self, rng: np.random.Generator) -> None:
        x = RealScalar(0.8, domain=UnitInterval)
        op = ScaleOperator(x, kernel=_FixedScaler(2.0), rng=rng)
        assert op.proposal() == -math.inf
        assert x.value == 0.8

    def test_indicator_selects_elements(self, rng: np.random.Generator) -> None:
        x = RealVector([1.0, 1.0, 1.0])
        flags = BoolVector([False, True, False])
        op = ScaleOperator(x, indicator=flags, kernel=_FixedScaler(2.0), rng=rng)
        for _ in range(3):
            op.proposal()
        assert list(x) == [1.0, 8.0, 1.0]

    def test_short_indicator_keeps_first_element_on(self, rng: np.random.Generator) -> None:
        x = RealVector([1.0, 1.0, 1.0])
        flags = BoolVector([False, False])
        op = ScaleOperator(x, indicator=flags, kernel=_FixedScaler(2.0), rng=rng)
        op.proposal()
        assert list(x) == [2.0, 1.0, 1.0]

    def test_indicator_dimension(self) -> None:
        with pytest.raises(ConfigurationError, match="not compatible"):
            ScaleOperator(RealVector([1.0, 2.0, 3.0]), indicator=BoolVector([True]))

    def test_needs_real_tensor(self) -> None:
        with pytest.raises(ConfigurationError):
            ScaleOperator(BoolVector([True]))  # type: ignore[arg-type]


class TestScaleAll:
    def test_joint_scale(self, rng: np.random.Generator) -> None:
        x = RealVector([0.0, 1.0, 2.0, 4.0])
        op = ScaleOperator(x, scale_all=True, kernel=_FixedScaler(0.5), rng=rng)
        assert op.proposal() == pytest.approx(3 * math.log(0.5))
        assert list(x) == [0.0, 0.5, 1.0, 2.0]

    def test_degrees_of_freedom_override(self, rng: np.random.Generator) -> None:
        x = RealVector([1.0, 2.0, 4.0])
        op = ScaleOperator(
            x, scale_all=True, degrees_of_freedom=1, kernel=_FixedScaler(2.0), rng=rng
        )
        assert op.proposal() == pytest.approx(math.log(2.0))

    def test_joint_scale_out_of_bounds(self, rng: np.random.Generator) -> None:
        x = RealVector([0.2, 0.6], domain=UnitInterval)
        op = ScaleOperator(x, scale_all=True, kernel=_FixedScaler(2.0), rng=rng)
        assert op.proposal() == -math.inf
        assert list(x) == [0.2, 0.6]

    def test_independent_scale(self, rng: np.random.Generator) -> None:
        x = RealVector([1.0, 2.0, 3.0])
        op = ScaleOperator(x, scale_all_independently=True, kernel=_FixedScaler(3.0), rng=rng)
        assert op.proposal() == pytest.approx(3 * math.log(3.0))
        assert list(x) == pytest.approx([3.0, 6.0, 9.0])


class TestScaleTuning:
    def test_scale_factor_is_clamped(self) -> None:
        op = ScaleOperator(RealScalar(1.0), scale_upper_limit=2.0)
        op.coercable_parameter = 100.0
        assert op.coercable_parameter == 2.0
        op.coercable_parameter = 0.0
        assert op.coercable_parameter == 1e-8

    def test_adaptive_tuning_reaches_target(self, rng: np.random.Generator) -> None:
        x = RealScalar(1.0, domain=PositiveReal)
        target = Gamma(x, alpha=2.0, beta=1.0)
        state = State([x])
        op = ScaleOperator(x, rng=rng)

        state.store()
        log_p = target.calculate_log_p()
        for _ in range(20000):
            log_hr = op.proposal()
            if log_hr == -math.inf:
                log_alpha = -math.inf
            else:
                proposed = target.calculate_log_p()
                log_alpha = proposed - log_p + log_hr
            if math.log(rng.random()) < log_alpha:
                op.accept()
                state.store()
                log_p = proposed
            else:
                op.reject()
                state.restore()
            op.optimize(log_alpha)

        assert op.acceptance_probability == pytest.approx(op.target_acceptance, abs=0.05)
        assert op.performance_suggestion() == ""
