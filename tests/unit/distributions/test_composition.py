from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest
from scipy import integrate, stats

from pysatl_mcmc.distributions import (
    IID,
    Gamma,
    Normal,
    Offset,
    Poisson,
    TruncatedInt,
    TruncatedReal,
    truncate,
)
from pysatl_mcmc.exceptions import ConfigurationError, SamplingRetryError
from pysatl_mcmc.state import IntScalar, IntVector, PositiveReal, RealScalar, RealVector


class TestOffset:
    def test_log_density_is_shifted(self) -> None:
        base = Gamma(alpha=2.0, beta=1.5)
        shifted = Offset(base, 3.0)
        for x in (3.5, 4.0, 7.25):
            assert shifted.calc_log_p(x) == pytest.approx(base.calc_log_p(x - 3.0))
        assert shifted.calc_log_p(2.9) == -math.inf

    def test_characteristics_are_shifted(self) -> None:
        shifted = Offset(Normal(mean=1.0, sigma=2.0), -4.0)
        assert shifted.mean() == pytest.approx(-3.0)
        assert shifted.inverse_cumulative_probability(0.5) == pytest.approx(-3.0)
        assert shifted.cumulative_probability(-3.0) == pytest.approx(0.5)
        assert Offset(Gamma(), 2.0).lower == 2.0

    def test_samples_are_shifted(self) -> None:
        a = Offset(Normal(rng=np.random.default_rng(3)), 10.0)
        b = Normal(rng=np.random.default_rng(3))
        for _ in range(10):
            (x,) = a.sample()
            (y,) = b.sample()
            assert x - 10.0 == pytest.approx(y)

    def test_offset_tensor_is_read_on_refresh(self) -> None:
        offset = RealScalar(1.0)
        shifted = Offset(Normal(), offset)
        assert shifted.calc_log_p(1.0) == pytest.approx(Normal().calc_log_p(0.0))
        offset.set_value(2.0)
        assert shifted.calc_log_p(2.0) == pytest.approx(Normal().calc_log_p(0.0))

    def test_integer_offset(self) -> None:
        shifted = Offset(Poisson(lambda_=2.0), 3, IntScalar(5))
        assert shifted.calculate_log_p() == pytest.approx(Poisson(lambda_=2.0).calc_log_p(2))
        (value,) = shifted.sample()
        assert isinstance(value, int)
        assert value >= 3

    def test_integer_offset_must_be_integral(self) -> None:
        with pytest.raises(ConfigurationError, match="Integer offset"):
            Offset(Poisson(), 0.5).calc_log_p(1)


class TestTruncatedReal:
    def test_zero_density_outside(self) -> None:
        dist = TruncatedReal(Normal(), 0.0, 2.0)
        assert dist.density(-0.5) == 0.0
        assert dist.density(2.5) == 0.0
        assert dist.calc_log_p(-0.5) == -math.inf

    def test_density_integrates_to_one(self) -> None:
        dist = TruncatedReal(Normal(), 0.0, 2.0)
        total, _ = integrate.quad(dist.density, 0.0, 2.0)
        assert total == pytest.approx(1.0, rel=0.01)

    def test_samples_stay_inside(self, rng: np.random.Generator) -> None:
        dist = TruncatedReal(Normal(rng=rng), 0.0, 2.0)
        samples = [dist.sample()[0] for _ in range(1000)]
        assert all(0.0 <= s <= 2.0 for s in samples)

    def test_matches_scipy_truncnorm(self) -> None:
        dist = TruncatedReal(Normal(), -1.0, 2.0)
        reference = stats.truncnorm(-1.0, 2.0)
        assert dist.calc_log_p(0.7) == pytest.approx(reference.logpdf(0.7))
        assert dist.cumulative_probability(0.7) == pytest.approx(reference.cdf(0.7))
        assert dist.inverse_cumulative_probability(0.3) == pytest.approx(reference.ppf(0.3))
        assert dist.mean() == pytest.approx(reference.mean(), rel=1e-4)

    def test_prob_out_of_bounds(self) -> None:
        dist = TruncatedReal(Normal(), 0.0)
        assert dist.prob_out_of_bounds == pytest.approx(0.5)
        assert dist.lower == 0.0
        assert dist.upper == math.inf

    def test_bounds_clip_to_inner_support(self) -> None:
        dist = TruncatedReal(Gamma(), -5.0, 1.0)
        assert dist.lower == 0.0

    def test_tensor_bounds(self) -> None:
        upper = RealScalar(2.0)
        dist = TruncatedReal(Normal(), 0.0, upper)
        assert dist.calc_log_p(1.5) > -math.inf
        upper.set_value(1.0)
        assert dist.calc_log_p(1.5) == -math.inf

    def test_inverted_bounds(self) -> None:
        with pytest.raises(ConfigurationError, match="exceeds"):
            TruncatedReal(Normal(), 2.0, 1.0).calc_log_p(1.5)

    def test_zero_mass_interval(self) -> None:
        with pytest.raises(ConfigurationError, match="zero probability"):
            TruncatedReal(Gamma(), -3.0, -1.0).calc_log_p(-2.0)

    def test_rejects_integer_inner(self) -> None:
        with pytest.raises(ConfigurationError):
            TruncatedReal(Poisson(), 0, 3)


class TestTruncatedInt:
    def test_inclusive_bounds(self) -> None:
        inner = Poisson(lambda_=3.0)
        dist = TruncatedInt(inner, 1, 4)
        mass = stats.poisson(3.0).cdf(4) - stats.poisson(3.0).cdf(0)
        for k in range(1, 5):
            assert dist.calc_log_p(k) == pytest.approx(inner.calc_log_p(k) - math.log(mass))
        assert dist.calc_log_p(0) == -math.inf
        assert dist.calc_log_p(5) == -math.inf

    def test_probabilities_sum_to_one(self) -> None:
        dist = TruncatedInt(Poisson(lambda_=6.0), 2, 9)
        assert sum(dist.density(k) for k in range(2, 10)) == pytest.approx(1.0)

    def test_mean(self) -> None:
        dist = TruncatedInt(Poisson(lambda_=3.0), 1, 4)
        expected = sum(k * dist.density(k) for k in range(1, 5))
        assert dist.mean() == pytest.approx(expected)

    def test_unbounded_above_mean(self) -> None:
        assert TruncatedInt(Poisson(lambda_=4.0), 0).mean() == pytest.approx(4.0, rel=1e-6)

    def test_fractional_bounds_round_inwards(self) -> None:
        dist = TruncatedInt(Poisson(lambda_=3.0), 0.5, 3.5)
        assert dist.lower == 1.0
        assert dist.upper == 3.0

    def test_samples_stay_inside(self, rng: np.random.Generator) -> None:
        dist = TruncatedInt(Poisson(lambda_=3.0, rng=rng), 2, 5)
        samples = [dist.sample()[0] for _ in range(500)]
        assert set(samples) <= {2, 3, 4, 5}
        assert all(isinstance(s, int) for s in samples)

    def test_cdf(self) -> None:
        dist = TruncatedInt(Poisson(lambda_=3.0), 1, 4)
        assert dist.cumulative_probability(0) == 0.0
        assert dist.cumulative_probability(4) == 1.0
        assert dist.cumulative_probability(2.5) == pytest.approx(
            dist.density(1) + dist.density(2)
        )


class TestTruncateFactory:
    def test_dispatches_on_kind(self) -> None:
        assert isinstance(truncate(Normal(), 0.0, 1.0), TruncatedReal)
        assert isinstance(truncate(Poisson(), 0, 3), TruncatedInt)


class TestIID:
    def test_log_p_is_sum(self) -> None:
        x = RealVector([0.1, -0.4, 2.0, 1.3])
        base = Normal(mean=0.5, sigma=1.5)
        iid = IID(base, x)
        expected = sum(base.calc_log_p(v) for v in x)
        assert iid.calculate_log_p() == pytest.approx(expected)
        assert iid.log_p == pytest.approx(expected)

    def test_calc_log_p_checks_dimension(self) -> None:
        iid = IID(Normal(), dimension=3)
        assert iid.calc_log_p([0.0, 0.0, 0.0]) == pytest.approx(3 * Normal().calc_log_p(0.0))
        with pytest.raises(ConfigurationError):
            iid.calc_log_p([0.0, 0.0])

    def test_dimension_mismatch(self) -> None:
        with pytest.raises(ConfigurationError, match="does not match"):
            IID(Normal(), RealVector([1.0, 2.0]), dimension=3)

    def test_needs_dimension(self) -> None:
        with pytest.raises(ConfigurationError):
            IID(Normal())

    def test_sample_respects_param_domain(self, rng: np.random.Generator) -> None:
        x = RealVector([1.0, 1.0, 1.0], domain=PositiveReal)
        iid = IID(Normal(mean=0.5, rng=rng), x)
        values = iid.sample()
        assert len(values) == 3
        assert all(v > 0 for v in values)

    def test_sample_gives_up(self, rng: np.random.Generator) -> None:
        x = RealVector([1.0, 1.0], domain=PositiveReal)
        iid = IID(Normal(mean=-50.0, rng=rng), x, max_retries=20)
        with pytest.raises(SamplingRetryError) as info:
            iid.sample()
        assert info.value.index == 0
        assert info.value.retries == 20

    def test_integer_base(self) -> None:
        k = IntVector([0, 1, 2, 3])
        iid = IID(Poisson(lambda_=5.0), k)
        assert iid.calculate_log_p() == pytest.approx(-12.828, abs=1e-3)

    def test_base_is_refreshed_once_per_evaluation(self, monkeypatch: pytest.MonkeyPatch) -> None:
        base = Normal(mean=0.5, sigma=1.5)
        iid = IID(base, RealVector([0.1, -0.4, 2.0, 1.3]))
        calls: list[None] = []
        original = base.refresh

        def counting_refresh() -> None:
            calls.append(None)
            original()

        monkeypatch.setattr(base, "refresh", counting_refresh)
        iid.calculate_log_p()
        assert len(calls) == 1
        iid.calc_log_p([0.0, 0.0, 0.0, 0.0])
        assert len(calls) == 2
