from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings

import numpy as np
import pytest
from scipy import stats

from pysatl_mcmc.distributions import MarkovChainDistribution
from pysatl_mcmc.exceptions import ConfigurationError, NotImplementedCharacteristic
from pysatl_mcmc.state import NonNegativeReal, PositiveReal, RealVector


class TestMarkovChainDistribution:
    def test_gamma_chain(self) -> None:
        x = RealVector([1.0, 2.0, 1.5], domain=PositiveReal)
        dist = MarkovChainDistribution(x, shape=2.0)
        expected = stats.gamma.logpdf(2.0, a=2.0, scale=0.5) + stats.gamma.logpdf(
            1.5, a=2.0, scale=1.0
        )
        assert dist.calculate_log_p() == pytest.approx(expected)

    def test_jeffreys_prior(self) -> None:
        x = RealVector([2.0, 3.0], domain=PositiveReal)
        plain = MarkovChainDistribution(x).calculate_log_p()
        jeffreys = MarkovChainDistribution(x, jeffreys=True).calculate_log_p()
        assert jeffreys == pytest.approx(plain - math.log(2.0))

    def test_initial_mean(self) -> None:
        x = RealVector([2.0, 3.0], domain=PositiveReal)
        dist = MarkovChainDistribution(x, initial_mean=4.0)
        expected = stats.expon.logpdf(2.0, scale=4.0) + stats.expon.logpdf(3.0, scale=2.0)
        assert dist.calculate_log_p() == pytest.approx(expected)

    def test_reverse(self) -> None:
        values = [1.0, 2.0, 4.0]
        forward = MarkovChainDistribution(RealVector(values[::-1]), reverse=True)
        backward = MarkovChainDistribution(RealVector(values))
        assert forward.calculate_log_p() == pytest.approx(backward.calculate_log_p())

    def test_log_normal_link(self) -> None:
        x = RealVector([1.0, 2.0], domain=PositiveReal)
        dist = MarkovChainDistribution(x, shape=4.0, use_log_normal=True)
        sigma = 0.25
        expected = stats.lognorm.logpdf(2.0, s=sigma, scale=math.exp(-0.5 * sigma * sigma))
        assert dist.calculate_log_p() == pytest.approx(expected)

    def test_jeffreys_and_initial_mean_are_exclusive(self) -> None:
        with pytest.raises(ConfigurationError, match="mutually exclusive"):
            MarkovChainDistribution(RealVector([1.0]), jeffreys=True, initial_mean=1.0)

    def test_shape_must_be_positive(self) -> None:
        with pytest.raises(ConfigurationError, match="shape > 0"):
            MarkovChainDistribution(RealVector([1.0]), shape=0.0)

    def test_warns_once_on_positive_infinity(self) -> None:
        x = RealVector([1.0, 0.0], domain=NonNegativeReal)
        dist = MarkovChainDistribution(x, shape=0.5)
        with pytest.warns(RuntimeWarning, match="Positive infinity"):
            assert dist.calculate_log_p() == math.inf
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert dist.calculate_log_p() == math.inf

    def test_sample(self, rng: np.random.Generator) -> None:
        x = RealVector([1.0] * 5, domain=PositiveReal)
        values = MarkovChainDistribution(x, initial_mean=2.0, rng=rng).sample()
        assert len(values) == 5
        assert all(v > 0 for v in values)

    def test_sample_needs_initial_mean(self) -> None:
        with pytest.raises(NotImplementedCharacteristic):
            MarkovChainDistribution(RealVector([1.0, 2.0])).sample()



class TestMarkovChainDegenerateValues:
    def test_jeffreys_head_at_zero_is_positive_infinity(self) -> None:
        x = RealVector([0.0], domain=NonNegativeReal)
        dist = MarkovChainDistribution(x, jeffreys=True)
        with pytest.warns(RuntimeWarning, match="Positive infinity"):
            assert dist.calculate_log_p() == math.inf

    def test_jeffreys_head_at_zero_with_zero_density_link(self) -> None:
        x = RealVector([0.0, 1.0], domain=NonNegativeReal)
        dist = MarkovChainDistribution(x, jeffreys=True)
        assert dist.calculate_log_p() == -math.inf

    def test_zero_previous_value(self) -> None:
        x = RealVector([0.0, 1.0], domain=NonNegativeReal)
        assert MarkovChainDistribution(x).calculate_log_p() == -math.inf

    @pytest.mark.parametrize("use_log_normal", [False, True], ids=["gamma", "log-normal"])
    def test_log_chain_below_one(self, use_log_normal: bool) -> None:
        x = RealVector([0.5, 2.0], domain=PositiveReal)
        dist = MarkovChainDistribution(x, use_log=True, use_log_normal=use_log_normal)
        assert dist.calculate_log_p() == -math.inf

    def test_log_chain_matches_gamma_on_logs(self) -> None:
        x = RealVector([math.e, math.e**2], domain=PositiveReal)
        dist = MarkovChainDistribution(x, shape=2.0, use_log=True)
        expected = stats.gamma.logpdf(2.0, a=2.0, scale=0.5)
        assert dist.calculate_log_p() == pytest.approx(expected)

    def test_infinite_and_zero_links_do_not_give_nan(self) -> None:
        x = RealVector([1.0, 0.0, 1.0], domain=NonNegativeReal)
        dist = MarkovChainDistribution(x, shape=0.5)
        assert dist.calculate_log_p() == -math.inf
