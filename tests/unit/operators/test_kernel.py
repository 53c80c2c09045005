from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np
import pytest

from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.operators import BactrianKernel, GaussianKernel, KernelDistribution


class TestBactrianKernel:
    @pytest.mark.parametrize("m", [-0.1, 1.0, 1.5])
    def test_m_range(self, rng: np.random.Generator, m: float) -> None:
        with pytest.raises(ConfigurationError):
            BactrianKernel(rng, m=m)

    def test_unit_variance(self, rng: np.random.Generator) -> None:
        kernel = BactrianKernel(rng)
        deltas = np.array([kernel.get_random_delta(0, 0.0, 1.0) for _ in range(20000)])
        assert abs(deltas.mean()) < 0.03
        assert deltas.var() == pytest.approx(1.0, abs=0.05)

    def test_two_humps(self, rng: np.random.Generator) -> None:
        kernel = BactrianKernel(rng)
        deltas = np.array([kernel.get_random_delta(0, 0.0, 1.0) for _ in range(5000)])
        assert np.mean(np.abs(deltas) < 0.1) < 0.01
        assert 0.45 < np.mean(deltas > 0) < 0.55

    def test_window_scales_delta(self) -> None:
        a = BactrianKernel(np.random.default_rng(1))
        b = BactrianKernel(np.random.default_rng(1))
        assert a.get_random_delta(0, 0.0, 3.0) == pytest.approx(3.0 * b.get_random_delta(0, 0.0, 1.0))

    def test_scaler_is_positive(self, rng: np.random.Generator) -> None:
        kernel = BactrianKernel(rng)
        assert all(kernel.get_scaler(0, 1.0, 0.75) > 0 for _ in range(1000))

    def test_protocol(self, rng: np.random.Generator) -> None:
        assert isinstance(BactrianKernel(rng), KernelDistribution)
        assert isinstance(GaussianKernel(rng), KernelDistribution)


class TestGaussianKernel:
    def test_unit_variance(self, rng: np.random.Generator) -> None:
        kernel = GaussianKernel(rng)
        deltas = np.array([kernel.get_random_delta(0, 0.0, 2.0) for _ in range(20000)])
        assert deltas.var() == pytest.approx(4.0, rel=0.05)
