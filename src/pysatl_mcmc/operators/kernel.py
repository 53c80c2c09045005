"""
Proposal kernels
================

Parameterless proposal-shape generators used by operators to draw additive
perturbations and multiplicative scale factors.

- :class:`BactrianKernel` draws from a symmetric two-lobe mixture that moves
  further on average than a Gaussian at the same acceptance rate.
- :class:`GaussianKernel` draws plain standard normal steps.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from pysatl_mcmc.exceptions import ConfigurationError

if TYPE_CHECKING:
    import numpy as np


@runtime_checkable
class KernelDistribution(Protocol):
    """Source of proposal steps."""

    def get_random_delta(self, index: int, value: float, window: float) -> float:
        """Additive step for element ``index`` currently at ``value``."""
        ...

    def get_scaler(self, index: int, value: float, scale_factor: float) -> float:
        """Positive multiplicative factor for element ``index`` currently at ``value``."""
        ...


class BactrianKernel:
    """
    Symmetric Bactrian (two-hump) kernel.

    A unit draw is ``m + z * sqrt(1 - m**2)`` with ``z ~ N(0, 1)``, negated
    with probability one half. Its variance is 1 for every ``m``.

    Parameters
    ----------
    rng : numpy.random.Generator
        Shared random stream.
    m : float, default 0.95
        Hump offset, in ``[0, 1)``.

    Raises
    ------
    ConfigurationError
        If ``m`` is outside ``[0, 1)``.
    """

    def __init__(self, rng: np.random.Generator, m: float = 0.95) -> None:
        if not 0.0 <= m < 1.0:
            raise ConfigurationError(f"Bactrian m must be in [0, 1), got {m}")
        self.rng = rng
        self.m = m
        self._spread = math.sqrt(1.0 - m * m)

    def _unit(self) -> float:
        r = self.m + float(self.rng.standard_normal()) * self._spread
        if self.rng.random() < 0.5:
            r = -r
        return r

    def get_random_delta(self, index: int, value: float, window: float) -> float:
        return self._unit() * window

    def get_scaler(self, index: int, value: float, scale_factor: float) -> float:
        return math.exp(self._unit() * scale_factor)


class GaussianKernel:
    """Standard normal kernel."""

    def __init__(self, rng: np.random.Generator) -> None:
        self.rng = rng

    def get_random_delta(self, index: int, value: float, window: float) -> float:
        return float(self.rng.standard_normal()) * window

    def get_scaler(self, index: int, value: float, scale_factor: float) -> float:
        return math.exp(float(self.rng.standard_normal()) * scale_factor)


__all__ = ["KernelDistribution", "BactrianKernel", "GaussianKernel"]
