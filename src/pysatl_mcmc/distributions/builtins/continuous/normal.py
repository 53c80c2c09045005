"""
Normal distribution.

Accepts either a standard deviation or a precision:

- ``meanStd`` (base): ``mean``, ``sigma``;
- ``meanPrec``: ``mean``, ``tau = 1 / sigma**2``.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, Any, cast

from scipy import stats

from pysatl_mcmc.config import Configuration, ConfigurationFamily, configuration, constraint
from pysatl_mcmc.distributions.base import ScalarDistribution
from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.state.domains import Real

if TYPE_CHECKING:
    import numpy as np

    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor

NORMAL = ConfigurationFamily("Normal", base="meanStd")


@configuration(name="meanStd", family=NORMAL)
class NormalMeanStd(Configuration):
    """
    Standard parametrization of normal distribution.

    Parameters
    ----------
    mean : float
        Mean of the distribution
    sigma : float
        Standard deviation of the distribution
    """

    mean: float
    sigma: float

    @constraint(description="sigma > 0")
    def check_sigma_positive(self) -> bool:
        """Check that standard deviation is positive."""
        return self.sigma > 0


@configuration(name="meanPrec", family=NORMAL)
class NormalMeanPrec(Configuration):
    """
    Mean-precision parametrization of normal distribution.

    Parameters
    ----------
    mean : float
        Mean of the distribution
    tau : float
        Precision parameter (inverse variance)
    """

    mean: float
    tau: float

    @constraint(description="tau > 0")
    def check_tau_positive(self) -> bool:
        """Check that precision parameter is positive."""
        return self.tau > 0

    def transform_to_base(self) -> Configuration:
        return NormalMeanStd(mean=self.mean, sigma=math.sqrt(1 / self.tau))


class Normal(ScalarDistribution):
    """
    Normal (Gaussian) distribution.

    Probability density function:
        f(x) = 1/(σ√(2π)) * exp(-(x-μ)²/(2σ²))

    Parameters
    ----------
    param : Tensor or None, default None
        Real tensor the density is evaluated at.
    mean : Hyperparameter, default 0.0
        Mean.
    sigma : Hyperparameter or None, default None
        Standard deviation. ``1.0`` when neither ``sigma`` nor ``tau`` is given.
    tau : Hyperparameter or None, default None
        Precision. Mutually exclusive with ``sigma``.
    rng : numpy.random.Generator or None, default None
        Random stream.

    Raises
    ------
    ConfigurationError
        If both ``sigma`` and ``tau`` are given.
    """

    family = NORMAL
    support_domain = Real

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        mean: Hyperparameter = 0.0,
        sigma: Hyperparameter | None = None,
        tau: Hyperparameter | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        if sigma is not None and tau is not None:
            raise ConfigurationError("Normal takes either sigma or tau, not both")
        if tau is not None:
            super().__init__(param, form="meanPrec", inputs={"mean": mean, "tau": tau}, rng=rng)
        else:
            sigma = 1.0 if sigma is None else sigma
            super().__init__(
                param, form="meanStd", inputs={"mean": mean, "sigma": sigma}, rng=rng
            )

    def _build(self, config: Configuration) -> Any:
        config = cast(NormalMeanStd, config)
        return stats.norm(loc=config.mean, scale=config.sigma)

    def _mean(self) -> float:
        return cast(NormalMeanStd, self._config).mean
