"""
Exponential distribution parametrized by its mean.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, cast

from scipy import stats

from pysatl_mcmc.config import Configuration, ConfigurationFamily, configuration, constraint
from pysatl_mcmc.distributions.base import ScalarDistribution
from pysatl_mcmc.state.domains import NonNegativeReal

if TYPE_CHECKING:
    import numpy as np

    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor

EXPONENTIAL = ConfigurationFamily("Exponential")


@configuration(name="mean", family=EXPONENTIAL)
class ExponentialMean(Configuration):
    mean: float

    @constraint(description="mean > 0")
    def check_mean_positive(self) -> bool:
        return self.mean > 0


class Exponential(ScalarDistribution):
    """
    Exponential distribution.

    Parameters
    ----------
    param : Tensor or None, default None
        Non-negative real tensor.
    mean : Hyperparameter, default 1.0
        Mean, the reciprocal of the rate.
    rng : numpy.random.Generator or None, default None
        Random stream.
    """

    family = EXPONENTIAL
    support_domain = NonNegativeReal

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        mean: Hyperparameter = 1.0,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(param, form="mean", inputs={"mean": mean}, rng=rng)

    def _build(self, config: Configuration) -> Any:
        return stats.expon(scale=cast(ExponentialMean, config).mean)

    def _mean(self) -> float:
        return cast(ExponentialMean, self._config).mean
