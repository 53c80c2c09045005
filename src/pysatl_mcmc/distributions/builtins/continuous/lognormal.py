"""
Log-normal distribution.

``M`` and ``S`` are the mean and standard deviation of ``log(x)``. With
``mean_in_real_space=True``, ``M`` is the mean of ``x`` itself and is converted
with ``log(M) - S**2 / 2``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, Any, cast

from scipy import stats

from pysatl_mcmc.config import Configuration, ConfigurationFamily, configuration, constraint
from pysatl_mcmc.distributions.base import ScalarDistribution
from pysatl_mcmc.state.domains import NonNegativeReal

if TYPE_CHECKING:
    import numpy as np

    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor

LOG_NORMAL = ConfigurationFamily("LogNormal", base="logSpace")


@configuration(name="logSpace", family=LOG_NORMAL)
class LogNormalLogSpace(Configuration):
    M: float
    S: float

    @constraint(description="S > 0")
    def check_s_positive(self) -> bool:
        return self.S > 0


@configuration(name="realSpace", family=LOG_NORMAL)
class LogNormalRealSpace(Configuration):
    """
    Real-space mean parametrization.

    Parameters
    ----------
    M : float
        Mean of the distribution in real space.
    S : float
        Standard deviation in log space.
    """

    M: float
    S: float

    @constraint(description="S > 0")
    def check_s_positive(self) -> bool:
        return self.S > 0

    @constraint(description="M > 0")
    def check_mean_positive(self) -> bool:
        return self.M > 0

    def transform_to_base(self) -> Configuration:
        return LogNormalLogSpace(M=math.log(self.M) - 0.5 * self.S * self.S, S=self.S)


class LogNormal(ScalarDistribution):
    """
    Log-normal distribution.

    Parameters
    ----------
    param : Tensor or None, default None
        Non-negative real tensor.
    M : Hyperparameter, default 0.0
        Mean (log space unless ``mean_in_real_space``).
    S : Hyperparameter, default 1.0
        Standard deviation in log space.
    mean_in_real_space : bool, default False
        Interpret ``M`` as the real-space mean.
    rng : numpy.random.Generator or None, default None
        Random stream.
    """

    family = LOG_NORMAL
    support_domain = NonNegativeReal

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        M: Hyperparameter = 0.0,
        S: Hyperparameter = 1.0,
        mean_in_real_space: bool = False,
        rng: np.random.Generator | None = None,
    ) -> None:
        form = "realSpace" if mean_in_real_space else "logSpace"
        super().__init__(param, form=form, inputs={"M": M, "S": S}, rng=rng)

    def _build(self, config: Configuration) -> Any:
        config = cast(LogNormalLogSpace, config)
        return stats.lognorm(s=config.S, scale=math.exp(config.M))
