"""
Discrete uniform distribution on the integers ``lower, ..., upper``.
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
from pysatl_mcmc.state.domains import Int
from pysatl_mcmc.types import Kind

if TYPE_CHECKING:
    import numpy as np

    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor

INT_UNIFORM = ConfigurationFamily("IntUniform")


@configuration(name="bounds", family=INT_UNIFORM)
class IntUniformBounds(Configuration):
    lower: float
    upper: float

    @constraint(description="lower <= upper")
    def check_lower_not_above_upper(self) -> bool:
        return self.lower <= self.upper

    @constraint(description="bounds are integers")
    def check_integral_bounds(self) -> bool:
        return float(self.lower).is_integer() and float(self.upper).is_integer()


class IntUniform(ScalarDistribution):
    """
    Discrete uniform distribution.

    Parameters
    ----------
    param : Tensor or None, default None
        Integer tensor.
    lower : Hyperparameter, default 1
        Smallest value, inclusive.
    upper : Hyperparameter, default 10
        Largest value, inclusive.
    rng : numpy.random.Generator or None, default None
        Random stream.
    """

    kind = Kind.INT
    family = INT_UNIFORM
    support_domain = Int

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        lower: Hyperparameter = 1,
        upper: Hyperparameter = 10,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(param, form="bounds", inputs={"lower": lower, "upper": upper}, rng=rng)

    def _build(self, config: Configuration) -> Any:
        config = cast(IntUniformBounds, config)
        return stats.randint(low=int(config.lower), high=int(config.upper) + 1)

    def _lower(self) -> float:
        return cast(IntUniformBounds, self._config).lower

    def _upper(self) -> float:
        return cast(IntUniformBounds, self._config).upper

    def _mean(self) -> float:
        config = cast(IntUniformBounds, self._config)
        return 0.5 * (config.lower + config.upper)

    def _log_density(self, x: float) -> float:
        config = cast(IntUniformBounds, self._config)
        if not (config.lower <= x <= config.upper and float(x).is_integer()):
            return -math.inf
        return -math.log(config.upper - config.lower + 1)
