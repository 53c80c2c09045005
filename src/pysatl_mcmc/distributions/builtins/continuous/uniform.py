"""
Continuous uniform distribution on ``[lower, upper]``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, cast

from scipy import stats

from pysatl_mcmc.config import Configuration, ConfigurationFamily, configuration, constraint
from pysatl_mcmc.distributions.base import ScalarDistribution
from pysatl_mcmc.state.domains import Real

if TYPE_CHECKING:
    import numpy as np

    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor

UNIFORM = ConfigurationFamily("Uniform")


@configuration(name="bounds", family=UNIFORM)
class UniformBounds(Configuration):
    """
    Bounds parametrization of uniform distribution.

    Parameters
    ----------
    lower : float
        Lower bound of the distribution
    upper : float
        Upper bound of the distribution
    """

    lower: float
    upper: float

    @constraint(description="lower < upper")
    def check_lower_less_than_upper(self) -> bool:
        """Check that lower bound is less than upper bound."""
        return self.lower < self.upper


class Uniform(ScalarDistribution):
    family = UNIFORM
    support_domain = Real

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        lower: Hyperparameter = 0.0,
        upper: Hyperparameter = 1.0,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(param, form="bounds", inputs={"lower": lower, "upper": upper}, rng=rng)

    def _build(self, config: Configuration) -> Any:
        config = cast(UniformBounds, config)
        return stats.uniform(loc=config.lower, scale=config.upper - config.lower)

    def _mean(self) -> float:
        config = cast(UniformBounds, self._config)
        return 0.5 * (config.lower + config.upper)
