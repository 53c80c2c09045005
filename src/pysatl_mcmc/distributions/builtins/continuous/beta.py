"""
Beta distribution on the unit interval.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, cast

from scipy import stats

from pysatl_mcmc.config import Configuration, ConfigurationFamily, configuration, constraint
from pysatl_mcmc.distributions.base import ScalarDistribution
from pysatl_mcmc.state.domains import UnitInterval

if TYPE_CHECKING:
    import numpy as np

    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor

BETA = ConfigurationFamily("Beta")


@configuration(name="shapes", family=BETA)
class BetaShapes(Configuration):
    alpha: float
    beta: float

    @constraint(description="alpha > 0")
    def check_alpha_positive(self) -> bool:
        return self.alpha > 0

    @constraint(description="beta > 0")
    def check_beta_positive(self) -> bool:
        return self.beta > 0


class Beta(ScalarDistribution):
    """
    Beta distribution with shapes ``alpha`` and ``beta`` (both default 1).
    """

    family = BETA
    support_domain = UnitInterval

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        alpha: Hyperparameter = 1.0,
        beta: Hyperparameter = 1.0,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(param, form="shapes", inputs={"alpha": alpha, "beta": beta}, rng=rng)

    def _build(self, config: Configuration) -> Any:
        config = cast(BetaShapes, config)
        return stats.beta(a=config.alpha, b=config.beta)

    def _mean(self) -> float:
        config = cast(BetaShapes, self._config)
        return config.alpha / (config.alpha + config.beta)
