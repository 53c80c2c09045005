"""
Laplace (double exponential) distribution.
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

LAPLACE = ConfigurationFamily("Laplace")


@configuration(name="locationScale", family=LAPLACE)
class LaplaceLocationScale(Configuration):
    mu: float
    scale: float

    @constraint(description="scale > 0")
    def check_scale_positive(self) -> bool:
        return self.scale > 0


class Laplace(ScalarDistribution):
    family = LAPLACE
    support_domain = Real

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        mu: Hyperparameter = 0.0,
        scale: Hyperparameter = 1.0,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(
            param, form="locationScale", inputs={"mu": mu, "scale": scale}, rng=rng
        )

    def _build(self, config: Configuration) -> Any:
        config = cast(LaplaceLocationScale, config)
        return stats.laplace(loc=config.mu, scale=config.scale)
