"""
Poisson distribution over non-negative integers.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, cast

from scipy import stats

from pysatl_mcmc.config import Configuration, ConfigurationFamily, configuration, constraint
from pysatl_mcmc.distributions.base import ScalarDistribution
from pysatl_mcmc.state.domains import NonNegativeInt
from pysatl_mcmc.types import Kind

if TYPE_CHECKING:
    import numpy as np

    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor

POISSON = ConfigurationFamily("Poisson")


@configuration(name="rate", family=POISSON)
class PoissonRate(Configuration):
    lambda_: float

    @constraint(description="lambda > 0")
    def check_lambda_positive(self) -> bool:
        return self.lambda_ > 0


class Poisson(ScalarDistribution):
    """
    Poisson distribution.

    Parameters
    ----------
    param : Tensor or None, default None
        Integer tensor.
    lambda_ : Hyperparameter, default 1.0
        Rate, equal to the mean.
    rng : numpy.random.Generator or None, default None
        Random stream.
    """

    kind = Kind.INT
    family = POISSON
    support_domain = NonNegativeInt

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        lambda_: Hyperparameter = 1.0,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(param, form="rate", inputs={"lambda_": lambda_}, rng=rng)

    def _build(self, config: Configuration) -> Any:
        return stats.poisson(mu=cast(PoissonRate, config).lambda_)

    def _mean(self) -> float:
        return cast(PoissonRate, self._config).lambda_
