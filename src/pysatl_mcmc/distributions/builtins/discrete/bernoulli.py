"""
Bernoulli distribution over a boolean parameter.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Any, cast

from scipy import stats

from pysatl_mcmc.config import Configuration, ConfigurationFamily, configuration, constraint
from pysatl_mcmc.distributions.base import ScalarDistribution
from pysatl_mcmc.state.domains import Bool
from pysatl_mcmc.types import Kind

if TYPE_CHECKING:
    import numpy as np

    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor

BERNOULLI = ConfigurationFamily("Bernoulli")


@configuration(name="probability", family=BERNOULLI)
class BernoulliProbability(Configuration):
    p: float

    @constraint(description="0 <= p <= 1")
    def check_p_in_unit_interval(self) -> bool:
        return 0.0 <= self.p <= 1.0


class Bernoulli(ScalarDistribution):
    """
    Bernoulli distribution: ``True`` with probability ``p``.

    ``log P(True) = log p`` and ``log P(False) = log(1 - p)``.
    """

    kind = Kind.BOOL
    family = BERNOULLI
    support_domain = Bool

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        p: Hyperparameter = 0.5,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(param, form="probability", inputs={"p": p}, rng=rng)

    def _build(self, config: Configuration) -> Any:
        return stats.bernoulli(p=cast(BernoulliProbability, config).p)

    def _mean(self) -> float:
        return cast(BernoulliProbability, self._config).p
