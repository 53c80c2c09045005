"""
Chi-square distribution.
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

CHI_SQUARE = ConfigurationFamily("ChiSquare")


@configuration(name="df", family=CHI_SQUARE)
class ChiSquareDf(Configuration):
    df: float

    @constraint(description="df > 0")
    def check_df_positive(self) -> bool:
        return self.df > 0


class ChiSquare(ScalarDistribution):
    """Chi-square distribution with ``df`` degrees of freedom (default 1)."""

    family = CHI_SQUARE
    support_domain = NonNegativeReal

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        df: Hyperparameter = 1,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(param, form="df", inputs={"df": df}, rng=rng)

    def _build(self, config: Configuration) -> Any:
        return stats.chi2(df=cast(ChiSquareDf, config).df)

    def _mean(self) -> float:
        return cast(ChiSquareDf, self._config).df
