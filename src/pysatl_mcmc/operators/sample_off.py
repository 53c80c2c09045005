"""
Sample-off operator: independent redraws of switched-off elements.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

from pysatl_mcmc.config import configuration
from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.operators.base import Operator, OperatorConfig
from pysatl_mcmc.state.tensor import BoolTensor, RealTensor

if TYPE_CHECKING:
    from typing import Any

    import numpy as np

    from pysatl_mcmc.distributions.base import UnivariateDistribution


@configuration(name="SampleOffValues")
class SampleOffValuesConfig(OperatorConfig):
    """
    Parameters
    ----------
    all : bool, default False
        Redraw every switched-off element instead of one.
    """

    all: bool = False
    optimise: bool = False


class SampleOffValuesOperator(Operator):
    """
    Redraws values whose indicator is off from their prior.

    Elements switched off by the indicator do not affect the likelihood, so
    drawing them from ``distribution`` is a Gibbs-like move. The log Hastings
    ratio adds ``log_density(old)`` for every redrawn element; the density of
    the new value cancels against the prior. With no element switched off the
    proposal is rejected (``-inf``).

    Parameters
    ----------
    values : RealTensor
        Values to redraw.
    indicators : BoolTensor
        One flag per value, or one fewer, in which case the first value is
        always on and ``indicators[i]`` belongs to ``values[i + 1]``.
    distribution : UnivariateDistribution
        Prior of the switched-off values.
    """

    config_type = SampleOffValuesConfig
    config: SampleOffValuesConfig

    def __init__(
        self,
        values: RealTensor,
        indicators: BoolTensor,
        distribution: UnivariateDistribution,
        *,
        config: SampleOffValuesConfig | None = None,
        rng: np.random.Generator | None = None,
        name: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, rng=rng, name=name, **options)
        if not isinstance(values, RealTensor):
            raise ConfigurationError(f"SampleOffValuesOperator needs real values, got {values!r}")
        if not isinstance(indicators, BoolTensor):
            raise ConfigurationError(
                f"SampleOffValuesOperator needs boolean indicators, got {indicators!r}"
            )
        n = values.size()
        if indicators.size() == n:
            self._offset = 0
        elif indicators.size() == n - 1:
            self._offset = 1
        else:
            raise ConfigurationError(
                f"Indicator dimension ({indicators.size()}) must equal the value dimension "
                f"({n}) or be one less"
            )
        self.values = values
        self.indicators = indicators
        self.distribution = distribution

    def off_positions(self) -> list[int]:
        """Value indices whose indicator is currently off."""
        return [i + self._offset for i, on in enumerate(self.indicators) if not on]

    def _redraw(self, index: int) -> float:
        old = self.values.get(index)
        new = self.distribution.inverse_cumulative_probability(float(self.rng.random()))
        self.values.set(index, new)
        return self.distribution.log_density(old)

    def _propose(self) -> float:
        off = self.off_positions()
        if not off:
            return -math.inf
        if self.config.all:
            return sum((self._redraw(i) for i in off), 0.0)
        return self._redraw(off[int(self.rng.integers(len(off)))])


__all__ = ["SampleOffValuesConfig", "SampleOffValuesOperator"]
