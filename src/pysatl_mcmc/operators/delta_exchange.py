"""
Delta-exchange operators
========================

Move an amount from one element to another so that their (weighted) sum is
unchanged. Useful for parameters constrained to a fixed total, such as
relative rates or partition sizes.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
from typing import TYPE_CHECKING

from pysatl_mcmc.config import configuration, constraint
from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.operators.base import KernelOperator, OperatorConfig
from pysatl_mcmc.state.tensor import (
    CompoundIntScalar,
    CompoundRealScalar,
    IntScalar,
    IntTensor,
    RealScalar,
    RealTensor,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from typing import Any

    import numpy as np

    from pysatl_mcmc.operators.kernel import KernelDistribution

logger = logging.getLogger(__name__)

INT_DELTA_FLOOR = 0.5000000001
"""Smallest integer delta; rounding anything lower would leave no step to draw."""


@configuration(name="DeltaExchange")
class DeltaExchangeConfig(OperatorConfig):
    """
    Options of the delta-exchange operators.

    Parameters
    ----------
    delta : float, default 1.0
        Magnitude of the exchanged amount.
    weights : tuple[int, ...] or None, default None
        Non-negative integer weight per element. Elements with weight zero are
        never picked; the weighted sum is preserved.
    """

    delta: float = 1.0
    weights: tuple[int, ...] | None = None

    @constraint(description="delta > 0")
    def check_delta_positive(self) -> bool:
        return self.delta > 0

    @constraint(description="weights are non-negative integers")
    def check_weights(self) -> bool:
        if self.weights is None:
            return True
        return all(float(w).is_integer() and w >= 0 for w in self.weights)


class _DeltaExchange(KernelOperator):
    config_type = DeltaExchangeConfig
    parameter_label = "delta"
    config: DeltaExchangeConfig

    def _setup(self, size: int) -> None:
        weights = self.config.weights
        if weights is None:
            weights = (1,) * size
        elif len(weights) != size:
            raise ConfigurationError(
                "Weights vector should have the same length as parameter dimension "
                f"({len(weights)} != {size})"
            )
        self._weights = tuple(int(w) for w in weights)
        self._nonzero = [i for i, w in enumerate(self._weights) if w != 0]
        self._delta = self.config.delta
        if size <= 1:
            logger.warning(
                "The dimension of the parameter is %d at the start of the run; "
                "operator %s has no effect",
                size,
                self.name,
            )

    @property
    def weights(self) -> tuple[int, ...]:
        return self._weights

    @property
    def coercable_parameter(self) -> float:
        return self._delta

    @coercable_parameter.setter
    def coercable_parameter(self, value: float) -> None:
        self._delta = value

    def _select_pair(self) -> tuple[int, int] | None:
        """Two distinct positions among the nonzero weights, uniformly."""
        count = len(self._nonzero)
        if count <= 1:
            return None
        first = int(self.rng.integers(count))
        second = int(self.rng.integers(count - 1))
        if second >= first:
            second += 1
        return self._nonzero[first], self._nonzero[second]


class DeltaExchangeOperator(_DeltaExchange):
    """
    Real delta exchange.

    Draws ``d`` from the kernel and moves it between two elements. With
    unequal weights ``w1, w2`` the first element loses ``d * w2 / (w1 + w2)``
    and the second gains ``d * w1 / (w1 + w2)``; with equal weights each
    moves by ``d / 2``. The Hastings ratio is 0, or ``-inf`` if either new
    value is invalid. With fewer than two eligible elements nothing happens
    and 0 is returned.

    Parameters
    ----------
    parameter : RealTensor or Sequence[RealScalar]
        Vector to operate on, or several scalars treated as one vector.
    config, kernel, rng, name, **options
        See :class:`KernelOperator` and :class:`DeltaExchangeConfig`.
    """

    def __init__(
        self,
        parameter: RealTensor | Sequence[RealScalar],
        *,
        config: DeltaExchangeConfig | None = None,
        kernel: KernelDistribution | None = None,
        rng: np.random.Generator | None = None,
        name: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, kernel=kernel, rng=rng, name=name, **options)
        if isinstance(parameter, RealTensor):
            self.parameter: RealTensor | CompoundRealScalar = parameter
        elif all(isinstance(p, RealScalar) for p in parameter):
            self.parameter = CompoundRealScalar(list(parameter))
        else:
            raise ConfigurationError(
                "DeltaExchangeOperator needs a real tensor or a sequence of real scalars"
            )
        self._setup(self.parameter.size())

    def _propose(self) -> float:
        pair = self._select_pair()
        if pair is None:
            return 0.0
        i, j = pair
        param = self.parameter
        x1 = float(param.get(i))
        x2 = float(param.get(j))
        d = self.kernel.get_random_delta(0, math.nan, self._delta)
        w1, w2 = self._weights[i], self._weights[j]
        if w1 != w2:
            total = w1 + w2
            x1 -= d * w2 / total
            x2 += d * w1 / total
        else:
            x1 -= d / 2
            x2 += d / 2
        if not (param.is_valid_at(i, x1) and param.is_valid_at(j, x2)):
            return -math.inf
        param.set(i, x1)
        param.set(j, x2)
        return 0.0


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


class IntDeltaExchangeOperator(_DeltaExchange):
    """
    Integer delta exchange.

    Moves ``d = 1 + U{0, ..., round(delta) - 1}`` from one element to another,
    rounding ``delta`` half up. ``delta`` must be integral at construction;
    auto-optimisation keeps it at or above ``0.5000000001``. Weights only
    select eligible elements and must be equal wherever nonzero.

    Parameters
    ----------
    parameter : IntTensor or Sequence[IntScalar]
        Vector to operate on, or several scalars treated as one vector.
    config, rng, name, **options
        See :class:`Operator` and :class:`DeltaExchangeConfig`.
    """

    def __init__(
        self,
        parameter: IntTensor | Sequence[IntScalar],
        *,
        config: DeltaExchangeConfig | None = None,
        rng: np.random.Generator | None = None,
        name: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, rng=rng, name=name, **options)
        if isinstance(parameter, IntTensor):
            self.parameter: IntTensor | CompoundIntScalar = parameter
        elif all(isinstance(p, IntScalar) for p in parameter):
            self.parameter = CompoundIntScalar(list(parameter))
        else:
            raise ConfigurationError(
                "IntDeltaExchangeOperator needs an integer tensor or a sequence of "
                f"integer scalars, got {parameter!r}"
            )
        if not float(self.config.delta).is_integer():
            raise ConfigurationError(
                f"Can't be an integer operator if delta is not integer, got {self.config.delta}"
            )
        self._setup(self.parameter.size())
        if len({self._weights[i] for i in self._nonzero}) > 1:
            raise ConfigurationError("IntDeltaExchangeOperator needs equal nonzero weights")

    @property
    def coercable_parameter(self) -> float:
        return self._delta

    @coercable_parameter.setter
    def coercable_parameter(self, value: float) -> None:
        self._delta = max(INT_DELTA_FLOOR, value)

    def _propose(self) -> float:
        pair = self._select_pair()
        if pair is None:
            return 0.0
        i, j = pair
        d = int(self.rng.integers(_round_half_up(self._delta))) + 1
        param = self.parameter
        x1 = int(param.get(i)) - d
        x2 = int(param.get(j)) + d
        if not (param.is_valid_at(i, x1) and param.is_valid_at(j, x2)):
            return -math.inf
        param.set(i, x1)
        param.set(j, x2)
        return 0.0


__all__ = [
    "INT_DELTA_FLOOR",
    "DeltaExchangeConfig",
    "DeltaExchangeOperator",
    "IntDeltaExchangeOperator",
]
