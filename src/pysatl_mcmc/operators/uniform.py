"""
Bounded operators
=================

Moves that only make sense on parameters with finite bounds: independent
uniform redraws of integer elements and a scaling move that keeps a real
element strictly inside its interval.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

from pysatl_mcmc.config import configuration, constraint
from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.operators.base import KernelOperator, Operator, OperatorConfig
from pysatl_mcmc.state.tensor import IntTensor, RealTensor

if TYPE_CHECKING:
    from typing import Any

    import numpy as np

    from pysatl_mcmc.operators.kernel import KernelDistribution
    from pysatl_mcmc.state.tensor import Tensor


def _require_finite_bounds(parameter: Tensor, owner: str) -> None:
    if not (math.isfinite(parameter.lower) and math.isfinite(parameter.upper)):
        raise ConfigurationError(
            f"{owner} needs finite bounds on {parameter.name}, "
            f"got [{parameter.lower}, {parameter.upper}]"
        )


@configuration(name="IntUniform")
class IntUniformConfig(OperatorConfig):
    """
    Parameters
    ----------
    how_many : int, default 1
        Number of element redraws per proposal.
    """

    how_many: int = 1

    @constraint(description="how_many >= 1")
    def check_how_many_positive(self) -> bool:
        return self.how_many >= 1


class IntUniformOperator(Operator):
    """
    Redraws ``how_many`` randomly chosen elements of an integer tensor
    uniformly from ``[lower, upper]``.

    The proposal is independent of the current value, so the Hastings ratio
    is 0. Elements may be picked more than once.
    """

    config_type = IntUniformConfig
    config: IntUniformConfig

    def __init__(
        self,
        parameter: IntTensor,
        *,
        config: IntUniformConfig | None = None,
        rng: np.random.Generator | None = None,
        name: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, rng=rng, name=name, **options)
        if not isinstance(parameter, IntTensor):
            raise ConfigurationError(f"IntUniformOperator needs an integer tensor, got {parameter!r}")
        _require_finite_bounds(parameter, "IntUniformOperator")
        if self.config.how_many > parameter.size():
            raise ConfigurationError(
                f"how_many ({self.config.how_many}) exceeds the dimension of "
                f"{parameter.name} ({parameter.size()})"
            )
        self.parameter = parameter

    def _propose(self) -> float:
        lower = math.ceil(self.parameter.lower)
        upper = math.floor(self.parameter.upper)
        for _ in range(self.config.how_many):
            index = int(self.rng.integers(self.parameter.size()))
            self.parameter.set(index, int(self.rng.integers(lower, upper, endpoint=True)))
        return 0.0


@configuration(name="Interval")
class IntervalConfig(OperatorConfig):
    """
    Parameters
    ----------
    scale_factor : float, default 1.0
        Spread of the kernel scaler.
    inclusive : bool, default True
        Whether a proposal that rounds onto the upper bound may be written.
        When false, landing on either bound is rejected.
    """

    scale_factor: float = 1.0
    inclusive: bool = True

    @constraint(description="scale_factor > 0")
    def check_scale_factor_positive(self) -> bool:
        return self.scale_factor > 0


class IntervalOperator(KernelOperator):
    """
    Scaling move for a real element confined to ``(lower, upper)``.

    The element ``v`` is mapped to ``y = (u - v) / (v - l)``, ``y`` is
    multiplied by a kernel scaler ``s`` and mapped back with
    ``(u + l * y) / (y + 1)``. The log Hastings ratio is
    ``log(s) + 2 * log((new - l) / (v - l))``. A new value can land on a bound
    only through rounding. On the lower bound the ratio is ``-inf``; on the
    upper bound the move is kept unless ``inclusive`` is false.

    Raises
    ------
    ConfigurationError
        At construction, if the parameter is not real, a bound is not finite,
        or a current value is not strictly inside the bounds.
    """

    config_type = IntervalConfig
    parameter_label = "scale factor"
    config: IntervalConfig

    def __init__(
        self,
        parameter: RealTensor,
        *,
        config: IntervalConfig | None = None,
        kernel: KernelDistribution | None = None,
        rng: np.random.Generator | None = None,
        name: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, kernel=kernel, rng=rng, name=name, **options)
        if not isinstance(parameter, RealTensor):
            raise ConfigurationError(f"IntervalOperator needs a real tensor, got {parameter!r}")
        _require_finite_bounds(parameter, "IntervalOperator")
        lower, upper = parameter.lower, parameter.upper
        for value in parameter:
            if not lower < value < upper:
                raise ConfigurationError(
                    f"Value {value} of {parameter.name} is not strictly inside ({lower}, {upper})"
                )
        self.parameter = parameter
        self._scale_factor = self.config.scale_factor

    @property
    def coercable_parameter(self) -> float:
        return self._scale_factor

    @coercable_parameter.setter
    def coercable_parameter(self, value: float) -> None:
        self._scale_factor = value

    def _propose(self) -> float:
        lower, upper = self.parameter.lower, self.parameter.upper
        index = int(self.rng.integers(self.parameter.size()))
        value = float(self.parameter.get(index))
        scale = self.kernel.get_scaler(index, value, self._scale_factor)
        y = (upper - value) / (value - lower) * scale
        new_value = (upper + lower * y) / (y + 1.0)
        if new_value <= lower or new_value > upper:
            return -math.inf
        if new_value == upper and not self.config.inclusive:
            return -math.inf
        self.parameter.set(index, new_value)
        return math.log(scale) + 2.0 * math.log((new_value - lower) / (value - lower))


__all__ = [
    "IntUniformConfig",
    "IntUniformOperator",
    "IntervalConfig",
    "IntervalOperator",
]
