"""
Random-walk operators: symmetric additive moves on one element.
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


@configuration(name="RealRandomWalk")
class RealRandomWalkConfig(OperatorConfig):
    """
    Parameters
    ----------
    window_size : float, default 1.0
        Scale of the kernel step.
    """

    window_size: float = 1.0

    @constraint(description="window_size > 0")
    def check_window_positive(self) -> bool:
        return self.window_size > 0


class RealRandomWalkOperator(KernelOperator):
    """
    Adds a kernel-drawn step to one uniformly chosen element.

    The move is symmetric, so the Hastings ratio is 0 unless the new value
    falls outside the parameter's domain or bounds (``-inf``).
    """

    config_type = RealRandomWalkConfig
    parameter_label = "window size"
    config: RealRandomWalkConfig

    def __init__(
        self,
        parameter: RealTensor,
        *,
        config: RealRandomWalkConfig | None = None,
        kernel: KernelDistribution | None = None,
        rng: np.random.Generator | None = None,
        name: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, kernel=kernel, rng=rng, name=name, **options)
        if not isinstance(parameter, RealTensor):
            raise ConfigurationError(f"RealRandomWalkOperator needs a real tensor, got {parameter!r}")
        self.parameter = parameter
        self._window_size = self.config.window_size

    @property
    def coercable_parameter(self) -> float:
        return self._window_size

    @coercable_parameter.setter
    def coercable_parameter(self, value: float) -> None:
        self._window_size = value

    def _propose(self) -> float:
        index = int(self.rng.integers(self.parameter.size()))
        value = float(self.parameter.get(index))
        new_value = value + self.kernel.get_random_delta(index, value, self._window_size)
        if not self.parameter.is_valid(new_value):
            return -math.inf
        self.parameter.set(index, new_value)
        return 0.0


@configuration(name="IntRandomWalk")
class IntRandomWalkConfig(OperatorConfig):
    """
    Parameters
    ----------
    window_size : int, default 1
        Largest absolute step.
    """

    window_size: int = 1
    optimise: bool = False

    @constraint(description="window_size >= 1")
    def check_window_positive(self) -> bool:
        return self.window_size >= 1


class IntRandomWalkOperator(Operator):
    """
    Adds a uniform integer step in ``[-w, w]`` to one element.

    Returns ``-inf`` when the new value is invalid or equals the old one.
    The window is fixed; the operator has no coercible parameter.
    """

    config_type = IntRandomWalkConfig
    parameter_label = "window size"
    config: IntRandomWalkConfig

    def __init__(
        self,
        parameter: IntTensor,
        *,
        config: IntRandomWalkConfig | None = None,
        rng: np.random.Generator | None = None,
        name: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, rng=rng, name=name, **options)
        if not isinstance(parameter, IntTensor):
            raise ConfigurationError(f"IntRandomWalkOperator needs an integer tensor, got {parameter!r}")
        self.parameter = parameter

    def _propose(self) -> float:
        w = self.config.window_size
        index = int(self.rng.integers(self.parameter.size()))
        value = int(self.parameter.get(index))
        new_value = value + int(self.rng.integers(2 * w + 1)) - w
        if new_value == value or not self.parameter.is_valid(new_value):
            return -math.inf
        self.parameter.set(index, new_value)
        return 0.0


__all__ = [
    "RealRandomWalkConfig",
    "RealRandomWalkOperator",
    "IntRandomWalkConfig",
    "IntRandomWalkOperator",
]
