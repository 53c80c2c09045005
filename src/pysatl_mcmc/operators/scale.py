"""
Scale operator: multiplicative moves on real tensors.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

from pysatl_mcmc.config import configuration, constraint
from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.operators.base import KernelOperator, OperatorConfig
from pysatl_mcmc.state.tensor import BoolTensor, RealTensor

if TYPE_CHECKING:
    from typing import Any

    import numpy as np

    from pysatl_mcmc.operators.kernel import KernelDistribution


@configuration(name="Scale")
class ScaleConfig(OperatorConfig):
    """
    Options of :class:`ScaleOperator`.

    Parameters
    ----------
    scale_factor : float, default 0.75
        Spread of the log scale draw; larger means bolder proposals.
    scale_lower_limit : float, default 1e-8
        Smallest value auto-optimisation may give ``scale_factor``.
    scale_upper_limit : float, default 10.0
        Largest value auto-optimisation may give ``scale_factor``.
    scale_all : bool, default False
        Scale every element by one common factor.
    scale_all_independently : bool, default False
        Scale every element by its own factor.
    degrees_of_freedom : int, default 0
        Overrides the number of scaled elements in the joint Hastings ratio
        when positive.
    """

    scale_factor: float = 0.75
    scale_lower_limit: float = 1e-8
    scale_upper_limit: float = 10.0
    scale_all: bool = False
    scale_all_independently: bool = False
    degrees_of_freedom: int = 0

    @constraint(description="scale_factor > 0")
    def check_scale_factor_positive(self) -> bool:
        return self.scale_factor > 0

    @constraint(description="0 < scale_lower_limit < scale_upper_limit")
    def check_limits(self) -> bool:
        return 0 < self.scale_lower_limit < self.scale_upper_limit

    @constraint(description="scale_all and scale_all_independently are mutually exclusive")
    def check_single_mode(self) -> bool:
        return not (self.scale_all and self.scale_all_independently)

    @constraint(description="degrees_of_freedom >= 0")
    def check_dof_non_negative(self) -> bool:
        return self.degrees_of_freedom >= 0


class ScaleOperator(KernelOperator):
    """
    Multiplies one, all, or all-independently-drawn elements by kernel scale
    factors.

    Modes and Hastings ratios:

    - one random element (default): ``log(scale)``; a zero element cannot be
      scaled and yields ``-inf``;
    - ``scale_all``: one factor for every nonzero element,
      ``dof * log(scale)`` with ``dof`` the number of scaled elements unless
      ``degrees_of_freedom`` overrides it;
    - ``scale_all_independently``: one factor per element, sum of their logs.

    Parameters
    ----------
    parameter : RealTensor
        Scalar or vector to scale.
    indicator : BoolTensor or None, default None
        Restricts single-element and independent moves to elements whose
        indicator is on. With one indicator fewer than elements, the first
        element is always on and indicator ``i`` controls element ``i + 1``.
    config, kernel, rng, name, **options
        See :class:`KernelOperator` and :class:`ScaleConfig`.
    """

    config_type = ScaleConfig
    parameter_label = "scale factor"
    config: ScaleConfig

    def __init__(
        self,
        parameter: RealTensor,
        *,
        indicator: BoolTensor | None = None,
        config: ScaleConfig | None = None,
        kernel: KernelDistribution | None = None,
        rng: np.random.Generator | None = None,
        name: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, kernel=kernel, rng=rng, name=name, **options)
        if not isinstance(parameter, RealTensor):
            raise ConfigurationError(f"ScaleOperator needs a real tensor, got {parameter!r}")
        if indicator is not None:
            if not isinstance(indicator, BoolTensor):
                raise ConfigurationError(f"Indicator must be a boolean tensor, got {indicator!r}")
            if indicator.size() not in (parameter.size(), parameter.size() - 1):
                raise ConfigurationError(
                    f"Indicator dimension {indicator.size()} is not compatible with "
                    f"parameter dimension {parameter.size()}"
                )
        self.parameter = parameter
        self.indicator = indicator
        self._scale_factor = self.config.scale_factor

    @property
    def coercable_parameter(self) -> float:
        return self._scale_factor

    @coercable_parameter.setter
    def coercable_parameter(self, value: float) -> None:
        self._scale_factor = min(
            max(value, self.config.scale_lower_limit), self.config.scale_upper_limit
        )

    def _scaler(self, index: int, value: float) -> float:
        return self.kernel.get_scaler(index, value, self._scale_factor)

    def _active_indices(self) -> list[int]:
        size = self.parameter.size()
        if self.indicator is None:
            return list(range(size))
        flags = [bool(v) for v in self.indicator]
        if len(flags) == size - 1:
            return [0] + [i + 1 for i, on in enumerate(flags) if on]
        return [i for i, on in enumerate(flags) if on]

    def _propose(self) -> float:
        if self.config.scale_all_independently:
            return self._scale_independently()
        if self.config.scale_all:
            return self._scale_jointly()
        return self._scale_one()

    def _scale_independently(self) -> float:
        param = self.parameter
        new_values = param.get_elements().astype(float)
        log_hr = 0.0
        for index in self._active_indices():
            value = float(new_values[index])
            scale = self._scaler(index, value)
            log_hr += math.log(scale)
            new_values[index] = scale * value
            if not param.is_valid(new_values[index]):
                return -math.inf
        param.set_all(new_values.tolist())
        return log_hr

    def _scale_jointly(self) -> float:
        scale = self._scaler(0, float(self.parameter.get(0)))
        scaled = self.parameter.scale(scale)
        dof = self.config.degrees_of_freedom if self.config.degrees_of_freedom > 0 else scaled
        return dof * math.log(scale)

    def _scale_one(self) -> float:
        candidates = self._active_indices()
        if not candidates:
            return -math.inf
        index = candidates[int(self.rng.integers(len(candidates)))]
        old_value = float(self.parameter.get(index))
        if old_value == 0.0:
            return -math.inf
        scale = self._scaler(index, old_value)
        new_value = scale * old_value
        if not self.parameter.is_valid(new_value):
            return -math.inf
        self.parameter.set(index, new_value)
        return math.log(scale)


__all__ = ["ScaleConfig", "ScaleOperator"]
