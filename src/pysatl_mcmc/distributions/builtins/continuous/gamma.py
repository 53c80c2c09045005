"""
Gamma and inverse-gamma distributions.

Gamma parametrizations (``alpha`` is always the shape):

- ``shape_scale`` (base): ``beta`` is the scale;
- ``shape_rate``: ``beta`` is the rate, scale ``1 / beta``;
- ``shape_mean``: ``beta`` is the mean, scale ``beta / alpha``;
- ``one_parameter``: mean fixed at one, scale ``1 / alpha``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from enum import StrEnum
from typing import TYPE_CHECKING, Any, cast

from scipy import stats

from pysatl_mcmc.config import Configuration, ConfigurationFamily, configuration, constraint
from pysatl_mcmc.distributions.base import ScalarDistribution
from pysatl_mcmc.state.domains import NonNegativeReal, PositiveReal

if TYPE_CHECKING:
    import numpy as np

    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor


class GammaMode(StrEnum):
    SHAPE_SCALE = "shape_scale"
    SHAPE_RATE = "shape_rate"
    SHAPE_MEAN = "shape_mean"
    ONE_PARAMETER = "one_parameter"


GAMMA = ConfigurationFamily("Gamma", base=GammaMode.SHAPE_SCALE)


class _PositiveShape(Configuration):
    alpha: float

    @constraint(description="alpha > 0")
    def check_alpha_positive(self) -> bool:
        return self.alpha > 0


@configuration(name=GammaMode.SHAPE_SCALE, family=GAMMA)
class GammaShapeScale(_PositiveShape):
    alpha: float
    beta: float

    @constraint(description="beta > 0")
    def check_beta_positive(self) -> bool:
        return self.beta > 0


@configuration(name=GammaMode.SHAPE_RATE, family=GAMMA)
class GammaShapeRate(_PositiveShape):
    alpha: float
    beta: float

    @constraint(description="beta > 0")
    def check_beta_positive(self) -> bool:
        return self.beta > 0

    def transform_to_base(self) -> Configuration:
        return GammaShapeScale(alpha=self.alpha, beta=1.0 / self.beta)


@configuration(name=GammaMode.SHAPE_MEAN, family=GAMMA)
class GammaShapeMean(_PositiveShape):
    alpha: float
    beta: float

    @constraint(description="beta > 0")
    def check_beta_positive(self) -> bool:
        return self.beta > 0

    def transform_to_base(self) -> Configuration:
        return GammaShapeScale(alpha=self.alpha, beta=self.beta / self.alpha)


@configuration(name=GammaMode.ONE_PARAMETER, family=GAMMA)
class GammaOneParameter(_PositiveShape):
    alpha: float

    def transform_to_base(self) -> Configuration:
        return GammaShapeScale(alpha=self.alpha, beta=1.0 / self.alpha)


class Gamma(ScalarDistribution):
    """
    Gamma distribution.

    Parameters
    ----------
    param : Tensor or None, default None
        Non-negative real tensor.
    alpha : Hyperparameter, default 2.0
        Shape.
    beta : Hyperparameter, default 2.0
        Scale, rate or mean depending on ``mode``. Ignored for
        ``one_parameter``.
    mode : GammaMode or str, default "shape_scale"
        Meaning of ``beta``.
    rng : numpy.random.Generator or None, default None
        Random stream.

    Raises
    ------
    ConfigurationError
        If ``mode`` is unknown.
    """

    family = GAMMA
    support_domain = NonNegativeReal

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        alpha: Hyperparameter = 2.0,
        beta: Hyperparameter = 2.0,
        mode: GammaMode | str = GammaMode.SHAPE_SCALE,
        rng: np.random.Generator | None = None,
    ) -> None:
        inputs: dict[str, Hyperparameter] = {"alpha": alpha}
        if mode != GammaMode.ONE_PARAMETER:
            inputs["beta"] = beta
        super().__init__(param, form=str(mode), inputs=inputs, rng=rng)

    def _build(self, config: Configuration) -> Any:
        config = cast(GammaShapeScale, config)
        return stats.gamma(a=config.alpha, scale=config.beta)

    def _mean(self) -> float:
        config = cast(GammaShapeScale, self._config)
        return config.alpha * config.beta


INVERSE_GAMMA = ConfigurationFamily("InverseGamma")


@configuration(name="shapeScale", family=INVERSE_GAMMA)
class InverseGammaShapeScale(_PositiveShape):
    alpha: float
    beta: float

    @constraint(description="beta > 0")
    def check_beta_positive(self) -> bool:
        return self.beta > 0


class InverseGamma(ScalarDistribution):
    """
    Inverse-gamma distribution: ``1 / x ~ Gamma(alpha, scale=1 / beta)``.

    The mean ``beta / (alpha - 1)`` exists only for ``alpha > 1``.
    """

    family = INVERSE_GAMMA
    support_domain = PositiveReal

    def __init__(
        self,
        param: Tensor | None = None,
        *,
        alpha: Hyperparameter = 1.0,
        beta: Hyperparameter = 1.0,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(
            param, form="shapeScale", inputs={"alpha": alpha, "beta": beta}, rng=rng
        )

    def _build(self, config: Configuration) -> Any:
        config = cast(InverseGammaShapeScale, config)
        return stats.invgamma(a=config.alpha, scale=config.beta)
