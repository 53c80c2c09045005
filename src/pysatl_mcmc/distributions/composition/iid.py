"""
IID decorator: one univariate distribution applied to every element of a
vector parameter.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from typing import TYPE_CHECKING

from pysatl_mcmc.distributions.base import Distribution
from pysatl_mcmc.exceptions import ConfigurationError, SamplingRetryError

if TYPE_CHECKING:
    from collections.abc import Sequence

    import numpy as np

    from pysatl_mcmc.distributions.base import UnivariateDistribution
    from pysatl_mcmc.state.tensor import Tensor
    from pysatl_mcmc.types import Number

logger = logging.getLogger(__name__)

DEFAULT_MAX_RETRIES = 10000
"""Draws attempted per element before :meth:`IID.sample` gives up."""


class IID(Distribution):
    """
    Independent, identically distributed replication of ``base``.

    Parameters
    ----------
    base : UnivariateDistribution
        Distribution of each element.
    param : Tensor or None, default None
        Vector parameter. Its size fixes the dimension.
    dimension : int or None, default None
        Dimension when no parameter is bound.
    max_retries : int, default 10000
        Draws attempted per element in :meth:`sample` before
        :class:`~pysatl_mcmc.exceptions.SamplingRetryError` is raised.
    rng : numpy.random.Generator or None, default None
        Random stream; defaults to ``base.rng``.

    Raises
    ------
    ConfigurationError
        If neither ``param`` nor ``dimension`` is given, they disagree, or
        ``max_retries`` is not positive.
    """

    def __init__(
        self,
        base: UnivariateDistribution,
        param: Tensor | None = None,
        *,
        dimension: int | None = None,
        max_retries: int = DEFAULT_MAX_RETRIES,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.kind = base.kind
        self.base = base
        super().__init__(param, rng=base.rng if rng is None else rng)
        if param is not None:
            if dimension is not None and dimension != param.size():
                raise ConfigurationError(
                    f"IID dimension {dimension} does not match parameter size {param.size()}"
                )
            dimension = param.size()
        if dimension is None or dimension < 1:
            raise ConfigurationError("IID needs a bound parameter or a positive dimension")
        if max_retries < 1:
            raise ConfigurationError(f"max_retries must be positive, got {max_retries}")
        self.dimension = dimension
        self.max_retries = max_retries

    def refresh(self) -> None:
        self.base.refresh()

    def calculate_log_p(self) -> float:
        """
        Sum of the base log-densities over the bound parameter.

        The base distribution is refreshed once for the whole vector.
        """
        param = self._require_param()
        self.log_p = self.calc_log_p(param.get_elements().tolist())
        return self.log_p

    def calc_log_p(self, values: Sequence[Number]) -> float:
        """
        Sum of the base log-densities at ``values``.

        Raises
        ------
        ConfigurationError
            If ``len(values)`` differs from the dimension.
        """
        if len(values) != self.dimension:
            raise ConfigurationError(
                f"IID of dimension {self.dimension} evaluated at {len(values)} values"
            )
        self.base.refresh()
        log_p = 0.0
        for value in values:
            log_p += self.base._log_density(float(value))
        return log_p

    def sample(self) -> tuple[Number, ...]:
        """
        Draw one value per element.

        Values that the bound parameter would reject are redrawn.

        Raises
        ------
        SamplingRetryError
            If an element has no valid draw within ``max_retries`` attempts.
        """
        self.base.refresh()
        values: list[Number] = []
        for index in range(self.dimension):
            for _ in range(self.max_retries):
                value = self.base._cast(self.base._draw())
                if self.param is None or self.param.is_valid_at(index, value):
                    values.append(value)
                    break
            else:
                logger.debug("IID sampling gave up on element %d of %r", index, self.base)
                raise SamplingRetryError(self.max_retries, index)
        return tuple(values)

    def __repr__(self) -> str:
        return f"IID({self.base!r}, dimension={self.dimension})"


__all__ = ["IID", "DEFAULT_MAX_RETRIES"]
