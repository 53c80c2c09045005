"""
Offset decorator: shifts an inner distribution by a constant.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

from pysatl_mcmc.distributions.base import UnivariateDistribution, resolve_hyperparameter
from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.types import Kind

if TYPE_CHECKING:
    import numpy as np
    from numpy.typing import NDArray

    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor


class Offset(UnivariateDistribution):
    """
    Distribution of ``X + offset`` where ``X`` follows ``inner``.

    ``log_density(x) = inner.calc_log_p(x - offset)``; samples, quantiles,
    mean and bounds are shifted by ``offset``. Integer inner distributions
    require an integral offset.

    Parameters
    ----------
    inner : UnivariateDistribution
        Distribution being shifted.
    offset : Hyperparameter, default 0.0
        Shift, fixed or read from a scalar tensor at refresh time.
    param : Tensor or None, default None
        Bound parameter.
    rng : numpy.random.Generator or None, default None
        Random stream. Sampling delegates to ``inner``, so this only matters
        for code that inspects ``self.rng``; defaults to ``inner.rng``.
    """

    def __init__(
        self,
        inner: UnivariateDistribution,
        offset: Hyperparameter = 0.0,
        param: Tensor | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.kind = inner.kind
        self.inner = inner
        self.offset = offset
        self._offset = 0.0
        super().__init__(param, rng=inner.rng if rng is None else rng)

    def refresh(self) -> None:
        self.inner.refresh()
        offset = resolve_hyperparameter(self.offset, "offset")
        if self.kind is Kind.INT and not offset.is_integer():
            raise ConfigurationError(f"Integer offset expected, got {offset}")
        self._offset = offset

    def _log_density(self, x: float) -> float:
        return self.inner._log_density(x - self._offset)

    def _cdf(self, x: float) -> float:
        return self.inner._cdf(x - self._offset)

    def _ppf(self, p: float) -> float:
        return self.inner._ppf(p) + self._offset

    def _ppf_array(self, p: NDArray[np.float64]) -> NDArray[np.float64]:
        return self.inner._ppf_array(p) + self._offset

    def _draw(self) -> float:
        return self.inner._draw() + self._offset

    def _lower(self) -> float:
        return self.inner._lower() + self._offset

    def _upper(self) -> float:
        return self.inner._upper() + self._offset

    def _mean(self) -> float:
        return self.inner._mean() + self._offset

    def __repr__(self) -> str:
        return f"Offset({self.inner!r}, {self.offset!r})"


__all__ = ["Offset"]
