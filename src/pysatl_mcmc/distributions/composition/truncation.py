"""
Truncation decorators
=====================

Restrict an inner distribution to ``[lower, upper]`` and renormalise.

Sampling inverts the inner CDF at a uniform draw on the admissible CDF
range, so even intervals with very little inner mass are sampled in one
step.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING, ClassVar

import numpy as np
from scipy import integrate as _sp_integrate

from pysatl_mcmc.distributions.base import UnivariateDistribution, resolve_hyperparameter
from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.types import EPS, Kind

if TYPE_CHECKING:
    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor

SIMPSON_INTERVALS = 20000
"""Number of (even) Simpson intervals used for the truncated real mean."""

MAX_SUMMATION_TERMS = 1_000_000
"""Largest support size summed term by term for the truncated integer mean."""


class _Truncation(UnivariateDistribution):
    inner_kind: ClassVar[Kind]

    def __init__(
        self,
        inner: UnivariateDistribution,
        lower: Hyperparameter = -math.inf,
        upper: Hyperparameter = math.inf,
        param: Tensor | None = None,
        *,
        rng: np.random.Generator | None = None,
    ) -> None:
        if inner.kind is not self.inner_kind:
            raise ConfigurationError(
                f"{type(self).__name__} needs a {self.inner_kind} distribution, got {inner!r}"
            )
        self.kind = inner.kind
        self.inner = inner
        self.lower_input = lower
        self.upper_input = upper
        self._lo = -math.inf
        self._hi = math.inf
        self._cdf_lo = 0.0
        self._cdf_hi = 1.0
        super().__init__(param, rng=inner.rng if rng is None else rng)

    @property
    def prob_out_of_bounds(self) -> float:
        """Inner probability mass outside the truncation interval."""
        self.refresh()
        return self._cdf_lo + (1.0 - self._cdf_hi)

    def _mass_below(self, lo: float) -> float:
        return self.inner._cdf(lo)

    def refresh(self) -> None:
        """
        Refresh the inner distribution and the truncation interval.

        Raises
        ------
        ConfigurationError
            If ``lower > upper`` or the interval carries no inner mass.
        """
        self.inner.refresh()
        lo = resolve_hyperparameter(self.lower_input, "lower")
        hi = resolve_hyperparameter(self.upper_input, "upper")
        if lo > hi:
            raise ConfigurationError(f"Truncation lower bound {lo} exceeds upper bound {hi}")
        self._lo = max(lo, self.inner._lower())
        self._hi = min(hi, self.inner._upper())
        self._cdf_lo = self._mass_below(self._lo) if math.isfinite(self._lo) else 0.0
        self._cdf_hi = self.inner._cdf(self._hi) if math.isfinite(self._hi) else 1.0
        if not self._cdf_hi - self._cdf_lo > 0.0:
            raise ConfigurationError(
                f"Truncation interval [{lo}, {hi}] has zero probability under {self.inner!r}"
            )

    def _inside(self, x: float) -> bool:
        return self._lo <= x <= self._hi

    def _log_density(self, x: float) -> float:
        if not self._inside(x):
            return -math.inf
        return self.inner._log_density(x) - math.log(self._cdf_hi - self._cdf_lo)

    def _cdf(self, x: float) -> float:
        if x < self._lo:
            return 0.0
        if x >= self._hi:
            return 1.0
        return (self.inner._cdf(x) - self._cdf_lo) / (self._cdf_hi - self._cdf_lo)

    def _ppf(self, p: float) -> float:
        q = self._cdf_lo + (self._cdf_hi - self._cdf_lo) * p
        return min(max(self.inner._ppf(q), self._lo), self._hi)

    def _draw(self) -> float:
        u = float(self.rng.uniform(self._cdf_lo, self._cdf_hi))
        if u <= 0.0:
            return self._lo
        if u >= 1.0:
            return self._hi
        return min(max(self.inner._ppf(u), self._lo), self._hi)

    def _lower(self) -> float:
        return self._lo

    def _upper(self) -> float:
        return self._hi

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.inner!r}, {self.lower_input!r}, {self.upper_input!r})"


class TruncatedReal(_Truncation):
    """
    Continuous distribution truncated to ``[lower, upper]``.

    ``log_density(x) = inner.calc_log_p(x) - log(1 - prob_out_of_bounds)``
    inside the interval and ``-inf`` outside, where
    ``prob_out_of_bounds = F(lower) + 1 - F(upper)``.

    Parameters
    ----------
    inner : UnivariateDistribution
        Continuous distribution to truncate.
    lower, upper : Hyperparameter, default -inf, inf
        Truncation limits, fixed or read from scalar tensors.
    param : Tensor or None, default None
        Bound parameter.
    rng : numpy.random.Generator or None, default None
        Random stream; defaults to ``inner.rng``.
    """

    inner_kind = Kind.REAL

    def _mean(self) -> float:
        """
        Mean by Simpson's rule over quantile space.

        ``E[X] = (1 / Z) * integral of F^-1(p) dp`` over
        ``[F(lower) + eps, F(upper) - eps]`` with ``Z = F(upper) - F(lower)``.
        """
        p = np.linspace(self._cdf_lo + EPS, self._cdf_hi - EPS, SIMPSON_INTERVALS + 1)
        x = self.inner._ppf_array(p)
        return float(_sp_integrate.simpson(x, x=p)) / (self._cdf_hi - self._cdf_lo)


class TruncatedInt(_Truncation):
    """
    Integer distribution truncated to ``{lower, ..., upper}``.

    Both limits are inclusive, so the renormalising mass is
    ``F(upper) - F(lower - 1)``.
    """

    inner_kind = Kind.INT

    def _mass_below(self, lo: float) -> float:
        return self.inner._cdf(math.ceil(lo) - 1)

    def refresh(self) -> None:
        super().refresh()
        if math.isfinite(self._lo):
            self._lo = float(math.ceil(self._lo))
        if math.isfinite(self._hi):
            self._hi = float(math.floor(self._hi))

    def _inside(self, x: float) -> bool:
        return float(x).is_integer() and super()._inside(x)

    def _cdf(self, x: float) -> float:
        return super()._cdf(math.floor(x) if math.isfinite(x) else x)

    def _mean(self) -> float:
        lo = self._lo if math.isfinite(self._lo) else self.inner._ppf(EPS)
        hi = self._hi if math.isfinite(self._hi) else self.inner._ppf(1.0 - EPS)
        lo, hi = max(lo, self._lo), min(hi, self._hi)
        count = int(hi - lo) + 1
        step = 1 + count // MAX_SUMMATION_TERMS
        support = np.arange(int(lo), int(hi) + 1, step, dtype=float)
        log_p = np.array([self._log_density(k) for k in support])
        return float(np.sum(support * np.exp(log_p)) * step)


def truncate(
    inner: UnivariateDistribution,
    lower: Hyperparameter = -math.inf,
    upper: Hyperparameter = math.inf,
    param: Tensor | None = None,
    *,
    rng: np.random.Generator | None = None,
) -> _Truncation:
    """Truncate ``inner``, picking the real or integer decorator by its kind."""
    if inner.kind is Kind.INT:
        return TruncatedInt(inner, lower, upper, param, rng=rng)
    return TruncatedReal(inner, lower, upper, param, rng=rng)


__all__ = ["TruncatedReal", "TruncatedInt", "truncate"]
