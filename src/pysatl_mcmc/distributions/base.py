"""
Distribution interfaces and the scipy-backed base distribution.

Distributions are built from three small traits:

- :class:`LogDensity` evaluates log-densities;
- :class:`Sampleable` draws values;
- :class:`Refreshable` re-derives cached state from current hyperparameters.

:class:`UnivariateDistribution` implements all three for one-dimensional
distributions and is the type decorators wrap. Public methods call
:meth:`~UnivariateDistribution.refresh` first; the protected ``_``-prefixed
hooks assume a refreshed instance.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Protocol, TypeAlias, runtime_checkable

import numpy as np

from pysatl_mcmc.exceptions import ConfigurationError, NotImplementedCharacteristic
from pysatl_mcmc.rng import make_rng
from pysatl_mcmc.state.domains import is_compatible
from pysatl_mcmc.state.tensor import Tensor
from pysatl_mcmc.types import EPS, Kind

if TYPE_CHECKING:
    from typing import Any

    from numpy.typing import NDArray

    from pysatl_mcmc.config import Configuration, ConfigurationFamily
    from pysatl_mcmc.state.domains import Domain
    from pysatl_mcmc.types import Number


Hyperparameter: TypeAlias = float | int | Tensor
"""A fixed number or a scalar tensor read at refresh time."""


def resolve_hyperparameter(value: Hyperparameter, name: str = "hyperparameter") -> float:
    """
    Current numeric value of a hyperparameter input.

    Raises
    ------
    ConfigurationError
        If a tensor input holds more than one value.
    """
    if isinstance(value, Tensor):
        if value.size() != 1:
            raise ConfigurationError(f"{name} must be a scalar tensor, got size {value.size()}")
        return float(value.get(0))
    return float(value)


@runtime_checkable
class LogDensity(Protocol):
    def calculate_log_p(self) -> float: ...

    def calc_log_p(self, x: Number) -> float: ...


@runtime_checkable
class Sampleable(Protocol):
    def sample(self) -> tuple[Number, ...]: ...


@runtime_checkable
class Refreshable(Protocol):
    def refresh(self) -> None: ...


class Distribution(ABC):
    """
    Common base of every distribution.

    Parameters
    ----------
    param : Tensor or None
        Tensor at which :meth:`calculate_log_p` evaluates the density.
    rng : numpy.random.Generator or None
        Random stream used by :meth:`sample`. When omitted, a fresh unseeded
        stream from :func:`~pysatl_mcmc.rng.make_rng` is used, so draws are not
        reproducible; pass the chain's shared generator instead.
    """

    kind: ClassVar[Kind] = Kind.REAL

    def __init__(self, param: Tensor | None = None, *, rng: np.random.Generator | None = None):
        self.rng = make_rng() if rng is None else rng
        self.param = param
        self.log_p = 0.0
        if param is not None:
            self._check_param(param)

    def _check_param(self, param: Tensor) -> None:
        if param.kind is not self.kind:
            raise ConfigurationError(
                f"{type(self).__name__} expects a {self.kind} parameter, got {param.kind}"
            )

    def _require_param(self) -> Tensor:
        if self.param is None:
            raise ConfigurationError(f"{type(self).__name__} has no bound parameter")
        return self.param

    @abstractmethod
    def refresh(self) -> None:
        """Bring cached internal state in line with current hyperparameters."""

    @abstractmethod
    def calculate_log_p(self) -> float:
        """Log-density of the bound parameter's current value."""

    @abstractmethod
    def sample(self) -> tuple[Number, ...]:
        """Draw one value per element of the bound shape."""


class UnivariateDistribution(Distribution):
    """
    One-dimensional distribution with density, CDF, quantiles and sampling.
    """

    # -- hooks -----------------------------------------------------------

    @abstractmethod
    def _log_density(self, x: float) -> float: ...

    @abstractmethod
    def _cdf(self, x: float) -> float: ...

    @abstractmethod
    def _ppf(self, p: float) -> float:
        """Quantile for ``0 < p < 1``."""

    def _ppf_array(self, p: NDArray[np.float64]) -> NDArray[np.float64]:
        """Vectorised quantiles for ``0 < p < 1``."""
        return np.array([self._ppf(float(q)) for q in p], dtype=float)

    @abstractmethod
    def _draw(self) -> float: ...

    @abstractmethod
    def _lower(self) -> float: ...

    @abstractmethod
    def _upper(self) -> float: ...

    def _mean(self) -> float:
        raise NotImplementedCharacteristic("mean", type(self).__name__)

    def _cast(self, value: float) -> Number:
        if not math.isfinite(value):
            return value
        if self.kind is Kind.INT:
            return int(round(value))
        if self.kind is Kind.BOOL:
            return bool(value)
        return float(value)

    # -- public surface --------------------------------------------------

    @property
    def domain(self) -> Domain | None:
        """Domain of the bound parameter, if any."""
        return None if self.param is None else self.param.domain

    def calculate_log_p(self) -> float:
        """
        Log-density of the bound scalar parameter.

        Returns
        -------
        float
            Log-density, ``-inf`` outside the support.

        Raises
        ------
        ConfigurationError
            If no parameter is bound or it holds more than one value.
        """
        param = self._require_param()
        if param.size() != 1:
            raise ConfigurationError(
                f"{type(self).__name__} is univariate; wrap it in IID for a vector parameter"
            )
        self.refresh()
        self.log_p = self._log_density(float(param.get(0)))
        return self.log_p

    def calc_log_p(self, x: Number) -> float:
        """Log-density at ``x``, ``-inf`` outside the support."""
        self.refresh()
        return self._log_density(float(x))

    def log_density(self, x: Number) -> float:
        return self.calc_log_p(x)

    def density(self, x: Number) -> float:
        return math.exp(self.calc_log_p(x))

    def cumulative_probability(self, x: Number) -> float:
        self.refresh()
        return self._cdf(float(x))

    def inverse_cumulative_probability(self, p: float) -> Number:
        """
        Quantile function.

        ``p <= 0`` maps to the lower bound and ``p >= 1`` to the upper bound.
        """
        self.refresh()
        if p <= 0.0:
            return self._cast(self._lower())
        if p >= 1.0:
            return self._cast(self._upper())
        return self._cast(self._ppf(p))

    def sample(self) -> tuple[Number, ...]:
        """Draw one value, returned as a one-element tuple."""
        self.refresh()
        return (self._cast(self._draw()),)

    def mean(self) -> float:
        """
        Mean of the distribution.

        Raises
        ------
        NotImplementedCharacteristic
            If no closed form or numerical scheme is available.
        """
        self.refresh()
        return self._mean()

    @property
    def lower(self) -> float:
        self.refresh()
        return self._lower()

    @property
    def upper(self) -> float:
        self.refresh()
        return self._upper()


class ScalarDistribution(UnivariateDistribution):
    """
    Base distribution wrapping a frozen :mod:`scipy.stats` distribution.

    Subclasses name their parametrization family and form, pass the
    hyperparameter inputs to ``__init__`` and build the frozen object from the
    base-form configuration in :meth:`_build`.

    The frozen object is rebuilt by :meth:`refresh` only when some
    hyperparameter moved by more than ``1e-12``.

    Parameters
    ----------
    param : Tensor or None
        Bound parameter.
    form : str
        Name of the parametrization the inputs follow.
    inputs : dict[str, Hyperparameter]
        Hyperparameter inputs keyed by parametrization field name.
    rng : numpy.random.Generator or None
        Random stream used by :meth:`sample`.
    """

    family: ClassVar[ConfigurationFamily]
    support_domain: ClassVar[Domain]

    def __init__(
        self,
        param: Tensor | None,
        *,
        form: str,
        inputs: dict[str, Hyperparameter],
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(param, rng=rng)
        self.family.get(form)
        self._form = form
        self._inputs = dict(inputs)
        self._cached_inputs: dict[str, float] | None = None
        self._config: Configuration | None = None
        self._frozen: Any = None

    def _check_param(self, param: Tensor) -> None:
        super()._check_param(param)
        if not is_compatible(param.domain, self.support_domain):
            raise ConfigurationError(
                f"{type(self).__name__} is defined on {self.support_domain.name}, "
                f"parameter has domain {param.domain.name}"
            )

    @property
    def form(self) -> str:
        return self._form

    @property
    def inputs(self) -> dict[str, Hyperparameter]:
        return dict(self._inputs)

    @property
    def configuration(self) -> Configuration:
        """Base-form configuration currently in use."""
        self.refresh()
        assert self._config is not None
        return self._config

    def _current_inputs(self) -> dict[str, float]:
        return {k: resolve_hyperparameter(v, k) for k, v in self._inputs.items()}

    def _unchanged(self, current: dict[str, float]) -> bool:
        cached = self._cached_inputs
        if cached is None:
            return False
        return all(abs(current[k] - cached[k]) <= EPS for k in current)

    def refresh(self) -> None:
        """
        Rebuild the frozen distribution if any hyperparameter changed.

        Raises
        ------
        ConfigurationError
            If the current hyperparameters violate a constraint.
        """
        current = self._current_inputs()
        if self._unchanged(current):
            return
        config = self.family.create(self._form, **current).transform_to_base()
        self._frozen = self._build(config)
        self._config = config
        self._cached_inputs = current

    @abstractmethod
    def _build(self, config: Configuration) -> Any:
        """Frozen :mod:`scipy.stats` distribution for a base-form configuration."""

    # -- scipy-backed hooks ----------------------------------------------

    def _log_density(self, x: float) -> float:
        if math.isnan(x):
            return -math.inf
        if self.kind is Kind.REAL:
            return float(self._frozen.logpdf(x))
        return float(self._frozen.logpmf(x))

    def _cdf(self, x: float) -> float:
        return float(self._frozen.cdf(x))

    def _ppf(self, p: float) -> float:
        return float(self._frozen.ppf(p))

    def _ppf_array(self, p: NDArray[np.float64]) -> NDArray[np.float64]:
        return np.asarray(self._frozen.ppf(p), dtype=float)

    def _draw(self) -> float:
        return float(self._frozen.rvs(random_state=self.rng))

    def _lower(self) -> float:
        return float(self._frozen.support()[0])

    def _upper(self) -> float:
        return float(self._frozen.support()[1])

    def _mean(self) -> float:
        mean = float(self._frozen.mean())
        if not math.isfinite(mean):
            raise NotImplementedCharacteristic("mean", type(self).__name__)
        return mean

    def variance(self) -> float:
        """
        Variance of the distribution.

        Raises
        ------
        NotImplementedCharacteristic
            If the variance is not finite.
        """
        self.refresh()
        var = float(self._frozen.var())
        if not math.isfinite(var):
            raise NotImplementedCharacteristic("variance", type(self).__name__)
        return var

    def __repr__(self) -> str:
        inputs = ", ".join(f"{k}={v!r}" for k, v in self._inputs.items())
        return f"{type(self).__name__}({inputs})"


__all__ = [
    "Hyperparameter",
    "resolve_hyperparameter",
    "LogDensity",
    "Sampleable",
    "Refreshable",
    "Distribution",
    "UnivariateDistribution",
    "ScalarDistribution",
]
