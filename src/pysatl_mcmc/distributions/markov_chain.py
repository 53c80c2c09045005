"""
Markov-chain prior over a positive real vector.

Each element is Gamma distributed with mean equal to the previous element
(or log-normal, with ``sigma = 1 / shape``). The first element carries a
Jeffreys ``1/x`` prior, a flat prior, or a Gamma prior around
``initial_mean``. Useful for smoothing population-size trajectories.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
import warnings
from typing import TYPE_CHECKING

from scipy import stats

from pysatl_mcmc.config import Configuration, configuration, constraint
from pysatl_mcmc.distributions.base import Distribution, resolve_hyperparameter
from pysatl_mcmc.exceptions import ConfigurationError, NotImplementedCharacteristic

if TYPE_CHECKING:
    from collections.abc import Sequence

    import numpy as np

    from pysatl_mcmc.distributions.base import Hyperparameter
    from pysatl_mcmc.state.tensor import Tensor
    from pysatl_mcmc.types import Number


@configuration(name="MarkovChain")
class MarkovChainConfig(Configuration):
    """
    Options of :class:`MarkovChainDistribution`.

    Parameters
    ----------
    shape : float, default 1.0
        Gamma shape (``1.0`` gives an exponential chain), or the log-normal
        precision when ``use_log_normal``.
    jeffreys : bool, default False
        Put a ``1/x`` prior on the first element.
    reverse : bool, default False
        Walk the vector from its last element.
    use_log : bool, default False
        Chain the logarithms of the values.
    use_log_normal : bool, default False
        Use a log-normal link instead of a Gamma.
    has_initial_mean : bool, default False
        Whether an initial mean anchors the first element.
    """

    shape: float = 1.0
    jeffreys: bool = False
    reverse: bool = False
    use_log: bool = False
    use_log_normal: bool = False
    has_initial_mean: bool = False

    @constraint(description="shape > 0")
    def check_shape_positive(self) -> bool:
        return self.shape > 0

    @constraint(description="jeffreys and initial_mean are mutually exclusive")
    def check_single_boundary_condition(self) -> bool:
        return not (self.jeffreys and self.has_initial_mean)


class MarkovChainDistribution(Distribution):
    """
    Gamma (or log-normal) Markov chain over a positive real vector.

    Parameters
    ----------
    param : Tensor
        Positive real vector.
    shape : float, default 1.0
        Gamma shape or log-normal precision.
    jeffreys : bool, default False
        Jeffreys prior on the first element.
    reverse : bool, default False
        Chain from the last element backwards.
    use_log : bool, default False
        Chain the logarithms of the values.
    initial_mean : Hyperparameter or None, default None
        Mean of the first element's prior.
    use_log_normal : bool, default False
        Log-normal link.
    rng : numpy.random.Generator or None, default None
        Random stream.

    Raises
    ------
    ConfigurationError
        If both ``jeffreys`` and ``initial_mean`` are given or ``shape`` is
        not positive.
    """

    def __init__(
        self,
        param: Tensor,
        *,
        shape: float = 1.0,
        jeffreys: bool = False,
        reverse: bool = False,
        use_log: bool = False,
        initial_mean: Hyperparameter | None = None,
        use_log_normal: bool = False,
        rng: np.random.Generator | None = None,
    ) -> None:
        super().__init__(param, rng=rng)
        self.config = MarkovChainConfig(
            shape=shape,
            jeffreys=jeffreys,
            reverse=reverse,
            use_log=use_log,
            use_log_normal=use_log_normal,
            has_initial_mean=initial_mean is not None,
        )
        self.config.validate()
        self.initial_mean = initial_mean
        self._warned = False

    def refresh(self) -> None:
        """Hyperparameters are read on every evaluation; nothing is cached."""

    def _index(self, i: int, size: int) -> int:
        return size - i - 1 if self.config.reverse else i

    def _chain_value(self, i: int, values: Sequence[float]) -> float:
        if i == -1:
            if self.initial_mean is None:
                raise ConfigurationError("Index -1 needs an initial mean")
            return resolve_hyperparameter(self.initial_mean, "initial_mean")
        value = float(values[self._index(i, len(values))])
        if not self.config.use_log:
            return value
        return math.log(value) if value > 0 else -math.inf

    def _link_log_density(self, x: float, mean: float) -> float:
        # A non-positive or infinite mean leaves no proper link density.
        if not (0 < mean < math.inf) or math.isnan(x):
            return -math.inf
        shape = self.config.shape
        if self.config.use_log_normal:
            sigma = 1.0 / shape
            m = math.log(mean) - 0.5 * sigma * sigma
            return float(stats.lognorm.logpdf(x, s=sigma, scale=math.exp(m)))
        return float(stats.gamma.logpdf(x, a=shape, scale=mean / shape))

    def calc_log_p(self, values: Sequence[float]) -> float:
        """
        Log-density of the chain at ``values``.

        A link with zero density makes the result ``-inf`` even when another
        term is ``+inf``. The Jeffreys term reads the untransformed first
        element, so it is ``+inf`` at zero.
        """
        log_p = 0.0
        first = 0 if self.initial_mean is not None else 1
        for i in range(first, len(values)):
            mean = self._chain_value(i - 1, values)
            x = self._chain_value(i, values)
            link = self._link_log_density(x, mean)
            if link == -math.inf:
                return -math.inf
            log_p += link
        if self.config.jeffreys:
            head = float(values[self._index(0, len(values))])
            log_p += math.inf if head <= 0 else -math.log(head)
        if log_p == math.inf and not self._warned:
            warnings.warn(
                f"Positive infinity calculated for MarkovChainDistribution over "
                f"{self.param.name if self.param is not None else 'values'}. "
                "The chain parameter may be escaping to very small values; "
                "consider a small positive lower bound on it.",
                RuntimeWarning,
                stacklevel=2,
            )
            self._warned = True
        return log_p

    def calculate_log_p(self) -> float:
        param = self._require_param()
        self.log_p = self.calc_log_p(param.get_elements().tolist())
        return self.log_p

    def sample(self) -> tuple[Number, ...]:
        """
        Draw a chain forward from ``initial_mean``.

        Raises
        ------
        NotImplementedCharacteristic
            Without an initial mean (the first element has an improper prior)
            or when chaining logarithms.
        """
        if self.initial_mean is None or self.config.use_log:
            raise NotImplementedCharacteristic("sample", "MarkovChainDistribution")
        size = self._require_param().size()
        shape = self.config.shape
        mean = resolve_hyperparameter(self.initial_mean, "initial_mean")
        chain: list[float] = []
        for _ in range(size):
            if self.config.use_log_normal:
                sigma = 1.0 / shape
                m = math.log(mean) - 0.5 * sigma * sigma
                mean = float(stats.lognorm.rvs(s=sigma, scale=math.exp(m), random_state=self.rng))
            else:
                mean = float(stats.gamma.rvs(a=shape, scale=mean / shape, random_state=self.rng))
            chain.append(mean)
        if self.config.reverse:
            chain.reverse()
        return tuple(chain)


__all__ = ["MarkovChainConfig", "MarkovChainDistribution"]
