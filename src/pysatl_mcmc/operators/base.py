"""
Operator base classes
=====================

An operator proposes a new state by mutating tensors and returns the log
Hastings ratio of the move. The scheduler then records the outcome with
:meth:`Operator.accept` or :meth:`Operator.reject` and calls
:meth:`Operator.optimize` with the realised log acceptance ratio, which
nudges the operator's coercible parameter towards the target acceptance
probability.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
from abc import ABC, abstractmethod
from enum import StrEnum
from typing import TYPE_CHECKING, ClassVar

from pysatl_mcmc.config import Configuration, configuration, constraint
from pysatl_mcmc.exceptions import ConfigurationError, DomainViolation
from pysatl_mcmc.operators.kernel import BactrianKernel
from pysatl_mcmc.rng import make_rng

if TYPE_CHECKING:
    from typing import Any

    import numpy as np

    from pysatl_mcmc.operators.kernel import KernelDistribution

logger = logging.getLogger(__name__)

TARGET_ACCEPTANCE_PROBABILITY = 0.3


class OptimisationTransform(StrEnum):
    """
    Damping applied to the proposal count in :meth:`Operator.calc_delta`.

    Attributes
    ----------
    NONE : str
        ``1 / n``.
    SQRT : str
        ``1 / sqrt(n)``.
    LOG : str
        ``1 / log(n + 1)``.
    """

    NONE = "none"
    SQRT = "sqrt"
    LOG = "log"


@configuration(name="Operator")
class OperatorConfig(Configuration):
    """
    Options shared by every operator.

    Parameters
    ----------
    weight : float, default 1.0
        Relative selection weight for the scheduler.
    target_acceptance : float, default 0.3
        Acceptance probability the auto-optimisation aims for.
    optimise : bool, default True
        Whether :meth:`Operator.optimize` retunes the coercible parameter.
    transform : OptimisationTransform, default "sqrt"
        Damping of the tuning step.
    """

    weight: float = 1.0
    target_acceptance: float = TARGET_ACCEPTANCE_PROBABILITY
    optimise: bool = True
    transform: OptimisationTransform = OptimisationTransform.SQRT

    @constraint(description="weight >= 0")
    def check_weight_non_negative(self) -> bool:
        return self.weight >= 0

    @constraint(description="0 < target_acceptance < 1")
    def check_target_in_unit_interval(self) -> bool:
        return 0.0 < self.target_acceptance < 1.0


class Operator(ABC):
    """
    Proposal generator with self-tuning.

    Parameters
    ----------
    config : OperatorConfig or None, default None
        Complete configuration. Mutually exclusive with ``options``.
    rng : numpy.random.Generator or None, default None
        Random stream. When omitted, a fresh unseeded stream from
        :func:`~pysatl_mcmc.rng.make_rng` is used, so proposals are not
        reproducible; pass the chain's shared generator instead.
    **options
        Fields of :attr:`config_type`, used when ``config`` is not given.

    Raises
    ------
    ConfigurationError
        If both ``config`` and ``options`` are given, an option is unknown,
        or a constraint fails.
    """

    config_type: ClassVar[type[OperatorConfig]] = OperatorConfig
    parameter_label: ClassVar[str] = "parameter"
    """Human-readable name of the coercible parameter."""

    def __init__(
        self,
        config: OperatorConfig | None = None,
        *,
        rng: np.random.Generator | None = None,
        name: str | None = None,
        **options: Any,
    ) -> None:
        if config is not None and options:
            raise ConfigurationError("Pass either a config object or keyword options, not both")
        if config is None:
            try:
                config = self.config_type(**options)
            except TypeError as e:
                raise ConfigurationError(f"{type(self).__name__}: {e}") from e
        elif not isinstance(config, self.config_type):
            raise ConfigurationError(
                f"{type(self).__name__} needs a {self.config_type.__name__}, "
                f"got {type(config).__name__}"
            )
        config.validate()
        self.config = config
        self.rng = make_rng() if rng is None else rng
        self.name = name or type(self).__name__
        self._accepted = 0
        self._rejected = 0

    # -- proposal --------------------------------------------------------

    def proposal(self) -> float:
        """
        Mutate the target tensors.

        Returns
        -------
        float
            Log Hastings ratio, ``-inf`` when the move must be rejected.
        """
        try:
            return self._propose()
        except DomainViolation as e:
            logger.debug("%s proposed an invalid value: %s", self.name, e)
            return -math.inf

    @abstractmethod
    def _propose(self) -> float:
        """Proposal body. A :class:`DomainViolation` counts as a rejection."""

    # -- bookkeeping -----------------------------------------------------

    def accept(self) -> None:
        self._accepted += 1

    def reject(self) -> None:
        self._rejected += 1

    @property
    def accepted(self) -> int:
        return self._accepted

    @property
    def rejected(self) -> int:
        return self._rejected

    @property
    def acceptance_probability(self) -> float:
        """Observed acceptance rate, NaN before the first outcome."""
        total = self._accepted + self._rejected
        return self._accepted / total if total else math.nan

    @property
    def target_acceptance(self) -> float:
        return self.config.target_acceptance

    @property
    def weight(self) -> float:
        return self.config.weight

    # -- tuning ----------------------------------------------------------

    @property
    def coercable_parameter(self) -> float | None:
        """Tunable parameter, ``None`` for operators without one."""
        return None

    @coercable_parameter.setter
    def coercable_parameter(self, value: float) -> None:
        raise AttributeError(f"{self.name} has no coercible parameter")

    def calc_delta(self, log_alpha: float) -> float:
        """
        Tuning step in log space.

        Parameters
        ----------
        log_alpha : float
            Log acceptance ratio of the last proposal.

        Returns
        -------
        float
            ``(min(1, exp(log_alpha)) - target) / f(n)`` where ``n`` is the
            number of outcomes so far plus one and ``f`` the configured
            transform; 0 if that is not finite.
        """
        count = self._accepted + self._rejected + 1.0
        match self.config.transform:
            case OptimisationTransform.SQRT:
                count = math.sqrt(count)
            case OptimisationTransform.LOG:
                count = math.log(count + 1.0)
            case OptimisationTransform.NONE:
                pass
        delta_p = (math.exp(min(log_alpha, 0.0)) - self.target_acceptance) / count
        if not math.isfinite(delta_p):
            return 0.0
        return delta_p

    def optimize(self, log_alpha: float) -> None:
        """
        Retune the coercible parameter after a proposal.

        ``new = exp(calc_delta(log_alpha) + log(old))``. Called after every
        proposal, accepted or not.
        """
        current = self.coercable_parameter
        if not self.config.optimise or current is None:
            return
        self.coercable_parameter = math.exp(self.calc_delta(log_alpha) + math.log(current))
        logger.debug(
            "%s: %s %.6g -> %.6g", self.name, self.parameter_label, current, self.coercable_parameter
        )

    def performance_suggestion(self) -> str:
        """
        Advice on the coercible parameter after a run.

        Returns
        -------
        str
            ``"Try setting <parameter> to about <value>"`` when the observed
            acceptance rate is below 0.10 or above 0.40, otherwise ``""``.
        """
        value = self.coercable_parameter
        prob = self.acceptance_probability
        if value is None or math.isnan(prob):
            return ""
        ratio = min(max(prob / self.target_acceptance, 0.5), 2.0)
        if prob < 0.10 or prob > 0.40:
            return f"Try setting {self.parameter_label} to about {_format_suggestion(value * ratio)}"
        return ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, {self.config!r})"


def _format_suggestion(value: float) -> str:
    # at most three decimals, no trailing zeros
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


class KernelOperator(Operator):
    """
    Operator drawing its steps from a :class:`KernelDistribution`.

    Parameters
    ----------
    kernel : KernelDistribution or None, default None
        Step source. Defaults to a :class:`BactrianKernel` on the operator's
        random stream.
    """

    def __init__(
        self,
        config: OperatorConfig | None = None,
        *,
        kernel: KernelDistribution | None = None,
        rng: np.random.Generator | None = None,
        name: str | None = None,
        **options: Any,
    ) -> None:
        super().__init__(config, rng=rng, name=name, **options)
        self.kernel: KernelDistribution = BactrianKernel(self.rng) if kernel is None else kernel


__all__ = [
    "TARGET_ACCEPTANCE_PROBABILITY",
    "OptimisationTransform",
    "OperatorConfig",
    "Operator",
    "KernelOperator",
]
