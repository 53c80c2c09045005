"""
Distributions subpackage

Distribution algebra used to score tensors:

- traits and the scipy-backed base class (:mod:`.base`);
- built-in base distributions (:mod:`.builtins`);
- offset, truncation and IID decorators (:mod:`.composition`);
- the Gamma/log-normal Markov chain prior (:mod:`.markov_chain`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .base import (
    Distribution,
    Hyperparameter,
    LogDensity,
    Refreshable,
    Sampleable,
    ScalarDistribution,
    UnivariateDistribution,
    resolve_hyperparameter,
)
from .builtins import *
from .builtins import __all__ as _builtins_all
from .composition import *
from .composition import __all__ as _composition_all
from .markov_chain import MarkovChainConfig, MarkovChainDistribution

__all__ = [
    # traits and bases
    "Distribution",
    "Hyperparameter",
    "LogDensity",
    "Refreshable",
    "Sampleable",
    "ScalarDistribution",
    "UnivariateDistribution",
    "resolve_hyperparameter",
    # chain prior
    "MarkovChainConfig",
    "MarkovChainDistribution",
    *_builtins_all,
    *_composition_all,
]

del _builtins_all
del _composition_all
