__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .beta import Beta
from .cauchy import Cauchy
from .chi_square import ChiSquare
from .exponential import Exponential
from .gamma import Gamma, GammaMode, InverseGamma
from .laplace import Laplace
from .lognormal import LogNormal
from .normal import Normal
from .uniform import Uniform

__all__ = [
    "Beta",
    "Cauchy",
    "ChiSquare",
    "Exponential",
    "Gamma",
    "GammaMode",
    "InverseGamma",
    "Laplace",
    "LogNormal",
    "Normal",
    "Uniform",
]
