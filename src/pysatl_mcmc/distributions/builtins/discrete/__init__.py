__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .bernoulli import Bernoulli
from .int_uniform import IntUniform
from .poisson import Poisson

__all__ = [
    "Bernoulli",
    "IntUniform",
    "Poisson",
]
