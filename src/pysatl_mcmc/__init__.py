"""
PySATL MCMC
===========

Core of a Markov chain Monte Carlo engine: typed domains, checkpointed
tensors, a distribution algebra for scoring them and self-tuning
Metropolis-Hastings operators for proposing new states.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .config import *
from .config import __all__ as _config_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .exceptions import *
from .exceptions import __all__ as _exceptions_all
from .operators import *
from .operators import __all__ as _operators_all
from .rng import *
from .rng import __all__ as _rng_all
from .state import *
from .state import __all__ as _state_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-mcmc")
__all__ = [
    "__version__",
    *_config_all,
    *_distr_all,
    *_exceptions_all,
    *_operators_all,
    *_rng_all,
    *_state_all,
    *_types_all,
]

del _config_all
del _distr_all
del _exceptions_all
del _operators_all
del _rng_all
del _state_all
del _types_all
