"""
Operators subpackage

Self-tuning Metropolis-Hastings proposals:

- shared bookkeeping and tuning (:mod:`.base`);
- step kernels (:mod:`.kernel`);
- scale, random-walk, delta-exchange, bounded and sample-off moves.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .base import *
from .base import __all__ as _base_all
from .delta_exchange import *
from .delta_exchange import __all__ as _delta_exchange_all
from .kernel import *
from .kernel import __all__ as _kernel_all
from .random_walk import *
from .random_walk import __all__ as _random_walk_all
from .sample_off import *
from .sample_off import __all__ as _sample_off_all
from .scale import *
from .scale import __all__ as _scale_all
from .uniform import *
from .uniform import __all__ as _uniform_all

__all__ = [
    *_base_all,
    *_delta_exchange_all,
    *_kernel_all,
    *_random_walk_all,
    *_sample_off_all,
    *_scale_all,
    *_uniform_all,
]

del _base_all
del _delta_exchange_all
del _kernel_all
del _random_walk_all
del _sample_off_all
del _scale_all
del _uniform_all
