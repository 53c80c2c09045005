"""
State layer: domains, tensors and the checkpoint lifecycle.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .domains import *
from .domains import __all__ as _domains_all
from .state import *
from .state import __all__ as _state_all
from .tensor import *
from .tensor import __all__ as _tensor_all

__all__ = [
    *_domains_all,
    *_state_all,
    *_tensor_all,
]

del _domains_all
del _state_all
del _tensor_all
