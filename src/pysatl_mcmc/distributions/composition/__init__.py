"""
Decorator distributions composing a base distribution by delegation.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .iid import DEFAULT_MAX_RETRIES, IID
from .offset import Offset
from .truncation import TruncatedInt, TruncatedReal, truncate

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "IID",
    "Offset",
    "TruncatedInt",
    "TruncatedReal",
    "truncate",
]
