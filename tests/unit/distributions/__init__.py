"""
PySATL MCMC
===========

Unit tests for the MCMC core: state, distributions and operators.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
