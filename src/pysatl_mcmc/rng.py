"""
Seeding point for the random stream shared by kernels, operators and
distributions.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import numpy as np


def make_rng(seed: int | np.random.SeedSequence | None = None) -> np.random.Generator:
    """
    Create the generator threaded through every random component of a chain.

    Parameters
    ----------
    seed : int, SeedSequence or None, default None
        Seed. Two chains built from the same seed and the same component
        schedule produce identical draws.

    Returns
    -------
    numpy.random.Generator
        PCG64-backed generator.
    """
    return np.random.default_rng(seed)


__all__ = ["make_rng"]
