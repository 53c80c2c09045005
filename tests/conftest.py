from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Generator
from typing import Any

import numpy as np
import pytest

from pysatl_mcmc.rng import make_rng
from pysatl_mcmc.state.domains import _reset_domain_register_for_tests

pytest.importorskip("scipy")


@pytest.fixture(autouse=True)
def _fresh_registries() -> Generator[None, Any, None]:
    _reset_domain_register_for_tests()
    yield


@pytest.fixture
def rng() -> np.random.Generator:
    return make_rng(20250101)
