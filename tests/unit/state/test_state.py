from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_mcmc.exceptions import ConfigurationError
from pysatl_mcmc.state import IntScalar, RealVector, State


class TestState:
    def test_tracks_edited_nodes(self) -> None:
        x = RealVector([1.0, 2.0], name="x")
        k = IntScalar(3, name="k")
        state = State([x, k])
        assert not state.editing
        x.set(0, 4.0)
        assert state.editing
        assert state.edited_nodes == [x]

    def test_restore_reverts_every_node(self) -> None:
        x = RealVector([1.0, 2.0])
        k = IntScalar(3)
        state = State([x, k])
        state.store()
        x.set(1, 9.0)
        k.set_value(7)
        state.restore()
        assert list(x) == [1.0, 2.0]
        assert k.value == 3
        assert not state.editing

    def test_store_closes_episode(self) -> None:
        x = RealVector([1.0])
        state = State([x])
        x.set(0, 2.0)
        state.store()
        assert not state.editing
        state.restore()
        assert list(x) == [2.0]

    def test_node_joins_one_state(self) -> None:
        x = RealVector([1.0])
        State([x])
        with pytest.raises(ConfigurationError, match="already"):
            State([x])

    def test_set_everything_dirty(self) -> None:
        x = RealVector([1.0, 2.0])
        state = State([x])
        state.set_everything_dirty(True)
        assert x.is_element_dirty(0) and x.is_element_dirty(1)
        state.set_everything_dirty(False)
        assert not x.is_dirty
        assert len(state) == 1
