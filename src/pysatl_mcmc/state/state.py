"""
Group of state nodes advanced and rolled back together.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

from pysatl_mcmc.exceptions import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from pysatl_mcmc.state.tensor import StateNode


class State:
    """
    Container of the nodes that make up one Markov chain state.

    A node joins at most one state. The state records which nodes were
    edited during the current proposal episode; :meth:`store` accepts the
    episode and :meth:`restore` rejects it.

    Parameters
    ----------
    nodes : Iterable[StateNode], default ()
        Initial members.
    """

    def __init__(self, nodes: Iterable[StateNode] = ()) -> None:
        self._nodes: list[StateNode] = []
        self._edited: dict[int, StateNode] = {}
        for node in nodes:
            self.add(node)

    def add(self, node: StateNode) -> None:
        """
        Attach ``node`` to this state.

        Raises
        ------
        ConfigurationError
            If the node already belongs to a state.
        """
        if node._state is not None:
            raise ConfigurationError(f"{node!r} already belongs to a state")
        node._state = self
        self._nodes.append(node)

    def start_editing(self, node: StateNode) -> None:
        self._edited[id(node)] = node

    @property
    def editing(self) -> bool:
        """Whether a proposal episode has mutated any node."""
        return bool(self._edited)

    @property
    def edited_nodes(self) -> list[StateNode]:
        return list(self._edited.values())

    def store(self) -> None:
        """Checkpoint every node and close the episode."""
        for node in self._nodes:
            node.store()
        self._edited.clear()

    def restore(self) -> None:
        """Roll every node back to the checkpoint and close the episode."""
        for node in self._nodes:
            node.restore()
        self._edited.clear()

    def set_everything_dirty(self, dirty: bool) -> None:
        for node in self._nodes:
            node.set_everything_dirty(dirty)

    def __iter__(self) -> Iterator[StateNode]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)


__all__ = ["State"]
