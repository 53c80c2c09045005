"""
Domain-constrained tensors with checkpoint and rollback.

A tensor holds one (scalar) or more (vector) primitive values of a single
:class:`~pysatl_mcmc.types.Kind`. Every write goes through :meth:`Tensor.set`,
which validates before mutating, so the values always stay inside the
tensor's domain and optional bounds.

Rollback is double-buffered: the tensor owns two arrays and a flag naming the
active one. :meth:`Tensor.restore` flips the flag, and the shadow buffer is
resynchronised lazily on the first edit that follows.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC, abstractmethod
from math import inf
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np

from pysatl_mcmc.exceptions import ConfigurationError, DomainViolation
from pysatl_mcmc.state.domains import DEFAULT_DOMAINS, NonNegativeInt, UnitInterval
from pysatl_mcmc.types import Interval1D, Kind

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from numpy.typing import NDArray

    from pysatl_mcmc.state.domains import Domain
    from pysatl_mcmc.state.state import State
    from pysatl_mcmc.types import ElementKey, Number


class StateNode(ABC):
    """
    Participant in the store/restore lifecycle of a :class:`State`.
    """

    _state: State | None = None

    def start_editing(self) -> None:
        """Notify the owning state that a proposal is mutating this node."""
        if self._state is not None:
            self._state.start_editing(self)

    @abstractmethod
    def store(self) -> None:
        """Checkpoint the current values."""

    @abstractmethod
    def restore(self) -> None:
        """Revert to the last checkpoint and clear dirty flags."""

    @abstractmethod
    def set_everything_dirty(self, dirty: bool) -> None: ...

    @property
    @abstractmethod
    def is_dirty(self) -> bool:
        """Whether any element changed since the last checkpoint."""


class Tensor(StateNode):
    """
    Mutable, domain-constrained container of primitive values.

    Parameters
    ----------
    values : Number or Sequence[Number]
        Initial values. A sequence shorter than ``dimension`` is repeated
        cyclically.
    domain : Domain or None, default None
        Value domain. Defaults to the widest domain of the tensor kind.
    dimension : int or None, default None
        Number of elements. Defaults to ``len(values)``.
    lower, upper : float or None, default None
        Optional bounds, intersected with the domain range.
    keys : Sequence[str] or None, default None
        Unique element names.
    name : str or None, default None
        Identifier used in diagnostics.

    Raises
    ------
    ConfigurationError
        If the domain kind does not match, the dimension is inconsistent
        with ``values`` or ``keys``, or the bounds are empty.
    DomainViolation
        If an initial value is not valid.
    """

    kind: ClassVar[Kind]

    def __init__(
        self,
        values: Number | Sequence[Number],
        *,
        domain: Domain | None = None,
        dimension: int | None = None,
        lower: float | None = None,
        upper: float | None = None,
        keys: Sequence[ElementKey] | None = None,
        name: str | None = None,
    ) -> None:
        domain = DEFAULT_DOMAINS[self.kind] if domain is None else domain
        if domain.kind is not self.kind:
            raise ConfigurationError(
                f"{type(self).__name__} needs a {self.kind} domain, got {domain.name}"
            )
        self.domain = domain
        self.name = name or type(self).__name__

        initial = np.atleast_1d(np.asarray(values)).ravel()
        if initial.size == 0:
            raise ConfigurationError(f"{self.name}: at least one initial value is required")
        if dimension is None:
            dimension = initial.size
        if dimension < 1:
            raise ConfigurationError(f"{self.name}: dimension must be positive, got {dimension}")
        if initial.size > dimension:
            raise ConfigurationError(
                f"{self.name}: {initial.size} values given for dimension {dimension}"
            )

        self._bounds = domain.interval.intersect(
            Interval1D(
                -inf if lower is None else float(lower),
                inf if upper is None else float(upper),
            )
        )
        if self.kind is not Kind.BOOL and self._bounds.is_empty:
            raise ConfigurationError(f"{self.name}: bounds [{lower}, {upper}] are empty")

        for index, value in enumerate(initial.tolist()):
            if not self.is_valid(value):
                raise DomainViolation(value, self._range_name, index)

        # np.resize repeats the input cyclically
        active = np.resize(initial, dimension).astype(self.kind.dtype)
        self._buffers = [active, active.copy()]
        self._active = 0
        self._shadow_synced = True
        self._edited = False
        self._dirty = np.zeros(dimension, dtype=bool)
        self._last_dirty = -1

        if keys is not None:
            keys = [str(k) for k in keys]
            if len(keys) != dimension:
                raise ConfigurationError(
                    f"{self.name}: {len(keys)} keys given for dimension {dimension}"
                )
            if len(set(keys)) != len(keys):
                raise ConfigurationError(f"{self.name}: keys must be unique")
        self._keys: list[str] | None = keys

    # -- storage ---------------------------------------------------------

    @property
    def _values(self) -> NDArray[np.generic]:
        return self._buffers[self._active]

    @property
    def _stored(self) -> NDArray[np.generic]:
        return self._buffers[1 - self._active]

    def _prepare_edit(self) -> None:
        if not self._shadow_synced:
            np.copyto(self._stored, self._values)
            self._shadow_synced = True
        self._edited = True

    def _mark_dirty(self, index: int) -> None:
        self._dirty[index] = True
        self._last_dirty = index

    # -- validation ------------------------------------------------------

    @property
    def _range_name(self) -> str:
        if self._bounds == self.domain.interval or self.kind is Kind.BOOL:
            return self.domain.name
        return f"{self.domain.name} restricted to [{self.lower}, {self.upper}]"

    @property
    def lower(self) -> float:
        """Effective lower bound (domain intersected with parameter bounds)."""
        return self._bounds.left

    @property
    def upper(self) -> float:
        """Effective upper bound (domain intersected with parameter bounds)."""
        return self._bounds.right

    @property
    def bounds(self) -> Interval1D:
        return self._bounds

    def is_valid(self, value: Number) -> bool:
        """
        Check ``value`` against the domain and the parameter bounds.

        Parameters
        ----------
        value : Number
            Candidate value.

        Returns
        -------
        bool
            ``True`` if the value may be written to any element.
        """
        if not self.domain.is_valid(value):
            return False
        if self.kind is Kind.BOOL:
            return True
        return float(value) in self._bounds

    def is_valid_at(self, index: int, value: Number) -> bool:
        """Check ``value`` for element ``index``."""
        return self.is_valid(value)

    # -- access ----------------------------------------------------------

    def size(self) -> int:
        return int(self._values.size)

    def __len__(self) -> int:
        return self.size()

    def get(self, index: int) -> Number:
        """Current value of element ``index`` as a Python scalar."""
        return self._values[index].item()

    def __getitem__(self, index: int) -> Number:
        return self.get(index)

    def __iter__(self) -> Iterator[Number]:
        return iter(self._values.tolist())

    def get_elements(self) -> NDArray[np.generic]:
        """
        Ordered snapshot of the current values.

        Returns
        -------
        NDArray
            Read-only copy of the values.
        """
        snapshot = self._values.copy()
        snapshot.setflags(write=False)
        return snapshot

    def get_stored(self, index: int) -> Number:
        """Value of element ``index`` at the last checkpoint."""
        if self._shadow_synced:
            return self._stored[index].item()
        return self._values[index].item()

    def key(self, index: int) -> ElementKey:
        """
        Name of element ``index``.

        Without explicit keys a scalar's element is ``"0"`` and vector
        elements are numbered from ``"1"``.
        """
        if self._keys is not None:
            return self._keys[index]
        return "0" if self.size() == 1 else str(index + 1)

    @property
    def keys(self) -> list[ElementKey]:
        return [self.key(i) for i in range(self.size())]

    def index_of_key(self, key: ElementKey) -> int:
        """
        Position of the element named ``key``.

        Raises
        ------
        KeyError
            If no element has that name.
        """
        keys = self.keys
        if key not in keys:
            raise KeyError(f"{self.name} has no element {key!r}")
        return keys.index(key)

    # -- mutation --------------------------------------------------------

    def set(self, index: int, value: Number) -> None:
        """
        Write ``value`` to element ``index``.

        Parameters
        ----------
        index : int
            Element position.
        value : Number
            New value.

        Raises
        ------
        DomainViolation
            If ``value`` is not valid. The tensor is left unchanged.
        """
        self.start_editing()
        if not self.is_valid(value):
            raise DomainViolation(value, self._range_name, index)
        self._prepare_edit()
        self._values[index] = value
        self._mark_dirty(index)

    def set_all(self, values: Sequence[Number]) -> None:
        """
        Write every element at once.

        Raises
        ------
        ConfigurationError
            If the number of values does not match the dimension.
        DomainViolation
            If any value is not valid. No element is written.
        """
        new = np.asarray(values).ravel()
        if new.size != self.size():
            raise ConfigurationError(
                f"{self.name}: expected {self.size()} values, got {new.size}"
            )
        self.start_editing()
        for index, value in enumerate(new.tolist()):
            if not self.is_valid(value):
                raise DomainViolation(value, self._range_name, index)
        self._prepare_edit()
        for index, value in enumerate(new.tolist()):
            if self._values[index] != value:
                self._values[index] = value
                self._mark_dirty(index)

    def swap(self, i: int, j: int) -> None:
        """Exchange elements ``i`` and ``j`` and mark both dirty."""
        self.start_editing()
        self._prepare_edit()
        values = self._values
        values[i], values[j] = values[j], values[i]
        self._mark_dirty(i)
        self._mark_dirty(j)

    # -- lifecycle -------------------------------------------------------

    def store(self) -> None:
        np.copyto(self._stored, self._values)
        self._shadow_synced = True
        self._edited = False

    def restore(self) -> None:
        if self._edited:
            self._active = 1 - self._active
            self._shadow_synced = False
            self._edited = False
        self.set_everything_dirty(False)

    def set_everything_dirty(self, dirty: bool) -> None:
        self._dirty[:] = dirty
        if not dirty:
            self._last_dirty = -1

    @property
    def is_dirty(self) -> bool:
        return bool(self._dirty.any())

    def is_element_dirty(self, index: int) -> bool:
        return bool(self._dirty[index])

    @property
    def last_dirty(self) -> int:
        """Index of the most recently written element, ``-1`` if none."""
        return self._last_dirty

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name}={self._values.tolist()!r}, {self.domain.name})"


class RealTensor(Tensor):
    kind = Kind.REAL

    def scale(self, factor: float) -> int:
        """
        Multiply every nonzero element by ``factor``.

        Parameters
        ----------
        factor : float
            Multiplicative factor.

        Returns
        -------
        int
            Number of elements scaled.

        Raises
        ------
        DomainViolation
            If any scaled value is not valid. No element is written.
        """
        self.start_editing()
        values = self._values
        nonzero = np.flatnonzero(values != 0.0)
        scaled = values[nonzero] * factor
        for index, value in zip(nonzero.tolist(), scaled.tolist(), strict=True):
            if not self.is_valid(value):
                raise DomainViolation(value, self._range_name, index)
        self._prepare_edit()
        self._values[nonzero] = scaled
        for index in nonzero.tolist():
            self._mark_dirty(index)
        return int(nonzero.size)


class IntTensor(Tensor):
    kind = Kind.INT


class BoolTensor(Tensor):
    kind = Kind.BOOL


class _ScalarTensor(Tensor):
    """Tensor holding exactly one value."""

    def __init__(self, value: Number, **kwargs: Any) -> None:
        super().__init__(value, dimension=1, **kwargs)

    @property
    def value(self) -> Number:
        return self.get(0)

    def set_value(self, value: Number) -> None:
        self.set(0, value)


class RealScalar(_ScalarTensor, RealTensor):
    def __init__(self, value: float = 0.0, **kwargs: Any) -> None:
        super().__init__(value, **kwargs)


class IntScalar(_ScalarTensor, IntTensor):
    def __init__(self, value: int = 0, **kwargs: Any) -> None:
        super().__init__(value, **kwargs)


class BoolScalar(_ScalarTensor, BoolTensor):
    def __init__(self, value: bool = False, **kwargs: Any) -> None:
        super().__init__(value, **kwargs)


class RealVector(RealTensor):
    pass


class IntVector(IntTensor):
    pass


class BoolVector(BoolTensor):
    pass


SIMPLEX_TOLERANCE = 1e-10
"""Largest deviation of a simplex sum from its expected total."""


class _SimplexTensor(Tensor):
    """Vector whose elements must add up to :attr:`expected_sum`."""

    def _check_simplex_domain(self, domain: Domain | None, base: Domain) -> Domain:
        if domain is None:
            return base
        if not domain.is_subdomain_of(base):
            raise ConfigurationError(
                f"{type(self).__name__} needs a domain refining {base.name}, got {domain.name}"
            )
        return domain

    @property
    @abstractmethod
    def expected_sum(self) -> float:
        """Total the elements must add up to."""

    def sum(self) -> float:
        return float(self._values.sum())

    def is_valid_simplex(self) -> bool:
        """Whether every element is valid and the elements add up to the expected sum."""
        if not self.domain.is_valid_all(self._values):
            return False
        return abs(self.sum() - self.expected_sum) <= SIMPLEX_TOLERANCE

    def _check_sum(self) -> None:
        if abs(self.sum() - self.expected_sum) > SIMPLEX_TOLERANCE:
            raise ConfigurationError(
                f"{self.name}: values sum to {self.sum()}, expected {self.expected_sum}"
            )


class SimplexVector(_SimplexTensor, RealVector):
    """
    Probability vector: elements in ``[0, 1]`` adding up to one.

    Element writes are checked against the unit interval only; moves that
    keep the total, such as delta exchange, keep the vector a simplex.

    Raises
    ------
    ConfigurationError
        If ``domain`` does not refine :data:`UnitInterval` or the initial
        values do not sum to one.
    """

    def __init__(
        self, values: Sequence[float], *, domain: Domain | None = None, **kwargs: Any
    ) -> None:
        domain = self._check_simplex_domain(domain, UnitInterval)
        super().__init__(values, domain=domain, **kwargs)
        self._check_sum()

    @property
    def expected_sum(self) -> float:
        return 1.0


class IntSimplexVector(_SimplexTensor, IntVector):
    """
    Non-negative integer vector adding up to a fixed total.

    Parameters
    ----------
    values : Sequence[int]
        Initial counts.
    expected_sum : int or None, default None
        Required total. Defaults to the dimension.
    domain : Domain or None, default None
        Refinement of :data:`NonNegativeInt`.

    Raises
    ------
    ConfigurationError
        If ``domain`` does not refine :data:`NonNegativeInt` or the initial
        values do not add up to ``expected_sum``.
    """

    def __init__(
        self,
        values: Sequence[int],
        *,
        expected_sum: int | None = None,
        domain: Domain | None = None,
        **kwargs: Any,
    ) -> None:
        domain = self._check_simplex_domain(domain, NonNegativeInt)
        super().__init__(values, domain=domain, **kwargs)
        self._expected_sum = self.size() if expected_sum is None else int(expected_sum)
        self._check_sum()

    @property
    def expected_sum(self) -> float:
        return float(self._expected_sum)


class _CompoundScalar:
    """
    Several scalar tensors presented as one vector.

    Element ``i`` is the value of ``parts[i]``; each element keeps the domain
    and bounds of its own part.

    Parameters
    ----------
    parts : Sequence[RealScalar] or Sequence[IntScalar]
        Scalars to combine. Must be non-empty, distinct and of
        :attr:`part_type`.
    """

    part_type: ClassVar[type[Tensor]]

    def __init__(self, parts: Sequence[Any]) -> None:
        label = type(self).__name__
        if not parts:
            raise ConfigurationError(f"{label} needs at least one part")
        if not all(isinstance(p, self.part_type) for p in parts):
            raise ConfigurationError(f"{label} parts must be {self.part_type.__name__} tensors")
        if len({id(p) for p in parts}) != len(parts):
            raise ConfigurationError(f"{label} parts must be distinct")
        self.parts = list(parts)
        self.name = "+".join(p.name for p in self.parts)

    def size(self) -> int:
        return len(self.parts)

    def __len__(self) -> int:
        return self.size()

    def set(self, index: int, value: Number) -> None:
        self.parts[index].set_value(value)

    def is_valid_at(self, index: int, value: Number) -> bool:
        return bool(self.parts[index].is_valid(value))

    def get_elements(self) -> NDArray[np.generic]:
        snapshot = np.array([p.value for p in self.parts], dtype=self.part_type.kind.dtype)
        snapshot.setflags(write=False)
        return snapshot

    def key(self, index: int) -> ElementKey:
        return str(self.parts[index].name)


class CompoundRealScalar(_CompoundScalar):
    """Several :class:`RealScalar` tensors presented as one real vector."""

    part_type = RealScalar

    def get(self, index: int) -> float:
        return float(self.parts[index].value)


class CompoundIntScalar(_CompoundScalar):
    """Several :class:`IntScalar` tensors presented as one integer vector."""

    part_type = IntScalar

    def get(self, index: int) -> int:
        return int(self.parts[index].value)


__all__ = [
    "StateNode",
    "Tensor",
    "RealTensor",
    "IntTensor",
    "BoolTensor",
    "RealScalar",
    "IntScalar",
    "BoolScalar",
    "RealVector",
    "IntVector",
    "BoolVector",
    "SIMPLEX_TOLERANCE",
    "SimplexVector",
    "IntSimplexVector",
    "CompoundRealScalar",
    "CompoundIntScalar",
]
