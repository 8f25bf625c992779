"""
Container adapters

A read-only view of a numeric container: its shape and random access to its
elements. The comparator only talks to ContainerAdapter, so a new container type
is supported by adding an adapter (and optionally registering it), not by touching
the comparator.

Built-in adapters:
    SequenceAdapter        list, tuple, array.array, range, ...  -> Flat
    NestedSequenceAdapter  sequence of equal-length sequences    -> Grid
    NdarrayAdapter         numpy.ndarray with ndim 1 or 2         -> Flat / Grid
    ArrayLikeAdapter       objects with .shape and __getitem__    -> Flat / Grid
    ColumnMajorAdapter     flat column-major storage + dims       -> Grid
"""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, Optional

import numpy as np

from numtest.core.errors import UnsupportedContainerError

from .types import Flat, Grid, Position, Shape

AdapterFactory = Callable[[Any], "ContainerAdapter"]


class ContainerAdapter:
    """Base class: uniform read-only view of a flat or grid container."""

    def shape(self) -> Shape:
        """Flat(length) or Grid(rows, cols)"""
        raise NotImplementedError

    def element_at(self, position: Position):
        """Element at a flat index or a (row, col) pair"""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.shape()})"


def _is_sequence(obj) -> bool:
    if isinstance(obj, (str, bytes, bytearray, memoryview, Mapping)):
        return False
    if isinstance(obj, Sequence):
        return True
    # array.array and similar types that are not registered as Sequence
    return hasattr(obj, "__len__") and hasattr(obj, "__getitem__") and not hasattr(obj, "keys")


class SequenceAdapter(ContainerAdapter):
    """Fixed or growable one-dimensional sequence."""

    def __init__(self, data):
        if not _is_sequence(data):
            raise UnsupportedContainerError(
                f"{type(data).__name__} is not a sequence"
            )
        self._data = data

    def shape(self) -> Flat:
        return Flat(len(self._data))

    def element_at(self, position: int):
        return self._data[position]


class NestedSequenceAdapter(ContainerAdapter):
    """Sequence of rows, each a sequence of the same length."""

    def __init__(self, rows):
        if not _is_sequence(rows):
            raise UnsupportedContainerError(f"{type(rows).__name__} is not a sequence")
        widths = set()
        for i, row in enumerate(rows):
            if not _is_sequence(row):
                raise UnsupportedContainerError(
                    f"Row {i} is {type(row).__name__}, expected a sequence"
                )
            widths.add(len(row))
        if len(widths) > 1:
            raise UnsupportedContainerError(
                f"Ragged rows: lengths {sorted(widths)}"
            )
        self._rows = rows
        self._cols = widths.pop() if widths else 0

    def shape(self) -> Grid:
        return Grid(len(self._rows), self._cols)

    def element_at(self, position):
        row, col = position
        return self._rows[row][col]


class NdarrayAdapter(ContainerAdapter):
    """
    numpy array with 1 or 2 dimensions

    Elements are read by logical index, so the memory order (C or Fortran) of the
    array does not matter.
    """

    def __init__(self, array: np.ndarray):
        if not isinstance(array, np.ndarray):
            raise UnsupportedContainerError(f"{type(array).__name__} is not a numpy array")
        if array.ndim not in (1, 2):
            raise UnsupportedContainerError(
                f"Only 1-D and 2-D arrays are supported, got ndim={array.ndim} shape={array.shape}"
            )
        self._array = array

    def shape(self) -> Shape:
        if self._array.ndim == 1:
            return Flat(self._array.shape[0])
        return Grid(*self._array.shape)

    def element_at(self, position: Position):
        return self._array[position]


class ArrayLikeAdapter(ContainerAdapter):
    """
    Third-party 1-D/2-D numeric type

    Needs a ``shape`` tuple of length 1 or 2 and ``__getitem__`` taking an int or a
    (row, col) tuple. Elements with an ``item()`` method (torch tensors, numpy
    0-d arrays) are unwrapped to Python numbers.

    Keys are positions, not labels: label-indexed types such as a pandas
    ``Series`` need a registered adapter (e.g. wrapping ``.to_numpy()``).
    """

    def __init__(self, obj):
        dims = getattr(obj, "shape", None)
        try:
            dims = tuple(int(d) for d in dims)
        except TypeError as exc:
            raise UnsupportedContainerError(
                f"{type(obj).__name__} has no usable shape: {dims!r}"
            ) from exc
        if len(dims) not in (1, 2):
            raise UnsupportedContainerError(
                f"Only 1-D and 2-D shapes are supported, got {dims}"
            )
        if not hasattr(obj, "__getitem__"):
            raise UnsupportedContainerError(f"{type(obj).__name__} does not support indexing")
        self._obj = obj
        self._dims = dims

    def shape(self) -> Shape:
        if len(self._dims) == 1:
            return Flat(self._dims[0])
        return Grid(*self._dims)

    def element_at(self, position: Position):
        try:
            value = self._obj[position]
        except (KeyError, IndexError) as exc:
            raise UnsupportedContainerError(
                f"{type(self._obj).__name__} cannot be indexed by position {position!r}"
            ) from exc
        item = getattr(value, "item", None)
        return item() if callable(item) else value


class ColumnMajorAdapter(ContainerAdapter):
    """
    Matrix stored column by column in a flat buffer

    ``element_at((row, col))`` reads ``data[col * rows + row]``, so the grid is
    still traversed row-major and compares directly against row-major containers.
    """

    def __init__(self, data, rows: int, cols: int):
        if not _is_sequence(data) and not isinstance(data, np.ndarray):
            raise UnsupportedContainerError(f"{type(data).__name__} is not a flat buffer")
        if rows < 0 or cols < 0:
            raise UnsupportedContainerError(f"Invalid dimensions {rows}x{cols}")
        if len(data) != rows * cols:
            raise UnsupportedContainerError(
                f"Buffer holds {len(data)} elements, {rows}x{cols} needs {rows * cols}"
            )
        self._data = data
        self._rows = rows
        self._cols = cols

    def shape(self) -> Grid:
        return Grid(self._rows, self._cols)

    def element_at(self, position):
        row, col = position
        return self._data[col * self._rows + row]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_registry_lock = threading.Lock()
_registry: Dict[type, AdapterFactory] = {}


def register_adapter(cls: type, factory: AdapterFactory) -> None:
    """
    Register an adapter factory for a container type

    The factory is also used for subclasses of ``cls`` unless they have their own
    registration.

    Example:
        register_adapter(Vector3, lambda v: SequenceAdapter((v.x, v.y, v.z)))
    """
    if not isinstance(cls, type):
        raise TypeError(f"Expected a type, got {cls!r}")
    with _registry_lock:
        _registry[cls] = factory


def unregister_adapter(cls: type) -> None:
    """Remove a registration (no-op if ``cls`` is not registered)"""
    with _registry_lock:
        _registry.pop(cls, None)


def _lookup(cls: type) -> Optional[AdapterFactory]:
    with _registry_lock:
        for base in cls.__mro__:
            if base in _registry:
                return _registry[base]
    return None


def _looks_nested(obj) -> bool:
    return len(obj) > 0 and all(_is_sequence(row) for row in obj)


def adapt(obj) -> ContainerAdapter:
    """
    Wrap a container in its adapter

    Order: existing adapter, registered type, numpy array, shape-bearing
    array-like, sequence of sequences, sequence.

    An empty sequence is always ``Flat(0)``; there is no row to show it is a grid,
    so it only matches empty flat containers. Pass an ndarray of shape ``(0, n)``
    for an empty grid.

    Raises:
        UnsupportedContainerError: obj cannot be viewed as a flat or grid container
    """
    if isinstance(obj, ContainerAdapter):
        return obj

    factory = _lookup(type(obj))
    if factory is not None:
        adapter = factory(obj)
        if not isinstance(adapter, ContainerAdapter):
            raise UnsupportedContainerError(
                f"Adapter factory for {type(obj).__name__} returned {type(adapter).__name__}"
            )
        return adapter

    if isinstance(obj, np.ndarray):
        return NdarrayAdapter(obj)
    if hasattr(obj, "shape") and hasattr(obj, "__getitem__") and not isinstance(obj, type):
        return ArrayLikeAdapter(obj)
    if _is_sequence(obj):
        if _looks_nested(obj):
            return NestedSequenceAdapter(obj)
        return SequenceAdapter(obj)

    raise UnsupportedContainerError(
        f"Unsupported container type: {type(obj).__name__}"
    )


def is_container(obj) -> bool:
    """True when ``adapt`` would accept the object's type without inspecting elements."""
    if isinstance(obj, ContainerAdapter) or _lookup(type(obj)) is not None:
        return True
    if isinstance(obj, np.ndarray):
        return obj.ndim > 0
    if hasattr(obj, "shape") and hasattr(obj, "__getitem__"):
        try:
            return len(tuple(obj.shape)) > 0
        except TypeError:
            return False
    return _is_sequence(obj)
