"""Container adapter tests"""
import array
from collections import deque

import numpy as np
import pytest

from numtest.compare import (
    ArrayLikeAdapter,
    ColumnMajorAdapter,
    ContainerAdapter,
    Flat,
    Grid,
    NdarrayAdapter,
    NestedSequenceAdapter,
    SequenceAdapter,
    adapt,
    is_container,
    register_adapter,
    unregister_adapter,
)
from numtest.core.errors import UnsupportedContainerError


class Vector3:
    """Stand-in for a third-party fixed-size vector type"""

    def __init__(self, x, y, z):
        self.x, self.y, self.z = x, y, z


class FakeTensor:
    """Stand-in for a tensor type exposing shape and tuple indexing"""

    class _Scalar:
        def __init__(self, value):
            self._value = value

        def item(self):
            return self._value

    def __init__(self, rows):
        self._rows = rows
        self.shape = (len(rows), len(rows[0]))

    def __getitem__(self, key):
        row, col = key
        return self._Scalar(self._rows[row][col])


class TestSequenceAdapter:
    """Flat sequences"""

    @pytest.mark.parametrize(
        "data",
        [
            [1.0, 2.0, 3.0],
            (1.0, 2.0, 3.0),
            array.array("d", [1.0, 2.0, 3.0]),
            range(1, 4),
        ],
    )
    def test_flat_shape(self, data):
        view = adapt(data)
        assert isinstance(view, SequenceAdapter)
        assert view.shape() == Flat(3)
        assert view.element_at(2) == 3

    def test_empty(self):
        assert adapt([]).shape() == Flat(0)

    def test_rejects_string(self):
        with pytest.raises(UnsupportedContainerError):
            SequenceAdapter("abc")


class TestNestedSequenceAdapter:
    """Lists of rows"""

    def test_grid_shape(self):
        view = adapt([[1, 2, 3], [4, 5, 6]])
        assert isinstance(view, NestedSequenceAdapter)
        assert view.shape() == Grid(2, 3)
        assert view.element_at((1, 0)) == 4

    def test_ragged_rows(self):
        with pytest.raises(UnsupportedContainerError, match="Ragged"):
            adapt([[1, 2], [3]])

    def test_rows_of_arrays(self):
        view = adapt([np.array([1.0, 2.0]), np.array([3.0, 4.0])])
        assert view.shape() == Grid(2, 2)


class TestNdarrayAdapter:
    """numpy arrays"""

    def test_1d(self):
        view = adapt(np.array([1.0, 2.0]))
        assert isinstance(view, NdarrayAdapter)
        assert view.shape() == Flat(2)

    def test_2d(self, grid_3x3):
        view = adapt(grid_3x3)
        assert view.shape() == Grid(3, 3)
        assert view.element_at((2, 1)) == 8.8

    def test_fortran_order_logical_indexing(self, grid_3x3):
        view = adapt(np.asfortranarray(grid_3x3))
        assert view.element_at((0, 1)) == 2.2

    def test_matrix(self):
        view = adapt(np.matrix([[1.0, 2.0], [3.0, 4.0]]))
        assert view.shape() == Grid(2, 2)
        assert float(view.element_at((1, 0))) == 3.0

    @pytest.mark.parametrize("shape", [(), (2, 2, 2)])
    def test_unsupported_ndim(self, shape):
        with pytest.raises(UnsupportedContainerError, match="ndim"):
            adapt(np.zeros(shape))


class TestArrayLikeAdapter:
    """Shape-bearing third-party types"""

    def test_tensor_like(self):
        view = adapt(FakeTensor([[1.0, 2.0], [3.0, 4.0]]))
        assert isinstance(view, ArrayLikeAdapter)
        assert view.shape() == Grid(2, 2)
        assert view.element_at((1, 1)) == 4.0

    def test_bad_shape(self):
        class NoShape:
            shape = None

            def __getitem__(self, key):
                return 0

        with pytest.raises(UnsupportedContainerError, match="no usable shape"):
            ArrayLikeAdapter(NoShape())

    def test_label_indexed(self):
        class LabelSeries:
            """Indexed by label, like a pandas Series"""

            shape = (2,)

            def __init__(self):
                self._values = {"x": 1.0, "y": 2.0}

            def __getitem__(self, key):
                return self._values[key]

        view = adapt(LabelSeries())
        assert view.shape() == Flat(2)
        with pytest.raises(UnsupportedContainerError, match="by position 0"):
            view.element_at(0)


class TestColumnMajorAdapter:
    """Column-major buffers"""

    def test_logical_order(self):
        # columns (1, 4) (2, 5) (3, 6) of [[1, 2, 3], [4, 5, 6]]
        view = ColumnMajorAdapter([1, 4, 2, 5, 3, 6], rows=2, cols=3)
        assert view.shape() == Grid(2, 3)
        assert [view.element_at(p) for p in view.shape().positions()] == [1, 2, 3, 4, 5, 6]

    def test_size_mismatch(self):
        with pytest.raises(UnsupportedContainerError, match="needs 6"):
            ColumnMajorAdapter([1, 2, 3], rows=2, cols=3)


class TestRegistry:
    """Adapter registration"""

    def test_register_third_party_type(self):
        register_adapter(Vector3, lambda v: SequenceAdapter((v.x, v.y, v.z)))
        try:
            view = adapt(Vector3(1.0, 2.0, 3.0))
            assert view.shape() == Flat(3)
            assert view.element_at(1) == 2.0
            assert is_container(Vector3(0, 0, 0))
        finally:
            unregister_adapter(Vector3)

    def test_registration_applies_to_subclasses(self):
        class Vector3b(Vector3):
            pass

        register_adapter(Vector3, lambda v: SequenceAdapter((v.x, v.y, v.z)))
        try:
            assert adapt(Vector3b(1, 2, 3)).shape() == Flat(3)
        finally:
            unregister_adapter(Vector3)

    def test_registration_overrides_builtin(self):
        register_adapter(deque, lambda d: SequenceAdapter(list(d)[::-1]))
        try:
            assert adapt(deque([1, 2, 3])).element_at(0) == 3
        finally:
            unregister_adapter(deque)

    def test_factory_must_return_adapter(self):
        register_adapter(Vector3, lambda v: [v.x, v.y, v.z])
        try:
            with pytest.raises(UnsupportedContainerError, match="returned list"):
                adapt(Vector3(1, 2, 3))
        finally:
            unregister_adapter(Vector3)

    def test_unregistered_type(self):
        with pytest.raises(UnsupportedContainerError, match="Vector3"):
            adapt(Vector3(1, 2, 3))


class TestAdapt:
    """Dispatch"""

    def test_adapter_passthrough(self):
        view = SequenceAdapter([1.0])
        assert adapt(view) is view

    @pytest.mark.parametrize("obj", [1.0, "abc", b"abc", {"a": 1}, None])
    def test_rejects_non_containers(self, obj):
        with pytest.raises(UnsupportedContainerError):
            adapt(obj)

    def test_is_container(self):
        assert is_container([1.0])
        assert is_container(np.array([1.0]))
        assert not is_container(1.0)
        assert not is_container(np.float64(1.0))
        assert not is_container(np.array(1.0))
        assert not is_container("abc")

    def test_base_adapter_is_abstract(self):
        with pytest.raises(NotImplementedError):
            ContainerAdapter().shape()
