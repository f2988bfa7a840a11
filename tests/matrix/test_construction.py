"""
Tests for Matrix construction, element access and conversion.
"""

import copy

import numpy as np
import pytest

from densematrix import Matrix, MatrixIndexError, ShapeError, ValidationError


class TestConstructor:

    def test_shape_from_rows(self):
        m = Matrix([[1, 2, 3], [4, 5, 6]])
        assert m.shape == (2, 3)
        assert m.n_rows == 2
        assert m.n_cols == 3
        assert m.size == 6

    def test_single_element(self):
        assert Matrix([[7]]).shape == (1, 1)

    def test_from_ndarray(self):
        m = Matrix(np.arange(6).reshape(3, 2))
        assert m.shape == (3, 2)
        assert m[2, 1] == 5.0

    def test_from_tuples(self):
        assert Matrix(((1, 2), (3, 4))).to_list() == [[1.0, 2.0], [3.0, 4.0]]

    def test_empty_outer(self):
        with pytest.raises(ShapeError, match="empty"):
            Matrix([])

    def test_empty_rows(self):
        with pytest.raises(ShapeError, match="zero dimensions"):
            Matrix([[], []])

    def test_ragged_rows(self):
        with pytest.raises(ShapeError, match="inconsistent row sizes"):
            Matrix([[1, 2], [3]])

    def test_ragged_detected_past_second_row(self):
        with pytest.raises(ShapeError):
            Matrix([[1, 2], [3, 4], [5, 6, 7]])

    def test_one_dimensional_input(self):
        with pytest.raises(ShapeError):
            Matrix([1, 2, 3])

    def test_one_dimensional_ndarray(self):
        with pytest.raises(ShapeError, match="expected 2D"):
            Matrix(np.array([1.0, 2.0]))

    def test_zero_sized_ndarray(self):
        with pytest.raises(ShapeError):
            Matrix(np.zeros((0, 3)))

    def test_non_numeric(self):
        with pytest.raises(ValidationError):
            Matrix([["a", "b"]])

    def test_copies_input(self):
        source = [[1.0, 2.0], [3.0, 4.0]]
        m = Matrix(source)
        source[0][0] = 100.0
        assert m[0, 0] == 1.0

    def test_copies_ndarray(self):
        source = np.ones((2, 2))
        m = Matrix(source)
        source[0, 0] = 5.0
        assert m[0, 0] == 1.0

    def test_copy_constructor_is_independent(self, square_2x2):
        other = Matrix(square_2x2)
        other[0, 0] = -1.0
        assert square_2x2[0, 0] == 1.0


class TestFactories:

    def test_identity(self):
        assert Matrix.identity(3).to_list() == [
            [1.0, 0.0, 0.0],
            [0.0, 1.0, 0.0],
            [0.0, 0.0, 1.0],
        ]

    def test_identity_one(self):
        assert Matrix.identity(1).to_list() == [[1.0]]

    def test_identity_zero(self):
        with pytest.raises(ShapeError):
            Matrix.identity(0)

    def test_constant_matrix(self):
        m = Matrix.constant_matrix(2, 3, 5.0)
        assert m.shape == (2, 3)
        assert m.to_list() == [[5.0] * 3, [5.0] * 3]

    @pytest.mark.parametrize("rows, cols", [(0, 3), (3, 0)])
    def test_constant_matrix_zero_dimension(self, rows, cols):
        with pytest.raises(ShapeError):
            Matrix.constant_matrix(rows, cols, 1.0)

    def test_module_level_aliases(self):
        import densematrix
        assert densematrix.identity(2) == Matrix.identity(2)
        assert densematrix.constant_matrix(1, 2, 3.0) == Matrix([[3.0, 3.0]])


class TestElementAccess:

    def test_get(self, square_2x2):
        assert square_2x2.get(1, 0) == 3.0
        assert square_2x2[0, 1] == 2.0

    def test_set(self, square_2x2):
        square_2x2.set(1, 1, 10)
        assert square_2x2[1, 1] == 10.0
        square_2x2[0, 0] = -2.5
        assert square_2x2.get(0, 0) == -2.5

    @pytest.mark.parametrize("row, col", [(2, 0), (0, 2), (5, 5), (-1, 0)])
    def test_get_out_of_bounds(self, square_2x2, row, col):
        with pytest.raises(IndexError):
            square_2x2.get(row, col)

    def test_set_out_of_bounds_is_matrix_index_error(self, square_2x2):
        with pytest.raises(MatrixIndexError):
            square_2x2[2, 0] = 1.0
        assert square_2x2.to_list() == [[1.0, 2.0], [3.0, 4.0]]

    def test_set_non_scalar(self, square_2x2):
        with pytest.raises(ValidationError):
            square_2x2[0, 0] = "x"

    def test_single_index_rejected(self, square_2x2):
        with pytest.raises(ValidationError, match="pair"):
            square_2x2[0]


class TestConversion:

    def test_to_list_is_a_copy(self, square_2x2):
        rows = square_2x2.to_list()
        rows[0][0] = 99.0
        assert square_2x2[0, 0] == 1.0

    def test_to_numpy_is_a_copy(self, square_2x2):
        arr = square_2x2.to_numpy()
        arr[0, 0] = 99.0
        assert square_2x2[0, 0] == 1.0
        assert arr.dtype == np.float64

    def test_asarray(self, square_2x2):
        np.testing.assert_array_equal(np.asarray(square_2x2), [[1, 2], [3, 4]])

    def test_iteration_yields_rows(self, square_2x2):
        assert list(square_2x2) == [[1.0, 2.0], [3.0, 4.0]]

    def test_copy_module(self, square_2x2):
        for dup in (copy.copy(square_2x2), copy.deepcopy(square_2x2), square_2x2.copy()):
            dup[0, 0] = 0.0
            assert square_2x2[0, 0] == 1.0

    def test_unhashable(self, square_2x2):
        with pytest.raises(TypeError):
            hash(square_2x2)


class TestRendering:

    def test_str(self):
        assert str(Matrix([[1, 2.5], [3, 4]])) == "[\n  [1, 2.5],\n  [3, 4]\n]"

    def test_str_single_row(self):
        assert str(Matrix([[1, 2]])) == "[\n  [1, 2]\n]"

    def test_repr(self):
        assert repr(Matrix([[1, 2, 3]])) == "Matrix(shape=(1, 3))"
