"""Tests for Matrix."""

import pytest
from lumentrace.errors import NonInvertibleMatrixError, SceneConfigurationError
from lumentrace.matrix import Matrix
from lumentrace.vec4 import Vec4


class TestMatrixBasics:
    """Test construction, access and multiplication."""

    def test_construction_and_access(self):
        m = Matrix([
            [1, 2, 3, 4],
            [5.5, 6.5, 7.5, 8.5],
            [9, 10, 11, 12],
            [13.5, 14.5, 15.5, 16.5],
        ])
        assert m[0, 0] == 1
        assert m[0, 3] == 4
        assert m[1, 2] == 7.5
        assert m[3, 2] == 15.5
        assert m.size == 4

    def test_non_square_rejected(self):
        with pytest.raises(ValueError):
            Matrix([[1, 2, 3], [4, 5, 6]])

    def test_equality(self):
        a = Matrix([[1, 2], [3, 4]])
        assert a == Matrix([[1, 2], [3, 4 + 1e-7]])
        assert a != Matrix([[1, 2], [3, 5]])
        assert a != Matrix.identity(3)

    def test_multiply_matrices(self):
        a = Matrix([[1, 2, 3, 4], [5, 6, 7, 8], [9, 8, 7, 6], [5, 4, 3, 2]])
        b = Matrix([[-2, 1, 2, 3], [3, 2, 1, -1], [4, 3, 6, 5], [1, 2, 7, 8]])
        expected = Matrix([
            [20, 22, 50, 48],
            [44, 54, 114, 108],
            [40, 58, 110, 102],
            [16, 26, 46, 42],
        ])
        assert a * b == expected

    def test_multiply_by_tuple(self):
        a = Matrix([[1, 2, 3, 4], [2, 4, 4, 2], [8, 6, 4, 1], [0, 0, 0, 1]])
        assert a * Vec4(1, 2, 3, 1) == Vec4(18, 24, 33, 1)

    def test_identity(self):
        a = Matrix([[0, 1, 2, 4], [1, 2, 4, 8], [2, 4, 8, 16], [4, 8, 16, 32]])
        assert a * Matrix.identity() == a
        assert Matrix.identity() * Vec4(1, 2, 3, 4) == Vec4(1, 2, 3, 4)

    def test_transpose(self):
        a = Matrix([[0, 9, 3, 0], [9, 8, 0, 8], [1, 8, 5, 3], [0, 0, 5, 8]])
        expected = Matrix([[0, 9, 1, 0], [9, 8, 8, 0], [3, 0, 5, 5], [0, 8, 3, 8]])
        assert a.transpose() == expected
        assert Matrix.identity().transpose() == Matrix.identity()


class TestMatrixDeterminant:
    """Test submatrices, minors, cofactors and determinants."""

    def test_determinant_2x2(self):
        assert Matrix([[1, 5], [-3, 2]]).determinant() == 17

    def test_submatrix(self):
        a = Matrix([[-6, 1, 1, 6], [-8, 5, 8, 6], [-1, 0, 8, 2], [-7, 1, -1, 1]])
        assert a.submatrix(2, 1) == Matrix([[-6, 1, 6], [-8, 8, 6], [-7, -1, 1]])

    def test_minor_and_cofactor(self):
        a = Matrix([[3, 5, 0], [2, -1, -7], [6, -1, 5]])
        assert a.minor(0, 0) == -12
        assert a.cofactor(0, 0) == -12
        assert a.minor(1, 0) == 25
        assert a.cofactor(1, 0) == -25

    def test_determinant_3x3(self):
        a = Matrix([[1, 2, 6], [-5, 8, -4], [2, 6, 4]])
        assert a.cofactor(0, 0) == 56
        assert a.cofactor(0, 1) == 12
        assert a.cofactor(0, 2) == -46
        assert a.determinant() == -196

    def test_determinant_4x4(self):
        a = Matrix([[-2, -8, 3, 5], [-3, 1, 7, 3], [1, 2, -9, 6], [-6, 7, 7, -9]])
        assert a.cofactor(0, 0) == 690
        assert a.cofactor(0, 3) == 51
        assert a.determinant() == -4071


class TestMatrixInverse:
    """Test inversion."""

    def test_invertible(self):
        a = Matrix([[6, 4, 4, 4], [5, 5, 7, 6], [4, -9, 3, -7], [9, 1, 7, -6]])
        assert a.determinant() == -2120
        assert a.is_invertible()

    def test_not_invertible(self):
        a = Matrix([[-4, 2, -2, -3], [9, 6, 2, 6], [0, -5, 1, -5], [0, 0, 0, 0]])
        assert a.determinant() == 0
        assert not a.is_invertible()

    def test_inverse_of_singular_raises(self):
        a = Matrix([[-4, 2, -2, -3], [9, 6, 2, 6], [0, -5, 1, -5], [0, 0, 0, 0]])
        with pytest.raises(NonInvertibleMatrixError) as exc_info:
            a.inverse()
        assert exc_info.value.matrix is a
        assert isinstance(exc_info.value, SceneConfigurationError)

    def test_inverse(self):
        a = Matrix([[-5, 2, 6, -8], [1, -5, 1, 8], [7, 7, -6, -7], [1, -3, 7, 4]])
        b = a.inverse()
        assert a.determinant() == 532
        assert a.cofactor(2, 3) == -160
        assert b[3, 2] == pytest.approx(-160 / 532)
        assert a.cofactor(3, 2) == 105
        assert b[2, 3] == pytest.approx(105 / 532)
        expected = Matrix([
            [0.21805, 0.45113, 0.24060, -0.04511],
            [-0.80827, -1.45677, -0.44361, 0.52068],
            [-0.07895, -0.22368, -0.05263, 0.19737],
            [-0.52256, -0.81391, -0.30075, 0.30639],
        ])
        assert b == expected

    def test_product_times_inverse(self):
        a = Matrix([[3, -9, 7, 3], [3, -8, 2, -9], [-4, 4, 4, 1], [-6, 5, -1, 1]])
        b = Matrix([[8, 2, 2, 2], [3, -1, 7, 0], [7, 0, 5, 4], [6, -2, 0, 5]])
        c = a * b
        assert c * b.inverse() == a

    def test_inverse_is_cached(self):
        a = Matrix([[6, 4, 4, 4], [5, 5, 7, 6], [4, -9, 3, -7], [9, 1, 7, -6]])
        assert a.inverse() is a.inverse()

    def test_identity_inverse(self):
        assert Matrix.identity().inverse() == Matrix.identity()
