import unittest
import numpy as np
from affine4 import Matrix4, vec3, vec4


class _Vec4:
    # stand-in for an external Vec4 type exposing x, y, z, w
    def __init__(self, x, y, z, w):
        self.x, self.y, self.z, self.w = x, y, z, w


class TestCreation(unittest.TestCase):
    def test_default_is_identity(self):
        m = Matrix4()
        np.testing.assert_array_equal(m.matrix, np.eye(4))
        self.assertEqual(m.matrix.dtype, np.float64)

    def test_identity_classmethod(self):
        np.testing.assert_array_equal(Matrix4.identity().matrix, np.eye(4))
        # each call hands out its own array
        a = Matrix4.identity()
        b = Matrix4.identity()
        a[0, 0] = 5.0
        self.assertEqual(b[0, 0], 1.0)

    def test_sixteen_scalars_row_major(self):
        m = Matrix4(0, 1, 2, 3,
                    4, 5, 6, 7,
                    8, 9, 10, 11,
                    12, 13, 14, 15)
        np.testing.assert_array_equal(
            m.matrix, np.arange(16, dtype=float).reshape(4, 4))
        self.assertEqual(m.element(0, 3), 3.0)
        self.assertEqual(m.element(3, 0), 12.0)

    def test_from_values(self):
        values = list(range(16))
        m = Matrix4.from_values(*values)
        np.testing.assert_array_equal(m.matrix, np.reshape(values, (4, 4)))
        with self.assertRaises(TypeError):
            Matrix4.from_values(1, 2, 3)

    def test_four_rows(self):
        x_basis = [1, 0, 0, 0]
        y_basis = (0, 2, 0, 0)
        z_basis = np.array([0, 0, 3, 0])
        translation = [4, 5, 6, 1]
        m = Matrix4(x_basis, y_basis, z_basis, translation)
        np.testing.assert_array_equal(m.get_row(0), x_basis)
        np.testing.assert_array_equal(m.get_row(1), y_basis)
        np.testing.assert_array_equal(m.get_row(2), z_basis)
        np.testing.assert_array_equal(m.get_row(3), translation)
        np.testing.assert_array_equal(m.translation, [4, 5, 6])

    def test_rows_from_attribute_vectors(self):
        m = Matrix4.from_rows(_Vec4(1, 0, 0, 0), _Vec4(0, 1, 0, 0),
                              _Vec4(0, 0, 1, 0), _Vec4(7, 8, 9, 1))
        expected = np.eye(4)
        expected[3, :3] = [7, 8, 9]
        np.testing.assert_array_equal(m.matrix, expected)

    def test_rows_from_vec4(self):
        m = Matrix4(vec4(1, 0, 0, 0), vec4(0, 1, 0, 0), vec4(0, 0, 1, 0), vec4(5, 6, 7, 1))
        np.testing.assert_array_equal(m.translation, vec3(5, 6, 7))
        self.assertEqual(vec4(1, 2, 3, 4).dtype, np.float64)
        self.assertEqual(vec3(1, 2, 3).shape, (3,))
        # Vec3 helpers feed the builders directly
        np.testing.assert_array_equal(Matrix4().translate(vec3(5, 6, 7)).matrix, m.matrix)

    def test_row_with_wrong_length_raises(self):
        with self.assertRaises(ValueError):
            Matrix4([1, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1])

    def test_scalar_is_diagonal(self):
        m = Matrix4(2.5)
        np.testing.assert_array_equal(m.matrix, np.diag([2.5] * 4))
        # only a scalar of 1 gives the identity
        np.testing.assert_array_equal(Matrix4(1).matrix, np.eye(4))
        np.testing.assert_array_equal(Matrix4.from_scalar(0.0).matrix, np.zeros((4, 4)))
        np.testing.assert_array_equal(Matrix4(np.float64(3.0)).matrix, np.diag([3.0] * 4))

    def test_from_array_copies(self):
        src = np.arange(16, dtype=float).reshape(4, 4)
        m = Matrix4(src)
        src[0, 0] = 100.0
        self.assertEqual(m[0, 0], 0.0)

        # nested lists and other matrices are accepted too
        np.testing.assert_array_equal(Matrix4(src.tolist()).matrix, src)
        other = Matrix4(m)
        other[1, 1] = -1.0
        self.assertEqual(m[1, 1], 5.0)

    def test_from_array_wrong_shape(self):
        with self.assertRaises(ValueError):
            Matrix4(np.eye(3))

    def test_bad_arity(self):
        for n in (2, 3, 5, 15, 17):
            with self.assertRaises(TypeError):
                Matrix4(*([0.0] * n))

    def test_no_validation_of_values(self):
        # any finite combination is accepted as-is
        m = Matrix4(*([1e30] * 16))
        self.assertEqual(m[2, 1], 1e30)

    def test_from_unsafe_shares_array(self):
        arr = np.eye(4)
        m = Matrix4.from_unsafe(arr)
        self.assertIs(m.matrix, arr)


class TestElementAccess(unittest.TestCase):
    def setUp(self):
        self.m = Matrix4(np.arange(16, dtype=float).reshape(4, 4))

    def test_element_and_getitem(self):
        for i in range(4):
            for j in range(4):
                self.assertEqual(self.m.element(i, j), 4 * i + j)
                self.assertEqual(self.m[i, j], 4 * i + j)
        self.assertIsInstance(self.m.element(1, 2), float)

    def test_set_element(self):
        self.m.set_element(2, 3, -7.5)
        self.assertEqual(self.m.element(2, 3), -7.5)
        self.m[0, 1] = 42
        self.assertEqual(self.m.matrix[0, 1], 42.0)

    def test_get_row_is_a_copy(self):
        row = self.m.get_row(1)
        np.testing.assert_array_equal(row, [4, 5, 6, 7])
        row[0] = 99.0
        self.assertEqual(self.m[1, 0], 4.0)

    def test_get_column_is_a_copy(self):
        col = self.m.get_column(2)
        np.testing.assert_array_equal(col, [2, 6, 10, 14])
        col[0] = 99.0
        self.assertEqual(self.m[0, 2], 2.0)

    @unittest.skipUnless(__debug__, "bounds are asserted only when assertions are enabled")
    def test_out_of_range_asserts(self):
        for i, j in [(4, 0), (0, 4), (-1, 0), (0, -1)]:
            with self.assertRaises(AssertionError):
                self.m.element(i, j)
            with self.assertRaises(AssertionError):
                self.m[i, j] = 1.0
        with self.assertRaises(AssertionError):
            self.m.get_row(4)
        with self.assertRaises(AssertionError):
            self.m.get_column(-1)


if __name__ == "__main__":
    unittest.main()
