# matrix.py

import logging
import math
import sys
from numpy import asarray as np_asarray
from numpy import array as np_array
from numpy import array_equal as np_array_equal
from numpy import allclose as np_allclose
from numpy import diag as np_diag
from numpy import eye as np_eye
from numpy import float64 as np_float64
from numpy import ndarray
import numpy as np
from numbers import Real
from typing import Union, Optional, TextIO

from affine4.config import EPSILON
from affine4.kernels import det4, inv4, transpose4, matmul4, matvec4, vecmat4, translate4, rotate4, scale4
from affine4.vectors import as_vec3, as_vec4

logger = logging.getLogger(__name__)

# preallocate the identity matrix for performance
_EYE4 = np_eye(4, dtype=np_float64)


class Matrix4:
    """
    A 4x4 affine transform matrix stored row-major, using the row-vector
    convention ``v' = v · M``::

        1   0   0   0
        0   1   0   0
        0   0   1   0
        tx  ty  tz  1

    The translation lives in row 3, and ``M1 @ M2`` applies M1 first.

    Constructors:
        Matrix4()                   -> identity
        Matrix4(s)                  -> s on the diagonal, zero elsewhere
        Matrix4(r0, r1, r2, r3)     -> each 4-vector becomes one row
        Matrix4(m00, m01, ..., m33) -> 16 scalars in row-major order
        Matrix4(array_4x4)          -> copy of an existing 4x4 array

    Matrices are values: every algebra operation returns a new Matrix4.
    ``set_element`` / ``m[i, j] = v`` exist for building a matrix in place;
    once it is handed to the algebra it should be treated as immutable.

    Attributes:
        matrix (ndarray): 4x4 float64 backing array.
    """
    __slots__ = ("matrix",)

    # make numpy defer binary operators (``ndarray @ Matrix4``) to us
    __array_ufunc__ = None

    def __init__(self, *args):
        n = len(args)
        if n == 0:
            self.matrix = _EYE4.copy()
        elif n == 1:
            value = args[0]
            if isinstance(value, Real):
                self.matrix = np_diag([float(value)] * 4)
            else:
                if isinstance(value, Matrix4):
                    value = value.matrix
                matrix = np_array(value, dtype=np_float64)
                if matrix.shape != (4, 4):
                    raise ValueError(f"Invalid matrix shape: {matrix.shape}")
                self.matrix = matrix
        elif n == 4:
            self.matrix = np_array([as_vec4(row) for row in args], dtype=np_float64)
        elif n == 16:
            self.matrix = np_array(args, dtype=np_float64).reshape(4, 4)
        else:
            raise TypeError(
                f"Matrix4 takes 0, 1, 4 or 16 arguments ({n} given)")

    @classmethod
    def identity(cls) -> "Matrix4":
        """Create an identity matrix."""
        return cls.from_unsafe(_EYE4.copy())

    @classmethod
    def from_scalar(cls, scalar: float) -> "Matrix4":
        """
        Create a diagonal matrix with ``scalar`` in all four diagonal entries.

        This is a uniform homogeneous scale, and only the identity when
        ``scalar == 1``.
        """
        return cls.from_unsafe(np_diag([float(scalar)] * 4))

    @classmethod
    def from_rows(cls, row0, row1, row2, row3) -> "Matrix4":
        """
        Create a matrix from four row vectors.

        Args:
            row0: the x basis vector.
            row1: the y basis vector.
            row2: the z basis vector.
            row3: the translation (with its homogeneous w).

        Returns:
            A new Matrix4.
        """
        return cls(row0, row1, row2, row3)

    @classmethod
    def from_values(cls, *values: float) -> "Matrix4":
        """Create a matrix from 16 scalars given in row-major order."""
        if len(values) != 16:
            raise TypeError(f"from_values takes 16 values ({len(values)} given)")
        return cls(*values)

    @classmethod
    def from_unsafe(cls, matrix: ndarray) -> "Matrix4":
        """Wrap a 4x4 float64 array without copying or checking it.

        Args:
            matrix (np.ndarray): The matrix to be used.

        Returns:
            Matrix4: An instance owning the provided array.
        """
        instance = object.__new__(cls)
        instance.matrix = matrix
        return instance

    ###########
    # Element access
    #

    def element(self, i: int, j: int) -> float:
        """Return the element at row ``i``, column ``j``."""
        assert 0 <= i < 4 and 0 <= j < 4, f"element index ({i}, {j}) out of range"
        return float(self.matrix[i, j])

    def set_element(self, i: int, j: int, value: float) -> None:
        """Overwrite the element at row ``i``, column ``j`` in place."""
        assert 0 <= i < 4 and 0 <= j < 4, f"element index ({i}, {j}) out of range"
        self.matrix[i, j] = value

    def __getitem__(self, index):
        i, j = index
        return self.element(i, j)

    def __setitem__(self, index, value: float) -> None:
        i, j = index
        self.set_element(i, j, value)

    def get_row(self, index: int) -> ndarray:
        """Return a copy of row ``index`` as a Vec4."""
        assert 0 <= index < 4, f"row index {index} out of range"
        return self.matrix[index].copy()

    def get_column(self, index: int) -> ndarray:
        """Return a copy of column ``index`` as a Vec4."""
        assert 0 <= index < 4, f"column index {index} out of range"
        return self.matrix[:, index].copy()

    @property
    def translation(self) -> ndarray:
        """The x, y, z components of row 3, as a copy."""
        return self.matrix[3, :3].copy()

    ###########
    # Algebra
    #

    def determinant(self) -> float:
        """Determinant by cofactor expansion over 2x2 minors."""
        return float(det4(self.matrix))

    def can_be_inverse(self) -> bool:
        """True iff ``|determinant| > EPSILON``."""
        return abs(self.determinant()) > EPSILON

    def inverse(self) -> "Matrix4":
        """
        Return the inverse of this matrix.

        A singular matrix (``|determinant| <= EPSILON``) yields the identity
        instead of an error. Call :meth:`can_be_inverse` first if that case
        has to be told apart.
        """
        if logger.isEnabledFor(logging.DEBUG) and not self.can_be_inverse():
            logger.debug("inverse of singular matrix (det=%g), returning identity",
                         self.determinant())
        return Matrix4.from_unsafe(inv4(self.matrix, EPSILON))

    def transpose(self) -> "Matrix4":
        """Return a new matrix whose row i is this matrix's column i."""
        return Matrix4.from_unsafe(transpose4(self.matrix))

    def translate(self, translation) -> "Matrix4":
        """Return a copy with ``translation`` added to row 3's x, y, z."""
        t = as_vec3(translation)
        return Matrix4.from_unsafe(translate4(self.matrix, t[0], t[1], t[2]))

    def rotate(self, angle: float, axis) -> "Matrix4":
        """
        Return a copy whose upper-left 3x3 block is the rotation of ``angle``
        radians about ``axis``.

        The axis is normalized first. Column 3 of rows 0-2 and all of row 3
        are kept from this matrix.

        The block is the usual Rodrigues matrix, so ``M @ v`` turns v by
        +angle while the row-vector product ``v @ M`` applies its transpose.

        Raises:
            ValueError: if ``axis`` has zero or non-finite length.
        """
        a = as_vec3(axis)
        length = math.hypot(a[0], a[1], a[2])
        if length == 0.0 or not math.isfinite(length):
            raise ValueError(f"Rotation axis {a} has zero or non-finite length")
        a /= length
        return Matrix4.from_unsafe(rotate4(self.matrix, float(angle), a[0], a[1], a[2]))

    def scale(self, scale) -> "Matrix4":
        """Return a copy with m00, m11, m22 multiplied by scale x, y, z."""
        s = as_vec3(scale)
        return Matrix4.from_unsafe(scale4(self.matrix, s[0], s[1], s[2]))

    def transform_point(self, point) -> ndarray:
        """
        Apply this transform to a 3D point as a row vector ``(p, 1) · M``.

        Args:
            point: length-3 array.

        Returns:
            Transformed length-3 point, divided by the resulting w.

        Raises:
            ZeroDivisionError: if the resulting w is zero.
        """
        p = np.append(as_vec3(point), 1.0)
        ph = vecmat4(p, self.matrix)
        if ph[3] == 0.0:
            raise ZeroDivisionError("Homogeneous w is zero")
        if ph[3] == 1.0:
            return ph[:3]
        return ph[:3] / ph[3]

    def transform_direction(self, direction) -> ndarray:
        """
        Apply this transform to a 3D direction ``(d, 0) · M``; the translation
        row has no effect.
        """
        d = np.append(as_vec3(direction), 0.0)
        return vecmat4(d, self.matrix)[:3]

    def is_close(self, other: Union["Matrix4", ndarray], atol: float = EPSILON) -> bool:
        """Element-wise comparison within an absolute tolerance."""
        other_matrix = other.matrix if isinstance(other, Matrix4) else np_asarray(other)
        return bool(np_allclose(self.matrix, other_matrix, rtol=0.0, atol=atol))

    ###########
    # Operators
    #

    def __matmul__(self, other) -> Union["Matrix4", ndarray]:
        if isinstance(other, Matrix4):
            return Matrix4.from_unsafe(matmul4(self.matrix, other.matrix))
        if isinstance(other, (ndarray, list, tuple)):
            other = np_array(other, dtype=np_float64)
            if other.shape == (4, 4):
                return Matrix4.from_unsafe(matmul4(self.matrix, other))
            if other.shape == (4,):
                return matvec4(self.matrix, other)
            raise ValueError(f"Cannot multiply Matrix4 by shape {other.shape}")
        return NotImplemented

    def __rmatmul__(self, other) -> Union["Matrix4", ndarray]:
        if isinstance(other, (ndarray, list, tuple)):
            other = np_array(other, dtype=np_float64)
            if other.shape == (4, 4):
                return Matrix4.from_unsafe(matmul4(other, self.matrix))
            if other.shape == (4,):
                return vecmat4(other, self.matrix)
            raise ValueError(f"Cannot multiply shape {other.shape} by Matrix4")
        return NotImplemented

    # alias so ``m1 * m2`` reads like the math
    __mul__ = __matmul__
    __rmul__ = __rmatmul__

    def __array__(self, dtype=None, copy=None) -> ndarray:
        if copy is False:
            if dtype is not None and np.dtype(dtype) != self.matrix.dtype:
                raise ValueError(f"Cannot view Matrix4 as {np.dtype(dtype)} without a copy")
            return self.matrix
        return np_array(self.matrix, dtype=dtype)

    ###########
    # Value protocol
    #

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Matrix4):
            return np_array_equal(self.matrix, other.matrix)
        elif isinstance(other, ndarray):
            return np_array_equal(self.matrix, other)
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __copy__(self) -> "Matrix4":
        return self.__class__.from_unsafe(self.matrix.copy())

    def __deepcopy__(self, memo) -> "Matrix4":
        return self.__class__.from_unsafe(self.matrix.copy())

    def __reduce__(self):
        return (self.__class__, (self.matrix.copy(),))

    ###########
    # Formatting
    #

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(matrix={self.matrix.tolist()})"

    def __str__(self) -> str:
        rows = "\n".join(" ".join(f"{value:g}" for value in row) for row in self.matrix)
        return f"{self.__class__.__name__} {{\n{rows}\n}}\n"

    def dump(self, stream: Optional[TextIO] = None) -> None:
        """Write the debug text form of this matrix to ``stream`` (stdout by default)."""
        if stream is None:
            stream = sys.stdout
        stream.write(str(self))
