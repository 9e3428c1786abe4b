# transforms.py

"""
Free-function algebra over :class:`~affine4.matrix.Matrix4`.

Every function here is pure: it reads its inputs and returns a new matrix or
value. Composition follows the row-vector convention, so
``multiply(m1, m2)`` applies ``m1`` first.
"""

from typing import Union
from numpy import ndarray

from affine4.matrix import Matrix4


def determinant(mat: Matrix4) -> float:
    """
    Determinant of ``mat`` by cofactor expansion over the six 2x2 minors of
    rows 0-1 and the six complementary minors of rows 2-3.
    """
    return mat.determinant()


def can_be_inverse(mat: Matrix4) -> bool:
    """
    Check whether ``mat`` is invertible under the shared tolerance.

    Parameters
    ----------
    mat : Matrix4

    Returns
    -------
    bool
        True iff ``|determinant(mat)| > EPSILON``.
    """
    return mat.can_be_inverse()


def inverse(mat: Matrix4) -> Matrix4:
    """
    Inverse of ``mat``.

    Singular input does not raise: when ``|determinant(mat)| <= EPSILON`` the
    identity matrix is returned. This can hide a degenerate transform, so use
    :func:`can_be_inverse` beforehand whenever the difference matters.
    """
    return mat.inverse()


def transpose(mat: Matrix4) -> Matrix4:
    """Row i of the result is column i of ``mat``."""
    return mat.transpose()


def multiply(lhs: Matrix4, rhs: Union[Matrix4, ndarray]) -> Union[Matrix4, ndarray]:
    """
    ``lhs · rhs``.

    With a Matrix4 (or 4x4 array) on the right this is the row-by-column
    matrix product. With a Vec4 on the right each output component is the dot
    product of a row of ``lhs`` with the vector; pass w=1 for points and w=0
    for directions.
    """
    return lhs @ rhs


def translate(mat: Matrix4, translation) -> Matrix4:
    """Add ``translation`` to the x, y, z of row 3; all else is unchanged."""
    return mat.translate(translation)


def rotate(mat: Matrix4, angle: float, axis) -> Matrix4:
    """
    Replace the upper-left 3x3 block of ``mat`` with the axis-angle rotation
    of ``angle`` radians about ``axis`` (normalized first).

    With ``c = cos(angle)``, ``s = sin(angle)``, ``d = 1 - c`` and unit axis
    ``(x, y, z)`` the block is::

        c + x*x*d     x*y*d - z*s   x*z*d + y*s
        x*y*d + z*s   c + y*y*d     y*z*d - x*s
        x*z*d - y*s   y*z*d + x*s   c + z*z*d

    Column 3 of rows 0-2 and the whole of row 3 are kept from ``mat``.
    """
    return mat.rotate(angle, axis)


def scale(mat: Matrix4, factors) -> Matrix4:
    """Multiply m00, m11 and m22 by ``factors`` x, y and z."""
    return mat.scale(factors)
