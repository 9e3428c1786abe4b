"""
affine4: a 4x4 affine transform matrix for real-time graphics and geometry.

Matrices use row-major storage and the row-vector convention ``v' = v · M``,
so the translation lives in row 3 and ``m1 @ m2`` applies ``m1`` first.
"""

__version__ = version = "0.1.0"

# exposing the public API of the package
from affine4.config import EPSILON
from affine4.matrix import Matrix4
from affine4.transforms import (
    determinant,
    can_be_inverse,
    inverse,
    transpose,
    multiply,
    translate,
    rotate,
    scale,
)
from affine4.vectors import vec3, vec4, as_vec3, as_vec4

__all__ = [
    "EPSILON",
    "Matrix4",
    "determinant",
    "can_be_inverse",
    "inverse",
    "transpose",
    "multiply",
    "translate",
    "rotate",
    "scale",
    "vec3",
    "vec4",
    "as_vec3",
    "as_vec4",
]
