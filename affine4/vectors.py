# vectors.py

import numpy as np
from numpy import float64 as np_float64
from numpy import ndarray


def _components(vector, names: str) -> ndarray:
    # objects such as a Vec3 with .x/.y/.z attributes, but not ndarrays
    if not isinstance(vector, (ndarray, list, tuple)) and all(hasattr(vector, n) for n in names):
        return np.array([getattr(vector, n) for n in names], dtype=np_float64)
    out = np.array(vector, dtype=np_float64).reshape(-1)
    if out.shape[0] != len(names):
        raise ValueError(
            f"Expected a {len(names)}-component vector, got shape {np.shape(vector)}")
    return out


def as_vec3(vector) -> ndarray:
    """
    Coerce a 3-component vector into a float64 array of shape (3,).

    Args:
        vector: any array-like of length 3, or an object exposing ``x``, ``y``
            and ``z`` attributes.

    Returns:
        A new float64 array.

    Raises:
        ValueError: if the input does not have exactly three components.
    """
    return _components(vector, "xyz")


def as_vec4(vector) -> ndarray:
    """
    Coerce a 4-component (homogeneous) vector into a float64 array of shape (4,).

    Args:
        vector: any array-like of length 4, or an object exposing ``x``, ``y``,
            ``z`` and ``w`` attributes.

    Returns:
        A new float64 array.

    Raises:
        ValueError: if the input does not have exactly four components.
    """
    return _components(vector, "xyzw")


def vec3(x: float, y: float, z: float) -> ndarray:
    """Build a Vec3 from its components."""
    return np.array((x, y, z), dtype=np_float64)


def vec4(x: float, y: float, z: float, w: float) -> ndarray:
    """Build a Vec4 from its components."""
    return np.array((x, y, z, w), dtype=np_float64)
