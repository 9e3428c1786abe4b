# kernels.py

from numba import njit
import numpy as np
import math
from numba.core.errors import NumbaPerformanceWarning
import warnings
warnings.filterwarnings("ignore", category=NumbaPerformanceWarning)


@njit(inline='always', cache=True)
def _cross3(a, b):
    out = np.empty(3, dtype=np.float64)
    out[0] = a[1] * b[2] - a[2] * b[1]
    out[1] = a[2] * b[0] - a[0] * b[2]
    out[2] = a[0] * b[1] - a[1] * b[0]
    return out


@njit(inline='always', cache=True)
def _dot3(a, b):
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


# no fastmath on det4/inv4: the minors must be combined in this exact order
@njit(cache=True)
def det4(m):
    """
    Determinant of a 4x4 matrix by cofactor expansion over 2x2 minors.

    Parameters
    ----------
    m : (4,4) float64 array

    Returns
    -------
    float64
        det(m)
    """
    # minors of the first two rows
    a0 = m[0, 0] * m[1, 1] - m[0, 1] * m[1, 0]
    a1 = m[0, 0] * m[1, 2] - m[0, 2] * m[1, 0]
    a2 = m[0, 0] * m[1, 3] - m[0, 3] * m[1, 0]
    a3 = m[0, 1] * m[1, 2] - m[0, 2] * m[1, 1]
    a4 = m[0, 1] * m[1, 3] - m[0, 3] * m[1, 1]
    a5 = m[0, 2] * m[1, 3] - m[0, 3] * m[1, 2]

    # complementary minors of the last two rows
    b0 = m[2, 0] * m[3, 1] - m[2, 1] * m[3, 0]
    b1 = m[2, 0] * m[3, 2] - m[2, 2] * m[3, 0]
    b2 = m[2, 0] * m[3, 3] - m[2, 3] * m[3, 0]
    b3 = m[2, 1] * m[3, 2] - m[2, 2] * m[3, 1]
    b4 = m[2, 1] * m[3, 3] - m[2, 3] * m[3, 1]
    b5 = m[2, 2] * m[3, 3] - m[2, 3] * m[3, 2]

    return a0 * b5 - a1 * b4 + a2 * b3 + a3 * b2 - a4 * b1 + a5 * b0


# -------------------------------------------------------------------------
# inverse by 3-vector blocks
# -------------------------------------------------------------------------
@njit(cache=True)
def inv4(m, epsilon):
    """
    Inverse of a 4x4 matrix, treating the upper 3x4 block as four column
    3-vectors and the bottom row as scalars.

    Returns the identity when |det(m)| <= epsilon.
    """
    if abs(det4(m)) <= epsilon:
        return np.eye(4)

    a = np.empty(3, dtype=np.float64)
    b = np.empty(3, dtype=np.float64)
    c = np.empty(3, dtype=np.float64)
    d = np.empty(3, dtype=np.float64)
    for i in range(3):
        a[i] = m[i, 0]
        b[i] = m[i, 1]
        c[i] = m[i, 2]
        d[i] = m[i, 3]

    x = m[3, 0]
    y = m[3, 1]
    z = m[3, 2]
    w = m[3, 3]

    s = _cross3(a, b)
    t = _cross3(c, d)
    u = a * y - b * x
    v = c * w - d * z

    inv_det = 1.0 / (_dot3(s, v) + _dot3(t, u))
    s *= inv_det
    t *= inv_det
    u *= inv_det
    v *= inv_det

    r0 = _cross3(b, v) + t * y
    r1 = _cross3(v, a) - t * x
    r2 = _cross3(d, u) + s * w
    r3 = _cross3(u, c) - s * z

    out = np.empty((4, 4), dtype=np.float64)
    out[0, :3] = r0
    out[0, 3] = -_dot3(b, t)
    out[1, :3] = r1
    out[1, 3] = _dot3(a, t)
    out[2, :3] = r2
    out[2, 3] = -_dot3(d, s)
    out[3, :3] = r3
    out[3, 3] = _dot3(c, s)
    return out


@njit(cache=True)
def transpose4(m):
    out = np.empty((4, 4), dtype=np.float64)
    for row in range(4):
        for col in range(4):
            out[row, col] = m[col, row]
    return out


@njit(cache=True)
def matmul4(m1, m2):
    """Row-by-column product m1 · m2."""
    out = np.empty((4, 4), dtype=np.float64)
    for row in range(4):
        for col in range(4):
            acc = 0.0
            for i in range(4):
                acc += m1[row, i] * m2[i, col]
            out[row, col] = acc
    return out


@njit(cache=True)
def matvec4(m, v):
    """M · v with v as a column: out[i] = sum_j m[i, j] * v[j]."""
    out = np.empty(4, dtype=np.float64)
    for i in range(4):
        out[i] = m[i, 0] * v[0] + m[i, 1] * v[1] + m[i, 2] * v[2] + m[i, 3] * v[3]
    return out


@njit(cache=True)
def vecmat4(v, m):
    """v · M with v as a row: out[j] = sum_i v[i] * m[i, j]."""
    out = np.empty(4, dtype=np.float64)
    for j in range(4):
        out[j] = v[0] * m[0, j] + v[1] * m[1, j] + v[2] * m[2, j] + v[3] * m[3, j]
    return out


@njit(cache=True)
def translate4(m, tx, ty, tz):
    out = m.copy()
    out[3, 0] += tx
    out[3, 1] += ty
    out[3, 2] += tz
    return out


@njit(cache=True)
def rotate4(m, angle, ax, ay, az):
    """
    Replace the upper-left 3x3 block of m with the Rodrigues rotation of
    ``angle`` radians about the unit axis (ax, ay, az).

    Column 3 of rows 0-2 and the whole of row 3 are copied from m.
    The axis must already be normalized.
    """
    c = math.cos(angle)
    s = math.sin(angle)
    d = 1.0 - c

    x = ax * d
    y = ay * d
    z = az * d
    axay = x * ay
    axaz = x * az
    ayaz = y * az

    out = m.copy()
    out[0, 0] = c + x * ax
    out[0, 1] = axay - s * az
    out[0, 2] = axaz + s * ay

    out[1, 0] = axay + s * az
    out[1, 1] = c + y * ay
    out[1, 2] = ayaz - s * ax

    out[2, 0] = axaz - s * ay
    out[2, 1] = ayaz + s * ax
    out[2, 2] = c + z * az
    return out


@njit(cache=True)
def scale4(m, sx, sy, sz):
    out = m.copy()
    out[0, 0] *= sx
    out[1, 1] *= sy
    out[2, 2] *= sz
    return out


if __name__ == "__main__":
    import timeit

    mat4 = np.array([[2.0, 0.0, 0.0, 0.0],
                     [0.0, 0.0, -3.0, 0.0],
                     [0.0, 1.5, 0.0, 0.0],
                     [4.0, 5.0, 6.0, 1.0]])

    det4(mat4)
    inv4(mat4, 1e-6)
    matmul4(mat4, mat4)

    N = 1_000_000
    print("det4:", timeit.timeit(lambda: det4(mat4), number=N))
    print("inv4:", timeit.timeit(lambda: inv4(mat4, 1e-6), number=N))
    print("matmul4:", timeit.timeit(lambda: matmul4(mat4, mat4), number=N))

    np.testing.assert_allclose(
        matmul4(inv4(mat4, 1e-6), mat4), np.eye(4), atol=1e-6, err_msg="inv4 failed"
    )
    np.testing.assert_allclose(
        det4(mat4), np.linalg.det(mat4), atol=1e-6, err_msg="det4 failed"
    )
