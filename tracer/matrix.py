import math
import numpy as np

from tracer.errors import NonInvertibleTransformError
from tracer.math import EPSILON, Tuple


class Matrix:
    """Square matrix backed by a numpy array.

    Composition and inversion go through numpy. Transforming a Tuple is done
    with plain floats from a cached copy of the rows, which is the hot path
    while tracing.
    """

    __slots__ = ("data", "_rows")

    def __init__(self, data):
        arr = np.array(data, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError(f"matrix must be square, got shape {arr.shape}")
        arr.setflags(write=False)
        self.data = arr
        self._rows = tuple(tuple(row) for row in arr.tolist())

    @property
    def size(self) -> int:
        return self.data.shape[0]

    def __getitem__(self, index):
        row, col = index
        return self._rows[row][col]

    def __mul__(self, other):
        if isinstance(other, Matrix):
            return Matrix(self.data @ other.data)
        if isinstance(other, Tuple):
            if self.size != 4:
                raise ValueError("only 4x4 matrices transform tuples")
            r0, r1, r2, r3 = self._rows
            x, y, z, w = other.x, other.y, other.z, other.w
            return Tuple(
                r0[0] * x + r0[1] * y + r0[2] * z + r0[3] * w,
                r1[0] * x + r1[1] * y + r1[2] * z + r1[3] * w,
                r2[0] * x + r2[1] * y + r2[2] * z + r2[3] * w,
                r3[0] * x + r3[1] * y + r3[2] * z + r3[3] * w,
            )
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return (self.data.shape == other.data.shape
                and bool(np.allclose(self.data, other.data, rtol=0.0, atol=EPSILON)))

    __hash__ = None

    def rows(self):
        return self._rows

    def transpose(self):
        return Matrix(self.data.T)

    def determinant(self) -> float:
        return float(np.linalg.det(self.data))

    def is_invertible(self) -> bool:
        return abs(self.determinant()) > 1e-12

    def inverse(self):
        if not self.is_invertible():
            raise NonInvertibleTransformError(f"matrix is not invertible:\n{self.data}")
        return Matrix(np.linalg.inv(self.data))

    def __repr__(self):
        return f"Matrix({self.data.tolist()})"


def identity(size: int = 4) -> Matrix:
    return Matrix(np.identity(size))


def translation(x, y, z) -> Matrix:
    return Matrix([[1, 0, 0, x],
                   [0, 1, 0, y],
                   [0, 0, 1, z],
                   [0, 0, 0, 1]])


def scaling(x, y, z) -> Matrix:
    return Matrix([[x, 0, 0, 0],
                   [0, y, 0, 0],
                   [0, 0, z, 0],
                   [0, 0, 0, 1]])


def rotation_x(radians) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([[1, 0, 0, 0],
                   [0, c, -s, 0],
                   [0, s, c, 0],
                   [0, 0, 0, 1]])


def rotation_y(radians) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([[c, 0, s, 0],
                   [0, 1, 0, 0],
                   [-s, 0, c, 0],
                   [0, 0, 0, 1]])


def rotation_z(radians) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    return Matrix([[c, -s, 0, 0],
                   [s, c, 0, 0],
                   [0, 0, 1, 0],
                   [0, 0, 0, 1]])


def shearing(xy, xz, yx, yz, zx, zy) -> Matrix:
    return Matrix([[1, xy, xz, 0],
                   [yx, 1, yz, 0],
                   [zx, zy, 1, 0],
                   [0, 0, 0, 1]])


def view_transform(from_point: Tuple, to: Tuple, up: Tuple) -> Matrix:
    """Orientation matrix that looks from `from_point` toward `to`."""
    forward = (to - from_point).normalize()
    left = forward.cross(up.normalize())
    true_up = left.cross(forward)
    orientation = Matrix([[left.x, left.y, left.z, 0],
                          [true_up.x, true_up.y, true_up.z, 0],
                          [-forward.x, -forward.y, -forward.z, 0],
                          [0, 0, 0, 1]])
    return orientation * translation(-from_point.x, -from_point.y, -from_point.z)
