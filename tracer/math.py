import math

EPSILON = 1e-4


def equals(a: float, b: float) -> bool:
    if a == b:
        # covers matching infinities
        return True
    return abs(a - b) < EPSILON


class Tuple:
    """Homogeneous coordinate: w == 1 for points, w == 0 for vectors."""

    __slots__ = ("x", "y", "z", "w")

    def __init__(self, x=0.0, y=0.0, z=0.0, w=0.0):
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)
        self.w = float(w)

    def is_point(self):
        return self.w == 1.0

    def is_vector(self):
        return self.w == 0.0

    def __add__(self, other):
        if self.is_point() and other.is_point():
            raise TypeError("cannot add two points")
        return Tuple(self.x + other.x,
                     self.y + other.y,
                     self.z + other.z,
                     self.w + other.w)

    def __sub__(self, other):
        if self.is_vector() and other.is_point():
            raise TypeError("cannot subtract a point from a vector")
        return Tuple(self.x - other.x,
                     self.y - other.y,
                     self.z - other.z,
                     self.w - other.w)

    def __mul__(self, t):
        return Tuple(self.x * t, self.y * t, self.z * t, self.w * t)

    __rmul__ = __mul__

    def __truediv__(self, t):
        return Tuple(self.x / t, self.y / t, self.z / t, self.w / t)

    def __neg__(self):
        return Tuple(-self.x, -self.y, -self.z, -self.w)

    def __eq__(self, other):
        if not isinstance(other, Tuple):
            return NotImplemented
        return (equals(self.x, other.x) and equals(self.y, other.y)
                and equals(self.z, other.z) and equals(self.w, other.w))

    __hash__ = None

    def __iter__(self):
        return iter((self.x, self.y, self.z, self.w))

    def dot(self, other):
        return (self.x * other.x + self.y * other.y
                + self.z * other.z + self.w * other.w)

    def cross(self, other):
        return vector(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x
        )

    def magnitude(self):
        return math.sqrt(self.x * self.x + self.y * self.y
                         + self.z * self.z + self.w * self.w)

    def normalize(self):
        return self / self.magnitude()

    def reflect(self, normal):
        # 반사 벡터: r = v - 2 * dot(v, n) * n
        return self - normal * (2 * self.dot(normal))

    def angle(self, other):
        cos = self.dot(other) / (self.magnitude() * other.magnitude())
        return math.acos(max(-1.0, min(1.0, cos)))

    def as_vector(self):
        return Tuple(self.x, self.y, self.z, 0.0)

    def __repr__(self):
        kind = "point" if self.w == 1.0 else "vector" if self.w == 0.0 else "Tuple"
        if kind == "Tuple":
            return f"Tuple({self.x:.5f}, {self.y:.5f}, {self.z:.5f}, {self.w:.5f})"
        return f"{kind}({self.x:.5f}, {self.y:.5f}, {self.z:.5f})"


def point(x, y, z) -> Tuple:
    return Tuple(x, y, z, 1.0)


def vector(x, y, z) -> Tuple:
    return Tuple(x, y, z, 0.0)


class Color:
    __slots__ = ("red", "green", "blue")

    def __init__(self, red=0.0, green=0.0, blue=0.0):
        self.red = float(red)
        self.green = float(green)
        self.blue = float(blue)

    def __add__(self, other):
        return Color(self.red + other.red,
                     self.green + other.green,
                     self.blue + other.blue)

    def __sub__(self, other):
        return Color(self.red - other.red,
                     self.green - other.green,
                     self.blue - other.blue)

    def __mul__(self, t):
        # 스칼라 곱 또는 원소별 곱(Hadamard)
        if isinstance(t, Color):
            return Color(self.red * t.red,
                         self.green * t.green,
                         self.blue * t.blue)
        return Color(self.red * t, self.green * t, self.blue * t)

    __rmul__ = __mul__

    def __truediv__(self, t):
        return Color(self.red / t, self.green / t, self.blue / t)

    def __eq__(self, other):
        if not isinstance(other, Color):
            return NotImplemented
        return (equals(self.red, other.red) and equals(self.green, other.green)
                and equals(self.blue, other.blue))

    __hash__ = None

    def __iter__(self):
        return iter((self.red, self.green, self.blue))

    def __repr__(self):
        return f"Color({self.red:.5f}, {self.green:.5f}, {self.blue:.5f})"


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
