"""
Vec3 - the mutable 3D vector used by every prim3d query.

Pure Python rather than numpy: for 3-element vectors the attribute
access beats array creation on the per-query hot paths.

Operators (+, -, *, /, unary -) return new vectors. The named methods
(set, copy, normalize, negate, apply_matrix4, ...) modify the vector in
place and return it, so a Vec3 can be handed to a query as a
caller-owned output target.
"""
import math


class Vec3:
    """
    A lightweight 3D vector class that supports arithmetic operators.

    Stores components directly as attributes for fast access.
    Supports indexing like a tuple/list for compatibility.
    """
    __slots__ = ('x', 'y', 'z')

    def __init__(self, x=0.0, y=0.0, z=0.0):
        # Using try/except is faster than isinstance checks for the common case
        try:
            self.x = float(x)
            self.y = float(y)
            self.z = float(z)
        except TypeError:
            # x is a sequence (tuple, list, array, Vec3)
            if len(x) != 3:
                raise ValueError(f"Vec3 expects 3 components, got {len(x)}")
            self.x = float(x[0])
            self.y = float(x[1])
            self.z = float(x[2])

    def __getitem__(self, i):
        if i == 0: return self.x
        if i == 1: return self.y
        if i == 2: return self.z
        raise IndexError(f"Vec3 index {i} out of range")

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z

    def __len__(self):
        return 3

    def __repr__(self):
        return f"Vec3({self.x}, {self.y}, {self.z})"

    def __copy__(self):
        return Vec3(self.x, self.y, self.z)

    def __add__(self, other):
        # Try direct attribute access first (fast path for Vec3)
        try:
            return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)
        except AttributeError:
            return Vec3(self.x + other[0], self.y + other[1], self.z + other[2])

    def __radd__(self, other):
        return Vec3(self.x + other[0], self.y + other[1], self.z + other[2])

    def __sub__(self, other):
        try:
            return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)
        except AttributeError:
            return Vec3(self.x - other[0], self.y - other[1], self.z - other[2])

    def __rsub__(self, other):
        return Vec3(other[0] - self.x, other[1] - self.y, other[2] - self.z)

    def __mul__(self, scalar):
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar):
        return Vec3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __truediv__(self, scalar):
        inv = 1.0 / scalar
        return Vec3(self.x * inv, self.y * inv, self.z * inv)

    def __neg__(self):
        return Vec3(-self.x, -self.y, -self.z)

    # ------------------------------------------------------------------
    # In-place operations (return self for chaining)
    # ------------------------------------------------------------------

    def set(self, x, y, z):
        self.x = x
        self.y = y
        self.z = z
        return self

    def copy(self, v):
        """Copy components from any indexable."""
        self.x = float(v[0])
        self.y = float(v[1])
        self.z = float(v[2])
        return self

    def clone(self):
        return Vec3(self.x, self.y, self.z)

    def normalize(self):
        """Normalize in place. A zero vector stays zero."""
        mag = math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z) or 1.0
        inv_mag = 1.0 / mag
        self.x *= inv_mag
        self.y *= inv_mag
        self.z *= inv_mag
        return self

    def negate(self):
        self.x = -self.x
        self.y = -self.y
        self.z = -self.z
        return self

    def apply_matrix4(self, m):
        """Transform as a point by a row-major 4x4 matrix (p @ M), with homogeneous divide."""
        x, y, z = self.x, self.y, self.z
        w = x * m[0][3] + y * m[1][3] + z * m[2][3] + m[3][3]
        inv_w = 1.0 / w
        self.x = (x * m[0][0] + y * m[1][0] + z * m[2][0] + m[3][0]) * inv_w
        self.y = (x * m[0][1] + y * m[1][1] + z * m[2][1] + m[3][1]) * inv_w
        self.z = (x * m[0][2] + y * m[1][2] + z * m[2][2] + m[3][2]) * inv_w
        return self

    def apply_matrix3(self, m):
        """Multiply by a row-major 3x3 matrix (v @ M)."""
        x, y, z = self.x, self.y, self.z
        self.x = x * m[0][0] + y * m[1][0] + z * m[2][0]
        self.y = x * m[0][1] + y * m[1][1] + z * m[2][1]
        self.z = x * m[0][2] + y * m[1][2] + z * m[2][2]
        return self

    def transform_direction(self, m):
        """Transform by the upper 3x3 of a 4x4 matrix. Translation is ignored and
        the result is not renormalized."""
        x, y, z = self.x, self.y, self.z
        self.x = x * m[0][0] + y * m[1][0] + z * m[2][0]
        self.y = x * m[0][1] + y * m[1][1] + z * m[2][1]
        self.z = x * m[0][2] + y * m[1][2] + z * m[2][2]
        return self

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def dot(self, other):
        """Dot product."""
        return self.x * other[0] + self.y * other[1] + self.z * other[2]

    def cross(self, other):
        """Cross product."""
        return Vec3(
            self.y * other[2] - self.z * other[1],
            self.z * other[0] - self.x * other[2],
            self.x * other[1] - self.y * other[0]
        )

    def length_sq(self):
        """Squared length (avoids sqrt)."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self):
        """Vector length/magnitude."""
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def distance_to_sq(self, other):
        dx = self.x - other[0]
        dy = self.y - other[1]
        dz = self.z - other[2]
        return dx * dx + dy * dy + dz * dz

    def distance_to(self, other):
        return math.sqrt(self.distance_to_sq(other))

    def equals(self, other):
        """Exact componentwise equality."""
        return self.x == other[0] and self.y == other[1] and self.z == other[2]
