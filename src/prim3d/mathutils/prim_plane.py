"""
Plane - an infinite plane in Hessian normal form.

A plane is stored as a unit ``normal`` and a scalar ``constant`` such
that every point P on the plane satisfies ``dot(normal, P) + constant == 0``.
The constant is therefore the negative signed distance from the world
origin to the plane along the normal.

The normal is assumed to be unit length; this is not checked on the
query path (see prim_checks for the debug-only layer). Point-returning
queries accept an optional ``target`` Vec3 that receives the result;
without one a new Vec3 is allocated. ``None`` means "no result".
"""

from typing import Optional

from prim3d import prim_checks
from .vec3 import Vec3
from .prim_math import normal_matrix as _normal_matrix


class Plane:
    """An infinite plane: unit normal plus signed offset constant."""

    def __init__(self, normal=None, constant: float = 0.0):
        self.normal = Vec3(normal) if normal is not None else Vec3(1.0, 0.0, 0.0)
        self.constant = float(constant)
        if prim_checks.checks_enabled():
            prim_checks.require_unit_length(self.normal, "Plane.normal")

    def __repr__(self):
        return f"Plane({self.normal!r}, {self.constant})"

    def __copy__(self):
        return self.clone()

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    def set(self, normal, constant: float):
        self.normal.copy(normal)
        self.constant = float(constant)
        if prim_checks.checks_enabled():
            prim_checks.require_unit_length(self.normal, "Plane.normal")
        return self

    def set_components(self, x: float, y: float, z: float, w: float):
        """Set normal (x, y, z) and constant w. The normal is taken as given."""
        self.normal.set(float(x), float(y), float(z))
        self.constant = float(w)
        return self

    def set_from_normal_and_coplanar_point(self, normal, point):
        self.normal.copy(normal)
        self.constant = -(point[0] * self.normal.x + point[1] * self.normal.y + point[2] * self.normal.z)
        if prim_checks.checks_enabled():
            prim_checks.require_unit_length(self.normal, "Plane.normal")
        return self

    def set_from_coplanar_points(self, a, b, c):
        """
        Set the plane through three points.

        The normal is ``normalize(cross(c - b, a - b))``, so its direction
        depends on the winding of the points. Collinear points give a zero
        normal.
        """
        cbx, cby, cbz = c[0] - b[0], c[1] - b[1], c[2] - b[2]
        abx, aby, abz = a[0] - b[0], a[1] - b[1], a[2] - b[2]
        normal = Vec3(
            cby * abz - cbz * aby,
            cbz * abx - cbx * abz,
            cbx * aby - cby * abx
        ).normalize()

        self.normal.copy(normal)
        self.constant = -(a[0] * normal.x + a[1] * normal.y + a[2] * normal.z)
        return self

    def copy(self, plane):
        self.normal.copy(plane.normal)
        self.constant = plane.constant
        return self

    def clone(self):
        return Plane().copy(self)

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def normalize(self):
        """
        Rescale the normal to unit length and the constant by the same factor.

        Raises:
            ZeroDivisionError: If the normal has zero length.
        """
        inverse_normal_length = 1.0 / self.normal.length()
        self.normal.x *= inverse_normal_length
        self.normal.y *= inverse_normal_length
        self.normal.z *= inverse_normal_length
        self.constant *= inverse_normal_length
        return self

    def negate(self):
        """Flip the orientation; the set of points is unchanged."""
        self.constant *= -1
        self.normal.negate()
        return self

    def distance_to_point(self, point) -> float:
        """Signed distance, positive on the side the normal points toward."""
        n = self.normal
        return n.x * point[0] + n.y * point[1] + n.z * point[2] + self.constant

    def distance_to_sphere(self, sphere) -> float:
        return self.distance_to_point(sphere.center) - sphere.radius

    def project_point(self, point, target: Optional[Vec3] = None) -> Vec3:
        if target is None:
            target = Vec3()
        d = self.distance_to_point(point)
        n = self.normal
        return target.set(point[0] - n.x * d, point[1] - n.y * d, point[2] - n.z * d)

    def intersect_line(self, line, target: Optional[Vec3] = None) -> Optional[Vec3]:
        """
        Intersect a Line3 segment with the plane.

        Returns the crossing point, the segment start when the segment lies
        in the plane, or None when the crossing is outside [0, 1] or the
        segment is parallel and off the plane.
        """
        direction = line.delta()
        n = self.normal
        denominator = n.x * direction.x + n.y * direction.y + n.z * direction.z

        if target is None:
            target = Vec3()

        if denominator == 0:
            if self.distance_to_point(line.start) == 0:
                return target.copy(line.start)
            return None

        start = line.start
        t = -(start.x * n.x + start.y * n.y + start.z * n.z + self.constant) / denominator

        if t < 0 or t > 1:
            return None

        return target.set(start.x + direction.x * t,
                          start.y + direction.y * t,
                          start.z + direction.z * t)

    def intersects_line(self, line) -> bool:
        """True only if the endpoints lie strictly on opposite sides."""
        start_sign = self.distance_to_point(line.start)
        end_sign = self.distance_to_point(line.end)

        return (start_sign < 0 and end_sign > 0) or (end_sign < 0 and start_sign > 0)

    def intersects_box(self, box) -> bool:
        return box.intersects_plane(self)

    def intersects_sphere(self, sphere) -> bool:
        return sphere.intersects_plane(self)

    def coplanar_point(self, target: Optional[Vec3] = None) -> Vec3:
        """The point on the plane closest to the world origin."""
        if target is None:
            target = Vec3()
        c = -self.constant
        return target.set(self.normal.x * c, self.normal.y * c, self.normal.z * c)

    # ------------------------------------------------------------------
    # Transforms
    # ------------------------------------------------------------------

    def apply_matrix4(self, matrix, normal_matrix=None):
        """
        Transform the plane by an affine 4x4 matrix (row-vector convention).

        Args:
            matrix: 4x4 affine matrix.
            normal_matrix: Optional precomputed normal matrix of ``matrix``
                (see prim_math.normal_matrix). Derived when omitted.
        """
        if normal_matrix is None:
            normal_matrix = _normal_matrix(matrix)

        reference_point = self.coplanar_point().apply_matrix4(matrix)
        normal = self.normal.apply_matrix3(normal_matrix).normalize()

        self.constant = -reference_point.dot(normal)
        if prim_checks.checks_enabled():
            prim_checks.require_unit_length(self.normal, "Plane.normal")
        return self

    def translate(self, offset):
        """Shift along the normal by the normal component of ``offset``."""
        n = self.normal
        self.constant -= offset[0] * n.x + offset[1] * n.y + offset[2] * n.z
        return self

    def equals(self, plane) -> bool:
        return plane.normal.equals(self.normal) and plane.constant == self.constant
