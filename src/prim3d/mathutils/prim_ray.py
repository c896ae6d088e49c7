"""
Ray - a half-line with an origin and a unit direction.

Provides closest-point and distance queries (to a point, to a segment)
and intersection tests against spheres, planes, axis-aligned boxes and
triangles.

Conventions:
    - ``direction`` must be unit length. It is not checked on the query
      path; a non-unit direction gives wrong results, not an error.
    - Point-returning queries take an optional ``target`` Vec3 that
      receives the result and is returned. Without one a new Vec3 is
      allocated.
    - ``None`` means "no intersection". It is an expected outcome and
      distinct from a zero distance.
    - Temporaries are locals of each call; no state is shared between
      calls.
"""

import math
from typing import Optional

from prim3d import prim_checks
from .vec3 import Vec3


class Ray:
    """A ray with origin and normalized direction."""

    def __init__(self, origin=None, direction=None):
        self.origin = Vec3(origin) if origin is not None else Vec3(0.0, 0.0, 0.0)
        self.direction = Vec3(direction) if direction is not None else Vec3(0.0, 0.0, -1.0)
        if prim_checks.checks_enabled():
            prim_checks.require_unit_length(self.direction, "Ray.direction")

    def __repr__(self):
        return f"Ray({self.origin!r}, {self.direction!r})"

    def __copy__(self):
        return self.clone()

    def set(self, origin, direction):
        self.origin.copy(origin)
        self.direction.copy(direction)
        if prim_checks.checks_enabled():
            prim_checks.require_unit_length(self.direction, "Ray.direction")
        return self

    def copy(self, ray):
        self.origin.copy(ray.origin)
        self.direction.copy(ray.direction)
        return self

    def clone(self):
        return Ray().copy(self)

    def equals(self, ray) -> bool:
        return ray.origin.equals(self.origin) and ray.direction.equals(self.direction)

    # ------------------------------------------------------------------
    # Evaluation and mutation
    # ------------------------------------------------------------------

    def at(self, t: float, target: Optional[Vec3] = None) -> Vec3:
        """Point at ``origin + t * direction``. Negative t extrapolates behind the origin."""
        if target is None:
            target = Vec3()
        o, d = self.origin, self.direction
        return target.set(o.x + d.x * t, o.y + d.y * t, o.z + d.z * t)

    def look_at(self, v):
        """Point the ray from its origin toward ``v``."""
        self.direction.set(v[0] - self.origin.x, v[1] - self.origin.y, v[2] - self.origin.z).normalize()
        if prim_checks.checks_enabled():
            prim_checks.require_unit_length(self.direction, "Ray.direction")
        return self

    def recast(self, t: float):
        """Move the origin by ``t`` along the direction."""
        o, d = self.origin, self.direction
        o.set(o.x + d.x * t, o.y + d.y * t, o.z + d.z * t)
        return self

    def apply_matrix4(self, matrix):
        """
        Transform the ray by a 4x4 matrix (row-vector convention).

        The origin transforms as a point and the direction as a direction
        (no translation). The direction is NOT renormalized, so a scaling
        matrix leaves a non-unit direction behind.
        """
        self.origin.apply_matrix4(matrix)
        self.direction.transform_direction(matrix)
        if prim_checks.checks_enabled():
            prim_checks.require_unit_length(self.direction, "Ray.direction")
        return self

    # ------------------------------------------------------------------
    # Point queries
    # ------------------------------------------------------------------

    def closest_point_to_point(self, point, target: Optional[Vec3] = None) -> Vec3:
        """Closest point on the ray to ``point``, clamped to the origin."""
        if target is None:
            target = Vec3()
        o, d = self.origin, self.direction

        direction_distance = (point[0] - o.x) * d.x + (point[1] - o.y) * d.y + (point[2] - o.z) * d.z

        if direction_distance < 0:
            return target.copy(o)

        return target.set(o.x + d.x * direction_distance,
                          o.y + d.y * direction_distance,
                          o.z + d.z * direction_distance)

    def distance_to_point(self, point) -> float:
        return math.sqrt(self.distance_sq_to_point(point))

    def distance_sq_to_point(self, point) -> float:
        o, d = self.origin, self.direction
        px, py, pz = point[0], point[1], point[2]

        direction_distance = (px - o.x) * d.x + (py - o.y) * d.y + (pz - o.z) * d.z

        # point behind the ray
        if direction_distance < 0:
            return o.distance_to_sq(point)

        cx = o.x + d.x * direction_distance - px
        cy = o.y + d.y * direction_distance - py
        cz = o.z + d.z * direction_distance - pz
        return cx * cx + cy * cy + cz * cz

    def distance_sq_to_segment(self, v0, v1,
                               point_on_ray: Optional[Vec3] = None,
                               point_on_segment: Optional[Vec3] = None) -> float:
        """
        Squared distance between the ray and the segment v0-v1.

        Based on the ray/segment distance from Geometric Tools
        (GteDistRaySegment). The segment is parameterized about its centre
        as ``center + s1 * seg_dir`` with ``s1`` in ``[-extent, extent]`` and
        the ray as ``origin + s0 * direction`` with ``s0 >= 0``. The plane of
        (s0, s1) is split into six regions by where the unconstrained
        minimum falls; each region clamps one or both parameters.

        Args:
            v0, v1: Segment endpoints.
            point_on_ray: Optional Vec3 that receives the closest point on the ray.
            point_on_segment: Optional Vec3 that receives the closest point on the segment.

        Returns:
            The minimum squared distance.
        """
        seg_center = Vec3((v0[0] + v1[0]) * 0.5, (v0[1] + v1[1]) * 0.5, (v0[2] + v1[2]) * 0.5)
        seg_dir = Vec3(v1[0] - v0[0], v1[1] - v0[1], v1[2] - v0[2]).normalize()
        diff = self.origin - seg_center
        direction = self.direction

        seg_extent = math.sqrt((v1[0] - v0[0]) ** 2 + (v1[1] - v0[1]) ** 2 + (v1[2] - v0[2]) ** 2) * 0.5
        a01 = -direction.dot(seg_dir)
        b0 = diff.dot(direction)
        b1 = -diff.dot(seg_dir)
        c = diff.length_sq()
        det = abs(1 - a01 * a01)

        if det > 0:
            # The ray and segment are not parallel.
            s0 = a01 * b1 - b0
            s1 = a01 * b0 - b1
            ext_det = seg_extent * det

            if s0 >= 0:
                if s1 >= -ext_det:
                    if s1 <= ext_det:
                        # region 0: minimum at interior points of ray and segment
                        inv_det = 1 / det
                        s0 *= inv_det
                        s1 *= inv_det
                        sqr_dist = s0 * (s0 + a01 * s1 + 2 * b0) + s1 * (a01 * s0 + s1 + 2 * b1) + c
                    else:
                        # region 1
                        s1 = seg_extent
                        s0 = max(0, -(a01 * s1 + b0))
                        sqr_dist = -s0 * s0 + s1 * (s1 + 2 * b1) + c
                else:
                    # region 5
                    s1 = -seg_extent
                    s0 = max(0, -(a01 * s1 + b0))
                    sqr_dist = -s0 * s0 + s1 * (s1 + 2 * b1) + c
            else:
                if s1 <= -ext_det:
                    # region 4
                    s0 = max(0, -(-a01 * seg_extent + b0))
                    s1 = -seg_extent if s0 > 0 else min(max(-seg_extent, -b1), seg_extent)
                    sqr_dist = -s0 * s0 + s1 * (s1 + 2 * b1) + c
                elif s1 <= ext_det:
                    # region 3
                    s0 = 0
                    s1 = min(max(-seg_extent, -b1), seg_extent)
                    sqr_dist = s1 * (s1 + 2 * b1) + c
                else:
                    # region 2
                    s0 = max(0, -(a01 * seg_extent + b0))
                    s1 = seg_extent if s0 > 0 else min(max(-seg_extent, -b1), seg_extent)
                    sqr_dist = -s0 * s0 + s1 * (s1 + 2 * b1) + c
        else:
            # Ray and segment are parallel.
            s1 = -seg_extent if a01 > 0 else seg_extent
            s0 = max(0, -(a01 * s1 + b0))
            sqr_dist = -s0 * s0 + s1 * (s1 + 2 * b1) + c

        if point_on_ray is not None:
            self.at(s0, point_on_ray)

        if point_on_segment is not None:
            point_on_segment.set(seg_center.x + seg_dir.x * s1,
                                 seg_center.y + seg_dir.y * s1,
                                 seg_center.z + seg_dir.z * s1)

        return sqr_dist

    # ------------------------------------------------------------------
    # Sphere
    # ------------------------------------------------------------------

    def intersect_sphere(self, sphere, target: Optional[Vec3] = None) -> Optional[Vec3]:
        """
        Nearest intersection with ``sphere`` in front of the origin.

        Returns the exit point when the origin is inside the sphere, and
        None when the line misses the sphere or both hits are behind.
        """
        o, d = self.origin, self.direction
        cx = sphere.center.x - o.x
        cy = sphere.center.y - o.y
        cz = sphere.center.z - o.z

        tca = cx * d.x + cy * d.y + cz * d.z
        d2 = cx * cx + cy * cy + cz * cz - tca * tca
        radius2 = sphere.radius * sphere.radius

        if d2 > radius2:
            return None

        thc = math.sqrt(radius2 - d2)

        # t0 = entrance on the front of the sphere, t1 = exit on the back
        t0 = tca - thc
        t1 = tca + thc

        if t0 < 0 and t1 < 0:
            return None

        # origin inside the sphere
        if t0 < 0:
            return self.at(t1, target)

        return self.at(t0, target)

    def intersects_sphere(self, sphere) -> bool:
        # Uses the origin-clamped ray distance, not the perpendicular line
        # distance that intersect_sphere starts from.
        return self.distance_sq_to_point(sphere.center) <= sphere.radius * sphere.radius

    # ------------------------------------------------------------------
    # Plane
    # ------------------------------------------------------------------

    def distance_to_plane(self, plane) -> Optional[float]:
        """
        Ray parameter at which the ray meets ``plane``.

        Returns 0 for a ray lying in the plane, and None when the ray is
        parallel to the plane off it or the plane is behind the origin.
        Parallelism is an exact zero test, so nearly parallel rays return
        very large distances.
        """
        n, d, o = plane.normal, self.direction, self.origin
        denominator = n.x * d.x + n.y * d.y + n.z * d.z

        if denominator == 0:
            if plane.distance_to_point(o) == 0:
                return 0
            return None

        t = -(o.x * n.x + o.y * n.y + o.z * n.z + plane.constant) / denominator

        return t if t >= 0 else None

    def intersect_plane(self, plane, target: Optional[Vec3] = None) -> Optional[Vec3]:
        t = self.distance_to_plane(plane)

        if t is None:
            return None

        return self.at(t, target)

    def intersects_plane(self, plane) -> bool:
        dist_to_point = plane.distance_to_point(self.origin)

        if dist_to_point == 0:
            return True

        n, d = plane.normal, self.direction
        denominator = n.x * d.x + n.y * d.y + n.z * d.z

        # Opposite signs: the direction points back across the plane.
        # Parallel rays (denominator == 0) fall through to False.
        return denominator * dist_to_point < 0

    # ------------------------------------------------------------------
    # Box
    # ------------------------------------------------------------------

    def intersect_box(self, box, target: Optional[Vec3] = None) -> Optional[Vec3]:
        """
        Intersect with an axis-aligned Box3 using the slab method.

        Returns the entry point, or the exit point when the origin is
        inside the box, or None.

        A zero direction component gives an infinite reciprocal. If the
        origin also lies exactly on that axis's slab boundary, the product
        ``0 * inf`` is NaN. NaN compares false both ways, so the running
        bound is then replaced by the next axis's bound.
        """
        d, o = self.direction, self.origin

        invdirx = 1 / d.x if d.x != 0 else math.copysign(math.inf, d.x)
        invdiry = 1 / d.y if d.y != 0 else math.copysign(math.inf, d.y)
        invdirz = 1 / d.z if d.z != 0 else math.copysign(math.inf, d.z)

        if invdirx >= 0:
            tmin = (box.min.x - o.x) * invdirx
            tmax = (box.max.x - o.x) * invdirx
        else:
            tmin = (box.max.x - o.x) * invdirx
            tmax = (box.min.x - o.x) * invdirx

        if invdiry >= 0:
            tymin = (box.min.y - o.y) * invdiry
            tymax = (box.max.y - o.y) * invdiry
        else:
            tymin = (box.max.y - o.y) * invdiry
            tymax = (box.min.y - o.y) * invdiry

        if tmin > tymax or tymin > tmax:
            return None

        if tymin > tmin or math.isnan(tmin):
            tmin = tymin

        if tymax < tmax or math.isnan(tmax):
            tmax = tymax

        if invdirz >= 0:
            tzmin = (box.min.z - o.z) * invdirz
            tzmax = (box.max.z - o.z) * invdirz
        else:
            tzmin = (box.max.z - o.z) * invdirz
            tzmax = (box.min.z - o.z) * invdirz

        if tmin > tzmax or tzmin > tmax:
            return None

        if tzmin > tmin or math.isnan(tmin):
            tmin = tzmin

        if tzmax < tmax or math.isnan(tmax):
            tmax = tzmax

        # box entirely behind the ray
        if tmax < 0:
            return None

        return self.at(tmin if tmin >= 0 else tmax, target)

    def intersects_box(self, box) -> bool:
        return self.intersect_box(box, Vec3()) is not None

    # ------------------------------------------------------------------
    # Triangle
    # ------------------------------------------------------------------

    def intersect_triangle(self, a, b, c, backface_culling: bool = False,
                           target: Optional[Vec3] = None) -> Optional[Vec3]:
        """
        Intersect with triangle (a, b, c).

        Based on GteIntrRay3Triangle3. With Q = origin - a, D = direction,
        E1 = b - a, E2 = c - a and N = cross(E1, E2), solve
        ``Q + t*D = b1*E1 + b2*E2`` through

            |D.N| * b1 = sign(D.N) * D.(Q x E2)
            |D.N| * b2 = sign(D.N) * D.(E1 x Q)
            |D.N| * t  = -sign(D.N) * Q.N

        The triangle faces the side its normal points to (counter-clockwise
        winding). With ``backface_culling`` a ray hitting the back face
        returns None.
        """
        edge1 = Vec3(b[0] - a[0], b[1] - a[1], b[2] - a[2])
        edge2 = Vec3(c[0] - a[0], c[1] - a[1], c[2] - a[2])
        normal = edge1.cross(edge2)
        direction = self.direction

        ddn = direction.dot(normal)

        if ddn > 0:
            if backface_culling:
                return None
            sign = 1
        elif ddn < 0:
            sign = -1
            ddn = -ddn
        else:
            return None

        diff = Vec3(self.origin.x - a[0], self.origin.y - a[1], self.origin.z - a[2])
        dd_qxe2 = sign * direction.dot(diff.cross(edge2))

        # b1 < 0, no intersection
        if dd_qxe2 < 0:
            return None

        dd_e1xq = sign * direction.dot(edge1.cross(diff))

        # b2 < 0, no intersection
        if dd_e1xq < 0:
            return None

        # b1 + b2 > 1, no intersection
        if dd_qxe2 + dd_e1xq > ddn:
            return None

        # The line intersects the triangle; check that the ray does.
        qdn = -sign * diff.dot(normal)

        # t < 0, no intersection
        if qdn < 0:
            return None

        return self.at(qdn / ddn, target)
