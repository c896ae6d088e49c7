"""
Collaborator shapes consumed by Ray and Plane: Line3, Sphere and Box3.

Each shape is the authority on its own geometry. Plane.intersects_box and
Plane.intersects_sphere delegate here, and these predicates read the
plane's normal/constant directly.
"""

import math
from typing import Optional

from .vec3 import Vec3


class Line3:
    """A line segment between two points."""

    def __init__(self, start=None, end=None):
        self.start = Vec3(start) if start is not None else Vec3()
        self.end = Vec3(end) if end is not None else Vec3()

    def __repr__(self):
        return f"Line3({self.start!r}, {self.end!r})"

    def __copy__(self):
        return self.clone()

    def set(self, start, end):
        self.start.copy(start)
        self.end.copy(end)
        return self

    def copy(self, line):
        self.start.copy(line.start)
        self.end.copy(line.end)
        return self

    def clone(self):
        return Line3().copy(self)

    def delta(self, target: Optional[Vec3] = None) -> Vec3:
        """end - start."""
        if target is None:
            target = Vec3()
        return target.set(self.end.x - self.start.x,
                          self.end.y - self.start.y,
                          self.end.z - self.start.z)

    def distance_sq(self) -> float:
        return self.start.distance_to_sq(self.end)

    def distance(self) -> float:
        return self.start.distance_to(self.end)

    def get_center(self, target: Optional[Vec3] = None) -> Vec3:
        if target is None:
            target = Vec3()
        return target.set((self.start.x + self.end.x) * 0.5,
                          (self.start.y + self.end.y) * 0.5,
                          (self.start.z + self.end.z) * 0.5)

    def at(self, t: float, target: Optional[Vec3] = None) -> Vec3:
        """Point at parameter t (0 = start, 1 = end)."""
        if target is None:
            target = Vec3()
        s, e = self.start, self.end
        return target.set(s.x + (e.x - s.x) * t,
                          s.y + (e.y - s.y) * t,
                          s.z + (e.z - s.z) * t)

    def equals(self, line) -> bool:
        return line.start.equals(self.start) and line.end.equals(self.end)


class Sphere:
    """A sphere given by centre and radius. A negative radius marks it empty."""

    def __init__(self, center=None, radius: float = -1.0):
        self.center = Vec3(center) if center is not None else Vec3()
        self.radius = float(radius)

    def __repr__(self):
        return f"Sphere({self.center!r}, {self.radius})"

    def __copy__(self):
        return self.clone()

    def set(self, center, radius: float):
        self.center.copy(center)
        self.radius = float(radius)
        return self

    def copy(self, sphere):
        self.center.copy(sphere.center)
        self.radius = sphere.radius
        return self

    def clone(self):
        return Sphere().copy(self)

    def is_empty(self) -> bool:
        return self.radius < 0

    def contains_point(self, point) -> bool:
        return self.center.distance_to_sq(point) <= self.radius * self.radius

    def distance_to_point(self, point) -> float:
        """Signed distance from the surface; negative inside."""
        return self.center.distance_to(point) - self.radius

    def intersects_sphere(self, sphere) -> bool:
        radius_sum = self.radius + sphere.radius
        return self.center.distance_to_sq(sphere.center) <= radius_sum * radius_sum

    def intersects_box(self, box) -> bool:
        return box.intersects_sphere(self)

    def intersects_plane(self, plane) -> bool:
        return abs(plane.distance_to_point(self.center)) <= self.radius

    def equals(self, sphere) -> bool:
        return sphere.center.equals(self.center) and sphere.radius == self.radius


class Box3:
    """
    An axis-aligned box given by its min and max corners.

    The default box is empty (min = +inf, max = -inf) so that
    set_from_points can grow it from nothing.
    """

    def __init__(self, min_point=None, max_point=None):
        self.min = Vec3(min_point) if min_point is not None else Vec3(math.inf, math.inf, math.inf)
        self.max = Vec3(max_point) if max_point is not None else Vec3(-math.inf, -math.inf, -math.inf)

    def __repr__(self):
        return f"Box3({self.min!r}, {self.max!r})"

    def __copy__(self):
        return self.clone()

    def set(self, min_point, max_point):
        self.min.copy(min_point)
        self.max.copy(max_point)
        return self

    def set_from_points(self, points):
        self.min.set(math.inf, math.inf, math.inf)
        self.max.set(-math.inf, -math.inf, -math.inf)
        for p in points:
            self.min.set(min(self.min.x, p[0]), min(self.min.y, p[1]), min(self.min.z, p[2]))
            self.max.set(max(self.max.x, p[0]), max(self.max.y, p[1]), max(self.max.z, p[2]))
        return self

    def copy(self, box):
        self.min.copy(box.min)
        self.max.copy(box.max)
        return self

    def clone(self):
        return Box3().copy(self)

    def is_empty(self) -> bool:
        return self.max.x < self.min.x or self.max.y < self.min.y or self.max.z < self.min.z

    def get_center(self, target: Optional[Vec3] = None) -> Vec3:
        if target is None:
            target = Vec3()
        if self.is_empty():
            return target.set(0.0, 0.0, 0.0)
        return target.set((self.min.x + self.max.x) * 0.5,
                          (self.min.y + self.max.y) * 0.5,
                          (self.min.z + self.max.z) * 0.5)

    def contains_point(self, point) -> bool:
        return not (point[0] < self.min.x or point[0] > self.max.x or
                    point[1] < self.min.y or point[1] > self.max.y or
                    point[2] < self.min.z or point[2] > self.max.z)

    def clamp_point(self, point, target: Optional[Vec3] = None) -> Vec3:
        if target is None:
            target = Vec3()
        return target.set(
            max(self.min.x, min(self.max.x, point[0])),
            max(self.min.y, min(self.max.y, point[1])),
            max(self.min.z, min(self.max.z, point[2]))
        )

    def distance_to_point(self, point) -> float:
        return self.clamp_point(point).distance_to(point)

    def intersects_box(self, box) -> bool:
        return not (box.max.x < self.min.x or box.min.x > self.max.x or
                    box.max.y < self.min.y or box.min.y > self.max.y or
                    box.max.z < self.min.z or box.min.z > self.max.z)

    def intersects_sphere(self, sphere) -> bool:
        closest = self.clamp_point(sphere.center)
        return closest.distance_to_sq(sphere.center) <= sphere.radius * sphere.radius

    def intersects_plane(self, plane) -> bool:
        # Find the minimum and maximum dot over the box corners; the plane
        # crosses the box when -constant lies between them.
        n = plane.normal
        if n.x > 0:
            min_dot = n.x * self.min.x
            max_dot = n.x * self.max.x
        else:
            min_dot = n.x * self.max.x
            max_dot = n.x * self.min.x

        if n.y > 0:
            min_dot += n.y * self.min.y
            max_dot += n.y * self.max.y
        else:
            min_dot += n.y * self.max.y
            max_dot += n.y * self.min.y

        if n.z > 0:
            min_dot += n.z * self.min.z
            max_dot += n.z * self.max.z
        else:
            min_dot += n.z * self.max.z
            max_dot += n.z * self.min.z

        return min_dot <= -plane.constant <= max_dot

    def equals(self, box) -> bool:
        return box.min.equals(self.min) and box.max.equals(self.max)
