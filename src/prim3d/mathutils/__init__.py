"""Vector, matrix and primitive-shape math for prim3d."""

from .vec3 import Vec3
from .prim_shapes import Box3, Line3, Sphere
from .prim_plane import Plane
from .prim_ray import Ray

__all__ = ['Vec3', 'Box3', 'Line3', 'Sphere', 'Plane', 'Ray']
