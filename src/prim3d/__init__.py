"""prim3d - ray and plane primitives for 3D spatial queries."""

__version__ = "0.1.0"

from .prim_config import KernelConfig, configure, get_config, reset_config
from .prim_checks import PreconditionError, PreconditionWarning
from .mathutils.vec3 import Vec3
from .mathutils.prim_shapes import Box3, Line3, Sphere
from .mathutils.prim_plane import Plane
from .mathutils.prim_ray import Ray


__all__ = [
    # Core
    'Ray',
    'Plane',
    # Collaborators
    'Vec3',
    'Box3',
    'Line3',
    'Sphere',
    # Configuration and diagnostics
    'KernelConfig',
    'configure',
    'get_config',
    'reset_config',
    'PreconditionError',
    'PreconditionWarning',
]
