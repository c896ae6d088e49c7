"""
Debug-only precondition checks.

Ray directions and plane normals are required to be unit length, but the
queries never verify it: a violation silently degrades results. When
``KernelConfig.check_preconditions`` is enabled, the mutating entry
points of Ray and Plane call ``require_unit_length`` so that violations
are reported where they are introduced.
"""

import warnings

from prim3d import prim_config


class PreconditionWarning(UserWarning):
    """A caller precondition was violated (strict mode off)."""


class PreconditionError(ValueError):
    """A caller precondition was violated (strict mode on)."""


def checks_enabled() -> bool:
    return prim_config.get_config().check_preconditions


def require_unit_length(vector, name: str) -> bool:
    """Report ``vector`` if it is not unit length.

    Returns:
        True if the vector is unit length within the configured tolerance.

    Raises:
        PreconditionError: In strict mode, when the check fails.
    """
    config = prim_config.get_config()
    length_sq = vector[0] * vector[0] + vector[1] * vector[1] + vector[2] * vector[2]
    if abs(length_sq - 1.0) <= config.unit_tolerance:
        return True

    message = f"{name} must be unit length, got squared length {length_sq:.6g}"
    if config.strict:
        raise PreconditionError(message)
    warnings.warn(message, PreconditionWarning, stacklevel=3)
    return False
