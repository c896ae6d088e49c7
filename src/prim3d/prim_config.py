"""
Runtime configuration for prim3d.

The geometry queries themselves take no options. The configuration only
controls the debug-only precondition layer in ``prim_checks``, which is
off by default so the release path carries no validation cost.

Usage:
    from prim3d import configure, get_config

    # Enable unit-length checks, warn on violations
    configure(check_preconditions=True)

    # Raise instead of warning
    configure(check_preconditions=True, strict=True)

Environment variables (read at import time and by reset_config()):
    PRIM3D_CHECK_PRECONDITIONS=1   enable precondition checks
    PRIM3D_STRICT_PRECONDITIONS=1  raise PreconditionError instead of warning
"""

import os
from dataclasses import dataclass, fields, replace
from typing import Optional


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').lower() in ('1', 'true', 'yes')


@dataclass
class KernelConfig:
    """
    Configuration options for the prim3d kernel.

    Attributes:
        check_preconditions: Validate that ray directions and plane normals
            are unit length when they are set or transformed.
        strict: When checking, raise PreconditionError instead of emitting
            a PreconditionWarning.
        unit_tolerance: Allowed deviation of a squared length from 1.0
            before a vector counts as non-unit.
    """
    check_preconditions: bool = False
    strict: bool = False
    unit_tolerance: float = 1e-6

    @classmethod
    def from_env(cls) -> 'KernelConfig':
        return cls(
            check_preconditions=_env_flag('PRIM3D_CHECK_PRECONDITIONS'),
            strict=_env_flag('PRIM3D_STRICT_PRECONDITIONS'),
        )


_config = KernelConfig.from_env()


def get_config() -> KernelConfig:
    """Get the active configuration."""
    return _config


def configure(config: Optional[KernelConfig] = None, **overrides) -> KernelConfig:
    """
    Replace or update the active configuration.

    Args:
        config: A complete KernelConfig to install. Defaults to the
            currently active one.
        **overrides: Individual fields to change on top of ``config``.

    Returns:
        The newly active KernelConfig.
    """
    global _config
    known = {f.name for f in fields(KernelConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"Unknown config option(s): {', '.join(sorted(unknown))}")

    base = config if config is not None else _config
    _config = replace(base, **overrides)
    return _config


def reset_config() -> KernelConfig:
    """Reset the configuration from the environment."""
    global _config
    _config = KernelConfig.from_env()
    return _config
