"""Test fixtures and utilities for prim3d testing.

- assertions: Custom assertion functions (assert_vec3_close, assert_no_result)
"""

from .assertions import assert_vec3_close, assert_no_result

__all__ = [
    'assert_vec3_close',
    'assert_no_result',
]
