"""
Matrix helpers for prim3d.

All matrices are row-major and follow the row-vector convention used by
the rest of the package: a point transforms as ``p @ M`` and the
translation lives in the bottom row. Functions accept tuple-of-tuples,
lists of lists or numpy arrays, and return tuple-of-tuples.
"""

import math

import numpy as np

_IDENTITY_4x4_TUPLE = (
    (1.0, 0.0, 0.0, 0.0),
    (0.0, 1.0, 0.0, 0.0),
    (0.0, 0.0, 1.0, 0.0),
    (0.0, 0.0, 0.0, 1.0)
)


def unpack_args(*args):
    x = y = z = 0

    if len(args) == 3:
        x, y, z = args
    elif len(args) == 1 and len(args[0]) == 3:
        x, y, z = args[0]
    else:
        raise ValueError("Invalid number of arguments. Expected either a tuple (x, y, z) or three individual values.")

    return x, y, z


def rot_matrix(*args, rotate_order="xyz"):
    """Compute combined rotation matrix (angles in degrees) as tuple-of-tuples."""
    rx, ry, rz = unpack_args(*args)

    rx = math.radians(rx)
    ry = math.radians(ry)
    rz = math.radians(rz)

    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)

    order = rotate_order.lower()
    if sorted(order) != ['x', 'y', 'z']:
        raise ValueError(f"Invalid rotate_order: {rotate_order}")

    if order == "xyz":
        # Rx @ Ry @ Rz
        return (
            (cy*cz, cy*sz, -sy, 0.0),
            (sx*sy*cz - cx*sz, sx*sy*sz + cx*cz, sx*cy, 0.0),
            (cx*sy*cz + sx*sz, cx*sy*sz - sx*cz, cx*cy, 0.0),
            (0.0, 0.0, 0.0, 1.0)
        )
    if order == "zyx":
        # Rz @ Ry @ Rx
        return (
            (cy*cz, cx*sz + sx*sy*cz, sx*sz - cx*sy*cz, 0.0),
            (-cy*sz, cx*cz - sx*sy*sz, sx*cz + cx*sy*sz, 0.0),
            (sy, -sx*cy, cx*cy, 0.0),
            (0.0, 0.0, 0.0, 1.0)
        )

    R_x = (
        (1.0, 0.0, 0.0, 0.0),
        (0.0, cx, sx, 0.0),
        (0.0, -sx, cx, 0.0),
        (0.0, 0.0, 0.0, 1.0)
    )

    R_y = (
        (cy, 0.0, -sy, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (sy, 0.0, cy, 0.0),
        (0.0, 0.0, 0.0, 1.0)
    )

    R_z = (
        (cz, sz, 0.0, 0.0),
        (-sz, cz, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
        (0.0, 0.0, 0.0, 1.0)
    )

    axis_matrices = {'x': R_x, 'y': R_y, 'z': R_z}
    rotation_matrix = _IDENTITY_4x4_TUPLE
    for axis in reversed(order):
        rotation_matrix = mat_mul(axis_matrices[axis], rotation_matrix)
    return rotation_matrix


def scale_matrix(*args):
    x, y, z = unpack_args(*args)
    return (
        (x, 0.0, 0.0, 0.0),
        (0.0, y, 0.0, 0.0),
        (0.0, 0.0, z, 0.0),
        (0.0, 0.0, 0.0, 1.0)
    )


def translate_matrix(*args):
    x, y, z = unpack_args(*args)
    return (
        (1.0, 0.0, 0.0, 0.0),
        (0.0, 1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0, 0.0),
        (x, y, z, 1.0)
    )


def mat_mul(matrix1, matrix2):
    """Multiply two square matrices of the same size."""
    n = len(matrix1)
    result = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(n):
            for k in range(n):
                result[i][j] += matrix1[i][k] * matrix2[k][j]
    return tuple(tuple(row) for row in result)


def mat4_to_mat3(mat4):
    """Upper-left 3x3 block of a 4x4 matrix."""
    return (
        (mat4[0][0], mat4[0][1], mat4[0][2]),
        (mat4[1][0], mat4[1][1], mat4[1][2]),
        (mat4[2][0], mat4[2][1], mat4[2][2])
    )


def normal_matrix(matrix):
    """Matrix that transforms surface normals under ``matrix``.

    This is the inverse-transpose of the upper 3x3 block. Use it with
    ``Vec3.apply_matrix3`` and renormalize the result.

    Raises:
        ValueError: If the upper 3x3 block is singular.
    """
    upper = np.asarray(mat4_to_mat3(matrix), dtype=float)
    try:
        inverse = np.linalg.inv(upper)
    except np.linalg.LinAlgError as e:
        raise ValueError(f"Cannot derive a normal matrix: {e}") from e
    return tuple(tuple(float(v) for v in row) for row in inverse.T)
