"""Attitude kernels for re-orienting georeferenced objects.

Provides the shortest-arc rotation between two directions, used to align
an object's local up axis with the ellipsoid normal, together with the
quaternion-to-matrix and vector rotation helpers it relies on.
"""

from .conversions import (
    quaternion_rotation_between,
    quaternion_to_rotation_matrix,
    rotate_vector,
)

__all__ = [
    "quaternion_rotation_between",
    "quaternion_to_rotation_matrix",
    "rotate_vector",
]
