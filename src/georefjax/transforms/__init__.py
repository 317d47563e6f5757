"""Affine transform helpers and engine/geodetic axis conventions."""

from .affine import (
    ENGINE_TO_OR_FROM_GEODETIC,
    SCALE_TO_ENGINE,
    SCALE_TO_GEODETIC,
    affine_inverse,
    basis_scale,
    get_translation,
    scale_matrix,
    translation_matrix,
    with_translation,
)

__all__ = [
    "ENGINE_TO_OR_FROM_GEODETIC",
    "SCALE_TO_ENGINE",
    "SCALE_TO_GEODETIC",
    "affine_inverse",
    "basis_scale",
    "get_translation",
    "scale_matrix",
    "translation_matrix",
    "with_translation",
]
