"""
georefjax keeps single-precision engine objects anchored to precise positions on the WGS84 ellipsoid, implemented in JAX.
"""

from .constants import (
    DEG2RAD,
    RAD2DEG,
    WGS84_a,
    WGS84_f,
    WGS84_b,
    WGS84_ECC2,
    DEFAULT_ORIGIN_LONGITUDE,
    DEFAULT_ORIGIN_LATITUDE,
    DEFAULT_ORIGIN_HEIGHT,
)

from .config import set_dtype, get_dtype

from .coordinates import (
    position_geodetic_to_ecef,
    position_ecef_to_geodetic,
    geodetic_surface_normal,
    rotation_ecef_to_enu,
    transform_enu_to_ecef,
    relative_position_ecef_to_enu,
)

from .attitude import (
    quaternion_rotation_between,
    quaternion_to_rotation_matrix,
    rotate_vector,
)

from .transforms import (
    ENGINE_TO_OR_FROM_GEODETIC,
    SCALE_TO_ENGINE,
    SCALE_TO_GEODETIC,
    affine_inverse,
    basis_scale,
)

from .georeference import (
    GeodeticService,
    Georeference,
    OriginPlacement,
)

from .component import (
    ComponentState,
    EngineHost,
    GeoreferenceComponent,
    GeoreferenceComponentConfig,
    DisplayFields,
    GeoreferenceError,
    MissingDependencyError,
    DegenerateGeometryError,
)

from .features import (
    FeatureId,
    FeatureIdType,
)

from .simulated_engine import SimulatedEngine

__all__ = [
    # Constants
    "DEG2RAD",
    "RAD2DEG",
    "WGS84_a",
    "WGS84_f",
    "WGS84_b",
    "WGS84_ECC2",
    "DEFAULT_ORIGIN_LONGITUDE",
    "DEFAULT_ORIGIN_LATITUDE",
    "DEFAULT_ORIGIN_HEIGHT",
    # Config
    "set_dtype",
    "get_dtype",
    # Coordinates
    "position_geodetic_to_ecef",
    "position_ecef_to_geodetic",
    "geodetic_surface_normal",
    "rotation_ecef_to_enu",
    "transform_enu_to_ecef",
    "relative_position_ecef_to_enu",
    # Attitude
    "quaternion_rotation_between",
    "quaternion_to_rotation_matrix",
    "rotate_vector",
    # Transforms
    "ENGINE_TO_OR_FROM_GEODETIC",
    "SCALE_TO_ENGINE",
    "SCALE_TO_GEODETIC",
    "affine_inverse",
    "basis_scale",
    # Georeference
    "GeodeticService",
    "Georeference",
    "OriginPlacement",
    # Component
    "ComponentState",
    "EngineHost",
    "GeoreferenceComponent",
    "GeoreferenceComponentConfig",
    "DisplayFields",
    "GeoreferenceError",
    "MissingDependencyError",
    "DegenerateGeometryError",
    # Features
    "FeatureId",
    "FeatureIdType",
    # Engine
    "SimulatedEngine",
]
