"""
The `constants` module defines the mathematical and geodetic constants used by the georeferencing pipeline.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

# Geodetic Constants
"""
Earth's semi-major axis as defined by the WGS84 geodetic system. Units: *m*

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378137.0

"""
Earth's ellipsoidal flattening. WGS84 Value. Units: *dimensionless*

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_f = 1.0 / 298.257223563

"""
Earth's semi-minor (polar) axis derived from the WGS84 flattening. Units: *m*
"""
WGS84_b = WGS84_a * (1.0 - WGS84_f)

"""
First eccentricity squared of the WGS84 ellipsoid. Units: *dimensionless*
"""
WGS84_ECC2 = WGS84_f * (2.0 - WGS84_f)

# Georeference Defaults
"""
Longitude of the default cartographic origin of the engine world. Units: *deg*
"""
DEFAULT_ORIGIN_LONGITUDE = -105.25737

"""
Latitude of the default cartographic origin of the engine world. Units: *deg*
"""
DEFAULT_ORIGIN_LATITUDE = 39.736401

"""
Height above the WGS84 ellipsoid of the default cartographic origin. Units: *m*
"""
DEFAULT_ORIGIN_HEIGHT = 2250.0
