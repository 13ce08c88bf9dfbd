"""
Coordinate Models for Spherical Earth Geometry.

This module converts between geographic coordinates and unit vectors on
the reference sphere. Great-circle interpolation is carried out on unit
vectors, where it reduces to a rotation in the plane spanned by the two
endpoints, and converted back to longitude/latitude afterwards.

Scientific Context
------------------
Domain: Spherical geometry
Model: Unit sphere, scaled by the mean Earth radius where distances matter

Why Unit Vectors
----------------
1. Interpolating longitude/latitude directly does not follow a great
   circle and breaks at the antimeridian.
2. Unit vectors have no singularity at the poles or at +-180 degrees.
3. The normal of the great-circle plane (cross product of the endpoints)
   gives the exact point where a path meets a given meridian.

References
----------
- Shoemake, K. (1985). Animating rotation with quaternion curves. SIGGRAPH.
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
"""

from typing import Tuple, Union
import numpy as np
from numpy.typing import NDArray

from common.types import GeographicPoint


def lonlat_to_unit_vector(
    longitude_deg: Union[float, NDArray[np.float64]],
    latitude_deg: Union[float, NDArray[np.float64]]
) -> NDArray[np.float64]:
    """Convert geographic coordinates to Cartesian unit vectors.

    Parameters
    ----------
    longitude_deg, latitude_deg : float or ndarray
        Coordinates in degrees. Arrays must broadcast.

    Returns
    -------
    ndarray
        Array of shape (..., 3) holding (X, Y, Z).

    Notes
    -----
    The frame has:
    - X-axis through the prime meridian at the equator
    - Y-axis through 90E at the equator
    - Z-axis through the North Pole
    """
    lon = np.radians(longitude_deg)
    lat = np.radians(latitude_deg)
    cos_lat = np.cos(lat)
    return np.stack(
        [cos_lat * np.cos(lon), cos_lat * np.sin(lon), np.sin(lat)],
        axis=-1
    )


def unit_vector_to_lonlat(
    vectors: NDArray[np.float64]
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    """Convert Cartesian vectors back to geographic coordinates.

    Parameters
    ----------
    vectors : ndarray
        Array of shape (..., 3). Need not be normalized.

    Returns
    -------
    Tuple[ndarray, ndarray]
        (longitude_deg, latitude_deg). Longitude lies in [-180, 180].
    """
    x = vectors[..., 0]
    y = vectors[..., 1]
    z = vectors[..., 2]
    lat = np.degrees(np.arctan2(z, np.hypot(x, y)))
    lon = np.degrees(np.arctan2(y, x))
    return lon, lat


def point_to_unit_vector(point: GeographicPoint) -> NDArray[np.float64]:
    """Unit vector of a single GeographicPoint."""
    return lonlat_to_unit_vector(point.longitude, point.latitude)


def normalize_longitude(longitude_deg: float) -> float:
    """Wrap a longitude into [-180, 180].

    Values already inside the range are returned unchanged, so +180 stays
    +180 rather than flipping to -180.
    """
    if -180.0 <= longitude_deg <= 180.0:
        return float(longitude_deg)
    return float((longitude_deg + 180.0) % 360.0 - 180.0)


def central_angle_between(
    a: NDArray[np.float64],
    b: NDArray[np.float64]
) -> float:
    """Angle subtended at the sphere center by two unit vectors, in radians.

    Uses atan2 of the cross and dot products, which stays accurate for
    both nearly coincident and nearly antipodal vectors (where acos and
    the haversine form lose precision).
    """
    cross = np.linalg.norm(np.cross(a, b))
    dot = float(np.dot(a, b))
    return float(np.arctan2(cross, dot))


def antimeridian_latitude(
    normal: NDArray[np.float64],
    lon_a: float,
    lat_a: float,
    lon_b: float,
    lat_b: float
) -> float:
    """Latitude at which a great circle crosses the +-180 meridian.

    Parameters
    ----------
    normal : ndarray
        Normal of the great-circle plane (p0 x p1).
    lon_a, lat_a, lon_b, lat_b : float
        Consecutive samples on either side of the antimeridian, degrees.

    Returns
    -------
    float
        Crossing latitude in degrees.

    Notes
    -----
    A point on the antimeridian is (-cos(phi), 0, sin(phi)). Requiring it
    to lie in the great-circle plane gives tan(phi) = n_x / n_z. When the
    plane contains the poles (n_z ~ 0) the crossing latitude is taken by
    linear interpolation in unwrapped longitude instead.
    """
    n_x, n_z = float(normal[0]), float(normal[2])
    if abs(n_z) > 1e-12:
        return float(np.degrees(np.arctan(n_x / n_z)))

    # Unwrap lon_b so the step from lon_a is the short way round
    lon_b_unwrapped = lon_a + ((lon_b - lon_a + 180.0) % 360.0 - 180.0)
    edge = 180.0 if lon_a > 0 else -180.0
    span = lon_b_unwrapped - lon_a
    if span == 0:
        return float(lat_a)
    weight = (edge - lon_a) / span
    return float(lat_a + weight * (lat_b - lat_a))
