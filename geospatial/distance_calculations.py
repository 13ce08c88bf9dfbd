"""
Great-Circle Distance Calculations on the Reference Sphere.

This module provides the geodesic distance service of the engine. All
distances are great-circle distances on a sphere with the mean Earth
radius, so that "distance from p0" is the same quantity the equidistance
circle, the distance labels and the antipode invariant are built on.

Scientific Context
------------------
Domain: Spherical geometry
Model: Great circle (shortest path) on a sphere of radius R

Why a Sphere
------------
1. The line of sight is a great circle: it passes through both antipodes
   and closes on itself. On an ellipsoid geodesics generally do not close.
2. Distance labels are display values rounded to one significant digit;
   the ellipsoidal correction (< 0.5%) never changes them meaningfully.
3. Point-to-antipode distance is exactly half the circumference, which
   keeps the antipode invariant testable.

Implementation
--------------
This module wraps `pyproj.Geod` configured as a sphere (a = b = R). Its
GeographicLib core converges for every configuration, antipodal included.

References
----------
- Karney, C.F.F. (2013). Algorithms for geodesics. Journal of Geodesy, 87(1), 43-55.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable, List

import numpy as np
from numpy.typing import NDArray

from pyproj import Geod

from common.constants import GeodesicConstants
from common.types import GeographicPoint


EARTH_MEAN_RADIUS_M = GeodesicConstants.EARTH_MEAN_RADIUS.value


@lru_cache(maxsize=8)
def _sphere_geod(radius_m: float) -> Geod:
    """Geod calculator for a sphere of the given radius."""
    return Geod(a=radius_m, b=radius_m)


@dataclass(frozen=True)
class GeodesicResult:
    """Result of an inverse great-circle calculation.

    Attributes
    ----------
    distance_m : float
        Great-circle distance in meters.
    azimuth_forward_deg : float
        Direction from point 1 to point 2 in degrees, clockwise from north.
    azimuth_back_deg : float
        Direction from point 2 to point 1 in degrees, clockwise from north.
    """
    distance_m: float
    azimuth_forward_deg: float
    azimuth_back_deg: float


def great_circle_inverse(
    p0: GeographicPoint,
    p1: GeographicPoint,
    radius_m: float = EARTH_MEAN_RADIUS_M
) -> GeodesicResult:
    """Solve the inverse problem on the sphere.

    Parameters
    ----------
    p0, p1 : GeographicPoint
        Endpoints.
    radius_m : float
        Sphere radius in meters.

    Returns
    -------
    GeodesicResult
        Distance in meters, forward and back azimuths in degrees.

    Examples
    --------
    >>> result = great_circle_inverse(GeographicPoint(0, 0), GeographicPoint(0, 1))
    >>> round(result.distance_m)
    111195
    """
    az_forward, az_back, distance_m = _sphere_geod(radius_m).inv(
        p0.longitude, p0.latitude, p1.longitude, p1.latitude
    )
    return GeodesicResult(
        distance_m=float(distance_m),
        azimuth_forward_deg=float(az_forward),
        azimuth_back_deg=float(az_back)
    )


def great_circle_distance(
    p0: GeographicPoint,
    p1: GeographicPoint,
    radius_m: float = EARTH_MEAN_RADIUS_M
) -> float:
    """Great-circle distance between two points, in meters.

    This is a convenience function that returns only the distance.
    """
    return great_circle_inverse(p0, p1, radius_m).distance_m


def great_circle_distance_batch(
    origin: GeographicPoint,
    points: Iterable[GeographicPoint],
    radius_m: float = EARTH_MEAN_RADIUS_M
) -> NDArray[np.float64]:
    """Distances from one origin to many points, in meters.

    Parameters
    ----------
    origin : GeographicPoint
        Common first point.
    points : iterable of GeographicPoint
        Second points.

    Returns
    -------
    ndarray
        Distances in meters, one per point.
    """
    pts: List[GeographicPoint] = list(points)
    if not pts:
        return np.zeros(0, dtype=np.float64)
    lons = np.array([p.longitude for p in pts], dtype=np.float64)
    lats = np.array([p.latitude for p in pts], dtype=np.float64)
    _, _, distances = _sphere_geod(radius_m).inv(
        np.full_like(lons, origin.longitude),
        np.full_like(lats, origin.latitude),
        lons,
        lats
    )
    return np.asarray(distances, dtype=np.float64)


def half_circumference(radius_m: float = EARTH_MEAN_RADIUS_M) -> float:
    """Distance from any point to its antipode, in meters."""
    return GeodesicConstants.half_circumference(radius_m)
