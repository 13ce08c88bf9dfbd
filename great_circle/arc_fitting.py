"""
Great Circle Arc Fitting.

Interpolates the shortest great-circle path between two geographic points
and cuts it into arcs wherever it crosses the antimeridian, so that no arc
wraps discontinuously in longitude when drawn on a flat map.

Algorithm
---------
1. Convert both endpoints to unit vectors and compute the central angle g.
2. Spherical linear interpolation at fractions f = i / segments:
       v(f) = sin((1 - f) g) / sin(g) * v0 + sin(f g) / sin(g) * v1
3. Convert back to longitude/latitude; pin the first and last sample to
   the exact inputs.
4. Walk the samples; whenever two neighbours differ by more than 180
   degrees of longitude, close the current arc on the antimeridian and open
   the next arc on the opposite side, at the exact crossing latitude. An
   endpoint on the antimeridian itself is not a crossing: it keeps the sign
   of its neighbour's longitude.

g = pi (antipodal endpoints) has infinitely many great circles and g = 0
has no direction; both are rejected instead of yielding NaN samples.
"""

from typing import List
import math
import numbers

import numpy as np

from common.constants import GeodesicConstants
from common.errors import DegenerateInputError, InvalidArgumentError
from common.logging_config import get_logger
from common.types import Arc, GeographicPoint
from geospatial.coordinate_models import (
    antimeridian_latitude,
    central_angle_between,
    point_to_unit_vector,
    unit_vector_to_lonlat,
)

logger = get_logger(__name__)

ANTIPODAL_TOLERANCE_RAD = GeodesicConstants.ANTIPODAL_TOLERANCE_RAD.value
COINCIDENT_TOLERANCE_RAD = GeodesicConstants.COINCIDENT_TOLERANCE_RAD.value


def central_angle(p0: GeographicPoint, p1: GeographicPoint) -> float:
    """Angle between two points seen from the sphere center, in radians."""
    return central_angle_between(point_to_unit_vector(p0), point_to_unit_vector(p1))


def _validate_segments(segments) -> int:
    if isinstance(segments, bool) or not isinstance(segments, numbers.Integral):
        raise InvalidArgumentError(f"segments must be an integer, got {segments!r}")
    if segments < 1:
        raise InvalidArgumentError(f"segments must be >= 1, got {segments}")
    return int(segments)


def fit_great_circle(
    p0: GeographicPoint,
    p1: GeographicPoint,
    segments: int
) -> List[Arc]:
    """Fit the shortest great-circle path between two points.

    Parameters
    ----------
    p0, p1 : GeographicPoint
        Start and end of the path.
    segments : int
        Number of equal-angle steps; the path has segments + 1 samples.

    Returns
    -------
    List[Arc]
        One arc, or several when the path crosses the antimeridian. Each
        crossing adds one sample on either side of the +-180 meridian.
        The first and last points are p0 and p1, except that a longitude
        of +-180 may come back as -+180 to match its neighbour (compare
        with `GeographicPoint.same_location`).

    Raises
    ------
    InvalidArgumentError
        If segments is not an integer >= 1.
    DegenerateInputError
        If p0 and p1 coincide or are exactly antipodal.

    Examples
    --------
    >>> arcs = fit_great_circle(GeographicPoint(0, 0), GeographicPoint(10, 0), 40)
    >>> len(arcs), len(arcs[0])
    (1, 41)
    """
    segments = _validate_segments(segments)

    v0 = point_to_unit_vector(p0)
    v1 = point_to_unit_vector(p1)
    g = central_angle_between(v0, v1)

    if np.pi - g < ANTIPODAL_TOLERANCE_RAD:
        logger.warning(f"Antipodal endpoints {p0.as_tuple()} and {p1.as_tuple()}")
        raise DegenerateInputError(
            f"{p0.as_tuple()} and {p1.as_tuple()} are antipodal: "
            f"there is no single great circle through them",
            points=(p0, p1)
        )
    if g < COINCIDENT_TOLERANCE_RAD:
        logger.warning(f"Coincident endpoints {p0.as_tuple()}")
        raise DegenerateInputError(
            f"{p0.as_tuple()} and {p1.as_tuple()} are the same point: "
            f"the path has no direction",
            points=(p0, p1)
        )

    fractions = np.linspace(0.0, 1.0, segments + 1)
    sin_g = np.sin(g)
    a = np.sin((1.0 - fractions) * g) / sin_g
    b = np.sin(fractions * g) / sin_g
    vectors = a[:, None] * v0[None, :] + b[:, None] * v1[None, :]
    lons, lats = unit_vector_to_lonlat(vectors)

    lons[0], lats[0] = p0.longitude, p0.latitude
    lons[-1], lats[-1] = p1.longitude, p1.latitude

    return _split_at_antimeridian(lons, lats, np.cross(v0, v1))


def _split_at_antimeridian(lons, lats, normal) -> List[Arc]:
    """Cut a sampled path into arcs that never jump across +-180.

    An endpoint lying on the antimeridian is written on the side of its
    neighbour instead of opening an arc of zero length.
    """
    arcs: List[Arc] = []
    current = [GeographicPoint(float(lons[0]), float(lats[0]))]
    last = len(lons) - 1

    for i in range(1, len(lons)):
        lon_prev, lat_prev = float(lons[i - 1]), float(lats[i - 1])
        lon, lat = float(lons[i]), float(lats[i])

        if abs(lon - lon_prev) > 180.0:
            if i == 1 and abs(lon_prev) == 180.0:
                current[0] = GeographicPoint(math.copysign(180.0, lon), lat_prev)
            elif i == last and abs(lon) == 180.0:
                lon = math.copysign(180.0, lon_prev)
            else:
                lat_cross = antimeridian_latitude(normal, lon_prev, lat_prev, lon, lat)
                edge = 180.0 if lon_prev > 0 else -180.0
                current.append(GeographicPoint(edge, lat_cross))
                arcs.append(Arc(tuple(current)))
                current = [GeographicPoint(-edge, lat_cross)]

        current.append(GeographicPoint(lon, lat))

    arcs.append(Arc(tuple(current)))
    return arcs


def flatten_samples(arcs: List[Arc]) -> List[GeographicPoint]:
    """Interpolated samples of a fitted path, without antimeridian split points.

    The inverse of the splitting in `fit_great_circle`: the returned list
    has exactly segments + 1 points.
    """
    samples: List[GeographicPoint] = []
    last = len(arcs) - 1
    for k, arc in enumerate(arcs):
        points = list(arc.points)
        if k < last:
            points = points[:-1]
        if k > 0:
            points = points[1:]
        samples.extend(points)
    return samples
