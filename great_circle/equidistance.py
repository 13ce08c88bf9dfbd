"""
Equidistance Circle Generation.

Builds the ring of points whose great-circle distance from a center equals
the distance from the center to a given point. The construction uses an
azimuthal projection centred on the circle center: there, rotating a point
about the origin leaves its distance to the center unchanged, so the ring
is the `through` point rotated in equal steps and mapped back into the
working projection.
"""

from typing import List, Optional
import math

from common.errors import DegenerateInputError, InvalidArgumentError
from common.logging_config import get_logger
from common.types import EquidistanceCircle, GeographicPoint, PlanarPoint
from geospatial.distance_calculations import EARTH_MEAN_RADIUS_M, great_circle_distance
from geospatial.projections import AzimuthalProjectionCache, ProjectionAdapter
from great_circle.distance_markers import format_distance

logger = get_logger(__name__)


def equidistance_circle(
    center: GeographicPoint,
    through: GeographicPoint,
    samples: int,
    projection_cache: AzimuthalProjectionCache,
    working_projection: ProjectionAdapter,
    radius_m: float = EARTH_MEAN_RADIUS_M
) -> EquidistanceCircle:
    """Circle around `center` passing through `through`.

    Parameters
    ----------
    center : GeographicPoint
        Circle center.
    through : GeographicPoint
        Any point on the circle; defines the radius.
    samples : int
        Number of distinct ring points (>= 3).
    projection_cache : AzimuthalProjectionCache
        Source of the azimuthal projection centred on `center`.
    working_projection : ProjectionAdapter
        Projection the ring is returned in.
    radius_m : float
        Reference sphere radius for the distance label.

    Returns
    -------
    EquidistanceCircle
        samples + 1 planar points (closed ring) and the great-circle radius.

    Raises
    ------
    InvalidArgumentError
        If samples < 3.
    DegenerateInputError
        If `through` coincides with `center`.
    ProjectionError
        If a ring point cannot be transformed.
    """
    if isinstance(samples, bool) or not isinstance(samples, int) or samples < 3:
        raise InvalidArgumentError(f"samples must be an integer >= 3, got {samples!r}")

    distance = great_circle_distance(center, through, radius_m)
    if distance == 0.0:
        logger.warning(f"Zero-radius circle requested at {center.as_tuple()}")
        raise DegenerateInputError(
            f"{through.as_tuple()} is the circle center: the radius is zero",
            points=(center, through)
        )

    azimuthal = projection_cache.get(center)
    radius_point = azimuthal.to_planar(through)

    step = 2.0 * math.pi / samples
    ring: List[PlanarPoint] = []
    for i in range(samples):
        rotated = azimuthal.rotate_about_origin(radius_point, i * step)
        ring.append(working_projection.to_planar(azimuthal.to_geographic(rotated)))
    ring.append(ring[0])

    return EquidistanceCircle(
        points=tuple(ring),
        distance_m=distance,
        label=format_distance(distance),
        center=center
    )
