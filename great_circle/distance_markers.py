"""
Distance Markers Along the Line of Sight.

Places labelled tick marks at equal great-circle distances along one
segment of the line of sight. The spacing adapts to the view resolution:
roughly one marker every `marker_pixel_spacing` screen pixels, rounded up
to a power of ten meters so labels stay readable (1 km, 10 km, 100 km ...).

Marker Geometry
---------------
For sample i the local direction comes from the nearest projected points
before and after it that differ from it (the sample itself at the arc
ends). The tick is a fixed screen length, centred on the sample and
perpendicular to that direction. The label rotation is the negated
bearing plus pi/2, clockwise-positive as map renderers expect.
"""

from typing import List, Optional
import math

from common.errors import InvalidArgumentError
from common.logging_config import get_logger
from common.types import DistanceMarker, GeographicPoint, PlanarPoint
from common.units import convert_length
from geospatial.distance_calculations import great_circle_distance
from geospatial.projections import ProjectionAdapter
from great_circle.arc_fitting import fit_great_circle
from great_circle.bearing import bearing, local_neighbours, perpendicular_offsets
from great_circle.config import EngineConfig

logger = get_logger(__name__)


def _round_half_up(value: float) -> int:
    # tolerance absorbs unit-conversion error at exact halves
    return int(math.floor(value + 0.5 + 1e-9))


def format_distance(meters: float) -> str:
    """Render a distance as a short label.

    Parameters
    ----------
    meters : float
        Distance in meters.

    Returns
    -------
    str
        '<n>m' below 1 km, '<n>km' below 1000 km, '<n>k km' below
        1 000 000 km, '<n>mio km' beyond. Values are rounded half-up.

    Notes
    -----
    Display only and lossy: the result is not meant to be parsed back.

    Examples
    --------
    >>> format_distance(999), format_distance(1500), format_distance(1_500_000)
    ('999m', '2km', '2k km')
    """
    if not math.isfinite(meters):
        raise InvalidArgumentError(f"Cannot format non-finite distance {meters}")
    if meters <= 0:
        return "0m"

    magnitude = math.floor(math.log10(meters))
    if magnitude < 3:
        return f"{_round_half_up(meters)}m"
    elif magnitude < 6:
        return f"{_round_half_up(convert_length(meters, 'm', 'km'))}km"
    elif magnitude < 9:
        return f"{_round_half_up(convert_length(meters, 'm', 'thousand_kilometer'))}k km"
    else:
        return f"{_round_half_up(convert_length(meters, 'm', 'thousand_kilometer'))}mio km"


def marker_spacing(meters_per_pixel: float, pixel_spacing: float = 10.0) -> float:
    """Distance between markers in meters.

    Parameters
    ----------
    meters_per_pixel : float
        Ground distance covered by one screen pixel.
    pixel_spacing : float
        Target screen distance between markers.

    Returns
    -------
    float
        10 ** ceil(log10(pixel_spacing * meters_per_pixel)).
    """
    if not (math.isfinite(meters_per_pixel) and meters_per_pixel > 0):
        raise InvalidArgumentError(f"meters_per_pixel must be positive, got {meters_per_pixel}")
    return 10.0 ** math.ceil(math.log10(pixel_spacing * meters_per_pixel))


def distance_markers(
    center: GeographicPoint,
    antipode_of_center: GeographicPoint,
    meters_per_pixel: float,
    projection: ProjectionAdapter,
    config: Optional[EngineConfig] = None
) -> List[DistanceMarker]:
    """Generate distance ticks along the path from `center` to `antipode_of_center`.

    Parameters
    ----------
    center : GeographicPoint
        Where distances are measured from (label 0).
    antipode_of_center : GeographicPoint
        End of the marked path. Must not be the exact antipode of `center`.
    meters_per_pixel : float
        Current view resolution.
    projection : ProjectionAdapter
        Working projection the ticks are expressed in.
    config : EngineConfig, optional
        Marker density and tick size.

    Returns
    -------
    List[DistanceMarker]
        One marker per sample, in path order.

    Raises
    ------
    InvalidArgumentError
        If meters_per_pixel is not positive.
    DegenerateInputError
        If the endpoints coincide or are exactly antipodal.
    """
    config = config or EngineConfig()
    spacing = marker_spacing(meters_per_pixel, config.marker_pixel_spacing)
    length = great_circle_distance(center, antipode_of_center, config.sphere_radius_m)

    count = math.ceil(length / spacing)
    while count > config.max_segments:
        spacing *= 10.0
        count = math.ceil(length / spacing)
    count = max(count, 1)

    arcs = fit_great_circle(center, antipode_of_center, count)
    half_length = config.tick_half_length_px * meters_per_pixel / projection.meters_per_unit

    markers: List[DistanceMarker] = []
    index = 0
    last_arc = len(arcs) - 1
    for k, arc in enumerate(arcs):
        planar = [projection.to_planar(p) for p in arc.points]
        last = len(planar) - 1
        for j, anchor in enumerate(planar):
            # antimeridian split points are not samples
            if (k > 0 and j == 0) or (k < last_arc and j == last):
                continue

            previous, following = local_neighbours(planar, j)
            angle = -bearing(previous, following)
            dx, dy = perpendicular_offsets(angle, half_length)
            distance = spacing * index
            markers.append(DistanceMarker(
                tick=(
                    PlanarPoint(anchor.x - dx, anchor.y - dy),
                    PlanarPoint(anchor.x + dx, anchor.y + dy),
                ),
                label=format_distance(distance),
                rotation=angle + math.pi / 2,
                distance_m=distance
            ))
            index += 1

    logger.debug(
        f"Placed {len(markers)} markers every {format_distance(spacing)} "
        f"over {format_distance(length)}"
    )
    return markers
