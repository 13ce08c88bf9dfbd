"""
Line-of-Sight Composition.

Continues the great circle through the two selected points all the way
around the globe. With a0, a1 the antipodes of p0, p1 the loop is made of
four geodesic segments:

    (a) p0 -> p1      the direct path
    (b) p1 -> a0      on to the antipode of the start
    (c) a0 -> a1      the back side of the globe
    (d) a1 -> p0      and home again

No pair in that list is antipodal unless p0 and p1 are (or coincide), so
each segment has a unique shortest path, and consecutive segments share
their endpoints (a longitude of +-180 may be written with either sign).

Resolution Adaptivity
---------------------
Each segment gets its own interpolation density: its endpoints are
projected into the working projection, the planar distance is converted
to screen pixels, and one step is used per `pixels_per_segment` pixels,
clamped to [min_segments, max_segments]. Zooming changes units-per-pixel,
so the composition is redone on every resolution change.
"""

from typing import List, Optional, Sequence, Tuple
import math

from common.errors import InvalidArgumentError
from common.logging_config import get_logger
from common.types import Arc, GeographicPoint, LineOfSightResult
from geospatial.projections import ProjectionAdapter
from great_circle.arc_fitting import fit_great_circle
from great_circle.config import EngineConfig
from great_circle.distance_markers import distance_markers

logger = get_logger(__name__)

PointPair = Tuple[GeographicPoint, GeographicPoint]


def segment_count(pixel_length: float, config: Optional[EngineConfig] = None) -> int:
    """Interpolation steps for a segment spanning `pixel_length` screen pixels.

    Parameters
    ----------
    pixel_length : float
        On-screen length of the straight line between the segment endpoints.
    config : EngineConfig, optional
        Density and bounds.

    Returns
    -------
    int
        clamp(ceil(pixel_length / pixels_per_segment), min_segments, max_segments).
        Non-decreasing in pixel_length.
    """
    config = config or EngineConfig()
    if math.isnan(pixel_length) or pixel_length < 0:
        raise InvalidArgumentError(f"pixel_length must be >= 0, got {pixel_length}")
    if math.isinf(pixel_length):
        return config.max_segments
    steps = math.ceil(pixel_length / config.pixels_per_segment)
    return int(min(config.max_segments, max(config.min_segments, steps)))


def point_groups(p0: GeographicPoint, p1: GeographicPoint) -> List[PointPair]:
    """The four endpoint pairs of the loop through p0, p1 and their antipodes."""
    a0 = p0.antipode()
    a1 = p1.antipode()
    return [
        (p0, p1),
        (p1, a0),
        (a0, a1),
        (a1, p0),
    ]


def units_per_pixel(view_extent_width: float, view_pixel_width: float) -> float:
    """Working-projection units covered by one screen pixel."""
    if not (math.isfinite(view_extent_width) and view_extent_width > 0):
        raise InvalidArgumentError(
            f"view_extent_width must be positive, got {view_extent_width}"
        )
    if not view_pixel_width > 0:
        raise InvalidArgumentError(
            f"view_pixel_width must be positive, got {view_pixel_width}"
        )
    return view_extent_width / view_pixel_width


def pixel_length(
    pair: Sequence[GeographicPoint],
    projection: ProjectionAdapter,
    resolution: float
) -> float:
    """On-screen length of the chord between two points.

    Parameters
    ----------
    pair : sequence of two GeographicPoint
        Segment endpoints.
    projection : ProjectionAdapter
        Working projection of the view.
    resolution : float
        Projection units per pixel.
    """
    start = projection.to_planar(pair[0])
    end = projection.to_planar(pair[1])
    return start.distance_to(end) / resolution


def compose_line_of_sight(
    p0: GeographicPoint,
    p1: GeographicPoint,
    view_extent_width: float,
    view_pixel_width: float,
    projection: ProjectionAdapter,
    config: Optional[EngineConfig] = None,
    with_markers: bool = True
) -> LineOfSightResult:
    """Compose the full great-circle loop through p0, p1 and their antipodes.

    Parameters
    ----------
    p0, p1 : GeographicPoint
        The user-selected points.
    view_extent_width : float
        Visible width of the map in working-projection units.
    view_pixel_width : float
        Width of the viewport in pixels.
    projection : ProjectionAdapter
        Working projection of the map.
    config : EngineConfig, optional
        Sampling densities.
    with_markers : bool
        Whether to attach distance markers.

    Returns
    -------
    LineOfSightResult
        Four segments (each one or more arcs) plus distance markers
        measured from p1 toward the antipode of p0.

    Raises
    ------
    InvalidArgumentError
        If the view dimensions are not positive.
    DegenerateInputError
        If p0 and p1 coincide or are antipodal. Not caught here: the caller
        reports it to the user.
    ProjectionError
        If the projection cannot handle an endpoint.
    """
    config = config or EngineConfig()
    resolution = units_per_pixel(view_extent_width, view_pixel_width)
    groups = point_groups(p0, p1)

    counts = [segment_count(pixel_length(pair, projection, resolution), config) for pair in groups]

    segments: List[Tuple[Arc, ...]] = []
    for (start, end), count in zip(groups, counts):
        segments.append(tuple(fit_great_circle(start, end, count)))

    markers = ()
    if with_markers:
        meters_per_pixel = resolution * projection.meters_per_unit
        start, end = groups[1]
        markers = tuple(distance_markers(start, end, meters_per_pixel, projection, config))

    logger.debug(
        f"Line of sight {p0.as_tuple()} -> {p1.as_tuple()}: "
        f"segments per leg {counts}, {len(markers)} markers"
    )
    return LineOfSightResult(
        segments=tuple(segments),
        markers=markers,
        segment_counts=tuple(counts)
    )
