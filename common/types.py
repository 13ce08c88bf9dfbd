"""
Value Types for the Line-of-Sight Engine.

This module defines the immutable dataclasses exchanged between the
engine's components and handed to the rendering layer. Every entity is
the output of one pure recomputation pass; none of them is mutated after
construction.

Design Rationale
----------------
Using frozen dataclasses instead of raw coordinate lists provides:
1. Self-documenting code - field names say which axis is which
2. Validation at construction time (ranges, minimum lengths)
3. Safe sharing across calls without defensive copies
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple
import math

import numpy as np

from common.errors import InvalidArgumentError


@dataclass(frozen=True)
class GeographicPoint:
    """A point on the reference sphere.

    Attributes
    ----------
    longitude : float
        Longitude in DEGREES. Range: [-180, 180].
    latitude : float
        Latitude in DEGREES. Range: [-90, 90].

    Notes
    -----
    - Longitude comes first, matching the (x, y) order of map clients.
    - Compare with `same_location()` when +-180 must count as one meridian.

    Examples
    --------
    >>> p = GeographicPoint(10.0, 20.0)
    >>> p.antipode()
    GeographicPoint(longitude=-170.0, latitude=-20.0)
    """
    longitude: float
    latitude: float

    def __post_init__(self):
        """Validate coordinate ranges."""
        if not (math.isfinite(self.longitude) and math.isfinite(self.latitude)):
            raise InvalidArgumentError(
                f"Non-finite coordinate ({self.longitude}, {self.latitude})"
            )
        if not -90.0 <= self.latitude <= 90.0:
            raise InvalidArgumentError(
                f"Latitude {self.latitude} out of range [-90, 90]. "
                f"Did you swap longitude and latitude?"
            )
        if not -180.0 <= self.longitude <= 180.0:
            raise InvalidArgumentError(
                f"Longitude {self.longitude} out of range [-180, 180]"
            )

    def antipode(self) -> 'GeographicPoint':
        """Point diametrically opposite on the sphere.

        Returns
        -------
        GeographicPoint
            (x - 180 * sign(x), -y), with sign(0) taken as +1 so that the
            antipode of longitude 0 is -180 and never the point itself.
        """
        sign = 1.0 if self.longitude >= 0 else -1.0
        return GeographicPoint(self.longitude - 180.0 * sign, -self.latitude)

    def same_location(self, other: 'GeographicPoint') -> bool:
        """Whether both points name the same place on the sphere.

        Longitudes -180 and 180 are the same meridian, and every longitude
        names the same pole at latitude +-90.
        """
        if self.latitude != other.latitude:
            return False
        if abs(self.latitude) == 90.0:
            return True
        return (self.longitude - other.longitude) % 360.0 == 0.0

    def as_tuple(self) -> Tuple[float, float]:
        return (self.longitude, self.latitude)


@dataclass(frozen=True)
class PlanarPoint:
    """A point in the working projection (for Web Mercator: meters).

    Always derived from a GeographicPoint through a projection context.
    """
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: 'PlanarPoint') -> float:
        """Euclidean distance in projection units."""
        return float(np.hypot(self.x - other.x, self.y - other.y))


@dataclass(frozen=True)
class Arc:
    """One continuous piece of a geodesic.

    An Arc never wraps across the antimeridian; a great-circle path that
    does is represented by several consecutive Arcs.

    Attributes
    ----------
    points : tuple of GeographicPoint
        Ordered samples along the geodesic, at least two.
    """
    points: Tuple[GeographicPoint, ...]

    def __post_init__(self):
        if len(self.points) < 2:
            raise InvalidArgumentError(
                f"An arc needs at least 2 points, got {len(self.points)}"
            )

    @property
    def start(self) -> GeographicPoint:
        return self.points[0]

    @property
    def end(self) -> GeographicPoint:
        return self.points[-1]

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[GeographicPoint]:
        return iter(self.points)


@dataclass(frozen=True)
class DistanceMarker:
    """A labelled tick along the line of sight.

    Attributes
    ----------
    tick : tuple of PlanarPoint
        The two ends of the tick line, centred on the sample point.
    label : str
        Human-readable distance from the segment start.
    rotation : float
        Label rotation in radians, clockwise-positive as map renderers
        expect. Equals the negated local bearing plus pi/2.
    distance_m : float
        Distance the label stands for, in meters.
    """
    tick: Tuple[PlanarPoint, PlanarPoint]
    label: str
    rotation: float
    distance_m: float

    @property
    def anchor(self) -> PlanarPoint:
        """Sample point the tick is centred on."""
        a, b = self.tick
        return PlanarPoint((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


@dataclass(frozen=True)
class LineOfSightResult:
    """The full great-circle loop through both points and both antipodes.

    Attributes
    ----------
    segments : tuple
        Four logical segments in order (a) p0->p1, (b) p1->a0,
        (c) a0->a1, (d) a1->p0. Each is a tuple of Arcs.
    markers : tuple of DistanceMarker
        Distance ticks along one segment of the loop.
    segment_counts : tuple of int
        Interpolation segment count used for each logical segment.
    """
    segments: Tuple[Tuple[Arc, ...], ...]
    markers: Tuple[DistanceMarker, ...] = ()
    segment_counts: Tuple[int, ...] = ()

    def segment_endpoints(self, index: int) -> Tuple[GeographicPoint, GeographicPoint]:
        """First and last point of one logical segment."""
        arcs = self.segments[index]
        return arcs[0].start, arcs[-1].end

    def point_count(self) -> int:
        """Total number of points over all arcs."""
        return sum(len(arc) for arcs in self.segments for arc in arcs)

    @property
    def arcs(self) -> Tuple[Arc, ...]:
        """All arcs flattened in loop order."""
        return tuple(arc for arcs in self.segments for arc in arcs)


@dataclass(frozen=True)
class EquidistanceCircle:
    """Closed ring at constant great-circle distance from a center.

    Attributes
    ----------
    points : tuple of PlanarPoint
        Ring in the working projection; the first point is repeated last.
    distance_m : float
        Great-circle radius in meters.
    label : str
        Formatted radius for display.
    center : GeographicPoint, optional
        Circle center.
    """
    points: Tuple[PlanarPoint, ...]
    distance_m: float
    label: str
    center: Optional[GeographicPoint] = None

    @property
    def is_closed(self) -> bool:
        return len(self.points) > 1 and self.points[0] == self.points[-1]


@dataclass(frozen=True)
class SightLine:
    """The direct p0 -> p1 line, drawn with an arrowhead at p1.

    Attributes
    ----------
    arcs : tuple of Arc
        Geographic arcs of the shortest path.
    planar : tuple
        The same arcs in the working projection, one tuple per arc.
    arrow_rotation : float
        Bearing of the final step, used to orient the arrowhead and the
        start marker.
    """
    arcs: Tuple[Arc, ...]
    planar: Tuple[Tuple[PlanarPoint, ...], ...]
    arrow_rotation: float


@dataclass(frozen=True)
class GeodesicScene:
    """Everything one recomputation pass produces."""
    sight_line: SightLine
    line_of_sight: LineOfSightResult
    circle: EquidistanceCircle
    points: Optional[Tuple[GeographicPoint, GeographicPoint]] = None
