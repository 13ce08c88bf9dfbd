"""Planar bearing between two projected points."""

from typing import Sequence, Tuple
import math

from common.types import PlanarPoint


def bearing(a: PlanarPoint, b: PlanarPoint) -> float:
    """Angle of the vector pointing from `b` toward `a`, in radians.

    Computed as atan2(a.y - b.y, a.x - b.x), counter-clockwise from the
    +x axis. Arrowheads pass (tip, point before tip); distance ticks pass
    (previous sample, next sample).

    Returns 0 when a == b. That value carries no meaning; callers must not
    pass coincident points when they need a direction.
    """
    return math.atan2(a.y - b.y, a.x - b.x)


def perpendicular_offsets(angle: float, half_length: float) -> Tuple[float, float]:
    """Offset of a tick end from its center.

    With `angle` the negated bearing, (sin(angle), cos(angle)) is
    perpendicular to the path direction.
    """
    return half_length * math.sin(angle), half_length * math.cos(angle)


def local_neighbours(points: Sequence[PlanarPoint], index: int) -> Tuple[PlanarPoint, PlanarPoint]:
    """Nearest points before and after `index` that differ from it.

    Used to take the local direction of a projected path at one of its
    samples. At either end of the path, or where no distinct point exists
    on that side, the sample itself stands in, so the pair spans the
    sample and at least one real neighbour whenever the path has one.
    """
    anchor = points[index]
    previous = next((p for p in reversed(points[:index]) if p != anchor), anchor)
    following = next((p for p in points[index + 1:] if p != anchor), anchor)
    return previous, following
