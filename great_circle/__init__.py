"""
Great-Circle Geometry for the Line-of-Sight View.

Builds everything drawn for a pair of selected points: the arcs of the
shortest path, the loop through both antipodes, distance markers and the
equidistance circle.
"""

from great_circle.arc_fitting import fit_great_circle, central_angle, flatten_samples
from great_circle.bearing import bearing
from great_circle.config import EngineConfig
from great_circle.line_of_sight import (
    compose_line_of_sight,
    segment_count,
    point_groups,
)
from great_circle.distance_markers import (
    distance_markers,
    format_distance,
    marker_spacing,
)
from great_circle.equidistance import equidistance_circle
from great_circle.engine import GeodesicEngine, ViewState

__all__ = [
    "fit_great_circle",
    "central_angle",
    "flatten_samples",
    "bearing",
    "EngineConfig",
    "compose_line_of_sight",
    "segment_count",
    "point_groups",
    "distance_markers",
    "format_distance",
    "marker_spacing",
    "equidistance_circle",
    "GeodesicEngine",
    "ViewState",
]
