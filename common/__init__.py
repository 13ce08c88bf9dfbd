"""
Common utilities and infrastructure for the great-circle line-of-sight engine.

This package provides foundational components used across all modules:
- Reference-sphere constants and numeric tolerances
- Immutable value types for points, arcs, markers and circles
- The error hierarchy
- Unit registry for distances
- Logging infrastructure
"""

from common.constants import GeodesicConstants
from common.errors import (
    GeodesicError,
    InvalidArgumentError,
    DegenerateInputError,
    ProjectionError,
    GeometryValidationError,
)
from common.types import (
    GeographicPoint,
    PlanarPoint,
    Arc,
    DistanceMarker,
    LineOfSightResult,
    EquidistanceCircle,
    SightLine,
    GeodesicScene,
)
from common.units import ureg, Q_, convert_length
from common.logging_config import get_logger

__all__ = [
    "GeodesicConstants",
    "GeodesicError",
    "InvalidArgumentError",
    "DegenerateInputError",
    "ProjectionError",
    "GeometryValidationError",
    "GeographicPoint",
    "PlanarPoint",
    "Arc",
    "DistanceMarker",
    "LineOfSightResult",
    "EquidistanceCircle",
    "SightLine",
    "GeodesicScene",
    "ureg",
    "Q_",
    "convert_length",
    "get_logger",
]
