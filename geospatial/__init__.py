"""
Geospatial Module for the Great-Circle Line-of-Sight Engine.

All Earth-surface calculations in the engine originate from this module.
The geometry components in `great_circle` never project or measure on
their own.

This module provides:
- Spherical coordinate models (unit vectors, longitude wrapping)
- Great-circle distance on the reference sphere
- Working and azimuthal projections, and the azimuthal projection cache
"""

from geospatial.coordinate_models import (
    lonlat_to_unit_vector,
    unit_vector_to_lonlat,
    normalize_longitude,
    central_angle_between,
    antimeridian_latitude,
)

from geospatial.distance_calculations import (
    GeodesicResult,
    great_circle_inverse,
    great_circle_distance,
    great_circle_distance_batch,
    half_circumference,
)

from geospatial.projections import (
    ProjectionAdapter,
    PyprojProjection,
    AzimuthalProjection,
    AzimuthalProjectionCache,
    web_mercator,
    projection_from_definition,
)

__all__ = [
    # Coordinate models
    "lonlat_to_unit_vector",
    "unit_vector_to_lonlat",
    "normalize_longitude",
    "central_angle_between",
    "antimeridian_latitude",
    # Distance calculations
    "GeodesicResult",
    "great_circle_inverse",
    "great_circle_distance",
    "great_circle_distance_batch",
    "half_circumference",
    # Projections
    "ProjectionAdapter",
    "PyprojProjection",
    "AzimuthalProjection",
    "AzimuthalProjectionCache",
    "web_mercator",
    "projection_from_definition",
]
