"""
Configuration for the Line-of-Sight Engine.

Screen-space densities (pixels per interpolation segment, pixels between
distance markers) and sampling sizes live here so callers can tune them
without touching the geometry code.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional
import math

from common.constants import GeodesicConstants
from common.errors import InvalidArgumentError
from common.logging_config import get_logger
from common.units import to_meters
from geospatial.projections import AZIMUTHAL_KINDS

logger = get_logger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for geometry generation.

    Attributes
    ----------
    pixels_per_segment : float
        Target on-screen length of one interpolation step of the line of sight.
    min_segments : int
        Lower bound on interpolation steps per logical segment.
    max_segments : int
        Upper bound on interpolation steps per fitted path; also bounds the
        number of distance marker samples.
    marker_pixel_spacing : float
        Target on-screen distance between distance markers.
    tick_half_length_px : float
        Half the on-screen length of a distance tick.
    circle_samples : int
        Number of distinct points on the equidistance circle.
    sight_line_segments : int
        Interpolation steps of the p0 -> p1 arrow line.
    azimuthal_kind : str
        Projection used to rotate the circle: 'aeqd' or 'stere'.
    projection_cache_size : int, optional
        Bound on cached azimuthal projections; None is unbounded.
    sphere_radius_m : float
        Reference sphere radius in meters. Accepts a pint length.
    """
    pixels_per_segment: float = 20.0
    min_segments: int = 2
    max_segments: int = 1000
    marker_pixel_spacing: float = 10.0
    tick_half_length_px: float = 5.0
    circle_samples: int = 360
    sight_line_segments: int = 30
    azimuthal_kind: str = "aeqd"
    projection_cache_size: Optional[int] = None
    sphere_radius_m: float = GeodesicConstants.EARTH_MEAN_RADIUS.value

    def __post_init__(self):
        """Validate configuration values."""
        object.__setattr__(self, "sphere_radius_m", to_meters(self.sphere_radius_m))

        for name in ("pixels_per_segment", "marker_pixel_spacing",
                     "tick_half_length_px", "sphere_radius_m"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise InvalidArgumentError(f"{name} must be positive, got {value}")
        if self.min_segments < 1:
            raise InvalidArgumentError(f"min_segments must be >= 1, got {self.min_segments}")
        if self.max_segments < self.min_segments:
            raise InvalidArgumentError(
                f"max_segments ({self.max_segments}) must be >= "
                f"min_segments ({self.min_segments})"
            )
        if self.circle_samples < 3:
            raise InvalidArgumentError(f"circle_samples must be >= 3, got {self.circle_samples}")
        if self.sight_line_segments < 1:
            raise InvalidArgumentError(
                f"sight_line_segments must be >= 1, got {self.sight_line_segments}"
            )
        if self.azimuthal_kind not in AZIMUTHAL_KINDS:
            raise InvalidArgumentError(
                f"azimuthal_kind must be one of {AZIMUTHAL_KINDS}, got {self.azimuthal_kind!r}"
            )
        if self.projection_cache_size is not None and self.projection_cache_size < 1:
            raise InvalidArgumentError(
                f"projection_cache_size must be >= 1, got {self.projection_cache_size}"
            )

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'EngineConfig':
        """Build a config from a mapping, ignoring unknown keys.

        Parameters
        ----------
        values : Mapping
            Field names to values, e.g. parsed from a settings file.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            logger.warning(f"Ignoring unknown engine settings: {', '.join(unknown)}")
        return cls(**{k: v for k, v in values.items() if k in known})
