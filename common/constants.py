"""
Geodesic Constants for the Line-of-Sight Engine.

This module provides the reference-sphere parameters and the numeric
tolerances used by the great-circle computations. All constants carry
their unit and source.

References
----------
- IUGG mean Earth radius (R1), Moritz, H. (2000). Geodetic Reference System 1980.
- EPSG:3857 (Web Mercator) definition, EPSG Geodetic Parameter Dataset.
"""

from dataclasses import dataclass
from typing import Final
import numpy as np


@dataclass(frozen=True)
class Constant:
    """A constant with uncertainty and provenance.

    Attributes
    ----------
    value : float
        The nominal value of the constant.
    uncertainty : float
        The standard uncertainty (1-sigma) of the constant.
    unit : str
        The SI unit of the constant.
    source : str
        Reference for the constant value.
    description : str
        Human-readable description of the constant.
    """
    value: float
    uncertainty: float
    unit: str
    source: str
    description: str


class GeodesicConstants:
    """Registry of constants used throughout the engine.

    Reference Sphere
    ----------------
    All great-circle distances are computed on a sphere with the IUGG
    mean radius. This is the same sphere web mapping clients use for
    their distance readouts, so labels agree with what users see.

    Tolerances
    ----------
    Angular tolerances decide when two points are treated as coincident
    or exactly antipodal. Both cases have no unique great circle.
    """

    # =========================================================================
    # Reference sphere
    # =========================================================================

    EARTH_MEAN_RADIUS: Final[Constant] = Constant(
        value=6_371_008.8,
        uncertainty=0.1,
        unit="m",
        source="IUGG mean radius",
        description="Radius of the reference sphere for great-circle distances"
    )

    WEB_MERCATOR_EPSG: Final[int] = 3857

    # =========================================================================
    # Numeric tolerances
    # =========================================================================

    ANTIPODAL_TOLERANCE_RAD: Final[Constant] = Constant(
        value=1e-9,
        uncertainty=0.0,
        unit="rad",
        source="engine convention",
        description="Central angle distance from pi below which points are antipodal"
    )

    COINCIDENT_TOLERANCE_RAD: Final[Constant] = Constant(
        value=1e-12,
        uncertainty=0.0,
        unit="rad",
        source="engine convention",
        description="Central angle below which two points are the same point"
    )

    @staticmethod
    def half_circumference(radius_m: float = 6_371_008.8) -> float:
        """Great-circle distance between a point and its antipode.

        Parameters
        ----------
        radius_m : float
            Sphere radius in meters.

        Returns
        -------
        float
            pi * R in meters.
        """
        return float(np.pi * radius_m)
