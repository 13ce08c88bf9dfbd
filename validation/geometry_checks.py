"""
Geometry Consistency Checks for Generated Line-of-Sight Output.

This module verifies that engine outputs obey the geometric invariants the
renderer relies on.

Check Categories
----------------
1. Loop closure (the four segments chain through p1, a0, a1, p0)
2. Antimeridian continuity (no arc jumps more than 180 degrees)
3. Equidistance (every circle point lies at the circle radius)
4. Ring closure (first circle point repeated last)
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional
import numpy as np

from common.errors import GeometryValidationError
from common.logging_config import get_logger
from common.types import (
    Arc,
    EquidistanceCircle,
    GeodesicScene,
    GeographicPoint,
    LineOfSightResult,
)
from geospatial.distance_calculations import (
    EARTH_MEAN_RADIUS_M,
    great_circle_distance_batch,
)
from geospatial.projections import ProjectionAdapter
from great_circle.arc_fitting import central_angle

logger = get_logger(__name__)


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes
    ----------
    test_name : str
        Name of the check.
    passed : bool
        Whether the check passed.
    message : str
        Description of result.
    details : dict
        Additional details.
    """
    test_name: str
    passed: bool
    message: str
    details: Dict[str, Any]


class GeometryConsistencyChecker:
    """Checker for geometric consistency of engine outputs.

    Parameters
    ----------
    strict_mode : bool
        If True, raise GeometryValidationError on the first failed check.
    log_violations : bool
        Whether to log failed checks.
    tolerance_deg : float
        Angular tolerance for matching endpoints.
    relative_tolerance : float
        Relative tolerance for circle radii.
    """

    def __init__(
        self,
        strict_mode: bool = False,
        log_violations: bool = True,
        tolerance_deg: float = 1e-6,
        relative_tolerance: float = 1e-6
    ):
        self.strict_mode = strict_mode
        self.log_violations = log_violations
        self.tolerance_deg = tolerance_deg
        self.relative_tolerance = relative_tolerance

    def _report(self, result: ValidationResult) -> ValidationResult:
        if not result.passed:
            if self.log_violations:
                logger.warning(f"{result.test_name} failed: {result.message}")
            if self.strict_mode:
                raise GeometryValidationError(f"{result.test_name}: {result.message}")
        return result

    def _same_point(self, a: GeographicPoint, b: GeographicPoint) -> bool:
        return a.same_location(b) or np.degrees(central_angle(a, b)) <= self.tolerance_deg

    def check_all(
        self,
        scene: GeodesicScene,
        projection: ProjectionAdapter,
        radius_m: float = EARTH_MEAN_RADIUS_M
    ) -> List[ValidationResult]:
        """Run all checks on one recomputation pass.

        Parameters
        ----------
        scene : GeodesicScene
            Engine output; `scene.points` must hold the selection.
        projection : ProjectionAdapter
            Working projection the circle is expressed in.
        radius_m : float
            Reference sphere radius.

        Returns
        -------
        List[ValidationResult]
            Results of all checks.
        """
        p0, p1 = scene.points
        results = []

        # 1. Loop closure
        results.append(self.check_closure(scene.line_of_sight, p0, p1))

        # 2. Antimeridian continuity of every arc
        results.append(self.check_antimeridian(
            list(scene.sight_line.arcs) + list(scene.line_of_sight.arcs)
        ))

        # 3. Circle radius
        results.append(self.check_equidistance(scene.circle, projection, radius_m))

        # 4. Ring closure
        results.append(self.check_ring_closed(scene.circle))

        return results

    def check_closure(
        self,
        result: LineOfSightResult,
        p0: GeographicPoint,
        p1: GeographicPoint
    ) -> ValidationResult:
        """Check that the four segments chain p0 -> p1 -> a0 -> a1 -> p0."""
        expected = [p0, p1, p0.antipode(), p1.antipode(), p0]
        mismatches = []
        for i in range(4):
            start, end = result.segment_endpoints(i)
            if not self._same_point(start, expected[i]):
                mismatches.append((i, "start", start.as_tuple(), expected[i].as_tuple()))
            if not self._same_point(end, expected[i + 1]):
                mismatches.append((i, "end", end.as_tuple(), expected[i + 1].as_tuple()))

        return self._report(ValidationResult(
            test_name="loop_closure",
            passed=len(result.segments) == 4 and not mismatches,
            message=f"Loop closure check: {len(mismatches)} mismatched endpoints",
            details={'mismatches': mismatches}
        ))

    def check_antimeridian(self, arcs: Iterable[Arc]) -> ValidationResult:
        """Check that no arc has consecutive longitudes more than 180 degrees apart."""
        max_jump = 0.0
        violations = 0
        for arc in arcs:
            lons = np.array([p.longitude for p in arc.points])
            jumps = np.abs(np.diff(lons))
            if jumps.size:
                max_jump = max(max_jump, float(np.max(jumps)))
                violations += int(np.sum(jumps > 180.0))

        return self._report(ValidationResult(
            test_name="antimeridian_continuity",
            passed=violations == 0,
            message=f"Antimeridian check: {violations} wrapping steps",
            details={'max_longitude_step': max_jump, 'num_violations': violations}
        ))

    def check_equidistance(
        self,
        circle: EquidistanceCircle,
        projection: ProjectionAdapter,
        radius_m: float = EARTH_MEAN_RADIUS_M,
        center: Optional[GeographicPoint] = None
    ) -> ValidationResult:
        """Check that every ring point lies at the circle's radius from its center."""
        center = center or circle.center
        if center is None:
            return ValidationResult(
                test_name="equidistance",
                passed=True,
                message="Circle has no center to check against",
                details={}
            )

        points = [projection.to_geographic(p) for p in circle.points]
        distances = great_circle_distance_batch(center, points, radius_m)
        relative_error = np.abs(distances - circle.distance_m) / circle.distance_m

        return self._report(ValidationResult(
            test_name="equidistance",
            passed=bool(np.all(relative_error <= self.relative_tolerance)),
            message=f"Equidistance check: max relative error {np.max(relative_error):.2e}",
            details={
                'max_relative_error': float(np.max(relative_error)),
                'mean_relative_error': float(np.mean(relative_error)),
                'radius_m': circle.distance_m,
            }
        ))

    def check_ring_closed(self, circle: EquidistanceCircle) -> ValidationResult:
        """Check that the first ring point is repeated at the end."""
        return self._report(ValidationResult(
            test_name="ring_closed",
            passed=circle.is_closed,
            message=f"Ring closure check: {len(circle.points)} points",
            details={'num_points': len(circle.points)}
        ))
