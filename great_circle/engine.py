"""
Engine Facade for One Recomputation Pass.

The map calls `GeodesicEngine.recompute` whenever the two-point selection
is finished or edited, and whenever the view resolution changes. Each call
recomputes every output from scratch; the only state kept between calls is
the azimuthal projection cache, which the engine owns (or is handed).

Outputs of one pass
-------------------
- sight line p0 -> p1 with arrowhead orientation
- line of sight: the four-segment loop through both antipodes, with
  distance markers
- equidistance circle around p0 through p1
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from common.errors import InvalidArgumentError
from common.logging_config import get_logger
from common.types import (
    EquidistanceCircle,
    GeodesicScene,
    GeographicPoint,
    LineOfSightResult,
    PlanarPoint,
    SightLine,
)
from geospatial.projections import AzimuthalProjectionCache, ProjectionAdapter, web_mercator
from great_circle.arc_fitting import fit_great_circle
from great_circle.bearing import bearing, local_neighbours
from great_circle.config import EngineConfig
from great_circle.equidistance import equidistance_circle
from great_circle.line_of_sight import compose_line_of_sight, units_per_pixel

logger = get_logger(__name__)


@dataclass(frozen=True)
class ViewState:
    """Read-only snapshot of the map view.

    Attributes
    ----------
    extent_width : float
        Visible width in working-projection units.
    pixel_width : float
        Viewport width in pixels.
    """
    extent_width: float
    pixel_width: float

    def __post_init__(self):
        # validates both dimensions
        units_per_pixel(self.extent_width, self.pixel_width)

    @property
    def units_per_pixel(self) -> float:
        return self.extent_width / self.pixel_width

    def meters_per_pixel(self, projection: ProjectionAdapter) -> float:
        return self.units_per_pixel * projection.meters_per_unit


class GeodesicEngine:
    """Computes all geodesic geometry for a pair of selected points.

    Parameters
    ----------
    config : EngineConfig, optional
        Sampling densities and projection settings.
    working_projection : ProjectionAdapter, optional
        Projection of the map; defaults to Web Mercator.
    projection_cache : AzimuthalProjectionCache, optional
        Shared cache of azimuthal projections. A new one is created from
        the config when omitted.

    Examples
    --------
    >>> engine = GeodesicEngine()
    >>> scene = engine.recompute(
    ...     GeographicPoint(0, 0), GeographicPoint(10, 0),
    ...     ViewState(extent_width=4e7, pixel_width=1000)
    ... )
    >>> len(scene.line_of_sight.segments)
    4
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        working_projection: Optional[ProjectionAdapter] = None,
        projection_cache: Optional[AzimuthalProjectionCache] = None
    ):
        self.config = config or EngineConfig()
        self.working_projection = working_projection or web_mercator()
        if projection_cache is None:
            projection_cache = AzimuthalProjectionCache(
                kind=self.config.azimuthal_kind,
                radius_m=self.config.sphere_radius_m,
                max_entries=self.config.projection_cache_size
            )
        self.projection_cache = projection_cache

    def sight_line(self, p0: GeographicPoint, p1: GeographicPoint) -> SightLine:
        """Shortest path p0 -> p1 with the arrowhead angle at p1.

        Raises
        ------
        DegenerateInputError
            If p0 and p1 coincide or are antipodal.
        """
        arcs = fit_great_circle(p0, p1, self.config.sight_line_segments)
        planar = tuple(
            tuple(self.working_projection.to_planar(p) for p in arc.points)
            for arc in arcs
        )
        tip = planar[-1]
        before, end = local_neighbours(tip, len(tip) - 1)
        return SightLine(
            arcs=tuple(arcs),
            planar=planar,
            arrow_rotation=bearing(end, before)
        )

    def line_of_sight(
        self,
        p0: GeographicPoint,
        p1: GeographicPoint,
        view: ViewState
    ) -> LineOfSightResult:
        """Four-segment loop through p0, p1 and their antipodes."""
        return compose_line_of_sight(
            p0, p1,
            view.extent_width,
            view.pixel_width,
            self.working_projection,
            self.config
        )

    def circle(self, p0: GeographicPoint, p1: GeographicPoint) -> EquidistanceCircle:
        """Circle around p0 through p1."""
        return equidistance_circle(
            p0, p1,
            self.config.circle_samples,
            self.projection_cache,
            self.working_projection,
            radius_m=self.config.sphere_radius_m
        )

    def recompute(
        self,
        p0: GeographicPoint,
        p1: GeographicPoint,
        view: ViewState
    ) -> GeodesicScene:
        """Recompute every output for the current selection and view.

        Raises
        ------
        DegenerateInputError
            If no unique path exists; report `error.user_message`.
        InvalidArgumentError, ProjectionError
            Propagated from the components.
        """
        logger.debug(
            f"Recomputing for {p0.as_tuple()} -> {p1.as_tuple()} "
            f"at {view.units_per_pixel:.3f} units/px"
        )
        return GeodesicScene(
            sight_line=self.sight_line(p0, p1),
            line_of_sight=self.line_of_sight(p0, p1, view),
            circle=self.circle(p0, p1),
            points=(p0, p1)
        )

    def recompute_from_planar(
        self,
        selection: Tuple[PlanarPoint, PlanarPoint],
        view: ViewState
    ) -> GeodesicScene:
        """Recompute from a selection given in working-projection coordinates."""
        if len(selection) != 2:
            raise InvalidArgumentError(f"Expected 2 selected points, got {len(selection)}")
        p0, p1 = (self.working_projection.to_geographic(p) for p in selection)
        return self.recompute(p0, p1, view)

