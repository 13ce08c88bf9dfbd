"""
Map Projections for the Line-of-Sight Engine.

This module is the projection service the geometry components consume:
conversion between geographic coordinates and the planar working
projection of the map, and ad-hoc azimuthal projections centred on an
arbitrary point.

Scientific Context
------------------
Domain: Cartography
Model: Web Mercator working projection, azimuthal projections on a sphere

Why an Azimuthal Projection for Circles
---------------------------------------
1. In an azimuthal projection the planar distance from the origin is a
   function of the great-circle distance from the center only.
2. Rotating a projected point about the origin therefore moves it along
   a circle of constant great-circle distance from the center.
3. Equidistant (aeqd) keeps that radius linear, so rotated points stay
   well conditioned up to the antipode; stereographic (stere) has the same
   rotation property but diverges near the antipode.

Implementation
--------------
This module wraps `pyproj` CRS/Transformer objects. Azimuthal projections
are defined over the reference sphere (+R), so rotation preserves
great-circle distance exactly, and are cached per center in an explicit,
injectable cache.

References
----------
- Snyder, J.P. (1987). Map Projections - A Working Manual. USGS Prof. Paper 1395.
"""

from abc import ABC, abstractmethod
from collections import OrderedDict
import threading
from typing import Optional, Tuple
import numpy as np

from pyproj import CRS, Transformer
from pyproj.exceptions import CRSError, ProjError

from common.constants import GeodesicConstants
from common.errors import InvalidArgumentError, ProjectionError
from common.logging_config import get_logger
from common.types import GeographicPoint, PlanarPoint
from geospatial.coordinate_models import normalize_longitude

logger = get_logger(__name__)

# Web Mercator is only defined up to this latitude; map clients clamp to it
WEB_MERCATOR_MAX_LATITUDE = 85.0511287798066

AZIMUTHAL_KINDS = ("aeqd", "stere")


class ProjectionAdapter(ABC):
    """Abstract base class for projection adapters.

    All projections used by the engine implement this interface to ensure
    consistent handling of coordinates and errors.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of the projection."""
        pass

    @property
    @abstractmethod
    def proj4_string(self) -> str:
        """PROJ.4 definition string."""
        pass

    @property
    @abstractmethod
    def meters_per_unit(self) -> float:
        """Length of one planar unit in meters."""
        pass

    @abstractmethod
    def to_planar(self, point: GeographicPoint) -> PlanarPoint:
        """Transform geographic coordinates to planar coordinates.

        Parameters
        ----------
        point : GeographicPoint
            Longitude/latitude in degrees.

        Returns
        -------
        PlanarPoint
            (x, y) in projection units.

        Raises
        ------
        ProjectionError
            If the point cannot be projected.
        """
        pass

    @abstractmethod
    def to_geographic(self, point: PlanarPoint) -> GeographicPoint:
        """Transform planar coordinates to geographic coordinates.

        Parameters
        ----------
        point : PlanarPoint
            Planar coordinates in projection units.

        Returns
        -------
        GeographicPoint
            Longitude/latitude in degrees.

        Raises
        ------
        ProjectionError
            If the point cannot be unprojected.
        """
        pass


class PyprojProjection(ProjectionAdapter):
    """Projection backed by a pyproj CRS.

    Parameters
    ----------
    crs : CRS
        Projected coordinate reference system.
    name : str, optional
        Display name; defaults to the CRS name.
    latitude_limit : float, optional
        Latitudes are clamped to [-limit, limit] before projecting. Used for
        Web Mercator, which is undefined at the poles.
    """

    def __init__(
        self,
        crs: CRS,
        name: Optional[str] = None,
        latitude_limit: Optional[float] = None
    ):
        self._crs_proj = crs
        self._crs_geo = crs.geodetic_crs
        self._name = name or crs.name
        self._latitude_limit = latitude_limit
        self._to_proj = Transformer.from_crs(self._crs_geo, self._crs_proj, always_xy=True)
        self._to_geo = Transformer.from_crs(self._crs_proj, self._crs_geo, always_xy=True)
        self._meters_per_unit = float(crs.axis_info[0].unit_conversion_factor)

    @property
    def name(self) -> str:
        return self._name

    @property
    def proj4_string(self) -> str:
        return self._crs_proj.to_proj4()

    @property
    def meters_per_unit(self) -> float:
        return self._meters_per_unit

    def to_planar(self, point: GeographicPoint) -> PlanarPoint:
        lat = point.latitude
        if self._latitude_limit is not None:
            lat = float(np.clip(lat, -self._latitude_limit, self._latitude_limit))
        try:
            x, y = self._to_proj.transform(point.longitude, lat, errcheck=True)
        except ProjError as e:
            raise ProjectionError(
                f"{self._name}: cannot project ({point.longitude}, {point.latitude})"
            ) from e
        if not (np.isfinite(x) and np.isfinite(y)):
            raise ProjectionError(
                f"{self._name}: ({point.longitude}, {point.latitude}) projects to infinity"
            )
        return PlanarPoint(float(x), float(y))

    def to_geographic(self, point: PlanarPoint) -> GeographicPoint:
        try:
            lon, lat = self._to_geo.transform(point.x, point.y, errcheck=True)
        except ProjError as e:
            raise ProjectionError(
                f"{self._name}: cannot unproject ({point.x}, {point.y})"
            ) from e
        if not (np.isfinite(lon) and np.isfinite(lat)):
            raise ProjectionError(
                f"{self._name}: ({point.x}, {point.y}) is outside the projection domain"
            )
        return GeographicPoint(
            normalize_longitude(float(lon)),
            float(np.clip(lat, -90.0, 90.0))
        )


def web_mercator() -> PyprojProjection:
    """The working projection of the map (EPSG:3857)."""
    return PyprojProjection(
        CRS.from_epsg(GeodesicConstants.WEB_MERCATOR_EPSG),
        name="Web Mercator",
        latitude_limit=WEB_MERCATOR_MAX_LATITUDE
    )


def projection_from_definition(definition: str) -> PyprojProjection:
    """Build a working projection from any CRS string pyproj understands.

    Parameters
    ----------
    definition : str
        EPSG code ('EPSG:3857'), PROJ string or WKT.

    Raises
    ------
    ProjectionError
        If pyproj rejects the definition.
    """
    try:
        crs = CRS.from_user_input(definition)
    except CRSError as e:
        raise ProjectionError(f"Unknown projection {definition!r}") from e
    if not crs.is_projected:
        raise ProjectionError(f"{definition!r} is not a projected CRS")
    if definition.upper() == f"EPSG:{GeodesicConstants.WEB_MERCATOR_EPSG}":
        return web_mercator()
    return PyprojProjection(crs)


class AzimuthalProjection(PyprojProjection):
    """Azimuthal projection centred on an arbitrary point of the sphere.

    Parameters
    ----------
    center : GeographicPoint
        Projection center; maps to the planar origin.
    kind : str
        'aeqd' (azimuthal equidistant) or 'stere' (stereographic).
    radius_m : float
        Radius of the reference sphere in meters.

    Notes
    -----
    The projection is defined on the same sphere the distance service
    uses, so rotating about the origin keeps the great-circle distance to
    the center unchanged (up to floating point).
    """

    def __init__(
        self,
        center: GeographicPoint,
        kind: str = "aeqd",
        radius_m: float = GeodesicConstants.EARTH_MEAN_RADIUS.value
    ):
        if kind not in AZIMUTHAL_KINDS:
            raise InvalidArgumentError(
                f"Unknown azimuthal projection {kind!r}, expected one of {AZIMUTHAL_KINDS}"
            )
        self._center = center
        self._kind = kind
        scale = " +k=1" if kind == "stere" else ""
        self._proj4 = (
            f"+proj={kind} +lat_0={center.latitude} +lon_0={center.longitude}{scale} "
            f"+x_0=0 +y_0=0 +R={radius_m} +units=m +no_defs"
        )
        try:
            crs = CRS.from_proj4(self._proj4)
        except CRSError as e:
            raise ProjectionError(f"Cannot build azimuthal projection at {center}") from e
        super().__init__(crs, name=f"Azimuthal {kind} ({center.longitude}, {center.latitude})")

    @property
    def center(self) -> GeographicPoint:
        return self._center

    @property
    def kind(self) -> str:
        return self._kind

    @property
    def proj4_string(self) -> str:
        return self._proj4

    @staticmethod
    def rotate_about_origin(point: PlanarPoint, angle: float) -> PlanarPoint:
        """Rotate a planar point counter-clockwise about the origin.

        Parameters
        ----------
        point : PlanarPoint
            Point in this projection.
        angle : float
            Rotation in radians.

        Returns
        -------
        PlanarPoint
            The rotated point; its great-circle distance to the center is
            the same as the input's.
        """
        cos_a = np.cos(angle)
        sin_a = np.sin(angle)
        return PlanarPoint(
            float(point.x * cos_a - point.y * sin_a),
            float(point.x * sin_a + point.y * cos_a)
        )


class AzimuthalProjectionCache:
    """Center-keyed cache of azimuthal projections.

    Building a pyproj transformer is expensive relative to projecting a few
    hundred points, and the same center is reused on every zoom change.

    Parameters
    ----------
    kind : str
        Azimuthal projection kind for every entry.
    radius_m : float
        Reference sphere radius for every entry.
    max_entries : int, optional
        Bound on the number of cached centers. None keeps every entry;
        otherwise the least recently used entry is evicted.

    Thread Safety
    -------------
    Lookups and inserts are guarded by a lock; concurrent callers asking
    for the same center receive the same projection object.
    """

    def __init__(
        self,
        kind: str = "aeqd",
        radius_m: float = GeodesicConstants.EARTH_MEAN_RADIUS.value,
        max_entries: Optional[int] = None
    ):
        if kind not in AZIMUTHAL_KINDS:
            raise InvalidArgumentError(
                f"Unknown azimuthal projection {kind!r}, expected one of {AZIMUTHAL_KINDS}"
            )
        if max_entries is not None and max_entries < 1:
            raise InvalidArgumentError(f"max_entries must be >= 1, got {max_entries}")
        self._kind = kind
        self._radius_m = radius_m
        self._max_entries = max_entries
        self._entries: "OrderedDict[Tuple[float, float], AzimuthalProjection]" = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def key_for(center: GeographicPoint) -> Tuple[float, float]:
        return (float(center.longitude), float(center.latitude))

    def get(self, center: GeographicPoint) -> AzimuthalProjection:
        """Return the projection centred on `center`, creating it if absent."""
        key = self.key_for(center)
        with self._lock:
            projection = self._entries.get(key)
            if projection is not None:
                self._entries.move_to_end(key)
                return projection

            logger.debug(f"Creating {self._kind} projection centred at {key}")
            projection = AzimuthalProjection(center, kind=self._kind, radius_m=self._radius_m)
            self._entries[key] = projection
            if self._max_entries is not None and len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Evicted projection centred at {evicted}")
            return projection

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, center: GeographicPoint) -> bool:
        with self._lock:
            return self.key_for(center) in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
