"""Unit tests for the value types, distances and units."""

import math

import pytest

from common.constants import GeodesicConstants
from common.errors import InvalidArgumentError
from common.types import Arc, DistanceMarker, GeographicPoint, PlanarPoint
from common.units import Q_, convert_length, to_meters
from geospatial.coordinate_models import antimeridian_latitude, normalize_longitude
from geospatial.distance_calculations import (
    great_circle_distance,
    great_circle_distance_batch,
    great_circle_inverse,
    half_circumference,
)
from great_circle.bearing import bearing, local_neighbours, perpendicular_offsets


POINTS = [
    GeographicPoint(0.0, 0.0),
    GeographicPoint(10.0, 20.0),
    GeographicPoint(-74.0, 40.7),
    GeographicPoint(179.9, -89.0),
    GeographicPoint(-90.0, 90.0),
]

ONE_DEGREE_M = math.radians(1.0) * GeodesicConstants.EARTH_MEAN_RADIUS.value


class TestGeographicPoint:
    """Test suite for GeographicPoint."""

    def test_antipode(self):
        """Test longitude shifts by 180 degrees toward zero and latitude flips."""
        assert GeographicPoint(10.0, 20.0).antipode() == GeographicPoint(-170.0, -20.0)
        assert GeographicPoint(-30.0, -45.0).antipode() == GeographicPoint(150.0, 45.0)

    def test_antipode_of_prime_meridian(self):
        """Test longitude 0 maps to -180, not to itself."""
        assert GeographicPoint(0.0, 10.0).antipode() == GeographicPoint(-180.0, -10.0)

    @pytest.mark.parametrize("point", POINTS)
    def test_antipode_is_involution(self, point):
        """Test the antipode of the antipode is the point itself."""
        assert point.antipode().antipode() == point

    @pytest.mark.parametrize("point", POINTS)
    def test_antipode_distance(self, point):
        """Test a point and its antipode are half a circumference apart."""
        assert great_circle_distance(point, point.antipode()) == pytest.approx(
            math.pi * GeodesicConstants.EARTH_MEAN_RADIUS.value, rel=1e-9
        )

    @pytest.mark.parametrize("lon,lat", [
        (0.0, 90.5),
        (0.0, -91.0),
        (180.5, 0.0),
        (-181.0, 0.0),
        (math.nan, 0.0),
        (0.0, math.inf),
    ])
    def test_out_of_range(self, lon, lat):
        """Test invalid coordinates are rejected at construction."""
        with pytest.raises(InvalidArgumentError):
            GeographicPoint(lon, lat)

    def test_same_location(self):
        """Test -180 and 180 name one meridian and longitude is ignored at the poles."""
        assert GeographicPoint(-180.0, 12.0).same_location(GeographicPoint(180.0, 12.0))
        assert GeographicPoint(35.0, 90.0).same_location(GeographicPoint(-120.0, 90.0))
        assert not GeographicPoint(-180.0, 12.0).same_location(GeographicPoint(180.0, 12.5))
        assert not GeographicPoint(10.0, 0.0).same_location(GeographicPoint(-10.0, 0.0))


class TestGeometryTypes:
    """Test suite for Arc, PlanarPoint and DistanceMarker."""

    def test_arc_needs_two_points(self):
        """Test a single point is not an arc."""
        with pytest.raises(InvalidArgumentError):
            Arc((GeographicPoint(0.0, 0.0),))

    def test_arc_accessors(self):
        """Test start, end, length and iteration."""
        points = (GeographicPoint(0, 0), GeographicPoint(1, 1), GeographicPoint(2, 2))
        arc = Arc(points)
        assert arc.start == points[0]
        assert arc.end == points[-1]
        assert len(arc) == 3
        assert list(arc) == list(points)

    def test_planar_distance(self):
        """Test Euclidean distance in projection units."""
        assert PlanarPoint(0.0, 0.0).distance_to(PlanarPoint(3.0, 4.0)) == pytest.approx(5.0)

    def test_marker_anchor(self):
        """Test the anchor is the tick midpoint."""
        marker = DistanceMarker(
            tick=(PlanarPoint(0.0, -1.0), PlanarPoint(0.0, 1.0)),
            label="0m", rotation=0.0, distance_m=0.0
        )
        assert marker.anchor == PlanarPoint(0.0, 0.0)


class TestDistanceCalculations:
    """Test suite for great-circle distances on the reference sphere."""

    def test_one_degree(self):
        """Test one degree of meridian equals R * pi / 180."""
        d = great_circle_distance(GeographicPoint(0.0, 0.0), GeographicPoint(0.0, 1.0))
        assert d == pytest.approx(ONE_DEGREE_M, rel=1e-9)

    def test_azimuths(self):
        """Test due-east azimuth along the equator."""
        result = great_circle_inverse(GeographicPoint(0.0, 0.0), GeographicPoint(10.0, 0.0))
        assert result.azimuth_forward_deg == pytest.approx(90.0)
        assert result.distance_m == pytest.approx(10 * ONE_DEGREE_M)

    def test_half_circumference(self):
        """Test pi * R for the default and a custom sphere."""
        assert half_circumference() == pytest.approx(math.pi * 6_371_008.8)
        assert half_circumference(1.0) == pytest.approx(math.pi)

    def test_custom_radius(self):
        """Test distances scale with the sphere radius."""
        d = great_circle_distance(GeographicPoint(0.0, 0.0), GeographicPoint(90.0, 0.0), 1000.0)
        assert d == pytest.approx(1000.0 * math.pi / 2)

    def test_batch(self):
        """Test batch distances match single calls."""
        origin = GeographicPoint(2.35, 48.85)
        batch = great_circle_distance_batch(origin, POINTS)
        singles = [great_circle_distance(origin, p) for p in POINTS]
        assert batch == pytest.approx(singles)
        assert great_circle_distance_batch(origin, []).size == 0


class TestCoordinateModels:
    """Test suite for longitude wrapping and antimeridian crossings."""

    @pytest.mark.parametrize("lon,expected", [
        (180.0, 180.0),
        (-180.0, -180.0),
        (190.0, -170.0),
        (-190.0, 170.0),
        (540.0, -180.0),
    ])
    def test_normalize_longitude(self, lon, expected):
        """Test wrapping into [-180, 180] keeps in-range values."""
        assert normalize_longitude(lon) == pytest.approx(expected)

    def test_meridian_plane_fallback(self):
        """Test a great circle through the poles uses linear interpolation."""
        lat = antimeridian_latitude([0.0, 1.0, 0.0], 179.0, 10.0, -179.0, 20.0)
        assert lat == pytest.approx(15.0)


class TestBearing:
    """Test suite for the planar bearing."""

    @pytest.mark.parametrize("a,b,expected", [
        (PlanarPoint(1.0, 0.0), PlanarPoint(0.0, 0.0), 0.0),
        (PlanarPoint(0.0, 1.0), PlanarPoint(0.0, 0.0), math.pi / 2),
        (PlanarPoint(0.0, 0.0), PlanarPoint(1.0, 0.0), math.pi),
        (PlanarPoint(0.0, -2.0), PlanarPoint(0.0, 0.0), -math.pi / 2),
    ])
    def test_direction_from_b_to_a(self, a, b, expected):
        """Test the angle of the vector from b toward a."""
        assert bearing(a, b) == pytest.approx(expected)

    def test_coincident_points(self):
        """Test coincident points give 0."""
        assert bearing(PlanarPoint(3.0, 3.0), PlanarPoint(3.0, 3.0)) == 0.0

    def test_offsets_are_perpendicular(self):
        """Test tick offsets are perpendicular to the path direction."""
        a, b = PlanarPoint(3.0, 1.0), PlanarPoint(0.0, 0.0)
        dx, dy = perpendicular_offsets(-bearing(a, b), 2.0)
        assert dx * (a.x - b.x) + dy * (a.y - b.y) == pytest.approx(0.0, abs=1e-12)
        assert math.hypot(dx, dy) == pytest.approx(2.0)

    def test_local_neighbours_skip_repeats(self):
        """Test repeated points are skipped and the ends fall back to the point itself."""
        a, b, c = PlanarPoint(0.0, 0.0), PlanarPoint(1.0, 0.0), PlanarPoint(2.0, 1.0)
        points = [a, b, b, c, c]

        assert local_neighbours(points, 2) == (a, c)
        assert local_neighbours(points, 0) == (a, b)
        assert local_neighbours(points, 4) == (b, c)


class TestUnits:
    """Test suite for the pint unit helpers."""

    def test_convert_length(self):
        """Test metric conversions used by distance labels."""
        assert convert_length(1500, "m", "km") == pytest.approx(1.5)
        assert convert_length(2_500_000, "m", "thousand_kilometer") == pytest.approx(2.5)

    def test_to_meters(self):
        """Test quantities are converted and bare numbers pass through."""
        assert to_meters(Q_(6371, "km")) == pytest.approx(6_371_000.0)
        assert to_meters(42) == 42.0
