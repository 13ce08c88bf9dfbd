"""Unit tests for great-circle arc fitting."""

import numpy as np
import pytest

from common.errors import DegenerateInputError, InvalidArgumentError
from common.types import GeographicPoint
from great_circle.arc_fitting import central_angle, fit_great_circle, flatten_samples


PAIRS = [
    (GeographicPoint(0.0, 0.0), GeographicPoint(10.0, 0.0)),
    (GeographicPoint(-74.0, 40.7), GeographicPoint(-0.13, 51.5)),
    (GeographicPoint(170.0, 10.0), GeographicPoint(-170.0, 20.0)),
    (GeographicPoint(151.2, -33.9), GeographicPoint(-118.2, 34.1)),
    (GeographicPoint(0.0, 89.0), GeographicPoint(180.0, 89.0)),
    (GeographicPoint(-179.5, -60.0), GeographicPoint(179.5, -61.0)),
    (GeographicPoint(10.0, 0.0), GeographicPoint(-180.0, 0.0)),
    (GeographicPoint(180.0, 0.0), GeographicPoint(-170.0, 5.0)),
    (GeographicPoint(170.0, 10.0), GeographicPoint(-180.0, 20.0)),
    (GeographicPoint(-150.0, -40.0), GeographicPoint(180.0, -35.0)),
]


class TestFitGreatCircle:
    """Test suite for fit_great_circle."""

    def test_equator_scenario(self):
        """Test 40 segments from (0, 0) to (10, 0) give one arc of 41 points."""
        arcs = fit_great_circle(GeographicPoint(0, 0), GeographicPoint(10, 0), 40)

        assert len(arcs) == 1
        assert len(arcs[0]) == 41

        lons = np.array([p.longitude for p in arcs[0]])
        lats = np.array([p.latitude for p in arcs[0]])
        np.testing.assert_allclose(lons, np.linspace(0.0, 10.0, 41), atol=1e-9)
        np.testing.assert_allclose(lats, 0.0, atol=1e-9)

    def test_single_segment(self):
        """Test one segment yields just the endpoints."""
        p0, p1 = GeographicPoint(5, 5), GeographicPoint(6, 7)
        arcs = fit_great_circle(p0, p1, 1)

        assert len(arcs) == 1
        assert arcs[0].points == (p0, p1)

    @pytest.mark.parametrize("p0,p1", PAIRS)
    @pytest.mark.parametrize("segments", [1, 2, 7, 100])
    def test_point_count_and_endpoints(self, p0, p1, segments):
        """Test sample count is segments + 1 and endpoints match the inputs."""
        arcs = fit_great_circle(p0, p1, segments)

        total = sum(len(arc) for arc in arcs)
        split_duplicates = 2 * (len(arcs) - 1)
        assert total - split_duplicates == segments + 1
        assert len(flatten_samples(arcs)) == segments + 1

        assert arcs[0].start.same_location(p0)
        assert arcs[-1].end.same_location(p1)

    @pytest.mark.parametrize("p0,p1", PAIRS)
    def test_no_arc_wraps_longitude(self, p0, p1):
        """Test no arc has consecutive longitudes more than 180 degrees apart."""
        for arc in fit_great_circle(p0, p1, 64):
            lons = np.array([p.longitude for p in arc])
            assert np.all(np.abs(np.diff(lons)) <= 180.0)

    def test_antimeridian_split(self):
        """Test a Pacific crossing is split at +-180 on the great circle."""
        p0, p1 = GeographicPoint(170.0, 10.0), GeographicPoint(-170.0, 20.0)
        arcs = fit_great_circle(p0, p1, 50)

        assert len(arcs) == 2
        end, start = arcs[0].end, arcs[1].start
        assert end.longitude == 180.0
        assert start.longitude == -180.0
        assert end.latitude == start.latitude

        # the inserted point lies on the great circle between p0 and p1
        detour = central_angle(p0, end) + central_angle(end, p1) - central_angle(p0, p1)
        assert abs(detour) < 1e-9

    def test_end_on_antimeridian(self):
        """Test an end point at -180 reached from the east keeps the arc whole."""
        p0, p1 = GeographicPoint(10.0, 0.0), GeographicPoint(-180.0, 0.0)
        arcs = fit_great_circle(p0, p1, 20)

        assert len(arcs) == 1
        assert len(arcs[0]) == 21
        assert arcs[0].end == GeographicPoint(180.0, 0.0)
        assert arcs[0].end.same_location(p1)

    def test_start_on_antimeridian(self):
        """Test a start point at 180 heading west of it takes the sign of its neighbour."""
        p0, p1 = GeographicPoint(180.0, 0.0), GeographicPoint(-170.0, 5.0)
        arcs = fit_great_circle(p0, p1, 10)

        assert len(arcs) == 1
        assert arcs[0].start == GeographicPoint(-180.0, 0.0)
        assert arcs[0].end == p1

    @pytest.mark.parametrize("p0,p1", [
        (GeographicPoint(10.0, 0.0), GeographicPoint(-180.0, 0.0)),
        (GeographicPoint(170.0, 10.0), GeographicPoint(-180.0, 20.0)),
        (GeographicPoint(-150.0, -40.0), GeographicPoint(180.0, -35.0)),
        (GeographicPoint(180.0, 0.0), GeographicPoint(-170.0, 5.0)),
        (GeographicPoint(-180.0, 30.0), GeographicPoint(160.0, 25.0)),
    ])
    @pytest.mark.parametrize("segments", [1, 2, 20])
    def test_no_zero_length_arcs(self, p0, p1, segments):
        """Test endpoints on the antimeridian never produce a collapsed arc."""
        for arc in fit_great_circle(p0, p1, segments):
            assert not arc.start.same_location(arc.end)

    def test_samples_are_equally_spaced(self):
        """Test spherical (not linear) interpolation: equal central angles."""
        p0, p1 = GeographicPoint(-74.0, 40.7), GeographicPoint(139.7, 35.7)
        samples = flatten_samples(fit_great_circle(p0, p1, 20))

        steps = [central_angle(a, b) for a, b in zip(samples, samples[1:])]
        np.testing.assert_allclose(steps, central_angle(p0, p1) / 20, rtol=1e-7)

    @pytest.mark.parametrize("point", [
        GeographicPoint(0.0, 0.0),
        GeographicPoint(10.0, 20.0),
        GeographicPoint(-45.5, 60.25),
        GeographicPoint(180.0, 0.0),
        GeographicPoint(-120.0, -89.0),
    ])
    @pytest.mark.parametrize("segments", [1, 30])
    def test_antipodal_points_rejected(self, point, segments):
        """Test exactly antipodal endpoints raise DegenerateInputError."""
        with pytest.raises(DegenerateInputError):
            fit_great_circle(point, point.antipode(), segments)

    def test_coincident_points_rejected(self):
        """Test identical endpoints raise DegenerateInputError."""
        p = GeographicPoint(12.0, 34.0)
        with pytest.raises(DegenerateInputError):
            fit_great_circle(p, p, 10)

    @pytest.mark.parametrize("segments", [0, -1, 2.5, True])
    def test_invalid_segment_count(self, segments):
        """Test segment counts below 1 or non-integers are rejected."""
        with pytest.raises(InvalidArgumentError):
            fit_great_circle(GeographicPoint(0, 0), GeographicPoint(1, 1), segments)

    def test_numpy_integer_segments_accepted(self):
        """Test numpy integers are valid segment counts."""
        arcs = fit_great_circle(GeographicPoint(0, 0), GeographicPoint(1, 1), np.int64(4))
        assert len(flatten_samples(arcs)) == 5

    def test_errors_are_value_errors(self):
        """Test argument errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            fit_great_circle(GeographicPoint(0, 0), GeographicPoint(1, 1), 0)

    def test_degenerate_error_has_user_message(self):
        """Test the degenerate error carries a user-facing message and the points."""
        p = GeographicPoint(30.0, 30.0)
        with pytest.raises(DegenerateInputError) as excinfo:
            fit_great_circle(p, p.antipode(), 5)

        assert "unique path" in excinfo.value.user_message
        assert excinfo.value.points == (p, p.antipode())
