"""Shared fixtures for the line-of-sight engine tests."""

import pytest

from common.types import GeographicPoint
from geospatial.projections import AzimuthalProjectionCache, web_mercator
from great_circle.engine import GeodesicEngine


@pytest.fixture(scope="session")
def mercator():
    """Web Mercator working projection."""
    return web_mercator()


@pytest.fixture
def projection_cache():
    """Fresh, unbounded azimuthal projection cache."""
    return AzimuthalProjectionCache()


@pytest.fixture
def engine(mercator, projection_cache):
    """Engine with default configuration."""
    return GeodesicEngine(working_projection=mercator, projection_cache=projection_cache)


@pytest.fixture
def equator_pair():
    """Two points ten degrees apart on the equator."""
    return GeographicPoint(0.0, 0.0), GeographicPoint(10.0, 0.0)
