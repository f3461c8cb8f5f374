"""
Tests for the great-circle distance calculator.
"""

import math
import random

import pytest

from coldchain.constants import EARTH_RADIUS_KM
from coldchain.models import Coordinate
from coldchain.network import haversine_km


class TestHaversine:
    """Tests for haversine_km."""

    def test_identical_points(self):
        """Test distance between identical points is zero."""
        assert haversine_km((12.97, 77.59), (12.97, 77.59)) == 0.0

    def test_tenth_of_degree_on_equator(self):
        """Test 0.1° of longitude on the equator is ~11.1 km."""
        assert haversine_km((0.0, 0.0), (0.0, 0.1)) == pytest.approx(11.1195, rel=1e-4)

    def test_known_city_pair(self):
        """Test Bengaluru to Chennai great-circle distance."""
        distance = haversine_km(Coordinate(12.9716, 77.5946), Coordinate(13.0827, 80.2707))
        assert distance == pytest.approx(290.2, abs=2.0)

    def test_antipodal_points(self):
        """Test antipodal points are half a circumference apart."""
        assert haversine_km((0.0, 0.0), (0.0, 180.0)) == pytest.approx(math.pi * EARTH_RADIUS_KM)

    def test_pole_to_pole(self):
        """Test pole to pole distance."""
        assert haversine_km((90.0, 0.0), (-90.0, 0.0)) == pytest.approx(math.pi * EARTH_RADIUS_KM)

    def test_accepts_coordinate_and_tuple(self):
        """Test Coordinate and plain tuples give the same result."""
        assert haversine_km(Coordinate(1.0, 2.0), Coordinate(3.0, 4.0)) == haversine_km((1.0, 2.0), (3.0, 4.0))

    def test_symmetric_and_non_negative(self):
        """Test symmetry and non-negativity on random points."""
        rng = random.Random(42)
        for _ in range(200):
            a = (rng.uniform(-90, 90), rng.uniform(-180, 180))
            b = (rng.uniform(-90, 90), rng.uniform(-180, 180))
            d = haversine_km(a, b)
            assert d >= 0
            assert d <= math.pi * EARTH_RADIUS_KM + 1e-6
            assert d == pytest.approx(haversine_km(b, a))
