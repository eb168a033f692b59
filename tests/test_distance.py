import math

import pytest

from hrx_locations.distance import EARTH_RADIUS, distance

VILNIUS = (54.6872, 25.2797)
KAUNAS = (54.8985, 23.9036)
NEW_YORK = (40.7128, -74.0060)
LONDON = (51.5074, -0.1278)


def test_identical_points_are_zero():
    assert distance(*VILNIUS, *VILNIUS) == 0
    assert distance(0, 0, 0, 0, "mi") == 0


@pytest.mark.parametrize("a, b", [(VILNIUS, KAUNAS), (NEW_YORK, LONDON), ((-33.9, 18.4), (35.7, 139.7))])
def test_distance_is_symmetric(a, b):
    assert distance(*a, *b) == pytest.approx(distance(*b, *a))


def test_known_distance_new_york_london():
    assert distance(*NEW_YORK, *LONDON) == pytest.approx(5570, rel=0.01)


def test_km_to_mi_ratio_follows_radii():
    km = distance(*VILNIUS, *KAUNAS, "km")
    mi = distance(*VILNIUS, *KAUNAS, "mi")
    assert km == pytest.approx(mi * (6371 / 3959))


def test_metres_use_full_radius():
    km = distance(*NEW_YORK, *LONDON, "km")
    m = distance(*NEW_YORK, *LONDON, "m")
    assert m == pytest.approx(km * 1000)


def test_default_unit_is_km():
    assert distance(*VILNIUS, *KAUNAS) == distance(*VILNIUS, *KAUNAS, "km")


def test_unknown_unit_falls_back_to_metres():
    assert distance(*VILNIUS, *KAUNAS, "furlong") == distance(*VILNIUS, *KAUNAS, "m")
    assert distance(*VILNIUS, *KAUNAS, "") == distance(*VILNIUS, *KAUNAS, "m")


def test_antipodal_points_are_half_circumference():
    d = distance(0, 0, 0, 180, "km")
    assert math.isfinite(d)
    assert d == pytest.approx(math.pi * EARTH_RADIUS["km"])
