import pytest

from src.timesheet_payroll.timesheet_payroll.locations.geofence import (
    AllowedLocation,
    adaptive_range,
    calculate_distance,
    check_location,
)

OFFICE = AllowedLocation(id="1", name="Office", latitude=0.0, longitude=0.0, range_meters=100)
WAREHOUSE = AllowedLocation(id="2", name="Warehouse", latitude=1.0, longitude=0.0, range_meters=100)


def test_distance_of_one_degree_of_latitude():
    assert calculate_distance(0, 0, 1, 0) == pytest.approx(111_195, rel=1e-3)
    assert calculate_distance(-23.5, -46.6, -23.5, -46.6) == 0.0


@pytest.mark.parametrize(
    "accuracy, expected",
    [(10, 100.0), (50, 100.0), (100, 200.0), (150, 325.0), (300, 500.0)],
)
def test_range_grows_with_gps_inaccuracy(accuracy, expected):
    assert adaptive_range(100, accuracy) == expected


def test_point_inside_range_is_allowed():
    check = check_location(0.0005, 0.0, [WAREHOUSE, OFFICE], gps_accuracy=10)

    assert check.allowed is True
    assert check.location == OFFICE
    assert check.distance_meters == pytest.approx(55.6, abs=0.5)
    assert check.message == "Location authorized at Office"


def test_coarse_fix_widens_the_range():
    # ~111 m away: outside 100 m with a precise fix, inside 180 m with an 80 m fix
    assert check_location(0.001, 0.0, [OFFICE], gps_accuracy=10).allowed is False
    assert check_location(0.001, 0.0, [OFFICE], gps_accuracy=80).allowed is True


def test_rejection_reports_the_closest_site():
    check = check_location(0.01, 0.0, [WAREHOUSE, OFFICE], gps_accuracy=10)

    assert check.allowed is False
    assert check.location == OFFICE
    assert check.range_meters == 100.0
    assert check.message == "You are 1112m from Office. Move closer to register."


def test_inactive_or_missing_sites_never_allow():
    inactive = AllowedLocation(id="3", name="Closed", latitude=0.0, longitude=0.0, range_meters=100, is_active=False)

    check = check_location(0.0, 0.0, [inactive])

    assert check.allowed is False
    assert check.location is None
    assert check.message == "No allowed locations are configured"
    assert check_location(0.0, 0.0, []).allowed is False
