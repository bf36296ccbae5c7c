import pytest

from flight_management.models.airport import Airport, AirportCoordinate
from flight_management.models.navpoint import NavPoint


def test_navpoint_class_constants():
    """The earth radius used for distances is 6371 km."""
    assert NavPoint.EARTH_RADIUS_KM == 6371.0
    point = NavPoint(41.2753, 28.7519, 'IST')
    assert point.EARTH_RADIUS_KM == 6371.0


def test_distance_istanbul_frankfurt():
    ist = NavPoint(41.2753, 28.7519, 'IST')
    fra = NavPoint(50.0333, 8.5706, 'FRA')

    assert ist.distance_km(fra) == pytest.approx(1837.4, abs=1.0)


def test_distance_is_symmetric_and_zero_to_self():
    ist = NavPoint(41.2753, 28.7519, 'IST')
    fra = NavPoint(50.0333, 8.5706, 'FRA')

    assert ist.distance_km(fra) == pytest.approx(fra.distance_km(ist))
    assert ist.distance_km(ist) == pytest.approx(0.0)


def test_one_degree_of_longitude_on_equator():
    a = NavPoint(0.0, 0.0)
    b = NavPoint(0.0, 1.0)
    # 2 * pi * 6371 / 360
    assert a.distance_km(b) == pytest.approx(111.195, abs=0.01)


@pytest.mark.parametrize("lat,lon", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.5), (0.0, -181.0)])
def test_invalid_coordinates_rejected(lat, lon):
    with pytest.raises(ValueError):
        NavPoint(lat, lon)


def test_airport_coordinate():
    airport = Airport('IST', 'Istanbul Airport', latitude=41.2753, longitude=28.7519)
    coordinate = airport.coordinate
    assert coordinate == AirportCoordinate('IST', 41.2753, 28.7519)
    assert coordinate.navpoint.name == 'IST'


def test_airport_without_position_has_no_coordinate():
    assert Airport('XXX', 'Unsurveyed').coordinate is None
    assert Airport('XXX', 'Half surveyed', latitude=10.0).coordinate is None
