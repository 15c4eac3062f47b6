import pytest
from busmap.domain.models.geo import GeoPoint, ViewportBounds


def test_geo_point_accepts_valid_coordinates() -> None:
    p = GeoPoint(lat=52.2297, lon=21.0122)
    assert p.lat == 52.2297
    assert p.lon == 21.0122


@pytest.mark.parametrize(
    ("lat", "lon"),
    [
        (-90.0001, 0.0),
        (90.0001, 0.0),
        (0.0, -180.0001),
        (0.0, 180.0001),
    ],
)
def test_geo_point_rejects_out_of_range_coordinates(lat: float, lon: float) -> None:
    with pytest.raises(ValueError):
        GeoPoint(lat=lat, lon=lon)


def test_viewport_bounds_rejects_inverted_corners() -> None:
    with pytest.raises(ValueError):
        ViewportBounds(
            southwest=GeoPoint(lat=52.3, lon=21.0),
            northeast=GeoPoint(lat=52.2, lon=21.1),
        )
    with pytest.raises(ValueError):
        ViewportBounds(
            southwest=GeoPoint(lat=52.2, lon=21.1),
            northeast=GeoPoint(lat=52.3, lon=21.0),
        )


def test_viewport_bounds_contains_is_edge_inclusive() -> None:
    bounds = ViewportBounds(
        southwest=GeoPoint(lat=52.0, lon=21.0),
        northeast=GeoPoint(lat=53.0, lon=22.0),
    )
    assert bounds.contains(52.0, 21.0)
    assert bounds.contains(53.0, 22.0)
    assert bounds.contains(52.5, 21.5)
    assert not bounds.contains(53.0001, 21.5)
    assert not bounds.contains(52.5, 20.9999)


def test_enclosing_single_point_is_degenerate_rectangle() -> None:
    p = GeoPoint(lat=52.2297, lon=21.0122)
    bounds = ViewportBounds.enclosing([p])
    assert bounds.southwest == p
    assert bounds.northeast == p
    assert bounds.center == p


def test_enclosing_requires_points() -> None:
    with pytest.raises(ValueError):
        ViewportBounds.enclosing([])
