import pytest

from visualization.map_layer import (
    MapSession,
    build_feature_collection,
    point_color,
    point_radius,
    severity_band,
)
from tests.factories import make_map


@pytest.mark.parametrize("cases, radius", [(0, 4), (500, 12), (1000, 20), (250, 8)])
def test_radius_is_linear_between_stops(cases, radius):
    assert point_radius(cases) == pytest.approx(radius)


def test_radius_is_clamped_outside_the_stops():
    assert point_radius(5000) == pytest.approx(20)
    assert point_radius(-3) == pytest.approx(4)


@pytest.mark.parametrize("cases, color", [
    (0, "#ffffcc"),
    (250, "#fd8d3c"),
    (500, "#e31a1c"),
    (1200, "#e31a1c"),
])
def test_color_stops(cases, color):
    assert point_color(cases) == color


def test_color_between_stops_is_interpolated():
    mid = point_color(125)
    assert mid not in ("#ffffcc", "#fd8d3c")
    assert mid.startswith("#") and len(mid) == 7


@pytest.mark.parametrize("cases, band", [
    (100, "Low (0-250 cases)"),
    (250, "Medium (250-500 cases)"),
    (499, "Medium (250-500 cases)"),
    (500, "High (500+ cases)"),
])
def test_severity_bands(cases, band):
    assert severity_band(cases) == band


def test_features_use_lon_lat_order_and_carry_encoding():
    record = make_map(district="Pune District 2", state="Maharashtra", cases=500, latitude=18.5, longitude=73.8)
    collection = build_feature_collection([record])
    feature = collection["features"][0]

    assert collection["type"] == "FeatureCollection"
    assert feature["geometry"] == {"type": "Point", "coordinates": [73.8, 18.5]}
    assert feature["properties"]["district"] == "Pune District 2"
    assert feature["properties"]["radius"] == pytest.approx(12)
    assert feature["properties"]["color"] == "#e31a1c"


def test_map_session_lifecycle():
    built = []

    def build_figure(features):
        built.append(len(features))
        return "figure"

    with MapSession() as session:
        assert session.is_open
        assert session.update([make_map(), make_map(cases=300)], build_figure) == "figure"
        assert len(session.features) == 2
        assert session.figure == "figure"

    assert not session.is_open
    assert session.figure is None
    assert session.features == []
    assert built == [2]
    with pytest.raises(RuntimeError):
        session.update([make_map()], build_figure)


def test_closing_twice_is_harmless():
    session = MapSession()
    with session:
        pass
    session.close()
    assert not session.is_open
