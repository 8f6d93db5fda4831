import json

import pytest

from carstats.visuals.core.cache import geometry_cache
from carstats.visuals.io.geometry import fetch_geojson, load_regions, regions_from_geojson

SQUARE = [[[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]]

GEOJSON = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "properties": {"NAME": "United States"},
            "geometry": {"type": "Polygon", "coordinates": SQUARE},
        },
        {
            "type": "Feature",
            "properties": {"NAME": "France"},
            "geometry": {"type": "MultiPolygon", "coordinates": [SQUARE, SQUARE]},
        },
        {
            "type": "Feature",
            "properties": {"NAME": "Nowhere"},
            "geometry": {"type": "Point", "coordinates": [0, 0]},
        },
        {
            "type": "Feature",
            "properties": {"ADMIN": "France"},
            "geometry": {"type": "Polygon", "coordinates": SQUARE},
        },
    ],
}


@pytest.fixture(autouse=True)
def clear_cache():
    geometry_cache.clear()
    yield
    geometry_cache.clear()


def test_regions_keyed_by_normalized_name():
    regions = regions_from_geojson(GEOJSON)
    assert set(regions) == {"United States of America", "France"}
    usa = regions["United States of America"]
    assert usa.source_name == "United States"
    assert usa.rings[0][:2] == ((0.0, 0.0), (1.0, 0.0))


def test_same_name_features_are_merged():
    regions = regions_from_geojson(GEOJSON)
    assert len(regions["France"].rings) == 3


def test_load_regions_from_file_is_cached(tmp_path):
    path = tmp_path / "world.geojson"
    path.write_text(json.dumps(GEOJSON), encoding="utf-8")

    assert fetch_geojson(str(path)) == GEOJSON
    regions = load_regions(str(path))
    path.unlink()
    assert load_regions(str(path)) is regions


def test_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        fetch_geojson(str(tmp_path / "missing.geojson"))
