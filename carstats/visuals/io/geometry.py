"""World map geometry: fetch a GeoJSON and key its polygons by country name."""

import json
import logging
import os
from dataclasses import dataclass

import requests
from requests.adapters import HTTPAdapter, Retry

from carstats.data.normalize_inputs import normalize_country_name
from carstats.visuals.core.cache import geometry_cache

logger = logging.getLogger(__name__)

DEFAULT_GEOJSON_URL = (
    "https://raw.githubusercontent.com/nvkelso/natural-earth-vector/"
    "master/geojson/ne_110m_admin_0_countries.geojson"
)

Ring = tuple[tuple[float, float], ...]


@dataclass(frozen=True)
class Region:
    """One country's outline.

    Attributes:
        name: Normalized country name (see ``normalize_country_name``).
        source_name: The name as found in the geometry properties.
        rings: Every polygon ring as ``(lon, lat)`` points.
    """

    name: str
    source_name: str
    rings: tuple[Ring, ...]


def _session() -> requests.Session:
    s = requests.Session()
    retries = Retry(
        total=3,
        connect=3,
        read=3,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset(["GET"]),
    )
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.mount("https://", HTTPAdapter(max_retries=retries))
    return s


def fetch_geojson(source: str = DEFAULT_GEOJSON_URL, timeout: float = 30) -> dict:
    """Load a GeoJSON document from a URL or a local path.

    Raises:
        requests.RequestException: When the download fails after retries.
        OSError, ValueError: When a local file is missing or not JSON.
    """
    if source.startswith(("http://", "https://")):
        logger.info("geometry: downloading %s", source)
        with _session() as sess:
            r = sess.get(source, timeout=timeout)
            r.raise_for_status()
            return r.json()
    with open(os.path.expanduser(source), "r", encoding="utf-8") as f:
        return json.load(f)


def _polygon_rings(geometry: dict | None) -> list[Ring]:
    if not geometry:
        return []
    geom_type = geometry.get("type")
    coords = geometry.get("coordinates") or []
    if geom_type == "Polygon":
        polygons = [coords]
    elif geom_type == "MultiPolygon":
        polygons = coords
    elif geom_type == "GeometryCollection":
        rings: list[Ring] = []
        for part in geometry.get("geometries", []):
            rings.extend(_polygon_rings(part))
        return rings
    else:
        return []
    return [
        tuple((float(point[0]), float(point[1])) for point in ring)
        for polygon in polygons
        for ring in polygon
        if len(ring) >= 3
    ]


def regions_from_geojson(geojson: dict) -> dict[str, Region]:
    """Collect feature outlines keyed by normalized country name.

    Features sharing a name are merged; features without polygons are skipped.
    """
    regions: dict[str, Region] = {}
    for feature in geojson.get("features", []):
        properties = feature.get("properties") or {}
        rings = _polygon_rings(feature.get("geometry"))
        if not rings:
            continue
        name = normalize_country_name(properties)
        source_name = next(
            (properties[k] for k in ("NAME", "name", "ADMIN") if properties.get(k)),
            name,
        )
        if name in regions:
            rings = list(regions[name].rings) + rings
            source_name = regions[name].source_name
        regions[name] = Region(name=name, source_name=source_name, rings=tuple(rings))
    return regions


def load_regions(source: str = DEFAULT_GEOJSON_URL) -> dict[str, Region]:
    """Cached :func:`regions_from_geojson` over :func:`fetch_geojson`."""
    if source not in geometry_cache:
        geometry_cache[source] = regions_from_geojson(fetch_geojson(source))
        logger.info(
            "geometry: cached %s regions from %s", len(geometry_cache[source]), source
        )
    return geometry_cache[source]
