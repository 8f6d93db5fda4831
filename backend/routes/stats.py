from flask import Blueprint, jsonify

from carstats.data.tables import COUNTRY_CARS, SOURCE_NAME, SOURCE_URL, world_totals
from carstats.visuals.core.colors import choropleth_color

bp = Blueprint("stats", __name__)


@bp.route("/stats/countries", methods=["GET"])
def countries():
    """Per-country car counts with their choropleth fill colors.

    Returns:
        flask.Response: JSON with ``total_cars``, ``source`` and ``countries``
        (a list of ``name``, ``cars``, ``color``), largest first.
    """
    max_value = max(COUNTRY_CARS.values(), default=0)
    rows = [
        {"name": name, "cars": cars, "color": choropleth_color(cars, max_value)}
        for name, cars in sorted(COUNTRY_CARS.items(), key=lambda kv: -kv[1])
    ]
    return jsonify(
        {
            "total_cars": world_totals().total_cars,
            "source": {"name": SOURCE_NAME, "url": SOURCE_URL},
            "countries": rows,
        }
    ), 200


@bp.route("/stats/brands", methods=["GET"])
def brands():
    """Brand shares as percentages and as absolute car counts."""
    totals = world_totals()
    return jsonify(
        {
            "total_cars": totals.total_cars,
            "brands": [
                {"name": b.name, "value": b.value, "percent": b.percent}
                for b in totals.brands
            ],
        }
    ), 200
