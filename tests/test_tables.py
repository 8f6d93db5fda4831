import pytest

from carstats.data.normalize_inputs import normalize_country_name, normalize_inputs
from carstats.data.tables import BRAND_SHARES, COUNTRY_CARS, world_totals


@pytest.mark.parametrize(
    "properties, expected",
    [
        ({"NAME": "United States"}, "United States of America"),
        ({"NAME": "Korea, South"}, "South Korea"),
        ({"NAME": "Russian Federation"}, "Russia"),
        ({"NAME": "Czechia"}, "Czech Republic"),
        ({"name": "France"}, "France"),
        ({"NAME": "", "ADMIN": "Germany"}, "Germany"),
        ({}, "Unknown"),
        (None, "Unknown"),
    ],
)
def test_normalize_country_name(properties, expected):
    assert normalize_country_name(properties) == expected


def test_country_keys_with_spaces_present():
    assert COUNTRY_CARS["South Korea"] > 0
    assert COUNTRY_CARS["South Africa"] > 0


def test_brand_totals_sum_close_to_world_total():
    totals = world_totals()
    assert totals.total_cars == sum(COUNTRY_CARS.values())
    brand_sum = sum(b.value for b in totals.brands)
    # shares add up to 100.2%, plus rounding
    assert abs(brand_sum - totals.total_cars) <= totals.total_cars * 0.02


def test_brand_totals_keep_order_and_percent():
    totals = world_totals({"X": 1000}, {"A": 25.0, "B": 75.0})
    assert [(b.name, b.value, b.percent) for b in totals.brands] == [
        ("A", 250, 25.0),
        ("B", 750, 75.0),
    ]
    assert [b.name for b in world_totals().brands] == list(BRAND_SHARES)


def test_normalize_inputs_maps_ui_labels():
    assert normalize_inputs("Cars by Country") == "choropleth"
    assert normalize_inputs("Brand Shares") == "brands"
    assert normalize_inputs("final_frame") == "final_frame"
